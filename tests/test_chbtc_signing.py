import pytest

from chbtc.exchanges.chbtc import ChbtcClient, ChbtcCreds, secret_digest, sign
from chbtc.exchanges.errors import ExchangeError, ParseError

CREDS = ChbtcCreds(access_key="my-access-key", secret_key="my-secret-key")
QUERY = "method=getUserAddress&accesskey=my-access-key&currency=btc"
GOLDEN_SIGN = "f4b2e227d8ec2f583bd1a56d6c5fdec2"


def test_secret_digest_is_sha1_hex():
    assert secret_digest("my-secret-key") == "01c92a77244f5e8e3b1e566c4a9266e724de6d98"


def test_sign_golden_vector():
    assert sign("my-secret-key", QUERY) == GOLDEN_SIGN
    c = ChbtcClient(creds=CREDS)
    assert c.sign(QUERY) == GOLDEN_SIGN
    # 같은 입력이면 항상 같은 값
    assert c.sign(QUERY) == c.sign(QUERY)


def test_sign_is_order_sensitive():
    reordered = "accesskey=my-access-key&method=getUserAddress&currency=btc"
    assert sign("my-secret-key", reordered) == "6d063edbf3e0b9db30621048e846b071"
    assert sign("my-secret-key", reordered) != GOLDEN_SIGN


def test_sign_without_creds_raises():
    with pytest.raises(ValueError):
        ChbtcClient().sign(QUERY)


def test_get_user_address_signed_url(monkeypatch, stub_session):
    monkeypatch.setattr("chbtc.exchanges.chbtc.time.time", lambda: 1500000000.5)
    s = stub_session(
        {
            "code": 1000,
            "message": {"des": "success", "isSuc": True, "datas": {"key": "1ChbtcDepositAddr"}},
        }
    )
    c = ChbtcClient(creds=CREDS, session=s)

    assert c.get_user_address("btc") == "1ChbtcDepositAddr"
    assert s.urls == [
        "https://trade.chbtc.com/api/getUserAddress?"
        "method=getUserAddress&accesskey=my-access-key&currency=btc"
        f"&sign={GOLDEN_SIGN}&reqTime=1500000000500"
    ]


def test_get_user_address_error_code(stub_session):
    s = stub_session({"code": 1003, "message": "验证不通过"})
    c = ChbtcClient(creds=CREDS, session=s)
    with pytest.raises(ExchangeError) as ei:
        c.get_user_address("btc")
    assert ei.value.code == 1003
    assert "验证不通过" in ei.value.message


def test_get_user_address_is_suc_false(stub_session, caplog):
    s = stub_session({"code": 1000, "message": {"isSuc": False, "des": "no permission"}})
    c = ChbtcClient(creds=CREDS, session=s)
    caplog.set_level("WARNING")
    with pytest.raises(ExchangeError, match="no permission"):
        c.get_user_address("btc")
    assert any("exchange rejected" in r.message for r in caplog.records)


def test_get_user_address_missing_key(stub_session):
    s = stub_session({"code": 1000, "message": {"isSuc": True, "datas": {}}})
    c = ChbtcClient(creds=CREDS, session=s)
    with pytest.raises(ParseError) as ei:
        c.get_user_address("btc")
    assert ei.value.path == "message.datas.key"


def test_get_user_address_requires_creds(stub_session):
    s = stub_session({})
    with pytest.raises(ValueError):
        ChbtcClient(session=s).get_user_address("btc")
    assert s.urls == []
