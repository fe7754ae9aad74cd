import pytest

from chbtc.exchanges.errors import ParseError
from chbtc.exchanges.jsonpath import get_float, get_int, get_list, get_path, get_str


DOC = {"ticker": {"buy": "1.5", "n": 2}, "rows": [[1, "2"]], "flag": True}


def test_get_path_descends_dicts_and_lists():
    assert get_path(DOC, "ticker.buy") == "1.5"
    assert get_path(DOC, "rows.0.1") == "2"


def test_string_and_native_numbers():
    assert get_float(DOC, "ticker.buy") == 1.5
    assert get_float(DOC, "ticker.n") == 2.0
    assert get_int(DOC, "rows.0.1") == 2


def test_bool_is_not_a_number():
    with pytest.raises(ParseError):
        get_float(DOC, "flag")


def test_missing_and_out_of_range():
    with pytest.raises(ParseError) as ei:
        get_float(DOC, "ticker.sell")
    assert ei.value.path == "ticker.sell"
    with pytest.raises(ParseError):
        get_path(DOC, "rows.3")
    with pytest.raises(ParseError):
        get_path(DOC, "ticker.buy.x")


def test_fractional_int_rejected():
    with pytest.raises(ParseError):
        get_int({"ts": 1.5}, "ts")
    assert get_int({"ts": 2.0}, "ts") == 2


def test_get_str_and_list():
    assert get_str({"t": "bid"}, "t") == "bid"
    with pytest.raises(ParseError):
        get_str({"t": None}, "t")
    assert get_list([1, 2], "") == [1, 2]
    with pytest.raises(ParseError):
        get_list(DOC, "ticker")
