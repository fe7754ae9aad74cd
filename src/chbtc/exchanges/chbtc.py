# src/chbtc/exchanges/chbtc.py
from __future__ import annotations
from typing import Any, List, Optional, Tuple
from dataclasses import dataclass
from decimal import Decimal
import time
import hashlib
import hmac
import logging
import requests

from chbtc.exchanges.errors import ExchangeError, ParseError, TransportError
from chbtc.exchanges.jsonpath import get_float, get_int, get_list, get_str, to_int
from chbtc.models.market import (
    Kline,
    KlineData,
    Order,
    OrderBook,
    Ticker,
    Trade,
    Trades,
)

log = logging.getLogger("chbtc")

MARKET_API = "http://api.chbtc.com/data/v1/"
TRADE_API = "https://trade.chbtc.com/api/"

# 서버 응답 code 1000 = 성공
SUCCESS_CODE = 1000

KLINE_TYPES = (
    "1min",
    "3min",
    "5min",
    "15min",
    "30min",
    "1hour",
    "2hour",
    "4hour",
    "6hour",
    "12hour",
    "1day",
    "3day",
    "1week",
)

KLINE_ALIASES = {
    "1m": "1min",
    "3m": "3min",
    "5m": "5min",
    "15m": "15min",
    "30m": "30min",
    "1h": "1hour",
    "2h": "2hour",
    "4h": "4hour",
    "6h": "6hour",
    "12h": "12hour",
    "1d": "1day",
    "3d": "3day",
    "1w": "1week",
}


@dataclass(frozen=True)
class ChbtcCreds:
    access_key: str
    secret_key: str


# --- 서명: SHA1(secret) hex 를 키로 HMAC-MD5 ---
def secret_digest(secret_key: str) -> str:
    return hashlib.sha1(secret_key.encode("utf-8")).hexdigest()


def sign(secret_key: str, query: str) -> str:
    """query 는 sign/reqTime 을 제외한 파라미터를 붙인 순서 그대로. 순서가 바뀌면 서명도 바뀐다."""
    key = secret_digest(secret_key).encode("utf-8")
    return hmac.new(key, query.encode("utf-8"), hashlib.md5).hexdigest()


def join_query(params: List[Tuple[str, Any]]) -> str:
    return "&".join(f"{k}={v}" for k, v in params)


def currency_pair(base: str, quote: str) -> str:
    # CHBTC 표기는 quote_base (예: btc_cny)
    return f"{quote}_{base}".lower()


def format_merge(merge: float) -> str:
    """가장 짧은 10진 표기: 1.0 -> '1', 0.1 -> '0.1', 1e-05 -> '0.00001'."""
    return format(Decimal(repr(float(merge))).normalize(), "f")


def normalize_interval(interval: str) -> str:
    if not interval:
        return ""
    typ = KLINE_ALIASES.get(interval, interval)
    if typ not in KLINE_TYPES:
        raise ValueError(
            f"Unsupported kline interval: {interval!r} (expected one of {', '.join(KLINE_TYPES)})"
        )
    return typ


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChbtcClient:
    """CHBTC Public 시세 + 서명이 필요한 입금 주소 조회"""

    name = "chbtc"

    def __init__(
        self,
        creds: ChbtcCreds | None = None,
        market_url: str = MARKET_API,
        trade_url: str = TRADE_API,
        timeout: Optional[float] = 10,
        session: Optional[requests.Session] = None,
    ):
        self.creds = creds
        self.market_url = market_url.rstrip("/") + "/"
        self.trade_url = trade_url.rstrip("/") + "/"
        self.timeout = timeout
        self.s = session or requests.Session()

    # --- Helper: GET + JSON ---
    def _get_json(self, url: str) -> Any:
        endpoint = url.split("?", 1)[0]
        log.debug("Request url: %s", url)
        try:
            r = self.s.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            status = getattr(e.response, "status_code", None)
            log.warning("GET %s failed (status=%s): %s", endpoint, status, e)
            raise TransportError(f"GET {endpoint} failed: {e}", status=status) from e

        log.debug("Response body: %s", r.text)
        try:
            return r.json()
        except ValueError as e:
            log.warning("GET %s returned a non-JSON body", endpoint)
            raise TransportError(
                f"GET {endpoint}: malformed JSON body", status=r.status_code
            ) from e

    def _market_url(self, endpoint: str, params: List[Tuple[str, Any]]) -> str:
        return f"{self.market_url}{endpoint}?{join_query(params)}"

    # --- Public API ---
    def get_ticker(self, base: str, quote: str) -> Ticker:
        log.debug("Currency base: %s, quote: %s", base, quote)
        url = self._market_url("ticker", [("currency", currency_pair(base, quote))])
        data = self._get_json(url)
        return Ticker(
            buy=get_float(data, "ticker.buy"),
            sell=get_float(data, "ticker.sell"),
            last=get_float(data, "ticker.last"),
            low=get_float(data, "ticker.low"),
            high=get_float(data, "ticker.high"),
            vol=get_float(data, "ticker.vol"),
        )

    def get_order_book(
        self, base: str, quote: str, size: int, merge: Optional[float] = None
    ) -> OrderBook:
        """
        size: 1-50 (병합 깊이를 쓰면 서버가 5단계만 돌려준다)
        merge: 가격 병합 단위. 쌍마다 허용값이 다르다 (btc_cny: 1, 0.1 / ltc_cny: 0.5, 0.3, 0.1 ...)
        둘 다 로컬에서 검증하지 않고 그대로 넘긴다.
        """
        params: List[Tuple[str, Any]] = [
            ("currency", currency_pair(base, quote)),
            ("size", int(size)),
        ]
        if merge is not None:
            params.append(("merge", format_merge(merge)))
        data = self._get_json(self._market_url("depth", params))

        # 서버가 준 순서 그대로 (재정렬 X)
        asks = tuple(
            Order(
                price=get_float(data, f"asks.{i}.0"),
                amount=get_float(data, f"asks.{i}.1"),
            )
            for i in range(len(get_list(data, "asks")))
        )
        bids = tuple(
            Order(
                price=get_float(data, f"bids.{i}.0"),
                amount=get_float(data, f"bids.{i}.1"),
            )
            for i in range(len(get_list(data, "bids")))
        )
        return OrderBook(
            base=base,
            quote=quote,
            ts=get_int(data, "timestamp"),
            asks=asks,
            bids=bids,
        )

    def get_trades(self, base: str, quote: str, since: int = 0) -> Trades:
        """since: 해당 거래 ID 이후 50건. 0 이면 최신 묶음."""
        params: List[Tuple[str, Any]] = [("currency", currency_pair(base, quote))]
        if since != 0:
            params.append(("since", int(since)))
        data = self._get_json(self._market_url("trades", params))

        out: Trades = []
        for i in range(len(get_list(data, ""))):
            out.append(
                Trade(
                    amount=get_float(data, f"{i}.amount"),
                    price=get_float(data, f"{i}.price"),
                    tid=get_int(data, f"{i}.tid"),
                    trade_type=get_str(data, f"{i}.trade_type"),
                    type=get_str(data, f"{i}.type"),
                    ts=get_int(data, f"{i}.date"),
                )
            )
        return out

    def get_kline(
        self,
        base: str,
        quote: str,
        interval: str = "",
        since: int = 0,
        size: int = 0,
    ) -> Kline:
        """
        interval: 1min ~ 1week (KLINE_TYPES). 빈 문자열이면 서버 기본값.
        since: 이 시각 이후 데이터만. size: 행 수 제한 (서버 최대 1000).
        0 은 해당 필터를 보내지 않음.
        """
        typ = normalize_interval(interval)
        params: List[Tuple[str, Any]] = [("currency", currency_pair(base, quote))]
        if typ:
            params.append(("type", typ))
        if since != 0:
            params.append(("since", int(since)))
        if size != 0:
            params.append(("size", int(size)))
        data = self._get_json(self._market_url("kline", params))

        rows: List[KlineData] = []
        # 행: [ts_ms, open, high, low, close, amount]
        for i in range(len(get_list(data, "data"))):
            p = f"data.{i}"
            rows.append(
                KlineData(
                    ts=get_int(data, f"{p}.0") // 1000,
                    o=get_float(data, f"{p}.1"),
                    hi=get_float(data, f"{p}.2"),
                    lo=get_float(data, f"{p}.3"),
                    c=get_float(data, f"{p}.4"),
                    amount=get_float(data, f"{p}.5"),
                )
            )
        return Kline(
            money_type=get_str(data, "moneyType"),
            symbol=get_str(data, "symbol"),
            data=tuple(rows),
        )

    # --- Private: 서명 ---
    def secret_digest(self) -> str:
        return secret_digest(self._require_creds().secret_key)

    def sign(self, query: str) -> str:
        return sign(self._require_creds().secret_key, query)

    def _require_creds(self) -> ChbtcCreds:
        if self.creds is None:
            raise ValueError("Private endpoint requires credentials")
        return self.creds

    def _check_envelope(self, data: Any) -> None:
        """{"code": 1000, "message": {...}} 형태. 실패면 ExchangeError."""
        if not isinstance(data, dict):
            raise ParseError("<root>", f"expected object, got {type(data).__name__}")
        code = to_int(data["code"], "code") if "code" in data else None
        message = data.get("message")

        if code is not None and code != SUCCESS_CODE:
            desc = message.get("des", "") if isinstance(message, dict) else message
            log.warning("exchange rejected request: code=%s message=%s", code, desc)
            raise ExchangeError(code, str(desc or ""))
        if isinstance(message, str):
            log.warning("exchange rejected request: message=%s", message)
            raise ExchangeError(code, message)
        if isinstance(message, dict) and message.get("isSuc") is False:
            desc = str(message.get("des", ""))
            log.warning("exchange rejected request: code=%s message=%s", code, desc)
            raise ExchangeError(code, desc)

    def get_user_address(self, currency: str) -> str:
        """currency: btc / ltc / eth / etc"""
        creds = self._require_creds()
        params: List[Tuple[str, Any]] = [
            ("method", "getUserAddress"),
            ("accesskey", creds.access_key),
            ("currency", currency),
        ]
        query = join_query(params)
        signature = self.sign(query)
        query += f"&sign={signature}&reqTime={_now_ms()}"

        data = self._get_json(f"{self.trade_url}getUserAddress?{query}")
        self._check_envelope(data)
        return get_str(data, "message.datas.key")

