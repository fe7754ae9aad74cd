import random, time
from typing import List, Optional
from chbtc.exchanges.chbtc import normalize_interval
from chbtc.models.market import Ticker, Order, OrderBook, Trade, Trades, KlineData, Kline

_INTERVAL_S = {
    "1min": 60, "3min": 180, "5min": 300, "15min": 900, "30min": 1800,
    "1hour": 3600, "2hour": 7200, "4hour": 14400, "6hour": 21600, "12hour": 43200,
    "1day": 86400, "3day": 259200, "1week": 604800,
}


class FakeExchange:
    """네트워크 없이 CHBTC 시세 인터페이스를 흉내내는 랜덤 워크."""

    name = "fake"

    def __init__(self, seed: int = 42, base_price: float = 30000.0):
        self._rng = random.Random(seed)
        self._p = base_price
        self._tid = 0

    def _step(self):
        self._p *= (1.0 + self._rng.uniform(-0.001, 0.001))
        return self._p

    def get_ticker(self, base: str, quote: str) -> Ticker:
        last = self._step()
        spread = last * 0.0005
        return Ticker(
            buy=last - spread, sell=last + spread, last=last,
            low=last * 0.98, high=last * 1.02, vol=self._rng.uniform(100, 1000),
        )

    def get_order_book(self, base: str, quote: str, size: int, merge: Optional[float] = None) -> OrderBook:
        mid = self._step()
        tick = merge or mid * 0.0001
        # asks 는 높은 가격부터, bids 는 높은 가격부터 (CHBTC 응답 순서)
        asks = tuple(Order(mid + tick * (size - i), self._rng.uniform(0.1, 5)) for i in range(size))
        bids = tuple(Order(mid - tick * (i + 1), self._rng.uniform(0.1, 5)) for i in range(size))
        return OrderBook(base=base, quote=quote, ts=int(time.time()), asks=asks, bids=bids)

    def get_trades(self, base: str, quote: str, since: int = 0) -> Trades:
        start = max(self._tid, since)
        out: Trades = []
        now = int(time.time()) - 50
        for i in range(50):
            side = self._rng.choice(["buy", "sell"])
            out.append(Trade(
                amount=self._rng.uniform(0.01, 2), price=self._step(), tid=start + i + 1,
                trade_type="bid" if side == "buy" else "ask", type=side, ts=now + i,
            ))
        self._tid = start + 50
        return out

    def get_kline(self, base: str, quote: str, interval: str = "", since: int = 0, size: int = 0) -> Kline:
        typ = normalize_interval(interval) or "1min"
        step = _INTERVAL_S[typ]
        n = min(size or 1000, 1000)
        ts = since if since else int(time.time()) - n * step
        p = self._p
        rows: List[KlineData] = []
        for _ in range(n):
            o = p
            p *= (1.0 + self._rng.uniform(-0.002, 0.002))
            h = max(o, p) * (1 + self._rng.uniform(0, 0.001))
            l = min(o, p) * (1 - self._rng.uniform(0, 0.001))
            rows.append(KlineData(ts, o, h, l, p, self._rng.uniform(1, 10)))
            ts += step
        self._p = p
        return Kline(money_type=base.lower(), symbol=quote.lower(), data=tuple(rows))

    def get_user_address(self, currency: str) -> str:
        return f"fake-{currency.lower()}-address"
