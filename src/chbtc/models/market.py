from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Ticker:
    buy: float
    sell: float
    last: float
    low: float
    high: float
    vol: float


@dataclass(frozen=True)
class Order:
    """호가 한 단계 (가격, 수량)."""

    price: float
    amount: float


@dataclass(frozen=True)
class OrderBook:
    base: str
    quote: str
    ts: int  # unix seconds
    asks: Tuple[Order, ...]
    bids: Tuple[Order, ...]


@dataclass(frozen=True)
class Trade:
    amount: float
    price: float
    tid: int
    trade_type: str  # "ask" | "bid"
    type: str  # "buy" | "sell"
    ts: int


Trades = List[Trade]


@dataclass(frozen=True)
class KlineData:
    ts: int  # unix seconds (서버는 ms 로 줌)
    o: float
    hi: float
    lo: float
    c: float
    amount: float


@dataclass(frozen=True)
class Kline:
    money_type: str
    symbol: str
    data: Tuple[KlineData, ...]
