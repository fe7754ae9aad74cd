from typing import Optional, Protocol
from chbtc.models.market import Ticker, OrderBook, Trades, Kline


class IMarketDataClient(Protocol):
    name: str

    def get_ticker(self, base: str, quote: str) -> Ticker: ...

    def get_order_book(
        self, base: str, quote: str, size: int, merge: Optional[float] = None
    ) -> OrderBook: ...

    def get_trades(self, base: str, quote: str, since: int = 0) -> Trades: ...

    def get_kline(
        self, base: str, quote: str, interval: str = "", since: int = 0, size: int = 0
    ) -> Kline: ...

    def get_user_address(self, currency: str) -> str: ...
