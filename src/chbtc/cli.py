import logging
from typing import NoReturn, Optional

import typer
from chbtc.settings import Settings
from chbtc.logging_config import setup as setup_logging
from chbtc.exchanges.base import IMarketDataClient
from chbtc.exchanges.chbtc import ChbtcClient
from chbtc.exchanges.errors import ChbtcError
from chbtc.exchanges.fake import FakeExchange
from chbtc.data.downloader import download_kline

log = logging.getLogger("cli")

app = typer.Typer(help="CHBTC market data CLI")

ConfigOpt = typer.Option(None, "--config", help="YAML 설정 경로 (없으면 기본값 + 환경변수)")
FakeOpt = typer.Option(False, "--use-fake", help="네트워크 없이 FakeExchange 사용")


@app.callback()
def main(
    log_dir: str = typer.Option("logs", "--log-dir", help="로그 파일 디렉터리"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="콘솔에 DEBUG 출력"),
):
    setup_logging(log_dir=log_dir, console_level=logging.DEBUG if verbose else logging.INFO)


def _client(config: Optional[str], use_fake: bool = False) -> IMarketDataClient:
    if use_fake:
        return FakeExchange()
    s = Settings.load(config)
    return ChbtcClient(
        creds=s.creds(),
        market_url=s.exchange.market_url,
        trade_url=s.exchange.trade_url,
        timeout=s.exchange.timeout_s,
    )


def _fail(e: Exception) -> NoReturn:
    log.debug("command failed", exc_info=e)
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=1)


@app.command()
def ticker(
    base: str = typer.Argument(..., help="예: btc"),
    quote: str = typer.Argument(..., help="예: cny"),
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
):
    try:
        t = _client(config, use_fake).get_ticker(base, quote)
    except ChbtcError as e:
        _fail(e)
    typer.echo(
        f"last={t.last} buy={t.buy} sell={t.sell} low={t.low} high={t.high} vol={t.vol}"
    )


@app.command()
def depth(
    base: str,
    quote: str,
    size: int = typer.Option(10, help="1-50"),
    merge: Optional[float] = typer.Option(None, help="가격 병합 단위 (쌍마다 허용값 다름)"),
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
):
    try:
        ob = _client(config, use_fake).get_order_book(base, quote, size, merge)
    except ChbtcError as e:
        _fail(e)
    typer.echo(f"ts={ob.ts}")
    for o in ob.asks:
        typer.echo(f"ask {o.price} {o.amount}")
    for o in ob.bids:
        typer.echo(f"bid {o.price} {o.amount}")


@app.command()
def trades(
    base: str,
    quote: str,
    since: int = typer.Option(0, help="이 거래 ID 이후 (0=최신)"),
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
):
    try:
        out = _client(config, use_fake).get_trades(base, quote, since)
    except ChbtcError as e:
        _fail(e)
    for t in out:
        typer.echo(f"{t.tid} {t.ts} {t.type} {t.price} {t.amount}")


@app.command()
def kline(
    base: str,
    quote: str,
    interval: str = typer.Option("1min", help="1min/3min/.../1hour/.../1day/3day/1week"),
    since: int = typer.Option(0, help="이 시각 이후 (0=필터 없음)"),
    size: int = typer.Option(0, help="최대 1000 (0=서버 기본값)"),
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
):
    try:
        k = _client(config, use_fake).get_kline(base, quote, interval, since, size)
    except (ChbtcError, ValueError) as e:
        _fail(e)
    typer.echo(f"{k.symbol}/{k.money_type} rows={len(k.data)}")
    for d in k.data:
        typer.echo(f"{d.ts} {d.o} {d.hi} {d.lo} {d.c} {d.amount}")


@app.command()
def address(
    currency: str = typer.Argument(..., help="btc / ltc / eth / etc"),
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
):
    """입금 주소 조회 (API 키 필요: CHBTC_ACCESS_KEY / CHBTC_SECRET_KEY)"""
    try:
        addr = _client(config, use_fake).get_user_address(currency)
    except (ChbtcError, ValueError) as e:
        _fail(e)
    typer.echo(addr)


@app.command("download")
def download(
    base: str,
    quote: str,
    out: str = typer.Option(..., help="출력 CSV 경로"),
    interval: Optional[str] = typer.Option(None, help="기본값은 설정의 data.interval"),
    since: int = typer.Option(0, help="이 시각 이후 (0=필터 없음)"),
    size: Optional[int] = typer.Option(None, help="최대 1000, 기본값은 설정의 data.size"),
    mode: str = typer.Option("w", help='"w"(새로쓰기) 또는 "a"(이어쓰기)'),
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
) -> None:
    """K선 CSV 다운로더. 헤더: ts,o,hi,lo,c,amount"""
    s = Settings.load(config)
    ex = _client(config, use_fake)
    try:
        path = download_kline(
            exchange=ex,
            base=base,
            quote=quote,
            interval=interval or s.data.interval,
            since=since,
            size=s.data.size if size is None else size,
            out_path=out,
            mode="a" if mode == "a" else "w",
            dedup=True,
        )
    except (ChbtcError, ValueError) as e:
        _fail(e)
    typer.echo(f"Saved: {path}")


if __name__ == "__main__":
    app()
