# src/chbtc/data/downloader.py
from __future__ import annotations
from pathlib import Path
import csv
import logging
from typing import Iterable, Literal
from chbtc.models.market import KlineData
from chbtc.exchanges.base import IMarketDataClient

log = logging.getLogger("download")

HEADER = ["ts", "o", "hi", "lo", "c", "amount"]

Row = tuple[int, float, float, float, float, float]


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _read_existing_ts(path: Path) -> set[int]:
    if not path.exists():
        return set()
    out: set[int] = set()
    with path.open("r", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)
        for row in reader:
            # ts가 첫 컬럼
            try:
                out.add(int(row[0]))
            except (ValueError, IndexError):
                continue
    return out


def kline_to_rows(data: Iterable[KlineData]) -> list[Row]:
    rows = [
        (int(k.ts), float(k.o), float(k.hi), float(k.lo), float(k.c), float(k.amount))
        for k in data
    ]
    rows.sort(key=lambda x: x[0])
    return rows


def download_kline(
    exchange: IMarketDataClient,
    base: str,
    quote: str,
    interval: str = "1min",
    since: int = 0,
    size: int = 0,
    out_path: str = "data/kline.csv",
    mode: Literal["w", "a"] = "w",
    dedup: bool = True,
) -> str:
    """
    K선(최대 1000개)을 CSV로 저장.
    - mode="w": 새로 생성(헤더 포함)
    - mode="a": 이어쓰기(파일이 없으면 헤더 작성)
    - dedup=True: 이미 있는 ts 는 건너뜀 (append 시)
    """
    kline = exchange.get_kline(base, quote, interval, since, size)
    rows = kline_to_rows(kline.data)

    path = Path(out_path)
    _ensure_parent(path)

    if mode == "w":
        with path.open("w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(HEADER)
            w.writerows(rows)
        written = len(rows)
    else:
        existing = _read_existing_ts(path) if dedup else set()
        new_rows = [r for r in rows if r[0] not in existing]
        write_header = not path.exists()
        with path.open("a", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            if write_header:
                w.writerow(HEADER)
            w.writerows(new_rows)
        written = len(new_rows)

    log.info("%s_%s %s: wrote %d rows to %s", quote, base, interval, written, path)
    return str(path)
