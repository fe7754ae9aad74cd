# src/chbtc/data/csv_loader.py
from __future__ import annotations
from pathlib import Path
import csv
from typing import List
from chbtc.models.market import KlineData

REQUIRED = ["ts", "o", "hi", "lo", "c", "amount"]


def _resolve(path: str) -> Path:
    p = Path(path)
    if not p.is_absolute():
        p = Path.cwd() / p
    return p


def load_kline_csv(path: str) -> List[KlineData]:
    p = _resolve(path)
    if not p.exists():
        raise FileNotFoundError(f"CSV not found: {p}")

    with p.open("r", encoding="utf-8-sig") as f:  # BOM 대응
        r = csv.DictReader(f)
        if r.fieldnames is None:
            raise ValueError(f"CSV has no header: {p}")
        missing = [k for k in REQUIRED if k not in r.fieldnames]
        if missing:
            raise ValueError(f"CSV header missing {missing}; expected {REQUIRED}")

        out: List[KlineData] = []
        for row in r:
            try:
                out.append(
                    KlineData(
                        ts=int(row["ts"]),
                        o=float(row["o"]),
                        hi=float(row["hi"]),
                        lo=float(row["lo"]),
                        c=float(row["c"]),
                        amount=float(row["amount"]),
                    )
                )
            except (TypeError, ValueError):
                # 깨진 행은 건너뜀
                continue

    out.sort(key=lambda k: k.ts)
    return out
