from pathlib import Path
from chbtc.exchanges.fake import FakeExchange
from chbtc.data.downloader import download_kline
from chbtc.data.csv_loader import load_kline_csv


def test_download_and_load(tmp_path: Path):
    out = tmp_path / "kline.csv"
    ex = FakeExchange()
    path = download_kline(ex, "cny", "btc", "1min", 1_600_000_000, 60, str(out), mode="w")
    assert Path(path).exists()
    rows = load_kline_csv(str(out))
    assert len(rows) == 60
    assert rows[0].ts == 1_600_000_000


def test_append_mode_dedups(tmp_path: Path):
    out = tmp_path / "kline.csv"
    download_kline(FakeExchange(), "cny", "btc", "1min", 1_600_000_000, 30, str(out), mode="a")
    # 절반이 겹치는 구간
    download_kline(FakeExchange(), "cny", "btc", "1min", 1_600_000_900, 30, str(out), mode="a")
    rows = load_kline_csv(str(out))
    ts = [r.ts for r in rows]
    assert len(ts) == len(set(ts)) == 45
    assert out.read_text(encoding="utf-8").count("ts,o,hi,lo,c,amount") == 1


def test_loader_skips_bad_rows(tmp_path: Path):
    p = tmp_path / "k.csv"
    p.write_text("ts,o,hi,lo,c,amount\n2,1,1,1,1,1\nx,1,1,1,1,1\n1,1,1,1,1,1\n", encoding="utf-8")
    assert [r.ts for r in load_kline_csv(str(p))] == [1, 2]
