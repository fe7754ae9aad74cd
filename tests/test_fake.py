from chbtc.exchanges.fake import FakeExchange


def test_fake_exchange_market_data():
    ex = FakeExchange()
    t = ex.get_ticker("cny", "btc")
    assert t.buy < t.last < t.sell

    ob = ex.get_order_book("cny", "btc", 5, 0.1)
    assert len(ob.asks) == 5 and len(ob.bids) == 5
    assert min(o.price for o in ob.asks) > max(o.price for o in ob.bids)

    trades = ex.get_trades("cny", "btc")
    more = ex.get_trades("cny", "btc", since=trades[-1].tid)
    assert more[0].tid == trades[-1].tid + 1


def test_fake_kline_is_deterministic():
    a = FakeExchange(seed=7).get_kline("cny", "btc", "5min", since=1_600_000_000, size=20)
    b = FakeExchange(seed=7).get_kline("cny", "btc", "5m", since=1_600_000_000, size=20)
    assert a == b
    assert len(a.data) == 20
    assert a.data[1].ts - a.data[0].ts == 300
    assert all(d.lo <= min(d.o, d.c) and d.hi >= max(d.o, d.c) for d in a.data)
