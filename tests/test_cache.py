from sipplanner.utils.cache import MISSING, MemoCache, memoize


def test_memoize_calls_once_per_argument_tuple():
    cache = MemoCache(ttl_seconds=60)
    calls = {"n": 0}

    @memoize(cache)
    def square(x, *, scale=1):
        calls["n"] += 1
        return x * x * scale

    assert square(3) == 9
    assert square(3) == 9
    assert calls["n"] == 1

    assert square(3, scale=2) == 18
    assert square(4) == 16
    assert calls["n"] == 3
    assert square.cache is cache


def test_memoize_caches_none_results():
    cache = MemoCache()
    calls = {"n": 0}

    @memoize(cache)
    def nothing(x):
        calls["n"] += 1
        return None

    assert nothing(1) is None
    assert nothing(1) is None
    assert calls["n"] == 1


def test_memoize_hands_out_independent_copies():
    cache = MemoCache()

    @memoize(cache)
    def schedule(n):
        return {"months": list(range(n))}

    first = schedule(3)
    first["months"].append(99)
    second = schedule(3)
    second["months"].clear()

    assert schedule(3) == {"months": [0, 1, 2]}


def test_entries_expire(monkeypatch):
    cache = MemoCache(ttl_seconds=10)
    now = {"t": 1000.0}
    monkeypatch.setattr(cache, "_now", lambda: now["t"])

    cache.put("k", "v")
    now["t"] += 9
    assert cache.get("k") == "v"

    now["t"] += 2
    assert cache.get("k") is MISSING
    assert cache.get("k", None) is None
    assert len(cache) == 0


def test_least_recently_read_entry_is_evicted_when_full():
    cache = MemoCache(max_items=3)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("c", 3)
    assert cache.get("a") == 1

    cache.put("d", 4)
    assert len(cache) == 3
    assert cache.get("b") is MISSING
    assert [cache.get(k) for k in ("a", "c", "d")] == [1, 3, 4]


def test_clear():
    cache = MemoCache()
    cache.put("a", 1)
    cache.clear()
    assert cache.get("a") is MISSING
