import pytest

import utils.cache as cache_module
from utils.cache import TTLCache, create_cache


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def time(self) -> float:
        return self.now


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(cache_module, "time", fake)
    return fake


def test_set_then_get_returns_value(clock):
    cache = TTLCache(ttl_seconds=60)
    cache.set("drug_ibuprofen", {"id": "label-1"})
    assert cache.get("drug_ibuprofen") == {"id": "label-1"}


def test_get_after_ttl_is_a_miss(clock):
    cache = TTLCache(ttl_seconds=60)
    cache.set("drug_ibuprofen", {"id": "label-1"})

    clock.now += 59
    assert cache.get("drug_ibuprofen") == {"id": "label-1"}

    clock.now += 1
    assert cache.get("drug_ibuprofen") is None
    assert cache.size() == 0


def test_set_overwrites_and_restarts_ttl(clock):
    cache = TTLCache(ttl_seconds=60)
    cache.set("recall_aspirin", [{"status": "Ongoing"}])
    clock.now += 50
    cache.set("recall_aspirin", [{"status": "Terminated"}])
    clock.now += 50
    assert cache.get("recall_aspirin") == [{"status": "Terminated"}]


def test_missing_key_is_a_miss():
    assert TTLCache().get("never-set") is None


def test_empty_list_is_cached_value(clock):
    cache = TTLCache(ttl_seconds=60)
    cache.set("recall_unknown", [])
    assert cache.get("recall_unknown") == []


def test_size_counts_only_live_entries(clock):
    cache = TTLCache(ttl_seconds=10)
    cache.set("a", 1)
    clock.now += 5
    cache.set("b", 2)
    clock.now += 6
    assert cache.size() == 1


def test_create_cache_uses_default_ttl():
    assert create_cache().ttl == 3600
    assert create_cache(ttl_seconds=5).ttl == 5


def test_expired_entries_are_swept_on_write(clock):
    cache = TTLCache(ttl_seconds=10)
    for i in range(1000):
        cache.set(f"drug_one_off_{i}", {"id": i})

    clock.now += 100
    for i in range(10):
        cache.set(f"drug_fresh_{i}", {"id": i})

    assert cache.size() == 10
    assert len(cache._cache) == 10
    assert cache.get("drug_one_off_0") is None
    assert cache.get("drug_fresh_0") == {"id": 0}


def test_sweep_waits_for_interval(clock):
    cache = TTLCache(ttl_seconds=10)
    cache.set("a", 1)
    clock.now += 9
    cache.set("x", 2)
    clock.now += 1
    cache.set("b", 3)  # sweep due: "a" removed, next sweep in 10s
    assert set(cache._cache) == {"x", "b"}

    clock.now += 9.5
    cache.set("c", 4)  # "x" expired but no sweep yet
    assert cache.get("x") is None
    assert "b" in cache._cache

    clock.now += 0.5
    cache.set("d", 5)
    assert "b" not in cache._cache
    assert set(cache._cache) == {"c", "d"}


def test_purge_expired_keeps_live_entries(clock):
    cache = TTLCache(ttl_seconds=10)
    cache.set("old", 1)
    clock.now += 6
    cache.set("new", 2)
    clock.now += 5

    assert cache.purge_expired() == 1
    assert cache.get("new") == 2
    assert cache.get("old") is None
