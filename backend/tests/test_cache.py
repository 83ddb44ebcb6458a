import pytest

from lineup.core.cache import SteppedClock, TTLCache


def test_entry_expires_after_ttl():
    clock = SteppedClock()
    cache = TTLCache(ttl_seconds=300, clock=clock)
    cache.set("producers", ["Dana"])

    clock.advance(299)
    assert cache.get("producers") == ["Dana"]

    clock.advance(1)
    assert cache.get("producers") is None
    assert "producers" not in cache


def test_invalidate_one_or_all():
    cache = TTLCache(ttl_seconds=60, clock=SteppedClock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.invalidate("a")
    assert "a" not in cache and "b" in cache
    cache.invalidate()
    assert len(cache) == 0


def test_rejects_non_positive_ttl():
    with pytest.raises(ValueError):
        TTLCache(ttl_seconds=0)


def test_clock_cannot_go_backwards():
    with pytest.raises(ValueError):
        SteppedClock().advance(-1)


@pytest.mark.asyncio
async def test_get_or_load_calls_loader_once_per_ttl():
    clock = SteppedClock()
    cache = TTLCache(ttl_seconds=10, clock=clock)
    calls = []

    async def loader():
        calls.append(clock())
        return len(calls)

    assert await cache.get_or_load("k", loader) == 1
    assert await cache.get_or_load("k", loader) == 1
    clock.advance(10)
    assert await cache.get_or_load("k", loader) == 2
    assert calls == [0.0, 10.0]


@pytest.mark.asyncio
async def test_cached_none_is_not_reloaded():
    cache = TTLCache(ttl_seconds=10, clock=SteppedClock())
    calls = []

    async def loader():
        calls.append(1)
        return None

    await cache.get_or_load("k", loader)
    await cache.get_or_load("k", loader)
    assert calls == [1]
