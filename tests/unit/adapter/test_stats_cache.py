import pytest
from unittest.mock import patch
from src.adapter.services.stats_cache import InMemoryStatsCache


@pytest.mark.asyncio
async def test_get_returns_copy_until_invalidated():
    cache = InMemoryStatsCache(ttl_seconds=60)
    await cache.set({"total": 1})

    snapshot = await cache.get()
    snapshot["total"] = 99

    assert await cache.get() == {"total": 1}

    await cache.invalidate()
    assert await cache.get() is None


@pytest.mark.asyncio
async def test_snapshot_expires():
    cache = InMemoryStatsCache(ttl_seconds=60)

    with patch("src.adapter.services.stats_cache.time.monotonic", return_value=1000.0):
        await cache.set({"total": 1})
    with patch("src.adapter.services.stats_cache.time.monotonic", return_value=1059.0):
        assert await cache.get() == {"total": 1}
    with patch("src.adapter.services.stats_cache.time.monotonic", return_value=1061.0):
        assert await cache.get() is None


@pytest.mark.asyncio
async def test_empty_cache():
    assert await InMemoryStatsCache().get() is None


@pytest.mark.asyncio
async def test_set_with_stale_generation_is_dropped():
    cache = InMemoryStatsCache(ttl_seconds=60)
    generation = await cache.generation()

    await cache.invalidate()
    stored = await cache.set({"total": 1}, generation)

    assert stored is False
    assert await cache.get() is None
    assert await cache.generation() == generation + 1

    assert await cache.set({"total": 2}, await cache.generation()) is True
    assert await cache.get() == {"total": 2}
