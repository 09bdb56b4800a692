import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

from expiring_cache.application.configuration import CacheSettings
from expiring_cache.application.container import CacheContainer
from expiring_cache.cache import Cache
from expiring_cache.config import CacheConfig


def test_container_provides_singletons():
    container = CacheContainer(CacheSettings(cache=CacheConfig(stats_enabled=False)))
    cache_one = container.cache()
    cache_two = container.cache()
    assert isinstance(cache_one, Cache)
    assert cache_one is cache_two
    assert cache_one.config.stats_enabled is False


def test_separate_containers_do_not_share_state():
    first = CacheContainer().cache()
    second = CacheContainer().cache()
    first.put("a", "1")
    assert second.get("a") == ("", False)


def test_container_passes_clock_to_cache(clock):
    cache = CacheContainer(clock=clock).cache()
    cache.put_till("k", "v", clock.now + timedelta(seconds=1))
    assert cache.get("k") == ("v", True)
    clock.advance(seconds=1)
    assert cache.get("k") == ("", False)


def test_shared_cache_sees_writes_from_all_callers():
    container = CacheContainer()
    container.cache()

    def worker(index: int) -> None:
        container.cache().put(f"key-{index}", str(index))

    with ThreadPoolExecutor(max_workers=4) as pool:
        for future in [pool.submit(worker, index) for index in range(20)]:
            future.result()

    assert len(container.cache().keys()) == 20


def test_concurrent_first_lookup_builds_one_cache(monkeypatch):
    container = CacheContainer()
    original_init = Cache.__init__

    def slow_init(self, *args, **kwargs):
        time.sleep(0.05)
        original_init(self, *args, **kwargs)

    monkeypatch.setattr(Cache, "__init__", slow_init)
    barrier = threading.Barrier(8, timeout=5)

    def first_lookup(index: int) -> Cache:
        barrier.wait()
        cache = container.cache()
        cache.put(f"key-{index}", str(index))
        return cache

    with ThreadPoolExecutor(max_workers=8) as pool:
        caches = [future.result() for future in [pool.submit(first_lookup, i) for i in range(8)]]

    assert len({id(cache) for cache in caches}) == 1
    assert len(container.cache().keys()) == 8
