import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, TypeVar

T = TypeVar("T")

DEFAULT_TTL = 5 * 60 * 1000 # 5 minutes, in milliseconds


def _now_ms() -> float:
    return time.time() * 1000


@dataclass
class CacheEntry:
    value: Any
    stored_at: float


class DataCache:
    """
    In-memory response cache shared by every data service.
    Entries expire lazily: staleness is only checked when a key is looked up.
    """

    def __init__(self, clock: Callable[[], float] = _now_ms):
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    async def get(self, key: str, producer: Callable[[], Awaitable[T]], ttl: float = DEFAULT_TTL) -> T:
        """
        Return the cached value for key, or await producer and store its result.
        :param key: Cache key
        :param producer: Zero-argument coroutine function called on a miss
        :param ttl: Time to live in milliseconds
        :return: The cached or freshly produced value
        """
        cached = self._entries.get(key)
        if cached is not None and self._clock() - cached.stored_at < ttl:
            print(f"[Cache HIT] {key}")
            return cached.value

        print(f"[Cache MISS] {key}")
        # Exceptions from the producer propagate and nothing is stored
        value = await producer()
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
        return value

    def remove(self, key: str):
        self._entries.pop(key, None)
        print(f"[Cache] Removed {key}")

    def clear(self):
        self._entries.clear()
        print("[Cache] Cleared all entries")

    def size(self) -> int:
        return len(self._entries)
