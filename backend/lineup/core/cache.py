"""
Small time-boxed cache for relationship lookups (e.g. workers by department).

Entries expire `ttl_seconds` after they were stored. The clock is injectable
so tests can step time instead of sleeping.
"""
import time
from collections.abc import Awaitable, Callable, Hashable
from typing import Any

ClockFn = Callable[[], float]


class TTLCache:
    def __init__(self, ttl_seconds: float, clock: ClockFn = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be greater than zero")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return default
        return value

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def invalidate(self, key: Hashable | None = None) -> None:
        """Drop one key, or everything when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_load(self, key: Hashable, loader: Callable[[], Awaitable[Any]]) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            value = await loader()
            self.set(key, value)
        return value


class SteppedClock:
    """Deterministic clock for tests; time moves only on advance()."""

    def __init__(self, start: float = 0.0):
        self._current = start

    def __call__(self) -> float:
        return self._current

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("seconds must be non-negative")
        self._current += seconds
        return self._current


_MISSING = object()
