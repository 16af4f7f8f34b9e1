from __future__ import annotations

"""Single-slot TTL cache with stale retention.

Purpose:
    Hold the latest snapshot of one upstream dataset (exchange rates, country
    catalog) for a fixed TTL.

Design:
    - ``value`` and ``fetched_at`` are swapped together under ``_state_lock``.
    - A failed refresh never clears the slot, so the previous snapshot stays
      available for stale fallback.
    - ``get_or_refresh`` serializes refreshes behind ``_refresh_lock``: callers
      that arrive while a fetch is in flight wait, then re-check freshness and
      reuse the result instead of issuing their own request.
"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Generic, Optional, TypeVar

from wealth_ranker.core.errors import UpstreamFetchError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class _CacheEntry(Generic[T]):
    value: T
    fetched_at: datetime


class TimedCache(Generic[T]):
    def __init__(
        self,
        ttl: timedelta,
        *,
        name: str = "cache",
        clock: Callable[[], datetime] = utcnow,
    ):
        if ttl <= timedelta(0):
            raise ValueError("cache ttl must be positive")
        self.name = name
        self.ttl = ttl
        self._clock = clock
        self._entry: Optional[_CacheEntry[T]] = None
        self._state_lock = threading.Lock()
        self._refresh_lock = threading.Lock()

    def get(self) -> Optional[T]:
        entry = self._entry
        return entry.value if entry else None

    @property
    def fetched_at(self) -> Optional[datetime]:
        entry = self._entry
        return entry.fetched_at if entry else None

    @property
    def age(self) -> Optional[float]:
        entry = self._entry
        if entry is None:
            return None
        return (self._clock() - entry.fetched_at).total_seconds()

    def is_fresh(self) -> bool:
        entry = self._entry
        return entry is not None and self._clock() - entry.fetched_at < self.ttl

    def set(self, value: T) -> None:
        with self._state_lock:
            self._entry = _CacheEntry(value=value, fetched_at=self._clock())

    def get_or_refresh(self, loader: Callable[[], T]) -> T:
        """Return the cached value, refreshing it through ``loader`` when stale.

        ``loader`` signals failure by raising UpstreamFetchError. If a previous
        value exists it is returned instead (stale fallback); otherwise the
        error propagates.
        """
        entry = self._entry
        if entry is not None and self.is_fresh():
            logger.debug("cache hit", extra={"cache": self.name})
            return entry.value

        with self._refresh_lock:
            # Another caller may have refreshed while we waited.
            entry = self._entry
            if entry is not None and self.is_fresh():
                logger.debug("cache filled by concurrent refresh", extra={"cache": self.name})
                return entry.value
            try:
                value = loader()
            except UpstreamFetchError as e:
                stale = self._entry
                if stale is None:
                    raise
                logger.warning(
                    "serving stale cache after refresh failure: %s",
                    e.message,
                    extra={"cache": self.name, "age_seconds": self.age},
                )
                return stale.value
            self.set(value)
            return value
