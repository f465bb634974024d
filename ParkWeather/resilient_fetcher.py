"""Cache, backoff and rate-limit policy wrapped around every upstream call."""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Optional, TypeVar

from backoff import BackoffTracker, RateLimitState
from ttl_cache import TTLCache
from weather_provider import RateLimitedError

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Outcome of a fetch. `value` is always usable; when `ok` is False it is the
    caller-supplied fallback and `reason` says why.
    """
    value: T
    ok: bool = True
    reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return not self.ok


class ResilientFetcher:
    """
    Wraps upstream calls with caching, per-key backoff and a shared rate limit.

    One instance per kind of data (current weather, forecast, images), each
    with its own cache and tracker. The rate-limit state is normally shared by
    all of them so a 429 from one upstream quiets every fetcher.
    """

    def __init__(
        self,
        cache: TTLCache,
        tracker: BackoffTracker,
        rate_limit: RateLimitState,
        name: str = "fetcher"
    ):
        self.cache = cache
        self.tracker = tracker
        self.rate_limit = rate_limit
        self.name = name

    def fetch(self, key: Hashable, fallback: T, perform_call: Callable[[], T]) -> FetchResult[T]:
        """
        Return the value for key, calling upstream only when needed.

        Order of checks: fresh cache entry, global rate limit, per-key backoff,
        then the call itself. Never raises; every failure path returns the
        fallback wrapped in a FetchResult with ok=False.

        Args:
            key: Cache/backoff key (coordinate pair, park name, ...)
            fallback: Value to serve when the upstream can't be used
            perform_call: Does the upstream request and returns the parsed value
        """
        return self.fetch_lazy(key, lambda: fallback, perform_call)

    def fetch_lazy(
        self,
        key: Hashable,
        make_fallback: Callable[[], T],
        perform_call: Callable[[], T]
    ) -> FetchResult[T]:
        """Same as fetch(), but the fallback is only built when it is served."""
        limited = self.rate_limit.is_rate_limited()

        cached = self.cache.get(key)
        # Only rate-limit fallbacks are cached, and they stop counting once the cool-down ends.
        if cached is not None and (cached.ok or limited):
            logging.debug(f"{self.name}: using cached result for {key!r}")
            return cached

        if limited:
            logging.warning(f"{self.name}: rate limited, using fallback for {key!r}")
            return self._cache_fallback(key, make_fallback(), "rate limited")

        if self.tracker.should_fallback(key):
            record = self.tracker.get_record(key)
            count = record.failure_count if record else self.tracker.max_failures
            logging.warning(f"{self.name}: {count} failed attempts for {key!r}, using fallback")
            return FetchResult(value=make_fallback(), ok=False, reason="too many failures")

        logging.info(f"{self.name}: fetching {key!r} from upstream")
        try:
            value = perform_call()
        except RateLimitedError as e:
            self.rate_limit.mark_rate_limited()
            return self._cache_fallback(key, make_fallback(), f"rate limited: {e}")
        except Exception as e:
            record = self.tracker.record_failure(key)
            logging.error(
                f"{self.name}: fetch for {key!r} failed "
                f"({record.failure_count}/{self.tracker.max_failures}): {e}"
            )
            return FetchResult(value=make_fallback(), ok=False, reason=str(e))

        self.tracker.record_success(key)
        result = FetchResult(value=value)
        self.cache.set(key, result)
        return result

    def _cache_fallback(self, key: Hashable, fallback: Any, reason: str) -> FetchResult:
        result = FetchResult(value=fallback, ok=False, reason=reason)
        self.cache.set(key, result)
        return result
