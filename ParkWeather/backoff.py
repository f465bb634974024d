"""Per-key failure tracking and the process-wide rate-limit cool-down."""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Optional


@dataclass
class FailureRecord:
    key: Hashable
    failure_count: int
    last_attempt: float  # epoch seconds (UTC)


class BackoffTracker:
    """
    Counts consecutive failures per key.

    Once a key reaches max_failures, callers should stop hitting the upstream
    and serve a fallback instead. A success wipes the record. When
    reset_after_seconds is set, a record whose last failure is older than that
    is discarded, so the key gets another chance.
    """

    def __init__(
        self,
        max_failures: int = 3,
        reset_after_seconds: Optional[float] = 300.0,
        clock: Callable[[], float] = time.time
    ):
        self.max_failures = max_failures
        self.reset_after_seconds = reset_after_seconds
        self._clock = clock
        self._records: Dict[Hashable, FailureRecord] = {}

    def record_failure(self, key: Hashable) -> FailureRecord:
        now = self._clock()
        record = self._records.get(key)
        if record is None:
            record = FailureRecord(key=key, failure_count=1, last_attempt=now)
            self._records[key] = record
        else:
            record.failure_count += 1
            record.last_attempt = now
        logging.debug(f"Failure {record.failure_count}/{self.max_failures} recorded for {key!r}")
        return record

    def record_success(self, key: Hashable) -> None:
        self._records.pop(key, None)

    def should_fallback(self, key: Hashable) -> bool:
        record = self._records.get(key)
        if record is None:
            return False

        if self.reset_after_seconds is not None:
            idle = self._clock() - record.last_attempt
            if idle >= self.reset_after_seconds:
                logging.info(f"Backoff for {key!r} cleared after {idle:.0f}s without attempts")
                del self._records[key]
                return False

        return record.failure_count >= self.max_failures

    def get_record(self, key: Hashable) -> Optional[FailureRecord]:
        return self._records.get(key)


class RateLimitState:
    """
    Shared flag raised when any upstream answers with a rate-limit signal.

    While limited, every fetcher holding this state serves fallbacks. The flag
    clears itself lazily on the first check after the cool-down has elapsed.
    """

    def __init__(self, cooldown_seconds: float = 60.0, clock: Callable[[], float] = time.time):
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self.is_limited = False
        self.reset_at = 0.0

    def mark_rate_limited(self) -> None:
        self.is_limited = True
        self.reset_at = self._clock() + self.cooldown_seconds
        logging.warning(f"Rate limited upstream, serving fallbacks for {self.cooldown_seconds:.0f}s")

    def is_rate_limited(self) -> bool:
        if not self.is_limited:
            return False
        if self._clock() < self.reset_at:
            return True
        logging.info("Rate-limit cool-down elapsed")
        self.is_limited = False
        return False
