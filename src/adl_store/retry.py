from __future__ import annotations
from typing import Callable, Optional
import time

from .config import StoreOptions


class ExponentialBackoffPolicy:
    """Retry with a wait that grows by ``factor`` after every attempt.

    Retries transport errors, 401, 408, 429 and 5xx (except 501 and 505),
    up to ``max_retries`` times.
    """

    def __init__(
        self,
        max_retries: int,
        interval_ms: int,
        factor: int,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.max_retries = max_retries
        self.interval_ms = interval_ms
        self.factor = factor
        self.retry_count = 0
        self._sleep = sleep

    @classmethod
    def from_options(cls, options: StoreOptions, sleep: Callable[[float], None] = time.sleep) -> ExponentialBackoffPolicy:
        return cls(
            options.max_retries,
            options.exponential_retry_interval,
            options.exponential_factor,
            sleep=sleep,
        )

    @staticmethod
    def is_retriable(status_code: Optional[int], error: Optional[BaseException]) -> bool:
        if error is not None:
            return True
        if status_code is None:
            return False
        if status_code in (401, 408, 429):
            return True
        return 500 <= status_code < 600 and status_code not in (501, 505)

    def should_retry(self, status_code: Optional[int], error: Optional[BaseException] = None) -> bool:
        """Decide whether to retry; sleeps the current backoff when the answer is yes."""
        if not self.is_retriable(status_code, error):
            return False
        if self.retry_count >= self.max_retries:
            return False
        self._sleep(max(self.interval_ms, 0) / 1000.0)
        self.interval_ms *= self.factor
        self.retry_count += 1
        return True
