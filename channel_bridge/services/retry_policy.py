"""
Bounded retry for the reservation-linkage write.

This is the only automatic retry in the system. It runs the write inline a
fixed number of extra times and gives up with tenacity's RetryError, which
the engine turns into ConsistencyRisk.
"""

import logging
from typing import Callable, Tuple, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BoundedRetryPolicy:

    def __init__(
        self,
        extra_attempts: int = 1,
        retry_on: Tuple[Type[BaseException], ...] = (SQLAlchemyError,),
    ):
        if extra_attempts < 0:
            raise ValueError("extra_attempts cannot be negative")
        self.extra_attempts = extra_attempts
        self.retry_on = retry_on

    @property
    def max_attempts(self) -> int:
        return self.extra_attempts + 1

    def _log_retry(self, retry_state) -> None:
        logger.warning(
            f"Attempt {retry_state.attempt_number}/{self.max_attempts} failed: "
            f"{retry_state.outcome.exception()}"
        )

    def run(self, fn: Callable[..., T], *args, **kwargs) -> T:
        """Raises tenacity.RetryError once every attempt has failed."""
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            retry=retry_if_exception_type(self.retry_on),
            before_sleep=self._log_retry,
        )
        return retrying(fn, *args, **kwargs)
