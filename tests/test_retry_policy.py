"""
Tests for the bounded persist retry
"""

import pytest
from sqlalchemy.exc import OperationalError
from tenacity import RetryError

from channel_bridge.services.retry_policy import BoundedRetryPolicy


def db_error():
    return OperationalError("UPDATE reservations", {}, Exception("database is locked"))


class Flaky:
    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def __call__(self, value):
        self.calls += 1
        if self.calls <= self.failures:
            raise db_error()
        return value


class TestBoundedRetryPolicy:

    def test_first_attempt_succeeds(self):
        fn = Flaky(failures=0)

        assert BoundedRetryPolicy(extra_attempts=1).run(fn, "ok") == "ok"
        assert fn.calls == 1

    def test_one_extra_attempt(self):
        fn = Flaky(failures=1)

        assert BoundedRetryPolicy(extra_attempts=1).run(fn, "ok") == "ok"
        assert fn.calls == 2

    def test_gives_up_after_max_attempts(self):
        fn = Flaky(failures=5)
        policy = BoundedRetryPolicy(extra_attempts=2)

        with pytest.raises(RetryError) as exc:
            policy.run(fn, "ok")

        assert fn.calls == 3
        assert policy.max_attempts == 3
        assert isinstance(exc.value.last_attempt.exception(), OperationalError)

    def test_zero_extra_attempts(self):
        fn = Flaky(failures=1)

        with pytest.raises(RetryError):
            BoundedRetryPolicy(extra_attempts=0).run(fn, "ok")
        assert fn.calls == 1

    def test_other_errors_are_not_retried(self):
        calls = []

        def boom():
            calls.append(1)
            raise KeyError("bug")

        with pytest.raises(KeyError):
            BoundedRetryPolicy(extra_attempts=3).run(boom)
        assert len(calls) == 1

    def test_negative_extra_attempts_rejected(self):
        with pytest.raises(ValueError):
            BoundedRetryPolicy(extra_attempts=-1)
