"""
Fluent builder for retry policies.

Usage:
    retryer = (
        RetryerBuilder()
        .set_max_attempts(3)
        .set_delay(10, TimeUnit.SECONDS)
        .set_failure_trigger(lambda e: isinstance(e, TimeoutError))
        .build()
    )
    result = retryer.execute(fetch_report)
"""

from retryer.config import Settings, settings as default_settings
from retryer.duration import Duration, TimeUnit
from retryer.engine import Retryer
from retryer.policy import (
    FailurePredicate,
    RetryPolicy,
    SuccessPredicate,
    always_retry,
    check_max_attempts,
    check_predicate,
    never_retry,
)


class RetryerBuilder:
    """
    Mutable, single-threaded builder for Retryer instances.

    Every setter validates its argument immediately and returns the
    builder for chaining. Predicates have a single slot each: setting a
    new one replaces the previous one.

    Unset attempt budget and delay fall back to the given settings
    (3 attempts, no delay unless overridden through the environment).
    """

    def __init__(self, settings: Settings | None = None):
        settings = settings or default_settings
        self._max_attempts: int = settings.MAX_ATTEMPTS
        self._delay: Duration = settings.default_delay
        self._failure_predicate: FailurePredicate = always_retry
        self._success_predicate: SuccessPredicate = never_retry

    def set_max_attempts(self, max_attempts: int) -> "RetryerBuilder":
        """Set the number of retries allowed after the first attempt."""
        self._max_attempts = check_max_attempts(max_attempts)
        return self

    def set_delay(self, magnitude: float, unit: TimeUnit | str | None) -> "RetryerBuilder":
        """
        Set the fixed pause before each retry.

        Raises:
            InvalidArgument: If magnitude is negative or unit is missing/unknown
        """
        self._delay = Duration(magnitude, TimeUnit.parse(unit))
        return self

    def set_failure_trigger(self, predicate: FailurePredicate) -> "RetryerBuilder":
        """Retry a raised exception only when predicate(exception) is true."""
        self._failure_predicate = check_predicate(predicate, "failure_predicate")
        return self

    def set_success_trigger(self, predicate: SuccessPredicate) -> "RetryerBuilder":
        """Retry a returned value when predicate(value) is true."""
        self._success_predicate = check_predicate(predicate, "success_predicate")
        return self

    def build_policy(self) -> RetryPolicy:
        """Snapshot the current configuration."""
        return RetryPolicy(
            max_attempts=self._max_attempts,
            delay=self._delay,
            failure_predicate=self._failure_predicate,
            success_predicate=self._success_predicate,
        )

    def build(self) -> Retryer:
        return Retryer(self.build_policy())

    def __repr__(self) -> str:
        return f"RetryerBuilder(max_attempts={self._max_attempts}, delay='{self._delay}')"
