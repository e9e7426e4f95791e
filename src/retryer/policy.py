"""
Retry policy snapshot.

RetryPolicy is the immutable set of parameters consumed by the retry
engine. It is normally produced by RetryerBuilder.build(), but can be
constructed directly; its invariants are checked either way.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from retryer.duration import Duration
from retryer.exceptions import InvalidArgument

FailurePredicate = Callable[[Exception], bool]
SuccessPredicate = Callable[[Any], bool]

DEFAULT_MAX_ATTEMPTS = 3


def always_retry(_: Any) -> bool:
    """Predicate that accepts everything (default failure trigger)."""
    return True


def never_retry(_: Any) -> bool:
    """Predicate that accepts nothing (default success trigger)."""
    return False


def check_max_attempts(max_attempts: Any) -> int:
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
        raise InvalidArgument(
            f"max_attempts must be an int, got {type(max_attempts).__name__}",
            argument="max_attempts",
        )
    if max_attempts < 0:
        raise InvalidArgument(f"max_attempts '{max_attempts}' must be >= 0", argument="max_attempts")
    return max_attempts


def check_predicate(predicate: Any, argument: str) -> Callable[[Any], bool]:
    if predicate is None:
        raise InvalidArgument(f"{argument} must not be None", argument=argument)
    if not callable(predicate):
        raise InvalidArgument(f"{argument} must be callable", argument=argument)
    return predicate


@dataclass(frozen=True)
class RetryPolicy:
    """
    Immutable retry configuration shared read-only by every execution.

    Attributes:
        max_attempts: Additional attempts allowed after the first (0 = single attempt)
        delay: Pause applied before each retry, never before the first attempt
        failure_predicate: Decides whether a raised exception is retried
        success_predicate: Decides whether a returned value is treated as a failure
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: Duration = field(default_factory=Duration.zero)
    failure_predicate: FailurePredicate = always_retry
    success_predicate: SuccessPredicate = never_retry

    def __post_init__(self) -> None:
        """Validate policy invariants."""
        check_max_attempts(self.max_attempts)
        if not isinstance(self.delay, Duration):
            raise InvalidArgument("delay must be a Duration", argument="delay")
        check_predicate(self.failure_predicate, "failure_predicate")
        check_predicate(self.success_predicate, "success_predicate")

    @property
    def total_attempts(self) -> int:
        """Upper bound on invocations of the work for one call."""
        return self.max_attempts + 1
