"""
Retry engine.

This module implements Retryer, the execution side of a RetryPolicy.
It provides a single code path for running a unit of work under the
policy; the proxy and decorator entry points feed the same loop.

Retry loop (budget = max_attempts + 1 invocations):
    1. Invoke the work
    2. On exception: retry if budget remains and the failure predicate agrees
    3. On return value: retry if budget remains and the success predicate agrees
    4. Otherwise surface the outcome unchanged (value returned, exception re-raised)

Usage:
    retryer = RetryerBuilder().set_max_attempts(2).build()
    value = retryer.execute(lambda: client.fetch(key))
    client = retryer.wrap(client, StorageClient)
"""

import functools
from typing import Any, Callable, TypeVar

from retryer.exceptions import InvalidArgument
from retryer.logging_config import get_logger
from retryer.policy import RetryPolicy
from retryer.proxy import new_proxy

logger = get_logger(__name__)

T = TypeVar("T")


class Retryer:
    """
    Immutable retry engine bound to one RetryPolicy.

    The engine holds no per-call state: the remaining budget lives in
    the execute() frame, so one instance can serve any number of
    concurrent callers without locking.

    Attributes:
        policy: The policy snapshot this engine applies
    """

    __slots__ = ("_policy",)

    def __init__(self, policy: RetryPolicy):
        if not isinstance(policy, RetryPolicy):
            raise InvalidArgument("policy must be a RetryPolicy", argument="policy")
        object.__setattr__(self, "_policy", policy)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def execute(self, work: Callable[[], T]) -> T:
        """
        Run work under the retry policy.

        Args:
            work: Zero-argument callable returning a value or raising

        Returns:
            The first value the success predicate accepts, or the last
            value returned once the budget is exhausted

        Raises:
            InvalidArgument: If work is not callable
            Exception: The original exception from the last attempt, when
                the failure predicate declines or the budget is exhausted
        """
        if not callable(work):
            raise InvalidArgument("work must be callable", argument="work")

        policy = self._policy
        remaining = policy.max_attempts
        attempt = 0

        while True:
            attempt += 1
            try:
                result = work()
            except Exception as e:
                if remaining > 0 and policy.failure_predicate(e):
                    self._before_retry(attempt, remaining, reason="failure", error_type=type(e).__name__)
                    remaining -= 1
                    continue
                logger.debug(
                    "Giving up on failure",
                    extra={
                        "attempt": attempt,
                        "error_type": type(e).__name__,
                        "budget_exhausted": remaining == 0,
                    },
                )
                raise

            if remaining > 0 and policy.success_predicate(result):
                self._before_retry(attempt, remaining, reason="success")
                remaining -= 1
                continue
            return result

    def wrap(self, target: Any, interface_type: type) -> Any:
        """
        Return an interface_type instance delegating every method to target.

        Each proxied method call runs through execute() with its own
        attempt budget.

        Raises:
            InvalidArgument: If target or interface_type is missing, or if
                target does not implement interface_type
        """
        return new_proxy(self, target, interface_type)

    def decorate(self, func: Callable[..., T]) -> Callable[..., T]:
        """Wrap a function so that each call runs under the retry policy."""
        if not callable(func):
            raise InvalidArgument("func must be callable", argument="func")

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return self.execute(lambda: func(*args, **kwargs))

        return wrapper

    def _before_retry(self, attempt: int, remaining: int, reason: str, error_type: str | None = None) -> None:
        delay = self._policy.delay
        logger.debug(
            f"Retrying after attempt {attempt} ({reason})",
            extra={
                "reason": reason,
                "attempt": attempt,
                "remaining": remaining - 1,
                "delay_seconds": delay.seconds,
                "error_type": error_type,
            },
        )
        delay.sleep()

    def __repr__(self) -> str:
        return f"Retryer(max_attempts={self._policy.max_attempts}, delay='{self._policy.delay}')"
