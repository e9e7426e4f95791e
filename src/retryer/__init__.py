"""
Retryer: fixed-interval retry policies for fallible operations.

A policy holds an attempt budget, a pause between attempts and two
triggers: one deciding whether a raised exception is retried, one
deciding whether a returned value should be retried anyway. The engine
built from a policy runs a zero-argument callable under it, or wraps an
object so that every method call on an interface is retried.

Main Components:
    - RetryerBuilder: Fluent, validating policy builder
    - Retryer: Immutable engine (execute, wrap, decorate)
    - RetryPolicy: Immutable policy snapshot
    - Duration / TimeUnit: Pause between attempts
    - InvalidArgument: Configuration errors

Usage:
    >>> from retryer import RetryerBuilder, TimeUnit
    >>> retryer = (
    ...     RetryerBuilder()
    ...     .set_max_attempts(3)
    ...     .set_delay(100, TimeUnit.MILLISECONDS)
    ...     .set_failure_trigger(lambda e: isinstance(e, ConnectionError))
    ...     .build()
    ... )
    >>> retryer.execute(lambda: "SUCCESS")
    'SUCCESS'
"""

from retryer.builder import RetryerBuilder
from retryer.config import Settings, settings
from retryer.duration import Duration, TimeUnit
from retryer.engine import Retryer
from retryer.exceptions import InvalidArgument, RetryerError
from retryer.logging_config import configure_logging
from retryer.policy import RetryPolicy, always_retry, never_retry

__version__ = "0.1.0"

__all__ = [
    "Duration",
    "InvalidArgument",
    "RetryPolicy",
    "Retryer",
    "RetryerBuilder",
    "RetryerError",
    "Settings",
    "TimeUnit",
    "always_retry",
    "configure_logging",
    "never_retry",
    "settings",
]
