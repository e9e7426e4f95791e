"""
Retryer exceptions.

The library raises its own exceptions only for configuration problems.
Failures raised by the retried work are never wrapped: they reach the
caller as the original exception object once the retry policy gives up.
"""


class RetryerError(Exception):
    """
    Base exception for all errors raised by the retryer itself.

    Allows catching any library-originated error with a single except
    clause without also catching failures of the retried work.
    """
    pass


class InvalidArgument(RetryerError, ValueError):
    """
    Raised when a policy, builder or engine argument is invalid.

    Examples:
    - Negative attempt budget or delay magnitude
    - Missing time unit, predicate, target or interface type
    - Target object that does not implement the requested interface

    Always raised synchronously at configuration or call time, never as
    the outcome of a retried attempt.
    """

    def __init__(self, message: str, argument: str | None = None):
        super().__init__(message)
        self.message = message
        self.argument = argument
