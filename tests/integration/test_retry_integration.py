"""
Integration tests for the retry engine.

These tests use real sleeps and real threads to check pause timing and
concurrent reuse of a single engine.

Run with: pytest tests/integration/test_retry_integration.py -v
"""

import threading
import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor

import pytest

from retryer import RetryerBuilder, TimeUnit

pytestmark = pytest.mark.integration


class ReportClient(ABC):
    @abstractmethod
    def render(self, report_id: int) -> str:
        ...


class FlakyReportClient(ReportClient):
    """Fails the first two renders of every report id."""

    def __init__(self):
        self._lock = threading.Lock()
        self.attempts: dict[int, int] = {}

    def render(self, report_id):
        with self._lock:
            self.attempts[report_id] = self.attempts.get(report_id, 0) + 1
            attempt = self.attempts[report_id]
        if attempt <= 2:
            raise ConnectionError(f"report {report_id} attempt {attempt}")
        return f"report-{report_id}"


def test_pauses_are_real_and_fixed(flaky):
    """Two retries with a 50ms delay take at least 100ms."""
    retryer = (
        RetryerBuilder()
        .set_max_attempts(3)
        .set_delay(50, TimeUnit.MILLISECONDS)
        .build()
    )
    work = flaky(RuntimeError("Mock"), RuntimeError("Mock"), "SUCCESS")

    start = time.monotonic()
    assert retryer.execute(work) == "SUCCESS"
    elapsed = time.monotonic() - start

    assert work.calls == 3
    assert elapsed >= 0.1


def test_no_pause_when_first_attempt_succeeds(flaky):
    retryer = RetryerBuilder().set_delay(2, TimeUnit.SECONDS).build()

    start = time.monotonic()
    assert retryer.execute(flaky("SUCCESS")) == "SUCCESS"

    assert time.monotonic() - start < 1


def test_shared_engine_across_threads(flaky):
    """One engine serves concurrent callers, each with its own budget."""
    retryer = (
        RetryerBuilder()
        .set_max_attempts(2)
        .set_delay(10, TimeUnit.MILLISECONDS)
        .build()
    )
    works = [flaky(RuntimeError("Mock"), RuntimeError("Mock"), i) for i in range(20)]

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(retryer.execute, works))

    assert results == list(range(20))
    assert all(work.calls == 3 for work in works)


def test_shared_proxy_across_threads():
    client = FlakyReportClient()
    retryer = (
        RetryerBuilder()
        .set_max_attempts(2)
        .set_delay(5, TimeUnit.MILLISECONDS)
        .set_failure_trigger(lambda e: isinstance(e, ConnectionError))
        .build()
    )
    proxy = retryer.wrap(client, ReportClient)

    with ThreadPoolExecutor(max_workers=4) as executor:
        results = list(executor.map(proxy.render, range(12)))

    assert results == [f"report-{i}" for i in range(12)]
    assert client.attempts == {i: 3 for i in range(12)}
