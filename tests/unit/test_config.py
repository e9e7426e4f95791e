"""
Unit tests for Settings loading.
"""

import pytest
from pydantic import ValidationError

from retryer.config import Settings
from retryer.duration import Duration, TimeUnit


def test_settings_defaults(monkeypatch):
    for name in ("MAX_ATTEMPTS", "DELAY", "DELAY_UNIT", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(f"RETRYER_{name}", raising=False)

    settings = Settings(_env_file=None)

    assert settings.MAX_ATTEMPTS == 3
    assert settings.DELAY == 0
    assert settings.DELAY_UNIT is TimeUnit.SECONDS
    assert settings.default_delay == Duration.zero()
    assert settings.LOG_LEVEL == "INFO"
    assert settings.ENVIRONMENT == "development"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("RETRYER_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("RETRYER_DELAY", "200")
    monkeypatch.setenv("RETRYER_DELAY_UNIT", "milliseconds")

    settings = Settings(_env_file=None)

    assert settings.MAX_ATTEMPTS == 5
    assert settings.default_delay == Duration(200, TimeUnit.MILLISECONDS)


@pytest.mark.parametrize(
    "name,value",
    [
        ("RETRYER_MAX_ATTEMPTS", "-1"),
        ("RETRYER_DELAY", "-0.5"),
        ("RETRYER_DELAY", "inf"),
        ("RETRYER_DELAY_UNIT", "fortnights"),
    ],
)
def test_settings_reject_invalid_environment(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("value", ["SECONDS", "Milliseconds", "minutes"])
def test_settings_delay_unit_is_case_insensitive(monkeypatch, value):
    monkeypatch.setenv("RETRYER_DELAY_UNIT", value)

    settings = Settings(_env_file=None)

    assert settings.DELAY_UNIT is TimeUnit(value.lower())
