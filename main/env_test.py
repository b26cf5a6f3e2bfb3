"""Tests for environment variable parsing"""

import pytest

from main.env import EnvironmentVariableParseException, get_float


@pytest.mark.parametrize(
    "value, expected",  # noqa: PT006
    [
        ("0", 0.0),
        ("1", 1.0),
        ("0.25", 0.25),
        ("-1.5", -1.5),
    ],
)
def test_get_float(monkeypatch, value, expected):
    """The variable is parsed as a float"""
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", value)
    assert get_float("SENTRY_TRACES_SAMPLE_RATE", 0) == expected


def test_get_float_missing(monkeypatch):
    """The default is returned as is if the variable isn't set"""
    monkeypatch.delenv("SENTRY_TRACES_SAMPLE_RATE", raising=False)
    assert get_float("SENTRY_TRACES_SAMPLE_RATE", "default") == "default"


@pytest.mark.parametrize("value", ["None", "half", "[0.5]", "1-0.5", ""])
def test_get_float_invalid(monkeypatch, value):
    """A value that isn't a float raises an exception naming the variable"""
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", value)
    with pytest.raises(EnvironmentVariableParseException) as ex:
        get_float("SENTRY_TRACES_SAMPLE_RATE", 0)
    assert (
        ex.value.args[0]
        == f"Expected value in SENTRY_TRACES_SAMPLE_RATE={value} to be a float"
    )
