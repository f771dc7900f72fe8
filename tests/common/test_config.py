from __future__ import annotations

import logging

import pytest

from personmerge.config import (
    ConfigurationError,
    env_bool,
    env_float,
    env_int,
    get_sparql_config,
    optional_env_var,
    resolve_log_level,
)
from personmerge.config.sparql import DEFAULT_SPARQL_ENDPOINT, SUDO_HEADER

_SPARQL_VARS = (
    "MU_SPARQL_ENDPOINT",
    "MU_SPARQL_UPDATE_ENDPOINT",
    "SPARQL_TIMEOUT_SECONDS",
    "SPARQL_MAX_CALLS_PER_SECOND",
    "SPARQL_SUDO",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (*_SPARQL_VARS, "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    assert optional_env_var("EXAMPLE_VAR") is None
    assert optional_env_var("EXAMPLE_VAR", "fallback") == "fallback"


def test_optional_env_var_strips_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert optional_env_var("EXAMPLE_VAR") == "value"


def test_numeric_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLOAT", "2.5")
    monkeypatch.setenv("EXAMPLE_INT", "7")
    monkeypatch.delenv("EXAMPLE_MISSING", raising=False)

    assert env_float("EXAMPLE_FLOAT") == 2.5
    assert env_int("EXAMPLE_INT") == 7
    assert env_int("EXAMPLE_MISSING", 3) == 3


@pytest.mark.parametrize("loader", [env_float, env_int])
def test_numeric_env_vars_reject_garbage(
    monkeypatch: pytest.MonkeyPatch, loader: object
) -> None:
    monkeypatch.setenv("EXAMPLE_NUMBER", "many")

    with pytest.raises(ConfigurationError, match="EXAMPLE_NUMBER"):
        loader("EXAMPLE_NUMBER")  # type: ignore[operator]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("YES", True), ("1", True), ("off", False), ("0", False)],
)
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", raw)

    assert env_bool("EXAMPLE_FLAG", default=not expected) is expected


def test_env_bool_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "maybe")

    with pytest.raises(ConfigurationError):
        env_bool("EXAMPLE_FLAG", default=True)


def test_sparql_config_defaults(clean_env: pytest.MonkeyPatch) -> None:
    config = get_sparql_config()

    assert config.query_endpoint == DEFAULT_SPARQL_ENDPOINT
    assert config.update_endpoint == DEFAULT_SPARQL_ENDPOINT
    assert config.resilience.timeout_seconds == 60.0
    assert config.resilience.retry.total == 0
    assert config.resilience.ratelimit is None
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers[SUDO_HEADER] == "true"


def test_sparql_config_from_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("MU_SPARQL_ENDPOINT", "http://triplestore:8890/sparql")
    clean_env.setenv("MU_SPARQL_UPDATE_ENDPOINT", "http://triplestore:8890/update")
    clean_env.setenv("SPARQL_TIMEOUT_SECONDS", "5")
    clean_env.setenv("SPARQL_MAX_CALLS_PER_SECOND", "10")
    clean_env.setenv("SPARQL_SUDO", "false")

    config = get_sparql_config()

    assert config.query_endpoint == "http://triplestore:8890/sparql"
    assert config.update_endpoint == "http://triplestore:8890/update"
    assert config.resilience.timeout_seconds == 5.0
    assert config.resilience.ratelimit is not None
    assert config.resilience.ratelimit.max_calls == 10
    assert config.resilience.default_headers is not None
    assert SUDO_HEADER not in config.resilience.default_headers


@pytest.mark.parametrize(
    ("name", "value"),
    [("SPARQL_TIMEOUT_SECONDS", "0"), ("SPARQL_MAX_CALLS_PER_SECOND", "-1")],
)
def test_sparql_config_rejects_non_positive(
    clean_env: pytest.MonkeyPatch, name: str, value: str
) -> None:
    clean_env.setenv(name, value)

    with pytest.raises(ConfigurationError, match=name):
        get_sparql_config()


def test_log_level_from_environment(clean_env: pytest.MonkeyPatch) -> None:
    assert resolve_log_level() == logging.INFO

    clean_env.setenv("LOG_LEVEL", "debug")
    assert resolve_log_level() == logging.DEBUG

    clean_env.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ConfigurationError):
        resolve_log_level()
