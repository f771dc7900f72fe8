"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_float, env_int, optional_env_var
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging, resolve_log_level
from .sparql import SparqlConfig, get_sparql_config

__all__ = [
    "ConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SparqlConfig",
    "configure_logging",
    "env_bool",
    "env_float",
    "env_int",
    "get_sparql_config",
    "optional_env_var",
    "resolve_log_level",
]
