"""SPARQL endpoint configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, optional_env_var
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SPARQL_ENDPOINT = "http://database:8890/sparql"
DEFAULT_SPARQL_TIMEOUT_SECONDS = 60.0
SUDO_HEADER = "mu-auth-sudo"


@dataclass(frozen=True, slots=True)
class SparqlConfig:
    """Holds the triple store endpoints and the HTTP behaviour used to reach them."""

    query_endpoint: str
    update_endpoint: str
    resilience: ResilienceConfig


def _default_resilience_config() -> ResilienceConfig:
    timeout = env_float("SPARQL_TIMEOUT_SECONDS")
    if timeout is None:
        timeout = DEFAULT_SPARQL_TIMEOUT_SECONDS
    if timeout <= 0:
        raise ConfigurationError("SPARQL_TIMEOUT_SECONDS must be positive")

    max_calls = env_int("SPARQL_MAX_CALLS_PER_SECOND")
    if max_calls is not None and max_calls <= 0:
        raise ConfigurationError("SPARQL_MAX_CALLS_PER_SECOND must be positive")

    headers = {"Accept": "application/sparql-results+json"}
    if env_bool("SPARQL_SUDO", default=True):
        headers[SUDO_HEADER] = "true"

    return ResilienceConfig(
        name="sparql",
        timeout_seconds=timeout,
        # Store failures surface to the caller; a half-applied rewrite is never retried.
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=max_calls, per_seconds=1.0) if max_calls else None,
        default_headers=headers,
    )


def get_sparql_config(*, resilience: ResilienceConfig | None = None) -> SparqlConfig:
    query_endpoint = optional_env_var("MU_SPARQL_ENDPOINT") or DEFAULT_SPARQL_ENDPOINT
    update_endpoint = optional_env_var("MU_SPARQL_UPDATE_ENDPOINT") or query_endpoint
    return SparqlConfig(
        query_endpoint=query_endpoint,
        update_endpoint=update_endpoint,
        resilience=resilience or _default_resilience_config(),
    )
