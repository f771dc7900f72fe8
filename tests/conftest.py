from __future__ import annotations

import pytest

from personmerge.config.http_resilience import ResilienceConfig, RetryPolicy
from personmerge.config.sparql import SparqlConfig
from tests.support.memory_store import InMemoryPersonStore


@pytest.fixture
def memory_store() -> InMemoryPersonStore:
    return InMemoryPersonStore()


@pytest.fixture
def sparql_config() -> SparqlConfig:
    return SparqlConfig(
        query_endpoint="http://database:8890/sparql",
        update_endpoint="http://database:8890/sparql-update",
        resilience=ResilienceConfig(name="sparql", retry=RetryPolicy(total=0)),
    )
