"""Application entry points wiring the SPARQL store into the reconciliation engine."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from personmerge.adapters.delta import handle_delta as _handle_delta
from personmerge.adapters.sparql import SparqlClient, SparqlPersonStore
from personmerge.config import get_sparql_config
from personmerge.domain.reconciliation import (
    find_duplicate_identificators as _find_duplicate_identificators,
)
from personmerge.domain.reconciliation import reconcile_all as _reconcile_all
from personmerge.domain.reconciliation import reconcile_person

if TYPE_CHECKING:
    from personmerge.domain.model import ReconciliationResult, Rrn
    from personmerge.domain.ports import PersonStore
    from personmerge.domain.reconciliation import BulkReconciliation

log = getLogger(__name__)


def build_sparql_store() -> SparqlPersonStore:
    """Create a store for the endpoint configured in the environment."""

    config = get_sparql_config()
    log.debug("Using SPARQL endpoint %s", config.query_endpoint)
    return SparqlPersonStore(SparqlClient(config=config))


def find_duplicate_identificators(*, store: PersonStore | None = None) -> list[Rrn]:
    """Return the RRNs that still have more than one person URI."""

    return _find_duplicate_identificators(store or build_sparql_store())


def reconcile(
    rrn: Rrn,
    *,
    dry_run: bool = False,
    store: PersonStore | None = None,
) -> ReconciliationResult:
    """Reconcile one RRN synchronously; store failures are raised."""

    return reconcile_person(store or build_sparql_store(), rrn, dry_run=dry_run)


def reconcile_all(
    *,
    dry_run: bool = False,
    store: PersonStore | None = None,
) -> BulkReconciliation:
    """Start reconciling every duplicate RRN in the background and return the run."""

    effective_store = store or build_sparql_store()
    run = _reconcile_all(effective_store, dry_run=dry_run)
    log.info("Started bulk reconciliation of %s RRNs (dry_run=%s)", run.total, dry_run)
    return run


def handle_delta(
    payload: object,
    *,
    dry_run: bool = False,
    store: PersonStore | None = None,
) -> list[ReconciliationResult]:
    """Reconcile the RRNs assigned in a change notification."""

    effective_store = store or build_sparql_store()
    return _handle_delta(
        payload,
        reconcile=lambda rrn: reconcile_person(effective_store, rrn, dry_run=dry_run),
    )
