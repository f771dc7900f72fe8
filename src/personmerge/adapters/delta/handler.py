"""Feeding RRNs from identifier change notifications into reconciliation."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .schema import DeltaPayload

if TYPE_CHECKING:
    from collections.abc import Callable

    from personmerge.domain.model import ReconciliationResult, Rrn

log = getLogger(__name__)

SKOS_NOTATION = "http://www.w3.org/2004/02/skos/core#notation"


def rrns_from_delta(payload: object) -> list[Rrn]:
    """RRNs assigned by inserted ``skos:notation`` triples, first occurrence first."""

    delta = DeltaPayload.model_validate(payload)
    rrns: dict[Rrn, None] = {}
    for change_set in delta.root:
        for triple in change_set.inserts:
            if triple.predicate.value != SKOS_NOTATION:
                continue
            if triple.object.type == "uri":
                continue
            rrns.setdefault(triple.object.value, None)
    return list(rrns)


def handle_delta(
    payload: object,
    *,
    reconcile: Callable[[Rrn], ReconciliationResult],
) -> list[ReconciliationResult]:
    """Reconcile every RRN found in ``payload``, one after the other."""

    rrns = rrns_from_delta(payload)
    if not rrns:
        log.debug("No identifier notations in delta")
        return []
    log.info("Delta touched %s RRNs", len(rrns))
    return [reconcile(rrn) for rrn in rrns]
