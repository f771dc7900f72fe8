"""Public interface for the delta notification adapter."""

from __future__ import annotations

from .handler import SKOS_NOTATION, handle_delta, rrns_from_delta
from .schema import ChangeSet, DeltaPayload, DeltaTriple

__all__ = [
    "SKOS_NOTATION",
    "ChangeSet",
    "DeltaPayload",
    "DeltaTriple",
    "handle_delta",
    "rrns_from_delta",
]
