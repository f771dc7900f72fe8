"""Discovery of RRNs that are shared by more than one person.

Both lookups only consider persons with a different URI, so an RRN whose
duplicates were already merged onto one URI is no longer reported.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from personmerge.domain.model import Candidate, Rrn
    from personmerge.domain.ports import PersonStore

log = getLogger(__name__)


def find_duplicate_identificators(store: PersonStore) -> list[Rrn]:
    """Return every RRN related to at least two distinct person URIs."""

    rrns = list(dict.fromkeys(store.select_duplicate_rrns()))
    log.info("Found %s duplicate RRNs", len(rrns))
    return rrns


def find_candidates(store: PersonStore, rrn: Rrn) -> list[Candidate]:
    """Return the (graph, person) pairs sharing ``rrn``.

    The order is whatever the store returns and is not stable across runs. It is
    the only input that decides which values win during master construction.
    """

    return list(dict.fromkeys(store.select_candidates(rrn)))
