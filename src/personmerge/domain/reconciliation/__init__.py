"""Reconciliation of duplicate persons across graphs.

Flow per RRN:
1) find the (graph, person) candidates sharing the RRN
2) fetch every candidate with its identifier and birth event
3) construct the master record, first value found wins
4) replace each slave by the master in its own graph
"""

from __future__ import annotations

from .discovery import find_candidates, find_duplicate_identificators
from .fetch import build_person_record, fetch_person
from .master import construct_master, merge_resources
from .orchestrator import BulkReconciliation, reconcile_all, reconcile_person
from .rewrite import replace_slave_with_master

__all__ = [
    "BulkReconciliation",
    "build_person_record",
    "construct_master",
    "fetch_person",
    "find_candidates",
    "find_duplicate_identificators",
    "merge_resources",
    "reconcile_all",
    "reconcile_person",
    "replace_slave_with_master",
]
