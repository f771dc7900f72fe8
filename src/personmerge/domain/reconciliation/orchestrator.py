"""Reconciliation of persons sharing an RRN.

For one RRN all persons referring to it are fetched from their graphs. These
duplicates are called slaves. A master record is constructed out of the slaves,
after which every slave is removed from its graph and replaced by a copy of the
master. Each retired URI keeps an ``owl:sameAs`` link to the master URI.

RRNs are processed one at a time and the slaves of one RRN in order: the master
URI chosen for one RRN must not interleave with reads for another one.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from personmerge.domain.model import ReconciliationResult

from .discovery import find_candidates, find_duplicate_identificators
from .fetch import fetch_person
from .master import construct_master
from .rewrite import replace_slave_with_master

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from personmerge.domain.model import PersonRecord, Rrn
    from personmerge.domain.ports import PersonStore

log = getLogger(__name__)


def reconcile_person(
    store: PersonStore,
    rrn: Rrn,
    *,
    dry_run: bool = False,
) -> ReconciliationResult:
    """Reconcile the duplicates of the person identified by ``rrn``.

    In dry-run mode the master record is only computed and logged; no update is
    sent to the store. Store failures propagate to the caller.
    """

    result = ReconciliationResult(rrn=rrn, dry_run=dry_run)
    result.candidates = find_candidates(store, rrn)

    if len(result.candidates) < 2:
        log.info("No duplicates found for person with RRN %s", rrn)
        return result

    log.info("Found %s duplicates of person with RRN %s", len(result.candidates), rrn)
    slaves: list[PersonRecord] = []
    for candidate in result.candidates:
        slave = fetch_person(store, candidate)
        if slave is None:
            log.info("Person <%s> no longer exists in <%s>", candidate.uri, candidate.graph)
            continue
        slaves.append(slave)

    if len({slave.person.uri for slave in slaves}) < 2:
        log.info("Nothing left to merge for person with RRN %s", rrn)
        return result

    master = construct_master(slaves)
    result.master = master

    if dry_run:
        log.info("Constructed master record for RRN %s", rrn)
        for kind, values in master.describe().items():
            log.info("%s: %s", kind.capitalize(), json.dumps(values))
        return result

    for slave in slaves:
        result.rewritten += replace_slave_with_master(store, slave, master)

    log.info(
        "Reconciled RRN %s onto <%s> (%s URIs redirected)",
        rrn,
        master.person.uri if master.person else None,
        result.rewritten,
    )
    return result


@dataclass(slots=True)
class BulkReconciliation:
    """Sequential reconciliation of many RRNs on a background thread.

    ``start`` returns immediately. Progress and the outcome are exposed through
    the counters and :meth:`wait`. A failing RRN is logged and counted in
    ``failed``; the run then continues with the next RRN.
    """

    store: PersonStore
    rrns: Sequence[Rrn]
    dry_run: bool = False
    reconcile: Callable[..., ReconciliationResult] = reconcile_person
    processed: int = 0
    failed: int = 0
    failures: dict[Rrn, BaseException] = field(default_factory=dict)
    _done: threading.Event = field(default_factory=threading.Event, init=False, repr=False)
    _thread: threading.Thread | None = field(default=None, init=False, repr=False)

    @property
    def total(self) -> int:
        return len(self.rrns)

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def start(self) -> BulkReconciliation:
        if self._thread is not None:
            raise RuntimeError("Bulk reconciliation already started")
        self._thread = threading.Thread(
            target=self.run,
            name="bulk-reconciliation",
            daemon=True,
        )
        self._thread.start()
        return self

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the run has finished; return whether it did."""

        return self._done.wait(timeout)

    def run(self) -> None:
        try:
            for index, rrn in enumerate(self.rrns, start=1):
                log.info("Reconciling %s/%s", index, self.total)
                try:
                    self.reconcile(self.store, rrn, dry_run=self.dry_run)
                except Exception as exc:
                    log.exception("Failed to reconcile RRN %s", rrn)
                    self.failed += 1
                    self.failures[rrn] = exc
                self.processed += 1
            log.info(
                "Bulk reconciliation finished: total=%s, processed=%s, failed=%s",
                self.total,
                self.processed,
                self.failed,
            )
        finally:
            self._done.set()


def reconcile_all(store: PersonStore, *, dry_run: bool = False) -> BulkReconciliation:
    """Discover every duplicate RRN and reconcile them in the background.

    Discovery runs before returning, so a failing store is reported to the
    caller; the reconciliation itself is not awaited.
    """

    rrns = find_duplicate_identificators(store)
    return BulkReconciliation(store=store, rrns=rrns, dry_run=dry_run).start()
