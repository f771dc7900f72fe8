from __future__ import annotations

import logging

import pytest

from personmerge.domain.reconciliation import (
    BulkReconciliation,
    find_duplicate_identificators,
    reconcile_all,
    reconcile_person,
)
from tests.support.memory_store import (
    DATUM,
    FOAF_NAME,
    G1,
    G2,
    G3,
    HEEFT_GEBOORTE,
    SAME_AS,
    InMemoryPersonStore,
    StoreFailureError,
    person_uris,
    uri,
)

A = "http://data.lblod.info/id/personen/a"
B = "http://data.lblod.info/id/personen/b"
C = "http://data.lblod.info/id/personen/c"
MANDATE = "http://data.lblod.info/id/mandatarissen/1"
IS_ALIAS_OF = "http://data.vlaanderen.be/ns/mandaat#isBestuurlijkeAliasVan"


def _two_graph_scenario(store: InMemoryPersonStore) -> None:
    store.add_person(G1, A, rrn="123", name="Jones")
    store.add_person(
        G2,
        B,
        rrn="123",
        birthdate_uri=f"{B}/geboorte",
        birthdate_uuid="geboorte-b",
        date="1980-01-01",
    )


def test_key_without_duplicates_is_left_alone(memory_store: InMemoryPersonStore) -> None:
    memory_store.add_person(G1, A, rrn="123")

    result = reconcile_person(memory_store, "123")
    missing = reconcile_person(memory_store, "999")

    assert not result.merged
    assert not missing.merged
    assert memory_store.updates == []


def test_same_uri_in_several_graphs_is_already_converged(
    memory_store: InMemoryPersonStore,
) -> None:
    memory_store.add_person(G1, A, rrn="123")
    memory_store.add_person(G2, A, rrn="123")

    result = reconcile_person(memory_store, "123")

    assert result.candidates == []
    assert memory_store.updates == []
    assert find_duplicate_identificators(memory_store) == []


def test_two_graph_scenario(memory_store: InMemoryPersonStore) -> None:
    _two_graph_scenario(memory_store)

    result = reconcile_person(memory_store, "123")

    assert result.merged
    assert result.master is not None
    assert result.master.person is not None
    master_uri = result.master.person.uri
    assert master_uri == A
    for graph in (G1, G2):
        assert memory_store.persons_with_rrn(graph, "123") == [A]
        assert memory_store.objects(graph, A, FOAF_NAME) == ["Jones"]
        assert memory_store.objects(graph, A, HEEFT_GEBOORTE) == [f"{B}/geboorte"]
        assert memory_store.objects(graph, f"{B}/geboorte", DATUM) == ["1980-01-01"]
    assert memory_store.objects(G2, B, SAME_AS) == [A]
    assert memory_store.objects(G1, A, SAME_AS) == []
    assert memory_store.objects(G1, B, SAME_AS) == []


def test_every_retired_uri_gets_one_link_in_its_own_graph(
    memory_store: InMemoryPersonStore,
) -> None:
    memory_store.add_person(G1, A, rrn="123")
    memory_store.add_person(G1, B, rrn="123", family_name="Peeters")
    memory_store.add_person(G2, C, rrn="123")
    memory_store.add_person(G3, A, rrn="123")

    result = reconcile_person(memory_store, "123")

    assert person_uris(result.candidates) == [A, B, C, A]
    for graph in (G1, G2, G3):
        assert memory_store.persons_with_rrn(graph, "123") == [A]
    assert memory_store.objects(G1, B, SAME_AS) == [A]
    assert memory_store.objects(G2, C, SAME_AS) == [A]
    assert memory_store.objects(G2, B, SAME_AS) == []
    assert memory_store.objects(G3, A, SAME_AS) == []
    assert memory_store.objects(G1, f"{B}/identifier", SAME_AS) == [f"{A}/identifier"]
    assert result.rewritten == 4


def test_second_run_performs_no_mutation(memory_store: InMemoryPersonStore) -> None:
    _two_graph_scenario(memory_store)

    reconcile_person(memory_store, "123")
    updates_after_first_run = len(memory_store.updates)
    second = reconcile_person(memory_store, "123")

    assert updates_after_first_run > 0
    assert not second.merged
    assert len(memory_store.updates) == updates_after_first_run
    assert "123" not in find_duplicate_identificators(memory_store)


def test_dry_run_computes_same_master_without_updates(
    caplog: pytest.LogCaptureFixture,
) -> None:
    dry_store = InMemoryPersonStore()
    live_store = InMemoryPersonStore()
    _two_graph_scenario(dry_store)
    _two_graph_scenario(live_store)
    dry_store.add_person(G3, C, rrn="123", family_name="Peeters")
    live_store.add_person(G3, C, rrn="123", family_name="Peeters")
    caplog.set_level(logging.INFO)

    dry = reconcile_person(dry_store, "123", dry_run=True)
    live = reconcile_person(live_store, "123")

    assert dry.dry_run
    assert dry.master == live.master
    assert dry_store.updates == []
    assert dry.rewritten == 0
    assert '"name": "Jones"' in caplog.text
    assert '"familyName": "Peeters"' in caplog.text


def test_store_failure_propagates_from_single_key(memory_store: InMemoryPersonStore) -> None:
    _two_graph_scenario(memory_store)
    memory_store.fail_on_update = 2

    with pytest.raises(StoreFailureError):
        reconcile_person(memory_store, "123")


def test_rerun_converges_after_partial_rewrite(memory_store: InMemoryPersonStore) -> None:
    memory_store.add_person(G1, A, rrn="123", name="Jones")
    memory_store.add_person(G1, B, rrn="123")
    memory_store.add_person(G2, C, rrn="123")
    # Fail while redirecting B, after the master copy replaced it in G1.
    memory_store.fail_on_update = 5

    with pytest.raises(StoreFailureError):
        reconcile_person(memory_store, "123")

    memory_store.fail_on_update = None
    rerun = reconcile_person(memory_store, "123")

    assert rerun.merged
    assert memory_store.persons_with_rrn(G1, "123") == [A]
    assert memory_store.persons_with_rrn(G2, "123") == [A]
    assert memory_store.objects(G2, C, SAME_AS) == [A]
    assert find_duplicate_identificators(memory_store) == []


def test_rerun_cannot_redirect_references_to_a_half_rewritten_slave(
    memory_store: InMemoryPersonStore,
) -> None:
    memory_store.add_person(G1, A, rrn="123", name="Jones")
    memory_store.add_person(G1, B, rrn="123")
    memory_store.add_person(G2, C, rrn="123")
    memory_store.add(G1, MANDATE, IS_ALIAS_OF, uri(B))
    memory_store.fail_on_update = 5

    with pytest.raises(StoreFailureError):
        reconcile_person(memory_store, "123")

    memory_store.fail_on_update = None
    rerun = reconcile_person(memory_store, "123")

    assert person_uris(rerun.candidates) == [A, C]
    assert memory_store.persons_with_rrn(G1, "123") == [A]
    assert memory_store.objects(G1, MANDATE, IS_ALIAS_OF) == [B]
    assert memory_store.objects(G1, B, SAME_AS) == []


def test_vanished_candidate_is_skipped(memory_store: InMemoryPersonStore) -> None:
    memory_store.add_person(G1, A, rrn="123")
    memory_store.add_person(G2, B, rrn="123")
    select_person_rows = memory_store.select_person_rows

    def racing_select(graph: str, person: str) -> list[dict[str, str]]:
        if person == B:
            return []
        return select_person_rows(graph, person)

    memory_store.select_person_rows = racing_select  # type: ignore[method-assign]

    result = reconcile_person(memory_store, "123")

    assert not result.merged
    assert memory_store.updates == []


def test_bulk_run_reconciles_every_duplicate(memory_store: InMemoryPersonStore) -> None:
    _two_graph_scenario(memory_store)
    memory_store.add_person(G1, C, rrn="456")
    memory_store.add_person(G3, f"{C}-copy", rrn="456")
    memory_store.add_person(G3, f"{C}-alone", rrn="789")

    run = reconcile_all(memory_store)

    assert run.wait(timeout=5)
    assert run.done
    assert (run.total, run.processed, run.failed) == (2, 2, 0)
    assert find_duplicate_identificators(memory_store) == []


def test_bulk_run_continues_after_a_failing_key() -> None:
    seen: list[str] = []

    def flaky_reconcile(_store: object, rrn: str, *, dry_run: bool) -> None:
        seen.append(rrn)
        if rrn == "1":
            raise StoreFailureError("boom")

    run = BulkReconciliation(
        store=InMemoryPersonStore(),
        rrns=["1", "2", "3"],
        reconcile=flaky_reconcile,  # type: ignore[arg-type]
    )
    run.run()

    assert seen == ["1", "2", "3"]
    assert run.processed == 3
    assert run.failed == 1
    assert isinstance(run.failures["1"], StoreFailureError)
    assert run.done


def test_bulk_dry_run_does_not_write(memory_store: InMemoryPersonStore) -> None:
    _two_graph_scenario(memory_store)

    run = reconcile_all(memory_store, dry_run=True)

    assert run.wait(timeout=5)
    assert run.processed == 1
    assert memory_store.updates == []


def test_bulk_run_cannot_start_twice(memory_store: InMemoryPersonStore) -> None:
    run = BulkReconciliation(store=memory_store, rrns=[]).start()
    run.wait(timeout=5)

    with pytest.raises(RuntimeError, match="already started"):
        run.start()
