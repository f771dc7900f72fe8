"""Port for the partitioned person store.

Every method maps to a single query or update against the store and is atomic
only on its own. Writes are scoped to one graph.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .model import Candidate, GraphUri, MasterRecord, Rrn, Uri

type PersonRow = Mapping[str, str]
"""One result row of :meth:`PersonStore.select_person_rows`.

Keys are the names in ``PERSON_ROW_KEYS``; unbound values are left out.
"""

PERSON_ROW_KEYS: tuple[str, ...] = (
    "uuid",
    "identifier",
    "family_name",
    "name",
    "first_name",
    "gender",
    "birthdate",
    "birthdate_uuid",
    "date",
    "identifier_uuid",
    "notation",
)


@runtime_checkable
class PersonStore(Protocol):
    """Read/write access to persons, identifiers and birth events across graphs."""

    def select_duplicate_rrns(self) -> Sequence[Rrn]:
        """RRNs carried by identifiers of at least two persons with different URIs."""
        ...

    def select_candidates(self, rrn: Rrn) -> Sequence[Candidate]:
        """(graph, person) pairs for ``rrn``, in store order."""
        ...

    def select_person_rows(self, graph: GraphUri, uri: Uri) -> Sequence[PersonRow]:
        """Rows describing one person in one graph; empty when the person is gone."""
        ...

    def delete_person(self, graph: GraphUri, uri: Uri) -> None:
        """Remove the person with its identifier and birth event from ``graph``."""
        ...

    def insert_master(self, graph: GraphUri, master: MasterRecord) -> None:
        """Write the master's person, identifier and birth event into ``graph``."""
        ...

    def replace_uri(self, graph: GraphUri, old: Uri, new: Uri) -> None:
        """Rewrite every triple in ``graph`` using ``old`` as subject or object.

        ``owl:sameAs`` triples with ``old`` as subject are left untouched.
        """
        ...

    def insert_same_as(self, graph: GraphUri, slave: Uri, master: Uri) -> None:
        """Record that ``slave`` was superseded by ``master`` in ``graph``."""
        ...
