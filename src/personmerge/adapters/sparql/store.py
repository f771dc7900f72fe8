"""SPARQL implementation of the person store port."""

from __future__ import annotations

from typing import TYPE_CHECKING

from personmerge.domain.model import Candidate

from . import queries

if TYPE_CHECKING:
    from personmerge.domain.model import GraphUri, MasterRecord, Rrn, Uri
    from personmerge.domain.ports import PersonRow

    from .client import SparqlClient


class SparqlPersonStore:
    """Person store backed by a SPARQL endpoint holding one named graph per partition."""

    def __init__(self, client: SparqlClient) -> None:
        self._client = client

    def select_duplicate_rrns(self) -> list[Rrn]:
        rows = self._client.query(queries.duplicate_rrns_query())
        return [row["rrn"] for row in rows if "rrn" in row]

    def select_candidates(self, rrn: Rrn) -> list[Candidate]:
        rows = self._client.query(queries.candidates_query(rrn))
        return [
            Candidate(graph=row["g"], uri=row["person"])
            for row in rows
            if "g" in row and "person" in row
        ]

    def select_person_rows(self, graph: GraphUri, uri: Uri) -> list[PersonRow]:
        return list(self._client.query(queries.person_query(graph, uri)))

    def delete_person(self, graph: GraphUri, uri: Uri) -> None:
        self._client.update(queries.delete_person_update(graph, uri))

    def insert_master(self, graph: GraphUri, master: MasterRecord) -> None:
        if not queries.master_statements(master):
            return
        self._client.update(queries.insert_master_update(graph, master))

    def replace_uri(self, graph: GraphUri, old: Uri, new: Uri) -> None:
        self._client.update(queries.replace_uri_update(graph, old, new))

    def insert_same_as(self, graph: GraphUri, slave: Uri, master: Uri) -> None:
        self._client.update(queries.same_as_update(graph, slave, master))
