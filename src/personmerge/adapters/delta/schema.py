"""Pydantic models for mu-semtech delta notifications."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, RootModel

from personmerge.adapters.sparql.schema import SparqlTerm


class DeltaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DeltaTriple(DeltaBaseModel):
    subject: SparqlTerm
    predicate: SparqlTerm
    object: SparqlTerm
    graph: SparqlTerm | None = None


class ChangeSet(DeltaBaseModel):
    inserts: list[DeltaTriple] = Field(default_factory=list)
    deletes: list[DeltaTriple] = Field(default_factory=list)


class DeltaPayload(RootModel[list[ChangeSet]]):
    """A notification body: a list of change sets in commit order."""
