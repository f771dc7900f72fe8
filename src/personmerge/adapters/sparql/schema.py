"""Pydantic models for SPARQL 1.1 JSON query results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SparqlBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SparqlTerm(SparqlBaseModel):
    type: Literal["uri", "literal", "typed-literal", "bnode"]
    value: str
    datatype: str | None = None
    lang: str | None = Field(default=None, alias="xml:lang")


class SparqlHead(SparqlBaseModel):
    vars: list[str] = Field(default_factory=list)


class SparqlResults(SparqlBaseModel):
    bindings: list[dict[str, SparqlTerm]] = Field(default_factory=list)


class SparqlSelectResponse(SparqlBaseModel):
    head: SparqlHead = Field(default_factory=SparqlHead)
    results: SparqlResults

    def rows(self) -> list[dict[str, str]]:
        """Bindings flattened to their lexical values, in result order."""

        return [
            {name: term.value for name, term in binding.items()}
            for binding in self.results.bindings
        ]
