"""Records exchanged by the reconciliation engine.

A person lives in a named graph as three linked resources: the ``person:Person``
itself, its ``adms:Identifier`` (whose ``skos:notation`` holds the RRN) and an
optional ``persoon:Geboorte`` birth event. The dataclasses below mirror those
resources one to one; every attribute besides the URI is optional because the
store may simply not hold it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import ClassVar

type Rrn = str
type GraphUri = str
type Uri = str

_REPORT_KEYS = {"family_name": "familyName", "first_name": "firstName"}


@dataclass(slots=True, frozen=True)
class Candidate:
    """A person URI found in a graph for a given RRN."""

    graph: GraphUri
    uri: Uri


@dataclass(slots=True)
class Resource:
    """Base for the three resource kinds.

    ``merge_fields`` lists the attributes that take part in master construction,
    in the order they are looked up.
    """

    merge_fields: ClassVar[tuple[str, ...]] = ("uri", "uuid")

    uri: Uri | None = None
    uuid: str | None = None

    def as_dict(self) -> dict[str, str]:
        """Known values keyed by their property names (``familyName``, ``firstName``)."""

        return {
            _REPORT_KEYS.get(key, key): value
            for key, value in asdict(self).items()
            if value is not None
        }


@dataclass(slots=True)
class Person(Resource):
    merge_fields: ClassVar[tuple[str, ...]] = (
        "uri",
        "uuid",
        "family_name",
        "name",
        "first_name",
        "gender",
    )

    family_name: str | None = None
    name: str | None = None
    first_name: str | None = None
    gender: Uri | None = None
    identifier: Uri | None = None
    birthdate: Uri | None = None


@dataclass(slots=True)
class Identifier(Resource):
    merge_fields: ClassVar[tuple[str, ...]] = ("uri", "uuid", "notation")

    notation: Rrn | None = None


@dataclass(slots=True)
class Birthdate(Resource):
    merge_fields: ClassVar[tuple[str, ...]] = ("uri", "uuid", "date")

    date: str | None = None


@dataclass(slots=True)
class PersonRecord:
    """A fully hydrated person as found in one graph (a "slave")."""

    graph: GraphUri
    person: Person
    identifier: Identifier
    birthdate: Birthdate | None = None


@dataclass(slots=True)
class MasterRecord:
    """The merged survivor that replaces every slave of one RRN."""

    person: Person | None = None
    identifier: Identifier | None = None
    birthdate: Birthdate | None = None

    def describe(self) -> dict[str, dict[str, str] | None]:
        return {
            "person": self.person.as_dict() if self.person else None,
            "identifier": self.identifier.as_dict() if self.identifier else None,
            "birthdate": self.birthdate.as_dict() if self.birthdate else None,
        }


@dataclass(slots=True)
class ReconciliationResult:
    """Outcome of reconciling one RRN."""

    rrn: Rrn
    candidates: list[Candidate] = field(default_factory=list["Candidate"])
    master: MasterRecord | None = None
    rewritten: int = 0
    dry_run: bool = False

    @property
    def merged(self) -> bool:
        return self.master is not None
