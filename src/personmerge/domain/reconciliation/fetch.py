"""Loading a person with its identifier and birth event from one graph."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from personmerge.domain.model import Birthdate, Identifier, Person, PersonRecord
from personmerge.domain.ports import PERSON_ROW_KEYS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from personmerge.domain.model import Candidate
    from personmerge.domain.ports import PersonRow, PersonStore

log = getLogger(__name__)


def fetch_person(store: PersonStore, candidate: Candidate) -> PersonRecord | None:
    """Return the person behind ``candidate`` or ``None`` if it no longer exists."""

    rows = store.select_person_rows(candidate.graph, candidate.uri)
    return build_person_record(candidate, rows)


def build_person_record(candidate: Candidate, rows: Sequence[PersonRow]) -> PersonRecord | None:
    """Turn result rows into a record.

    Several rows mean some property holds more than one value. Only the first row
    is kept and the others are dropped after logging what was seen; the choice
    between conflicting values is therefore arbitrary.
    """

    if not rows:
        return None

    if len(rows) > 1:
        log.warning(
            "%s matches found for person <%s>. Probably some multi-value properties? "
            "Only taking the first result into account.",
            len(rows),
            candidate.uri,
        )
        for key in PERSON_ROW_KEYS:
            values = [row.get(key) for row in rows]
            log.warning("Values for prop '%s': %s", key, values)

    row = rows[0]
    person = Person(
        uri=candidate.uri,
        uuid=row.get("uuid"),
        family_name=row.get("family_name"),
        name=row.get("name"),
        first_name=row.get("first_name"),
        gender=row.get("gender"),
        identifier=row.get("identifier"),
        birthdate=row.get("birthdate"),
    )
    identifier = Identifier(
        uri=row.get("identifier"),
        uuid=row.get("identifier_uuid"),
        notation=row.get("notation"),
    )
    birthdate: Birthdate | None = None
    if row.get("birthdate"):
        birthdate = Birthdate(
            uri=row.get("birthdate"),
            uuid=row.get("birthdate_uuid"),
            date=row.get("date"),
        )

    return PersonRecord(
        graph=candidate.graph,
        person=person,
        identifier=identifier,
        birthdate=birthdate,
    )
