"""Master record construction.

The master is as complete as possible: it combines the properties of all
slaves. When a property has different values across slaves, the value of the
first slave that defines it wins, URIs included. The master therefore adopts
existing URIs instead of minting new ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from personmerge.domain.model import Birthdate, Identifier, MasterRecord, Person, Resource

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from personmerge.domain.model import PersonRecord


def merge_resources[TResource: Resource](
    resources: Iterable[TResource | None],
    factory: type[TResource],
) -> TResource | None:
    """Merge ``resources`` field by field; first non-empty value wins.

    Returns ``None`` when no resource contributes a single value.
    """

    present = [resource for resource in resources if resource is not None]
    values: dict[str, str] = {}
    for name in factory.merge_fields:
        for resource in present:
            value = getattr(resource, name)
            if value:
                values[name] = value
                break

    if not values:
        return None
    return factory(**values)


def construct_master(slaves: Sequence[PersonRecord]) -> MasterRecord:
    """Construct the master record out of ``slaves`` in the given order."""

    person = merge_resources((slave.person for slave in slaves), Person)
    identifier = merge_resources((slave.identifier for slave in slaves), Identifier)
    birthdate = merge_resources((slave.birthdate for slave in slaves), Birthdate)

    if person is not None:
        person.identifier = identifier.uri if identifier else None
        person.birthdate = birthdate.uri if birthdate else None

    return MasterRecord(person=person, identifier=identifier, birthdate=birthdate)
