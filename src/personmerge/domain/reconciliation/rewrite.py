"""Replacing a slave with a copy of the master inside the slave's graph.

The steps are separate updates without a surrounding transaction. Every step is
safe to repeat (deletes match a pattern, inserts are additive), so reconciling
the RRN again brings the person data of every graph back to one master.

That re-run cannot repair a slave whose rewrite stopped after its delete: the
slave no longer carries the RRN, so it is not found as a candidate again. Triples
in its graph that still refer to the slave URI are not redirected and the slave
gets no ``owl:sameAs`` link.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from personmerge.domain.model import GraphUri, MasterRecord, PersonRecord, Resource
    from personmerge.domain.ports import PersonStore

log = getLogger(__name__)


def replace_slave_with_master(
    store: PersonStore,
    slave: PersonRecord,
    master: MasterRecord,
) -> int:
    """Replace ``slave`` by ``master`` in the slave's graph.

    Returns the number of slave URIs that were redirected to the master.
    """

    if master.person is None or master.person.uri is None:
        raise ValueError("Cannot replace a slave with a master without person")

    graph = slave.graph
    log.debug("Replacing <%s> by <%s> in <%s>", slave.person.uri, master.person.uri, graph)

    store.delete_person(graph, _uri(slave.person))
    store.insert_master(graph, master)

    redirected = 0
    pairs: tuple[tuple[Resource | None, Resource | None], ...] = (
        (slave.person, master.person),
        (slave.identifier, master.identifier),
        (slave.birthdate, master.birthdate),
    )
    for slave_resource, master_resource in pairs:
        if slave_resource is None or master_resource is None:
            continue
        if _redirect(store, graph, _uri(slave_resource), _uri(master_resource)):
            redirected += 1
    return redirected


def _redirect(store: PersonStore, graph: GraphUri, slave_uri: str, master_uri: str) -> bool:
    if slave_uri == master_uri:
        return False
    store.replace_uri(graph, slave_uri, master_uri)
    store.insert_same_as(graph, slave_uri, master_uri)
    return True


def _uri(resource: Resource) -> str:
    if resource.uri is None:
        raise ValueError(f"{type(resource).__name__} without URI")
    return resource.uri
