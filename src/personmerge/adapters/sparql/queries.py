"""SPARQL text for every store operation.

Variable names in :func:`person_query` match ``PERSON_ROW_KEYS`` so result rows
can be handed to the domain unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .escape import escape_date, escape_string, escape_uri

if TYPE_CHECKING:
    from personmerge.domain.model import MasterRecord

PREFIXES = """\
PREFIX person: <http://www.w3.org/ns/person#>
PREFIX adms: <http://www.w3.org/ns/adms#>
PREFIX skos: <http://www.w3.org/2004/02/skos/core#>
PREFIX mu: <http://mu.semte.ch/vocabularies/core/>
PREFIX foaf: <http://xmlns.com/foaf/0.1/>
PREFIX persoon: <http://data.vlaanderen.be/ns/persoon#>
PREFIX owl: <http://www.w3.org/2002/07/owl#>
PREFIX xsd: <http://www.w3.org/2001/XMLSchema#>
"""


def duplicate_rrns_query() -> str:
    return f"""{PREFIXES}
SELECT DISTINCT ?rrn WHERE {{
  GRAPH ?g {{
    ?person a person:Person ;
      mu:uuid ?uuid ;
      adms:identifier ?identifier .
    ?identifier skos:notation ?rrn .
  }}
  GRAPH ?h {{
    ?identifier2 skos:notation ?rrn .
    ?person2 a person:Person ;
      mu:uuid ?uuid2 ;
      adms:identifier ?identifier2 .
  }}
  FILTER (?person != ?person2)
}}
"""


def candidates_query(rrn: str) -> str:
    notation = escape_string(rrn)
    return f"""{PREFIXES}
SELECT DISTINCT ?g ?person WHERE {{
  GRAPH ?g {{
    ?person a person:Person ;
      adms:identifier ?identifier .
    ?identifier skos:notation {notation} .
  }}
  GRAPH ?h {{
    ?identifier2 skos:notation {notation} .
    ?person2 a person:Person ;
      adms:identifier ?identifier2 .
  }}
  FILTER (?person != ?person2)
}}
"""


def person_query(graph: str, uri: str) -> str:
    g = escape_uri(graph)
    s = escape_uri(uri)
    return f"""{PREFIXES}
SELECT ?uuid ?identifier ?family_name ?name ?first_name ?birthdate ?birthdate_uuid ?date
       ?identifier_uuid ?gender ?notation
WHERE {{
  GRAPH {g} {{
    {s} a person:Person ;
      mu:uuid ?uuid ;
      adms:identifier ?identifier .

    OPTIONAL {{ {s} foaf:familyName ?family_name . }}
    OPTIONAL {{ {s} foaf:name ?name . }}
    OPTIONAL {{ {s} persoon:gebruikteVoornaam ?first_name . }}

    OPTIONAL {{
      {s} persoon:heeftGeboorte ?birthdate .
      OPTIONAL {{ ?birthdate mu:uuid ?birthdate_uuid . }}
      OPTIONAL {{ ?birthdate persoon:datum ?date . }}
    }}

    OPTIONAL {{ ?identifier mu:uuid ?identifier_uuid . }}
    OPTIONAL {{ ?identifier skos:notation ?notation . }}

    OPTIONAL {{ {s} persoon:geslacht ?gender . }}
  }}
}}
"""


def delete_person_update(graph: str, uri: str) -> str:
    g = escape_uri(graph)
    s = escape_uri(uri)
    return f"""{PREFIXES}
DELETE {{
  GRAPH {g} {{
    {s} a person:Person ;
      mu:uuid ?uuid ;
      adms:identifier ?identifier ;
      foaf:familyName ?family_name ;
      foaf:name ?name ;
      persoon:gebruikteVoornaam ?first_name ;
      persoon:heeftGeboorte ?birthdate ;
      persoon:geslacht ?gender .

    ?birthdate a persoon:Geboorte ;
      mu:uuid ?birthdate_uuid ;
      persoon:datum ?date .

    ?identifier a adms:Identifier ;
      mu:uuid ?identifier_uuid ;
      skos:notation ?notation .
  }}
}}
WHERE {{
  GRAPH {g} {{
    {s} a person:Person ;
      mu:uuid ?uuid ;
      adms:identifier ?identifier .

    OPTIONAL {{ {s} foaf:familyName ?family_name . }}
    OPTIONAL {{ {s} foaf:name ?name . }}
    OPTIONAL {{ {s} persoon:gebruikteVoornaam ?first_name . }}

    OPTIONAL {{
      {s} persoon:heeftGeboorte ?birthdate .
      OPTIONAL {{ ?birthdate a persoon:Geboorte . }}
      OPTIONAL {{ ?birthdate mu:uuid ?birthdate_uuid . }}
      OPTIONAL {{ ?birthdate persoon:datum ?date . }}
    }}

    OPTIONAL {{ ?identifier a adms:Identifier . }}
    OPTIONAL {{ ?identifier mu:uuid ?identifier_uuid . }}
    OPTIONAL {{ ?identifier skos:notation ?notation . }}

    OPTIONAL {{ {s} persoon:geslacht ?gender . }}
  }}
}}
"""


def master_statements(master: MasterRecord) -> list[str]:
    """Triples describing ``master``, one statement per line."""

    statements: list[str] = []
    person = master.person
    if person is not None and person.uri:
        s = escape_uri(person.uri)
        statements.append(f"{s} a person:Person .")
        if person.uuid:
            statements.append(f"{s} mu:uuid {escape_string(person.uuid)} .")
        if person.family_name:
            statements.append(f"{s} foaf:familyName {escape_string(person.family_name)} .")
        if person.name:
            statements.append(f"{s} foaf:name {escape_string(person.name)} .")
        if person.first_name:
            first_name = escape_string(person.first_name)
            statements.append(f"{s} persoon:gebruikteVoornaam {first_name} .")
        if person.identifier:
            statements.append(f"{s} adms:identifier {escape_uri(person.identifier)} .")
        if person.birthdate:
            statements.append(f"{s} persoon:heeftGeboorte {escape_uri(person.birthdate)} .")
        if person.gender:
            statements.append(f"{s} persoon:geslacht {escape_uri(person.gender)} .")

    identifier = master.identifier
    if identifier is not None and identifier.uri:
        s = escape_uri(identifier.uri)
        statements.append(f"{s} a adms:Identifier .")
        if identifier.uuid:
            statements.append(f"{s} mu:uuid {escape_string(identifier.uuid)} .")
        if identifier.notation:
            statements.append(f"{s} skos:notation {escape_string(identifier.notation)} .")

    birthdate = master.birthdate
    if birthdate is not None and birthdate.uri:
        s = escape_uri(birthdate.uri)
        statements.append(f"{s} a persoon:Geboorte .")
        if birthdate.uuid:
            statements.append(f"{s} mu:uuid {escape_string(birthdate.uuid)} .")
        if birthdate.date:
            statements.append(f"{s} persoon:datum {escape_date(birthdate.date)} .")

    return statements


def insert_master_update(graph: str, master: MasterRecord) -> str:
    body = "\n    ".join(master_statements(master))
    return f"""{PREFIXES}
INSERT DATA {{
  GRAPH {escape_uri(graph)} {{
    {body}
  }}
}}
"""


def replace_uri_update(graph: str, old: str, new: str) -> str:
    """Two operations in one request: ``old`` as subject, then as object.

    Equivalence links leaving ``old`` stay in place so the rewrite can be repeated.
    """

    g = escape_uri(graph)
    o = escape_uri(old)
    n = escape_uri(new)
    return f"""{PREFIXES}
DELETE {{
  GRAPH {g} {{ {o} ?p ?o . }}
}}
INSERT {{
  GRAPH {g} {{ {n} ?p ?o . }}
}}
WHERE {{
  GRAPH {g} {{ {o} ?p ?o . }}
  FILTER (?p != owl:sameAs)
}} ;
DELETE {{
  GRAPH {g} {{ ?s ?p {o} . }}
}}
INSERT {{
  GRAPH {g} {{ ?s ?p {n} . }}
}}
WHERE {{
  GRAPH {g} {{ ?s ?p {o} . }}
}}
"""


def same_as_update(graph: str, slave: str, master: str) -> str:
    return f"""{PREFIXES}
INSERT DATA {{
  GRAPH {escape_uri(graph)} {{
    {escape_uri(slave)} owl:sameAs {escape_uri(master)} .
  }}
}}
"""
