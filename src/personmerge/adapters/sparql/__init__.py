"""Public interface for the SPARQL adapter."""

from __future__ import annotations

from .client import SparqlClient, SparqlError
from .escape import InvalidUriError, escape_string, escape_uri
from .schema import SparqlSelectResponse, SparqlTerm
from .store import SparqlPersonStore

__all__ = [
    "InvalidUriError",
    "SparqlClient",
    "SparqlError",
    "SparqlPersonStore",
    "SparqlSelectResponse",
    "SparqlTerm",
    "escape_string",
    "escape_uri",
]
