"""Escaping of values interpolated into SPARQL text."""

from __future__ import annotations

import re

_STRING_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        '"': '\\"',
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
    }
)
_INVALID_IRI_CHARS = re.compile(r'[\x00-\x20<>"{}|^`\\]')


class InvalidUriError(ValueError):
    """Raised when a value cannot be written as an IRI reference."""


def escape_string(value: str) -> str:
    return f'"{value.translate(_STRING_ESCAPES)}"'


def escape_uri(value: str) -> str:
    if not value or _INVALID_IRI_CHARS.search(value):
        raise InvalidUriError(f"Invalid URI: {value!r}")
    return f"<{value}>"


def escape_date(value: str) -> str:
    return f"{escape_string(value)}^^xsd:date"
