"""Core type definitions for parsed configuration documents.

This module defines the value types produced by the YAML loader and the
helpers used to classify them. A parsed document is a recursive structure
of mappings, sequences and scalars; only mappings are traversed and only
plain strings are ever exported as variables.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime

#: Scalars are the atomic values the safe YAML loader can produce.
type Scalar = date | datetime | str | bytes | int | float | bool

#: A parsed configuration document (or any node inside it).
type Document = Scalar | Sequence['Document'] | Mapping[str, 'Document'] | None

#: Flat variables extracted from a document mapping.
type Parameters = dict[str, str]

MAPPINGS = (dict,)
SCALARS = (date, datetime, str, bytes, int, float, bool)
SEQUENCES = (list, tuple, set)


def is_mapping(value: Document) -> bool:
    """Check whether a document node is a mapping."""
    return isinstance(value, MAPPINGS)


def kind_of(value: Document) -> str:
    """Name the kind of a document node for diagnostics."""
    if value is None:
        return 'null'

    if isinstance(value, MAPPINGS):
        return 'mapping'

    if isinstance(value, SEQUENCES):
        return 'sequence'

    if isinstance(value, SCALARS):
        return type(value).__name__

    return 'unknown'


def is_variable(key: object, value: object) -> bool:
    """Check whether a mapping entry can be exported as a variable.

    Only entries with a string key and a plain string value qualify.
    Nested mappings, sequences, numbers, booleans, dates and nulls
    are not variables.

    Args:
        key: Mapping key as produced by the loader.
        value: Mapping value as produced by the loader.

    Returns:
        True if the entry is a string-to-string pair.
    """
    return isinstance(key, str) and isinstance(value, str)


def string_entries(mapping: Mapping[str, Document]) -> Parameters:
    """Collect the string-to-string entries of a mapping.

    Entries keep the order of the source mapping. Any other entry is
    skipped rather than converted.

    Args:
        mapping: Document mapping to filter.

    Returns:
        A new dictionary holding only the string entries.
    """
    return {
        key: value
        for key, value in mapping.items()
        if is_variable(key, value)
    }
