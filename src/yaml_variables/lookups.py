"""Map location resolution.

This module provides the resolver that walks a parsed configuration
document along a dot-separated map location. Unlike a tolerant variable
lookup, every step must land on a mapping: a missing key, an empty
segment or a non-mapping node stops resolution with an error naming
the whole location.
"""

from typing import TYPE_CHECKING

from yaml_variables.errors import PathResolutionError
from yaml_variables.values import is_mapping

if TYPE_CHECKING:
    from collections.abc import Mapping

if TYPE_CHECKING:
    from yaml_variables.values import Document


class MapLookup:
    """Resolver for dot-separated map locations.

    Segments are matched exactly and case-sensitively against mapping
    keys. Numeric segments are plain keys; sequences are never indexed.
    """

    def __init__(self, location: str) -> None:
        """Initialize the resolver with a map location.

        Args:
            location: Dot-separated path to a nested mapping. An empty
                string is a single empty segment.
        """
        self.location = location
        self.path = tuple(location.split('.'))

    def __call__(self, document: 'Document') -> 'Mapping[str, Document]':
        """Resolve the map location against a document."""
        return self.resolve(document)

    def resolve(self, document: 'Document', *,
                filename: str | None = None) -> 'Mapping[str, Document]':
        """Resolve the map location against a document.

        Args:
            document: Parsed configuration document.
            filename: Optional source file name for error reporting.

        Returns:
            The mapping found at the end of the location.

        Raises:
            PathResolutionError: If the root is not a mapping, or any
                segment is empty, absent, or does not hold a mapping.
        """
        if not is_mapping(document):
            raise PathResolutionError(
                self.location,
                segment=self.path[0],
                filename=filename,
            )

        current = document
        for segment in self.path:
            value = current.get(segment) if segment else None
            if not is_mapping(value):
                raise PathResolutionError(
                    self.location,
                    segment=segment,
                    filename=filename,
                )
            current = value

        return current
