"""YAML configuration loading and parameter extraction.

This module turns raw configuration text into a flat mapping of build
variables: the text is parsed with PyYAML, the configured map location
is resolved inside the parsed document, and the string entries found
there are returned.
"""

import logging
from typing import TYPE_CHECKING

from yaml import SafeLoader, load
from yaml.error import YAMLError

from yaml_variables.errors import ParseError
from yaml_variables.lookups import MapLookup
from yaml_variables.values import is_variable, kind_of, string_entries

if TYPE_CHECKING:
    from io import TextIOBase

if TYPE_CHECKING:
    from yaml import BaseLoader

if TYPE_CHECKING:
    from yaml_variables.values import Document, Parameters

logger = logging.getLogger(__name__)


class ConfigExtractor:
    """Extractor of build variables from YAML configuration text.

    The extractor holds no state besides the YAML loader class and can
    be shared between builds.
    """

    def __init__(self, loader: type['BaseLoader'] = SafeLoader) -> None:
        """Initialize the extractor.

        Args:
            loader: YAML loader class used to parse documents.
        """
        self.loader = loader

    def load(self, content: 'TextIOBase | str', *,
             filename: str | None = None) -> 'Document':
        """Parse a single YAML document.

        Args:
            content: YAML content as a string or file-like object.
            filename: Optional source name used in error messages.

        Returns:
            The parsed document. An empty stream yields `None`.

        Raises:
            ParseError: If the content is not a single well-formed
                YAML document.
        """
        try:
            return load(content, Loader=self.loader)  # noqa: S506

        except YAMLError as base:
            raise ParseError.from_yaml_error(base, filename=filename) from base

    def extract(self, content: 'TextIOBase | str', location: str, *,
                filename: str | None = None) -> 'Parameters':
        """Extract the string entries of the mapping at a location.

        Entries whose value is not a plain string (nested mappings,
        sequences, numbers, booleans, dates, nulls) or whose key is not
        a string are skipped.

        Args:
            content: YAML content as a string or file-like object.
            location: Dot-separated path to the mapping of variables.
            filename: Optional source name used in error messages.

        Returns:
            Extracted variables in document order.

        Raises:
            ParseError: If the content is not well-formed YAML.
            PathResolutionError: If the location does not lead to a mapping.
        """
        document = self.load(content, filename=filename)
        mapping = MapLookup(location).resolve(document, filename=filename)

        for key, value in mapping.items():
            if not is_variable(key, value):
                logger.debug('Skipping %r in [%s]: %s is not a string',
                             key, location, kind_of(value))

        return string_entries(mapping)
