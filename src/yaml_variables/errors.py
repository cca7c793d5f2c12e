"""Core exception hierarchy.

This module defines the error types raised while loading a YAML
configuration file, resolving a map location inside it, and preparing
the build environment, together with a formatter that renders them
with source locations and YAML snippets.
"""

from os import linesep
from typing import TYPE_CHECKING, TypedDict

from yaml.error import MarkedYAMLError

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from yaml.error import YAMLError

FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the source file where the error occurred.
    filename: str | None

    #: Line number in the source file.
    line_num: int | None
    #: Column number in the source file.
    column_num: int | None

    #: Configured map location being resolved.
    location: str | None
    #: Segment of the map location that failed to resolve.
    segment: str | None

    #: Underlying exception that triggered formatting.
    error: Exception | None


class ErrorFormatter:
    """Utility class for formatting configuration errors.

    This formatter is responsible for producing human-readable
    error messages with optional source location and YAML snippets.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        details = cls.get_location_string(context, indent=FORMAT_INDENT)
        details += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)
        if not details:
            return message

        return f'{message}{linesep}{details}'.rstrip()

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source and map location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename, line,
            column, and failing segment when available.
        """
        indent = cls._ensure_indent(indent)
        message = ''

        filename = context.get('filename')
        line_num = context.get('line_num')
        if filename or line_num is not None:
            message += f'{indent}in "{filename or FORMAT_FILENAME}"'
            if line_num is not None:
                message += f', line {line_num + 1}'
                if (column_num := context.get('column_num')) is not None:
                    message += f', column {column_num + 1}'
            message += linesep

        if (segment := context.get('segment')) is not None:
            message += f'{indent}at segment {segment!r}'
            if location := context.get('location'):
                message += f' of {location!r}'
            message += linesep

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Extract the source snippet of a YAML error.

        Args:
            context: Error context containing the underlying exception.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        error = context.get('error')
        if not isinstance(error, MarkedYAMLError) or not error.problem_mark:
            return ''

        snippet = error.problem_mark.get_snippet(indent=0) or ''

        return cls._make_indent(snippet, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Empty or whitespace-only lines are omitted.
        """
        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class YamlVariablesError(Exception, ErrorFormatter):
    """Base exception for all yaml-variables errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location values.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class ParseError(YamlVariablesError):
    """Error raised when the configuration text is not well-formed YAML."""

    @classmethod
    def from_yaml_error(cls, error: 'YAMLError', *,
                        filename: str | None = None) -> 'Self':
        """Create a parse error from a PyYAML failure.

        Positional information is taken from the problem mark when
        the parser reports one.

        Args:
            error: Exception raised by the YAML parser.
            filename: Optional name of the parsed file, used when
                the parser only saw an anonymous stream.

        Returns:
            ParseError representing the YAML parsing failure.
        """
        error_context = ErrorContext(filename=filename, error=error)

        message = 'Invalid YAML'
        if isinstance(error, MarkedYAMLError):
            if mark := error.problem_mark:
                if mark.name and not mark.name.startswith('<'):
                    error_context['filename'] = mark.name
                error_context['line_num'] = mark.line
                error_context['column_num'] = mark.column
            if error.problem:
                message += f'{linesep}{' ' * FORMAT_INDENT}{error.problem}'

        return cls(message, context=error_context)


class PathResolutionError(YamlVariablesError):
    """Error raised when a map location does not lead to a mapping.

    The message always names the full configured location, not just
    the failing segment; the segment is kept in the error context.
    """

    def __init__(self, location: str, *,
                 segment: str | None = None,
                 filename: str | None = None) -> None:
        """Initialize a path resolution error.

        Args:
            location: Full configured map location.
            segment: Segment at which the traversal stopped.
            filename: Optional name of the source file.
        """
        self.location = location
        self.segment = segment

        super().__init__(
            f'Unable to find a possible map in location [{location}]',
            context=ErrorContext(
                filename=filename,
                location=location,
                segment=segment,
            ),
        )


class FileAccessError(YamlVariablesError):
    """Error raised when the configuration file cannot be read."""

    @classmethod
    def from_os_error(cls, path: str, error: OSError | UnicodeDecodeError) -> 'Self':
        """Create a file access error from an operating system failure.

        Args:
            path: Path of the file that failed to open or read.
            error: Underlying operating system or decoding error.

        Returns:
            FileAccessError naming the path and the cause.
        """
        reason = getattr(error, 'strerror', None) or str(error)

        return cls(
            f'Unable to read {path!r}: {reason}',
            context=ErrorContext(filename=path, error=error),
        )


class EnvironmentUnavailableError(YamlVariablesError):
    """Error raised when the host cannot supply the build environment."""
