"""Build environment container and environment contributions.

This module defines the mutable environment passed between build steps,
the `$NAME` / `${NAME}` macro substitution applied to configuration
strings, and the contract for actions that extend the environment of a
build once registered with it.
"""

import abc
from re import ASCII
from re import compile as regexp
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from re import Match

if TYPE_CHECKING:
    from yaml_variables.build import Build

#: Macro token: `$NAME`, `${NAME}` (braced names may contain dots),
#: or `$$` for a literal dollar sign.
MACRO_PATTERN = regexp(
    r'\$(?:(?P<name>[A-Za-z0-9_]+)|\{(?P<braced>[A-Za-z0-9_.]+)\}|(?P<escaped>\$))',
    flags=ASCII,
)


def replace_macro(value: str | None,
                  resolver: 'Callable[[str], str | None]') -> str | None:
    """Substitute macro tokens in a string.

    Every `$NAME` or `${NAME}` token is replaced with the value the
    resolver returns for `NAME`. Tokens the resolver cannot resolve
    are left untouched. `$$` collapses to a single `$`.

    Args:
        value: String to expand.
        resolver: Callable returning the value of a name, or `None`.

    Returns:
        The expanded string, or `None` if `value` is `None`.
    """
    if value is None:
        return None

    def substitute(match: 'Match[str]') -> str:
        if match['escaped']:
            return '$'

        replacement = resolver(match['name'] or match['braced'])
        if replacement is None:
            return match[0]

        return replacement

    return MACRO_PATTERN.sub(substitute, value)


class EnvVars(dict[str, str]):
    """Environment variables visible to the steps of a build.

    Keys and values are plain strings. Later writes overwrite earlier
    ones.
    """

    def expand(self, value: str | None) -> str | None:
        """Expand environment variable references in a string.

        Args:
            value: String that may reference variables of this
                environment as `$NAME` or `${NAME}`.

        Returns:
            The expanded string, or `None` if `value` is `None`.
        """
        return replace_macro(value, self.get)

    def override_all(self, values: 'Mapping[str, str]') -> None:
        """Write all variables, skipping entries with a null key or value."""
        for key, value in values.items():
            if key is not None and value is not None:
                self[key] = value


class EnvironmentContributingAction(abc.ABC):
    """Action that contributes variables to a build environment.

    Actions are attached to a build and applied by the build every time
    it computes the environment for a subsequent step.
    """

    @property
    def display_name(self) -> str:
        """Human-readable name of the action."""
        return self.__class__.__name__

    @property
    def icon_file_name(self) -> str | None:
        """Icon shown for the action; `None` hides the action."""
        return None

    @property
    def url_name(self) -> str | None:
        """URL fragment of the action page; `None` for no page."""
        return None

    @abc.abstractmethod
    def apply(self, env: EnvVars | None, build: 'Build | None' = None) -> None:
        """Contribute variables to an environment.

        Args:
            env: Environment to update in place.
            build: Build owning the environment, if any.
        """


class ExtendVariablesAction(EnvironmentContributingAction):
    """Action extending a build environment with extracted variables.

    The variables are copied on construction and exposed read-only,
    so applying the action any number of times gives the same result.
    """

    def __init__(self, parameters: 'Mapping[str, str] | None' = None) -> None:
        """Initialize the action.

        Args:
            parameters: Variables to contribute, or `None` for none.
        """
        self.parameters: 'Mapping[str, str] | None' = None
        if parameters is not None:
            self.parameters = MappingProxyType(dict(parameters))

    @property
    def display_name(self) -> str:
        """Human-readable name of the action."""
        return 'ExtendedYamlParameterAction'

    def apply(self, env: EnvVars | None, build: 'Build | None' = None) -> None:  # noqa: ARG002
        """Write the extracted variables into an environment.

        Nothing happens if there are no variables or no environment.
        Entries with a null key or value are skipped.
        """
        if env is None or self.parameters is None:
            return

        env.override_all(self.parameters)

    def __repr__(self) -> str:
        """String representation."""
        keys = sorted(self.parameters or ())
        return f'{self.__class__.__name__}({keys!r})'
