"""Host build interfaces and an in-process build.

A build step runs inside a build owned by some host orchestrator. This
module defines the small surface a step relies on (the build log, the
build environment, the build variables, and the list of attached
actions) and provides `LocalBuild`, a host that runs steps in the
current process.
"""

import abc
import logging
import os
import sys
from typing import TYPE_CHECKING

from yaml_variables.environment import EnvironmentContributingAction, EnvVars

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from typing import TextIO

if TYPE_CHECKING:
    from yaml_variables.builder import YamlVariablesBuilder

logger = logging.getLogger(__name__)


class BuildListener:
    """Build log receiving messages from build steps.

    Each message is written as a line to the log stream and mirrored
    to a `logging` logger.
    """

    def __init__(self, stream: 'TextIO | None' = None,
                 log: logging.Logger | None = None) -> None:
        """Initialize the listener.

        Args:
            stream: Text stream of the build log, standard error by default.
            log: Logger mirroring the build log.
        """
        self.stream = stream if stream is not None else sys.stderr
        self.log = log or logger

    def info(self, message: str) -> None:
        """Write an informational message to the build log."""
        self.log.info(message)
        self._write(message)

    def error(self, message: str, error: BaseException | None = None) -> None:
        """Write an error and its cause to the build log.

        Args:
            message: Human-readable error description.
            error: Optional underlying exception.
        """
        self.log.error(message, exc_info=error)
        self._write(f'ERROR: {message}')
        if error is not None:
            self._write(f'{error.__class__.__name__}: {error}')

    def _write(self, line: str) -> None:
        self.stream.write(f'{line}\n')
        self.stream.flush()


class Build(abc.ABC):
    """Build hosting a sequence of build steps."""

    def __init__(self) -> None:
        """Initialize an empty list of attached actions."""
        self.actions: list[object] = []

    @abc.abstractmethod
    def get_environment(self, listener: BuildListener) -> EnvVars:
        """Compute the environment visible to the next build step.

        Args:
            listener: Build log for diagnostics.

        Returns:
            A fresh environment container owned by the caller.

        Raises:
            EnvironmentUnavailableError: If the environment cannot
                be computed.
        """

    @property
    @abc.abstractmethod
    def build_variable_resolver(self) -> 'Callable[[str], str | None]':
        """Resolver of build variables used for macro expansion."""

    def add_action(self, action: object) -> None:
        """Attach an action to the build."""
        self.actions.append(action)

    def get_actions[T](self, kind: type[T]) -> list[T]:
        """List attached actions of a given type."""
        return [action for action in self.actions if isinstance(action, kind)]


class LocalBuild(Build):
    """Build running steps in the current process.

    The environment of each step is computed from a base environment,
    the build variables, and every environment-contributing action
    attached so far, applied in that order.
    """

    def __init__(self, environ: 'Mapping[str, str] | None' = None,
                 variables: 'Mapping[str, str] | None' = None) -> None:
        """Initialize a local build.

        Args:
            environ: Base environment, a snapshot of `os.environ` by default.
            variables: Build variables, also used for macro expansion.
        """
        super().__init__()

        self.environ = dict(os.environ if environ is None else environ)
        self.variables = dict(variables or {})

    def get_environment(self, listener: BuildListener) -> EnvVars:
        """Compute the environment visible to the next build step."""
        env = EnvVars(self.environ)
        env.override_all(self.variables)

        for action in self.get_actions(EnvironmentContributingAction):
            action.apply(env, self)

        return env

    @property
    def build_variable_resolver(self) -> 'Callable[[str], str | None]':
        """Resolver of build variables used for macro expansion."""
        return self.variables.get

    def run(self, steps: 'Iterable[YamlVariablesBuilder]',
            listener: BuildListener) -> bool:
        """Perform build steps in order.

        Execution stops at the first step reporting failure.

        Args:
            steps: Build steps to perform.
            listener: Build log passed to every step.

        Returns:
            True if every step succeeded.
        """
        for position, step in enumerate(steps, start=1):
            if not step.perform(self, listener):
                logger.debug('Build step %d failed', position)
                return False

        return True
