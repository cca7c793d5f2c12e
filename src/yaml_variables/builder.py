"""Build step extending build variables from a YAML file.

The step resolves the configured file path against the current build
environment and build variables, extracts the string entries of the
mapping at the configured location, and attaches them to the build as
an environment contribution for the following steps.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import AliasChoices, Field

from yaml_variables.environment import ExtendVariablesAction, replace_macro
from yaml_variables.errors import EnvironmentUnavailableError, FileAccessError
from yaml_variables.extractor import ConfigExtractor
from yaml_variables.models import SchemaModel

if TYPE_CHECKING:
    from yaml_variables.build import Build, BuildListener
    from yaml_variables.values import Parameters

logger = logging.getLogger(__name__)

READ_ERROR_MESSAGE = 'Unable to read the YAML file.'
ENVIRONMENT_ERROR_MESSAGE = 'Unable to get the build parameters.'


class YamlVariablesBuilder(SchemaModel):
    """Build step extending build variables from a YAML file."""

    yaml_file: str = Field(
        validation_alias=AliasChoices('yaml_file', 'yamlFile'),
        title='YAML file',
        description=(
            'Path of the YAML configuration file. '
            'May reference environment variables and build variables '
            'as `$NAME` or `${NAME}`.'
        ),
        examples=[
            '${WORKSPACE}/group_vars/all.yml',
        ],
    )

    map_location: str = Field(
        validation_alias=AliasChoices('map_location', 'mapLocation'),
        title='Map location',
        description=(
            'Dot-separated path to the mapping whose string entries '
            'become build variables.'
        ),
        examples=[
            'deploy.variables',
        ],
    )

    def perform(self, build: 'Build', listener: 'BuildListener') -> bool:
        """Perform the build step.

        Read and environment failures are reported to the build log and
        turn into a failed step. Malformed YAML and unresolvable map
        locations are raised to the caller.

        Args:
            build: Build the step runs in.
            listener: Build log.

        Returns:
            True on success, False if the step failed.

        Raises:
            ParseError: If the file is not well-formed YAML.
            PathResolutionError: If the map location does not lead
                to a mapping.
        """
        try:
            env = build.get_environment(listener)

        except EnvironmentUnavailableError as error:
            listener.error(ENVIRONMENT_ERROR_MESSAGE, error)
            return False

        path = env.expand(self.yaml_file)
        path = replace_macro(path, build.build_variable_resolver)

        try:
            parameters = self.read_parameters(path)

        except FileAccessError as error:
            listener.error(READ_ERROR_MESSAGE, error)
            return False

        if parameters:
            build.add_action(ExtendVariablesAction(parameters))
            logger.debug('Contributed %d variables from %s', len(parameters), path)

        return True

    def read_parameters(self, path: str) -> 'Parameters':
        """Read the YAML file and extract its variables.

        Args:
            path: Expanded path of the YAML file.

        Returns:
            Extracted variables in document order.

        Raises:
            FileAccessError: If the file cannot be opened or read.
        """
        try:
            with Path(path).open('rt', encoding='utf-8') as content:
                text = content.read()

        except (OSError, UnicodeDecodeError) as base:
            raise FileAccessError.from_os_error(path, base) from base

        return ConfigExtractor().extract(text, self.map_location, filename=path)
