"""Validation of build step configuration fields.

Validation results are advisory: an error explains what is wrong with a
field value but never prevents the step from being configured.
"""

from typing import Literal

from pydantic import Field

from yaml_variables.models import SchemaModel

#: Values shorter than this are reported as suspicious.
MIN_LENGTH = 4


class FormValidation(SchemaModel):
    """Outcome of validating a single configuration field."""

    kind: Literal['ok', 'warning', 'error'] = Field(
        default='ok',
        title='Outcome',
    )

    message: str | None = Field(
        default=None,
        title='Message',
        description='Message shown next to the field.',
    )

    @classmethod
    def ok(cls) -> 'FormValidation':
        """Create a successful outcome."""
        return cls()

    @classmethod
    def warning(cls, message: str) -> 'FormValidation':
        """Create a warning outcome."""
        return cls(kind='warning', message=message)

    @classmethod
    def error(cls, message: str) -> 'FormValidation':
        """Create an error outcome."""
        return cls(kind='error', message=message)

    def __str__(self) -> str:
        """String representation."""
        if self.message is None:
            return self.kind.upper()

        return f'{self.kind.upper()}: {self.message}'


def check_yaml_file(value: str) -> FormValidation:
    """Validate the YAML file field."""
    if not value:
        return FormValidation.error('Please set a YAML file')

    if len(value) < MIN_LENGTH:
        return FormValidation.warning("Isn't the file too short?")

    return FormValidation.ok()


def check_map_location(value: str) -> FormValidation:
    """Validate the map location field."""
    if not value:
        return FormValidation.error('Please set the location where to find the parameters.')

    if len(value) < MIN_LENGTH:
        return FormValidation.warning("Isn't the map location too short?")

    return FormValidation.ok()


class YamlVariablesDescriptor:
    """Descriptor of the YAML variables build step.

    Describes the step to a host: its display name, the projects it
    applies to, and the validation of its configuration fields.
    """

    display_name = 'Extend build parameters from YAML file.'

    @staticmethod
    def is_applicable(project_type: type | None = None) -> bool:  # noqa: ARG004
        """Check whether the step can be added to a project type."""
        return True

    check_yaml_file = staticmethod(check_yaml_file)
    check_map_location = staticmethod(check_map_location)

    def check(self, yaml_file: str, map_location: str) -> dict[str, FormValidation]:
        """Validate both configuration fields.

        Returns:
            Validation outcomes keyed by field name.
        """
        return {
            'yaml_file': self.check_yaml_file(yaml_file),
            'map_location': self.check_map_location(map_location),
        }
