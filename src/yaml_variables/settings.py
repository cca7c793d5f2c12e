"""Runtime settings resolved from the environment.

Settings provide command-line defaults, so a CI job can configure the
step with `YAML_VARIABLES_*` variables instead of arguments.
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from yaml_variables.models import SettingsModel


class BuilderSettings(SettingsModel):
    """Defaults for the YAML variables build step."""

    model_config = SettingsConfigDict(
        env_prefix='YAML_VARIABLES_',
        frozen=True,
        extra='ignore',
    )

    file: str = Field(
        default='',
        title='YAML file',
        description='Default path of the YAML configuration file.',
    )

    location: str = Field(
        default='',
        title='Map location',
        description='Default dot-separated map location.',
    )

    verbose: bool = Field(
        default=False,
        title='Verbose logging',
    )
