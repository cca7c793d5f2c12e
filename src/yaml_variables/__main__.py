"""Command line for yaml-variables.

Commands default their YAML file and map location to the
`YAML_VARIABLES_FILE` and `YAML_VARIABLES_LOCATION` variables.
"""

from json import dumps
from pathlib import Path
from shlex import quote
from subprocess import run
from typing import TYPE_CHECKING

from click import Choice, ClickException, argument, echo, group, option, pass_context
from click import Path as PathParam
from yaml import safe_dump

from yaml_variables.build import BuildListener, LocalBuild
from yaml_variables.builder import YamlVariablesBuilder
from yaml_variables.environment import ExtendVariablesAction
from yaml_variables.errors import FileAccessError, YamlVariablesError
from yaml_variables.extractor import ConfigExtractor
from yaml_variables.log import configure_logging
from yaml_variables.settings import BuilderSettings
from yaml_variables.validation import YamlVariablesDescriptor

if TYPE_CHECKING:
    from click import Context

    from yaml_variables.values import Parameters

InputFilepath = PathParam(
    dir_okay=False,
    path_type=Path,
)


def _format_parameters(parameters: 'Parameters', output_format: str) -> str:
    """Render extracted variables.

    Args:
        parameters: Variables to render.
        output_format: One of `env`, `json`, or `yaml`.

    Returns:
        Rendered variables without a trailing newline.
    """
    if output_format == 'json':
        return dumps(parameters, ensure_ascii=False, indent=4)

    if output_format == 'yaml':
        return safe_dump(parameters, allow_unicode=True, sort_keys=False).rstrip()

    return '\n'.join(
        f'{key}={quote(value)}'
        for key, value in parameters.items()
    )


def _resolve_step(ctx: 'Context', yaml_file: str | None,
                  map_location: str | None) -> tuple[str, str]:
    """Complete step configuration with settings defaults."""
    settings: BuilderSettings = ctx.obj
    return (
        settings.file if yaml_file is None else yaml_file,
        settings.location if map_location is None else map_location,
    )


@group(help='Extend build variables from YAML configuration files.')
@option('-v', '--verbose', is_flag=True, help='Enable debug logging.')
@pass_context
def cli(ctx: 'Context', verbose: bool) -> None:
    """Root CLI group for yaml-variables tools."""
    settings = BuilderSettings()
    if verbose:
        settings = settings.model_copy(update={'verbose': verbose})

    configure_logging(settings.verbose)
    ctx.obj = settings


@cli.command(
    name='extract',
    help='Print the string entries of the mapping at LOCATION in FILE.',
)
@option(
    '-f', '--format', 'output_format',
    type=Choice(['env', 'json', 'yaml']),
    default='env',
    show_default=True,
    help='Output format.',
)
@argument('file', type=InputFilepath)
@argument('location')
def extract(file: Path, location: str, output_format: str) -> None:
    """Extract variables from a YAML file."""
    try:
        try:
            text = file.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as base:
            raise FileAccessError.from_os_error(str(file), base) from base

        parameters = ConfigExtractor().extract(text, location, filename=str(file))

    except YamlVariablesError as error:
        raise ClickException(str(error)) from error

    if output := _format_parameters(parameters, output_format):
        echo(output)


@cli.command(
    name='check',
    help='Validate the build step configuration.',
)
@option('-y', '--yaml-file', help='Path of the YAML file.')
@option('-m', '--map-location', help='Dot-separated map location.')
@pass_context
def check(ctx: 'Context', yaml_file: str | None, map_location: str | None) -> None:
    """Print validation outcomes of the configuration fields."""
    yaml_file, map_location = _resolve_step(ctx, yaml_file, map_location)
    outcomes = YamlVariablesDescriptor().check(yaml_file, map_location)

    for field, outcome in outcomes.items():
        echo(f'{field}: {outcome}')

    if any(outcome.kind == 'error' for outcome in outcomes.values()):
        ctx.exit(1)


@cli.command(
    name='run',
    help=(
        'Perform the build step, then run COMMAND with the extended '
        'environment. Without COMMAND, print the contributed variables.'
    ),
    context_settings={'ignore_unknown_options': True},
)
@option('-y', '--yaml-file', help='Path of the YAML file.')
@option('-m', '--map-location', help='Dot-separated map location.')
@argument('command', nargs=-1, type=str)
@pass_context
def run_step(ctx: 'Context', yaml_file: str | None, map_location: str | None,
             command: tuple[str, ...]) -> None:
    """Perform the build step in a local build."""
    yaml_file, map_location = _resolve_step(ctx, yaml_file, map_location)

    step = YamlVariablesBuilder(yaml_file=yaml_file, map_location=map_location)
    build = LocalBuild()
    listener = BuildListener()

    try:
        succeeded = build.run([step], listener)
    except YamlVariablesError as error:
        raise ClickException(str(error)) from error

    if not succeeded:
        ctx.exit(1)

    if not command:
        for action in build.get_actions(ExtendVariablesAction):
            echo(_format_parameters(dict(action.parameters or {}), 'env'))
        return

    env = build.get_environment(listener)
    try:
        process = run(command, env=env, check=False)  # noqa: S603
    except OSError as error:
        raise ClickException(f'Unable to run {command[0]!r}: {error}') from error

    ctx.exit(process.returncode)


if __name__ == '__main__':
    cli()
