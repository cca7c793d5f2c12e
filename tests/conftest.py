"""Tests configurations and fixtures."""

from io import StringIO

import pytest

from yaml_variables.build import BuildListener, LocalBuild
from yaml_variables.extractor import ConfigExtractor


@pytest.fixture
def extractor() -> ConfigExtractor:
    """Provide an extractor with the default safe loader."""
    return ConfigExtractor()


@pytest.fixture
def log_stream() -> StringIO:
    """Provide an in-memory build log stream."""
    return StringIO()


@pytest.fixture
def listener(log_stream: StringIO) -> BuildListener:
    """Provide a build listener writing to an in-memory stream."""
    return BuildListener(log_stream)


@pytest.fixture
def build() -> LocalBuild:
    """Provide a local build isolated from the process environment.

    The base environment defines `WORKSPACE` as `/workspace`, and the
    build defines a single `STAGE` variable set to `staging`.
    """
    return LocalBuild(
        environ={'WORKSPACE': '/workspace'},
        variables={'STAGE': 'staging'},
    )
