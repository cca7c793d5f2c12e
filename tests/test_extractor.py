"""Tests for YAML loading and parameter extraction."""

import logging
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from yaml_variables.errors import ParseError, PathResolutionError
from tests.examples.configs import DEPLOY_CONFIG

if TYPE_CHECKING:
    from yaml_variables.extractor import ConfigExtractor


@pytest.mark.parametrize('content, location, expected', (
    pytest.param(
        'a:\n'
        '  b:\n'
        '    x: "1"\n'
        '    y: "2"\n'
        '    z:\n'
        '      nested: true\n',
        'a.b',
        {'x': '1', 'y': '2'},
        id='nested mapping dropped',
    ),
    pytest.param(
        'vars:\n'
        '  FOO: foo\n'
        '  BAR: bar\n',
        'vars',
        {'FOO': 'foo', 'BAR': 'bar'},
        id='single segment',
    ),
    pytest.param(
        'a:\n'
        '  b:\n'
        '    c:\n'
        '      d:\n'
        '        KEY: value\n',
        'a.b.c.d',
        {'KEY': 'value'},
        id='deep location',
    ),
    pytest.param(
        '"1":\n'
        '  "2":\n'
        '    KEY: value\n',
        '1.2',
        {'KEY': 'value'},
        id='numeric segments as keys',
    ),
    pytest.param(
        'a:\n'
        '  b: {}\n',
        'a.b',
        {},
        id='empty mapping',
    ),
))
def test_extract_string_entries(content: str, location: str, expected: dict[str, str],
                                extractor: 'ConfigExtractor') -> None:
    """Extract string entries of the mapping at a location."""
    assert extractor.extract(content, location) == expected


def test_extract_skips_non_string_values(extractor: 'ConfigExtractor') -> None:
    """Skip every value that is not a plain string."""
    parameters = extractor.extract(DEPLOY_CONFIG, 'deploy.variables')

    assert parameters == {
        'APP_ENV': 'staging',
        'APP_REGION': 'eu-west-1',
    }


@pytest.mark.parametrize('value', (
    pytest.param('42', id='int'),
    pytest.param('4.2', id='float'),
    pytest.param('true', id='bool'),
    pytest.param('yes', id='yaml 1.1 bool'),
    pytest.param('null', id='null'),
    pytest.param('~', id='tilde null'),
    pytest.param('', id='empty null'),
    pytest.param('2024-01-31', id='date'),
    pytest.param('[a, b]', id='sequence'),
    pytest.param('{a: b}', id='mapping'),
))
def test_extract_skips_value_type(value: str, extractor: 'ConfigExtractor') -> None:
    """Skip a single non-string value next to a string value."""
    content = (
        'vars:\n'
        f'  SKIPPED: {value}\n'
        '  KEPT: kept\n'
    )

    assert extractor.extract(content, 'vars') == {'KEPT': 'kept'}


def test_extract_quoted_scalars_are_strings(extractor: 'ConfigExtractor') -> None:
    """Keep quoted scalars that would otherwise resolve to other types."""
    content = (
        'vars:\n'
        '  PORT: "8080"\n'
        '  ENABLED: "true"\n'
        '  EMPTY: ""\n'
    )

    assert extractor.extract(content, 'vars') == {
        'PORT': '8080',
        'ENABLED': 'true',
        'EMPTY': '',
    }


def test_extract_skips_non_string_keys(extractor: 'ConfigExtractor') -> None:
    """Skip entries whose key is not a string."""
    content = (
        'vars:\n'
        '  1: one\n'
        '  true: yes-key\n'
        '  NAME: name\n'
    )

    assert extractor.extract(content, 'vars') == {'NAME': 'name'}


def test_extract_preserves_document_order(extractor: 'ConfigExtractor') -> None:
    """Keep variables in the order they appear in the document."""
    content = (
        'vars:\n'
        '  ZETA: z\n'
        '  ALPHA: a\n'
        '  MID: m\n'
    )

    parameters = extractor.extract(content, 'vars')

    assert list(parameters) == ['ZETA', 'ALPHA', 'MID']


def test_extract_from_stream(extractor: 'ConfigExtractor') -> None:
    """Extract variables from a text stream."""
    parameters = extractor.extract(StringIO(DEPLOY_CONFIG), 'deploy.variables')

    assert parameters['APP_ENV'] == 'staging'


def test_extract_logs_skipped_entries(extractor: 'ConfigExtractor',
                                      caplog: pytest.LogCaptureFixture) -> None:
    """Log skipped entries at debug level."""
    caplog.set_level(logging.DEBUG, logger='yaml_variables.extractor')

    extractor.extract(DEPLOY_CONFIG, 'deploy.variables')

    assert "Skipping 'replicas' in [deploy.variables]: int is not a string" in caplog.text
    assert "Skipping 'hosts' in [deploy.variables]: sequence is not a string" in caplog.text
    assert "Skipping 'tls' in [deploy.variables]: mapping is not a string" in caplog.text


@pytest.mark.parametrize('content, location, segment', (
    pytest.param(
        'a:\n'
        '  b: {}\n',
        'missing.b',
        'missing',
        id='absent first segment',
    ),
    pytest.param(
        'a:\n'
        '  b: {}\n',
        'a.c',
        'c',
        id='absent last segment',
    ),
    pytest.param(
        'a:\n'
        '  b: value\n',
        'a.b.c',
        'b',
        id='scalar in the middle',
    ),
    pytest.param(
        'a:\n'
        '  b: value\n',
        'a.b',
        'b',
        id='scalar at the end',
    ),
    pytest.param(
        'a:\n'
        '  b:\n'
        '    - c: {}\n',
        'a.b.0.c',
        'b',
        id='sequences are not traversed',
    ),
    pytest.param(
        'a:\n'
        '  b: null\n',
        'a.b',
        'b',
        id='null value',
    ),
    pytest.param(
        'a:\n'
        '  b: {}\n',
        'A.b',
        'A',
        id='case sensitive',
    ),
    pytest.param(
        'a:\n'
        '  b: {}\n',
        'a..b',
        '',
        id='empty segment',
    ),
    pytest.param(
        'a:\n'
        '  b: {}\n',
        '',
        '',
        id='empty location',
    ),
    pytest.param(
        '"":\n'
        '  KEY: value\n',
        '',
        '',
        id='empty location with empty key',
    ),
    pytest.param(
        '- a\n'
        '- b\n',
        'a',
        'a',
        id='sequence root',
    ),
    pytest.param(
        'just a scalar\n',
        'a',
        'a',
        id='scalar root',
    ),
    pytest.param(
        '',
        'a',
        'a',
        id='empty document',
    ),
))
def test_unresolvable_location(content: str, location: str, segment: str,
                               extractor: 'ConfigExtractor') -> None:
    """Fail with an error naming the full location."""
    with pytest.raises(PathResolutionError) as error:
        extractor.extract(content, location)

    assert error.value.location == location
    assert error.value.segment == segment
    assert error.value.message == f'Unable to find a possible map in location [{location}]'


def test_unresolvable_location_reports_filename(extractor: 'ConfigExtractor') -> None:
    """Attach the source file name to location errors."""
    with pytest.raises(PathResolutionError, match=r'in "conf/all\.yml"'):
        extractor.extract('a: {}\n', 'a.c', filename='conf/all.yml')


@pytest.mark.parametrize('content', (
    pytest.param('a: [1, 2\n', id='unclosed flow sequence'),
    pytest.param('a:\n  b: 1\n c: 2\n', id='bad indentation'),
    pytest.param('a: "unterminated\n', id='unterminated quote'),
    pytest.param('a: !custom value\n', id='unknown tag'),
    pytest.param('a: 1\n---\nb: 2\n', id='multiple documents'),
))
def test_malformed_yaml(content: str, extractor: 'ConfigExtractor') -> None:
    """Fail with a parse error on malformed YAML."""
    with pytest.raises(ParseError, match=r'^Invalid YAML') as error:
        extractor.extract(content, 'a')

    assert error.value.context is not None
    assert error.value.context.get('line_num') is not None


def test_malformed_yaml_reports_filename(extractor: 'ConfigExtractor') -> None:
    """Attach the source file name to parse errors."""
    with pytest.raises(ParseError, match=r'in "conf/all\.yml", line \d+, column \d+') as error:
        extractor.extract('a: [1, 2\n', 'a', filename='conf/all.yml')

    assert error.value.context['filename'] == 'conf/all.yml'


def test_load_document(extractor: 'ConfigExtractor') -> None:
    """Load a full document without resolving a location."""
    document = extractor.load('a:\n  b: [1, "2"]\n')

    assert document == {'a': {'b': [1, '2']}}
