"""Logging configuration for the command line."""

import logging.config

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s %(name)s:'
                      '%(levelname)s: %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'console': {
            'level': 'DEBUG',
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        'yaml_variables': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        # The build log already reports step failures.
        'yaml_variables.build': {
            'level': 'CRITICAL',
        },
    },
}


def configure_logging(verbose: bool = False) -> None:
    """Configure console logging for the package loggers.

    Args:
        verbose: Log everything down to DEBUG, including the
            build log mirror.
    """
    config = {
        **LOGGING,
        'loggers': {
            name: {**logger} for name, logger in LOGGING['loggers'].items()
        },
    }

    if verbose:
        config['loggers']['yaml_variables']['level'] = 'DEBUG'
        config['loggers']['yaml_variables.build']['level'] = 'DEBUG'

    logging.config.dictConfig(config)
