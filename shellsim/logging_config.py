"""
Logging configuration for shellsim.
"""

import logging
import logging.config


def setup_logging(default_level: int = logging.WARNING) -> None:
    """Configure console logging for the command line entry point.

    Library modules only create loggers with ``logging.getLogger(__name__)``;
    this function is called once by ``main()`` and nowhere else.

    Example:
        ```python
        from shellsim.logging_config import setup_logging

        setup_logging(logging.DEBUG)
        ```

    Args:
        default_level: Level for the root logger. ``main()`` passes
            ``logging.DEBUG`` when run with ``--verbose``.
    """
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "[%(asctime)s] - [%(levelname)s] - %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
                "level": default_level,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": default_level,
        },
    }

    logging.config.dictConfig(logging_config)
