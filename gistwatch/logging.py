"""Root logger setup for a gistwatch run.

Level and format come from the ``logging`` config section (or LOGGING_LEVEL,
LOGGING_FORMAT); ``--verbose`` forces DEBUG. Run summaries and digests go to
stdout; log records go to stderr.
"""

import logging

from gistwatch.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str) -> int:
    """Unknown names fall back to INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


def setup_logging(config: LoggingConfig, verbose: bool = False) -> int:
    """Configure the root logger and return the effective level.

    urllib3 connection chatter is kept at WARNING unless running at DEBUG.
    """
    level = logging.DEBUG if verbose else _resolve_level(config.level)
    logging.basicConfig(level=level, format=config.format or DEFAULT_FORMAT, force=True)
    logging.getLogger("urllib3").setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
    return level
