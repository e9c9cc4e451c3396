"""Logging from config and env.

Levels (inclusive):
- ERROR: failed refreshes only
- WARNING: rate limits, missing config, and ERROR
- INFO: refresh progress, WARNING, and ERROR
- DEBUG: per-item enrichment and all levels above

Configure via config.yaml (logging.level, logging.format) or env (LOGGING_LEVEL, LOGGING_FORMAT).
"""

import logging

from ghdash.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are noisy at DEBUG (one line per request)
QUIET_LOGGERS = ("httpx", "httpcore")


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class GhDashLogging:
    """Configures root logger from LoggingConfig (YAML + env LOGGING_*)."""

    def __init__(self, config: LoggingConfig) -> None:
        """Store logging config (level and format)."""
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    @property
    def level(self) -> int:
        return self._level

    def setup(self) -> None:
        """Apply level and format to the root logger."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            force=True,
        )
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(max(self._level, logging.WARNING))
