"""
Logging setup for the docvalidate command.

Progress lines and "The file ... is valid." go to stdout at INFO. Findings are
logged at a level derived from their severity, so warning, error and critical
findings land on stderr next to the CLI's own error lines, while info
findings stay on stdout. `--log-level debug` adds stage tracing with logger
names.
"""

import logging
import sys
from typing import Optional

from .settings import DEBUG_LOG_FORMAT, LOG_FORMAT


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
) -> None:
    """Route records below stderr_level to stdout and the rest to stderr.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.
    """

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if formatter is None:
        fmt = DEBUG_LOG_FORMAT if level <= logging.DEBUG else LOG_FORMAT
        formatter = logging.Formatter(fmt)

    if stderr_level < logging.DEBUG:
        stderr_level = logging.DEBUG

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_MaxLevelFilter(stderr_level - 1))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)


def parse_log_level(name: str) -> int:
    """Return the numeric level for a level name such as 'info'."""
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{name}'")
    return level
