"""
Result Reporting
================

Emits the findings of a ValidationResult through logging.
"""

import logging
from typing import Optional

from .results import Severity, ValidationResult

logger = logging.getLogger(__name__)

SEVERITY_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.CRITICAL: logging.CRITICAL,
}


class LoggingResultReporter:
    """Logs each finding at the level matching its severity."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def report(self, result: ValidationResult) -> None:
        for finding in result.findings:
            self.log.log(SEVERITY_LOG_LEVELS[finding.severity], "%s", finding)
