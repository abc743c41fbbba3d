"""
Services Package
================

Application layer for the document validation toolkit.

Services:
- ValidationService: Pipeline wiring and outcome helpers
- ReportService: Markdown report rendering
"""

from .validation_service import ValidationService
from .report_service import ReportService

__all__ = [
    'ValidationService',
    'ReportService',
]
