"""
Output Formatter
================

Handles console output formatting.
Follows SRP: Only handles output formatting.
"""

import sys

from core.results import PipelineOutcome, Verdict


class OutputFormatter:
    """
    Formatter for console output.

    Follows SRP: Only handles output formatting.
    """

    def print_outcome(self, outcome: PipelineOutcome, summary: str) -> None:
        """
        Print the final verdict of a failed run.

        Valid runs print nothing here; the pipeline already logs success.

        Args:
            outcome: Pipeline outcome
            summary: One-line error summary from ValidationService
        """
        verdict = outcome.verdict
        if verdict is Verdict.VALID:
            return
        if verdict.is_error:
            self.print_error(summary)
        else:
            self.print_failure(f"{outcome.target}: {summary}")

    def print_error(self, message: str) -> None:
        """
        Print error message.

        Args:
            message: Error message
        """
        print(f"ERROR: {message}", file=sys.stderr)

    def print_warning(self, message: str) -> None:
        print(f"WARNING: {message}", file=sys.stderr)

    def print_failure(self, message: str) -> None:
        print(f"✗ {message}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        print(f"ℹ {message}")
