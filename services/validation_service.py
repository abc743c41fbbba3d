"""
Validation Service
==================

Composition root for a validation run.
Builds the pipeline from settings and exposes outcome helpers.
"""

from pathlib import Path
from typing import Optional

from core.results import PipelineOutcome, Verdict
from core.settings import ValidatorSettings
from validators.validation_pipeline import ValidationPipeline


class ValidationService:
    """
    Service responsible for running one validation per target.

    Follows SRP: Only wires collaborators and runs the pipeline.
    """

    def __init__(
        self,
        settings: Optional[ValidatorSettings] = None,
        pipeline: Optional[ValidationPipeline] = None,
        quiet: bool = False,
    ):
        """
        Initialize validation service.

        Args:
            settings: Resolved settings (default: from environment)
            pipeline: Validation pipeline (dependency injection)
            quiet: Suppress the success message
        """
        self.settings = settings or ValidatorSettings.from_environment()
        self.pipeline = pipeline or ValidationPipeline(self.settings, quiet=quiet)

    def validate(self, target: str, hint: Optional[str] = None) -> PipelineOutcome:
        """
        Validate a document.

        Args:
            target: Path to the document
            hint: Optional format name

        Returns:
            PipelineOutcome for the run
        """
        return self.pipeline.run(Path(target), hint)

    def is_valid(self, outcome: PipelineOutcome) -> bool:
        return outcome.verdict is Verdict.VALID

    def get_error_summary(self, outcome: PipelineOutcome) -> str:
        """
        Get human-readable error summary.

        Args:
            outcome: Result from validate()

        Returns:
            Error summary string
        """
        if self.is_valid(outcome):
            return "No errors"

        if outcome.verdict.is_error:
            return outcome.message or outcome.verdict.name.replace("_", " ").capitalize()

        stage = "Schema" if outcome.verdict is Verdict.SCHEMA_INVALID else "Constraint"
        failing = outcome.result.failing_findings() if outcome.result else []
        return f"{stage}: {len(failing)} error(s)"
