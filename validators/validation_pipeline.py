"""
validation_pipeline.py

Orchestrates document validation: format resolution → schema → constraints.

Stages run in order and the first failing stage decides the verdict:
1. Format resolution - explicit hint, or content-based detection
2. Schema validation - XSD for XML, JSON Schema for JSON and YAML
3. Constraint validation - Schematron rules, only if the schema check passed

Every run ends in exactly one Verdict:
- DONE with VALID, SCHEMA_INVALID or CONSTRAINT_INVALID
- ABORTED with CONFIGURATION_ERROR or PROCESSING_ERROR
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional

from lxml import etree

from core.exceptions import ConfigurationError, ProcessingError
from core.format_detector import FormatDetector
from core.formats import Format, resolve_format
from core.reporting import LoggingResultReporter
from core.results import PipelineOutcome, ValidationResult, Verdict
from core.settings import ValidatorSettings
from .constraint_validator import ConstraintValidator
from .schema_strategies import SCHEMA_STRATEGIES, strategy_for

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    START = "start"
    FORMAT_RESOLVED = "format-resolved"
    SCHEMA_CHECKED = "schema-checked"
    CONSTRAINT_CHECKED = "constraint-checked"
    DONE = "done"
    ABORTED = "aborted"


def check_target(target: Path) -> None:
    """
    Verify that target exists and can be read.

    Raises:
        ConfigurationError: naming the offending path
    """
    if not target.exists():
        raise ConfigurationError(f"The provided target file '{target}' does not exist.")
    if not target.is_file():
        raise ConfigurationError(f"The provided target file '{target}' is not a file.")
    if not os.access(target, os.R_OK):
        raise ConfigurationError(f"The provided target file '{target}' is not readable.")


class ConstraintValidationStage:
    """Runs the constraint validator and re-classifies I/O and lxml failures."""

    def __init__(self, validator: ConstraintValidator):
        self.validator = validator

    def run(self, target: Path, document_format: Format) -> ValidationResult:
        try:
            return self.validator.validate(target, document_format)
        except (OSError, etree.LxmlError) as e:
            raise ProcessingError(f"Constraint validation of '{target}' failed: {e}") from e


class ValidationPipeline:
    """Orchestrates format resolution → schema → constraint validation."""

    def __init__(
        self,
        settings: Optional[ValidatorSettings] = None,
        detector: Optional[FormatDetector] = None,
        constraint_validator: Optional[ConstraintValidator] = None,
        reporter: Optional[LoggingResultReporter] = None,
        strategies=None,
        quiet: bool = False,
    ):
        """
        Initialize validation pipeline.

        Args:
            settings: Schema/rule locations and thresholds
            detector: Format detector used when no hint is given
            constraint_validator: Semantic constraint collaborator
            reporter: Receives the findings of a failing stage
            strategies: Format -> strategy class table (default: SCHEMA_STRATEGIES)
            quiet: Suppress the success message
        """
        self.settings = settings or ValidatorSettings()
        self.detector = detector or FormatDetector(self.settings.sniff_size)
        if constraint_validator is None:
            constraint_validator = ConstraintValidator(
                self.settings.schematron_file,
                fail_threshold=self.settings.fail_severity,
                detector=self.detector,
            )
        self.constraint_stage = ConstraintValidationStage(constraint_validator)
        self.reporter = reporter or LoggingResultReporter()
        self.strategies = SCHEMA_STRATEGIES if strategies is None else strategies
        self.quiet = quiet

    def run(self, target, hint: Optional[str] = None) -> PipelineOutcome:
        """
        Validate a single target.

        Args:
            target: Path to the document; never modified
            hint: Optional format name (xml, json or yaml, any case)

        Returns:
            PipelineOutcome carrying exactly one Verdict
        """
        target = Path(target)
        states: List[PipelineState] = [PipelineState.START]
        document_format = None

        def _finish(verdict: Verdict, result=None, message: str = "") -> PipelineOutcome:
            final = PipelineState.ABORTED if verdict.is_error else PipelineState.DONE
            states.append(final)
            return PipelineOutcome(
                target,
                verdict,
                document_format=document_format,
                result=result,
                message=message,
                states=[s.value for s in states],
            )

        # Start -> FormatResolved
        try:
            check_target(target)
            document_format = resolve_format(hint, target, self.detector)
        except ConfigurationError as e:
            logger.debug("Run aborted: %s", e)
            return _finish(Verdict.CONFIGURATION_ERROR, message=str(e))
        states.append(PipelineState.FORMAT_RESOLVED)
        logger.debug("Validating '%s' as %s", target, document_format.name)

        # FormatResolved -> SchemaChecked
        try:
            strategy = strategy_for(document_format, self.settings, self.strategies)
            schema_result = strategy.validate(target)
        except ConfigurationError as e:
            logger.debug("Run aborted: %s", e)
            return _finish(Verdict.CONFIGURATION_ERROR, message=str(e))
        except (ProcessingError, OSError) as e:
            logger.debug("Run aborted: %s", e)
            return _finish(Verdict.PROCESSING_ERROR, message=str(e))

        if not schema_result.is_passing:
            logger.info("The file '%s' has schema validation issue(s). The issues are:", target)
            self.reporter.report(schema_result)
            return _finish(Verdict.SCHEMA_INVALID, result=schema_result)
        states.append(PipelineState.SCHEMA_CHECKED)

        # SchemaChecked -> ConstraintChecked
        try:
            constraint_result = self.constraint_stage.run(target, document_format)
        except ConfigurationError as e:
            logger.debug("Run aborted: %s", e)
            return _finish(Verdict.CONFIGURATION_ERROR, message=str(e))
        except (ProcessingError, OSError) as e:
            logger.debug("Run aborted: %s", e)
            return _finish(Verdict.PROCESSING_ERROR, message=str(e))

        if not constraint_result.is_passing:
            logger.info("The file '%s' has constraint validation issue(s). The issues are:", target)
            self.reporter.report(constraint_result)
            return _finish(Verdict.CONSTRAINT_INVALID, result=constraint_result)
        states.append(PipelineState.CONSTRAINT_CHECKED)

        # ConstraintChecked -> Done
        if not self.quiet:
            logger.info("The file '%s' is valid.", target)
        return _finish(Verdict.VALID, result=constraint_result)
