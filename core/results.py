"""
Validation Results
==================

Data model shared by every validation stage:

- Severity: ordered severity levels for findings
- SourceLocation: where in a document a finding applies
- Finding: one diagnostic entry
- ValidationResult: the findings of one stage
- Verdict: the terminal outcome category of a run
- PipelineOutcome: what a pipeline run hands back to its caller
"""

from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional


class Severity(Enum):
    """Finding severity, ordered from least to most severe."""

    INFO = 10
    WARNING = 20
    ERROR = 30
    CRITICAL = 40

    @classmethod
    def lookup(cls, name: str) -> "Severity":
        """Return the severity for a case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(s.name.lower() for s in cls)
            raise ValueError(f"Unknown severity '{name}'. Expected one of: {valid}")

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value >= other.value


class SourceLocation:
    """Position of a finding inside a document."""

    def __init__(
        self,
        uri: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
        path: str = "",
    ):
        self.uri = uri
        self.line = line  # 1-based
        self.column = column  # 1-based
        self.path = path  # XPath for XML, JSON pointer for JSON/YAML

    def __eq__(self, other):
        if not isinstance(other, SourceLocation):
            return NotImplemented
        return (self.uri, self.line, self.column, self.path) == (
            other.uri,
            other.line,
            other.column,
            other.path,
        )

    def __hash__(self):
        return hash((self.uri, self.line, self.column, self.path))

    def __str__(self):
        text = self.uri or "<unknown>"
        if self.line is not None:
            text += f":{self.line}"
            if self.column is not None:
                text += f":{self.column}"
        if self.path:
            text += f" at {self.path}"
        return text

    def __repr__(self):
        return f"SourceLocation({self})"


class Finding:
    """A single diagnostic produced by a validation stage."""

    def __init__(
        self,
        severity: Severity,
        message: str,
        location: Optional[SourceLocation] = None,
        source: str = "",
    ):
        self.severity = severity
        self.message = message
        self.location = location
        self.source = source  # engine that produced the finding, e.g. "xsd"

    def __eq__(self, other):
        if not isinstance(other, Finding):
            return NotImplemented
        return (self.severity, self.message, self.location, self.source) == (
            other.severity,
            other.message,
            other.location,
            other.source,
        )

    def __hash__(self):
        return hash((self.severity, self.message, self.location, self.source))

    def __str__(self):
        prefix = f"[{self.severity.name}]"
        if self.location is not None:
            return f"{prefix} {self.location}: {self.message}"
        return f"{prefix} {self.message}"

    def __repr__(self):
        return f"Finding({self})"


class ValidationResult:
    """
    Outcome of one validation stage.

    A result is passing iff none of its findings is at or above the failing
    threshold. An empty or all-informational result is passing.
    """

    def __init__(
        self,
        findings: Optional[Iterable[Finding]] = None,
        fail_threshold: Severity = Severity.ERROR,
    ):
        self.findings: List[Finding] = list(findings or [])
        self.fail_threshold = fail_threshold

    def add(self, finding: Finding) -> None:
        self.findings.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        self.findings.extend(findings)

    @property
    def is_passing(self) -> bool:
        return not any(f.severity >= self.fail_threshold for f in self.findings)

    @property
    def highest_severity(self) -> Optional[Severity]:
        if not self.findings:
            return None
        return max(f.severity for f in self.findings)

    def count_by_severity(self) -> Dict[Severity, int]:
        counts = {severity: 0 for severity in Severity}
        for finding in self.findings:
            counts[finding.severity] += 1
        return counts

    def failing_findings(self) -> List[Finding]:
        return [f for f in self.findings if f.severity >= self.fail_threshold]

    def __len__(self):
        return len(self.findings)

    def __iter__(self):
        return iter(self.findings)

    def __repr__(self):
        status = "passing" if self.is_passing else "failing"
        return f"ValidationResult({status}, {len(self.findings)} findings)"


class Verdict(Enum):
    """Terminal outcome of a run; each maps to a stable exit code."""

    VALID = 0
    SCHEMA_INVALID = 1
    CONSTRAINT_INVALID = 2
    PROCESSING_ERROR = 3
    CONFIGURATION_ERROR = 4

    @property
    def exit_code(self) -> int:
        return self.value

    @property
    def is_error(self) -> bool:
        """True for verdicts where the tool could not finish its checks."""
        return self in (Verdict.PROCESSING_ERROR, Verdict.CONFIGURATION_ERROR)


class PipelineOutcome:
    """Everything the caller needs from a single pipeline run."""

    def __init__(
        self,
        target: Path,
        verdict: Verdict,
        document_format=None,
        result: Optional[ValidationResult] = None,
        message: str = "",
        states: Optional[List[str]] = None,
    ):
        self.target = target
        self.verdict = verdict
        self.document_format = document_format
        self.result = result  # the stage result that decided the verdict
        self.message = message
        self.states = list(states or [])

    @property
    def exit_code(self) -> int:
        return self.verdict.exit_code

    @property
    def is_valid(self) -> bool:
        return self.verdict is Verdict.VALID

    def __repr__(self):
        return f"PipelineOutcome({self.target}, {self.verdict.name})"


def document_uri(path) -> str:
    """Return the file URI identifying a document in findings."""
    return Path(path).resolve().as_uri()
