"""
Report Service
==============

Renders pipeline outcomes as Markdown reports.
Follows SRP: Only handles report rendering and writing.
"""

import os
from typing import List

from core.results import PipelineOutcome, Severity, Verdict

VERDICT_LABELS = {
    Verdict.VALID: "✅ VALID",
    Verdict.SCHEMA_INVALID: "❌ SCHEMA INVALID",
    Verdict.CONSTRAINT_INVALID: "❌ CONSTRAINT INVALID",
    Verdict.PROCESSING_ERROR: "⚠️ PROCESSING ERROR",
    Verdict.CONFIGURATION_ERROR: "⚠️ CONFIGURATION ERROR",
}

# Stages a run passed through before its verdict
_STAGES_RUN = {
    Verdict.VALID: ("schema", "constraint"),
    Verdict.SCHEMA_INVALID: ("schema",),
    Verdict.CONSTRAINT_INVALID: ("schema", "constraint"),
}


class ReportService:
    """
    Service responsible for Markdown validation reports.

    Follows SRP: Only handles report generation.
    """

    def render(self, outcome: PipelineOutcome) -> str:
        """
        Render an outcome as Markdown.

        Args:
            outcome: Result of a pipeline run

        Returns:
            Report text
        """
        lines: List[str] = []
        lines.append("# Validation Report")
        lines.append("")
        lines.append(f"**Target:** `{outcome.target}`")
        fmt = outcome.document_format.name if outcome.document_format else "unresolved"
        lines.append(f"**Format:** {fmt}")
        lines.append(f"**Verdict:** {VERDICT_LABELS[outcome.verdict]}")
        lines.append(f"**Exit code:** {outcome.exit_code}")
        lines.append("")

        if outcome.verdict.is_error:
            lines.append("## Error")
            lines.append("")
            lines.append(outcome.message)
            lines.append("")
            return "\n".join(lines)

        lines.append("## Stage Summary")
        lines.append("")
        stages = _STAGES_RUN[outcome.verdict]
        for stage in ("schema", "constraint"):
            if stage not in stages:
                lines.append(f"- **{stage.capitalize()}:** skipped")
            elif (stage == "schema" and outcome.verdict is Verdict.SCHEMA_INVALID) or (
                stage == "constraint" and outcome.verdict is Verdict.CONSTRAINT_INVALID
            ):
                lines.append(f"- **{stage.capitalize()}:** ❌ FAIL")
            else:
                lines.append(f"- **{stage.capitalize()}:** ✅ PASS")
        lines.append("")

        result = outcome.result
        if result is not None and result.findings:
            counts = result.count_by_severity()
            summary = ", ".join(
                f"{counts[s]} {s.name.lower()}" for s in reversed(list(Severity)) if counts[s]
            )
            lines.append(f"## Findings ({summary})")
            lines.append("")
            for finding in result.findings:
                lines.append(f"- {finding}")
            lines.append("")

        return "\n".join(lines)

    def write(self, outcome: PipelineOutcome, output_file: str) -> str:
        """
        Write the rendered report to output_file.

        Returns:
            Path the report was written to
        """
        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(self.render(outcome))
        return output_file
