"""Aggregate diagnostics from a build pass into one report."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from contentnav.schemas import Diagnostic, DiagnosticKind, Severity

SUMMARY_SCHEMA_VERSION = 1


class ValidationReporter:
    """Collects diagnostics from every stage and reports them together.

    Nothing is raised while collecting; the caller decides what an error
    means once the whole build has run.
    """

    def __init__(self, tool: str = "contentnav") -> None:
        self.tool = tool
        self._diagnostics: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        self._diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._diagnostics.extend(diagnostics)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self._diagnostics)

    @property
    def exit_code(self) -> int:
        return 1 if self.has_errors else 0

    def by_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.kind is kind]

    def _grouped(self) -> list[tuple[str, list[Diagnostic]]]:
        groups: dict[str, list[Diagnostic]] = defaultdict(list)
        for diagnostic in self._diagnostics:
            groups[diagnostic.node_path].append(diagnostic)
        return sorted(groups.items())

    def render(self) -> str:
        """Render a human-readable report grouped by node path."""
        if not self._diagnostics:
            return "Content validation passed with no issues."

        error_count = len(self.errors)
        warning_count = len(self.warnings)
        lines = [
            f"Content validation found {error_count} {_plural(error_count, 'error')} "
            f"and {warning_count} {_plural(warning_count, 'warning')}:"
        ]
        for node_path, diagnostics in self._grouped():
            lines.append("")
            lines.append(node_path)
            for diagnostic in diagnostics:
                lines.append(
                    f"  {diagnostic.severity.value:<7} {diagnostic.kind.value:<15} "
                    f"{diagnostic.message}"
                )
        return "\n".join(lines)

    def summary(self) -> dict[str, Any]:
        """Build the machine-readable summary document."""
        grouped = self._grouped()
        return {
            "schemaVersion": SUMMARY_SCHEMA_VERSION,
            "tool": self.tool,
            "status": "fail" if self.has_errors else "pass",
            "generatedAt": datetime.now(timezone.utc).isoformat(),
            "summary": {
                "issues": len(self._diagnostics),
                "errors": len(self.errors),
                "warnings": len(self.warnings),
                "filesWithIssues": len(grouped),
            },
            "files": [
                {
                    "file": node_path,
                    "issues": [
                        {
                            "severity": d.severity.value,
                            "kind": d.kind.value,
                            "component": d.component,
                            "message": d.message,
                        }
                        for d in diagnostics
                    ],
                }
                for node_path, diagnostics in grouped
            ],
        }

    def write_summary(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.summary(), indent=2) + "\n", encoding="utf-8")
        return path

    def log(self, logger: logging.Logger) -> None:
        """Emit every diagnostic through ``logger`` at its severity."""
        for diagnostic in self._diagnostics:
            level = logging.ERROR if diagnostic.is_error else logging.WARNING
            logger.log(
                level,
                "%s: [%s] %s",
                diagnostic.node_path,
                diagnostic.kind.value,
                diagnostic.message,
            )


def _plural(count: int, word: str) -> str:
    return word if count == 1 else word + "s"
