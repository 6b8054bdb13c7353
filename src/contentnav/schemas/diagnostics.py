"""Diagnostic records produced by every build stage."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    """Diagnostic severity. Only errors block publishing."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(str, Enum):
    """Error taxonomy shared by all components."""

    STRUCTURAL = "StructuralError"
    METADATA = "MetadataError"
    ORDERING = "OrderingError"
    REDIRECT = "RedirectError"
    HOME = "HomeError"
    CONFIG = "ConfigError"


class Diagnostic(BaseModel):
    """A single error or warning tied to a node or configuration entry."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    kind: DiagnosticKind
    component: str
    node_path: str
    message: str

    @classmethod
    def error(
        cls, kind: DiagnosticKind, component: str, node_path: str, message: str
    ) -> Diagnostic:
        return cls(
            severity=Severity.ERROR,
            kind=kind,
            component=component,
            node_path=node_path,
            message=message,
        )

    @classmethod
    def warning(
        cls, kind: DiagnosticKind, component: str, node_path: str, message: str
    ) -> Diagnostic:
        return cls(
            severity=Severity.WARNING,
            kind=kind,
            component=component,
            node_path=node_path,
            message=message,
        )

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR
