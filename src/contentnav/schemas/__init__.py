"""Shared schemas for contentnav."""

from contentnav.schemas.config import (
    ROOT_GROUP,
    HomeConfig,
    OrderingConfig,
    RedirectEntry,
    SiteConfig,
)
from contentnav.schemas.diagnostics import Diagnostic, DiagnosticKind, Severity
from contentnav.schemas.navigation import NavigationModel
from contentnav.schemas.nodes import MAX_CONTENT_DEPTH, ContentNode, NodeKind

__all__ = [
    "ROOT_GROUP",
    "MAX_CONTENT_DEPTH",
    "ContentNode",
    "Diagnostic",
    "DiagnosticKind",
    "HomeConfig",
    "NavigationModel",
    "NodeKind",
    "OrderingConfig",
    "RedirectEntry",
    "Severity",
    "SiteConfig",
]
