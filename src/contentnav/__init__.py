"""contentnav: build a validated navigation model from a markdown article tree."""

from contentnav.exceptions import ConfigLoadError, ContentNavError, ContentRootError
from contentnav.metadata import ExtractedMetadata, extract_metadata
from contentnav.ordering import check_unique_slugs, order_siblings, resolve_tree_order
from contentnav.pipeline import (
    BuildOptions,
    BuildResult,
    build_navigation,
    build_navigation_sync,
)
from contentnav.redirects import resolve_redirects
from contentnav.reporter import ValidationReporter
from contentnav.scanner import ScannedNode, scan_content_tree
from contentnav.schemas import (
    ContentNode,
    Diagnostic,
    DiagnosticKind,
    NavigationModel,
    NodeKind,
    Severity,
)

__all__ = [
    "BuildOptions",
    "BuildResult",
    "ConfigLoadError",
    "ContentNavError",
    "ContentNode",
    "ContentRootError",
    "Diagnostic",
    "DiagnosticKind",
    "ExtractedMetadata",
    "NavigationModel",
    "NodeKind",
    "ScannedNode",
    "Severity",
    "ValidationReporter",
    "build_navigation",
    "build_navigation_sync",
    "check_unique_slugs",
    "extract_metadata",
    "order_siblings",
    "resolve_redirects",
    "resolve_tree_order",
    "scan_content_tree",
]
