"""Site path helpers shared by redirect and navigation code."""

from __future__ import annotations

import re

from contentnav.config import CONTENTNAV_URL_PREFIX

_EXTERNAL_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)


def normalize_path(path: str) -> str:
    """Return ``path`` with one leading slash and no trailing slash."""
    stripped = path.strip().strip("/")
    return "/" + stripped if stripped else "/"


def is_external(target: str) -> bool:
    return bool(_EXTERNAL_RE.match(target.strip()))


def url_path_for(slug_path: str, prefix: str = CONTENTNAV_URL_PREFIX) -> str:
    """Build the canonical site path for a node's slug path."""
    base = normalize_path(prefix)
    slug_path = slug_path.strip("/")
    if not slug_path:
        return base
    if base == "/":
        return "/" + slug_path
    return f"{base}/{slug_path}"
