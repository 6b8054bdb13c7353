"""Local configuration for contentnav."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_CONTENT_DIR = "content"
DEFAULT_ARTICLES_DIRNAME = "articles"
DEFAULT_URL_PREFIX = "/articles"
DEFAULT_MAX_CONCURRENCY = 16
DEFAULT_REQUIRE_COMPLETE_ORDERING = False

README_FILENAME = "README.md"
ORDERING_FILENAME = "ordering.json5"
HOME_FILENAME = "home.json5"
SITE_FILENAME = "site.json5"
VANITY_FILENAME = "vanity.json5"

# Routes served by the site itself rather than by a content node. The articles
# index at the URL prefix is added per build.
STATIC_ROUTES = ("/", "/browse")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Directory holding articles/ and the JSON5 sidecar files.
CONTENTNAV_CONTENT_DIR = Path(os.getenv("CONTENTNAV_CONTENT_DIR", DEFAULT_CONTENT_DIR)).expanduser()
CONTENTNAV_ARTICLES_DIRNAME = os.getenv("CONTENTNAV_ARTICLES_DIRNAME", DEFAULT_ARTICLES_DIRNAME)
CONTENTNAV_URL_PREFIX = os.getenv("CONTENTNAV_URL_PREFIX", DEFAULT_URL_PREFIX)
CONTENTNAV_MAX_CONCURRENCY = int(
    os.getenv("CONTENTNAV_MAX_CONCURRENCY", str(DEFAULT_MAX_CONCURRENCY))
)
CONTENTNAV_REQUIRE_COMPLETE_ORDERING = _env_flag(
    "CONTENTNAV_REQUIRE_COMPLETE_ORDERING", DEFAULT_REQUIRE_COMPLETE_ORDERING
)
