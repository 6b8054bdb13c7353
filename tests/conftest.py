"""Test setup for contentnav."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """An empty content directory with an articles/ root."""
    content = tmp_path / "content"
    (content / "articles").mkdir(parents=True)
    return content


@pytest.fixture
def write_readme(content_dir: Path) -> Callable[..., Path]:
    """Write ``articles/<slug_path>/README.md`` with an H1 and description."""

    def _write(
        slug_path: str, title: str | None = None, body: str = "", *, raw: str | None = None
    ) -> Path:
        directory = content_dir / "articles" / slug_path
        directory.mkdir(parents=True, exist_ok=True)
        if raw is None:
            heading = title
            if heading is None:
                heading = slug_path.rsplit("/", 1)[-1].replace("-", " ").title()
            raw = f"# {heading}\n\n{body}\n"
        path = directory / "README.md"
        path.write_text(raw, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_config(content_dir: Path) -> Callable[[str, str], Path]:
    """Write a JSON5 sidecar file into the content directory."""

    def _write(name: str, text: str) -> Path:
        path = content_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
