"""Filesystem helpers for the content tree."""

from __future__ import annotations

import asyncio
from pathlib import Path


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def list_subdirs(path: Path) -> list[Path]:
    """List visible child directories of ``path`` in sorted order."""
    return sorted(
        (child for child in path.iterdir() if child.is_dir() and not is_hidden(child)),
        key=lambda child: child.name,
    )


def relative_to(path: Path, base: Path) -> str:
    """Render ``path`` relative to ``base`` when possible, POSIX style."""
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return path.as_posix()


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)
