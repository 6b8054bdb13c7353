"""Tests for the command-line entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

import pytest

from contentnav.__main__ import main


class TestMain:
    """Tests for main."""

    def test_clean_tree_exits_zero(
        self,
        content_dir: Path,
        write_readme: Callable[..., Path],
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_readme("cat", "Category", "About.")
        output = tmp_path / "out" / "nav.json"
        summary = tmp_path / "out" / "summary.json"

        code = main(
            [
                "--content-dir",
                str(content_dir),
                "--output",
                str(output),
                "--summary",
                str(summary),
            ]
        )

        assert code == 0
        assert "Content validation found 0 errors" in capsys.readouterr().out
        navigation = json.loads(output.read_text(encoding="utf-8"))
        assert navigation["categories"][0]["title"] == "Category"
        assert json.loads(summary.read_text(encoding="utf-8"))["status"] == "pass"

    def test_errors_exit_one(self, content_dir: Path, write_readme: Callable[..., Path]) -> None:
        write_readme("cat", raw="no heading\n")

        assert main(["--content-dir", str(content_dir)]) == 1

    def test_halted_build_writes_no_model(self, tmp_path: Path) -> None:
        output = tmp_path / "nav.json"

        code = main(["--content-dir", str(tmp_path / "missing"), "--output", str(output)])

        assert code == 1
        assert not output.exists()

    def test_verbose_logs_diagnostics_under_module_logger(
        self,
        content_dir: Path,
        write_readme: Callable[..., Path],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        write_readme("cat", raw="no heading\n")

        with caplog.at_level(logging.DEBUG):
            main(["--content-dir", str(content_dir), "--verbose"])

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert errors
        assert {r.name for r in errors} == {"contentnav.__main__"}
