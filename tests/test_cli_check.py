"""Tests for spaserve.cli._check — ``spaserve check`` subcommand."""

from pathlib import Path

import pytest

from spaserve.cli import main
from spaserve.cli._check import _format_size


class TestCheck:
    def test_valid_build(self, dist: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", "--dist", str(dist)])
        out = capsys.readouterr().out
        assert "index.html" in out
        assert "assets/app.a1b2.js" in out
        assert "6 file(s)" in out

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "--dist", str(tmp_path / "missing")])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Build directory not found" in err
        assert "Run the frontend build first" in err
        assert "Contents of" in err

    def test_missing_index(self, dist: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (dist / "index.html").unlink()
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "--dist", str(dist)])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Shell document not found" in err
        assert "- assets/" in err
        assert "- favicon.ico" in err


class TestFormatSize:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [(12, "12 B"), (2048, "2.0 KiB"), (3 * 1024 * 1024, "3.0 MiB")],
    )
    def test_units(self, size: int, expected: str) -> None:
        assert _format_size(size) == expected
