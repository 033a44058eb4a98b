"""Tests for tools/compiler.py — log parsing and engine invocation."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from texnotes.exceptions import CompilationError, CompilerInterrupted, CompilerLaunchFailure
from texnotes.models import Severity
from texnotes.tools.compiler import parse_log, run_engine


@pytest.fixture
def tex_file(tmp_path: Path) -> Path:
    tex = tmp_path / "lec1.tex"
    tex.write_text("\\documentclass[11pt]{article}\n\\begin{document}\n\\end{document}\n", encoding="utf-8")
    return tex


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    proc = MagicMock(spec=subprocess.CompletedProcess)
    proc.returncode = returncode
    proc.stdout = stdout
    proc.stderr = stderr
    return proc


class TestParseLog:
    def test_success_log(self, success_log_path):
        errors, warnings = parse_log(success_log_path)
        assert errors == []
        assert warnings == []

    def test_error_log(self, error_log_path):
        errors, warnings = parse_log(error_log_path)
        messages = [e.message for e in errors]
        assert any("notapackage.sty" in m for m in messages)
        assert any("Emergency stop" in m for m in messages)
        assert all(e.severity == Severity.ERROR for e in errors)

    def test_error_has_line_number(self, error_log_path):
        errors, _ = parse_log(error_log_path)
        assert errors[0].line == 3

    def test_warnings_parsed(self, error_log_path):
        _, warnings = parse_log(error_log_path)
        assert any("Rerun to get cross-references right" in w.message for w in warnings)

    def test_nonexistent_log(self, tmp_path):
        assert parse_log(tmp_path / "nonexistent.log") == ([], [])


class TestRunEngine:
    def test_engine_not_found(self, tex_file):
        with patch("texnotes.tools.compiler.shutil.which", return_value=None):
            with pytest.raises(CompilerLaunchFailure) as exc:
                run_engine(tex_file)
        assert "not found" in str(exc.value)
        assert exc.value.kind == "CompilerLaunchFailure"

    def test_windows_exe_fallback(self, tex_file):
        with patch("texnotes.tools.compiler.shutil.which", side_effect=[None, "/mnt/c/texlive/pdflatex.exe"]), \
             patch("texnotes.tools.compiler.subprocess.run", return_value=_completed(0)) as run:
            run_engine(tex_file)
        assert run.call_args.args[0][0] == "/mnt/c/texlive/pdflatex.exe"

    def test_launch_oserror(self, tex_file):
        with patch("texnotes.tools.compiler.shutil.which", return_value="/usr/bin/pdflatex"), \
             patch("texnotes.tools.compiler.subprocess.run", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(CompilerLaunchFailure, match="Permission denied"):
                run_engine(tex_file)

    def test_timeout_is_interrupted(self, tex_file):
        timeout = subprocess.TimeoutExpired(cmd="pdflatex", timeout=5)
        with patch("texnotes.tools.compiler.shutil.which", return_value="/usr/bin/pdflatex"), \
             patch("texnotes.tools.compiler.subprocess.run", side_effect=timeout):
            with pytest.raises(CompilerInterrupted, match="timed out after 5s"):
                run_engine(tex_file, timeout=5)

    def test_signal_is_interrupted(self, tex_file):
        with patch("texnotes.tools.compiler.shutil.which", return_value="/usr/bin/pdflatex"), \
             patch("texnotes.tools.compiler.subprocess.run", return_value=_completed(-15)):
            with pytest.raises(CompilerInterrupted, match="signal 15"):
                run_engine(tex_file)

    def test_both_errors_share_base(self):
        assert issubclass(CompilerLaunchFailure, CompilationError)
        assert issubclass(CompilerInterrupted, CompilationError)

    def test_command_and_working_directory(self, tex_file):
        with patch("texnotes.tools.compiler.shutil.which", return_value="/usr/bin/pdflatex"), \
             patch("texnotes.tools.compiler.subprocess.run", return_value=_completed(0)) as run:
            run_engine(tex_file, timeout=42)
        args, kwargs = run.call_args
        assert args[0] == ["/usr/bin/pdflatex", "-interaction=nonstopmode", "lec1.tex"]
        assert kwargs["cwd"] == str(tex_file.parent)
        assert kwargs["timeout"] == 42

    def test_success_requires_pdf(self, tex_file):
        with patch("texnotes.tools.compiler.shutil.which", return_value="/usr/bin/pdflatex"), \
             patch("texnotes.tools.compiler.subprocess.run", return_value=_completed(0)):
            result = run_engine(tex_file)
        assert not result.success
        assert result.pdf_path is None

    def test_success(self, tex_file, success_log_path):
        def fake_run(cmd, cwd, **kwargs):
            Path(cwd, "lec1.pdf").write_bytes(b"%PDF-1.5")
            Path(cwd, "lec1.log").write_text(success_log_path.read_text())
            return _completed(0)

        with patch("texnotes.tools.compiler.shutil.which", return_value="/usr/bin/pdflatex"), \
             patch("texnotes.tools.compiler.subprocess.run", side_effect=fake_run):
            result = run_engine(tex_file)
        assert result.success
        assert result.return_code == 0
        assert result.pdf_path == str(tex_file.with_suffix(".pdf"))
        assert result.errors == []

    def test_nonzero_exit_reports_errors(self, tex_file, error_log_path):
        def fake_run(cmd, cwd, **kwargs):
            Path(cwd, "lec1.log").write_text(error_log_path.read_text())
            return _completed(1, stdout="! Emergency stop.")

        with patch("texnotes.tools.compiler.shutil.which", return_value="/usr/bin/pdflatex"), \
             patch("texnotes.tools.compiler.subprocess.run", side_effect=fake_run):
            result = run_engine(tex_file)
        assert not result.success
        assert result.return_code == 1
        assert result.errors
        assert "Emergency stop" in result.log_excerpt
