"""LaTeX compilation with log parsing.

Calls the engine directly (``pdflatex -interaction=nonstopmode notes.tex``)
from the directory holding the file and waits for it to exit. Launch
problems and interrupted runs raise; a normal exit, successful or not, comes
back as a :class:`CompilationResult`.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from pathlib import Path

from ..exceptions import CompilerInterrupted, CompilerLaunchFailure
from ..models import CompilationResult, CompilationWarning, Severity

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Tool availability
# ---------------------------------------------------------------------------


def _find_engine(engine: str) -> str | None:
    """Find the LaTeX engine executable (pdflatex, xelatex, lualatex)."""
    path = shutil.which(engine)
    if path:
        return path
    # WSL interop: Windows .exe may be on PATH but shutil.which misses it
    path = shutil.which(f"{engine}.exe")
    return path


# ---------------------------------------------------------------------------
# Log parsing
# ---------------------------------------------------------------------------

_ERROR_RE = re.compile(r"^!\s*(.*)", re.MULTILINE)
_LINE_RE = re.compile(r"^l\.(\d+)\s*(.*)", re.MULTILINE)
_WARNING_RE = re.compile(
    r"(?:LaTeX|Package|Class)\s+(?:\w+\s+)?Warning[:\s]*(.*?)(?:\n(?!\s)|$)",
    re.MULTILINE | re.DOTALL,
)


def parse_log(log_path: str | Path) -> tuple[list[CompilationWarning], list[CompilationWarning]]:
    """Parse a LaTeX .log file for errors and warnings.

    Returns (errors, warnings).
    """
    log = Path(log_path)
    if not log.exists():
        return [], []

    log_text = log.read_text(encoding="utf-8", errors="replace")
    errors: list[CompilationWarning] = []
    warnings: list[CompilationWarning] = []

    # LaTeX errors look like:
    #   ! Error message
    #   l.42 some code
    for em in _ERROR_RE.finditer(log_text):
        line_num = None
        line_match = _LINE_RE.search(log_text[em.end():em.end() + 500])
        if line_match:
            line_num = int(line_match.group(1))
        errors.append(CompilationWarning(
            line=line_num,
            message=em.group(1).strip(),
            severity=Severity.ERROR,
        ))

    for wm in _WARNING_RE.finditer(log_text):
        msg = wm.group(1).strip().replace("\n", " ")
        if msg:
            warnings.append(CompilationWarning(message=msg, severity=Severity.WARNING))

    return errors, warnings


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


def run_engine(
    tex_path: str | Path,
    engine: str = "pdflatex",
    *,
    timeout: int = 120,
) -> CompilationResult:
    """Compile *tex_path* with *engine* in the file's own directory.

    Parameters
    ----------
    tex_path : str | Path
        The .tex file to compile.
    engine : str
        Engine executable name, e.g. ``pdflatex``.
    timeout : int
        Seconds to wait before the run is treated as interrupted.

    Raises
    ------
    CompilerLaunchFailure
        The engine is not installed or could not be started.
    CompilerInterrupted
        The run timed out or was killed by a signal.
    """
    tex = Path(tex_path)
    out = tex.parent
    engine_cmd = _find_engine(engine)
    if not engine_cmd:
        raise CompilerLaunchFailure(engine, f"{engine} not found on PATH")

    cmd = [engine_cmd, "-interaction=nonstopmode", tex.name]
    logger.info("Running: %s (in %s)", " ".join(cmd), out)

    try:
        proc = subprocess.run(
            cmd,
            cwd=str(out),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise CompilerInterrupted(engine, f"timed out after {timeout}s") from e
    except OSError as e:
        raise CompilerLaunchFailure(engine, e.strerror or str(e)) from e

    if proc.returncode < 0:
        raise CompilerInterrupted(engine, f"terminated by signal {-proc.returncode}")

    errors, warnings = parse_log(tex.with_suffix(".log"))
    pdf_path = tex.with_suffix(".pdf")
    success = proc.returncode == 0 and pdf_path.exists()

    logger.info(
        "%s finished: returncode=%d, pdf_exists=%s, errors=%d",
        engine, proc.returncode, pdf_path.exists(), len(errors),
    )

    log_excerpt = ""
    if not success:
        log_excerpt = (proc.stdout or "")[-1000:] + (proc.stderr or "")[-1000:]

    return CompilationResult(
        success=success,
        return_code=proc.returncode,
        pdf_path=str(pdf_path) if success else None,
        errors=errors,
        warnings=warnings,
        log_excerpt=log_excerpt,
    )
