"""Configuration loader.

Reads settings from a YAML config file with ``${ENV_VAR}`` interpolation and
fills gaps from the environment (``.env`` is loaded on import).
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import ProjectConfig

load_dotenv()

ENGINE_ENV_VAR = "TEXNOTES_ENGINE"

# ---------------------------------------------------------------------------
# YAML loading with ${ENV_VAR} interpolation
# ---------------------------------------------------------------------------

_ENV_RE = re.compile(r"\$\{([^}]+)\}")


def _resolve_env_vars(value: Any) -> Any:
    """Recursively resolve ``${ENV_VAR}`` references in strings."""
    if isinstance(value, str):
        def _replace(m: re.Match) -> str:
            return os.environ.get(m.group(1), "")
        return _ENV_RE.sub(_replace, value)
    if isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env_vars(v) for v in value]
    return value


def apply_env_fallbacks(config: ProjectConfig) -> ProjectConfig:
    """Fill an empty engine from ``TEXNOTES_ENGINE`` (default ``pdflatex``)."""
    if not config.engine.strip():
        config.engine = os.getenv(ENGINE_ENV_VAR, "") or "pdflatex"
    config.engine = config.engine.strip()
    config.extension = config.extension.lstrip(".")
    return config


def load_config(config_path: str | Path) -> ProjectConfig:
    """Load a ``ProjectConfig`` from a YAML file.

    Environment variables referenced as ``${VAR_NAME}`` are resolved.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    resolved = _resolve_env_vars(raw)
    config = ProjectConfig.model_validate(resolved)
    return apply_env_fallbacks(config)
