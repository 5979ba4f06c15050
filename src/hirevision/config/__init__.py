"""Configuration loading utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..schemas.config import AppConfig, load_config


def read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    return loaded if loaded is not None else {}


def load_app_config(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Read ``path`` (if any) and apply ``HIREVISION_*`` environment overrides."""
    raw = read_yaml(path) if path else {}
    return load_config(raw, environ=dict(os.environ if environ is None else environ))


__all__ = ["load_app_config", "read_yaml"]
