"""Typed containers for parsed configuration files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ConfigBundle:
    """In-memory representation of the project configuration."""

    config_dir: Path
    beam_grating: dict[str, Any]
    constants: dict[str, Any]
    scan: dict[str, Any]
