"""Load GRATING-SIM configuration files from disk."""

from __future__ import annotations

import json
import math
import os
from dataclasses import fields
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from grating_sim.errors import ConfigurationError
from grating_sim.simulation.types import BeamGratingParameters, PhysicalConstants

from .models import ConfigBundle
from .validation import ensure_flag, ensure_float, ensure_mapping, validate_beam_parameters

ENV_CONFIG_DIR = "GRATING_SIM_CONFIG_DIR"
BEAM_FILE_NAME = "beam.yaml"

_FLAG_FIELDS = ("account_gravity", "account_van_der_waals")
_ANGLE_FIELDS = ("tilt_angle", "wedge_angle")


def get_config_dir() -> Path:
    """Return the active configuration directory.

    Order of precedence:
    1. ``GRATING_SIM_CONFIG_DIR`` environment variable when set.
    2. Repository-local ``config/`` directory.
    """

    env_path = os.environ.get(ENV_CONFIG_DIR)
    if env_path:
        return Path(os.path.expanduser(env_path)).resolve()
    return Path(__file__).resolve().parents[2] / "config"


def _read_data_file(path: Path) -> dict[str, Any]:
    """Load a YAML/JSON mapping from *path*.

    Missing files return an empty mapping.
    """

    if not path.exists():
        return {}
    text = path.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if isinstance(data, dict):
        return data

    if path.suffix.lower() == ".json":
        parsed = json.loads(text)
        return ensure_mapping(parsed, name=str(path))
    raise TypeError(f"{path} must contain a mapping at top level")


def _bundle_from_mapping(config_dir: Path, raw: dict[str, Any], *, name: str) -> ConfigBundle:
    return ConfigBundle(
        config_dir=config_dir,
        beam_grating=ensure_mapping(raw.get("beam_grating"), name=f"{name}: beam_grating"),
        constants=ensure_mapping(raw.get("constants"), name=f"{name}: constants"),
        scan=ensure_mapping(raw.get("scan"), name=f"{name}: scan"),
    )


def _load_from_dir(config_dir: Path) -> ConfigBundle:
    raw = ensure_mapping(_read_data_file(config_dir / BEAM_FILE_NAME), name=BEAM_FILE_NAME)
    return _bundle_from_mapping(config_dir, raw, name=BEAM_FILE_NAME)


_BUNDLE_CACHE: dict[Path, ConfigBundle] = {}


def clear_config_cache() -> None:
    """Clear cached configuration bundles."""

    _BUNDLE_CACHE.clear()


def get_config_bundle(config_dir: Path | None = None) -> ConfigBundle:
    """Return the active cached configuration bundle."""

    resolved_dir = (config_dir or get_config_dir()).resolve()
    bundle = _BUNDLE_CACHE.get(resolved_dir)
    if bundle is None:
        bundle = _load_from_dir(resolved_dir)
        _BUNDLE_CACHE[resolved_dir] = bundle
    return bundle


def _resolve_angle(block: dict[str, Any], key: str) -> float:
    deg_key = f"{key}_deg"
    if key in block and deg_key in block:
        raise ConfigurationError(f"Specify either {key!r} or {deg_key!r}, not both")
    if deg_key in block:
        return math.radians(ensure_float(block[deg_key], name=deg_key))
    if key in block:
        return ensure_float(block[key], name=key)
    raise ConfigurationError(f"Missing beam/grating parameter {key!r} (or {deg_key!r})")


def parameters_from_mapping(
    block: dict[str, Any],
    constants: dict[str, Any] | None = None,
) -> tuple[BeamGratingParameters, PhysicalConstants]:
    """Build validated parameter objects from parsed ``beam_grating``/``constants`` blocks."""

    block = ensure_mapping(block, name="beam_grating")
    values: dict[str, Any] = {}
    for field in fields(BeamGratingParameters):
        key = field.name
        if key in _ANGLE_FIELDS:
            values[key] = _resolve_angle(block, key)
            continue
        if key not in block:
            raise ConfigurationError(f"Missing beam/grating parameter {key!r}")
        if key in _FLAG_FIELDS:
            values[key] = ensure_flag(block[key], name=key)
        elif key == "number_of_rows_fourier_coefficient_array":
            rows = block[key]
            if isinstance(rows, bool) or not isinstance(rows, int):
                raise ConfigurationError(f"{key} must be an integer, got {rows!r}")
            values[key] = rows
        else:
            values[key] = ensure_float(block[key], name=key)

    params = BeamGratingParameters(**values)
    validate_beam_parameters(params)

    constants = ensure_mapping(constants, name="constants")
    known = {field.name for field in fields(PhysicalConstants)}
    unknown = sorted(set(constants) - known)
    if unknown:
        raise ConfigurationError(f"Unknown physical constants: {', '.join(unknown)}")
    physical = PhysicalConstants(
        **{key: ensure_float(value, name=key) for key, value in constants.items()}
    )
    return params, physical


def load_bundle(path: str | Path | None = None) -> ConfigBundle:
    """Return the bundle parsed from *path*, or the active cached bundle.

    An explicit *path* is read directly (uncached) and must exist.
    """

    if path is None:
        return get_config_bundle()
    file_path = Path(os.path.expanduser(str(path)))
    if not file_path.exists():
        raise FileNotFoundError(f"No configuration file at {file_path}")
    raw = ensure_mapping(_read_data_file(file_path), name=str(file_path))
    return _bundle_from_mapping(file_path.parent, raw, name=str(file_path))


def load_parameters(
    path: str | Path | None = None,
) -> tuple[BeamGratingParameters, PhysicalConstants]:
    """Return the beam/grating parameters and physical constants.

    With *path* the given YAML/JSON file is read directly; otherwise
    ``beam.yaml`` from the active configuration directory is used.
    """

    bundle = load_bundle(path)
    return parameters_from_mapping(bundle.beam_grating, bundle.constants)


def get_scan_grid(scan: dict[str, Any] | None = None) -> np.ndarray:
    """Return the ``z`` positions described by a ``scan`` block.

    Defaults to the ``scan`` block of the active configuration bundle.
    """

    if scan is None:
        scan = get_config_bundle().scan
    scan = ensure_mapping(scan, name="scan")
    try:
        z_start = ensure_float(scan["z_start"], name="z_start")
        z_stop = ensure_float(scan["z_stop"], name="z_stop")
        z_steps = scan["z_steps"]
    except KeyError as exc:
        raise ConfigurationError(f"scan block is missing {exc.args[0]!r}") from exc
    if isinstance(z_steps, bool) or not isinstance(z_steps, int) or z_steps < 1:
        raise ConfigurationError(f"z_steps must be a positive integer, got {z_steps!r}")
    return np.linspace(z_start, z_stop, z_steps)
