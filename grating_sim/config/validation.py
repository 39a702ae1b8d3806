"""Validation helpers for configuration payloads and beam parameters."""

from __future__ import annotations

from typing import Any

from grating_sim.errors import ConfigurationError


def ensure_mapping(value: Any, *, name: str) -> dict[str, Any]:
    """Return *value* as ``dict`` or raise a descriptive ``TypeError``."""

    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def ensure_float(value: Any, *, name: str) -> float:
    """Return *value* as ``float`` or raise :class:`ConfigurationError`."""

    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got a boolean")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc


def ensure_flag(value: Any, *, name: str) -> bool:
    """Accept booleans and the 0/1 integers used by older parameter files."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ConfigurationError(f"{name} must be a boolean (or 0/1), got {value!r}")


def validate_beam_parameters(params) -> None:
    """Raise :class:`ConfigurationError` if *params* cannot be integrated."""

    rows = params.number_of_rows_fourier_coefficient_array
    if isinstance(rows, bool) or int(rows) != rows or rows < 1 or rows % 2 == 0:
        raise ConfigurationError(
            "number_of_rows_fourier_coefficient_array must be an odd positive integer, "
            f"got {rows!r}"
        )
    if not params.resolution > 0:
        raise ConfigurationError(f"resolution must be positive, got {params.resolution!r}")
    if not params.slit_height > 0:
        raise ConfigurationError(f"slit_height must be positive, got {params.slit_height!r}")
    if params.particle_velocity == 0:
        raise ConfigurationError("particle_velocity must be non-zero")
    if params.grating_period == 0:
        raise ConfigurationError("grating_period must be non-zero")
