"""Helper utilities for debugging GRATING-SIM execution."""

import os
import logging
import numpy as np


def is_debug_enabled() -> bool:
    """Return ``True`` if ``GRATING_SIM_DEBUG`` is set to a truthy value."""
    val = os.environ.get("GRATING_SIM_DEBUG", "")
    return bool(val) and val.lower() not in {"0", "false", "no"}


def debug_print(*args, **kwargs) -> None:
    """Print only when ``GRATING_SIM_DEBUG`` is enabled."""
    if is_debug_enabled():
        print(*args, **kwargs)


def enable_numba_logging(default_level: str = "DEBUG") -> None:
    """Configure the ``numba`` logger when debug mode is active.

    If ``GRATING_SIM_DEBUG`` is enabled this sets up the ``numba`` logger to
    emit messages to ``stdout`` using the log level from ``NUMBA_LOG_LEVEL``
    if defined or ``default_level`` otherwise.
    """
    if not is_debug_enabled():
        return

    level_name = os.environ.get("NUMBA_LOG_LEVEL", default_level).upper()
    os.environ["NUMBA_LOG_LEVEL"] = level_name

    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.DEBUG

    logger = logging.getLogger("numba")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s numba: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


def check_coefficient_array(array: np.ndarray, *, name: str = "coefficients") -> None:
    """Print diagnostics for a Fourier coefficient array when debugging is enabled."""
    debug_print(f"{name} dtype:", array.dtype, "shape:", array.shape)
    if array.size:
        debug_print(f"{name} min:", float(np.min(array)), "max:", float(np.max(array)))
        nan_count = int(np.count_nonzero(np.isnan(array)))
        if nan_count:
            debug_print(f"{name} contains {nan_count} NaN entries")
    else:
        debug_print(f"{name}: array empty")
    debug_print(f"{name} contiguous:", array.flags["C_CONTIGUOUS"])
