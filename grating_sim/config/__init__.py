"""Config loading helpers for GRATING-SIM."""

from .loader import (
    clear_config_cache,
    get_config_bundle,
    get_config_dir,
    get_scan_grid,
    load_bundle,
    load_parameters,
    parameters_from_mapping,
)
from .models import ConfigBundle

__all__ = [
    "ConfigBundle",
    "clear_config_cache",
    "get_config_bundle",
    "get_config_dir",
    "get_scan_grid",
    "load_bundle",
    "load_parameters",
    "parameters_from_mapping",
]
