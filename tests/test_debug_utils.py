import logging

import numpy as np
import pytest

from grating_sim import debug_utils


@pytest.mark.parametrize(
    "value, expected",
    [("", False), ("0", False), ("false", False), ("No", False), ("1", True), ("yes", True)],
)
def test_is_debug_enabled(monkeypatch, value, expected):
    monkeypatch.setenv("GRATING_SIM_DEBUG", value)
    assert debug_utils.is_debug_enabled() is expected


def test_debug_print_respects_env(monkeypatch, capsys):
    monkeypatch.delenv("GRATING_SIM_DEBUG", raising=False)
    debug_utils.debug_print("hidden")
    assert capsys.readouterr().out == ""

    monkeypatch.setenv("GRATING_SIM_DEBUG", "1")
    debug_utils.debug_print("shown")
    assert capsys.readouterr().out == "shown\n"


def test_check_coefficient_array_reports_nan(monkeypatch, capsys):
    monkeypatch.setenv("GRATING_SIM_DEBUG", "1")
    debug_utils.check_coefficient_array(np.array([0.5, np.nan, -0.5]), name="real")
    out = capsys.readouterr().out
    assert "real dtype: float64" in out
    assert "real contains 1 NaN entries" in out


def test_enable_numba_logging_sets_level(monkeypatch):
    monkeypatch.setenv("GRATING_SIM_DEBUG", "1")
    monkeypatch.setenv("NUMBA_LOG_LEVEL", "warning")
    logger = logging.getLogger("numba")
    previous_level = logger.level
    previous_handlers = list(logger.handlers)
    try:
        debug_utils.enable_numba_logging()
        assert logger.level == logging.WARNING
        assert logger.handlers
    finally:
        logger.setLevel(previous_level)
        logger.handlers[:] = previous_handlers
