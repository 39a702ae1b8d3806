from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import yaml

from grating_sim import cli, config


def _write_config(tmp_path: Path) -> Path:
    path = tmp_path / "beam.yaml"
    payload = {
        "beam_grating": {
            "tilt_angle_deg": 0.0,
            "wedge_angle_deg": 0.0,
            "slit_height": 50.0e-9,
            "grating_thickness": 100.0e-9,
            "grating_period": 100.0e-9,
            "resolution": 20,
            "particle_velocity": 1000.0,
            "account_gravity": True,
            "account_van_der_waals": False,
            "number_of_rows_fourier_coefficient_array": 3,
        },
        "scan": {"z_start": 0.0, "z_stop": 0.1, "z_steps": 2},
    }
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("GRATING_SIM_DEBUG", raising=False)
    config.clear_config_cache()
    yield
    config.clear_config_cache()


def test_coefficients_command_prints_table(tmp_path: Path, capsys) -> None:
    cfg = _write_config(tmp_path)
    cli.main(["coefficients", "--z", "0.0", "--config", str(cfg), "--quiet"])
    lines = capsys.readouterr().out.splitlines()

    assert lines[0].split() == ["order", "real", "imaginary", "intensity"]
    assert [int(line.split()[0]) for line in lines[1:]] == [-1, 0, 1]


def test_arguments_without_command_default_to_coefficients(tmp_path: Path, capsys) -> None:
    cfg = _write_config(tmp_path)
    cli.main(["--z", "1.0", "--config", str(cfg)])
    out = capsys.readouterr().out

    assert "Gravitational phase shift: -6.158e+02 rad" in out
    assert "Van der Waals phase shift: 0.000e+00 rad" in out
    assert "order" in out


def test_scan_command_writes_npz(tmp_path: Path, capsys) -> None:
    cfg = _write_config(tmp_path)
    out_path = tmp_path / "scan.npz"
    cli.main(["scan", "--config", str(cfg), "--z-steps", "4", "--out", str(out_path)])

    stdout = capsys.readouterr().out
    assert "Evaluated 4 z positions x 3 orders" in stdout
    with np.load(out_path) as data:
        assert np.allclose(data["z_positions"], np.linspace(0.0, 0.1, 4))
        assert np.array_equal(data["orders"], [-1, 0, 1])
        assert data["real"].shape == (4, 3)
        assert data["imaginary"].shape == (4, 3)


def test_plot_commands_write_images(tmp_path: Path) -> None:
    cfg = _write_config(tmp_path)
    spectrum = tmp_path / "plots" / "spectrum.png"
    intensity_map = tmp_path / "plots" / "scan.png"

    cli.main(["plot", "--z", "0.05", "--out", str(spectrum), "--config", str(cfg)])
    cli.main(["scan", "--config", str(cfg), "--plot", str(intensity_map)])

    assert spectrum.exists() and spectrum.stat().st_size > 0
    assert intensity_map.exists() and intensity_map.stat().st_size > 0


def test_format_coefficient_table_lists_every_order(tmp_path: Path) -> None:
    params, constants = config.load_parameters(_write_config(tmp_path))
    from grating_sim.simulation.engine import compute_fourier_coefficients

    result = compute_fourier_coefficients(params, 0.0, constants=constants, emit_diagnostics=False)
    table = cli.format_coefficient_table(result)
    assert len(table.splitlines()) == 1 + result.orders.size
