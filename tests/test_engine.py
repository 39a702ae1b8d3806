from __future__ import annotations

from dataclasses import replace

import numpy as np

from grating_sim.simulation.engine import compute_fourier_coefficients, scan_z_positions
from grating_sim.simulation.types import (
    BeamGratingParameters,
    CoefficientMode,
    PhaseDiagnostics,
)


def _build_params(rows: int = 5) -> BeamGratingParameters:
    return BeamGratingParameters(
        tilt_angle=0.0,
        wedge_angle=0.0,
        slit_height=50e-9,
        grating_thickness=100e-9,
        grating_period=100e-9,
        resolution=40.0,
        particle_velocity=6300.0,
        account_gravity=True,
        account_van_der_waals=True,
        number_of_rows_fourier_coefficient_array=rows,
    )


def _diagnostics(z: float) -> PhaseDiagnostics:
    return PhaseDiagnostics(
        phase_gravity=-z,
        phase_van_der_waals=0.0,
        sample_count=1,
        x_min=-1.0,
        x_max=1.0,
    )


def test_compute_fourier_coefficients_uses_fresh_arrays_per_mode() -> None:
    calls = []

    def fake_kernel(array, mode, z, params, **kwargs):
        assert np.all(array == 0.0)
        calls.append((mode, z, kwargs["emit_diagnostics"]))
        array += float(mode)
        return _diagnostics(z)

    result = compute_fourier_coefficients(_build_params(), 0.5, kernel=fake_kernel)

    assert [c[0] for c in calls] == [CoefficientMode.REAL, CoefficientMode.IMAGINARY]
    assert all(c[1] == 0.5 for c in calls)
    assert np.allclose(result.real, 1.0)
    assert np.allclose(result.imaginary, 2.0)
    assert np.array_equal(result.orders, np.array([-2, -1, 0, 1, 2]))
    assert np.allclose(result.complex, 1.0 + 2.0j)
    assert np.allclose(result.intensities, 5.0)
    assert result.diagnostics.phase_gravity == -0.5


def test_scan_z_positions_stacks_rows_per_slice() -> None:
    def fake_kernel(array, mode, z, params, **kwargs):
        assert kwargs["emit_diagnostics"] is False
        array += z if mode is CoefficientMode.REAL else -z
        return _diagnostics(z)

    z_positions = [0.0, 0.25, 0.5]
    scan = scan_z_positions(_build_params(rows=3), z_positions, kernel=fake_kernel)

    assert scan.real.shape == (3, 3)
    assert scan.imaginary.shape == (3, 3)
    assert np.array_equal(scan.z_positions, np.array(z_positions))
    assert np.allclose(scan.real[:, 0], z_positions)
    assert np.allclose(scan.imaginary[:, 2], [-z for z in z_positions])
    assert scan.intensities.shape == (3, 3)


def test_scan_matches_single_position_evaluation(capsys) -> None:
    params = _build_params()
    z_positions = np.linspace(0.0, 0.4, 3)
    scan = scan_z_positions(params, z_positions)
    assert capsys.readouterr().out == ""

    for row, z in enumerate(z_positions):
        single = compute_fourier_coefficients(params, float(z), emit_diagnostics=False)
        assert np.array_equal(scan.real[row], single.real)
        assert np.array_equal(scan.imaginary[row], single.imaginary)


def test_gravity_moves_phase_between_real_and_imaginary_parts() -> None:
    params = replace(_build_params(), account_van_der_waals=False)
    near = compute_fourier_coefficients(params, 0.0, emit_diagnostics=False)
    far = compute_fourier_coefficients(params, 0.05, emit_diagnostics=False)

    assert far.diagnostics.phase_gravity < 0.0
    # A common phase factor rotates every order without changing |c_n|^2.
    assert np.allclose(near.intensities, far.intensities, rtol=1e-9, atol=1e-12)
    assert not np.allclose(near.real, far.real)
