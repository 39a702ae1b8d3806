"""Typed entry points built on top of the phase-shift kernel."""

from __future__ import annotations

from typing import Callable, Iterable

import numpy as np

from grating_sim.debug_utils import debug_print

from .phase_shifts import generate_coefficients
from .types import (
    DEFAULT_CONSTANTS,
    BeamGratingParameters,
    CoefficientMode,
    CoefficientScan,
    FourierCoefficients,
    PhaseDiagnostics,
    PhysicalConstants,
)


CoefficientKernel = Callable[..., PhaseDiagnostics]


def _zeroed_array(params: BeamGratingParameters) -> np.ndarray:
    return np.zeros(int(params.number_of_rows_fourier_coefficient_array), dtype=np.float64)


def compute_fourier_coefficients(
    params: BeamGratingParameters,
    z: float,
    *,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
    emit_diagnostics: bool = True,
    kernel: CoefficientKernel = generate_coefficients,
) -> FourierCoefficients:
    """Evaluate both coefficient arrays at one longitudinal position."""

    real = _zeroed_array(params)
    imaginary = _zeroed_array(params)

    diagnostics = kernel(
        real,
        CoefficientMode.REAL,
        z,
        params,
        constants=constants,
        emit_diagnostics=emit_diagnostics,
    )
    kernel(
        imaginary,
        CoefficientMode.IMAGINARY,
        z,
        params,
        constants=constants,
        emit_diagnostics=emit_diagnostics,
    )

    return FourierCoefficients(
        z=float(z),
        orders=params.orders,
        real=real,
        imaginary=imaginary,
        diagnostics=diagnostics,
    )


def scan_z_positions(
    params: BeamGratingParameters,
    z_positions: Iterable[float],
    *,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
    emit_diagnostics: bool = False,
    kernel: CoefficientKernel = generate_coefficients,
) -> CoefficientScan:
    """Evaluate the coefficients at every ``z`` with fresh arrays per slice."""

    z_array = np.asarray(list(z_positions), dtype=np.float64)
    number_of_orders = int(params.number_of_rows_fourier_coefficient_array)
    real = np.zeros((z_array.size, number_of_orders), dtype=np.float64)
    imaginary = np.zeros((z_array.size, number_of_orders), dtype=np.float64)

    for row, z in enumerate(z_array):
        result = compute_fourier_coefficients(
            params,
            float(z),
            constants=constants,
            emit_diagnostics=emit_diagnostics,
            kernel=kernel,
        )
        real[row] = result.real
        imaginary[row] = result.imaginary
        debug_print(
            f"z={z:.6e}: phase_gravity={result.diagnostics.phase_gravity:.3e} rad, "
            f"samples={result.diagnostics.sample_count}"
        )

    return CoefficientScan(
        z_positions=z_array,
        orders=params.orders,
        real=real,
        imaginary=imaginary,
    )
