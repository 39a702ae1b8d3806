"""Typed parameter and result models for grating phase-shift calculations."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np


class CoefficientMode(enum.IntEnum):
    """Which part of the Fourier series a kernel call accumulates."""

    REAL = 1
    IMAGINARY = 2


@dataclass(frozen=True)
class PhysicalConstants:
    gravity_acceleration: float = -9.8  # m/s^2, negative is downward
    van_der_waals_c3: float = 2.0453e-2  # meV * nm^3, hydrogen (used for muonium too)
    hbar: float = 6.58212e-13  # meV * s


DEFAULT_CONSTANTS = PhysicalConstants()


@dataclass(frozen=True)
class BeamGratingParameters:
    """Beam and grating geometry shared by every ``z`` slice.

    Lengths are in metres, angles in radians and the velocity in m/s.
    ``resolution`` is the number of integration samples per slit height and
    ``number_of_rows_fourier_coefficient_array`` the (odd) number of
    diffraction orders kept in the truncated Fourier series.
    """

    tilt_angle: float
    wedge_angle: float
    slit_height: float
    grating_thickness: float
    grating_period: float
    resolution: float
    particle_velocity: float
    account_gravity: bool
    account_van_der_waals: bool
    number_of_rows_fourier_coefficient_array: int

    @property
    def max_order(self) -> int:
        return (int(self.number_of_rows_fourier_coefficient_array) - 1) // 2

    @property
    def sample_step(self) -> float:
        return self.slit_height / self.resolution

    @property
    def orders(self) -> np.ndarray:
        return np.arange(-self.max_order, self.max_order + 1, dtype=np.int64)


@dataclass
class PhaseDiagnostics:
    """Scalars reported by a single kernel call.

    ``phase_van_der_waals`` is the phase of the last sample evaluated, not an
    average over the slit; it is ``0.0`` when no sample fell inside the
    integration window.
    """

    phase_gravity: float
    phase_van_der_waals: float
    sample_count: int
    x_min: float
    x_max: float


@dataclass
class FourierCoefficients:
    z: float
    orders: np.ndarray
    real: np.ndarray
    imaginary: np.ndarray
    diagnostics: PhaseDiagnostics

    @property
    def complex(self) -> np.ndarray:
        return self.real + 1j * self.imaginary

    @property
    def intensities(self) -> np.ndarray:
        return self.real ** 2 + self.imaginary ** 2


@dataclass
class CoefficientScan:
    z_positions: np.ndarray
    orders: np.ndarray
    real: np.ndarray
    imaginary: np.ndarray

    @property
    def complex(self) -> np.ndarray:
        return self.real + 1j * self.imaginary

    @property
    def intensities(self) -> np.ndarray:
        return self.real ** 2 + self.imaginary ** 2
