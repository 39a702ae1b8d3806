"""Phase shifts imparted on a beam by a tilted grating, as Fourier coefficients."""

import numpy as np
from numba import njit, prange
from math import sin, cos, tan, pi

from grating_sim.config.validation import validate_beam_parameters
from grating_sim.debug_utils import check_coefficient_array, debug_print
from grating_sim.simulation.types import (
    DEFAULT_CONSTANTS,
    BeamGratingParameters,
    CoefficientMode,
    PhaseDiagnostics,
    PhysicalConstants,
)

# =============================================================================
# 1) INTEGRATION BOUNDS THROUGH A TILTED SLIT
# =============================================================================

@njit
def integration_bounds(tilt_angle, wedge_angle, slit_height, grating_thickness, resolution):
    """
    Return ``(x_min, x_max)``, the transverse extent sampled inside one slit.

    One sample step (``slit_height / resolution``) is kept clear of each wall.
    When the beam is tilted further than the grating wedge it crosses the
    slit diagonally, and the bound on the side it drifts towards is extended
    by ``grating_thickness * (tan(wedge_angle) - tan(tilt_angle))``.

    Parameters
    ----------
    tilt_angle, wedge_angle : float
        Beam incidence tilt and grating wedge angle (rad).
    slit_height, grating_thickness : float
        Slit geometry (m).
    resolution : float
        Number of samples per slit height.

    Returns
    -------
    (x_min, x_max) : tuple of float
    """
    if tilt_angle >= 0.0:
        x_min = slit_height * (1.0 / resolution - cos(tilt_angle) / 2.0)
        if tilt_angle <= wedge_angle:
            x_max = (slit_height * cos(tilt_angle)) / 2.0 - slit_height / resolution
        else:
            x_max = (slit_height * cos(tilt_angle) / 2.0 - slit_height / resolution
                     + grating_thickness * (tan(wedge_angle) - tan(tilt_angle)))
    else:
        x_max = (slit_height * cos(tilt_angle) / 2.0) - slit_height / resolution
        if abs(tilt_angle) <= wedge_angle:
            x_min = -((slit_height * cos(tilt_angle)) / 2.0) + slit_height / resolution
        else:
            x_min = (-((slit_height * cos(tilt_angle)) / 2.0) + slit_height / resolution
                     - grating_thickness * (tan(wedge_angle) - tan(tilt_angle)))
    return x_min, x_max


@njit
def sample_positions(x_min, x_max, step):
    """
    Sample positions from ``x_min`` up to (excluding) ``x_max``.

    Positions are produced by repeatedly adding ``step`` to ``x_min`` so the
    number of samples follows the floating-point walk rather than
    ``(x_max - x_min) / step``.
    """
    count = 0
    ex = x_min
    while ex < x_max:
        count += 1
        ex += step

    out = np.empty(count, dtype=np.float64)
    ex = x_min
    for i in range(count):
        out[i] = ex
        ex += step
    return out


# =============================================================================
# 2) PHYSICAL PHASE SHIFTS
# =============================================================================

@njit
def gravity_phase(z, particle_velocity, grating_period, account_gravity,
                  gravity_acceleration=-9.8):
    """
    Phase accumulated by free fall until the beam reaches ``z``.

    ``2 pi g t^2 / d`` with ``t = z / v`` (Kaplan, arXiv:1308.0878); zero when
    gravity is not accounted for.
    """
    if not account_gravity:
        return 0.0
    time_free_fall = z / particle_velocity
    return (2.0 * pi * gravity_acceleration * time_free_fall ** 2) / grating_period


@njit
def van_der_waals_phase(ex, x_max, grating_thickness, particle_velocity,
                        account_van_der_waals, c3=2.0453e-2, hbar=6.58212e-13):
    """
    Van der Waals phase of a sample at ``ex`` from both walls of the slit.

    Wall distances are converted to nm to match ``c3`` (meV nm^3) and
    ``hbar`` (meV s). A sample sitting exactly on a wall contributes zero.
    """
    distance_to_lower_side = abs(ex) * 1.0e9
    distance_to_upper_side = abs(x_max - ex) * 1.0e9

    if (not account_van_der_waals
            or distance_to_lower_side == 0.0
            or distance_to_upper_side == 0.0):
        return 0.0

    return (-c3 * grating_thickness / (hbar * particle_velocity * distance_to_lower_side ** 3)
            - c3 * grating_thickness / (hbar * particle_velocity * distance_to_upper_side ** 3))


@njit
def _sample_van_der_waals_phases(positions, x_max, grating_thickness, particle_velocity,
                                 account_van_der_waals, c3, hbar):
    out = np.empty(positions.size, dtype=np.float64)
    for i in range(positions.size):
        out[i] = van_der_waals_phase(positions[i], x_max, grating_thickness,
                                     particle_velocity, account_van_der_waals, c3, hbar)
    return out


# =============================================================================
# 3) ORDER SUMMATION
# =============================================================================

@njit
def order_to_index(n, number_of_orders):
    """Array slot of diffraction order ``n`` in a series of ``number_of_orders`` terms."""
    return n + (number_of_orders - 1) // 2


@njit(parallel=True)
def _accumulate_orders(array, positions, vdw_phases, phase_gravity, grating_period,
                       use_cosine):
    """
    Add ``cos`` (or ``sin``) of the total phase of every sample to each order.

    Every order owns one slot and sums its samples in ascending position, so
    the parallel result matches a serial evaluation bit for bit.
    """
    number_of_orders = array.size
    max_order = (number_of_orders - 1) // 2
    for k in prange(number_of_orders):
        n = np.int64(k) - np.int64(max_order)
        j = order_to_index(n, number_of_orders)
        acc = array[j]
        for i in range(positions.size):
            fc = 2.0 * pi * n * positions[i] / grating_period
            phase = vdw_phases[i] + fc + phase_gravity
            if use_cosine:
                acc += cos(phase)
            else:
                acc += sin(phase)
        array[j] = acc


def _check_output_array(array, number_of_orders: int) -> None:
    if not isinstance(array, np.ndarray):
        raise ValueError(
            f"coefficient array must be a numpy.ndarray, received {type(array).__name__}"
        )
    if array.ndim != 1 or array.shape[0] != number_of_orders:
        raise ValueError(
            f"coefficient array must have shape ({number_of_orders},), received {array.shape!r}"
        )
    if array.dtype != np.float64:
        raise ValueError(f"coefficient array must be float64, received {array.dtype}")
    if not array.flags.writeable:
        raise ValueError("coefficient array must be writeable")


def generate_coefficients(
    array: np.ndarray,
    mode: CoefficientMode,
    z: float,
    params: BeamGratingParameters,
    *,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
    emit_diagnostics: bool = True,
) -> PhaseDiagnostics:
    """Accumulate the real or imaginary Fourier coefficients at position ``z``.

    ``array`` is updated in place: the contribution of every sample is added
    to the existing slot values and afterwards every slot is divided by
    ``params.resolution``. Callers must therefore pass a zeroed array for each
    independent evaluation.

    An empty integration window (``x_min >= x_max``) adds nothing; the slots
    are still divided by the resolution.

    In :attr:`CoefficientMode.REAL` the gravitational phase and the Van der
    Waals phase of the last sample are printed when ``emit_diagnostics`` is
    true. The same values are returned as :class:`PhaseDiagnostics`.

    Raises
    ------
    ConfigurationError
        If ``params`` violates the kernel preconditions.
    ValueError
        If ``array`` is not a writeable float64 vector with one slot per order.
    """

    validate_beam_parameters(params)
    mode = CoefficientMode(mode)
    number_of_orders = int(params.number_of_rows_fourier_coefficient_array)
    _check_output_array(array, number_of_orders)

    resolution = float(params.resolution)
    x_min, x_max = integration_bounds(
        float(params.tilt_angle),
        float(params.wedge_angle),
        float(params.slit_height),
        float(params.grating_thickness),
        resolution,
    )

    phase_gravity = gravity_phase(
        float(z),
        float(params.particle_velocity),
        float(params.grating_period),
        bool(params.account_gravity),
        float(constants.gravity_acceleration),
    )

    positions = sample_positions(x_min, x_max, float(params.slit_height) / resolution)
    vdw_phases = _sample_van_der_waals_phases(
        positions,
        x_max,
        float(params.grating_thickness),
        float(params.particle_velocity),
        bool(params.account_van_der_waals),
        float(constants.van_der_waals_c3),
        float(constants.hbar),
    )
    debug_print(
        f"z={z:.6e} mode={mode.name} x_min={x_min:.6e} x_max={x_max:.6e} "
        f"samples={positions.size}"
    )

    if positions.size:
        _accumulate_orders(
            array,
            positions,
            vdw_phases,
            phase_gravity,
            float(params.grating_period),
            mode is CoefficientMode.REAL,
        )
    array /= resolution
    check_coefficient_array(array, name=mode.name.lower())

    diagnostics = PhaseDiagnostics(
        phase_gravity=float(phase_gravity),
        phase_van_der_waals=float(vdw_phases[-1]) if vdw_phases.size else 0.0,
        sample_count=int(positions.size),
        x_min=float(x_min),
        x_max=float(x_max),
    )

    # Both modes share these values, report them once.
    if mode is CoefficientMode.REAL and emit_diagnostics:
        print(f"Gravitational phase shift: {diagnostics.phase_gravity:.3e} rad")
        print(f"Van der Waals phase shift: {diagnostics.phase_van_der_waals:.3e} rad")

    return diagnostics
