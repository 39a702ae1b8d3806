"""Matplotlib rendering of Fourier coefficient spectra."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from grating_sim.simulation.types import CoefficientScan, FourierCoefficients


def plot_coefficient_spectrum(
    result: FourierCoefficients,
    *,
    output_path: str | Path | None = None,
    dpi: int = 200,
) -> Path | None:
    """Plot real, imaginary and |c_n|^2 per diffraction order at one ``z``."""

    orders = np.asarray(result.orders)
    fig, (ax_parts, ax_int) = plt.subplots(2, 1, figsize=(7.0, 6.0), sharex=True)
    ax_parts.plot(orders, result.real, "o-", label="Re $c_n$")
    ax_parts.plot(orders, result.imaginary, "s--", label="Im $c_n$")
    ax_parts.axhline(0.0, color="0.6", linewidth=0.8)
    ax_parts.set_ylabel("Coefficient")
    ax_parts.set_title(f"Grating Fourier coefficients at z = {result.z:.3e} m")
    ax_parts.legend()

    ax_int.bar(orders, result.intensities, color="tab:purple")
    ax_int.set_yscale("log")
    ax_int.set_xlabel("Diffraction order n")
    ax_int.set_ylabel("$|c_n|^2$")
    fig.tight_layout()

    out = None
    if output_path is not None:
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out, dpi=int(dpi))
    plt.close(fig)
    return out


def plot_scan_intensities(
    scan: CoefficientScan,
    *,
    output_path: str | Path | None = None,
    dpi: int = 200,
    cmap: str = "turbo",
) -> Path | None:
    """Render ``|c_n|^2`` as an order versus ``z`` map."""

    orders = np.asarray(scan.orders)
    z = np.asarray(scan.z_positions)
    fig, ax = plt.subplots(figsize=(7.0, 5.0))
    extent = (
        float(orders[0]) - 0.5,
        float(orders[-1]) + 0.5,
        float(z[0]) if z.size else 0.0,
        float(z[-1]) if z.size else 1.0,
    )
    im = ax.imshow(
        np.asarray(scan.intensities),
        cmap=cmap,
        origin="lower",
        aspect="auto",
        extent=extent,
    )
    ax.set_xlabel("Diffraction order n")
    ax.set_ylabel("z (m)")
    fig.colorbar(im, ax=ax, fraction=0.045, pad=0.04, label="$|c_n|^2$")
    fig.tight_layout()

    out = None
    if output_path is not None:
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out, dpi=int(dpi))
    plt.close(fig)
    return out
