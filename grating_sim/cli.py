"""Command line access to the grating Fourier coefficient generator.

Usage examples:

- Coefficients at one longitudinal position using ``config/beam.yaml``:
    python -m grating_sim coefficients --z 0.5

- Scan the ``z`` grid from the config and save the arrays:
    python -m grating_sim scan --out coefficients.npz

- Override the grid and render an order/z intensity map:
    python -m grating_sim scan --z-start 0 --z-stop 2 --z-steps 21 --plot scan.png

- Plot the spectrum at one position:
    python -m grating_sim plot --z 0.5 --out spectrum.png

Parameters come from ``beam.yaml`` in the directory named by
``GRATING_SIM_CONFIG_DIR`` (default: the repository ``config/``), or from the
file given with ``--config``.
"""

from __future__ import annotations

import argparse
import sys

import numpy as np

from grating_sim.config import get_scan_grid, load_bundle, load_parameters
from grating_sim.debug_utils import enable_numba_logging
from grating_sim.simulation.engine import compute_fourier_coefficients, scan_z_positions
from grating_sim.simulation.types import FourierCoefficients


def format_coefficient_table(result: FourierCoefficients) -> str:
    """Return a fixed-width table of the coefficients per diffraction order."""

    lines = [f"{'order':>6} {'real':>13} {'imaginary':>13} {'intensity':>13}"]
    for order, re_val, im_val, inten in zip(
        result.orders, result.real, result.imaginary, result.intensities
    ):
        lines.append(f"{int(order):>6d} {re_val:>13.6e} {im_val:>13.6e} {inten:>13.6e}")
    return "\n".join(lines)


def _cmd_coefficients(args: argparse.Namespace) -> None:
    params, constants = load_parameters(args.config)
    result = compute_fourier_coefficients(
        params,
        args.z,
        constants=constants,
        emit_diagnostics=not args.quiet,
    )
    print(format_coefficient_table(result))


def _scan_grid(args: argparse.Namespace) -> np.ndarray:
    scan_block = dict(load_bundle(args.config).scan)
    if args.z_start is not None:
        scan_block["z_start"] = args.z_start
    if args.z_stop is not None:
        scan_block["z_stop"] = args.z_stop
    if args.z_steps is not None:
        scan_block["z_steps"] = args.z_steps
    return get_scan_grid(scan_block)


def _cmd_scan(args: argparse.Namespace) -> None:
    params, constants = load_parameters(args.config)
    z_positions = _scan_grid(args)
    scan = scan_z_positions(params, z_positions, constants=constants)

    print(f"Evaluated {scan.z_positions.size} z positions x {scan.orders.size} orders")
    centre = int(params.max_order)
    for z, re_row, im_row in zip(scan.z_positions, scan.real, scan.imaginary):
        print(f"  z={z:.4e} m  c_0={re_row[centre]:.6e}{im_row[centre]:+.6e}j")

    if args.out:
        np.savez(
            args.out,
            z_positions=scan.z_positions,
            orders=scan.orders,
            real=scan.real,
            imaginary=scan.imaginary,
        )
        print(f"Wrote coefficients to {args.out}")
    if args.plot:
        from grating_sim.plotting import plot_scan_intensities

        out = plot_scan_intensities(scan, output_path=args.plot)
        print(f"Wrote intensity map to {out}")


def _cmd_plot(args: argparse.Namespace) -> None:
    from grating_sim.plotting import plot_coefficient_spectrum

    params, constants = load_parameters(args.config)
    result = compute_fourier_coefficients(params, args.z, constants=constants)
    out = plot_coefficient_spectrum(result, output_path=args.out)
    print(f"Wrote coefficient spectrum to {out}")


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Fourier coefficients of the phase imparted by a tilted grating."
    )
    subparsers = ap.add_subparsers(dest="command")

    coeff_parser = subparsers.add_parser(
        "coefficients",
        help="Print real/imaginary coefficients per diffraction order at one z.",
    )
    coeff_parser.add_argument("--z", type=float, default=0.0, help="Longitudinal position (m)")
    coeff_parser.add_argument("--config", default=None, help="Beam/grating YAML file")
    coeff_parser.add_argument(
        "--quiet", action="store_true", help="Suppress the phase shift diagnostic lines"
    )
    coeff_parser.set_defaults(func=_cmd_coefficients)

    scan_parser = subparsers.add_parser(
        "scan", help="Evaluate the coefficients over a linear grid of z positions."
    )
    scan_parser.add_argument("--config", default=None, help="Beam/grating YAML file")
    scan_parser.add_argument("--z-start", type=float, default=None, help="First z (m)")
    scan_parser.add_argument("--z-stop", type=float, default=None, help="Last z (m)")
    scan_parser.add_argument("--z-steps", type=int, default=None, help="Number of z positions")
    scan_parser.add_argument("--out", default=None, help="Write arrays to this .npz file")
    scan_parser.add_argument("--plot", default=None, help="Render an intensity map image")
    scan_parser.set_defaults(func=_cmd_scan)

    plot_parser = subparsers.add_parser(
        "plot", help="Render the coefficient spectrum at one z to an image."
    )
    plot_parser.add_argument("--z", type=float, default=0.0, help="Longitudinal position (m)")
    plot_parser.add_argument("--out", required=True, help="Output image path (e.g., spectrum.png)")
    plot_parser.add_argument("--config", default=None, help="Beam/grating YAML file")
    plot_parser.set_defaults(func=_cmd_plot)

    return ap


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    ap = _build_parser()

    if argv and argv[0] not in {"coefficients", "scan", "plot", "-h", "--help"}:
        argv = ["coefficients"] + argv

    args = ap.parse_args(argv)

    handler = getattr(args, "func", None)
    if handler is None:
        ap.print_help()
        return

    enable_numba_logging()
    handler(args)


if __name__ == "__main__":  # pragma: no cover
    main()
