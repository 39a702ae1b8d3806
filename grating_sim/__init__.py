"""Fourier coefficients of the phase imparted by a tilted diffraction grating."""

__version__ = "0.1.0"
