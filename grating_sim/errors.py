"""Exception types raised by GRATING-SIM."""


class GratingSimError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(GratingSimError, ValueError):
    """Beam/grating parameters or a configuration payload are invalid."""
