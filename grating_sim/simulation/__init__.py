"""Phase-shift kernels and typed entry points."""
