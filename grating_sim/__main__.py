"""Module entry to expose `python -m grating_sim` CLI.

Delegates to `grating_sim.cli.main`.
"""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
