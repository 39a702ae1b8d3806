import os
import sys
from pathlib import Path

# Allow importing grating_sim from repository root
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

# Plots are written to files only
os.environ.setdefault("MPLBACKEND", "Agg")
