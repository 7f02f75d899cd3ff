#!/usr/bin/env python3
# run_solver.py (at repo root)
from pathlib import Path
import sys

repo = Path(__file__).resolve().parent
if not (repo / "cube_engine" / "driver.py").exists():
    sys.stderr.write(f"Solver not found under: {repo}\n")
    sys.exit(2)

# Make the checkout importable without installing it
sys.path.insert(0, str(repo))

from cube_engine.driver import main  # noqa: E402

sys.exit(main(sys.argv[1:]))
