#!/usr/bin/env python3
"""Direct launcher for the POS Dashboard.

This script launches Streamlit with the pos_dashboard directory as the app root,
enabling automatic page discovery from the pages/ subdirectory.
"""

import sys
import subprocess
import os
from pathlib import Path

# Get the project root and pos_dashboard directory
project_root = Path(__file__).parent.resolve()
pos_dashboard_dir = project_root / "pos_dashboard"

if __name__ == "__main__":
    # Streamlit discovers pages/ next to the entry script
    os.chdir(pos_dashboard_dir)
    sys.path.insert(0, str(project_root))
    raise SystemExit(subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        "Home.py"
    ]).returncode)
