#!/usr/bin/env python3
"""Sparkplay CLI entrypoint -- run without pip install.

Usage:
    python sprun.py simulate
    python sprun.py --help
"""

import sys
from pathlib import Path

# Add src/ to import path so the sparkplay package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from sparkplay.cli import app

if __name__ == "__main__":
    app()
