"""
Run a delegated-stats import from CLI.
"""

from __future__ import annotations

from rirstats.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
