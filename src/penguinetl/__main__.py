"""Support ``python -m penguinetl``."""

from __future__ import annotations

from penguinetl.cli.app import run

if __name__ == "__main__":
    run()
