"""Sync OneNote feedback pages into per-grade file areas."""

from pathlib import Path

__version__ = (Path(__file__).parent.parent / "VERSION.txt").read_text().strip()
