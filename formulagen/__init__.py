"""
formulagen package

This package implements a CLI that renders a Homebrew formula for prebuilt
release binaries (macOS arm64 + x86_64).

Key responsibilities are split across modules:
- `request.py`: validated per-invocation input (`FormulaRequest`) and version derivation
- `profile.py`: formula metadata defaults, optionally loaded from a YAML profile
- `renderer.py`: deterministic Jinja2 rendering of the formula template
- `writer.py`: emit the rendered formula to stdout or a file
- `cli.py`: CLI entrypoint and orchestration (parse -> validate -> render -> write)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
