"""
writer.py

Responsibility: Emit a rendered formula to stdout or to a file.

The document is always written whole, terminated by a single newline.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)


class WriteError(RuntimeError):
    pass


def write_formula(document: str, output_path: str | Path | None = None, *, stdout: TextIO | None = None) -> Path | None:
    """
    Write `document` plus a trailing newline.

    - With `output_path`: create parent directories, overwrite the file, and
      report `Formula written to <path>` on stdout, echoing the path as
      given. Returns the path.
    - Without: print the document to stdout only. Returns None.
    """
    out = stdout if stdout is not None else sys.stdout
    content = document + "\n"

    if output_path is None:
        out.write(content)
        out.flush()
        return None

    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8", newline="\n")
    except OSError as e:
        raise WriteError(f"Failed writing formula to {output_path}: {e}") from e

    logger.debug("Wrote %d bytes to %s", len(content), path)
    out.write(f"Formula written to {output_path}\n")
    out.flush()
    return path
