"""
profile.py

Responsibility: Formula metadata that is not part of a release (description,
binary name, artifact naming, smoke test), with defaults and an optional YAML
override file.

Example profile:

    ---
    name: vartui
    description: Terminal timesheet TUI and JSON CLI for VAR
    platform: darwin
    archive_ext: tar.gz
    test_marker: "api <subcomando>"
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_RUBY_CONSTANT = re.compile(r"[A-Z][A-Za-z0-9]*")


class ProfileError(ValueError):
    pass


@dataclass(frozen=True)
class FormulaProfile:
    """Formula metadata. `name` and `binary` fall back to the repository name."""

    name: str | None = None
    description: str = "Terminal timesheet TUI and JSON CLI for VAR"
    binary: str | None = None
    platform: str = "darwin"
    archive_ext: str = "tar.gz"
    test_args: str = "--help"
    test_marker: str = "api <subcomando>"

    def resolve(self, repo: str) -> FormulaProfile:
        """
        Fill `name` and `binary` from the repository name when unset.

        Raises `ProfileError` when the name cannot become a Ruby class name.
        """
        name = self.name or repo
        formula_class_name(name)
        return replace(self, name=name, binary=self.binary or name)


def formula_class_name(name: str) -> str:
    """
    Homebrew-style class name: `vartui` -> `Vartui`, `my-tool` -> `MyTool`.

    Raises `ProfileError` if the result is not a valid Ruby constant, e.g.
    for `1password-cli`; such formulas need an explicit `name` in a profile.
    """
    parts = [p for p in re.split(r"[-_.]+", name) if p]
    class_name = "".join(p[:1].upper() + p[1:] for p in parts)
    if not _RUBY_CONSTANT.fullmatch(class_name):
        raise ProfileError(f"Cannot derive a Ruby class name from `{name}`; set `name` in a profile.")
    return class_name


def _profile_from_mapping(data: dict[str, Any]) -> FormulaProfile:
    known = {f.name for f in fields(FormulaProfile)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ProfileError(f"Unknown profile keys: {', '.join(unknown)}")

    values: dict[str, str | None] = {}
    for key, value in data.items():
        if value is None:
            continue
        if not isinstance(value, str):
            raise ProfileError(f"Profile key `{key}` must be a string.")
        if not value.strip():
            raise ProfileError(f"Profile key `{key}` must not be empty.")
        values[key] = value
    return FormulaProfile(**values)


def load_profile(path: str | Path | None) -> FormulaProfile:
    """
    Load a `FormulaProfile` from a YAML file, or return the defaults when
    `path` is None.

    A leading `---` document marker is allowed. The top level must be a mapping.
    """
    if path is None:
        return FormulaProfile()

    profile_path = Path(path)
    if not profile_path.is_file():
        raise ProfileError(f"Profile file does not exist: {profile_path}")

    try:
        data = yaml.safe_load(profile_path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ProfileError(f"Could not read profile {profile_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ProfileError(f"Profile is not valid YAML: {profile_path}: {e}") from e
    if not isinstance(data, dict):
        raise ProfileError("Profile must be a mapping/object at the top level.")

    profile = _profile_from_mapping(data)
    logger.debug("Loaded profile from %s: %s", profile_path, profile)
    return profile
