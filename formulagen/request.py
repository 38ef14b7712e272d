"""
request.py

Responsibility: Turn raw CLI values into a validated, immutable `FormulaRequest`.

Checksums are treated as opaque strings: anything non-empty is accepted.
Values are not stripped; what the release pipeline passes is what gets rendered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Flag names in the order they are reported when missing.
REQUIRED_FLAGS: tuple[str, ...] = ("--owner", "--repo", "--tag", "--sha-arm64", "--sha-x86_64")


class RequestError(ValueError):
    pass


class UsageError(RequestError):
    """Unknown flag, stray positional argument, or a flag without its value."""


class ValidationError(RequestError):
    """One or more required values were empty after parsing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required arguments: {', '.join(self.missing)}")


def derive_version(tag: str) -> str:
    """
    Strip a single leading `v` from a release tag.

    Only the literal character `v` is removed, and only once:
    `v1.2.3` -> `1.2.3`, `vv1` -> `v1`, `version-1.0` -> `ersion-1.0`.
    """
    if tag.startswith("v"):
        return tag[1:]
    return tag


@dataclass(frozen=True)
class FormulaRequest:
    """Validated inputs for a single formula render."""

    owner: str
    repo: str
    tag: str
    sha_arm64: str
    sha_x86_64: str
    output_path: str | None = None

    @property
    def version(self) -> str:
        return derive_version(self.tag)

    @property
    def homepage(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


def build_request(
    *,
    owner: str | None,
    repo: str | None,
    tag: str | None,
    sha_arm64: str | None,
    sha_x86_64: str | None,
    output: str | None = None,
) -> FormulaRequest:
    """
    Validate required values and build a `FormulaRequest`.

    Raises `ValidationError` naming every missing flag. An empty `output`
    is treated the same as no output (stdout).
    """
    values = {
        "--owner": owner or "",
        "--repo": repo or "",
        "--tag": tag or "",
        "--sha-arm64": sha_arm64 or "",
        "--sha-x86_64": sha_x86_64 or "",
    }
    missing = [flag for flag in REQUIRED_FLAGS if not values[flag]]
    if missing:
        raise ValidationError(missing)

    output_path = output or None

    request = FormulaRequest(
        owner=values["--owner"],
        repo=values["--repo"],
        tag=values["--tag"],
        sha_arm64=values["--sha-arm64"],
        sha_x86_64=values["--sha-x86_64"],
        output_path=output_path,
    )
    logger.debug("Formula request: %s/%s tag=%s version=%s", request.owner, request.repo, request.tag, request.version)
    return request
