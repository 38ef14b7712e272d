"""
renderer.py

Responsibility: Deterministically render the Homebrew formula for a `FormulaRequest`.

Rules:
- The formula layout lives in `templates/formula.rb.j2`; field order there is
  what downstream Homebrew tooling parses, so it must stay stable.
- Rendering depends only on the request and profile: no timestamps, no environment.
- Values are interpolated verbatim (no escaping).

This module intentionally does NOT know about CLI parsing or where the output goes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from formulagen.profile import FormulaProfile, formula_class_name
from formulagen.request import FormulaRequest

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
FORMULA_TEMPLATE = "formula.rb.j2"

ARCHITECTURES: tuple[str, ...] = ("arm64", "x86_64")


class RenderError(RuntimeError):
    pass


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=False,
    )


def release_url(*, owner: str, repo: str, tag: str, binary: str, platform: str, arch: str, archive_ext: str) -> str:
    """
    Download URL of a release archive, e.g.
    https://github.com/acme/widget/releases/download/v2.0.0/widget-v2.0.0-darwin-arm64.tar.gz
    """
    base = f"https://github.com/{owner}/{repo}/releases/download/{tag}"
    return f"{base}/{binary}-{tag}-{platform}-{arch}.{archive_ext}"


def _build_context(request: FormulaRequest, profile: FormulaProfile) -> dict[str, Any]:
    resolved = profile.resolve(request.repo)
    logger.debug("Resolved profile: %s", resolved)

    urls = {
        arch: release_url(
            owner=request.owner,
            repo=request.repo,
            tag=request.tag,
            binary=resolved.binary,
            platform=resolved.platform,
            arch=arch,
            archive_ext=resolved.archive_ext,
        )
        for arch in ARCHITECTURES
    }
    return {
        "class_name": formula_class_name(resolved.name or request.repo),
        "description": resolved.description,
        "homepage": request.homepage,
        "version": request.version,
        "url_arm64": urls["arm64"],
        "sha_arm64": request.sha_arm64,
        "url_x86_64": urls["x86_64"],
        "sha_x86_64": request.sha_x86_64,
        "binary": resolved.binary,
        "test_args": resolved.test_args,
        "test_marker": resolved.test_marker,
    }


def render_formula(request: FormulaRequest, profile: FormulaProfile | None = None) -> str:
    """
    Render the formula text for `request`. The result has no trailing newline;
    the writer adds exactly one.
    """
    context = _build_context(request, profile or FormulaProfile())
    try:
        out = _environment().get_template(FORMULA_TEMPLATE).render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed rendering formula template: {FORMULA_TEMPLATE}") from e
    logger.debug("Rendered %s formula (%d bytes)", context["class_name"], len(out))
    return out
