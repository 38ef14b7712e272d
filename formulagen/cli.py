"""
cli.py

Responsibility: CLI entrypoint for the formula generator.

High-level flow (one pass, no subcommands):
1) Parse flags -> `FormulaRequest` (validated)
2) Load formula profile (defaults or `--profile` YAML)
3) Render the formula text
4) Write it to stdout or `--output`

Exit status is 0 on success (including `--help`) and 1 on any error.
Diagnostics and logs go to stderr; stdout carries only the formula or the
"written to" confirmation.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from formulagen.profile import ProfileError, load_profile
from formulagen.renderer import RenderError, render_formula
from formulagen.request import FormulaRequest, RequestError, UsageError, ValidationError, build_request
from formulagen.writer import WriteError, write_formula

logger = logging.getLogger(__name__)

HELP_FLAGS = ("-h", "--help")
VALUE_FLAGS = ("--owner", "--repo", "--tag", "--sha-arm64", "--sha-x86_64", "--output", "--profile")

EXAMPLE = """\
Example:
  brew-formula-gen \\
    --owner dsanchezp \\
    --repo vartui \\
    --tag v0.1.0 \\
    --sha-arm64 abc123... \\
    --sha-x86_64 def456... \\
    --output Formula/vartui.rb
"""


class _ArgumentParser(argparse.ArgumentParser):
    """argparse raises instead of exiting with status 2; `main` decides the exit code."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="brew-formula-gen",
        description="Generate a Homebrew formula for prebuilt release binaries (macOS arm64 and x86_64).",
        epilog=EXAMPLE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    p.add_argument("--owner", default="", metavar="<github-owner>", help="GitHub account or organization (required)")
    p.add_argument("--repo", default="", metavar="<github-repo>", help="GitHub repository name (required)")
    p.add_argument("--tag", default="", metavar="<release-tag>", help="Release tag, e.g. v0.1.0 (required)")
    p.add_argument("--sha-arm64", dest="sha_arm64", default="", metavar="<sha256>", help="Checksum of the arm64 archive (required)")
    p.add_argument("--sha-x86_64", dest="sha_x86_64", default="", metavar="<sha256>", help="Checksum of the x86_64 archive (required)")
    p.add_argument("--output", default=None, metavar="<path>", help="Write the formula to this file (default: stdout)")
    p.add_argument("--profile", default=None, metavar="<path>", help="YAML file overriding formula metadata (description, binary, ...)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    return p


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    # Level is set on the package logger, not the root.
    logging.getLogger("formulagen").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _attach_values(tokens: list[str]) -> list[str]:
    """
    Rewrite `--flag value` as `--flag=value` for value-taking flags, so values
    starting with `-` (opaque checksums, tags like `--rc`) are taken verbatim
    instead of being read as options. A trailing flag with no value is left
    alone for argparse to report.
    """
    out: list[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token in VALUE_FLAGS and i + 1 < len(tokens):
            out.append(f"{token}={tokens[i + 1]}")
            i += 2
            continue
        out.append(token)
        i += 1
    return out


def parse_args(argv: list[str]) -> argparse.Namespace:
    """
    Parse CLI tokens into a namespace.

    Raises `UsageError` for unknown flags, positional arguments, or flags
    missing their value. Help flags are handled by `main` before this is called.
    """
    parser = _build_parser()
    args, extras = parser.parse_known_args(_attach_values(argv))
    if extras:
        raise UsageError(f"Unknown argument: {extras[0]}")
    return args


def request_from_args(args: argparse.Namespace) -> FormulaRequest:
    """Validate parsed values; raises `ValidationError` when required values are empty."""
    return build_request(
        owner=args.owner,
        repo=args.repo,
        tag=args.tag,
        sha_arm64=args.sha_arm64,
        sha_x86_64=args.sha_x86_64,
        output=args.output,
    )


def main(argv: list[str] | None = None) -> int:
    tokens = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()

    # Help wins over everything else, including unknown or incomplete flags.
    if any(t in HELP_FLAGS for t in tokens):
        parser.print_help(sys.stdout)
        return 0

    try:
        args = parse_args(tokens)
        _configure_logging(bool(args.verbose))
        request = request_from_args(args)
    except ValidationError as e:
        print(f"{e}.", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1
    except RequestError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    try:
        profile = load_profile(args.profile).resolve(request.repo)
        document = render_formula(request, profile)
        write_formula(document, request.output_path)
    except (ProfileError, RenderError, WriteError) as e:
        logger.debug("Formula generation failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
