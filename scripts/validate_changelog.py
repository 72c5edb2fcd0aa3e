# /// script
# requires-python = ">=3.10"
# dependencies = ["pydantic"]
# ///
"""Validate CHANGELOG.md structure and, optionally, that it changed in this PR.

Used by the pull request workflow and can be run standalone:

    uv run scripts/validate_changelog.py --path CHANGELOG.md --check-updated
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from changelog_git import DEFAULT_BASE_REF, VersionControl, check_updated
from changelog_summary import (
    SummaryWriter,
    render_error,
    render_failure,
    render_success,
    render_warning,
    summary_for,
)
from changelog_validator import ValidationResult, validate

DEFAULT_CHANGELOG = "CHANGELOG.md"
TRUTHY_VALUES = {"1", "true", "yes", "on"}


class ChangelogAcquisitionError(Exception):
    """The changelog could not be read; no rules were evaluated."""


class ChangelogNotFoundError(ChangelogAcquisitionError):
    pass


class ChangelogNotAFileError(ChangelogAcquisitionError):
    pass


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path = Path(DEFAULT_CHANGELOG)
    check_updated: bool = False
    base_ref: str = DEFAULT_BASE_REF
    ci_summary_path: Optional[Path] = None

    @classmethod
    def from_env(cls, args: argparse.Namespace, environ: Mapping[str, str]) -> Settings:
        """Command line flags win over environment variables, which win over defaults."""
        path = args.path or environ.get("CHANGELOG_PATH") or DEFAULT_CHANGELOG
        base_ref = args.base_ref or environ.get("CHANGELOG_BASE_REF") or DEFAULT_BASE_REF
        wants_update_check = args.check_updated or _env_flag(environ, "CHANGELOG_CHECK_UPDATED")

        ci_summary_path = None
        summary_file = environ.get("GITHUB_STEP_SUMMARY", "").strip()
        if _env_flag(environ, "GITHUB_ACTIONS") and summary_file:
            ci_summary_path = Path(summary_file)

        return cls(
            path=Path(path),
            check_updated=wants_update_check,
            base_ref=base_ref,
            ci_summary_path=ci_summary_path,
        )


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in TRUTHY_VALUES


def read_changelog(path: Path) -> str:
    try:
        if not path.exists():
            raise ChangelogNotFoundError(f"{path.name} file not found")
        if not path.is_file():
            raise ChangelogNotAFileError(f"{path} is not a file")
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ChangelogNotFoundError(f"{path.name} file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ChangelogAcquisitionError(f"Error: {exc}") from exc


def run(settings: Settings, vcs: Optional[VersionControl] = None) -> ValidationResult:
    """Validate the changelog described by ``settings``.

    Raises ChangelogAcquisitionError when the file cannot be read. The git
    update check only runs when ``settings.check_updated`` is set.
    """
    text = read_changelog(settings.path)
    result = validate(text)
    if settings.check_updated:
        update = check_updated(settings.path, settings.base_ref, vcs)
        result.extend(update.to_result())
    return result


def report(result: ValidationResult, settings: Settings, summary: SummaryWriter) -> int:
    for warning in result.warnings:
        print(f"⚠️ {warning}", file=sys.stderr)
        summary.write(render_warning(warning))

    if not result.valid:
        print("❌ Changelog validation failed:", file=sys.stderr)
        for violation in result.violations:
            print(f"  - {violation}", file=sys.stderr)
        summary.write(render_failure(result.violations))
        return 1

    print("✅ Changelog validation passed")
    summary.write(render_success(settings.path))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="validate-changelog",
        description="Validates the presence and format of CHANGELOG.md",
    )
    parser.add_argument("-p", "--path", help=f"path to changelog file (default: {DEFAULT_CHANGELOG})")
    parser.add_argument(
        "-u",
        "--check-updated",
        action="store_true",
        help="check if changelog was updated in PR",
    )
    parser.add_argument("--base-ref", help=f"git ref to diff against (default: {DEFAULT_BASE_REF})")
    return parser


def main(
    argv: Optional[List[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    vcs: Optional[VersionControl] = None,
) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env(args, os.environ if environ is None else environ)
    summary = summary_for(settings.ci_summary_path)

    try:
        result = run(settings, vcs)
    except ChangelogAcquisitionError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        summary.write(render_error(str(exc)))
        return 1

    return report(result, settings, summary)


if __name__ == "__main__":
    sys.exit(main())
