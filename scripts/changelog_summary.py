"""Markdown job summaries for GitHub Actions.

The validator never looks at the environment to decide whether to report;
the caller picks a writer with :func:`summary_for` and passes it in.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol, Union


class SummaryWriter(Protocol):
    def write(self, markdown: str) -> None: ...


class NullSummary:
    def write(self, markdown: str) -> None:
        return None


class StepSummaryFile:
    """Appends to the file GitHub exposes as ``$GITHUB_STEP_SUMMARY``."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def write(self, markdown: str) -> None:
        with self.path.open("a", encoding="utf-8") as f:
            f.write(markdown.rstrip("\n") + "\n\n")


def summary_for(path: Optional[Path]) -> SummaryWriter:
    if path is None:
        return NullSummary()
    return StepSummaryFile(path)


def render_success(changelog_path: Union[str, Path]) -> str:
    return (
        "### ✅ Changelog Validation Passed\n\n"
        f"- File: `{changelog_path}`\n"
        "- All validation rules passed\n"
    )


def render_failure(violations: List[str]) -> str:
    bullets = "\n".join(f"- {violation}" for violation in violations)
    return (
        "### ❌ Changelog Validation Failed\n\n"
        "The following issues were found:\n\n"
        f"{bullets}\n"
    )


def render_error(message: str) -> str:
    return f"### ❌ Changelog Validation Error\n\n{message}\n"


def render_warning(warning: str) -> str:
    return f"### Warning\n\n⚠️ {warning}\n"
