"""Check whether the changelog was touched relative to a base branch.

Git problems (no repository, unknown ref, missing remote...) are reported as
warnings, never as violations: flaky CI infrastructure must not fail the gate.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict

from changelog_validator import ValidationResult

DEFAULT_BASE_REF = "origin/main"

NOT_UPDATED_MESSAGE = "Changelog must be updated in this PR"
NOT_A_REPOSITORY_WARNING = "Not a git repository, skipping update check"


class GitCommandError(RuntimeError):
    pass


class VersionControl(Protocol):
    def is_repository(self) -> bool: ...

    def diff(self, ref: str, path: Union[str, Path]) -> str: ...


class GitCli:
    """VersionControl backed by the ``git`` executable."""

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = cwd

    def _git(self, *args: str) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                ["git", *args],
                cwd=self.cwd,
                env={**os.environ, "LC_ALL": "C"},
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as exc:
            raise GitCommandError("git executable not found") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise GitCommandError(f"git {' '.join(args)} failed: {detail}") from exc

    def is_repository(self) -> bool:
        try:
            result = self._git("rev-parse", "--is-inside-work-tree")
        except GitCommandError as exc:
            # stderr is matched in the C locale; any other failure is a real error
            if "not a git repository" in str(exc).lower():
                return False
            raise
        return result.stdout.strip() == "true"

    def diff(self, ref: str, path: Union[str, Path]) -> str:
        return self._git("diff", ref, "--", str(path)).stdout


class UpdateCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    updated: Optional[bool] = None
    warning: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.updated is None

    def to_result(self) -> ValidationResult:
        violations: List[str] = []
        warnings: List[str] = []
        if self.updated is False:
            violations.append(NOT_UPDATED_MESSAGE)
        if self.warning:
            warnings.append(self.warning)
        return ValidationResult(violations=violations, warnings=warnings)


def _could_not_check(error: Exception) -> UpdateCheck:
    return UpdateCheck(warning=f"Could not check changelog updates: {error}")


def check_updated(
    path: Union[str, Path],
    base_ref: str = DEFAULT_BASE_REF,
    vcs: Optional[VersionControl] = None,
) -> UpdateCheck:
    if vcs is None:
        vcs = GitCli()

    try:
        in_repository = vcs.is_repository()
    except GitCommandError as exc:
        return _could_not_check(exc)
    if not in_repository:
        return UpdateCheck(warning=NOT_A_REPOSITORY_WARNING)

    try:
        diff = vcs.diff(base_ref, path)
    except Exception as exc:
        return _could_not_check(exc)

    return UpdateCheck(updated=bool(diff.strip()))
