from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

VALID_CHANGELOG = """# Change Log

All notable changes to this project will be documented in this file.

The format is based on [Keep a Changelog](http://keepachangelog.com/)
and this project adheres to [Semantic Versioning](http://semver.org/).

## [Unreleased]

### Added
- New feature pending

### Changed
- Updated documentation

### Fixed
- Fixed a bug

## [1.0.0] - 2023-12-20
### Added
- Initial release
"""


@pytest.fixture
def valid_changelog() -> str:
    return VALID_CHANGELOG


@pytest.fixture
def write_changelog(tmp_path: Path) -> Callable[[str], Path]:
    def _write(content: str, name: str = "CHANGELOG.md") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class FakeVersionControl:
    def __init__(self, repository: bool = True, diff: str = "", error: Exception | None = None) -> None:
        self.repository = repository
        self._diff = diff
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def is_repository(self) -> bool:
        return self.repository

    def diff(self, ref, path) -> str:
        self.calls.append((ref, str(path)))
        if self.error is not None:
            raise self.error
        return self._diff


@pytest.fixture
def fake_vcs() -> type[FakeVersionControl]:
    return FakeVersionControl
