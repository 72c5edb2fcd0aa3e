"""Structural rules for CHANGELOG.md.

Pure functions over the changelog text: no file access, no git, no output.
"""

from __future__ import annotations

import re
from typing import Callable, List

from pydantic import BaseModel, ConfigDict, Field

from unreleased_section import UnreleasedFormatError, parse_unreleased_section

TITLE_HEADER_RE = re.compile(r"^# Change Log[ \t\r]*$", flags=re.MULTILINE)
VERSION_HEADER_RE = re.compile(r"## \[\d+\.\d+\.\d+\]")
UNRELEASED_MARKER = "## [Unreleased]"

UNRELEASED_FORMAT_MESSAGE = "Unreleased section must follow the format: Added, Changed, Fixed"
UNRELEASED_EMPTY_MESSAGE = "At least one of the sections (Added, Changed, Fixed) must contain changes"


class ValidationRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    message: str
    check: Callable[[str], bool] = Field(..., description="Returns True when the text satisfies the rule")

    def violation(self, text: str) -> List[str]:
        return [] if self.check(text) else [self.message]


class ValidationResult(BaseModel):
    violations: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    def extend(self, other: ValidationResult) -> ValidationResult:
        self.violations.extend(other.violations)
        self.warnings.extend(other.warnings)
        return self


# Reporting order of the violations follows this list.
STRUCTURAL_RULES: List[ValidationRule] = [
    ValidationRule(
        name="non-empty",
        message="Changelog cannot be empty",
        check=lambda text: len(text) > 0,
    ),
    ValidationRule(
        name="title-header",
        message='Changelog must have a "Change Log" header',
        check=lambda text: TITLE_HEADER_RE.search(text) is not None,
    ),
    ValidationRule(
        name="version-entry",
        message="Changelog must contain at least one semantic version header",
        check=lambda text: VERSION_HEADER_RE.search(text) is not None,
    ),
    ValidationRule(
        name="unreleased-marker",
        message="Changelog must contain an Unreleased section",
        check=lambda text: UNRELEASED_MARKER in text,
    ),
]


def validate_unreleased_section(text: str) -> List[str]:
    """Check the Unreleased block layout, then that it is not entirely empty.

    The emptiness check only runs once the layout is known to be correct, so
    at most one of the two messages is returned.
    """
    try:
        section = parse_unreleased_section(text)
    except UnreleasedFormatError:
        return [UNRELEASED_FORMAT_MESSAGE]

    if section.is_empty():
        return [UNRELEASED_EMPTY_MESSAGE]
    return []


def validate(text: str) -> ValidationResult:
    violations: List[str] = []
    for rule in STRUCTURAL_RULES:
        violations.extend(rule.violation(text))
    violations.extend(validate_unreleased_section(text))
    return ValidationResult(violations=violations)
