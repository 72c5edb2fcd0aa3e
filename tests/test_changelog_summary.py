from __future__ import annotations

from pathlib import Path

from changelog_summary import (
    NullSummary,
    StepSummaryFile,
    render_error,
    render_failure,
    render_success,
    render_warning,
    summary_for,
)


def test_summary_for_picks_writer(tmp_path: Path) -> None:
    assert isinstance(summary_for(None), NullSummary)

    writer = summary_for(tmp_path / "summary.md")
    assert isinstance(writer, StepSummaryFile)
    assert writer.path == tmp_path / "summary.md"


def test_step_summary_appends(tmp_path: Path) -> None:
    path = tmp_path / "summary.md"
    path.write_text("### Earlier step\n\n", encoding="utf-8")
    writer = StepSummaryFile(path)

    writer.write(render_warning("Not a git repository, skipping update check"))
    writer.write(render_success("CHANGELOG.md"))

    content = path.read_text(encoding="utf-8")
    assert content.startswith("### Earlier step")
    assert content.index("### Warning") < content.index("### ✅ Changelog Validation Passed")


def test_render_failure_lists_every_violation() -> None:
    markdown = render_failure(["Changelog cannot be empty", "Changelog must contain an Unreleased section"])

    assert markdown.startswith("### ❌ Changelog Validation Failed")
    assert "The following issues were found:" in markdown
    assert "- Changelog cannot be empty\n" in markdown
    assert "- Changelog must contain an Unreleased section\n" in markdown


def test_render_success_names_the_file() -> None:
    assert "- File: `docs/CHANGELOG.md`" in render_success(Path("docs/CHANGELOG.md"))


def test_render_error() -> None:
    assert render_error("CHANGELOG.md file not found") == (
        "### ❌ Changelog Validation Error\n\nCHANGELOG.md file not found\n"
    )
