"""Parse the ``## [Unreleased]`` block of a Keep-a-Changelog style file.

Parsing happens in two steps:

1. locate the block: every line after the ``## [Unreleased]`` heading up to
   the next level-1/level-2 heading (or end of text);
2. walk the block and collect the ``### Added``, ``### Changed`` and
   ``### Fixed`` subsections, which must appear once each and in that order.

A malformed block raises :class:`UnreleasedFormatError` whose message names
the specific problem (missing subsection, wrong order, stray content...).
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

UNRELEASED_HEADING = "## [Unreleased]"
SUBSECTIONS: Tuple[str, ...] = ("Added", "Changed", "Fixed")

BLOCK_END_RE = re.compile(r"^#{1,2}\s")
SUBHEADING_RE = re.compile(r"^(#{3,})\s+(.*?)\s*$")


class UnreleasedFormatError(ValueError):
    """The Unreleased block does not have the Added/Changed/Fixed layout."""


class UnreleasedSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    added: str = ""
    changed: str = ""
    fixed: str = ""

    def bodies(self) -> Dict[str, str]:
        return {"Added": self.added, "Changed": self.changed, "Fixed": self.fixed}

    def empty_subsections(self) -> List[str]:
        return [name for name, body in self.bodies().items() if not body.strip()]

    def is_empty(self) -> bool:
        return len(self.empty_subsections()) == len(SUBSECTIONS)


def locate_unreleased_block(text: str) -> Optional[List[str]]:
    """Return the lines of the first Unreleased block, or None if there is none.

    The heading line itself is excluded. Trailing text on the heading line
    (e.g. ``## [Unreleased] - soon``) is tolerated.
    """
    lines = text.splitlines()
    for index, line in enumerate(lines):
        if not line.startswith(UNRELEASED_HEADING):
            continue
        block: List[str] = []
        for candidate in lines[index + 1 :]:
            if BLOCK_END_RE.match(candidate):
                break
            block.append(candidate)
        return block
    return None


def parse_unreleased_section(text: str) -> UnreleasedSection:
    block = locate_unreleased_block(text)
    if block is None:
        raise UnreleasedFormatError(f"no '{UNRELEASED_HEADING}' heading found")

    bodies: Dict[str, List[str]] = {}
    current: Optional[str] = None
    blank_lines_before_first = 0

    for line in block:
        # everything after ### Fixed, other subsections included, belongs to Fixed
        if current == SUBSECTIONS[-1]:
            bodies[current].append(line)
            continue

        heading = SUBHEADING_RE.match(line)
        if heading is None:
            if current is not None:
                bodies[current].append(line)
            elif line.strip():
                raise UnreleasedFormatError(
                    f"unexpected content before '### {SUBSECTIONS[0]}': {line.strip()!r}"
                )
            else:
                blank_lines_before_first += 1
            continue

        level, name = heading.group(1), heading.group(2)
        if len(level) != 3 or name not in SUBSECTIONS:
            raise UnreleasedFormatError(f"unexpected heading {line.strip()!r} in the Unreleased section")
        if name in bodies:
            raise UnreleasedFormatError(f"duplicate '### {name}' subsection")

        expected = SUBSECTIONS[len(bodies)]
        if name != expected:
            raise UnreleasedFormatError(f"'### {name}' found where '### {expected}' was expected")
        if current is None and blank_lines_before_first == 0:
            raise UnreleasedFormatError(
                f"a blank line must separate '{UNRELEASED_HEADING}' from '### {SUBSECTIONS[0]}'"
            )

        bodies[name] = []
        current = name

    if len(bodies) < len(SUBSECTIONS):
        raise UnreleasedFormatError(f"missing '### {SUBSECTIONS[len(bodies)]}' subsection")

    return UnreleasedSection(
        added="\n".join(bodies["Added"]),
        changed="\n".join(bodies["Changed"]),
        fixed="\n".join(bodies["Fixed"]),
    )
