"""Heading-bounded section splicing for Markdown notes."""

from __future__ import annotations

import re

# ATX heading; "#flashcards/..." tag lines have no space after the hashes
HEADING_RE = re.compile(r"^#{1,6}\s")

_FRONTMATTER_GAP_RE = re.compile(r"\A(---\n.*?\n---)\n+", re.DOTALL)


def find_section(lines: list[str], heading: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` line indexes of the first section titled ``heading``.

    ``end`` is exclusive and stops before the next heading line, leaving
    blank separator lines outside the span.
    """
    start = next(
        (i for i, line in enumerate(lines) if line.strip() == heading),
        None,
    )
    if start is None:
        return None

    end = start + 1
    while end < len(lines) and not HEADING_RE.match(lines[end]):
        end += 1
    while end > start + 1 and not lines[end - 1].strip():
        end -= 1
    return start, end


def upsert_section(document: str, heading_level: str, name: str, new_body: str) -> str:
    """Replace the first section ``{heading_level} {name}`` or append it.

    Text outside the replaced span is kept byte for byte. Later sections with
    the same heading are left alone.
    """
    heading = f"{heading_level} {name.strip()}"
    lines = document.split("\n")
    span = find_section(lines, heading)
    if span is None:
        return f"{document}\n\n{heading}\n{new_body}"

    start, end = span
    replacement = [heading, *new_body.split("\n")]
    return "\n".join([*lines[:start], *replacement, *lines[end:]])


def normalize_note(text: str) -> str:
    """Collapse blank lines after the frontmatter and trim trailing whitespace."""
    text = _FRONTMATTER_GAP_RE.sub(r"\1\n", text, count=1)
    return "\n".join(line.rstrip() for line in text.split("\n"))
