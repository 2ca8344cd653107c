"""Split Markdown documents into delimiter-bounded sections."""

from __future__ import annotations

import re

# A leading ``---`` line, non-empty content, and a closing line of exactly ``---``.
# LF and CRLF line endings are both accepted.
FRONT_MATTER_RE = re.compile(r"\A---\r?\n(.+?)\r?\n---(?=\r?\n|\Z)", re.DOTALL)


def strip_front_matter(text: str) -> str:
    """Remove a leading YAML front-matter block, delimiters included."""
    match = FRONT_MATTER_RE.match(text)
    if match is None:
        return text
    return text[match.end():]


def section_pattern(delimiter: str) -> re.Pattern[str]:
    """Compile the boundary: newlines, one or more *delimiter* runs, whitespace."""
    if not delimiter:
        raise ValueError("section delimiter must be a non-empty string")
    return re.compile(rf"\n+(?:{re.escape(delimiter)})+\s+")


def sectionize(text: str, delimiter: str) -> list[str]:
    """Split *text* into ordered sections.

    Parameters
    ----------
    text:
        Raw document contents, optionally starting with front matter.
    delimiter:
        Character sequence marking a section start when it begins a line,
        e.g. ``"#"`` to split on Markdown headings.

    Returns
    -------
    list[str]
        At least one section. Blank pieces are kept as-is; trimming is left
        to the caller.
    """
    return section_pattern(delimiter).split(strip_front_matter(text))
