"""
Documentation comment normalization.

Turns the raw text of one documentation section into a single line of prose.
"""

import re

from docextract.config import DocTag


def strip_comment_marker(line: str, marker: str) -> str:
    """Remove a leading comment marker (``///`` or ``'''``) from a trimmed line."""
    if line.startswith(marker):
        return line[len(marker):].strip()
    return line


def clean_doc_comment(raw_comment: str, tag: DocTag, marker: str) -> str:
    """Clean the raw text of a documentation section.

    Each line is trimmed, blank lines are dropped, the grammar's comment
    marker is removed, and the open/close tags of ``tag`` are stripped,
    attributes included. Any other markup inside the section is kept as
    written.

    Args:
        raw_comment: Raw section text, e.g. ``"<summary>\\n/// Text\\n/// </summary>"``.
        tag: The section the text was read for.
        marker: The grammar's per-line documentation marker.

    Returns:
        The cleaned lines joined by single spaces.

    Example:
        >>> clean_doc_comment("<summary>\\n/// Count of items.\\n/// </summary>", DocTag.SUMMARY, "///")
        'Count of items.'
    """
    name = re.escape(tag.value)
    section_tags = re.compile(rf"<{name}(?:\s[^>]*)?>|</{name}\s*>")

    cleaned_lines = []
    for line in raw_comment.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue

        stripped = strip_comment_marker(stripped, marker)
        stripped = section_tags.sub("", stripped).strip()

        if stripped:
            cleaned_lines.append(stripped)

    return " ".join(cleaned_lines)
