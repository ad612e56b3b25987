"""Selection of @openapi annotated documentation blocks."""

from __future__ import annotations

from typing import Optional

MARKER = "@openapi"
_TAB_REPLACEMENT = "  "


def is_annotated(doc: str) -> bool:
    """Return True when the first line of ``doc`` is exactly the marker."""
    if not doc:
        return False
    first_line = doc.split("\n", 1)[0]
    return first_line.strip() == MARKER


def select_fragment(doc: str) -> Optional[str]:
    """Return the normalized YAML block of an annotated comment, or None.

    The marker line is dropped and tabs are expanded to two spaces so YAML
    indentation rules hold. Nothing else is touched.
    """
    if not is_annotated(doc):
        return None
    first_line = doc.split("\n", 1)[0]
    body = doc.replace(first_line, "", 1)
    return body.replace("\t", _TAB_REPLACEMENT)


__all__ = ["MARKER", "is_annotated", "select_fragment"]
