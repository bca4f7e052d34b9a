"""
Pull structured pattern fields out of free-form assistant replies.

Assistant output is not guaranteed to follow any shape, so every field is
best-effort: a header that is not found simply leaves the field out.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class ExtractedField:
    """A canonical output field and the headers that introduce it, in priority order."""

    name: str
    aliases: tuple[str, ...]


FIELDS: tuple[ExtractedField, ...] = (
    ExtractedField("name", ("NAME", "Pattern Name", "Name", "Title")),
    ExtractedField("notation", ("NOTATION", "Pattern Notation", "Notation", "Stitch Notation")),
    ExtractedField("instructions", ("INSTRUCTIONS", "Pattern Instructions", "Instructions", "Directions")),
    ExtractedField("difficulty", ("DIFFICULTY", "Difficulty Level", "Difficulty", "Skill Level")),
    ExtractedField("materials", ("MATERIALS", "Materials Needed", "Materials", "Supplies")),
    ExtractedField("time", ("TIME", "Estimated Time", "Time", "Time to Complete")),
)

# Optional "1." / "2)" list marker, optional opening emphasis, the alias,
# emphasis that may close before or after the colon.
_HEADER_TEMPLATE = (
    r"(?:(?<![\w])\d+[.)][ \t]*)?"
    r"(?:[*_]{{1,3}}[ \t]*)?"
    r"(?<![^\W_])(?:{aliases})"
    r"[ \t]*(?:[*_]{{1,3}}[ \t]*)?:"
    r"(?:[ \t]*[*_]{{1,3}}(?![\w]))?"
)


def _header_regex(aliases: Iterable[str]) -> re.Pattern[str]:
    # Longest first so "Pattern Name" wins over "Name" at the same position.
    ordered = sorted({a for a in aliases}, key=len, reverse=True)
    alternation = "|".join(re.escape(a).replace(r"\ ", r"[ \t]+") for a in ordered)
    return re.compile(_HEADER_TEMPLATE.format(aliases=alternation), re.IGNORECASE)


_ALIAS_PATTERNS: dict[str, list[re.Pattern[str]]] = {
    f.name: [_header_regex([alias]) for alias in f.aliases] for f in FIELDS
}
_ANY_HEADER = _header_regex(alias for f in FIELDS for alias in f.aliases)


def _capture_after(text: str, start: int) -> str | None:
    following = _ANY_HEADER.search(text, start)
    end = following.start() if following else len(text)
    value = text[start:end].strip()
    return value or None


def extract_field(text: str, field: ExtractedField) -> str | None:
    """Value for one field, or None when no alias matches or the capture is empty."""
    for pattern in _ALIAS_PATTERNS[field.name]:
        m = pattern.search(text)
        if m:
            return _capture_after(text, m.end())
    return None


def extract(text: str | None) -> dict[str, str]:
    """
    Map of canonical field name to captured text for every header found.

    Example:
        >>> extract("NAME: Granny Square\\nNOTATION: ch4, 12 dc")
        {'name': 'Granny Square', 'notation': 'ch4, 12 dc'}
    """
    if not text or not text.strip():
        return {}
    out: dict[str, str] = {}
    for field in FIELDS:
        value = extract_field(text, field)
        if value is not None:
            out[field.name] = value
    return out
