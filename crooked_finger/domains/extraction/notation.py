"""Split an INSTRUCTIONS section out of extracted pattern notation."""

from __future__ import annotations

import re

from crooked_finger.utils.logger import get_logger

logger = get_logger()

_INSTRUCTIONS_MARKER = re.compile(r"INSTRUCTIONS\s*:?", re.IGNORECASE)


def split_notation_and_instructions(
    notation: str | None,
    existing_instructions: str | None,
) -> tuple[str, str | None]:
    """
    Separate notation from a trailing instructions section.

    Transcript extraction sometimes returns notation with an "INSTRUCTIONS"
    block appended. Everything after the first marker moves to the
    instructions, appended after any instructions that already exist.

    Returns:
        (cleaned notation, combined instructions)
    """
    if notation is None:
        return "", existing_instructions

    m = _INSTRUCTIONS_MARKER.search(notation)
    if not m:
        return notation, existing_instructions

    before = notation[: m.start()].strip()
    instructions_text = notation[m.end():].strip()
    combined = instructions_text
    if existing_instructions:
        combined = existing_instructions + "\n\n" + instructions_text
    logger.debug("Moved %d chars of instructions out of notation", len(instructions_text))
    return before, combined
