"""
Tests for moving an INSTRUCTIONS block out of extracted notation.
"""

from __future__ import annotations

from crooked_finger.domains.extraction.notation import split_notation_and_instructions


def test_no_marker_returns_inputs() -> None:
    """Test text without a marker is returned unchanged."""
    assert split_notation_and_instructions("ch 4, sl st", "existing") == ("ch 4, sl st", "existing")


def test_none_notation() -> None:
    """Test missing notation passes through."""
    assert split_notation_and_instructions(None, "keep") == ("", "keep")


def test_marker_with_colon() -> None:
    """Test the instructions marker with a colon splits the text."""
    notation, instructions = split_notation_and_instructions(
        "R1: 6 sc in MR\nR2: inc x6\n\nINSTRUCTIONS:\nWork in the round.", None
    )
    assert notation == "R1: 6 sc in MR\nR2: inc x6"
    assert instructions == "Work in the round."


def test_marker_without_colon_any_case() -> None:
    """Test the marker matches without a colon in any case."""
    notation, instructions = split_notation_and_instructions("ch 10\ninstructions\nturn", None)
    assert notation == "ch 10"
    assert instructions == "turn"


def test_appends_to_existing_instructions() -> None:
    """Test split instructions are appended to existing ones."""
    _, instructions = split_notation_and_instructions("ch 10 Instructions: fasten off", "Use a 5mm hook.")
    assert instructions == "Use a 5mm hook.\n\nfasten off"


def test_empty_existing_instructions_not_prefixed() -> None:
    """Test empty existing instructions add no separator."""
    _, instructions = split_notation_and_instructions("ch 10 INSTRUCTIONS: fasten off", "")
    assert instructions == "fasten off"
