"""Pattern field extraction from assistant replies and transcript notation."""

from crooked_finger.domains.extraction.notation import split_notation_and_instructions
from crooked_finger.domains.extraction.response_extractor import FIELDS, extract, extract_field

__all__ = ["FIELDS", "extract", "extract_field", "split_notation_and_instructions"]
