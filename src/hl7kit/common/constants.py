"""Constants for hl7kit."""

from typing import Final

ELEMENT_DELIMITER: Final[str] = "|"
ITEM_DELIMITER: Final[str] = "^"
SEGMENT_DELIMITER: Final[str] = "\r"

# Weight given to segment types with no declared ordering; sorts after
# every declared weight.
UNORDERED_WEIGHT: Final[int] = 999

SET_ID_FIELD: Final[str] = "set_id"

# Joins segments in debug output; not a wire delimiter.
DEBUG_SEGMENT_PLACEHOLDER: Final[str] = "\\n"

__all__ = [
    "ELEMENT_DELIMITER",
    "ITEM_DELIMITER",
    "SEGMENT_DELIMITER",
    "UNORDERED_WEIGHT",
    "SET_ID_FIELD",
    "DEBUG_SEGMENT_PLACEHOLDER",
]
