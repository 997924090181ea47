"""Common constants, configuration and errors for hl7kit."""

from hl7kit.common.config import Delimiters, HL7Config
from hl7kit.common.constants import (
    ELEMENT_DELIMITER,
    ITEM_DELIMITER,
    SEGMENT_DELIMITER,
    SET_ID_FIELD,
    UNORDERED_WEIGHT,
)
from hl7kit.common.errors import (
    EmptySegmentError,
    HL7Error,
    InvalidInputError,
    MalformedSegmentError,
    NoSegmentsError,
    ParseError,
    ResolutionError,
    UnknownFieldError,
)

__all__ = [
    "Delimiters",
    "HL7Config",
    "ELEMENT_DELIMITER",
    "ITEM_DELIMITER",
    "SEGMENT_DELIMITER",
    "SET_ID_FIELD",
    "UNORDERED_WEIGHT",
    "HL7Error",
    "ParseError",
    "InvalidInputError",
    "NoSegmentsError",
    "MalformedSegmentError",
    "EmptySegmentError",
    "ResolutionError",
    "UnknownFieldError",
]
