"""Exception hierarchy for hl7kit.

Parse errors are raised for structurally unusable input. Resolution errors
are raised when a field name cannot be mapped to a position. Unknown
segment types are not errors.
"""

from __future__ import annotations


class HL7Error(Exception):
    """Base exception for all hl7kit errors."""


class ParseError(HL7Error):
    """Raised when raw input cannot be parsed into a message."""


class InvalidInputError(ParseError):
    """Raised when parse input is neither a string nor an iterable of strings."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Cannot parse object of type {type(value).__name__}; "
            "expected str or an iterable of str"
        )


class NoSegmentsError(ParseError):
    """Raised when splitting a document yields no segment chunks."""

    def __init__(self) -> None:
        super().__init__("Message contains no segments")


class MalformedSegmentError(ParseError):
    """Raised when a segment chunk splits into zero fields."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Malformed segment: {raw!r}")


class EmptySegmentError(ParseError):
    """Raised when a segment is constructed with no fields."""

    def __init__(self) -> None:
        super().__init__("Segment has no fields")


class ResolutionError(HL7Error):
    """Raised when a field selector cannot be resolved to an index."""


class UnknownFieldError(ResolutionError):
    """Raised for a field name absent from the layout and not positional."""

    def __init__(self, segment: str, selector: object) -> None:
        self.segment = segment
        self.selector = selector
        super().__init__(f"Unknown field {selector!r} for segment '{segment}'")


__all__ = [
    "HL7Error",
    "ParseError",
    "InvalidInputError",
    "NoSegmentsError",
    "MalformedSegmentError",
    "EmptySegmentError",
    "ResolutionError",
    "UnknownFieldError",
]
