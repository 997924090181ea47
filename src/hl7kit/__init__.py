"""hl7kit: parse and build HL7 v2.x messages."""

from hl7kit.common.errors import HL7Error, ParseError, ResolutionError, UnknownFieldError
from hl7kit.layouts.registry import SegmentLayout, SegmentLayoutRegistry, get_default_registry
from hl7kit.model.factory import build_segment, create_segment
from hl7kit.model.message import Message
from hl7kit.model.segment import Segment

__version__ = "0.1.0"

__all__ = [
    "HL7Error",
    "Message",
    "ParseError",
    "ResolutionError",
    "Segment",
    "SegmentLayout",
    "SegmentLayoutRegistry",
    "UnknownFieldError",
    "build_segment",
    "create_segment",
    "get_default_registry",
]
