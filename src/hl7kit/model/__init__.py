"""Message and segment model for hl7kit."""

from hl7kit.model.factory import build_segment, create_segment
from hl7kit.model.message import Message
from hl7kit.model.segment import FieldSelector, Segment

__all__ = [
    "FieldSelector",
    "Message",
    "Segment",
    "build_segment",
    "create_segment",
]
