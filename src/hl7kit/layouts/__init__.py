"""Segment layout registry and the declared HL7 segment layouts."""

from hl7kit.layouts.registry import (
    GENERIC_LAYOUT,
    SegmentLayout,
    SegmentLayoutRegistry,
    get_default_registry,
    load_layouts,
)

__all__ = [
    "GENERIC_LAYOUT",
    "SegmentLayout",
    "SegmentLayoutRegistry",
    "get_default_registry",
    "load_layouts",
]
