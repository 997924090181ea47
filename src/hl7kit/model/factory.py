"""Build typed segments from raw text using the layout registry."""

from __future__ import annotations

import logging
from typing import Any

from hl7kit.common.constants import ELEMENT_DELIMITER, ITEM_DELIMITER
from hl7kit.common.errors import MalformedSegmentError
from hl7kit.layouts.registry import (
    GENERIC_LAYOUT,
    SegmentLayout,
    SegmentLayoutRegistry,
    get_default_registry,
)
from hl7kit.model.segment import Segment

logger = logging.getLogger(__name__)


def _layout_for(type_id: str, registry: SegmentLayoutRegistry | None) -> SegmentLayout:
    registry = registry if registry is not None else get_default_registry()
    layout = registry.lookup(type_id)
    if layout is None:
        logger.debug("No layout registered for segment type %r; using generic layout", type_id)
        return GENERIC_LAYOUT
    return layout


def build_segment(
    raw: str,
    element_delim: str = ELEMENT_DELIMITER,
    *,
    item_delim: str = ITEM_DELIMITER,
    registry: SegmentLayoutRegistry | None = None,
) -> Segment:
    """Parse one raw segment and bind it to its registered layout.

    Segment types missing from the registry are not rejected; they get the
    generic layout and behave as positional storage.

    Args:
        raw: Segment text without the segment delimiter.
        element_delim: Field separator.
        item_delim: Component separator used for repetition splitting.
        registry: Layout registry; defaults to the process-wide one.

    Returns:
        Segment bound to the layout for its type identifier.

    Raises:
        MalformedSegmentError: If ``raw`` splits into zero fields.
    """
    parts = raw.split(element_delim) if raw else []
    if not parts:
        raise MalformedSegmentError(raw)

    layout = _layout_for(parts[0], registry)
    return Segment(parts, layout=layout, element_delim=element_delim, item_delim=item_delim)


def create_segment(
    type_id: str,
    *values: Any,
    element_delim: str = ELEMENT_DELIMITER,
    item_delim: str = ITEM_DELIMITER,
    registry: SegmentLayoutRegistry | None = None,
) -> Segment:
    """Create a new segment of ``type_id`` with ``values`` at fields 1..n."""
    segment = Segment(
        [type_id],
        layout=_layout_for(type_id, registry),
        element_delim=element_delim,
        item_delim=item_delim,
    )
    for idx, value in enumerate(values, start=1):
        segment.write_field(idx, value)
    return segment


__all__ = ["build_segment", "create_segment"]
