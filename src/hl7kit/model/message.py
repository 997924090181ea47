"""HL7 v2.x message: an ordered collection of segments."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any, overload

from hl7kit.common.config import Delimiters, HL7Config
from hl7kit.common.constants import DEBUG_SEGMENT_PLACEHOLDER, SET_ID_FIELD
from hl7kit.common.errors import InvalidInputError, NoSegmentsError
from hl7kit.layouts.registry import SegmentLayoutRegistry, get_default_registry
from hl7kit.model.factory import build_segment, create_segment
from hl7kit.model.segment import Segment

logger = logging.getLogger(__name__)


class Message:
    """Parsed HL7 v2.x message.

    Segments are kept in document order, with a secondary index grouping
    them by type identifier. Delimiters are fixed at construction.
    """

    def __init__(
        self,
        raw: str | Iterable[str] | None = None,
        *,
        delimiters: Delimiters | None = None,
        registry: SegmentLayoutRegistry | None = None,
    ) -> None:
        self._delimiters = delimiters or HL7Config().delimiters()
        self._registry = registry if registry is not None else get_default_registry()
        self._segments: list[Segment] = []
        self._by_type: dict[str, list[Segment]] = {}

        if raw is not None:
            self._load(raw)

    @classmethod
    def parse(
        cls,
        raw: str | Iterable[str],
        *,
        delimiters: Delimiters | None = None,
        registry: SegmentLayoutRegistry | None = None,
    ) -> Message:
        """Parse a raw HL7 document, or a sequence of documents, into a Message.

        Args:
            raw: A document string, or an iterable of document strings whose
                segments are concatenated in order.
            delimiters: Wire delimiters; defaults to the configured ones.
            registry: Layout registry; defaults to the process-wide one.

        Raises:
            InvalidInputError: If ``raw`` is not a str or iterable of str.
            NoSegmentsError: If a document splits into zero chunks.
            MalformedSegmentError: If a chunk cannot be split into fields.
        """
        message = cls(delimiters=delimiters, registry=registry)
        message._load(raw)
        return message

    # -- delimiters -------------------------------------------------------

    @property
    def delimiters(self) -> Delimiters:
        return self._delimiters

    @property
    def element_delim(self) -> str:
        return self._delimiters.element

    @property
    def item_delim(self) -> str:
        return self._delimiters.item

    @property
    def segment_delim(self) -> str:
        return self._delimiters.segment

    # -- parsing ----------------------------------------------------------

    def _load(self, raw: str | Iterable[str]) -> None:
        if isinstance(raw, str):
            documents = [raw]
        elif isinstance(raw, (bytes, bytearray)) or not isinstance(raw, Iterable):
            raise InvalidInputError(raw)
        else:
            documents = list(raw)
            for doc in documents:
                if not isinstance(doc, str):
                    raise InvalidInputError(doc)

        # Build everything first so a bad chunk leaves the message untouched.
        parsed: list[Segment] = []
        for doc in documents:
            parsed.extend(self._parse_document(doc))

        for segment in parsed:
            self._index(segment)
        logger.debug("Parsed %d segments from %d document(s)", len(parsed), len(documents))

    def _parse_document(self, doc: str) -> list[Segment]:
        # An empty document has no chunks; a trailing delimiter leaves an
        # empty last chunk, which the factory rejects.
        chunks = doc.split(self.segment_delim) if doc else []
        if not chunks:
            raise NoSegmentsError()
        return [
            build_segment(
                chunk,
                self.element_delim,
                item_delim=self.item_delim,
                registry=self._registry,
            )
            for chunk in chunks
        ]

    def _index(self, segment: Segment) -> None:
        self._segments.append(segment)
        self._by_type.setdefault(segment.type_id, []).append(segment)

    def _reindex(self) -> None:
        self._by_type = {}
        for segment in self._segments:
            self._by_type.setdefault(segment.type_id, []).append(segment)

    # -- building ---------------------------------------------------------

    def _check_segment(self, segment: object) -> Segment:
        if not isinstance(segment, Segment):
            msg = f"Messages hold Segment objects, not {type(segment).__name__}"
            raise TypeError(msg)
        if segment.element_delim != self.element_delim or segment.item_delim != self.item_delim:
            msg = (
                f"Segment {segment.type_id} uses delimiters "
                f"{segment.element_delim!r}/{segment.item_delim!r}, message uses "
                f"{self.element_delim!r}/{self.item_delim!r}"
            )
            raise ValueError(msg)
        return segment

    def create_segment(self, type_id: str, *values: Any) -> Segment:
        """Create a segment bound to this message's delimiters and registry.

        The segment is not appended.
        """
        return create_segment(
            type_id,
            *values,
            element_delim=self.element_delim,
            item_delim=self.item_delim,
            registry=self._registry,
        )

    def append(self, segment: Segment) -> None:
        """Add a segment at the end and renumber repeated segment runs.

        Raises:
            TypeError: If ``segment`` is not a Segment.
            ValueError: If it is already in this message or its delimiters
                differ from the message's.
        """
        self._check_segment(segment)
        if any(s is segment for s in self._segments):
            msg = f"Segment {segment.type_id} is already part of this message"
            raise ValueError(msg)
        self._index(segment)
        self.resequence()

    def resequence(self) -> None:
        """Number consecutive same-type segments through their set_id field.

        In each run of adjacent segments sharing a type whose layout declares
        ``set_id``, the first gets at least 1 and each following segment gets
        its predecessor's id plus one. A different type ends the run.
        """
        last: Segment | None = None
        renumbered = 0
        for segment in self._segments:
            if (
                last is not None
                and last.type_id == segment.type_id
                and segment.has_field(SET_ID_FIELD)
            ):
                previous = _set_id_of(last)
                if previous < 1:
                    previous = 1
                    last.write_field(SET_ID_FIELD, previous)
                segment.write_field(SET_ID_FIELD, previous + 1)
                renumbered += 1
            last = segment
        if renumbered:
            logger.debug("Resequenced %d segments", renumbered)

    # -- access -----------------------------------------------------------

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def segments_by_type(self) -> dict[str, tuple[Segment, ...]]:
        return {type_id: tuple(group) for type_id, group in self._by_type.items()}

    def get_segment(self, type_id: str) -> Segment | None:
        """Get first segment matching the type identifier."""
        group = self._by_type.get(type_id)
        return group[0] if group else None

    def get_all_segments(self, type_id: str) -> list[Segment]:
        """Get all segments matching the type identifier."""
        return list(self._by_type.get(type_id, []))

    def sorted_segments(self) -> list[Segment]:
        """Segments ordered by layout weight; ties keep document order."""
        return sorted(self._segments)

    @property
    def message_type(self) -> str:
        """Message type from MSH-9 (e.g. "ADT"), or "" without an MSH."""
        return self._msh_component(0)

    @property
    def trigger_event(self) -> str:
        """Trigger event from MSH-9 (e.g. "A01"), or "" without an MSH."""
        return self._msh_component(1)

    def _msh_component(self, position: int) -> str:
        msh = self.get_segment("MSH")
        if msh is None or not msh.has_field("message_type"):
            return ""
        parts = msh.read_items("message_type")
        return parts[position] if len(parts) > position else ""

    @overload
    def __getitem__(self, selector: int) -> Segment: ...

    @overload
    def __getitem__(self, selector: slice) -> list[Segment]: ...

    @overload
    def __getitem__(self, selector: str) -> Segment | list[Segment]: ...

    def __getitem__(self, selector: int | slice | str) -> Segment | list[Segment]:
        """Select by position, slice, or type identifier.

        A type identifier with exactly one segment returns that segment;
        otherwise a list (empty when the type is absent). Slices return a new
        list holding the message's own Segment objects, not copies.
        """
        if isinstance(selector, str):
            group = self.get_all_segments(selector)
            if len(group) == 1:
                return group[0]
            return group
        if isinstance(selector, (int, slice)):
            return self._segments[selector]
        msg = f"Message indices must be int, slice or str, not {type(selector).__name__}"
        raise TypeError(msg)

    def __setitem__(self, selector: int | slice | str, value: Any) -> None:
        """Assign by position or slice, or append to a type group by identifier."""
        if isinstance(selector, str):
            if not isinstance(value, Segment) or value.type_id != selector:
                msg = f"Only a {selector} segment can be added under '{selector}'"
                raise ValueError(msg)
            self.append(value)
            return
        if isinstance(selector, int):
            self._segments[selector] = self._check_segment(value)
            self._reindex()
            return
        if isinstance(selector, slice):
            # Validate every value before touching the list.
            replacements = [self._check_segment(v) for v in value]
            self._segments[selector] = replacements
            self._reindex()
            return
        msg = f"Message indices must be int, slice or str, not {type(selector).__name__}"
        raise TypeError(msg)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    # -- serialization ----------------------------------------------------

    def to_hl7(self) -> str:
        return self.segment_delim.join(s.to_raw(self.element_delim) for s in self._segments)

    def to_debug(self) -> str:
        """Human-readable rendering; not for wire use."""
        return DEBUG_SEGMENT_PLACEHOLDER.join(s.to_raw(self.element_delim) for s in self._segments)

    def __str__(self) -> str:
        return self.to_debug()

    def __repr__(self) -> str:
        types = ",".join(s.type_id for s in self._segments)
        return f"Message(segments=[{types}])"


def _set_id_of(segment: Segment) -> int:
    value = segment.read_field(SET_ID_FIELD)
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


__all__ = ["Message"]
