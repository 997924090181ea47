"""HL7 segment: one delimiter-separated record within a message."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from hl7kit.common.constants import ELEMENT_DELIMITER, ITEM_DELIMITER
from hl7kit.common.errors import EmptySegmentError, UnknownFieldError
from hl7kit.layouts.registry import GENERIC_LAYOUT, SegmentLayout

FieldSelector = Union[str, int]

# Element-number references usable on any segment: "e7", "element7", "element_7".
_POSITIONAL_NAME = re.compile(r"^e(?:lement_?)?(\d+)$")


@dataclass(eq=False)
class Segment:
    """A single HL7 segment (e.g., MSH, PID, OBX).

    Fields are stored as raw strings, 0-indexed, with the segment type at
    index 0. Fields can be addressed by position or by a name declared in
    the segment's layout.
    """

    fields: list[str]
    layout: SegmentLayout = field(default=GENERIC_LAYOUT, repr=False)
    element_delim: str = ELEMENT_DELIMITER
    item_delim: str = ITEM_DELIMITER

    def __post_init__(self) -> None:
        if not self.fields:
            raise EmptySegmentError()
        self.fields = list(self.fields)

    @classmethod
    def parse(
        cls,
        raw: str,
        element_delim: str = ELEMENT_DELIMITER,
        *,
        item_delim: str = ITEM_DELIMITER,
        layout: SegmentLayout = GENERIC_LAYOUT,
    ) -> Segment:
        """Split a raw segment string into fields.

        Trailing empty fields are kept so that serializing the segment
        reproduces ``raw`` exactly. An empty string has no fields.

        Raises:
            EmptySegmentError: If the split yields no fields.
        """
        parts = raw.split(element_delim) if raw else []
        if not parts:
            raise EmptySegmentError()
        return cls(parts, layout=layout, element_delim=element_delim, item_delim=item_delim)

    @property
    def type_id(self) -> str:
        return self.fields[0]

    @property
    def weight(self) -> int:
        return self.layout.weight

    def has_field(self, name: str) -> bool:
        """Whether ``name`` is declared in this segment's layout."""
        return self.layout.has_field(name)

    def resolve(self, selector: FieldSelector) -> int:
        """Resolve a field name or position to a 0-based index.

        Names are looked up in the layout first, then matched against the
        element-number pattern (``e7``, ``element7``, ``element_7``).

        Raises:
            UnknownFieldError: If the name is neither declared nor
                positional, or the index is negative.
        """
        if isinstance(selector, bool):
            raise UnknownFieldError(self.type_id, selector)
        if isinstance(selector, int):
            if selector < 0:
                raise UnknownFieldError(self.type_id, selector)
            return selector
        if isinstance(selector, str):
            idx = self.layout.index_of(selector)
            if idx is not None:
                return idx
            match = _POSITIONAL_NAME.match(selector)
            if match:
                return int(match.group(1))
            raise UnknownFieldError(self.type_id, selector)
        msg = f"Field selector must be str or int, got {type(selector).__name__}"
        raise TypeError(msg)

    def read_field(self, selector: FieldSelector) -> str | None:
        """Return the raw value of a field, or None if it is past the end.

        Values are kept as plain strings, so a single-item repetition reads
        as that item and a value with embedded item delimiters is returned
        unmodified. Use ``read_items`` to split repetitions.

        A one-item repetition needs no unwrapping: it is already stored as
        the bare item string.
        """
        idx = self.resolve(selector)
        if idx >= len(self.fields):
            return None
        return self.fields[idx]

    def read_items(self, selector: FieldSelector) -> list[str]:
        """Return a field split on the item delimiter ([] when absent)."""
        value = self.read_field(selector)
        if value is None:
            return []
        return value.split(self.item_delim)

    def write_field(self, selector: FieldSelector, value: Any) -> None:
        """Store ``value`` at the resolved index, padding with empty fields."""
        idx = self.resolve(selector)
        if idx >= len(self.fields):
            # Absent fields are empty on the wire.
            self.fields.extend([""] * (idx + 1 - len(self.fields)))
        self.fields[idx] = self._to_field_value(value)

    def _to_field_value(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, Sequence) and not isinstance(value, str):
            return self.item_delim.join("" if v is None else str(v) for v in value)
        return str(value)

    def to_raw(self, element_delim: str | None = None) -> str:
        return (element_delim or self.element_delim).join(self.fields)

    def to_info(self) -> str:
        """Debug description of the segment and its fields."""
        return f"{self.type_id or '<generic>'}: {len(self.fields)} fields >> {self.fields!r}"

    def compare(self, other: Segment) -> int:
        """Order by weight: -1 if self sorts first, 1 if after, 0 on ties."""
        if self.weight < other.weight:
            return -1
        if self.weight > other.weight:
            return 1
        return 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.compare(other) >= 0

    def __getitem__(self, selector: FieldSelector) -> str | None:
        return self.read_field(selector)

    def __setitem__(self, selector: FieldSelector, value: Any) -> None:
        self.write_field(selector, value)

    def __len__(self) -> int:
        return len(self.fields)

    def __str__(self) -> str:
        return self.to_raw()


__all__ = ["FieldSelector", "Segment"]
