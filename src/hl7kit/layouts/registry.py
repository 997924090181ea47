"""Segment layout registry for hl7kit.

A layout maps a segment type identifier (e.g. "PID") to the symbolic names
of its fields and an ordering weight. Layouts are declared as data in
``segments.yaml`` next to this module and loaded into a registry once per
process; extra layouts can be merged from a file named by configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from hl7kit.common.config import HL7Config
from hl7kit.common.constants import UNORDERED_WEIGHT

logger = logging.getLogger(__name__)

_PACKAGED_LAYOUTS = Path(__file__).parent / "segments.yaml"


class SegmentLayout(BaseModel):
    """Field-name to index mapping and ordering weight for one segment type."""

    model_config = ConfigDict(frozen=True)

    type_id: str
    weight: int = UNORDERED_WEIGHT
    field_map: dict[str, int] = Field(default_factory=dict)

    @field_validator("field_map")
    @classmethod
    def check_indices(cls, value: dict[str, int]) -> dict[str, int]:
        """Field indices are 0-based positions and cannot be negative."""
        negative = sorted(name for name, idx in value.items() if idx < 0)
        if negative:
            msg = f"Negative field index for {negative}"
            raise ValueError(msg)
        return value

    def index_of(self, name: str) -> int | None:
        return self.field_map.get(name)

    def has_field(self, name: str) -> bool:
        return name in self.field_map


# Unregistered segment types are bound to this layout: positional storage
# plus a sequence id at index 1.
GENERIC_LAYOUT = SegmentLayout(type_id="", field_map={"sid": 1})


class SegmentLayoutRegistry:
    """Lookup table from segment type identifier to SegmentLayout."""

    def __init__(self, layouts: Iterable[SegmentLayout] = ()) -> None:
        self._layouts: dict[str, SegmentLayout] = {}
        for layout in layouts:
            self._layouts[layout.type_id] = layout

    def register(
        self,
        type_id: str,
        weight: int = UNORDERED_WEIGHT,
        field_map: Mapping[str, int] | None = None,
    ) -> SegmentLayout:
        """Add or replace the layout for ``type_id``; the last call wins."""
        layout = SegmentLayout(type_id=type_id, weight=weight, field_map=dict(field_map or {}))
        if type_id in self._layouts:
            logger.debug("Replacing layout for segment type %s", type_id)
        self._layouts[type_id] = layout
        return layout

    def lookup(self, type_id: str) -> SegmentLayout | None:
        return self._layouts.get(type_id)

    def weight_of(self, type_id: str) -> int:
        layout = self._layouts.get(type_id)
        if layout is None:
            return UNORDERED_WEIGHT
        return layout.weight

    @property
    def type_ids(self) -> list[str]:
        return list(self._layouts)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._layouts

    def __len__(self) -> int:
        return len(self._layouts)

    def __iter__(self) -> Iterator[SegmentLayout]:
        return iter(self._layouts.values())

    @classmethod
    def from_yaml(cls, *paths: Path) -> SegmentLayoutRegistry:
        """Build a registry from layout files; later files override earlier ones."""
        registry = cls()
        for path in paths:
            for layout in load_layouts(path):
                registry._layouts[layout.type_id] = layout
        return registry


def _parse_layouts(raw: Any) -> list[SegmentLayout]:
    """Convert the parsed YAML document into SegmentLayout models."""
    if not isinstance(raw, dict) or not isinstance(raw.get("segments"), dict):
        msg = "Layout file must contain a 'segments' mapping"
        raise ValueError(msg)

    layouts: list[SegmentLayout] = []
    for type_id, spec in raw["segments"].items():
        spec = spec or {}
        if not isinstance(spec, dict):
            msg = f"Invalid layout spec for '{type_id}': {spec}"
            raise ValueError(msg)
        layouts.append(
            SegmentLayout(
                type_id=str(type_id),
                weight=spec.get("weight", UNORDERED_WEIGHT),
                field_map=spec.get("fields") or {},
            )
        )
    return layouts


def load_layouts(path: Path) -> list[SegmentLayout]:
    """Load the segment layouts declared in a single YAML file.

    Args:
        path: YAML file with a top-level ``segments`` mapping of type
            identifier to ``{weight, fields}``.

    Returns:
        Layouts in declaration order.

    Raises:
        ValueError: If the document is not shaped like a layout file.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    layouts = _parse_layouts(raw)
    logger.info("Loaded %d segment layouts from %s", len(layouts), path)
    return layouts


@lru_cache(maxsize=1)
def get_default_registry() -> SegmentLayoutRegistry:
    """Return the process-wide registry, built on first use.

    The packaged layouts are loaded first; ``HL7KIT_LAYOUTS_FILE`` may name
    an extra file whose layouts override them.
    """
    paths = [_PACKAGED_LAYOUTS]
    extra = HL7Config().layouts_file
    if extra is not None:
        paths.append(extra)
    return SegmentLayoutRegistry.from_yaml(*paths)


__all__ = [
    "GENERIC_LAYOUT",
    "SegmentLayout",
    "SegmentLayoutRegistry",
    "get_default_registry",
    "load_layouts",
]
