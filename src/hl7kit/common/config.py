"""Application configuration using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings

from hl7kit.common.constants import ELEMENT_DELIMITER, ITEM_DELIMITER, SEGMENT_DELIMITER


class Delimiters(BaseModel):
    """The three single-character delimiters of the HL7 wire format."""

    model_config = ConfigDict(frozen=True)

    element: str = Field(default=ELEMENT_DELIMITER, min_length=1, max_length=1)
    item: str = Field(default=ITEM_DELIMITER, min_length=1, max_length=1)
    segment: str = Field(default=SEGMENT_DELIMITER, min_length=1, max_length=1)

    @model_validator(mode="after")
    def check_distinct(self) -> Delimiters:
        """Reject configurations where two delimiters collide."""
        if len({self.element, self.item, self.segment}) != 3:
            msg = f"Delimiters must be distinct: {self.element!r}, {self.item!r}, {self.segment!r}"
            raise ValueError(msg)
        return self


class HL7Config(BaseSettings):
    """hl7kit configuration loaded from environment variables."""

    element_delim: str = ELEMENT_DELIMITER
    item_delim: str = ITEM_DELIMITER
    segment_delim: str = SEGMENT_DELIMITER

    # Extra layout file merged over the packaged segment layouts.
    layouts_file: Path | None = None

    model_config = {"env_prefix": "HL7KIT_", "case_sensitive": False}

    def delimiters(self) -> Delimiters:
        return Delimiters(
            element=self.element_delim,
            item=self.item_delim,
            segment=self.segment_delim,
        )


__all__ = ["Delimiters", "HL7Config"]
