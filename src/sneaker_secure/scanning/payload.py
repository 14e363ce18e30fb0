"""
Scanner payload parsing.

The symbol decoder hands over a raw JSON string (or an already decoded
object). Only payloads that are a JSON object with a non-blank string ``id``
are accepted; everything else is rejected with a ValidationError naming the
offending field.
"""

from typing import Any, List, Mapping, Optional, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..catalog.types import Item, OwnershipRecord
from ..core.exceptions import ValidationError, collect_field_errors

RawPayload = Union[str, bytes, Mapping[str, Any]]


class HistoryEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    date: str = ""


class ScanPayload(BaseModel):
    """Validated scanner payload, using the stored field names."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    description: str = ""
    imageUrl: str = ""
    manufactureNumber: Optional[Union[str, int]] = None
    gallery: List[str] = Field(default_factory=list)
    history: List[HistoryEntry] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def _check_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("id must not be blank")
        return v

    def to_item(self) -> Item:
        return Item(
            id=self.id,
            name=self.name,
            description=self.description,
            image_url=self.imageUrl,
            manufacture_number=(
                str(self.manufactureNumber)
                if self.manufactureNumber is not None
                else None
            ),
            gallery=list(self.gallery),
            history=[
                OwnershipRecord(name=entry.name, date=entry.date)
                for entry in self.history
            ],
        )


def parse_scan_payload(raw: RawPayload) -> ScanPayload:
    """Decode and validate a scanner payload.

    Raises:
        ValidationError: If the payload is not JSON, not an object, or has no usable id
    """
    try:
        if isinstance(raw, (str, bytes)):
            return ScanPayload.model_validate_json(raw)
        if isinstance(raw, Mapping):
            return ScanPayload.model_validate(dict(raw))
    except pydantic.ValidationError as e:
        errors = e.errors()
        field = collect_field_errors(errors)
        reason = errors[0]["msg"] if errors else "invalid payload"
        raise ValidationError(field, raw, reason, component="scanner") from e

    raise ValidationError(
        "payload", raw, "expected a JSON object", component="scanner"
    )
