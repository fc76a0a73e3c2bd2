"""
incidentstore — Payload and record schemas.

Wire format is camelCase (``createdAt``, ``incidentId``); Python attributes
and repository records are snake_case. Every schema forbids unknown fields.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, model_validator
from pydantic.alias_generators import to_camel

IncidentStatus = Literal["open", "closed"]

# Signed 64-bit range of the integer id columns.
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1


# ── Bases ─────────────────────────────────────────────────────────────────────

class RecordSchema(BaseModel):
    """Shape of a stored row. Strict: stored data is checked, never coerced."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        strict=True,
        frozen=True,
    )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class PayloadSchema(BaseModel):
    """Untrusted client input, accepted by camelCase name only."""

    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    # Fields that may be omitted from a patch but never set to null.
    not_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_explicit_null(self):
        for name in self.not_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def values(self) -> dict[str, Any]:
        return self.model_dump()


class PatchSchema(PayloadSchema):
    def values(self) -> dict[str, Any]:
        # Only the fields the client sent are written.
        return self.model_dump(exclude_unset=True)


# ── Incidents ─────────────────────────────────────────────────────────────────

class IncidentRecord(RecordSchema):
    id: int
    created_at: datetime
    updated_at: datetime
    name: str = Field(min_length=1)
    description: Optional[str]
    status: IncidentStatus


class IncidentCreate(PayloadSchema):
    name: StrictStr = Field(min_length=1)
    description: Optional[StrictStr] = None
    status: IncidentStatus


class IncidentPatch(PatchSchema):
    not_nullable: ClassVar[tuple[str, ...]] = ("name", "status")

    name: Optional[StrictStr] = Field(default=None, min_length=1)
    description: Optional[StrictStr] = None
    status: Optional[IncidentStatus] = None


# ── Services ──────────────────────────────────────────────────────────────────

class ServiceRecord(RecordSchema):
    id: int
    created_at: datetime
    updated_at: datetime
    name: str
    description: Optional[str]


class ServiceCreate(PayloadSchema):
    name: StrictStr
    description: Optional[StrictStr] = None


class ServicePatch(PatchSchema):
    not_nullable: ClassVar[tuple[str, ...]] = ("name",)

    name: Optional[StrictStr] = None
    description: Optional[StrictStr] = None


# ── Alerts ────────────────────────────────────────────────────────────────────

class AlertRecord(RecordSchema):
    id: int
    created_at: datetime
    updated_at: datetime
    name: str
    description: Optional[str]
    incident_id: Optional[int]
    service_id: Optional[int]


class AlertCreate(PayloadSchema):
    name: StrictStr
    description: Optional[StrictStr] = None
    incident_id: Optional[StrictInt] = Field(default=None, ge=ID_MIN, le=ID_MAX)
    service_id: Optional[StrictInt] = Field(default=None, ge=ID_MIN, le=ID_MAX)


class AlertPatch(PatchSchema):
    not_nullable: ClassVar[tuple[str, ...]] = ("name",)

    name: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    incident_id: Optional[StrictInt] = Field(default=None, ge=ID_MIN, le=ID_MAX)
    service_id: Optional[StrictInt] = Field(default=None, ge=ID_MIN, le=ID_MAX)
