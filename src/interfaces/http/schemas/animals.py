from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class AnimalCreate(BaseModel):
    tag: str
    name: str | None = None
    breed: str | None = None
    birth_date: date | None = None
    sex: str | None = None  # MALE | FEMALE
    dam_id: UUID | None = None
    weight_kg: float | None = None
    health_status: str | None = None
    notes: str | None = None
    production_status: str = "heifer"

    @field_validator("tag")
    @classmethod
    def strip_tag(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("tag cannot be empty")
        return v

    @field_validator("sex")
    @classmethod
    def normalize_sex(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().upper()
        if v not in {"MALE", "FEMALE"}:
            raise ValueError("sex must be MALE or FEMALE")
        return v


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    tag: str
    name: str | None
    breed: str | None
    birth_date: date | None
    sex: str | None
    dam_id: UUID | None
    weight_kg: float | None
    health_status: str | None
    notes: str | None
    production_status: str
    service_date: date | None
    expected_calving_date: date | None
    created_at: datetime
    updated_at: datetime
    version: int
