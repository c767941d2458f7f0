from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.interfaces.http.schemas.animals import AnimalResponse


class CalfInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tag_number: str | None = None
    name: str | None = None
    gender: str | None = None  # male | female
    breed: str | None = None
    weight_kg: float | None = Field(default=None, ge=0)
    health_status: str | None = None
    father_info: str | None = None

    @field_validator("gender")
    @classmethod
    def normalize_gender(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().lower()
        if v not in {"male", "female"}:
            raise ValueError("gender must be male or female")
        return v


class BreedingEventCreate(BaseModel):
    animal_id: UUID
    event_type: str  # heat_detection | insemination | pregnancy_check | calving
    event_date: date
    notes: str | None = None
    recorded_by: str | None = None

    heat_signs: list[str] = Field(default_factory=list)
    heat_action_taken: str | None = None

    insemination_method: str | None = None
    semen_bull_code: str | None = None
    semen_batch: str | None = None
    technician_name: str | None = None

    pregnancy_result: str | None = None  # pregnant | not_pregnant | uncertain
    examination_method: str | None = None
    veterinarian_name: str | None = None
    estimated_due_date: date | None = None

    calving_outcome: str | None = None
    calf: CalfInfo | None = None
    create_calf: bool = False

    @field_validator("event_date", mode="before")
    @classmethod
    def date_only(cls, v):
        # Accept full timestamps, only the calendar day matters
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return v


class BreedingEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    animal_id: UUID
    event_type: str
    event_date: date
    notes: str | None
    recorded_by: str | None
    heat_signs: list[str]
    heat_action_taken: str | None
    insemination_method: str | None
    semen_bull_code: str | None
    semen_batch: str | None
    technician_name: str | None
    pregnancy_result: str | None
    examination_method: str | None
    veterinarian_name: str | None
    estimated_due_date: date | None
    calving_outcome: str | None
    calf: CalfInfo | None
    create_calf: bool
    created_at: datetime


class CalendarEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    animal_id: UUID
    event_type: str
    scheduled_date: date
    status: str
    notes: str | None
    source_event_id: UUID | None
    completed_event_id: UUID | None


class SubmitEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event: BreedingEventResponse
    animal: AnimalResponse
    previous_status: str
    new_status: str
    calendar_entries: list[CalendarEntryResponse]
    resolved_entries: list[CalendarEntryResponse]
    calf_created: AnimalResponse | None = None
    warnings: list[str]
    message: str | None = None


class BreedingTrendsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    heat_detection_trend: int
    insemination_trend: int
    pregnancy_trend: int


class BreedingStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    as_of: date
    total_inseminations: int
    total_pregnancy_checks: int
    total_calvings: int
    total_heat_detections: int
    recent_heat_detections: int
    currently_pregnant: int
    expected_calvings_this_month: int
    conception_rate: int
    trends: BreedingTrendsResponse


class AlertResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    animal_id: UUID
    animal_tag: str | None
    animal_name: str | None
    priority: str
    severity: str
    days_remaining: int
    due_date: date
    message: str


class BreedingSettingsUpdate(BaseModel):
    default_gestation_days: int | None = None
    pregnancy_check_days: int | None = None
    days_pregnant_at_dryoff: int | None = None
    postpartum_breeding_delay_days: int | None = None
    minimum_breeding_age_months: int | None = None
    default_cycle_interval: int | None = None
    auto_schedule_pregnancy_check: bool | None = None
    auto_create_dry_off: bool | None = None
    auto_create_lactation: bool | None = None


class BreedingSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    farm_id: UUID
    default_gestation_days: int
    pregnancy_check_days: int
    days_pregnant_at_dryoff: int
    postpartum_breeding_delay_days: int
    minimum_breeding_age_months: int
    default_cycle_interval: int
    auto_schedule_pregnancy_check: bool
    auto_create_dry_off: bool
    auto_create_lactation: bool
    dry_period_days: int
    updated_at: datetime


class EligibilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    can_breed: bool
    reasons: list[str]
    blockers: list[str]
    recommendations: list[str]
    next_breeding_date: date | None = None
