from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Integer, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class BreedingSettingsORM(Base):
    __tablename__ = "farm_breeding_settings"

    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    default_gestation_days: Mapped[int] = mapped_column(Integer, nullable=False, default=280)
    pregnancy_check_days: Mapped[int] = mapped_column(Integer, nullable=False, default=45)
    days_pregnant_at_dryoff: Mapped[int] = mapped_column(Integer, nullable=False, default=220)
    postpartum_breeding_delay_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=60
    )
    minimum_breeding_age_months: Mapped[int] = mapped_column(Integer, nullable=False, default=15)
    default_cycle_interval: Mapped[int] = mapped_column(Integer, nullable=False, default=21)
    auto_schedule_pregnancy_check: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    auto_create_dry_off: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    auto_create_lactation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
