from __future__ import annotations

import json
from datetime import date, datetime
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    TypeDecorator,
    Uuid,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class StringList(TypeDecorator):
    """Stores a list of strings as ARRAY in PostgreSQL, JSON in SQLite."""

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(ARRAY(String))
        else:
            return dialect.type_descriptor(Text)

    def process_bind_param(self, value, dialect):
        if value is None:
            value = []
        if dialect.name == "postgresql":
            return value
        else:
            return json.dumps(value)

    def process_result_value(self, value, dialect):
        if dialect.name == "postgresql":
            return value if value is not None else []
        else:
            if value is None:
                return []
            return json.loads(value) if value else []


class BreedingEventORM(Base):
    """Append-only ledger row. No update or delete path exists in the repository."""

    __tablename__ = "breeding_events"
    __table_args__ = (
        Index("ix_breeding_events_farm_date", "farm_id", "event_date"),
        Index("ix_breeding_events_animal_date", "farm_id", "animal_id", "event_date"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    animal_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False
    )
    event_type: Mapped[str] = mapped_column(String(32), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    recorded_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    heat_signs: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)
    heat_action_taken: Mapped[str | None] = mapped_column(String(255), nullable=True)

    insemination_method: Mapped[str | None] = mapped_column(String(32), nullable=True)
    semen_bull_code: Mapped[str | None] = mapped_column(String(64), nullable=True)
    semen_batch: Mapped[str | None] = mapped_column(String(128), nullable=True)
    technician_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    pregnancy_result: Mapped[str | None] = mapped_column(String(16), nullable=True)
    examination_method: Mapped[str | None] = mapped_column(String(64), nullable=True)
    veterinarian_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    estimated_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    calving_outcome: Mapped[str | None] = mapped_column(String(16), nullable=True)
    calf: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    create_calf: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
