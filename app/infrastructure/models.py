from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _utcnow_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class AssessmentResultORM(Base):
    __tablename__ = "assessments"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    organization_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    session_id: Mapped[str] = mapped_column(String(36), nullable=False)
    # 13 raw metric totals in canonical metric order
    scores: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    overall_percentage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    leadership_family: Mapped[str] = mapped_column(String(32), nullable=False)
    leadership_type: Mapped[str] = mapped_column(String(32), nullable=False)
    responses: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=_utcnow_naive, nullable=False
    )

    __table_args__ = (Index("ix_assessments_org_completed", "organization_id", "completed_at"),)
