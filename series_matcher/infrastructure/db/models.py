from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class UserFavoriteSeries(Base):
    __tablename__ = "user_favorite_series"
    __table_args__ = (
        UniqueConstraint("user_id", "series_tmdb_id", name="uq_user_favorite_series_user_series"),
        Index("ix_user_favorite_series_user_id", "user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    series_tmdb_id: Mapped[int] = mapped_column(Integer(), nullable=False)

    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now()
    )


class UserIgnoredSeries(Base):
    __tablename__ = "user_ignored_series"
    __table_args__ = (
        UniqueConstraint("user_id", "series_tmdb_id", name="uq_user_ignored_series_user_series"),
        Index("ix_user_ignored_series_user_id", "user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    series_tmdb_id: Mapped[int] = mapped_column(Integer(), nullable=False)

    ignored_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now()
    )
