"""SQLAlchemy models for stored speech records."""
from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlalchemy import Date, DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative SQLAlchemy base class."""


class SpeechRecordModel(Base):
    """Database representation of a floor speech."""

    __tablename__ = "speech_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String(512), index=True)
    sequence_number: Mapped[int] = mapped_column(Integer)
    date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(1024))
    speaker: Mapped[str] = mapped_column(String(256), index=True)
    text: Mapped[str] = mapped_column(Text)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, server_default=func.now())


__all__ = ["Base", "SpeechRecordModel"]
