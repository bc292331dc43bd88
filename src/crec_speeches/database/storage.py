"""Persistence helpers built on SQLAlchemy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, List, Sequence

from sqlalchemy import create_engine, delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..core.types import SpeechRecord
from .models import Base, SpeechRecordModel


class Storage:
    """Wrapper around SQLAlchemy to store finished crawl results."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ensure_schema(self) -> None:
        Base.metadata.create_all(self._engine)

    def replace_records(self, records: Sequence[SpeechRecord]) -> int:
        """Store ``records``, replacing earlier rows of the same granule URLs."""

        grouped: Dict[str, List[SpeechRecord]] = {}
        for record in records:
            grouped.setdefault(record.url, []).append(record)
        with self.session() as session:
            if grouped:
                session.execute(delete(SpeechRecordModel).where(SpeechRecordModel.url.in_(list(grouped))))
            for url, url_records in grouped.items():
                for sequence_number, record in enumerate(url_records, start=1):
                    session.add(
                        SpeechRecordModel(
                            url=url,
                            sequence_number=sequence_number,
                            date=record.date,
                            title=record.title,
                            speaker=record.speaker,
                            text=record.text,
                        )
                    )
            session.flush()
        return len(records)

    def list_records(self, limit: int = 25) -> List[SpeechRecord]:
        """Return the most recent stored speeches in crawl order."""

        with self.session() as session:
            stmt = (
                select(SpeechRecordModel)
                .order_by(
                    SpeechRecordModel.date.desc().nullslast(),
                    SpeechRecordModel.url,
                    SpeechRecordModel.sequence_number,
                )
                .limit(limit)
            )
            return [
                SpeechRecord(url=row.url, date=row.date, title=row.title, speaker=row.speaker, text=row.text)
                for row in session.scalars(stmt)
            ]

    def count_records(self) -> int:
        with self.session() as session:
            return session.scalar(select(func.count(SpeechRecordModel.id))) or 0

    def dispose(self) -> None:
        """Dispose the underlying SQLAlchemy engine."""

        self._engine.dispose()


def create_storage(database_url: str, *, echo: bool = False) -> Storage:
    engine = create_engine(database_url, echo=echo, future=True)
    storage = Storage(engine)
    storage.ensure_schema()
    return storage


__all__ = ["Storage", "create_storage"]
