"""
Database - Word Store I/O Operations

Handles all database operations for words and sheets.
Uses SQLAlchemy ORM; SQLite by default, any SQLAlchemy URL works.

This module handles ONLY database I/O.
Review logic lives in vocab.review.
"""

from __future__ import annotations
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable, Iterator, Optional
from uuid import UUID

from sqlalchemy import create_engine, exists, func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from vocab.config import Settings
from vocab.errors import StoreError
from vocab.schemas import Word, WordSheet
from vocab.store.models import Base, WordRecord, WordSheetRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LibraryStats:
    """Word counts for the home screen."""
    total: int
    learned: int

    @property
    def unlearned(self) -> int:
        return self.total - self.learned


def get_engine(database_url: str) -> Engine:
    """
    Create a SQLAlchemy engine for the word store.

    In-memory SQLite shares one connection so every session sees the same
    database; server databases get a small connection pool.
    """
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_url.startswith("sqlite"):
        return create_engine(database_url)
    return create_engine(
        database_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
    )


def format_sheet_name(day: date, language: str = "en") -> str:
    """
    Name of the sheet that collects words added on `day`.

    English: "January 5, 2026"; Chinese: "2026年1月5日".
    """
    if language == "zh":
        return f"{day.year}年{day.month}月{day.day}日"
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo; everything is written as UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_word(record: WordRecord) -> Word:
    return Word(
        id=UUID(record.id),
        term=record.term,
        definition=record.definition or "",
        part_of_speech=record.part_of_speech or "",
        pronunciation=record.pronunciation or "",
        example=record.example or "",
        example_translation=record.example_translation or "",
        learned=bool(record.learned),
        review_count=record.review_count or 0,
        last_reviewed=_as_utc(record.last_reviewed),
        created_at=_as_utc(record.created_at),
        sheet_id=UUID(record.sheet_id) if record.sheet_id else None,
    )


def _to_record(word: Word) -> WordRecord:
    return WordRecord(
        id=str(word.id),
        term=word.term,
        definition=word.definition,
        part_of_speech=word.part_of_speech,
        pronunciation=word.pronunciation,
        example=word.example,
        example_translation=word.example_translation,
        learned=word.learned,
        review_count=word.review_count,
        last_reviewed=_as_utc(word.last_reviewed),
        created_at=_as_utc(word.created_at),
        sheet_id=str(word.sheet_id) if word.sheet_id else None,
    )


def _to_sheet(record: WordSheetRecord) -> WordSheet:
    return WordSheet(
        id=UUID(record.id),
        name=record.name,
        created_at=_as_utc(record.created_at),
    )


@dataclass(frozen=True)
class ImportResult:
    sheets_created: int
    sheets_renamed: int
    words_imported: int
    words_skipped: int


class WordStore:
    """
    Word and sheet persistence.

    Hands out pydantic snapshots (Word, WordSheet); the review core mutates
    them and save_words() writes the review fields back.
    """

    def __init__(self, engine: Engine, language: str = "en"):
        self.engine = engine
        self.language = language
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str, create: bool = True) -> "WordStore":
        store = cls(get_engine(database_url))
        if create:
            store.init_db()
        return store

    @classmethod
    def from_settings(cls, settings: Settings, create: bool = True) -> "WordStore":
        store = cls(get_engine(settings.database_url), language=settings.language)
        if create:
            store.init_db()
        return store

    # ---- Schema ----

    def init_db(self) -> None:
        """
        Create tables if they don't exist.

        Safe to call multiple times.
        """
        Base.metadata.create_all(self.engine)

    def reset_db(self) -> None:
        """
        DANGEROUS: Delete all words and sheets and recreate tables.
        """
        Base.metadata.drop_all(self.engine)
        logger.warning("Dropped all word store tables")
        self.init_db()

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StoreError(f"Failed to {action}: {exc}") from exc
        finally:
            session.close()

    # ---- Words ----

    def list_words(self, sheet_id: Optional[UUID] = None) -> list[Word]:
        """
        Get all words, oldest first.

        Args:
            sheet_id: If provided, only words in this sheet

        Returns:
            List of Word snapshots
        """
        with self._session("list words") as session:
            query = session.query(WordRecord)
            if sheet_id is not None:
                query = query.filter(WordRecord.sheet_id == str(sheet_id))
            records = query.order_by(WordRecord.created_at, WordRecord.id).all()
            return [_to_word(record) for record in records]

    def get_word(self, word_id: UUID) -> Optional[Word]:
        with self._session("load word") as session:
            record = session.get(WordRecord, str(word_id))
            return _to_word(record) if record is not None else None

    def add_word(self, word: Word, use_today_sheet: bool = True) -> Word:
        """
        Insert a new word.

        Args:
            word: Word to insert
            use_today_sheet: If True, a word without a sheet is filed under
                today's sheet
        """
        if word.sheet_id is None and use_today_sheet:
            word.sheet_id = self.get_or_create_today_sheet().id

        with self._session("add word") as session:
            session.add(_to_record(word))
        return word

    def delete_word(self, word_id: UUID) -> bool:
        """
        Delete a word and its review history.

        Returns:
            True if the word existed
        """
        with self._session("delete word") as session:
            record = session.get(WordRecord, str(word_id))
            if record is None:
                return False
            session.delete(record)
            return True

    def save_words(self, words: Iterable[Word]) -> int:
        """
        Write review fields (learned, review_count, last_reviewed) back in
        a single transaction.

        Words no longer in the store are skipped.

        Returns:
            Number of rows updated

        Raises:
            StoreError: if the transaction fails; nothing is written
        """
        words = list(words)
        if not words:
            return 0

        updated = 0
        with self._session("save words") as session:
            for word in words:
                record = session.get(WordRecord, str(word.id))
                if record is None:
                    logger.warning("Skipping save for deleted word %s", word.id)
                    continue
                record.learned = word.learned
                record.review_count = word.review_count
                record.last_reviewed = _as_utc(word.last_reviewed)
                updated += 1
        return updated

    def scope_for_sheet(self, sheet_id: Optional[UUID]) -> Optional[frozenset[UUID]]:
        """
        Word-id scope for the sheet picker. None (all sheets) gives no scope.
        """
        if sheet_id is None:
            return None
        with self._session("load sheet scope") as session:
            rows = session.query(WordRecord.id).filter(WordRecord.sheet_id == str(sheet_id)).all()
            return frozenset(UUID(row.id) for row in rows)

    def stats(self) -> LibraryStats:
        with self._session("count words") as session:
            total = session.query(func.count(WordRecord.id)).scalar() or 0
            learned = (
                session.query(func.count(WordRecord.id))
                .filter(WordRecord.learned.is_(True))
                .scalar()
                or 0
            )
            return LibraryStats(total=total, learned=learned)

    # ---- Sheets ----

    def list_sheets(self, with_words_only: bool = False) -> list[WordSheet]:
        """
        Get sheets, newest first.

        Args:
            with_words_only: If True, skip sheets that hold no words (what
                the sheet picker shows)
        """
        with self._session("list sheets") as session:
            query = session.query(WordSheetRecord)
            if with_words_only:
                query = query.filter(
                    exists().where(WordRecord.sheet_id == WordSheetRecord.id)
                )
            records = query.order_by(WordSheetRecord.created_at.desc()).all()
            return [_to_sheet(record) for record in records]

    def get_sheet(self, sheet_id: UUID) -> Optional[WordSheet]:
        with self._session("load sheet") as session:
            record = session.get(WordSheetRecord, str(sheet_id))
            return _to_sheet(record) if record is not None else None

    def get_or_create_sheet(self, name: str) -> WordSheet:
        """
        Return the sheet called `name`, creating it if needed.
        """
        with self._session("get or create sheet") as session:
            record = session.query(WordSheetRecord).filter(WordSheetRecord.name == name).first()
            if record is None:
                sheet = WordSheet(name=name)
                record = WordSheetRecord(
                    id=str(sheet.id),
                    name=sheet.name,
                    created_at=_as_utc(sheet.created_at),
                )
                session.add(record)
                logger.info("Created sheet %r", name)
            return _to_sheet(record)

    def get_or_create_today_sheet(
        self,
        today: Optional[date] = None,
        language: Optional[str] = None,
    ) -> WordSheet:
        """Return the sheet collecting words added today."""
        if today is None:
            today = date.today()
        return self.get_or_create_sheet(format_sheet_name(today, language or self.language))

    def upsert_sheet(self, sheet: WordSheet) -> bool:
        """
        Insert a sheet, or rename the existing sheet with the same id.

        Returns:
            True if a new sheet was created
        """
        with self._session("save sheet") as session:
            record = session.get(WordSheetRecord, str(sheet.id))
            if record is not None:
                record.name = sheet.name
                return False
            session.add(
                WordSheetRecord(
                    id=str(sheet.id),
                    name=sheet.name,
                    created_at=_as_utc(sheet.created_at),
                )
            )
            return True

    def import_library(self, sheets: Iterable[WordSheet], words: Iterable[Word]) -> ImportResult:
        """
        Merge sheets and words in a single transaction.

        Sheets with a known id are renamed; words with a known id (or
        repeated in the batch) are skipped. If anything fails nothing is
        written.

        Raises:
            StoreError: if the transaction fails
        """
        created = renamed = imported = skipped = 0
        with self._session("import library") as session:
            for sheet in sheets:
                record = session.get(WordSheetRecord, str(sheet.id))
                if record is not None:
                    record.name = sheet.name
                    renamed += 1
                    continue
                session.add(
                    WordSheetRecord(
                        id=str(sheet.id),
                        name=sheet.name,
                        created_at=_as_utc(sheet.created_at),
                    )
                )
                created += 1

            seen: set[UUID] = set()
            for word in words:
                if word.id in seen or session.get(WordRecord, str(word.id)) is not None:
                    skipped += 1
                    continue
                seen.add(word.id)
                session.add(_to_record(word))
                imported += 1

        return ImportResult(
            sheets_created=created,
            sheets_renamed=renamed,
            words_imported=imported,
            words_skipped=skipped,
        )
