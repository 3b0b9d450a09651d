"""
SQLAlchemy ORM Models for the word store

Defines WordSheetRecord and WordRecord tables.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class WordSheetRecord(Base):
    """
    A named, dated collection of words.
    """
    __tablename__ = 'word_sheets'

    id = Column(String(36), primary_key=True)  # UUID string
    name = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<WordSheetRecord({self.id}, {self.name!r})>"


class WordRecord(Base):
    """
    Persistent vocabulary entry and its review history.
    """
    __tablename__ = 'words'

    id = Column(String(36), primary_key=True)  # UUID string

    # Card content
    term = Column(String(255), nullable=False)
    definition = Column(Text, nullable=False, default="")
    part_of_speech = Column(String(50), nullable=False, default="")
    pronunciation = Column(String(255), nullable=False, default="")
    example = Column(Text, nullable=False, default="")
    example_translation = Column(Text, nullable=False, default="")

    # Review tracking
    learned = Column(Boolean, nullable=False, default=False)
    review_count = Column(Integer, nullable=False, default=0)
    last_reviewed = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    sheet_id = Column(
        String(36),
        ForeignKey('word_sheets.id', ondelete='CASCADE'),
        nullable=True,
        index=True,
    )

    def __repr__(self):
        return f"<WordRecord({self.id}, {self.term!r}, reviews={self.review_count})>"
