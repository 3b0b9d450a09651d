"""
Pydantic models for words, sheets and the library export format.

Word and WordSheet are the in-memory snapshots handed out by the word
store. The review core only reads id, learned, review_count, last_reviewed
and sheet_id, and only writes learned, review_count and last_reviewed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---- Library entities ----

class WordSheet(BaseModel):
    """A named, dated collection of words (a deck)."""
    id: UUID = Field(default_factory=uuid4)
    name: str = ""
    created_at: datetime = Field(default_factory=utc_now)


class Word(BaseModel):
    """
    A single vocabulary entry and its review history.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    term: str = ""
    definition: str = ""
    part_of_speech: str = ""
    pronunciation: str = ""
    example: str = ""
    example_translation: str = ""

    # Review history
    learned: bool = False
    review_count: int = Field(default=0, ge=0, description="Completed verdicts on this word")
    last_reviewed: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utc_now)
    sheet_id: Optional[UUID] = None


# ---- Export format ----
# Field aliases keep files compatible with libraries exported by the mobile app.

class ExportSheet(BaseModel):
    """A sheet as stored in an export file."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    created_at: float = Field(..., alias="createdAt", description="Seconds since the Unix epoch")


class ExportWord(BaseModel):
    """A word as stored in an export file."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    term: str
    definition: str = ""
    part_of_speech: str = Field(default="", alias="partOfSpeech")
    pronunciation: str = ""
    example: str = ""
    example_translation: str = Field(default="", alias="exampleCn")
    learned: bool = False
    review_count: int = Field(default=0, ge=0, alias="reviewCount")
    last_reviewed: Optional[float] = Field(default=None, alias="lastReviewed")
    created_at: float = Field(..., alias="createdAt")
    sheet_id: Optional[str] = Field(default=None, alias="sheetId")


class ExportData(BaseModel):
    """Top-level document of a library export."""
    words: list[ExportWord] = Field(default_factory=list)
    sheets: list[ExportSheet] = Field(default_factory=list)
