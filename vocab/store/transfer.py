"""
Library export and import.

The export file is a JSON document with "words" and "sheets" lists;
timestamps are seconds since the Unix epoch. Import is additive:
sheets with a known id are renamed, words with a known id are skipped.
"""

from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import ValidationError

from vocab.errors import ImportFormatError
from vocab.schemas import ExportData, ExportSheet, ExportWord, Word, WordSheet
from vocab.store.database import ImportResult, WordStore


logger = logging.getLogger(__name__)


def _to_timestamp(value: datetime) -> float:
    return value.timestamp()


def _from_timestamp(value: float) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _parse_uuid(value: Optional[str]) -> UUID:
    # Files edited by hand may carry broken ids; give those a fresh one
    try:
        return UUID(value)
    except (TypeError, ValueError):
        logger.warning("Invalid id %r in export file, assigning a new one", value)
        return uuid4()


def export_library(store: WordStore) -> ExportData:
    """
    Snapshot every word and sheet in the store.
    """
    words = [
        ExportWord(
            id=str(word.id),
            term=word.term,
            definition=word.definition,
            part_of_speech=word.part_of_speech,
            pronunciation=word.pronunciation,
            example=word.example,
            example_translation=word.example_translation,
            learned=word.learned,
            review_count=word.review_count,
            last_reviewed=_to_timestamp(word.last_reviewed) if word.last_reviewed else None,
            created_at=_to_timestamp(word.created_at),
            sheet_id=str(word.sheet_id) if word.sheet_id else None,
        )
        for word in store.list_words()
    ]
    sheets = [
        ExportSheet(id=str(sheet.id), name=sheet.name, created_at=_to_timestamp(sheet.created_at))
        for sheet in store.list_sheets()
    ]
    return ExportData(words=words, sheets=sheets)


def dump_export(data: ExportData) -> str:
    """Serialize an export as pretty-printed JSON with sorted keys."""
    payload = data.model_dump(by_alias=True, mode="json")
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)


def load_export(text: str) -> ExportData:
    """
    Parse an export file.

    Raises:
        ImportFormatError: if the JSON is malformed or misses required fields
    """
    try:
        return ExportData.model_validate_json(text)
    except ValidationError as exc:
        raise ImportFormatError(f"Invalid export file: {exc}") from exc


def import_library(store: WordStore, data: ExportData) -> ImportResult:
    """
    Merge an export into the store in one transaction.

    A word whose sheet is not in the file keeps no sheet.
    """
    sheets: list[WordSheet] = []
    sheet_ids: dict[str, UUID] = {}
    for exported in data.sheets:
        sheet = WordSheet(
            id=_parse_uuid(exported.id),
            name=exported.name,
            created_at=_from_timestamp(exported.created_at),
        )
        sheets.append(sheet)
        sheet_ids[exported.id] = sheet.id

    words = [
        Word(
            id=_parse_uuid(exported.id),
            term=exported.term,
            definition=exported.definition,
            part_of_speech=exported.part_of_speech,
            pronunciation=exported.pronunciation,
            example=exported.example,
            example_translation=exported.example_translation,
            learned=exported.learned,
            review_count=exported.review_count,
            last_reviewed=(
                _from_timestamp(exported.last_reviewed)
                if exported.last_reviewed is not None
                else None
            ),
            created_at=_from_timestamp(exported.created_at),
            sheet_id=sheet_ids.get(exported.sheet_id) if exported.sheet_id else None,
        )
        for exported in data.words
    ]

    result = store.import_library(sheets, words)
    logger.info(
        "Imported %d words (%d skipped), %d new sheets, %d renamed",
        result.words_imported, result.words_skipped,
        result.sheets_created, result.sheets_renamed,
    )
    return result
