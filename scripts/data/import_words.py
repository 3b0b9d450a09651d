"""
Import a JSON library export into the word store.

Import is additive:
- sheets already present (same id) are renamed to the exported name
- words already present (same id) are left untouched

Usage:
    python -m scripts.data.import_words vocab_export.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from vocab.config import configure_logging, load_settings
from vocab.errors import ImportFormatError, StoreError
from vocab.store import WordStore, import_library, load_export


def main():
    parser = argparse.ArgumentParser(description="Import words and sheets from JSON")
    parser.add_argument("path", type=Path, help="Export file to import")
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings)

    try:
        data = load_export(args.path.read_text(encoding="utf-8"))
        result = import_library(WordStore.from_settings(settings), data)
    except (OSError, ImportFormatError, StoreError) as exc:
        print(f"Import failed: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"✓ Imported {result.words_imported} words ({result.words_skipped} already present)")
    print(f"  Sheets: {result.sheets_created} new, {result.sheets_renamed} updated")


if __name__ == "__main__":
    main()
