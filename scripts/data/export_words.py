"""
Export the word library to a JSON file.

The file holds every word (with its review history) and every sheet, in
the same format the mobile app exports, so it can be re-imported there or
with scripts.data.import_words.

Usage:
    python -m scripts.data.export_words --out vocab_export.json
"""

from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path

from vocab.config import configure_logging, load_settings
from vocab.store import WordStore, dump_export, export_library


def main():
    parser = argparse.ArgumentParser(description="Export words and sheets to JSON")
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output path (default: vocab_export_<timestamp>.json)"
    )
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings)

    out_path = args.out or Path(f"vocab_export_{int(datetime.now().timestamp())}.json")

    store = WordStore.from_settings(settings)
    data = export_library(store)
    out_path.write_text(dump_export(data), encoding="utf-8")

    print(f"✓ Exported {len(data.words)} words and {len(data.sheets)} sheets to {out_path}")


if __name__ == "__main__":
    main()
