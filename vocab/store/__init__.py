"""Word store: SQLAlchemy persistence plus library export/import."""

from vocab.store.database import (
    ImportResult,
    LibraryStats,
    WordStore,
    format_sheet_name,
    get_engine,
)
from vocab.store.transfer import (
    dump_export,
    export_library,
    import_library,
    load_export,
)

__all__ = [
    "LibraryStats",
    "WordStore",
    "format_sheet_name",
    "get_engine",
    "ImportResult",
    "dump_export",
    "export_library",
    "import_library",
    "load_export",
]
