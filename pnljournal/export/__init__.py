"""Export and import of journal entries."""

from pnljournal.export.csv_export import (
    CSV_COLUMNS,
    CsvImportError,
    entries_to_csv,
    export_entries,
    import_entries,
    parse_entries_csv,
)

__all__ = [
    "CSV_COLUMNS",
    "CsvImportError",
    "entries_to_csv",
    "export_entries",
    "import_entries",
    "parse_entries_csv",
]
