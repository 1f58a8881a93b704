"""CSV export and import of journal entries."""

import csv
import io
import logging
from datetime import date
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from pnljournal.models import Entry

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "id",
    "date",
    "day",
    "gross_pnl",
    "taxes_and_charges",
    "net_pnl",
    "capital_deployed",
    "notes",
]


class CsvImportError(ValueError):
    """Raised when a CSV row cannot be turned into an entry."""

    def __init__(self, line: int, message: str):
        super().__init__(f"line {line}: {message}")
        self.line = line


def _amount(value: float) -> str:
    # repr is the shortest text that parses back to the same float
    return repr(float(value))


def _entry_to_row(entry: Entry) -> list[str]:
    return [
        entry.id,
        entry.date.isoformat(),
        entry.day,
        _amount(entry.gross_pnl),
        _amount(entry.taxes_and_charges),
        f"{entry.net_pnl:.2f}",
        _amount(entry.capital_deployed),
        entry.notes or "",
    ]


def entries_to_csv(entries: Iterable[Entry]) -> str:
    """Render entries as CSV text, newest first.

    Args:
        entries: Entries to export.

    Returns:
        CSV content including the header row.
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)

    # Stable sort keeps insertion order among entries sharing a date
    for entry in sorted(entries, key=lambda e: e.date, reverse=True):
        writer.writerow(_entry_to_row(entry))

    return output.getvalue()


def parse_entries_csv(text: str) -> list[Entry]:
    """Parse CSV text produced by ``entries_to_csv``.

    Header names are matched case-insensitively. Derived columns
    (``day``, ``net_pnl``) are ignored; amounts are coerced.

    Raises:
        CsvImportError: If a row has a missing or invalid date.
    """
    reader = csv.DictReader(io.StringIO(text))
    entries = []

    for row in reader:
        line = reader.line_num
        row = {k.lower().strip(): v for k, v in row.items() if k}

        raw_date = (row.get("date") or "").strip()
        if not raw_date:
            raise CsvImportError(line, "missing date")
        try:
            entry_date = date.fromisoformat(raw_date)
        except ValueError:
            raise CsvImportError(line, f"invalid date '{raw_date}'")

        fields = {
            "date": entry_date,
            "gross_pnl": row.get("gross_pnl"),
            "taxes_and_charges": row.get("taxes_and_charges"),
            "capital_deployed": row.get("capital_deployed"),
            "notes": row.get("notes") or None,
        }
        if row.get("id"):
            fields["id"] = row["id"].strip()

        try:
            entries.append(Entry(**fields))
        except ValidationError as e:
            raise CsvImportError(line, str(e))

    return entries


def export_entries(entries: Iterable[Entry], path: Path) -> int:
    """Write entries to a CSV file.

    Returns:
        Number of rows written.
    """
    entries = list(entries)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(entries_to_csv(entries), encoding="utf-8")
    logger.info("Exported %d entries to %s", len(entries), path)
    return len(entries)


def import_entries(path: Path) -> list[Entry]:
    """Read entries from a CSV file."""
    content = path.read_bytes()
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = content.decode("latin-1")
    entries = parse_entries_csv(text)
    logger.info("Read %d entries from %s", len(entries), path)
    return entries
