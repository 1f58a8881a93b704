"""SQLite data store for PnL Journal."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional

from pnljournal.models import Entry, Journal

logger = logging.getLogger(__name__)


class StoreError(ValueError):
    """Base class for data store errors."""


class JournalNotFoundError(StoreError):
    """Raised when a journal name does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Journal '{name}' not found")
        self.name = name


class DuplicateJournalError(StoreError):
    """Raised when creating a journal whose name is taken."""

    def __init__(self, name: str):
        super().__init__(f"Journal '{name}' already exists")
        self.name = name


class DuplicateEntryError(StoreError):
    """Raised when saving an entry whose ID is already stored."""

    def __init__(self, entry_id: str):
        super().__init__(f"Entry '{entry_id}' already exists")
        self.entry_id = entry_id


class EntryNotFoundError(StoreError):
    """Raised when an entry ID does not exist."""

    def __init__(self, entry_id: str):
        super().__init__(f"Entry '{entry_id}' not found")
        self.entry_id = entry_id


class DataStore:
    """SQLite-based store of journals and their entries.

    Entries are returned in insertion order; sorting for analytics is
    left to the analytics engine.
    """

    REQUIRED_TABLES = [
        "journals",
        "entries",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS journals (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL UNIQUE,
                    initial_capital REAL NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            # seq preserves insertion order
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    journal_id INTEGER NOT NULL,
                    date TEXT NOT NULL,
                    gross_pnl REAL NOT NULL,
                    taxes_and_charges REAL NOT NULL,
                    capital_deployed REAL NOT NULL,
                    notes TEXT
                )
            """)

            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_entries_journal ON entries (journal_id)"
            )

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Journals ====================

    @staticmethod
    def _row_to_journal(row: sqlite3.Row) -> Journal:
        return Journal(
            id=row["id"],
            name=row["name"],
            initial_capital=row["initial_capital"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def create_journal(self, name: str, initial_capital: float) -> Journal:
        """Create a new journal.

        Args:
            name: Unique journal name.
            initial_capital: Capital in effect before the first entry.

        Returns:
            The stored journal.

        Raises:
            DuplicateJournalError: If the name is already used.
        """
        journal = Journal(name=name, initial_capital=initial_capital)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    INSERT INTO journals (name, initial_capital, created_at)
                    VALUES (?, ?, ?)
                    """,
                    (journal.name, journal.initial_capital, journal.created_at.isoformat()),
                )
            except sqlite3.IntegrityError:
                raise DuplicateJournalError(name)
            conn.commit()
            logger.info("Created journal %s with capital %.2f", name, initial_capital)
            return journal.model_copy(update={"id": cursor.lastrowid})
        finally:
            conn.close()

    def get_journal(self, name: str) -> Journal:
        """Get a journal by name.

        Raises:
            JournalNotFoundError: If no journal has that name.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, name, initial_capital, created_at FROM journals WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()
            if row is None:
                raise JournalNotFoundError(name)
            return self._row_to_journal(row)
        finally:
            conn.close()

    def get_journals(self) -> list[Journal]:
        """Get all journals, oldest first."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, name, initial_capital, created_at FROM journals ORDER BY id"
            )
            return [self._row_to_journal(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update_initial_capital(self, name: str, initial_capital: float) -> Journal:
        """Change a journal's starting capital."""
        journal = self.get_journal(name)
        updated = Journal(
            id=journal.id,
            name=journal.name,
            initial_capital=initial_capital,
            created_at=journal.created_at,
        )
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE journals SET initial_capital = ? WHERE id = ?",
                (updated.initial_capital, journal.id),
            )
            conn.commit()
            return updated
        finally:
            conn.close()

    def delete_journal(self, name: str) -> None:
        """Delete a journal and all of its entries."""
        journal = self.get_journal(name)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM entries WHERE journal_id = ?", (journal.id,))
            cursor.execute("DELETE FROM journals WHERE id = ?", (journal.id,))
            conn.commit()
            logger.info("Deleted journal %s", name)
        finally:
            conn.close()

    # ==================== Entries ====================

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> Entry:
        return Entry(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            gross_pnl=row["gross_pnl"],
            taxes_and_charges=row["taxes_and_charges"],
            capital_deployed=row["capital_deployed"],
            notes=row["notes"],
        )

    def add_entry(self, journal_name: str, entry: Entry) -> Entry:
        """Append an entry to a journal.

        Args:
            journal_name: Name of the journal.
            entry: Entry to save.

        Returns:
            The saved entry.
        """
        self.add_entries(journal_name, [entry])
        return entry

    def add_entries(self, journal_name: str, entries: Iterable[Entry]) -> int:
        """Append several entries to a journal in one transaction.

        Returns:
            Number of entries saved.

        Raises:
            DuplicateEntryError: If an entry ID is already stored. Nothing
                from the batch is saved.
        """
        journal = self.get_journal(journal_name)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            count = 0
            for entry in entries:
                try:
                    cursor.execute(
                        """
                        INSERT INTO entries
                        (id, journal_id, date, gross_pnl, taxes_and_charges, capital_deployed, notes)
                        VALUES (?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            entry.id,
                            journal.id,
                            entry.date.isoformat(),
                            entry.gross_pnl,
                            entry.taxes_and_charges,
                            entry.capital_deployed,
                            entry.notes,
                        ),
                    )
                except sqlite3.IntegrityError:
                    conn.rollback()
                    raise DuplicateEntryError(entry.id)
                count += 1
            conn.commit()
            logger.debug("Saved %d entries to journal %s", count, journal_name)
            return count
        finally:
            conn.close()

    def get_entries(self, journal_name: str) -> list[Entry]:
        """Get a journal's entries in insertion order."""
        journal = self.get_journal(journal_name)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, date, gross_pnl, taxes_and_charges, capital_deployed, notes
                FROM entries
                WHERE journal_id = ?
                ORDER BY seq
                """,
                (journal.id,),
            )
            return [self._row_to_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_entry(self, entry_id: str) -> Optional[Entry]:
        """Get an entry by ID.

        Returns:
            Entry if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, date, gross_pnl, taxes_and_charges, capital_deployed, notes
                FROM entries
                WHERE id = ?
                """,
                (entry_id,),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_entry(row)
            return None
        finally:
            conn.close()

    def update_entry(self, entry: Entry) -> None:
        """Replace the stored fields of an existing entry.

        Raises:
            EntryNotFoundError: If no entry has the entry's ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE entries
                SET date = ?, gross_pnl = ?, taxes_and_charges = ?,
                    capital_deployed = ?, notes = ?
                WHERE id = ?
                """,
                (
                    entry.date.isoformat(),
                    entry.gross_pnl,
                    entry.taxes_and_charges,
                    entry.capital_deployed,
                    entry.notes,
                    entry.id,
                ),
            )
            if cursor.rowcount == 0:
                raise EntryNotFoundError(entry.id)
            conn.commit()
        finally:
            conn.close()

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry.

        Raises:
            EntryNotFoundError: If no entry has that ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM entries WHERE id = ?", (entry_id,))
            if cursor.rowcount == 0:
                raise EntryNotFoundError(entry_id)
            conn.commit()
        finally:
            conn.close()

    def clear_entries(self, journal_name: str) -> int:
        """Delete every entry of a journal.

        Returns:
            Number of entries deleted.
        """
        journal = self.get_journal(journal_name)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM entries WHERE journal_id = ?", (journal.id,))
            conn.commit()
            logger.info("Cleared %d entries from journal %s", cursor.rowcount, journal_name)
            return cursor.rowcount
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
