"""
Database management module for the Kanji Browser application.

This module implements the dictionary search the browser pages are
built from, on top of a SQLite file holding a `kanji` table (one
reference record per character), a `words` table and a `settings`
table for window state.
"""

import logging
import sqlite3
from typing import Any, Dict, Iterable, List, Optional, Tuple

from config import config
from errors import OracleFailure
from models import DictionaryEntry, EntryKind, MatchMode

logger = logging.getLogger(__name__)

LIST_SEPARATOR = '\n'


def join_values(values: Iterable[str]) -> str:
    """Pack a list of readings or meanings into one column."""
    return LIST_SEPARATOR.join(value for value in values if value)


def split_values(value: Optional[str]) -> Tuple[str, ...]:
    """Unpack a column written by join_values."""
    if not value:
        return ()
    return tuple(part for part in value.split(LIST_SEPARATOR) if part)


def is_latin_query(query: str) -> bool:
    """True if the query has no Japanese characters and may match meanings."""
    return all(ord(char) < 255 for char in query)


class DictionaryDatabase:
    """Dictionary search oracle backed by SQLite."""

    def __init__(self, database_path: str = None):
        """
        Initialize the database manager.

        Args:
            database_path: Path to the SQLite database file
        """
        self.database_path = str(database_path or config.paths.database_path)
        self.queries = config.database_queries

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection with dictionary row factory."""
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def create_tables(self) -> None:
        """Create the kanji, words and settings tables if they are missing."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(self.queries.create_kanji)
            cursor.execute(self.queries.create_words)
            cursor.execute(self.queries.create_words_index)
            cursor.execute(self.queries.create_settings)
            conn.commit()

    def insert_kanji(self, records: Iterable[Dict[str, Any]]) -> int:
        """
        Insert reference records into the kanji table.

        Args:
            records: Rows keyed by kanji column name, list values allowed

        Returns:
            Number of rows written
        """
        rows = [self._prepare_row(record) for record in records]
        with self._get_connection() as conn:
            conn.executemany(self.queries.insert_kanji, rows)
            conn.commit()
        return len(rows)

    def insert_words(self, records: Iterable[Dict[str, Any]]) -> int:
        """
        Insert word records into the words table.

        Args:
            records: Rows keyed by word column name, list values allowed

        Returns:
            Number of rows written
        """
        rows = [self._prepare_row(record) for record in records]
        with self._get_connection() as conn:
            conn.executemany(self.queries.insert_word, rows)
            conn.commit()
        return len(rows)

    @staticmethod
    def _prepare_row(record: Dict[str, Any]) -> Dict[str, Any]:
        row = {}
        for key, value in record.items():
            if isinstance(value, (list, tuple)):
                value = join_values(value)
            elif isinstance(value, bool):
                value = int(value)
            row[key] = value
        # Optional kanji columns may be left out by the caller
        for key in ('grade', 'stroke_count', 'frequency', 'jlpt', 'svg'):
            row.setdefault(key, None)
        for key in ('onyomi', 'kunyomi', 'nanori', 'radical_readings', 'meanings', 'readings'):
            row.setdefault(key, '')
        row.setdefault('common', 0)
        return row

    def search(self, query: str, match_mode: MatchMode = MatchMode.EXACT) -> List[DictionaryEntry]:
        """
        Search the dictionary.

        Args:
            query: Kanji, word, reading or English gloss
            match_mode: EXACT for whole-field matches, ANYWHERE for substrings

        Returns:
            Reference entries first, then word entries

        Raises:
            OracleFailure: If the database cannot be read
        """
        query = query.strip()
        if not query:
            return []

        limit = config.search.max_results
        if match_mode is MatchMode.EXACT:
            kanji_sql = self.queries.kanji_exact
            words_sql = self.queries.words_exact
            meaning_sql = self.queries.words_meaning_exact
        else:
            kanji_sql = self.queries.kanji_anywhere
            words_sql = self.queries.words_anywhere
            meaning_sql = self.queries.words_meaning_anywhere

        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(kanji_sql, {'query': query})
                results = [self._row_to_reference(row) for row in cursor.fetchall()]

                cursor.execute(words_sql, {'query': query, 'limit': limit})
                rows = cursor.fetchall()
                if is_latin_query(query):
                    # Headword matches first, then glosses not already listed
                    seen = {row['idx'] for row in rows}
                    cursor.execute(meaning_sql, {'query': query, 'limit': limit})
                    rows.extend(row for row in cursor.fetchall() if row['idx'] not in seen)
                results.extend(self._row_to_word(row) for row in rows[:limit])
        except sqlite3.Error as e:
            raise OracleFailure(f"Search for {query!r} failed: {e}") from e

        logger.debug(f"search({query!r}, {match_mode.value}) -> {len(results)} entries")
        return results

    @staticmethod
    def _row_to_reference(row: sqlite3.Row) -> DictionaryEntry:
        onyomi = split_values(row['onyomi'])
        kunyomi = split_values(row['kunyomi'])
        return DictionaryEntry(
            word=row['literal'],
            readings=onyomi + kunyomi,
            meanings=split_values(row['meanings']),
            is_common=bool(row['frequency']),
            kind=EntryKind.REFERENCE,
            grade=row['grade'] or None,
            stroke_count=row['stroke_count'] or None,
            frequency=row['frequency'] or None,
            jlpt=row['jlpt'] or None,
            onyomi=onyomi,
            kunyomi=kunyomi,
            nanori=split_values(row['nanori']),
            radical_readings=split_values(row['radical_readings']),
            stroke_order_svg=row['svg'] or None
        )

    @staticmethod
    def _row_to_word(row: sqlite3.Row) -> DictionaryEntry:
        return DictionaryEntry(
            word=row['word'],
            readings=split_values(row['readings']),
            meanings=split_values(row['meanings']),
            is_common=bool(row['common']),
            kind=EntryKind.WORD
        )

    def load_settings(self) -> Dict[str, Any]:
        """
        Load application settings from the database.

        Returns:
            Dictionary containing settings
        """
        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(self.queries.load_settings)
                row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Could not load settings: {e}")
            row = None
        if row:
            return dict(row)
        return {
            'window_x': 0,
            'window_y': 0,
            'last_query': ''
        }

    def update_settings(self, window_x: int, window_y: int, last_query: str) -> None:
        """
        Update application settings in the database.

        Args:
            window_x: Horizontal window position
            window_y: Vertical window position
            last_query: Last query submitted from the search bar
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(self.queries.update_settings, {
                'window_x': window_x,
                'window_y': window_y,
                'last_query': last_query
            })
            conn.commit()
