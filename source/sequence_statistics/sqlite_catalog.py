"""A sequence catalog stored in an SQLite3 database."""

import json
import logging
import sqlite3
from typing import List

from .catalog import SequenceEntry, SequenceRepository, PersistenceFailure, to_canonical_form, from_canonical_form

logger = logging.getLogger(__name__)


class _ClosingScope:
    """Hands out a connection or cursor and closes it when the `with` block ends, also on an exception."""

    def __init__(self, resource):
        self.resource = resource

    def __enter__(self):
        return self.resource

    def __exit__(self, exception_type, exception_value, exception_traceback):
        self.resource.close()


def close_when_done(resource):
    """Use an SQLite3 connection or cursor in a `with` block, closing it afterwards.

    Unlike `with sqlite3.connect(...)`, which only commits or rolls back, this really closes the connection.
    """
    return _ClosingScope(resource)


def ensure_catalog_schema_created(db_conn) -> None:
    """Ensure that the 'sequences' table and its A-number index are present in the database.

    The statements have the "IF NOT EXISTS" clause, so they are ignored if the table and index are already present.
    The A-number is deliberately not a primary key; duplicates are reported by the lookup, not prevented here.
    """

    schema = """
             CREATE TABLE IF NOT EXISTS sequences (
                 a_id      TEXT NOT NULL, -- A-number, e.g. 'A000045'.
                 sequence  TEXT NOT NULL, -- terms, each followed by a comma, e.g. '0,1,1,2,3,5,'.
                 data      TEXT           -- derived data as JSON, or NULL if not yet materialized.
             );
             """

    # Remove the first 13 characters of each line of the SQL statement above, as well as the first and last lines.

    schema = "\n".join(line[13:] for line in schema.split("\n"))[1:-1]

    db_conn.execute(schema)
    db_conn.execute("CREATE INDEX IF NOT EXISTS sequences_a_id ON sequences(a_id);")


def _row_to_entry(row) -> SequenceEntry:
    (a_id, sequence, data) = row
    return SequenceEntry(a_id, from_canonical_form(sequence), None if data is None else json.loads(data))


class SqliteSequenceRepository(SequenceRepository):
    """Catalog repository on top of an open SQLite3 connection; the caller owns the connection."""

    def __init__(self, db_conn):
        self.db_conn = db_conn

    def query_by_prefix(self, pattern: str, limit: int) -> List[SequenceEntry]:
        with close_when_done(self.db_conn.cursor()) as db_cursor:
            query = "SELECT a_id, sequence, data FROM sequences WHERE sequence LIKE ? ESCAPE '\\' LIMIT ?;"
            db_cursor.execute(query, (pattern, limit))
            rows = db_cursor.fetchall()
        return [_row_to_entry(row) for row in rows]

    def query_by_id(self, a_id: str) -> List[SequenceEntry]:
        # Two rows are enough to tell a unique entry from a duplicated one.
        with close_when_done(self.db_conn.cursor()) as db_cursor:
            query = "SELECT a_id, sequence, data FROM sequences WHERE a_id = ? LIMIT 2;"
            db_cursor.execute(query, (a_id, ))
            rows = db_cursor.fetchall()
        return [_row_to_entry(row) for row in rows]

    def commit(self, entry: SequenceEntry) -> None:
        try:
            with close_when_done(self.db_conn.cursor()) as db_cursor:
                query = "UPDATE sequences SET data = ? WHERE a_id = ?;"
                db_cursor.execute(query, (None if entry.data is None else json.dumps(entry.data), entry.a_id))
            self.db_conn.commit()
        except sqlite3.Error as exception:
            raise PersistenceFailure("Unable to update {}: {}".format(entry, exception)) from exception

    def add(self, entries: List[SequenceEntry]) -> None:
        """Insert new entries into the catalog."""
        with close_when_done(self.db_conn.cursor()) as db_cursor:
            query = "INSERT INTO sequences(a_id, sequence, data) VALUES (?, ?, ?);"
            db_cursor.executemany(query, [
                (entry.a_id, to_canonical_form(entry.sequence), None if entry.data is None else json.dumps(entry.data))
                for entry in entries
            ])
        self.db_conn.commit()
        logger.debug("Added %d entries to the catalog.", len(entries))
