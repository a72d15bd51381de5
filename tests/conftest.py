"""Shared fixtures: an in-memory catalog and a materializer that counts its invocations."""

import sqlite3

import pytest

from sequence_statistics.catalog import SequenceEntry, SequenceRepository, Materializer, PersistenceFailure, to_canonical_form
from sequence_statistics.sqlite_catalog import SqliteSequenceRepository, ensure_catalog_schema_created


class FakeRepository(SequenceRepository):
    """Keeps entries in a list and hands out the same instances on every query."""

    def __init__(self, entries, fail_commit=False):
        self.entries = list(entries)
        self.fail_commit = fail_commit
        self.patterns = []
        self.committed = []

    def query_by_prefix(self, pattern, limit):
        self.patterns.append(pattern)
        assert pattern.endswith("%")
        prefix = pattern[:-1].replace("\\%", "%").replace("\\_", "_").replace("\\\\", "\\")
        matches = [entry for entry in self.entries if to_canonical_form(entry.sequence).startswith(prefix)]
        return matches[:limit]

    def query_by_id(self, a_id):
        return [entry for entry in self.entries if entry.a_id == a_id]

    def commit(self, entry):
        if self.fail_commit:
            raise PersistenceFailure("catalog is read-only")
        self.committed.append(entry.a_id)


class CountingMaterializer(Materializer):

    def __init__(self):
        self.calls = []

    def materialize(self, entry):
        self.calls.append(entry.a_id)
        return {"N": ["Sequence {}".format(entry.a_id)], "S": [",".join(entry.sequence)]}


def make_entries():
    return [
        SequenceEntry("A000045", ["0", "1", "1", "2", "3", "5", "8", "13"]),
        SequenceEntry("A000032", ["2", "1", "3", "4", "7", "11", "18"]),
        SequenceEntry("A000108", ["1", "1", "2", "5", "14", "42", "132"]),
        SequenceEntry("A000110", ["1", "1", "2", "5", "15", "52", "203"], {"N": ["Bell or exponential numbers"]}),
        SequenceEntry("A000142", ["1", "1", "2", "6", "24", "120"]),
        SequenceEntry("A005043", ["1", "1", "23", "4"]),
    ]


@pytest.fixture
def entries():
    return make_entries()


@pytest.fixture
def repository(entries):
    return FakeRepository(entries)


@pytest.fixture
def materializer():
    return CountingMaterializer()


@pytest.fixture
def db_conn():
    db_conn = sqlite3.connect(":memory:")
    ensure_catalog_schema_created(db_conn)
    yield db_conn
    db_conn.close()


@pytest.fixture
def sqlite_repository(db_conn):
    repository = SqliteSequenceRepository(db_conn)
    repository.add(make_entries())
    return repository
