#! /usr/bin/env -S python3 -B

"""Look up sequences in the local catalog, by the numbers in a free-text query or by A-number."""

import os
import argparse
import logging
import sqlite3
from typing import List, Optional

from sequence_statistics.catalog import SequenceEntry
from sequence_statistics.number_extraction import extract_numbers
from sequence_statistics.oeis_materializer import OeisMaterializer
from sequence_statistics.sequence_lookup import SequenceLookup, PersistencePolicy, NotFound, AmbiguousResult, DEFAULT_LIMIT
from sequence_statistics.setup_logging import setup_logging
from sequence_statistics.sqlite_catalog import SqliteSequenceRepository, close_when_done

logger = logging.getLogger(__name__)


def format_entry(entry: SequenceEntry, max_terms: int = 20) -> str:
    """Format an entry as a single line: A-number, name, and its first terms."""
    names = entry.data.get("N", [])
    name = names[0] if len(names) > 0 else "(no name)"
    terms = ", ".join(entry.sequence[:max_terms])
    if len(entry.sequence) > max_terms:
        terms += ", ..."
    return "{}  {}\n         {}".format(entry.a_id, name, terms)


def lookup_sequences(database_filename: str, query: str, a_id: Optional[str], limit: int, policy: PersistencePolicy) -> None:

    if not os.path.exists(database_filename):
        logger.critical("Database file '%s' not found! Unable to continue.", database_filename)
        return

    with close_when_done(sqlite3.connect(database_filename)) as db_conn:

        lookup = SequenceLookup(SqliteSequenceRepository(db_conn), OeisMaterializer(), policy)

        if a_id is not None:
            try:
                entries = [lookup.find_by_id(a_id)]
            except (NotFound, AmbiguousResult) as exception:
                logger.error("%s", exception)
                return
        else:
            terms = extract_numbers(query)
            if len(terms) == 0:
                logger.error("No numbers found in query '%s'.", query)
                return
            logger.info("Looking up sequences starting with %s ...", ", ".join(terms))
            entries = lookup.find_by_prefix(terms, limit)

    entry_noun = "entry" if len(entries) == 1 else "entries"
    logger.info("Found %d %s.", len(entries), entry_noun)

    for entry in entries:
        print(format_entry(entry))


def positive_int(value: str) -> int:
    """Argparse type for a count that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid int value: {!r}".format(value))
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer (got {})".format(number))
    return number


def main(argv: Optional[List[str]] = None):

    default_database_filename = "oeis_catalog.sqlite3"

    parser = argparse.ArgumentParser(description="Find catalog sequences that start with the numbers given in a query.")

    parser.add_argument("-f", dest="database_filename", type=str, default=default_database_filename, help="catalog SQLite3 database (default: {})".format(default_database_filename))
    parser.add_argument("--limit", type=positive_int, default=DEFAULT_LIMIT, help="maximum number of sequences to show (default: {})".format(DEFAULT_LIMIT))
    parser.add_argument("--id", dest="a_id", type=str, help="look up a single sequence by A-number instead (e.g. A000045)")
    parser.add_argument("--on-commit-failure", dest="policy", choices=[policy.value for policy in PersistencePolicy], default=PersistencePolicy.LOG.value,
                        help="what to do when derived data cannot be stored (default: {})".format(PersistencePolicy.LOG.value))
    parser.add_argument("query", nargs="*", help="free text containing the first terms, e.g. '1, 1, 2, 3, 5'")

    args = parser.parse_args(argv)

    if args.a_id is None and len(args.query) == 0:
        parser.error("either a query or --id is required")

    with setup_logging():
        lookup_sequences(args.database_filename, " ".join(args.query), args.a_id, args.limit, PersistencePolicy(args.policy))


if __name__ == "__main__":
    main()
