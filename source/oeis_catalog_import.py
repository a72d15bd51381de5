#! /usr/bin/env -S python3 -B

"""Load the terms of all entries in a local OEIS mirror database into the sequence catalog."""

import os
import re
import argparse
import logging
import sqlite3
from typing import List

from sequence_statistics.catalog import SequenceEntry
from sequence_statistics.setup_logging import setup_logging, PROGRESS
from sequence_statistics.sqlite_catalog import SqliteSequenceRepository, ensure_catalog_schema_created, close_when_done
from sequence_statistics.timer import start_timer

logger = logging.getLogger(__name__)


def parse_terms(oeis_id: int, main_content: str) -> List[str]:
    """Return the terms listed in the %S, %T and %U directives of an entry, or the signed %V, %W, %X ones if present."""

    terms = {}

    for directive in "STUVWX":
        pattern = "^%{} A{:06d} (.*)$".format(directive, oeis_id)
        match = re.search(pattern, main_content, re.MULTILINE)
        if match is not None:
            terms[directive] = match.group(1)

    signed = "".join(terms.get(directive, "") for directive in "VWX")
    unsigned = "".join(terms.get(directive, "") for directive in "STU")

    values = signed if signed != "" else unsigned

    return [term for term in values.split(",") if term != ""]


def import_catalog(mirror_filename: str, catalog_filename: str) -> None:

    if not os.path.exists(mirror_filename):
        logger.critical("Database file '%s' not found! Unable to continue.", mirror_filename)
        return

    batch_size = 1000

    with start_timer() as timer:

        count = 0

        with close_when_done(sqlite3.connect(mirror_filename)) as mirror_conn, close_when_done(mirror_conn.cursor()) as mirror_cursor, \
             close_when_done(sqlite3.connect(catalog_filename)) as catalog_conn:

            ensure_catalog_schema_created(catalog_conn)
            repository = SqliteSequenceRepository(catalog_conn)

            mirror_cursor.execute("SELECT oeis_id, main_content FROM oeis_entries ORDER BY oeis_id;")

            while True:

                oeis_entries = mirror_cursor.fetchmany(batch_size)
                if len(oeis_entries) == 0:
                    break

                logger.log(PROGRESS, "Importing OEIS entries A%06d to A%06d ...", oeis_entries[0][0], oeis_entries[-1][0])

                repository.add([
                    SequenceEntry("A{:06d}".format(oeis_id), parse_terms(oeis_id, main_content))
                    for (oeis_id, main_content) in oeis_entries
                ])

                count += len(oeis_entries)

        logger.info("Imported %d entries into '%s' in %s.", count, catalog_filename, timer.duration_string())


def main():

    default_mirror_filename = "oeis.sqlite3"
    default_catalog_filename = "oeis_catalog.sqlite3"

    parser = argparse.ArgumentParser(description="Fill the sequence catalog from a local OEIS mirror database.")

    parser.add_argument("-f", dest="mirror_filename", type=str, default=default_mirror_filename, help="OEIS mirror SQLite3 database (default: {})".format(default_mirror_filename))
    parser.add_argument("-o", dest="catalog_filename", type=str, default=default_catalog_filename, help="catalog SQLite3 database (default: {})".format(default_catalog_filename))

    args = parser.parse_args()

    with setup_logging():
        import_catalog(args.mirror_filename, args.catalog_filename)


if __name__ == "__main__":
    main()
