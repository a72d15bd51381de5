"""Derive the data of a catalog entry from its OEIS text entry."""

import re
import logging
from typing import Callable

from .catalog import SequenceEntry, Materializer, DerivedData
from .fetch_remote_oeis_entry import fetch_remote_oeis_entry

logger = logging.getLogger(__name__)


def parse_oeis_directives(a_id: str, main_content: str) -> DerivedData:
    """Group the directive lines of an OEIS entry by directive letter.

    Lines look like "%N A000045 Fibonacci numbers ...". Only lines that belong to the given A-number are
    used; the single space between the A-number and the value is removed. Directives with several lines
    (comments, formulas, ...) keep their lines in file order.
    """

    directive_line_pattern = "^%(.) {}(?: (.*))?$".format(re.escape(a_id))

    directives = {}

    for (directive, value) in re.findall(directive_line_pattern, main_content, re.MULTILINE):
        if directive not in directives:
            directives[directive] = []
        directives[directive].append(value)

    return directives


class OeisMaterializer(Materializer):
    """Materializes an entry from its text on the OEIS server.

    The fetch function is a parameter so that a local mirror can stand in for the server.
    """

    def __init__(self, fetch: Callable[[str], str] = fetch_remote_oeis_entry):
        self.fetch = fetch

    def materialize(self, entry: SequenceEntry) -> DerivedData:
        logger.debug("Fetching OEIS entry %s ...", entry)
        data = parse_oeis_directives(entry.a_id, self.fetch(entry.a_id))
        if len(data) == 0:
            logger.warning("OEIS entry %s has no directive lines.", entry)
        return data
