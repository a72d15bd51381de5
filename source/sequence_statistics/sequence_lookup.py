"""Look up catalog sequences by term prefix or by A-number, materializing derived data on first access.

Every entry handed back by `SequenceLookup` carries derived data. Entries that already have data are
returned as-is; for the others the data is computed once per lookup call, assigned to the entry, and
committed to the catalog. What happens when that commit fails is governed by a single
`PersistencePolicy` that applies to both the prefix lookup and the A-number lookup.
"""

import logging
from enum import Enum
from typing import List

from .catalog import SequenceEntry, SequenceRepository, Materializer, PersistenceFailure, TERM_DELIMITER
from .setup_logging import PROGRESS
from .timer import start_timer

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 6


class NotFound(LookupError):
    """This exception is raised when no catalog entry has the requested A-number."""


class AmbiguousResult(LookupError):
    """This exception is raised when several catalog entries share an A-number that should be unique."""


class PersistencePolicy(Enum):
    """What to do when committing freshly computed derived data fails."""

    IGNORE = "ignore"        # Return the entry with its in-memory data; say nothing.
    LOG = "log"              # Return the entry with its in-memory data; log a warning.
    PROPAGATE = "propagate"  # Re-raise the PersistenceFailure to the caller.


def escape_like(term: str) -> str:
    """Escape the LIKE metacharacters in a term, using '\\' as the escape character."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def make_prefix_pattern(terms: List[str]) -> str:
    """Make a LIKE pattern matching canonical term strings that start with the given terms.

    The delimiter before the wildcard makes the last term match whole terms only:
    ["1", "1", "2"] gives "1,1,2,%", which matches "1,1,2,3," but not "1,1,23,".
    """
    return TERM_DELIMITER.join(escape_like(term) for term in terms) + TERM_DELIMITER + "%"


class SequenceLookup:

    def __init__(self, repository: SequenceRepository, materializer: Materializer,
                 on_persistence_failure: PersistencePolicy = PersistencePolicy.LOG):
        self.repository = repository
        self.materializer = materializer
        self.on_persistence_failure = on_persistence_failure

    def find_by_prefix(self, terms: List[str], limit: int = DEFAULT_LIMIT) -> List[SequenceEntry]:
        """Return up to `limit` catalog entries whose terms start with `terms`, in catalog order."""

        if not all(isinstance(term, str) for term in terms):
            raise TypeError("Terms must be strings (got {!r}).".format(terms))

        if limit < 1:
            raise ValueError("Limit must be a positive integer (got {}).".format(limit))

        pattern = make_prefix_pattern(terms)

        entries = self.repository.query_by_prefix(pattern, limit)

        logger.debug("Prefix pattern '%s' matched %d entries.", pattern, len(entries))

        for entry in entries:
            self._ensure_data(entry)

        return entries

    def find_by_id(self, a_id: str) -> SequenceEntry:
        """Return the single catalog entry with the given A-number.

        Raises NotFound if there is no such entry, and AmbiguousResult if there are several.
        """

        if a_id == "":
            raise ValueError("A-number must not be empty.")

        entries = self.repository.query_by_id(a_id)

        if len(entries) == 0:
            raise NotFound("No catalog entry with A-number '{}'.".format(a_id))

        if len(entries) > 1:
            raise AmbiguousResult("Catalog has {} entries with A-number '{}'.".format(len(entries), a_id))

        entry = entries[0]

        self._ensure_data(entry)

        return entry

    def _ensure_data(self, entry: SequenceEntry) -> None:
        """Materialize and commit the entry's derived data, unless it is already present."""

        if entry.data is not None:
            return

        with start_timer() as timer:
            entry.data = self.materializer.materialize(entry)
            logger.log(PROGRESS, "Materialized derived data of %s in %s.", entry, timer.duration_string())

        try:
            self.repository.commit(entry)
        except PersistenceFailure as exception:
            if self.on_persistence_failure == PersistencePolicy.PROPAGATE:
                raise
            if self.on_persistence_failure == PersistencePolicy.LOG:
                logger.warning("Unable to store derived data of %s: '%s'.", entry, exception)
