"""Catalog entries and the interfaces through which the lookup reaches the catalog and the materializer."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

# Derived data maps an OEIS directive letter (e.g. 'N', 'S', 'K') to the value lines of that directive.
DerivedData = Dict[str, List[str]]

# Terms are stored joined by this delimiter, with a delimiter after every term (e.g. "1,1,2,3,").
TERM_DELIMITER = ","


class PersistenceFailure(Exception):
    """This exception is raised when the catalog fails to store a modified entry."""


class SequenceEntry:
    """A catalog entry: an A-number, its terms, and (once computed) its derived data."""

    def __init__(self, a_id: str, sequence: List[str], data: Optional[DerivedData] = None):
        self.a_id     = a_id
        self.sequence = sequence
        self.data     = data

    def __str__(self):
        return self.a_id

    def __repr__(self):
        return "SequenceEntry({!r}, {!r}, {})".format(self.a_id, self.sequence, "None" if self.data is None else "{...}")


def to_canonical_form(terms: List[str]) -> str:
    return "".join(term + TERM_DELIMITER for term in terms)


def from_canonical_form(canonical: str) -> List[str]:
    return [term for term in canonical.split(TERM_DELIMITER) if term != ""]


class SequenceRepository(ABC):
    """The catalog of known sequences, as seen by the lookup."""

    @abstractmethod
    def query_by_prefix(self, pattern: str, limit: int) -> List[SequenceEntry]:
        """Return at most `limit` entries whose canonical term string matches the LIKE pattern.

        The pattern uses '%' as the any-suffix wildcard and '\\' to escape literal '%', '_' and '\\'.
        """

    @abstractmethod
    def query_by_id(self, a_id: str) -> List[SequenceEntry]:
        """Return all entries with the given A-number; more than one indicates a corrupt catalog."""

    @abstractmethod
    def commit(self, entry: SequenceEntry) -> None:
        """Store the entry's derived data. Raises PersistenceFailure if that is not possible."""


class Materializer(ABC):
    """Computes the derived data of a catalog entry.

    Implementations must be idempotent: materializing the same entry twice yields equal data.
    Concurrent lookups may both find the data absent and both compute and commit it; with an
    idempotent materializer the outcome is the same whichever commit lands last.
    """

    @abstractmethod
    def materialize(self, entry: SequenceEntry) -> DerivedData:
        """Return the derived data for the entry, without modifying the entry."""
