"""Harvest numbers from free-form text, either as a flat list of tokens or as a grid of rows."""

import re
import unicodedata
from typing import List

# A numeric token is an optionally signed run of digits with at most one decimal point.
# Both "1." and ".5" are accepted; a bare sign or a bare decimal point is not.
numeric_token_pattern = re.compile("[+-]?(?:[0-9]+\\.?[0-9]*|\\.[0-9]+)")

non_number_character_pattern = re.compile("[^0-9\\-./]")

delimiter_run_pattern = re.compile(";+")

control_character_pattern = re.compile("[\x00-\x08\x0b-\x1f\x7f-\x9f]+")

trailing_blank_pattern = re.compile("[\t ]+$", re.MULTILINE)


def is_numeric(token: str) -> bool:
    """Check if a string is a plain decimal number, independent of locale."""
    return numeric_token_pattern.fullmatch(token) is not None


def extract_numbers(text: str) -> List[str]:
    """Return the numeric tokens found in the text, in order, as the original strings.

    Anything that is not a digit, a minus sign, a decimal point or a slash acts as a separator.
    A minus sign always starts a new token, so "3.5--4" yields "3.5" and "-4".
    Tokens containing a slash (e.g. "1/2") never pass the validity check and are dropped.
    """

    text = non_number_character_pattern.sub(";", text)
    text = text.replace("-", ";-")
    text = delimiter_run_pattern.sub(";", text)

    return [token for token in text.split(";") if is_numeric(token)]


def normalize_text(text: str) -> str:
    """Canonicalize text before splitting it into lines.

    The text is converted to NFC form, line endings become '\\n', control characters other than
    tab and newline are removed, trailing blanks are stripped from every line, and blank lines
    at the start and the end are trimmed.
    """
    text = unicodedata.normalize("NFC", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = control_character_pattern.sub("", text)
    text = trailing_blank_pattern.sub("", text)
    return text.strip("\n")


def parse_grid(text: str) -> List[List[float]]:
    """Parse multi-line text into one row of floats per line; lines without numbers give empty rows."""
    return [[float(token) for token in extract_numbers(line)] for line in normalize_text(text).split("\n")]
