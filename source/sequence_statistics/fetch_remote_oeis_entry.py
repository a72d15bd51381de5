"""Fetch the text of a single OEIS entry from the OEIS server."""

import re
import urllib.request

a_number_pattern = re.compile("A[0-9]{6}$")


class BadOeisResponse(Exception):
    """This exception is raised when a network fetch of an OEIS entry fails."""


def _fetch_url(url: str) -> str:
    """Fetch the given URL as a string."""
    with urllib.request.urlopen(url, timeout=60.0) as response:
        raw = response.read()
    decoded = raw.decode(response.headers.get_content_charset() or 'utf-8')
    return decoded


def strip_main_content(content: str) -> str:
    """Check the server response and strip its header and footer.

    A response for a single entry has 5 header lines, content, and 2 footer lines:

      lines[0]     # Greetings from The On-Line Encyclopedia of Integer Sequences! http://oeis.org/
      lines[1]     (empty line)
      lines[2]     Search: id:aNNNNNN
      lines[3]     Showing 1-1 of 1
      lines[4]     (empty line)
      lines[5:-2]  --- actual content directives are here ---
      lines[-2]    (empty line)
      lines[-1]    # Content is available under The OEIS End-User License Agreement: http://oeis.org/LICENSE

    Raises ValueError if the fourth line does not announce exactly one entry.
    """

    lines = content.splitlines(keepends=True)

    if len(lines) < 7 or lines[3] != "Showing 1-1 of 1\n":
        raise ValueError()

    return "".join(lines[5:-2])


def fetch_remote_oeis_entry(a_id: str) -> str:
    """Fetch the main content of an OEIS entry, given its A-number (e.g. 'A000045')."""

    if a_number_pattern.match(a_id) is None:
        raise BadOeisResponse("Not an OEIS A-number: '{}'.".format(a_id))

    url = "https://oeis.org/search?q=id:{}&fmt=text".format(a_id)

    try:
        return strip_main_content(_fetch_url(url))
    except ValueError:
        raise BadOeisResponse("OEIS server response indicates failure (url: {})".format(url))
