"""Logging setup for the command-line scripts, as a context manager."""

import logging
import sys

logger = logging.getLogger(__name__)

# Between DEBUG and INFO; used for per-entry progress such as materializing a catalog entry.
PROGRESS = logging.DEBUG + 5

logging.addLevelName(PROGRESS, "PROGRESS")


class _MyFormatter(logging.Formatter):
    """A formatter that is identical to the default Formatter, except that it replaces the comma by a period in the time."""
    def formatTime(self, record, datefmt = None):
        s = logging.Formatter.formatTime(self, record, datefmt)
        return s.replace(",", ".")


class LoggingContextManager:
    """Attaches a formatted stream handler to the root logger for the duration of a `with` block.

    On exit the handler is detached and closed and the root logger gets its previous level back,
    so the scripts' functions can also be called from a host that has its own logging set up.
    """

    def __init__(self, fmt = None, level = None, noisy = None, logstream = None):

        if fmt is None:
            fmt = "%(asctime)-23s | %(levelname)-8s | %(message)s"

        if level is None:
            level = logging.INFO

        if noisy is None:
            noisy = False

        # Scripts print their results on stdout, so log messages go to stderr by default.
        if logstream is None:
            logstream = sys.stderr

        self.fmt            = fmt
        self.level          = level
        self.noisy          = noisy
        self.logstream      = logstream
        self.handler        = None
        self.previous_level = None

    def __enter__(self):

        root = logging.getLogger()

        self.handler = logging.StreamHandler(self.logstream)
        self.handler.setFormatter(_MyFormatter(fmt = self.fmt))
        root.addHandler(self.handler)

        self.previous_level = root.level
        root.setLevel(self.level)

        if self.noisy:
            logger.info("Logging started.")

        return self

    def __exit__(self, exc_type, exc_value, traceback):

        if self.noisy:
            logger.info("Logging stopped.")

        root = logging.getLogger()
        root.removeHandler(self.handler)
        root.setLevel(self.previous_level)
        self.handler.close()
        self.handler = None


def setup_logging(*args, **kwargs):
    """This function returns a context manager that encapsulates proper initialization and teardown of logging."""
    return LoggingContextManager(*args, **kwargs)
