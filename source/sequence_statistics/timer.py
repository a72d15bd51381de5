"""Time a block of work using a context manager, and report the duration in human-readable form."""

import time
import math


def duration_as_string(seconds: float) -> str:
    """Return human-readable string representation of a duration in seconds."""
    if seconds < 1.0:
        return "{:.1f} ms".format(seconds * 1000.0)
    if seconds <= 300.0:
        return "{:.3f} seconds".format(seconds)
    minutes = seconds / 60.0
    if minutes <= 120.0:
        return "{:.3f} minutes".format(minutes)
    hours = math.floor(minutes / 60.0)
    return "{} hours and {:.3f} minutes".format(hours, minutes - (60.0 * hours))


class TimerContextManager:
    """A context manager that measures the time spent inside it."""

    def __init__(self):
        self.t_enter = None
        self.t_stop = None

    def __enter__(self):
        self.t_enter = time.monotonic()
        self.t_stop = None
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.stop()

    def stop(self) -> None:
        if self.t_stop is None:
            self.t_stop = time.monotonic()

    def duration(self) -> float:
        """Stop timer and return duration, in seconds."""
        self.stop()
        return self.t_stop - self.t_enter

    def duration_string(self) -> str:
        return duration_as_string(self.duration())


def start_timer() -> TimerContextManager:
    return TimerContextManager()
