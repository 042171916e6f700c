"""
Logbook time values.

Flight times in the source sheet are "H:MM" strings. Duration keeps the
exact timedelta so that sums never accumulate rounding error; rounding to
the nearest minute only happens when a value is rendered.

A body cell leaves a zero time blank, while a totals cell always prints a
value ("0:00").
"""

import re
from datetime import timedelta

from .errors import DurationParseError

# Minutes may exceed 59 and carry a fraction, as in "1:75" or "0:30.5";
# a bare number ("90") is minutes only
DURATION_RE = re.compile(r'^(?:(\d+(?:\.\d+)?):)?(\d+(?:\.\d+)?)$')

_MINUTE_US = 60 * 1000 * 1000


class Duration:
    """An immutable hours:minutes time span."""

    __slots__ = ('_delta',)

    def __init__(self, delta=None):
        self._delta = delta if delta is not None else timedelta(0)

    @classmethod
    def zero(cls):
        return cls()

    @classmethod
    def from_minutes(cls, minutes):
        return cls(timedelta(minutes=minutes))

    @classmethod
    def parse(cls, text):
        """Parse an "H:MM" string, or a bare number of minutes.

        Empty or whitespace-only text is a zero duration.

        Raises:
            DurationParseError: If the text is not in H:MM form.
        """
        if text is None:
            return cls.zero()
        s = str(text).strip()
        if not s:
            return cls.zero()
        match = DURATION_RE.match(s)
        if not match:
            raise DurationParseError(f"Invalid time value: {text!r}")
        hours = float(match.group(1) or 0)
        minutes = float(match.group(2))
        return cls(timedelta(hours=hours, minutes=minutes))

    @classmethod
    def parse_lenient(cls, text):
        """Parse an "H:MM" string, falling back to zero on bad input."""
        try:
            return cls.parse(text)
        except DurationParseError:
            print(f"  Error parsing time {text!r}, using 0:00")
            return cls.zero()

    @property
    def delta(self):
        return self._delta

    @property
    def minutes(self):
        """Total minutes, rounded half away from zero."""
        us = self._delta // timedelta(microseconds=1)
        if us < 0:
            return -((-us + _MINUTE_US // 2) // _MINUTE_US)
        return (us + _MINUTE_US // 2) // _MINUTE_US

    def _render(self):
        total = self.minutes
        sign = '-' if total < 0 else ''
        hours, minutes = divmod(abs(total), 60)
        return f"{sign}{hours:d}:{minutes:02d}"

    def render_for_body(self):
        """Render for a logbook row: zero is an empty cell."""
        if self.minutes == 0:
            return ''
        return self._render()

    def render_for_totals(self):
        """Render for a totals row: zero is "0:00"."""
        return self._render()

    def __add__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self._delta + other._delta)

    def __eq__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self._delta == other._delta

    def __hash__(self):
        return hash(self._delta)

    def __bool__(self):
        return bool(self._delta)

    def __repr__(self):
        return f"Duration({self.render_for_totals()})"

    __str__ = render_for_totals
