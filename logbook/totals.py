"""
Running totals over flight records.

A TotalsRecord holds the same time categories as a FlightRecord plus
landings and simulator time. Sums are exact timedelta arithmetic, so the
order records are folded in never changes the result.
"""

from dataclasses import dataclass, field

from .durations import Duration
from .records import Landings, Times


@dataclass(frozen=True)
class TotalsRecord:
    times: Times = field(default_factory=Times)
    landings: Landings = field(default_factory=Landings)
    simulator: Duration = field(default_factory=Duration)

    @classmethod
    def zero(cls):
        return cls()

    def __add__(self, other):
        if not isinstance(other, TotalsRecord):
            return NotImplemented
        return TotalsRecord(
            times=self.times + other.times,
            landings=self.landings + other.landings,
            simulator=self.simulator + other.simulator,
        )


def fold(total, record):
    """Add one flight record to a totals record.

    Args:
        total: TotalsRecord accumulated so far.
        record: FlightRecord to add.

    Returns:
        New TotalsRecord; neither argument is modified.
    """
    return TotalsRecord(
        times=total.times + record.times,
        landings=total.landings + record.landings,
        simulator=total.simulator + record.simulator.duration,
    )


def summarize(records):
    """Fold an iterable of flight records into one TotalsRecord."""
    total = TotalsRecord.zero()
    for record in records:
        total = fold(total, record)
    return total
