"""
Pagination of flight records into fixed-size logbook pages.

paginate() walks the record stream and yields one Page per printed logbook
page. Each page carries three totals for its footer:

    page_total      records on this page
    previous_total  all earlier pages ("carried forward")
    grand_total     everything up to and including this page

Page breaks separate physical logbooks inside one PDF. When the page that
was just completed has the number at the head of the break queue, a blank
separator page follows it and numbering restarts at 1.
"""

from dataclasses import dataclass

from .totals import TotalsRecord, fold

LOGBOOK_ROWS = 23


def is_shaded(position):
    """Whether the 1-based row position within a page gets a grey fill."""
    return position % 3 == 0


class PageBreakQueue:
    """Ordered page-break thresholds, consumed front to back.

    The thresholds are copied into a tuple; consuming only advances a
    cursor, so the caller's list is never touched.
    """

    def __init__(self, thresholds=()):
        try:
            self._thresholds = tuple(int(t) for t in thresholds)
        except (TypeError, ValueError):
            raise ValueError(
                f"Page breaks must be page numbers, got {thresholds!r}"
            ) from None
        self._cursor = 0

    @property
    def head(self):
        """The next threshold, or None once the queue is exhausted."""
        if self._cursor < len(self._thresholds):
            return self._thresholds[self._cursor]
        return None

    def consume(self):
        threshold = self.head
        if threshold is not None:
            self._cursor += 1
        return threshold

    @property
    def remaining(self):
        return self._thresholds[self._cursor:]

    def __len__(self):
        return len(self._thresholds) - self._cursor

    def __repr__(self):
        return f"PageBreakQueue({list(self.remaining)!r})"


@dataclass(frozen=True)
class Page:
    number: int
    rows: tuple
    page_total: TotalsRecord
    previous_total: TotalsRecord
    grand_total: TotalsRecord
    break_after: bool = False

    @property
    def records(self):
        """The non-blank rows of the page."""
        return [row for row in self.rows if row is not None]

    def shaded_positions(self):
        return [pos for pos in range(1, len(self.rows) + 1) if is_shaded(pos)]


def paginate(records, page_rows=LOGBOOK_ROWS, page_breaks=()):
    """Split flight records into logbook pages.

    Args:
        records: Iterable of FlightRecord, already in print order (reverse
            it beforehand for newest-first logbooks).
        page_rows: Body rows per page.
        page_breaks: Iterable of page numbers (or a PageBreakQueue) after
            which a new logbook starts.

    Yields:
        Page, in print order. The last page is padded with None rows.
        An empty stream still yields one blank page.
    """
    if page_rows < 1:
        raise ValueError(f"page_rows must be at least 1, got {page_rows}")

    if isinstance(page_breaks, PageBreakQueue):
        breaks = PageBreakQueue(page_breaks.remaining)
    else:
        breaks = PageBreakQueue(page_breaks)

    page_number = 1
    rows = []
    page_total = TotalsRecord.zero()
    previous_total = TotalsRecord.zero()
    grand_total = TotalsRecord.zero()

    for record in records:
        if len(rows) == page_rows:
            # A full page is flushed only when another record follows
            break_after = breaks.head == page_number
            yield Page(page_number, tuple(rows), page_total,
                       previous_total, grand_total, break_after)
            previous_total = previous_total + page_total
            page_total = TotalsRecord.zero()
            if break_after:
                breaks.consume()
                page_number = 1
            else:
                page_number += 1
            rows = []

        rows.append(record)
        page_total = fold(page_total, record)
        grand_total = fold(grand_total, record)

    rows.extend([None] * (page_rows - len(rows)))
    yield Page(page_number, tuple(rows), page_total, previous_total,
               grand_total)
