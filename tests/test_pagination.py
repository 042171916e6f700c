"""Tests for the pagination engine."""

from __future__ import annotations

import pytest

from logbook.pagination import LOGBOOK_ROWS, PageBreakQueue, is_shaded, paginate
from logbook.totals import TotalsRecord, summarize


def _records(make_record, count):
    return [make_record(date=f"2023-01-{i + 1:02d}", total=60 + i) for i in range(count)]


def test_empty_input_gives_one_blank_page():
    pages = list(paginate([]))
    assert len(pages) == 1
    page = pages[0]
    assert page.number == 1
    assert len(page.rows) == LOGBOOK_ROWS
    assert all(row is None for row in page.rows)
    assert page.grand_total == TotalsRecord.zero()
    assert not page.break_after


def test_partial_last_page_is_padded(make_record):
    pages = list(paginate(_records(make_record, 25)))
    assert [p.number for p in pages] == [1, 2]
    assert len(pages[1].rows) == LOGBOOK_ROWS
    assert len(pages[1].records) == 2


def test_exact_multiple_has_no_trailing_empty_page(make_record):
    pages = list(paginate(_records(make_record, 46)))
    assert len(pages) == 2
    assert len(pages[1].records) == LOGBOOK_ROWS


def test_page_break_restarts_numbering(make_record):
    r1, r2, r3, r4 = _records(make_record, 4)
    pages = list(paginate([r1, r2, r3, r4], page_rows=2, page_breaks=[1]))

    assert len(pages) == 2
    assert pages[0].records == [r1, r2]
    assert pages[1].records == [r3, r4]
    assert [p.number for p in pages] == [1, 1]
    assert pages[0].break_after
    assert not pages[1].break_after


def test_page_breaks_are_consumed_in_order(make_record):
    pages = list(paginate(_records(make_record, 10), page_rows=2,
                          page_breaks=[2, 1]))
    assert [p.number for p in pages] == [1, 2, 1, 1, 2]
    assert [p.break_after for p in pages] == [False, True, True, False, False]


def test_unreached_page_break_is_ignored(make_record):
    pages = list(paginate(_records(make_record, 3), page_rows=2, page_breaks=[9]))
    assert [p.number for p in pages] == [1, 2]
    assert not any(p.break_after for p in pages)


def test_caller_queue_is_not_consumed(make_record):
    queue = PageBreakQueue([1])
    list(paginate(_records(make_record, 4), page_rows=2, page_breaks=queue))
    assert queue.head == 1
    assert len(queue) == 1


def test_carried_forward_totals(make_record):
    records = _records(make_record, 5)
    pages = list(paginate(records, page_rows=2))

    assert pages[0].previous_total == TotalsRecord.zero()
    assert pages[1].previous_total == summarize(records[:2])
    assert pages[2].previous_total == summarize(records[:4])
    assert pages[2].page_total == summarize(records[4:])
    assert pages[2].grand_total == summarize(records)


def test_sum_of_page_totals_is_the_grand_total(make_record):
    records = _records(make_record, 50)
    pages = list(paginate(records, page_breaks=[1]))
    page_sum = TotalsRecord.zero()
    for page in pages:
        page_sum = page_sum + page.page_total
        assert page.grand_total == page.previous_total + page.page_total
    assert page_sum == pages[-1].grand_total == summarize(records)


def test_shading_restarts_on_every_page(make_record):
    pages = list(paginate(_records(make_record, 30)))
    for page in pages:
        assert page.shaded_positions() == [3, 6, 9, 12, 15, 18, 21]


def test_is_shaded():
    assert [p for p in range(1, 10) if is_shaded(p)] == [3, 6, 9]


def test_page_rows_must_be_positive():
    with pytest.raises(ValueError):
        list(paginate([], page_rows=0))


def test_queue_rejects_non_numeric_thresholds():
    with pytest.raises(ValueError):
        PageBreakQueue(["one"])


def test_queue_consume():
    queue = PageBreakQueue([3, 7])
    assert queue.consume() == 3
    assert queue.head == 7
    assert queue.consume() == 7
    assert queue.head is None
    assert queue.consume() is None
    assert len(queue) == 0
