#!/usr/bin/env python3
"""
Export the flight logbook to an EASA-format PDF.

Reads the logbook rows, decodes every row (a bad row aborts the export),
optionally reverses them, splits them into 23-row pages with running
totals and draws each page.

Usage:
    python -m logbook.exporter --config config.ini
    python -m logbook.exporter --config config.ini --output my_logbook.pdf
"""

import argparse

from .config import Config
from .layout import page_layout
from .pagination import LOGBOOK_ROWS, paginate
from .pdf_canvas import LogbookCanvas, load_fonts
from .records import parse_rows
from .sources import fetch_rows
from .totals import TotalsRecord


def load_records(config):
    """Validate the config, read the source and decode every row.

    Returns:
        List of FlightRecord in sheet order.
    """
    config.validate()
    rows = fetch_rows(config)
    records = parse_rows(rows, config.start_row)
    print(f"  Parsed {len(records)} flight records")
    return records


def write_logbook(records, output_file, owner='', page_breaks=(),
                  page_rows=LOGBOOK_ROWS, font_dir=None):
    """Draw the logbook pages for already-ordered records.

    Args:
        records: FlightRecords in print order.
        output_file: Path of the PDF to write.
        owner: Name printed under the certification in every footer.
        page_breaks: Page numbers after which a new logbook starts.
        page_rows: Body rows per page.
        font_dir: Optional directory with the Liberation Sans Narrow fonts.

    Returns:
        Dict with 'pages' (list of Page), 'pdf_pages' and 'totals'.
    """
    fonts = load_fonts(font_dir)
    pdf = LogbookCanvas(output_file, fonts)

    pages = []
    for page in paginate(records, page_rows, page_breaks):
        pdf.add_page()
        pdf.draw_cells(page_layout(page, owner))
        if page.break_after:
            # Blank sheet between two logbooks
            pdf.add_page()
        pages.append(page)

    pdf.save()

    totals = pages[-1].grand_total if pages else TotalsRecord.zero()
    return {'pages': pages, 'pdf_pages': pdf.page_count, 'totals': totals}


def export_logbook(config, records=None):
    """Export the configured logbook to config.logbook_output.

    Args:
        config: Config with source and [logbook] settings.
        records: Already parsed records in sheet order; read from the
            source when None.

    Returns:
        Dict with summary statistics.
    """
    if records is None:
        records = load_records(config)

    ordered = list(reversed(records)) if config.reverse else list(records)

    result = write_logbook(
        ordered,
        config.logbook_output,
        owner=config.owner,
        page_breaks=config.page_breaks,
        font_dir=config.font_dir or None,
    )

    totals = result['totals']
    print(f"  Flights: {len(ordered)}")
    print(f"  Logbook pages: {len(result['pages'])} "
          f"({result['pdf_pages']} PDF pages)")
    print(f"  Total time: {totals.times.total.render_for_totals()}")
    print(f"Logbook has been exported to {config.logbook_output}")

    result['flights'] = len(ordered)
    return result


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Export logbook records to PDF')
    parser.add_argument('--config', '-c', default='config.ini', help='Config file path')
    parser.add_argument('--output', '-o', default=None, help='Output PDF path')
    parser.add_argument('--owner', default=None, help='Logbook owner name')
    args = parser.parse_args()
    cfg = Config.from_file(args.config)
    cfg.override(logbook_output=args.output, owner=args.owner)
    export_logbook(cfg)
