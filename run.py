#!/usr/bin/env python3
"""
Flight logbook export pipeline runner.

Reads a flight logbook (local Excel workbook or Google spreadsheet) and
produces:
1. An EASA-format logbook PDF (23 rows per page, page/previous/grand totals)
2. A PNG map of visited airports and flown routes

Usage:
    python run.py                                   # Uses config.ini
    python run.py --input logbook.xlsx              # Local workbook
    python run.py --step export                     # PDF only
    python run.py --step render-map -d 2023         # Map of 2023 flights
    python run.py --page-breaks 50,100 --owner "J. Smith"
"""

import argparse
import os
import sys

from logbook import __version__
from logbook.config import Config
from logbook.errors import LogbookError


STEPS = ['export', 'render-map']


def run_export(config, records):
    """Step 1: Export the logbook PDF."""
    from logbook.exporter import export_logbook
    print("\n" + "=" * 70)
    print("STEP 1: Exporting logbook PDF")
    print("=" * 70)
    print(f"  Owner: {config.owner}")
    print(f"  Order: {'newest first' if config.reverse else 'oldest first'}")
    if config.page_breaks:
        print(f"  Page breaks after pages: {', '.join(map(str, config.page_breaks))}")
    export_logbook(config, records)


def run_render_map(config, records):
    """Step 2: Render the map of visited airports."""
    from logbook.route_map import render_route_map
    print("\n" + "=" * 70)
    print("STEP 2: Rendering airports map")
    print("=" * 70)
    if config.filter_date:
        print(f"  Date filter: {config.filter_date}")
    render_route_map(config, records)


STEP_FUNCTIONS = {
    'export': run_export,
    'render-map': run_render_map,
}


def main():
    parser = argparse.ArgumentParser(
        description='Flight logbook to EASA PDF and airports map',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Steps (run in order, or individually with --step):
  export         Export logbook records to an EASA-format PDF
  render-map     Render a PNG map of visited airports and routes

Data sources ([source] type in config.ini):
  xlsx           Local workbook, sheet "Flights" (file_name)
  google         Google spreadsheet (api_key, spreadsheet_id)

Examples:
  python run.py --input my_logbook.xlsx          # Local workbook
  python run.py --step export --no-reverse       # Oldest flights first
  python run.py --step render-map -d 2023-05     # Only May 2023
  python run.py --page-breaks 50,100             # Three logbooks in one PDF
        """,
    )
    parser.add_argument('--config', '-c', default='config.ini',
                        help='Config file path (default: config.ini)')
    parser.add_argument('--step', '-s', choices=STEPS,
                        help='Run only this step')
    parser.add_argument('--input', '-i', default=None,
                        help='Logbook workbook (.xlsx); selects the xlsx source')
    parser.add_argument('--output', '-o', default=None,
                        help='Override logbook PDF output path')
    parser.add_argument('--map-output', default=None,
                        help='Override map PNG output path')
    parser.add_argument('--owner', default=None,
                        help='Override logbook owner name')
    parser.add_argument('--page-breaks', default=None,
                        help='Comma separated page numbers that end a logbook')
    parser.add_argument('--reverse', dest='reverse', action='store_true',
                        default=None, help='Newest flights first')
    parser.add_argument('--no-reverse', dest='reverse', action='store_false',
                        help='Oldest flights first')
    parser.add_argument('--filter-date', '-d', default=None,
                        help='Only map flights whose DATE contains this text')
    parser.add_argument('--no-routes', action='store_true', default=None,
                        help='Skip rendering routes on the map')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')

    args = parser.parse_args()

    if not os.path.exists(args.config):
        print(f"Config file {args.config} does not exist, creating...")
        Config.write_default(args.config)

    try:
        config = Config.from_file(args.config)

        if args.input:
            config.override(source_type='xlsx', file_name=args.input)

        config.override(
            logbook_output=args.output,
            map_output=args.map_output,
            owner=args.owner,
            page_breaks=args.page_breaks,
            reverse=args.reverse,
            filter_date=args.filter_date,
            filter_no_routes=args.no_routes,
        )

        print("Flight Logbook -> EASA PDF Pipeline")
        print("=" * 70)
        print(f"Config: {os.path.abspath(args.config)}")
        if config.source_type == 'google':
            print(f"Source: Google spreadsheet {config.spreadsheet_id or '(not set)'}")
        else:
            print(f"Source: {config.file_name or '(not set)'} [xlsx]")
        print(f"Logbook: {config.logbook_output}")
        print(f"Map: {config.map_output}")

        from logbook.exporter import load_records
        records = load_records(config)

        steps = [args.step] if args.step else STEPS
        for s in steps:
            STEP_FUNCTIONS[s](config, records)

        print("\n" + "=" * 70)
        print("PIPELINE COMPLETE")
        print("=" * 70)

    except LogbookError as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
