#!/usr/bin/env python3
"""
create_checklists.py

Turn a Vesper NFC clip export into hourly eBird checklists.

Usage:
    nfc-checklists clips.csv
    nfc-checklists clips.csv --start "2020/09/07 21:00:00" --end "2020/09/08 05:00:00" --export
    nfc-checklists clips.csv --export --config config.yaml --plot results/hourly.png
"""

import argparse
import sys
from pathlib import Path

from .buckets import bucket_detections
from .config import load_config
from .detections import load_detections, make_time_filter
from .errors import ChecklistError
from .export import export_results
from .plots import plot_hourly_counts
from .report import print_results


def run_pipeline(csv_path, config, start=None, end=None, export=False, plot_path=None, color=False):
    time_filter = make_time_filter(start, end)

    events = load_detections(csv_path)
    if not events:
        print(f"⚠ No detections found in {csv_path}")

    buckets = bucket_detections(events, time_filter)
    print_results(buckets, time_filter, color=color)

    export_df = None
    if export:
        export_df = export_results(buckets, config, time_filter, color=color)

    if plot_path:
        plot_hourly_counts(buckets, plot_path)

    return {
        'events': events,
        'time_filter': time_filter,
        'buckets': buckets,
        'export_df': export_df,
    }


def build_parser():
    parser = argparse.ArgumentParser(
        description='Create hourly eBird checklists from Vesper NFC detections',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nfc-checklists clips.csv
  nfc-checklists clips.csv --start "2020/09/07 21:00:00" --end "2020/09/08 05:00:00"
  nfc-checklists clips.csv --export --output "eBird export.csv"
        """
    )
    parser.add_argument('input', help='Vesper clip export CSV')
    parser.add_argument('--start', help='Only count calls after this time (YYYY/MM/DD HH:mm:ss)')
    parser.add_argument('--end', help='Only count calls before this time (YYYY/MM/DD HH:mm:ss)')
    parser.add_argument('--export', action='store_true', help='Write an eBird record file')
    parser.add_argument('--output', help='Export file path (overrides paths.export)')
    parser.add_argument('--config', type=str, help='Path to YAML configuration file')
    parser.add_argument('--plot', help='Save a PNG chart of calls per hour to this path')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    color = not args.no_color and sys.stdout.isatty()

    try:
        config = load_config(Path(args.config) if args.config else None, args)
        run_pipeline(
            args.input,
            config,
            start=args.start,
            end=args.end,
            export=args.export,
            plot_path=args.plot,
            color=color,
        )
    except (ChecklistError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
