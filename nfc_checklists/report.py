"""
report.py

Console summary of the hourly checklists, meant for a quick manual review
before anything is submitted:

    Date: 09/07/20
    Hour: 23:30
    Duration: 30 mins.
    WIWA:    3
    Tseeps:  12
"""

from .buckets import tally_species
from .duration import compute_duration
from .time_utils import short_label

# Pressing 'N' for "next" in Vesper's classifier leaves a stray NOWA code behind
SUSPECT_CODE = 'nowa'

BLUE = '\033[34m'
GREEN = '\033[32m'
RED = '\033[31m'
RESET = '\033[0m'


def paint(text, color, enabled):
    return f"{color}{text}{RESET}" if enabled else str(text)


def species_label(code, family):
    return family if code == '' else code.upper()


def format_bucket_lines(date, label, bucket, time_filter=None, color=False):
    """Lines printed for one non-empty bucket, without the trailing blank line."""
    lines = [f"Hour: {paint(short_label(label), GREEN, color)}"]

    duration = compute_duration(bucket, date, label, time_filter)
    if duration is not None:
        lines.append(f"Duration: {duration} mins.")

    for (code, family), count in tally_species(bucket).items():
        line = f"{species_label(code, family)}:\t {count}"
        if code == SUSPECT_CODE:
            line = paint(line, RED, color)
        lines.append(line)
    return lines


def format_results(buckets, time_filter=None, color=False):
    lines = []
    for date, hours in buckets.items():
        if not any(hours.values()):
            continue
        lines.append('')
        lines.append(paint(f"Date: {date}", BLUE, color))
        for label, bucket in hours.items():
            if not bucket:
                continue
            lines.extend(format_bucket_lines(date, label, bucket, time_filter, color))
            lines.append('')
    return lines


def print_results(buckets, time_filter=None, color=False):
    for line in format_results(buckets, time_filter, color):
        print(line)
