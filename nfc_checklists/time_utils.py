"""
time_utils.py

Parsing and formatting for the date/time encodings used by Vesper exports,
plus the small interval helpers the bucketing code relies on.

Encodings:
    MM/DD/YY            session dates (`date` column)
    HH:MM:SS            recording start times and hour bucket labels
    H:MM:SS             recording lengths (hours may exceed 23)
    MM/DD/YY HH:MM:SS   detection timestamps (`real_detection_time`)
    YYYY/MM/DD HH:MM:SS --start / --end filter values
"""

from datetime import datetime, timedelta

DATE_FORMAT = '%m/%d/%y'
CLOCK_FORMAT = '%H:%M:%S'
DETECTION_FORMAT = '%m/%d/%y %H:%M:%S'
FILTER_FORMAT = '%Y/%m/%d %H:%M:%S'

# Hours before noon belong to the morning after the session's nominal night
MORNING_CUTOFF_HOUR = 12


def parse_date(value):
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def format_date(value):
    return value.strftime(DATE_FORMAT)


def next_date(date_str):
    """'09/30/20' -> '10/01/20'"""
    return format_date(parse_date(date_str) + timedelta(days=1))


def parse_clock(value):
    return datetime.strptime(value.strip(), CLOCK_FORMAT).time()


def format_clock(value):
    return value.strftime(CLOCK_FORMAT)


def parse_length(value):
    """
    Parse a recording length like '9:47:13' into a timedelta.
    Unlike a clock time the hour field is unbounded.
    """
    parts = value.strip().split(':')
    if len(parts) != 3:
        raise ValueError(f"Recording length '{value}' is not H:MM:SS")
    hours, minutes, seconds = (int(p) for p in parts)
    if hours < 0 or not 0 <= minutes < 60 or not 0 <= seconds < 60:
        raise ValueError(f"Recording length '{value}' is out of range")
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def parse_filter_time(value):
    return datetime.strptime(value.strip(), FILTER_FORMAT)


def is_between(ts, start, end):
    """Exclusive containment check: start < ts < end."""
    return start < ts < end


def truncate_to_hour(ts):
    return ts.replace(minute=0, second=0, microsecond=0)


def hour_label(hour):
    """Bucket label for a whole hour, e.g. 3 -> '3:00:00'."""
    return f"{hour}:00:00"


def short_label(label):
    """'23:30:00' -> '23:30', '3:00:00' -> '3:00'"""
    return ':'.join(label.split(':')[:2])


def bucket_datetime(date_str, label):
    """Timestamp at which a bucket begins."""
    clock = datetime.strptime(label, CLOCK_FORMAT).time()
    return datetime.combine(parse_date(date_str), clock)


def export_date(date_str):
    """'09/07/20' -> '9/07/2020' (eBird record format)."""
    d = parse_date(date_str)
    return f"{d.month}/{d.day:02d}/{d.year}"


def owning_date(session_date, hour):
    """
    Calendar date that owns an hour of an overnight session.

    Evening hours (12-23) stay on the session's nominal date, hours after
    midnight (0-11) belong to the following date.
    """
    if hour >= MORNING_CUTOFF_HOUR:
        return session_date
    return next_date(session_date)
