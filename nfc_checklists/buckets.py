#!/usr/bin/env python3
"""
buckets.py

Group detections into eBird-style hourly checklists.

An overnight session is cut into hour buckets keyed by (calendar date, label):
    - the first bucket is labelled with the literal recording start, e.g. '20:47:13',
      and collects everything up to the top of the next hour
    - every later bucket is labelled 'H:00:00'
    - buckets after midnight belong to the following calendar date

Pipeline:
    extract_session_dates -> make_hour_buckets -> assign_detections
"""

from collections import Counter
from datetime import timedelta
from typing import Dict, List, Optional

from .detections import build_session_index
from .errors import MissingSessionError, OrphanEventError
from .time_utils import format_date, hour_label, owning_date, truncate_to_hour

# --------------------------
# Session dates
# --------------------------

def extract_session_dates(events, time_filter=None) -> List[str]:
    """
    Distinct session dates that have at least one qualifying detection,
    in first-seen order. With a filter, each event is checked on its own:
    a night only counts if one of its calls falls inside the window.
    """
    dates = []
    seen = set()
    for event in events:
        if time_filter is not None and not time_filter.contains(event.detection_time):
            continue
        if event.session_date not in seen:
            seen.add(event.session_date)
            dates.append(event.session_date)
    return dates


# --------------------------
# Hour buckets
# --------------------------

def session_hours(session):
    """
    Yield (date, label) for every bucket the session spans, in time order.
    The hour containing the session end is included.
    """
    yield owning_date(session.date, session.start_hour), session.recording_start

    end = session.end
    cursor = truncate_to_hour(session.start) + timedelta(hours=1)
    while cursor <= end:
        yield owning_date(session.date, cursor.hour), hour_label(cursor.hour)
        cursor += timedelta(hours=1)


def make_hour_buckets(dates, sessions) -> Dict[str, Dict[str, list]]:
    """
    Build the empty date -> label -> [] mapping for the given session dates.

    Args:
        dates: session dates, e.g. from extract_session_dates
        sessions: date -> Session index (see build_session_index)

    Returns:
        New mapping; dates after midnight are appended as they are first needed.
    """
    buckets = {date: {} for date in dates}
    for date in dates:
        session = sessions.get(date)
        if session is None:
            raise MissingSessionError(date)
        for bucket_date, label in session_hours(session):
            buckets.setdefault(bucket_date, {})[label] = []
    return buckets


# --------------------------
# Event assignment
# --------------------------

def bucket_key_for(event):
    ts = event.detection_time
    if ts.hour == event.session.start_hour:
        label = event.recording_start
    else:
        label = hour_label(ts.hour)
    return format_date(ts), label


def assign_detections(events, buckets, time_filter=None):
    """
    Return a copy of `buckets` with every qualifying event appended to its bucket.
    Raises OrphanEventError rather than inventing a bucket that was not generated.
    """
    filled = {date: {label: list(bucket) for label, bucket in hours.items()}
              for date, hours in buckets.items()}

    for event in events:
        if time_filter is not None and not time_filter.contains(event.detection_time):
            continue
        date, label = bucket_key_for(event)
        try:
            filled[date][label].append(event)
        except KeyError:
            raise OrphanEventError(event, (date, label)) from None
    return filled


def bucket_detections(events, time_filter=None, sessions: Optional[dict] = None):
    """Run the whole bucketing pipeline and return the filled mapping."""
    if sessions is None:
        sessions = build_session_index(events)
    dates = extract_session_dates(events, time_filter)
    buckets = make_hour_buckets(dates, sessions)
    return assign_detections(events, buckets, time_filter)


def iter_buckets(buckets, skip_empty=True):
    """Yield (date, label, bucket) in mapping order."""
    for date, hours in buckets.items():
        for label, bucket in hours.items():
            if skip_empty and not bucket:
                continue
            yield date, label, bucket


# --------------------------
# Species counts
# --------------------------

def tally_species(bucket):
    """
    Count calls per species.

    Returns a Counter keyed by (species code, detector family). Classified
    calls have family None; unclassified calls (code '') are keyed by the
    family of the detector that found them so they never merge with a species.
    """
    counts = Counter()
    for event in bucket:
        if event.is_classified:
            counts[(event.species, None)] += 1
        else:
            counts[('', event.detector_family)] += 1
    return counts
