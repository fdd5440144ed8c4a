#!/usr/bin/env python3
"""
detections.py

Load Vesper clip exports into DetectionEvent records.

Expected input CSV format (header, any delimiter, extra columns ignored):
    season,date,real_detection_time,recording_start,recording_length,species,detector

Assumptions:
    - date is the nominal night of the recording session (MM/DD/YY).
    - every row of a session repeats the same recording_start/recording_length.
    - species is a 4-letter code, empty for calls that were never classified.
    - rows with an empty season are padding (trailing newline etc.) and dropped.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import pandas as pd

from .errors import InputFormatError
from .time_utils import (
    CLOCK_FORMAT,
    DETECTION_FORMAT,
    format_clock,
    format_date,
    is_between,
    owning_date,
    parse_clock,
    parse_date,
    parse_filter_time,
    parse_length,
)

REQUIRED_COLUMNS = [
    'season',
    'date',
    'real_detection_time',
    'recording_start',
    'recording_length',
    'species',
    'detector',
]

TSEEP_FAMILY = 'Tseeps'
THRUSH_FAMILY = 'Thrushes'


def detector_family(detector):
    """Collapse a Vesper detector name to the label used for unclassified calls."""
    return TSEEP_FAMILY if 'tseep' in detector.lower() else THRUSH_FAMILY


@dataclass(frozen=True)
class Session:
    """One overnight recording run"""
    date: str
    recording_start: str
    recording_length: timedelta

    @property
    def start_hour(self):
        return int(self.recording_start.split(':')[0])

    @property
    def start(self):
        # A run that starts after midnight belongs to the morning after its nominal date
        day = parse_date(owning_date(self.date, self.start_hour))
        return datetime.combine(day, datetime.strptime(self.recording_start, CLOCK_FORMAT).time())

    @property
    def end(self):
        return self.start + self.recording_length


@dataclass(frozen=True)
class DetectionEvent:
    """A single detected call"""
    detection_time: datetime
    session_date: str
    recording_start: str
    recording_length: timedelta
    species: str
    detector: str
    season: str = ''

    @property
    def session(self):
        return Session(self.session_date, self.recording_start, self.recording_length)

    @property
    def detector_family(self):
        return detector_family(self.detector)

    @property
    def is_classified(self):
        return self.species != ''


@dataclass(frozen=True)
class TimeFilter:
    """Operator supplied observation window"""
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise InputFormatError(
                f"Filter start {self.start} must be earlier than filter end {self.end}")

    def contains(self, ts):
        return is_between(ts, self.start, self.end)


def make_time_filter(start: Optional[str], end: Optional[str]) -> Optional[TimeFilter]:
    """
    Build a TimeFilter from --start/--end strings (YYYY/MM/DD HH:MM:SS).
    Filtering only applies when both are given.
    """
    if not start or not end:
        if start or end:
            print("⚠ --start and --end must be given together; time filter disabled")
        return None
    try:
        return TimeFilter(parse_filter_time(start), parse_filter_time(end))
    except ValueError as e:
        raise InputFormatError(f"Could not parse time filter: {e}") from e


# --------------------------
# Loading
# --------------------------

def _parse_column(df, column, parser):
    """Apply parser to every cell, turning the first failure into an InputFormatError."""
    parsed = []
    for idx, value in df[column].items():
        try:
            parsed.append(parser(value))
        except ValueError as e:
            # +2: header line plus 1-based numbering
            raise InputFormatError(
                f"Row {idx + 2}: could not parse {column} '{value}' ({e})") from e
    return parsed


def read_detections(csv_path):
    """Read the raw CSV as strings, dropping padding rows. Returns a DataFrame."""
    try:
        # utf-8-sig: spreadsheet editors prepend a BOM to the header
        df = pd.read_csv(csv_path, sep=None, engine='python', dtype=str, encoding='utf-8-sig',
                         keep_default_na=False, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise InputFormatError(f"Could not read {csv_path}: {e}") from e
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InputFormatError(f"{csv_path} is missing required columns: {', '.join(missing)}")

    df = df[df['season'].fillna('').str.strip() != ''].copy()

    # short rows come back with NaN in the fields they lack
    short = df[REQUIRED_COLUMNS].isna().any(axis=1)
    if short.any():
        idx = short[short].index[0]
        absent = [c for c in REQUIRED_COLUMNS if pd.isna(df.at[idx, c])]
        raise InputFormatError(
            f"Row {idx + 2}: missing value for {', '.join(absent)}")
    return df


def parse_detections(df) -> List[DetectionEvent]:
    """Convert a string DataFrame (see read_detections) into DetectionEvents."""
    if len(df) == 0:
        return []

    detection_times = pd.to_datetime(df['real_detection_time'].str.strip(),
                                     format=DETECTION_FORMAT, errors='coerce')
    bad = detection_times.isna()
    if bad.any():
        idx = bad[bad].index[0]
        raise InputFormatError(
            f"Row {idx + 2}: could not parse real_detection_time "
            f"'{df.at[idx, 'real_detection_time']}' (expected MM/DD/YY HH:MM:SS)")

    dates = _parse_column(df, 'date', lambda v: format_date(parse_date(v)))
    starts = _parse_column(df, 'recording_start', lambda v: format_clock(parse_clock(v)))
    lengths = _parse_column(df, 'recording_length', parse_length)

    events = []
    for ts, date, start, length, r in zip(detection_times, dates, starts, lengths,
                                          df.itertuples(index=False)):
        events.append(DetectionEvent(
            detection_time=ts.to_pydatetime(),
            session_date=date,
            recording_start=start,
            recording_length=length,
            species=r.species.strip().lower(),
            detector=r.detector.strip(),
            season=r.season.strip(),
        ))
    return events


def load_detections(csv_path) -> List[DetectionEvent]:
    df = read_detections(csv_path)
    events = parse_detections(df)
    print(f"Loaded {len(events)} detections from {csv_path}")
    return events


# --------------------------
# Session metadata
# --------------------------

def build_session_index(events) -> Dict[str, Session]:
    """
    Map each session date to its recording window.
    The first row seen for a date defines the session.
    """
    sessions = {}
    for event in events:
        if event.session_date not in sessions:
            sessions[event.session_date] = event.session
    return sessions
