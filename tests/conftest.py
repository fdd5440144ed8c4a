"""Shared fixtures for the checklist tests."""

import csv
from datetime import datetime

import matplotlib
import pytest

from nfc_checklists.detections import DetectionEvent
from nfc_checklists.time_utils import parse_length

matplotlib.use('Agg')

CSV_COLUMNS = ['season', 'date', 'real_detection_time', 'recording_start',
               'recording_length', 'species', 'detector']


def make_event(detection_time, session_date='09/07/20', recording_start='23:30:00',
               recording_length='1:00:00', species='wiwa', detector='tseep'):
    """Build a DetectionEvent from the same strings a CSV row would carry."""
    return DetectionEvent(
        detection_time=datetime.strptime(detection_time, '%m/%d/%y %H:%M:%S'),
        session_date=session_date,
        recording_start=recording_start,
        recording_length=parse_length(recording_length),
        species=species,
        detector=detector,
        season='Fall 2020',
    )


def make_row(real_detection_time, date='09/07/20', recording_start='23:30:00',
             recording_length='1:00:00', species='wiwa', detector='tseep', season='Fall 2020'):
    return {
        'season': season,
        'date': date,
        'real_detection_time': real_detection_time,
        'recording_start': recording_start,
        'recording_length': recording_length,
        'species': species,
        'detector': detector,
    }


@pytest.fixture
def write_csv(tmp_path):
    """Write rows (dicts) to a CSV in tmp_path and return its path."""
    def _write(rows, name='clips.csv', columns=CSV_COLUMNS):
        path = tmp_path / name
        with open(path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=columns, extrasaction='ignore')
            writer.writeheader()
            writer.writerows(rows)
        return path
    return _write


@pytest.fixture
def night_events():
    """One night, 20:15 for 10 hours, with calls spread across midnight."""
    common = dict(session_date='09/07/20', recording_start='20:15:00', recording_length='10:00:00')
    return [
        make_event('09/07/20 20:20:00', species='wiwa', **common),
        make_event('09/07/20 20:50:00', species='', **common),
        make_event('09/07/20 21:05:00', species='swth', detector='thrush', **common),
        make_event('09/07/20 23:59:59', species='wiwa', **common),
        make_event('09/08/20 00:10:00', species='', **common),
        make_event('09/08/20 03:33:00', species='nowa', **common),
        make_event('09/08/20 06:05:00', species='wiwa', **common),
    ]
