#!/usr/bin/env python3
"""
export.py

Write hourly checklists in eBird's record format (no header row), one row per
species per hour bucket.

Columns:
    Common Name, Genus, Species, Number, Species Comments, Location Name,
    Latitude, Longitude, Date, Start Time, State/Province, Country Code,
    Protocol, Number of Observers, Duration, All observations reported?,
    Effort Distance Miles, Effort area acres, Submission Comments
"""

import json
import sys

import pandas as pd

from .buckets import iter_buckets, tally_species
from .duration import compute_duration
from .report import RED, SUSPECT_CODE, paint
from .time_utils import export_date, short_label

EBIRD_COLUMNS = [
    'Common Name',
    'Genus',
    'Species',
    'Number',
    'Species Comments',
    'Location Name',
    'Latitude',
    'Longitude',
    'Date',
    'Start Time',
    'State/Province',
    'Country Code',
    'Protocol',
    'Number of Observers',
    'Duration',
    'All observations reported?',
    'Effort Distance Miles',
    'Effort area acres',
    'Submission Comments',
]

UNCLASSIFIED_COMMON_NAME = 'passerine sp.'
VESPER_URL = 'https://github.com/HaroldMills/Vesper'
SPECIES_PAGE_URL = 'https://birdinginvermont.com/nfc-species/'


def load_species_codes(path):
    """Species code table (Code,Species) -> {'WIWA': "Wilson's Warbler", ...}"""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    return {row.Code.strip().upper(): row.Species.strip() for row in df.itertuples(index=False)}


def load_species_comments(path):
    with open(path, 'r', encoding='utf-8') as f:
        comments = json.load(f)
    return {code.upper(): entry for code, entry in comments.items()}


def species_comment(code, count, detector, comments):
    """
    Observation comment for one species row. A finished annotation for the
    species replaces the generic detector note.
    """
    entry = comments.get(code.upper()) if code else None
    if entry and not entry.get('WIP', False):
        return (
            f"{count} NFC. {entry['text']} All NFC calls identified here follow this pattern, "
            f"unless noted. If the number of identified calls does not match the NFC count, it "
            f"is because the calls occurred close enough to each other to make it unclear "
            f"whether or not a single bird was calling. For more on {code.upper()} NFC "
            f"identification, consult this checklist {entry['example']}, or the updated page "
            f"at {SPECIES_PAGE_URL}{code}."
        )
    return (
        f"{count} NFC. Detected automatically using Vesper {detector} detector, available at "
        f"{VESPER_URL}. Manually classified using Vesper by me."
    )


def template_row(config):
    """Fields that are the same on every row, taken from the config."""
    location = config['location']
    checklist = config['checklist']
    row = {column: '' for column in EBIRD_COLUMNS}
    row.update({
        'Location Name': location['name'],
        'Latitude': location['latitude'],
        'Longitude': location['longitude'],
        'State/Province': location['state'],
        'Country Code': location['country'],
        'Protocol': checklist['protocol'],
        'Number of Observers': checklist['observers'],
        'All observations reported?': checklist['all_observations_reported'],
        'Submission Comments': checklist['submission_comments'],
    })
    return row


def build_export_rows(buckets, codes, comments, config, time_filter=None, color=False):
    rows = []
    base = template_row(config)

    for date, label, bucket in iter_buckets(buckets):
        duration = compute_duration(bucket, date, label, time_filter)
        counts = tally_species(bucket)

        for (code, family), count in counts.items():
            if count <= 0:
                continue
            # detector of the first call of this species in the bucket
            detector = next(e.detector for e in bucket
                            if e.species == code and (code or e.detector_family == family))

            row = dict(base)
            row['Number'] = count
            row['Date'] = export_date(date)
            row['Start Time'] = short_label(label)
            row['Duration'] = '' if duration is None else duration
            row['Species Comments'] = species_comment(code, count, detector, comments)

            if code == '':
                row['Common Name'] = UNCLASSIFIED_COMMON_NAME
            elif code == SUSPECT_CODE:
                # left blank so a likely keying error is not submitted by accident
                print(paint(f"NOWA:\t {count}", RED, color))
            else:
                row['Common Name'] = codes.get(code.upper(), '')
                if not row['Common Name']:
                    print(f"⚠ No common name for species code {code.upper()} "
                          f"({date} {short_label(label)})", file=sys.stderr)
            rows.append(row)

    return rows


def export_results(buckets, config, time_filter=None, color=False):
    """Write the eBird record file named by config['paths']['export']; returns the DataFrame."""
    codes = load_species_codes(config['paths']['codes'])
    comments = load_species_comments(config['paths']['comments'])

    rows = build_export_rows(buckets, codes, comments, config, time_filter, color)
    export_df = pd.DataFrame(rows, columns=EBIRD_COLUMNS)

    out_path = config['paths']['export']
    export_df.to_csv(out_path, header=False, index=False)
    print(f"Saved {len(export_df)} eBird records to {out_path}")
    return export_df
