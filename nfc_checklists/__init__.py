"""Hourly eBird checklists from Vesper nocturnal flight call detections."""

__version__ = '1.0.0'

from .buckets import (
    assign_detections,
    bucket_detections,
    extract_session_dates,
    make_hour_buckets,
    tally_species,
)
from .detections import (
    DetectionEvent,
    Session,
    TimeFilter,
    build_session_index,
    load_detections,
)
from .duration import compute_duration
from .errors import ChecklistError, InputFormatError, MissingSessionError, OrphanEventError
