"""
duration.py

Observation minutes covered by one hour bucket.

Both the console report and the eBird export call compute_duration so the
two can never disagree about a checklist's effort.
"""

from typing import Optional

from .time_utils import bucket_datetime, truncate_to_hour


def effective_window(session, time_filter=None):
    """
    Recording window of `session`, clipped to the filter when one is active.
    Nothing can be observed before recording began or after it stopped.
    """
    start, end = session.start, session.end
    if time_filter is None:
        return start, end
    return max(time_filter.start, start), min(time_filter.end, end)


def compute_duration(bucket, date, label, time_filter=None) -> Optional[int]:
    """
    Minutes of recording inside the bucket's hour.

    Args:
        bucket: detections assigned to (date, label)
        date: bucket date, MM/DD/YY
        label: bucket label, literal start time or 'H:00:00'
        time_filter: optional TimeFilter

    Returns:
        None for an empty bucket (nothing was observed), otherwise
          - end.minute - start.minute  when the session starts and ends in this hour
          - end.minute                 when the session ends in this hour
          - 60 - start.minute          when the session starts in this hour
          - 60                         for an interior hour
    """
    snapshot = tuple(bucket)
    if not snapshot:
        return None

    start, end = effective_window(snapshot[0].session, time_filter)
    hour = truncate_to_hour(bucket_datetime(date, label))

    if hour == truncate_to_hour(end):
        if hour == truncate_to_hour(start):
            return end.minute - start.minute
        return end.minute
    if hour == truncate_to_hour(start):
        return 60 - start.minute
    return 60
