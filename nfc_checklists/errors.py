"""
errors.py

Exceptions raised while turning detection CSVs into checklists.
Everything derives from ChecklistError so the CLI can report them uniformly.
"""


class ChecklistError(Exception):
    """Base class for fatal checklist errors"""


class InputFormatError(ChecklistError):
    """Input CSV or command-line values could not be parsed"""


class MissingSessionError(ChecklistError):
    """No recording session metadata exists for a night that has detections"""

    def __init__(self, date):
        self.date = date
        super().__init__(f"No recording session found for date {date}; "
                         f"cannot determine recording_start/recording_length")


class OrphanEventError(ChecklistError):
    """A detection falls on an hour that no generated bucket covers"""

    def __init__(self, event, key):
        self.event = event
        self.key = key
        date, label = key
        super().__init__(
            f"Detection at {event.detection_time:%m/%d/%y %H:%M:%S} "
            f"(session {event.session_date}, species '{event.species}') has no bucket "
            f"{date} {label}; recording_start/recording_length do not cover it"
        )
