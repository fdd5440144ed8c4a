"""
config.py

Checklist metadata (location, protocol, observer) and auxiliary file paths.
Values come from DEFAULT_CONFIG, then an optional YAML file, then CLI arguments.
"""

import argparse
import copy
from pathlib import Path
from typing import Dict, Optional

import yaml

from .errors import InputFormatError

DATA_DIR = Path(__file__).parent / 'data'

DEFAULT_CONFIG = {
    'location': {
        'name': 'Monsignor Crosby Ave (Yard)',
        'latitude': '44.258034',
        'longitude': '-72.574655',
        'state': 'VT',
        'country': 'US',
    },
    'checklist': {
        'protocol': 'stationary',  # eBird import needs this changed by hand to NFC
        'observers': '1',
        'all_observations_reported': 'N',
        'submission_comments': (
            'Recorded using an OldBird 21c microphone, recording to a NUC7CHYJ using '
            'I-Recorded on Windows 10, at 22050Hz, mono, 16bit. Analyzed using Vesper '
            '(https://github.com/HaroldMills/Vesper).'
        ),
    },
    'paths': {
        'codes': str(DATA_DIR / 'codes.csv'),
        'comments': str(DATA_DIR / 'comments.json'),
        'export': 'checklists_export.csv',
    },
}


def merge_config(base, override):
    """Recursively merge override into a copy of base; override wins per key."""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Path] = None, args: Optional[argparse.Namespace] = None) -> Dict:
    """
    Load configuration from YAML file and/or command-line arguments.
    CLI arguments override config file values.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise InputFormatError(f"Config file not found: {config_path}")
        with open(config_path, 'r') as f:
            user_config = yaml.safe_load(f) or {}
        if not isinstance(user_config, dict):
            raise InputFormatError(f"Config file {config_path} must contain a mapping")
        config = merge_config(config, user_config)
        print(f"Loaded configuration from: {config_path}")

    if args is not None and getattr(args, 'output', None):
        config['paths']['export'] = args.output

    return config
