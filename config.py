"""
Configuration constants for Neural Waves.

Paths can be overridden through environment variables so a test run or a
portable install can point the app somewhere other than the user's home.
"""

import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

DATA_DIR = Path(
    os.environ.get('NEURALWAVES_DATA_DIR', Path.home() / '.local' / 'share' / 'neuralwaves')
).expanduser()

# Audio files referenced by the catalog are resolved against this directory
AUDIO_DIR = Path(os.environ.get('NEURALWAVES_AUDIO_DIR', DATA_DIR / 'audio')).expanduser()

# Optional JSON catalog snapshot; the built-in sample catalog is used when unset
CATALOG_FILE = os.environ.get('NEURALWAVES_CATALOG') or None

SAVED_TRACKS_FILE = DATA_DIR / 'saved_tracks.json'

LOG_FILE = DATA_DIR / 'neuralwaves.log'
LOG_LEVEL = os.environ.get('NEURALWAVES_LOG_LEVEL', 'INFO').upper()

# =============================================================================
# PLAYBACK
# =============================================================================

# Seconds between session ticks
TICK_INTERVAL = 1.0

SAMPLE_RATE = 44100
NUM_CHANNELS = 2
MIXER_BUFFER_SIZE = 512
DEFAULT_VOLUME = 0.7


def ensure_data_dir() -> Path:
    """Create the data directory if needed and return it."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return DATA_DIR
