import json
import logging
from pathlib import Path
from typing import Iterable, Set, Union

logger = logging.getLogger(__name__)


class SavedTracksStore:
    """Persists the ids of saved tracks as a small JSON document."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Set[str]:
        """Load saved track ids from disk.

        A missing or unreadable file yields an empty set.
        """
        if not self.path.exists():
            return set()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load saved tracks from {self.path}: {e}")
            return set()

        track_ids = data.get('saved_track_ids', []) if isinstance(data, dict) else []
        if not isinstance(track_ids, list):
            logger.warning(f"Ignoring malformed saved tracks file {self.path}")
            return set()

        return {str(track_id) for track_id in track_ids}

    def save(self, track_ids: Iterable[str]) -> None:
        """Write saved track ids to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump({'saved_track_ids': sorted(track_ids)}, f, indent=2)
        except OSError as e:
            logger.error(f"Could not save tracks to {self.path}: {e}")
