import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from models.category import Category
from models.track import Track

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog snapshot cannot be loaded."""


SAMPLE_TRACKS = (
    Track("focus-deep-focus-flow", "Deep Focus Flow", "Neural Waves", Category.FOCUS, 1800, "deep_focus_flow.wav"),
    Track("focus-concentration-boost", "Concentration Boost", "Mind Sync", Category.FOCUS, 2400, "concentration_boost.wav"),
    Track("focus-alpha-waves", "Alpha Waves", "Brain Tune", Category.FOCUS, 3600, "alpha_waves.wav"),
    Track("relax-ocean-breeze", "Ocean Breeze", "Calm Sounds", Category.RELAX, 1200, "ocean_breeze.wav"),
    Track("relax-forest-meditation", "Forest Meditation", "Nature Harmony", Category.RELAX, 1800, "forest_meditation.wav"),
    Track("relax-peaceful-mind", "Peaceful Mind", "Zen Master", Category.RELAX, 2700, "peaceful_mind.wav"),
    Track("sleep-delta-dreams", "Delta Dreams", "Sleep Lab", Category.DEEP_SLEEP, 3600, "delta_dreams.wav"),
    Track("sleep-night-whispers", "Night Whispers", "Dream Weaver", Category.DEEP_SLEEP, 4800, "night_whispers.wav"),
    Track("sleep-theta-healing", "Theta Healing", "Sleep Therapy", Category.DEEP_SLEEP, 5400, "theta_healing.wav"),
)


class Catalog:
    """Immutable, ordered collection of tracks."""

    def __init__(self, tracks: Iterable[Track]):
        self._tracks = tuple(tracks)
        self._by_id = {}
        for track in self._tracks:
            if track.id in self._by_id:
                raise CatalogError(f"Duplicate track id in catalog: {track.id}")
            self._by_id[track.id] = track

    @classmethod
    def sample(cls) -> "Catalog":
        """Return the built-in catalog of nine tracks, three per category."""
        return cls(SAMPLE_TRACKS)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Catalog":
        """Load a catalog snapshot from a JSON array of track records.

        Args:
            path: Path to the JSON file.

        Returns:
            Catalog with the tracks in file order.

        Raises:
            CatalogError: If the file is unreadable, is not a JSON array,
                or holds an invalid track record.
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            raise CatalogError(f"Could not read catalog {path}: {e}") from e

        if not isinstance(records, list):
            raise CatalogError(f"Catalog {path} must contain a JSON array of tracks")

        tracks = []
        for i, record in enumerate(records):
            if not isinstance(record, dict):
                raise CatalogError(f"Catalog entry {i} must be an object")
            try:
                tracks.append(Track.from_dict(record))
            except ValueError as e:
                raise CatalogError(f"Catalog entry {i}: {e}") from e

        logger.info(f"Loaded {len(tracks)} tracks from {path}")
        return cls(tracks)

    def all_tracks(self) -> List[Track]:
        return list(self._tracks)

    def by_category(self, category: Category) -> List[Track]:
        """Return the tracks of one category, in catalog order."""
        return [track for track in self._tracks if track.category == category]

    def get(self, track_id: Optional[str]) -> Optional[Track]:
        if track_id is None:
            return None
        return self._by_id.get(track_id)

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __contains__(self, track: object) -> bool:
        return isinstance(track, Track) and track.id in self._by_id
