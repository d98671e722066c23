from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from models.category import Category


def format_time(seconds: float) -> str:
    """Format a second count as M:SS.

    Minutes are not wrapped into hours, so 3661 renders as "61:01".
    """
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


@dataclass(frozen=True)
class Track:
    """Represents a catalog track. Identity is the ``id`` alone."""
    id: str
    title: str = field(compare=False)
    artist: str = field(compare=False)
    category: Category = field(compare=False)
    duration: int = field(compare=False)  # seconds
    audio_source: str = field(compare=False)
    image: Optional[str] = field(default=None, compare=False)

    @property
    def formatted_duration(self) -> str:
        return format_time(self.duration)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Track:
        """Build a Track from a catalog record.

        Raises:
            ValueError: If a required field is missing or invalid.
        """
        required_fields = ['id', 'title', 'artist', 'category', 'duration', 'audio_source']
        for name in required_fields:
            if name not in data:
                raise ValueError(f"Track record missing required field: {name}")

        title = str(data['title']).strip()
        artist = str(data['artist']).strip()
        if not title or not artist:
            raise ValueError(f"Track {data['id']} must have a title and an artist")

        try:
            duration = int(data['duration'])
        except (TypeError, ValueError):
            raise ValueError(f"Track {data['id']} has a non-numeric duration: {data['duration']!r}")
        if duration <= 0:
            raise ValueError(f"Track {data['id']} duration must be positive")

        return cls(
            id=str(data['id']),
            title=title,
            artist=artist,
            category=Category.from_value(str(data['category'])),
            duration=duration,
            audio_source=str(data['audio_source']),
            image=data.get('image'),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'artist': self.artist,
            'category': self.category.label,
            'duration': self.duration,
            'audio_source': self.audio_source,
            'image': self.image,
        }
