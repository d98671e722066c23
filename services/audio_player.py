import logging
import os
from pathlib import Path
from typing import Optional

# Must be set before pygame is imported
os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')

import pygame

from config import AUDIO_DIR, DEFAULT_VOLUME, MIXER_BUFFER_SIZE, NUM_CHANNELS, SAMPLE_RATE

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ('http://', 'https://')


class AudioSourceUnavailable(Exception):
    """Raised when a track's audio source cannot be loaded."""


class AudioPlayer:
    """Singleton service rendering audio through the pygame mixer."""

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, audio_dir: Optional[Path] = None):
        """Initialize the mixer on first construction.

        Later constructions return the same player; an ``audio_dir`` passed
        then is ignored with a warning if it differs from the one in use.
        """
        if hasattr(self, '_initialized'):
            if audio_dir is not None and Path(audio_dir) != self.audio_dir:
                logger.warning(
                    f"AudioPlayer already initialized with {self.audio_dir}; ignoring audio_dir={audio_dir}"
                )
            return

        try:
            pygame.mixer.init(
                frequency=SAMPLE_RATE, size=-16, channels=NUM_CHANNELS, buffer=MIXER_BUFFER_SIZE
            )
        except pygame.error as e:
            raise RuntimeError(f"Could not initialize audio output: {e}") from e

        self.audio_dir = Path(audio_dir) if audio_dir else AUDIO_DIR
        self._source: Optional[Path] = None
        self._looping: bool = False
        self._paused: bool = False
        self._volume: float = DEFAULT_VOLUME

        pygame.mixer.music.set_volume(self._volume)
        self._initialized = True

    def resolve_source(self, source_locator: str) -> Path:
        """Resolve a catalog source locator to a local file.

        Raises:
            AudioSourceUnavailable: If the locator is remote or the file is missing.
        """
        if source_locator.startswith(REMOTE_SCHEMES):
            raise AudioSourceUnavailable(f"Streaming sources are not supported: {source_locator}")

        path = Path(source_locator).expanduser()
        if not path.is_absolute():
            path = self.audio_dir / path

        if not path.is_file():
            raise AudioSourceUnavailable(f"Audio file not found: {path}")
        return path

    def start_playback(self, source_locator: str, loop: bool) -> None:
        """Load a source and play it from the start, looping forever if ``loop``."""
        path = self.resolve_source(source_locator)
        try:
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.play(loops=-1 if loop else 0)
        except pygame.error as e:
            self._source = None
            raise AudioSourceUnavailable(f"Could not play {path}: {e}") from e

        self._source = path
        self._looping = loop
        self._paused = False
        logger.info(f"Started playback of {path.name} (loop={loop})")

    def pause_playback(self) -> None:
        if self._source is not None and not self._paused:
            pygame.mixer.music.pause()
            self._paused = True

    def resume_playback(self) -> None:
        if self._source is not None and self._paused:
            pygame.mixer.music.unpause()
            self._paused = False

    def stop_playback(self) -> None:
        """Stop playback and forget the loaded source."""
        pygame.mixer.music.stop()
        self._source = None
        self._paused = False

    def get_source(self) -> Optional[Path]:
        """Return the loaded source file or None."""
        return self._source

    def is_looping(self) -> bool:
        return self._looping

    def is_paused(self) -> bool:
        return self._paused
