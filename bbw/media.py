"""Loading pictures and sounds from the game's asset folders."""

from __future__ import annotations

from pathlib import Path

import pygame


def _mixer_ready() -> bool:
    if pygame.mixer.get_init():
        return True
    try:
        pygame.mixer.init()
    except pygame.error:
        return False
    return bool(pygame.mixer.get_init())


class Sound:
    """A sound effect or music track with a gain and a loop flag.

    When no audio device is available the sound stays silent but still
    keeps track of whether it was asked to play.
    """

    def __init__(self, path, gain: float = 1.0, loop: bool = False, handle=None) -> None:
        self.path = Path(path)
        self.gain = gain
        self.loop = loop
        self._handle = handle
        self._channel = None
        self.playing = False

    def play(self) -> None:
        """Start the sound from the beginning."""
        if self._handle is not None:
            if self._channel is not None:
                self._channel.stop()
            self._handle.set_volume(max(0.0, min(self.gain, 1.0)))
            self._channel = self._handle.play(loops=-1 if self.loop else 0)
        self.playing = True

    def stop(self) -> None:
        if self._channel is not None:
            self._channel.stop()
            self._channel = None
        self.playing = False


def load_image(path):
    """Load a picture from ``path`` as a pygame surface."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(path)
    try:
        surface = pygame.image.load(str(path))
    except pygame.error as exc:
        raise ValueError(f"cannot read image {path}: {exc}") from exc
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        surface = surface.convert_alpha()
    return surface


def load_sound(path, gain: float = 1.0, loop: bool = False) -> Sound:
    """Load a sound from ``path``; it is silent if there is no audio device."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(path)
    handle = None
    if _mixer_ready():
        try:
            handle = pygame.mixer.Sound(str(path))
        except pygame.error as exc:
            raise ValueError(f"cannot read sound {path}: {exc}") from exc
    return Sound(path, gain, loop, handle)