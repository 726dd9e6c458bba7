"""Pickups lying on the map that do something to the player who touches them."""

from __future__ import annotations

from pathlib import Path

from .geometry import Entity
from .media import load_image, load_sound
from .state import GameState

PICKUP_RADIUS = 50
ITEM_RADIUS = 70
ANIME_TIME = 20
FRAME_TICKS = 7
OFF_MAP = -500
FULL_LIFE = 100


def _frames(folder: str) -> tuple[str, ...]:
    return tuple(f"{folder}/{folder}{i}.png" for i in range(1, 4))


class Pickup(Entity):
    """An animated object that acts on the first player touching it, then leaves the map."""

    RADIUS = PICKUP_RADIUS
    IMAGE_NAMES: tuple[str, ...] = ()
    SOUND_NAME: str | None = None
    GAIN = 1.0

    def __init__(self, x: int = 0, y: int = 0, state: GameState | None = None,
                 asset_root=".") -> None:
        super().__init__(x, y, self.RADIUS)
        self.state = state if state is not None else GameState()
        self.asset_root = Path(asset_root)
        self.players: list = []
        self.images: list = []
        self.sound = None
        self.anime = 0
        self.anime_time = ANIME_TIME

    def setup(self, players) -> None:
        """Load pictures and sound, reset the animation and remember the players."""
        picture = self.asset_root / "picture"
        self.images = [load_image(picture / name) for name in self.IMAGE_NAMES]
        if self.SOUND_NAME is not None:
            self.sound = load_sound(self.asset_root / "sound" / self.SOUND_NAME, self.GAIN)
        else:
            self.sound = None
        self.anime = 0
        self.anime_time = ANIME_TIME
        self.players = list(players)

    def trigger(self) -> bool:
        """Apply the effect to the first player touching the pickup."""
        for index, player in enumerate(self.players):
            if self.circle.overlaps(player.circle):
                self.apply(index, player)
                if self.sound is not None:
                    self.sound.play()
                return True
        return False

    def apply(self, index: int, player) -> None:
        """Effect on the player at position ``index``; none by default."""

    def update(self) -> bool:
        """Advance the animation; leave the map once picked up."""
        self.anime = (self.anime + 1) % self.anime_time
        if self.trigger():
            self.move_to(OFF_MAP, OFF_MAP)
            return True
        return False

    def frame_index(self) -> int:
        return self.anime // FRAME_TICKS

    def draw(self, surface) -> None:
        if not self.images:
            raise RuntimeError("pickup images are not loaded")
        index = self.frame_index()
        if index < len(self.images):
            surface.blit(self.images[index], (self.x, self.y))


class Item(Pickup):
    """A plain item that only reports being touched and stays where it is."""

    RADIUS = ITEM_RADIUS
    IMAGE_NAMES = tuple(f"character/move{i}.png" for i in range(3))

    def update(self) -> bool:
        return self.trigger()

    def frame_index(self) -> int:
        return 0


class BoxingGloves(Pickup):
    """Protects the player from the next harmful pickup."""

    IMAGE_NAMES = _frames("boxinggloves")
    SOUND_NAME = "boxinggloves.wav"
    GAIN = 1.0

    def apply(self, index: int, player) -> None:
        self.state.boxinggloves_triggers[index] = True


class MagicDrink(Pickup):
    """Restores life, never above full."""

    IMAGE_NAMES = _frames("magicdrink")
    SOUND_NAME = "magicdrink.wav"
    GAIN = 0.8

    def apply(self, index: int, player) -> None:
        if player.life <= FULL_LIFE - self.state.add_life:
            player.life += self.state.add_life
        else:
            player.life = FULL_LIFE


class MaxDrug(Pickup):
    """Gives the player top speed."""

    IMAGE_NAMES = _frames("maxdrug")
    SOUND_NAME = "sound_taking_pills.wav"
    GAIN = 1.0

    def apply(self, index: int, player) -> None:
        player.speed = self.state.max_speed