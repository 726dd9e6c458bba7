"""Pickups that protect or hurt the player, two of which wander around the map."""

from __future__ import annotations

import math
import time
from typing import Callable

from .pickups import OFF_MAP, Pickup, _frames
from .state import GameState


class Shield(Pickup):
    """Raises the shield flag when picked up.

    Whoever touches it, the flag of the first player slot is the one raised.
    """

    IMAGE_NAMES = _frames("shield")
    SOUND_NAME = "shield.wav"
    GAIN = 2.0

    def apply(self, index: int, player) -> None:
        self.state.shield_triggers[0] = True


class RoamingPickup(Pickup):
    """A pickup that jumps between fixed spots on the map as the clock ticks."""

    POSITIONS: dict[int, tuple[int, int]] = {}
    CYCLE = 11

    def __init__(self, x: int = 0, y: int = 0, state: GameState | None = None,
                 asset_root=".", clock: Callable[[], float] | None = None) -> None:
        super().__init__(x, y, state, asset_root)
        self.clock = clock
        self._started = time.monotonic()

    def _now(self) -> float:
        if self.clock is not None:
            return self.clock()
        return time.monotonic() - self._started

    def relocate(self, seconds: float) -> None:
        """Move to the spot for whole second ``seconds``; some seconds have none."""
        slot = int(math.fmod(int(seconds), self.CYCLE))
        spot = self.POSITIONS.get(slot)
        if spot is not None:
            self.move_to(*spot)

    def update(self) -> bool:
        """Advance the animation; leave the map if touched, otherwise roam."""
        self.anime = (self.anime + 1) % self.anime_time
        if self.trigger():
            self.move_to(OFF_MAP, OFF_MAP)
            return True
        self.relocate(self._now())
        return False


class Cross(RoamingPickup):
    """Slows the player down unless boxing gloves absorb the hit."""

    IMAGE_NAMES = _frames("cross")
    SOUND_NAME = "cross.wav"
    GAIN = 1.0
    POSITIONS = {
        0: (140, 550),
        1: (214, 650),
        2: (840, 348),
        3: (1268, 450),
        4: (1466, 644),
        5: (1470, 634),
        6: (950, 1300),
        7: (1420, 950),
        8: (1214, 1122),
        9: (352, 1196),
    }

    def apply(self, index: int, player) -> None:
        gloves = self.state.boxinggloves_triggers
        if gloves[index]:
            gloves[index] = False
        else:
            player.speed = self.state.min_speed


class Lightning(RoamingPickup):
    """Takes away some life unless boxing gloves absorb the hit."""

    IMAGE_NAMES = _frames("lightning")
    SOUND_NAME = "lighting.wav"
    GAIN = 0.1
    POSITIONS = {
        0: (766, 450),
        1: (782, 550),
        2: (920, 452),
        3: (776, 546),
        4: (910, 650),
        5: (850, 634),
        6: (860, 1300),
        7: (1402, 754),
        8: (1536, 948),
        9: (1520, 1050),
    }

    def apply(self, index: int, player) -> None:
        gloves = self.state.boxinggloves_triggers
        if gloves[index]:
            gloves[index] = False
        else:
            player.life -= self.state.minus_life