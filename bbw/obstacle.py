"""Boxes, walls and trees placed on the map."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path

from .geometry import Entity
from .media import load_image

OBSTACLE_RADIUS = 50


class ObstacleKind(IntEnum):
    BOX = 0
    WALL = 1
    TREE = 2


class Obstacle(Entity):
    """A static object that reports when a player runs into it."""

    def __init__(self, x: int = 0, y: int = 0, kind=ObstacleKind.BOX,
                 asset_root=".") -> None:
        super().__init__(x, y, OBSTACLE_RADIUS)
        self.kind = ObstacleKind(kind)
        self.pos_x = x
        self.pos_y = y
        self.asset_root = Path(asset_root)
        self.players: list = []
        self.image = None

    def setup(self, players) -> None:
        """Load the picture for this kind and remember the players to watch."""
        path = self.asset_root / "picture" / "character" / f"move{int(self.kind)}.png"
        self.image = load_image(path)
        self.players = list(players)

    def trigger(self) -> bool:
        """Whether any watched player touches the obstacle."""
        return any(self.circle.overlaps(player.circle) for player in self.players)

    def update(self) -> bool:
        return self.trigger()

    def draw(self, surface) -> None:
        if self.image is None:
            raise RuntimeError("obstacle image is not loaded")
        surface.blit(self.image, (self.pos_x, self.pos_y))