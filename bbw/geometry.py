"""Circles used for collision checks and the base class for things on the map."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class Circle:
    """A circle with integer centre and radius."""

    x: int = 0
    y: int = 0
    r: int = 0

    def overlaps(self, other: Circle) -> bool:
        """Return True when the two circles touch or intersect."""
        reach = self.r + other.r
        dx = self.x - other.x
        dy = self.y - other.y
        return reach * reach >= dx * dx + dy * dy


class Entity(ABC):
    """Something placed on the map that owns a collision circle."""

    def __init__(self, x: int = 0, y: int = 0, radius: int = 0) -> None:
        self.circle = Circle(x, y, radius)

    @property
    def x(self) -> int:
        return self.circle.x

    @property
    def y(self) -> int:
        return self.circle.y

    @property
    def radius(self) -> int:
        return self.circle.r

    def move_to(self, x: int, y: int) -> None:
        """Move the collision circle to a new centre."""
        self.circle.x = x
        self.circle.y = y

    @abstractmethod
    def draw(self, surface) -> None:
        """Draw the entity onto ``surface``."""