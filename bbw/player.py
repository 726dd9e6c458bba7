"""The player characters: movement, sprites and water bombs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from .geometry import Entity
from .media import load_image
from .state import GameState

PLAYER_RADIUS = 70
SPRITE_COUNT = 12
WATERBOMB_FRAMES = 4
BASE_STEP = 5
X_LIMITS = (0, 1920)
Y_LIMITS = (40, 1400)
WATERBOMB_ARMED = 120
WATERBOMB_DONE = 210
OFF_MAP = -500


class Direction(IntEnum):
    FRONT = 0
    BACK = 1
    LEFT = 2
    RIGHT = 3


class Motion(IntEnum):
    STOP = 0
    MOVE = 1
    CHANGE_DIR = 2


@dataclass(frozen=True)
class Controls:
    """Letters of the keys that steer one player."""

    up: str
    down: str
    left: str
    right: str
    attack: str


def _key_code(letter: str) -> int:
    return ord(letter) - ord("A") + 1


_FIRST_SPRITE = {
    Direction.FRONT: 0,
    Direction.BACK: 9,
    Direction.LEFT: 3,
    Direction.RIGHT: 6,
}


class Player(Entity):
    """A character steered by five keys that can drop water bombs."""

    def __init__(self, x: int = 0, y: int = 0, state: GameState | None = None,
                 asset_root=".") -> None:
        super().__init__(x, y, PLAYER_RADIUS)
        self.state = state if state is not None else GameState()
        self.asset_root = Path(asset_root)
        self.pos_x = x
        self.pos_y = y
        self.life = 100.0
        self.speed = 0
        self.anime = 0
        self.anime_time = 20
        self.character_type = 0
        self.direction = Direction.FRONT
        self.motion = Motion.STOP
        self.controls: Controls | None = None
        self.key_up: int | None = None
        self.key_down: int | None = None
        self.key_left: int | None = None
        self.key_right: int | None = None
        self.key_attack: int | None = None
        self.waterbomb_pos_x = OFF_MAP
        self.waterbomb_pos_y = OFF_MAP
        self.waterbomb_center_x = OFF_MAP
        self.waterbomb_center_y = OFF_MAP
        self.range = 100
        self.set_time = 0
        self.images: list = []
        self.waterbomb_images: list = []

    def setup(self, controls: Controls, character_type: int) -> None:
        """Bind the controls and reset the player for a new match."""
        self.controls = controls
        self.key_up = _key_code(controls.up)
        self.key_down = _key_code(controls.down)
        self.key_left = _key_code(controls.left)
        self.key_right = _key_code(controls.right)
        self.key_attack = _key_code(controls.attack)
        self.character_type = character_type
        self.motion = Motion.STOP
        self.direction = Direction.FRONT
        self.anime = 0
        self.anime_time = 20
        self.speed = 0
        self.life = 100.0

    def load_images(self) -> None:
        """Load the character sprites and the water bomb pictures."""
        picture = self.asset_root / "picture"
        sprites = picture / "character" / f"type{self.character_type}"
        self.images = [load_image(sprites / f"move{i}.png") for i in range(SPRITE_COUNT)]
        self.waterbomb_images = [
            load_image(picture / "waterbomb" / f"waterbomb{i}.png")
            for i in range(1, WATERBOMB_FRAMES + 1)
        ]

    def handle_timer_tick(self) -> None:
        self.anime = (self.anime + 1) % self.anime_time

    def handle_key_down(self, key: int) -> None:
        self.state.press(key)
        self.anime = 0

    def handle_key_up(self, key: int) -> None:
        self.state.release(key)

    def update(self) -> None:
        """Move according to the held keys, drop a bomb, and keep on the map."""
        pressed = self.state.is_pressed
        step = BASE_STEP + self.speed
        if pressed(self.key_up):
            self.direction = Direction.BACK
            self.pos_y -= step
            self.motion = Motion.MOVE
        elif pressed(self.key_down):
            self.direction = Direction.FRONT
            self.pos_y += step
            self.motion = Motion.MOVE
        elif pressed(self.key_left):
            self.direction = Direction.LEFT
            self.pos_x -= step
            self.motion = Motion.MOVE
        elif pressed(self.key_right):
            self.direction = Direction.RIGHT
            self.pos_x += step
            self.motion = Motion.MOVE
        elif pressed(self.key_attack):
            self.state.attack = True
            self.create_waterbomb(self.pos_x, self.pos_y)
            self.set_time = 1
        elif self.anime == self.anime_time - 1:
            self.anime = 0
            self.motion = Motion.STOP
        elif self.anime == 0:
            self.motion = Motion.STOP

        self.pos_x = min(max(self.pos_x, X_LIMITS[0]), X_LIMITS[1])
        self.pos_y = min(max(self.pos_y, Y_LIMITS[0]), Y_LIMITS[1])
        self.move_to(self.pos_x, self.pos_y)

    def sprite_index(self) -> int | None:
        """Index of the sprite to show now, or None when nothing is drawn."""
        first = _FIRST_SPRITE[self.direction]
        if self.motion == Motion.STOP:
            return first
        if self.motion != Motion.MOVE:
            return None
        low = self.anime_time // 3
        if self.direction == Direction.RIGHT:
            low += 1
        if self.anime < low:
            return first
        if self.anime > 2 * self.anime_time // 3:
            return first + 2
        return first + 1

    def create_waterbomb(self, x: int, y: int) -> None:
        self.waterbomb_pos_x = x
        self.waterbomb_pos_y = y

    def waterbomb_update(self, x: int, y: int) -> bool:
        """Advance the bomb timer; return whether (x, y) is caught in the blast."""
        if self.state.attack:
            self.set_time += 1
            if self.set_time >= WATERBOMB_DONE:
                self.set_time = 0
                self.state.attack = False
        return self.waterbomb_hits(x, y)

    def waterbomb_hits(self, x: int, y: int) -> bool:
        """Whether a point lies in the blast while the bomb is exploding."""
        if not WATERBOMB_ARMED <= self.set_time <= WATERBOMB_DONE:
            return False
        wx, wy, reach = self.waterbomb_pos_x, self.waterbomb_pos_y, self.range
        # The horizontal arm only limits y from above.
        horizontal = (wx - reach - 80 <= x <= wx + reach
                      and (wy - 100) != 0 and y <= wy + 100)
        vertical = (wx - 80 <= x <= wx + 75
                    and wy - reach - 100 <= y <= wy + reach)
        return horizontal or vertical

    def draw(self, surface) -> None:
        index = self.sprite_index()
        if index is None:
            return
        if not self.images:
            raise RuntimeError("player images are not loaded")
        surface.blit(self.images[index], (self.pos_x, self.pos_y))

    def draw_waterbomb(self, surface) -> None:
        """Draw the bomb and, once armed, its blast; hide it when idle."""
        if not self.state.attack:
            self.waterbomb_pos_x = OFF_MAP
            self.waterbomb_pos_y = OFF_MAP
            return
        if not self.waterbomb_images:
            raise RuntimeError("water bomb images are not loaded")
        frame = self.anime // 7
        if frame < 3:
            surface.blit(self.waterbomb_images[frame],
                         (self.waterbomb_pos_x, self.waterbomb_pos_y))
        if self.set_time >= WATERBOMB_ARMED:
            cx = self.waterbomb_center_x = self.waterbomb_pos_x
            cy = self.waterbomb_center_y = self.waterbomb_pos_y
            splash = self.waterbomb_images[3]
            for offset in range(self.range):
                surface.blit(splash, (cx + offset, cy))
            for offset in range(self.range):
                surface.blit(splash, (cx, cy + offset))
            for offset in range(0, -self.range, -1):
                surface.blit(splash, (cx + offset, cy))
            for offset in range(0, -self.range, -1):
                surface.blit(splash, (cx, cy + offset))