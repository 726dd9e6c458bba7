"""Shared game state, status codes and HUD text."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

WINDOW_WIDTH = 2000
WINDOW_HEIGHT = 1500

MAX_SPEED = 8
MIN_SPEED = -2
ADD_LIFE = 10
MINUS_LIFE = 0.2
MATCH_SECONDS = 181


class Status(IntEnum):
    """Results returned by scenes and the main loop."""

    INIT = -1
    SETTING = 0
    SELECT = 1
    BEGIN = 2
    CONTINUE = 3
    FAIL = 4
    TERMINATE = 5
    NEXT_LEVEL = 6
    EXIT = 7
    CAPTURE = 8
    DEATHMATCH = 9
    PLAYER_1 = 11
    PLAYER_2 = 12


class Window(IntEnum):
    """The screens the game moves through."""

    MENU = 0
    ITEM_INTRO = 1
    SELECT_CHARACTER = 2
    CAPTURE_MAP = 3
    DEATHMATCH_MAP = 4
    PLAYER1_WIN = 5
    PLAYER2_WIN = 6
    PLAYER_TIE = 7


def _four_flags() -> list[bool]:
    return [False] * 4


@dataclass
class GameState:
    """Everything the scenes, players and pickups share during a game."""

    next_window: bool = False
    window: Window = Window.MENU
    mode_next_window: bool = False
    mode_window: int = 0
    esc: bool = False
    select_capture: int = -1
    select_deathmatch: int = -1
    pressed: set[int] = field(default_factory=set)
    boxinggloves_triggers: list[bool] = field(default_factory=_four_flags)
    shield_triggers: list[bool] = field(default_factory=_four_flags)
    max_speed: int = MAX_SPEED
    min_speed: int = MIN_SPEED
    add_life: int = ADD_LIFE
    minus_life: float = MINUS_LIFE
    attack: bool = False
    attack_time: int = 0
    start_time: float = 0.0
    elapsed_time: float = 0.0
    game_time: int = 0
    p1_life_text: str = ""
    p2_life_text: str = ""
    time_text: str = ""

    def press(self, key: int) -> None:
        """Record that ``key`` is held down."""
        self.pressed.add(key)

    def release(self, key: int) -> None:
        """Record that ``key`` was let go."""
        self.pressed.discard(key)

    def is_pressed(self, key: int) -> bool:
        return key in self.pressed


def format_life(player_number: int, life: float) -> str:
    """HUD text for a player's remaining life."""
    return f"P{player_number} LIFE : {life:.2f}"


def format_time(seconds: int) -> str:
    """HUD text for the match clock."""
    return f"time = {seconds:3d}"