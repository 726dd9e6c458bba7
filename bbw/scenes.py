"""The screens of the game: menu, introduction, selection, map and results."""

from __future__ import annotations

from pathlib import Path

import pygame

from .media import Sound, load_image, load_sound
from .state import GameState, Status

FONT_NAME = "Oswald_Regular.ttf"
FONT_SIZE = 36
HUD_COLOR = (0, 0, 0)
P1_LIFE_POS = (35, 15)
TIME_POS = (900, 15)
P2_LIFE_POS = (1500, 15)
CLICK_SOUND = "click_sound.wav"
CLICK_GAIN = 5.0


class Scene:
    """A full-screen picture with background sound that reacts to events."""

    PICTURE = ""
    MUSIC = ""
    MUSIC_GAIN = 1.0
    MUSIC_LOOP = True
    HAS_CLICK = False

    def __init__(self, state: GameState | None = None, asset_root=".") -> None:
        self.state = state if state is not None else GameState()
        self.asset_root = Path(asset_root)
        self.picture = None
        self.background: Sound | None = None
        self.click: Sound | None = None

    @property
    def active(self) -> bool:
        return self.picture is not None

    def init(self) -> None:
        """Load the picture and sounds and start the background sound."""
        self.picture = load_image(self.asset_root / "picture" / "scene" / self.PICTURE)
        self.background = load_sound(self.asset_root / "sound" / self.MUSIC,
                                     self.MUSIC_GAIN, self.MUSIC_LOOP)
        if self.HAS_CLICK:
            self.click = load_sound(self.asset_root / "sound" / CLICK_SOUND,
                                    CLICK_GAIN, False)
        self.background.play()

    def process(self, event) -> Status:
        """Handle one event; the base scene ignores input."""
        return Status.CONTINUE

    def draw(self, surface) -> None:
        if self.picture is None:
            raise RuntimeError(f"{type(self).__name__} is not initialised")
        surface.blit(self.picture, (0, 0))

    def destroy(self) -> None:
        """Stop the sounds and release the picture."""
        for sound in (self.background, self.click):
            if sound is not None:
                sound.stop()
        self.picture = None
        self.background = None
        self.click = None


class _KeyedScene(Scene):
    """A scene left with Enter and quitting the game with Escape."""

    def process(self, event) -> Status:
        if getattr(event, "type", None) != pygame.KEYUP:
            return Status.CONTINUE
        key = getattr(event, "key", None)
        if key == pygame.K_ESCAPE:
            return Status.EXIT
        if key == pygame.K_RETURN:
            self.state.next_window = True
            self._on_enter()
        return Status.CONTINUE

    def _on_enter(self) -> None:
        if self.click is not None:
            self.click.play()


class Menu(_KeyedScene):
    PICTURE = "menu.jpeg"
    MUSIC = "background_sound.wav"
    MUSIC_GAIN = 0.3
    HAS_CLICK = True

    def _on_enter(self) -> None:
        self.state.select_capture = 1
        super()._on_enter()


class ItemIntro(_KeyedScene):
    PICTURE = "item_intro.jpeg"
    MUSIC = "capture_sound.wav"
    MUSIC_GAIN = 0.8
    HAS_CLICK = True


class SelectCharacter(_KeyedScene):
    PICTURE = "select_character.jpeg"
    MUSIC = "select_character.wav"
    MUSIC_GAIN = 0.8


class CaptureMap(Scene):
    """The battle map, drawn with both players' life and the match clock."""

    PICTURE = "capture_map.jpeg"
    MUSIC = "capture_sound.wav"
    MUSIC_GAIN = 0.25

    def __init__(self, state: GameState | None = None, asset_root=".") -> None:
        super().__init__(state, asset_root)
        self.font = None

    def init(self) -> None:
        font_path = self.asset_root / FONT_NAME
        if not font_path.is_file():
            raise FileNotFoundError(font_path)
        if not pygame.font.get_init():
            pygame.font.init()
        self.font = pygame.font.Font(str(font_path), FONT_SIZE)
        super().init()

    def draw(self, surface) -> None:
        super().draw(surface)
        hud = (
            (self.state.p1_life_text, P1_LIFE_POS),
            (self.state.time_text, TIME_POS),
            (self.state.p2_life_text, P2_LIFE_POS),
        )
        for text, position in hud:
            if text:
                surface.blit(self.font.render(text, True, HUD_COLOR), position)

    def destroy(self) -> None:
        super().destroy()
        self.font = None


class DeathmatchMap(Scene):
    PICTURE = "deathmatch_map.jpeg"
    MUSIC = "background_sound.wav"
    MUSIC_GAIN = 1.0


class Player1Win(_KeyedScene):
    PICTURE = "scene_player1_win.jpeg"
    MUSIC = "sound_game_succeed.wav"
    MUSIC_LOOP = False


class Player2Win(_KeyedScene):
    PICTURE = "scene_player2_win.jpeg"
    MUSIC = "sound_game_succeed.wav"
    MUSIC_LOOP = False


class PlayerTie(_KeyedScene):
    PICTURE = "tie.jpeg"
    MUSIC = "select_character.wav"