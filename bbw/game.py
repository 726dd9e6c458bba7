"""The game window: scene flow, the match loop and the program entry point."""

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Callable

import pygame

from .hazards import Cross, Lightning, Shield
from .media import load_image
from .pickups import BoxingGloves, MagicDrink, MaxDrug
from .player import Controls, Player
from .scenes import (
    CaptureMap,
    ItemIntro,
    Menu,
    Player1Win,
    Player2Win,
    PlayerTie,
    SelectCharacter,
)
from .state import (
    MATCH_SECONDS,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    GameState,
    Status,
    Window,
    format_life,
    format_time,
)

FPS = 60
TIMER_EVENT = pygame.USEREVENT + 1
SAMPLE_CHANNELS = 20
WATERBOMB_DAMAGE = 0.1
KEY_OFFSET = 1000
PLAYER1_CONTROLS = Controls("W", "S", "A", "D", "X")
PLAYER2_CONTROLS = Controls("I", "K", "J", "L", "M")
PLAYER_STARTS = ((136, 153), (1680, 156), (-101, -101), (-101, -101))


def _key_code(key: int) -> int:
    """Letters become 1..26 like the player controls; other keys stay outside that range."""
    if pygame.K_a <= key <= pygame.K_z:
        return key - pygame.K_a + 1
    return KEY_OFFSET + key


class GameWindow:
    """Owns the screens, the players and the pickups, and runs the event loop."""

    def __init__(self, asset_root=".", state: GameState | None = None,
                 clock: Callable[[], float] | None = None) -> None:
        self.asset_root = Path(asset_root)
        self.state = state if state is not None else GameState()
        self._clock = clock if clock is not None else time.monotonic
        self._epoch = self._clock()

        self.players = [Player(x, y, self.state, self.asset_root) for x, y in PLAYER_STARTS]
        self.p1, self.p2, self.p3, self.p4 = self.players

        root = self.asset_root
        self.bx = BoxingGloves(74, 350, self.state, root)
        self.cr = Cross(702, 558, self.state, root, clock=self.now)
        self.mk = MagicDrink(1260, 264, self.state, root)
        self.mg = MaxDrug(1648, 1192, self.state, root)
        self.li = Lightning(584, 1300, self.state, root, clock=self.now)
        self.sh = Shield(1066, 850, self.state, root)
        self.pickups = [self.cr, self.bx, self.mg, self.mk, self.li, self.sh]

        self.menu = Menu(self.state, root)
        self.item_intro = ItemIntro(self.state, root)
        self.select_character = SelectCharacter(self.state, root)
        self.capture_map = CaptureMap(self.state, root)
        self.player1_win = Player1Win(self.state, root)
        self.player2_win = Player2Win(self.state, root)
        self.player_tie = PlayerTie(self.state, root)
        self._endings = {
            Window.PLAYER1_WIN: self.player1_win,
            Window.PLAYER2_WIN: self.player2_win,
            Window.PLAYER_TIE: self.player_tie,
        }

        self.surface = None
        self.icon = None
        self.mouse_x = 0
        self.mouse_y = 0
        self.needs_draw = True

    def now(self) -> float:
        """Seconds since the window was created."""
        return self._clock() - self._epoch

    def begin(self) -> None:
        """Open the display, start the frame timer and show the menu."""
        pygame.init()
        self.surface = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        self.icon = load_image(self.asset_root / "picture" / "explosion.png")
        pygame.display.set_icon(self.icon)
        if pygame.mixer.get_init():
            pygame.mixer.set_num_channels(SAMPLE_CHANNELS)
        pygame.time.set_timer(TIMER_EVENT, round(1000 / FPS))
        self.menu.init()

    def play(self) -> Status:
        """Run the game until it is asked to exit, then close everything."""
        self.begin()
        status = Status.INIT
        try:
            while status != Status.EXIT:
                status = self.run_once()
        finally:
            self.destroy()
        return status

    def run_once(self) -> Status:
        """Redraw if needed and handle at most one pending event."""
        if self.needs_draw:
            self.draw()
            self.needs_draw = False
        event = pygame.event.poll()
        if event.type == pygame.NOEVENT:
            pygame.time.wait(1)
            return Status.CONTINUE
        return self.process_event(event)

    def draw(self) -> None:
        """Draw the current screen and show it."""
        if self.surface is None:
            raise RuntimeError("the game window is not open")
        surface = self.surface
        window = self.state.window
        if window == Window.MENU:
            self.menu.draw(surface)
        elif window == Window.ITEM_INTRO:
            self.item_intro.draw(surface)
        elif window == Window.SELECT_CHARACTER:
            self.select_character.draw(surface)
        elif window == Window.CAPTURE_MAP:
            self.capture_map.draw(surface)
            for player in (self.p1, self.p2):
                player.draw(surface)
                player.draw_waterbomb(surface)
            for pickup in self.pickups:
                pickup.draw(surface)
        elif window in self._endings:
            self._endings[window].draw(surface)
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            pygame.display.flip()

    def update(self) -> None:
        """Move to the next screen when asked, or advance the running match."""
        state = self.state
        if state.next_window and state.window == Window.MENU:
            self.menu.destroy()
            self.item_intro.init()
            state.next_window = False
            state.window = Window.ITEM_INTRO
        elif state.next_window and state.window == Window.ITEM_INTRO:
            self.item_intro.destroy()
            self.select_character.init()
            state.next_window = False
            state.window = Window.SELECT_CHARACTER
        elif state.next_window and state.window == Window.SELECT_CHARACTER:
            self.select_character.destroy()
            self.start_match()
        elif state.window == Window.CAPTURE_MAP:
            self.update_match(self.now())

        ending = self._endings.get(state.window)
        if state.next_window and ending is not None:
            self.capture_map.destroy()
            ending.init()
            state.next_window = False

    def start_match(self) -> None:
        """Open the map and prepare players and pickups for a fresh match."""
        state = self.state
        self.capture_map.init()
        state.start_time = self.now()
        state.window = Window.CAPTURE_MAP
        for player, controls, character in ((self.p1, PLAYER1_CONTROLS, 1),
                                            (self.p2, PLAYER2_CONTROLS, 2)):
            player.setup(controls, character)
            player.load_images()
        for pickup in self.pickups:
            pickup.setup(self.players)
        state.p1_life_text = format_life(1, self.p1.life)
        state.p2_life_text = format_life(2, self.p2.life)
        state.time_text = format_time(MATCH_SECONDS)
        state.next_window = False

    def update_match(self, now: float) -> None:
        """One frame of the match at time ``now``; decide the winner when it ends."""
        state = self.state
        self.p1.update()
        if self.p1.waterbomb_update(self.p2.x, self.p2.y):
            self.p2.life -= WATERBOMB_DAMAGE
        self.p2.update()
        if self.p2.waterbomb_update(self.p1.x, self.p1.y):
            self.p1.life -= WATERBOMB_DAMAGE
        for pickup in self.pickups:
            pickup.update()

        state.elapsed_time = MATCH_SECONDS - (now - state.start_time)
        state.game_time = int(state.elapsed_time)
        state.p1_life_text = format_life(1, self.p1.life)
        state.p2_life_text = format_life(2, self.p2.life)
        state.time_text = format_time(state.game_time)

        if state.game_time == 0 or self.p1.life <= 0 or self.p2.life <= 0:
            self.decide_winner()

    def decide_winner(self) -> Window:
        """Pick the result screen from the two players' life."""
        p1_life, p2_life = self.p1.life, self.p2.life
        if p1_life > p2_life:
            result = Window.PLAYER1_WIN
        elif p1_life < p2_life:
            result = Window.PLAYER2_WIN
        else:
            result = Window.PLAYER_TIE
        self.state.next_window = True
        self.state.window = result
        return result

    def _player_event(self, player: Player, event) -> None:
        if event.type == TIMER_EVENT:
            player.handle_timer_tick()
        elif event.type == pygame.KEYDOWN:
            player.handle_key_down(_key_code(event.key))
        elif event.type == pygame.KEYUP:
            player.handle_key_up(_key_code(event.key))

    def process_event(self, event) -> Status:
        """Hand one event to the current screen and update the game if needed."""
        status = Status.CONTINUE
        state = self.state
        window = state.window
        if event.type == pygame.MOUSEMOTION:
            self.mouse_x, self.mouse_y = event.pos

        if window == Window.MENU:
            status = self.menu.process(event)
            if status == Status.CAPTURE:
                self.needs_draw = True
            if status == Status.EXIT:
                return Status.EXIT
        elif window == Window.ITEM_INTRO:
            status = self.item_intro.process(event)
        elif window == Window.SELECT_CHARACTER:
            status = self.select_character.process(event)
            self.needs_draw = True
        elif window == Window.CAPTURE_MAP:
            for player in (self.p1, self.p2):
                self._player_event(player, event)
        elif window in self._endings:
            status = self._endings[window].process(event)
            if status == Status.EXIT or state.next_window:
                return Status.EXIT

        if event.type == pygame.QUIT:
            status = Status.EXIT
        elif event.type == TIMER_EVENT:
            self.needs_draw = True
        if self.needs_draw:
            self.update()
        return status

    def mouse_hover(self, startx: int, starty: int, width: int, height: int) -> bool:
        """Whether the mouse lies inside the rectangle, edges included."""
        return (startx <= self.mouse_x <= startx + width
                and starty <= self.mouse_y <= starty + height)

    def destroy(self) -> None:
        """Stop the timer, release the result screens and close the display."""
        if pygame.get_init():
            pygame.time.set_timer(TIMER_EVENT, 0)
        self.player1_win.destroy()
        self.player_tie.destroy()
        self.player2_win.destroy()
        self.icon = None
        self.surface = None
        if pygame.display.get_init():
            pygame.display.quit()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="bbw", description="Two-player water bomb battle.")
    parser.add_argument("--assets", default=".",
                        help="folder holding the picture and sound folders and the font")
    args = parser.parse_args(argv)
    GameWindow(args.assets).play()
    return 0