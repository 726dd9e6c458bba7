# bbw

A two-player arcade battle game played on one keyboard, built on pygame.
Each player walks around the arena, drops water bombs that burst in a cross
shape, and runs into items that change speed or life. A match lasts 181
seconds; when the clock reaches zero, or either player's life drops to zero
or below, the player with more life wins, and equal life is a tie.

## Installing

```
pip install .
```

This installs the `bbw` command and its one dependency, pygame.

## Playing

The game loads its pictures, sounds and the `Oswald_Regular.ttf` font from an
asset folder that holds `picture/` and `sound/` subfolders and the font file.
By default that is the current directory; another one can be given:

```
bbw
bbw --assets path/to/assets
```

The screens follow in this order: menu, item introduction, character
selection, the capture map, and a result screen (player 1 wins, player 2
wins, or a tie). On the menu, introduction and selection screens **Enter**
moves on and **Esc** quits. On a result screen either key ends the game.
During a match the keyboard steers the players; closing the window quits.

### Controls

| Action | Player 1 | Player 2 |
|--------|----------|----------|
| Up     | W        | I        |
| Down   | S        | K        |
| Left   | A        | J        |
| Right  | D        | L        |
| Bomb   | X        | M        |

Only one direction key counts at a time, in the order up, down, left, right,
then bomb. Players are kept inside the arena.

### Items

Each item acts on the first player that touches it and then leaves the map.

- **Boxing gloves** (`BoxingGloves`): the next cross or lightning that hits
  you is blocked.
- **Magic drink** (`MagicDrink`): restores 10 life, up to 100.
- **Max drug** (`MaxDrug`): sets your speed bonus to 8.
- **Cross** (`Cross`): sets your speed bonus to -2. While nobody takes it, it
  jumps between fixed spots on the map as the seconds pass.
- **Lightning** (`Lightning`): costs 0.2 life, and also jumps between spots.
- **Shield** (`Shield`): can be collected; it raises a flag in the game state
  but has no effect on play.

A water bomb bursts 120 frames (two seconds at 60 frames per second) after it
is dropped and stays dangerous until frame 210. Every frame the opponent
stands in the blast costs them 0.1 life.

## What the game does not do

- The character selection screen is only a picture: player 1 always plays
  character type 1 and player 2 type 2.
- There is a `DeathmatchMap` scene, but the game never switches to it; only
  the capture map is played.
- `Obstacle` and `Item` exist as classes, but no obstacles or plain items are
  placed on the map.
- The mouse is tracked (`GameWindow.mouse_hover`) but nothing is clickable.

## Using the library

`bbw.gif` reads GIF files into indexed frames without any graphics library:

```python
from bbw.gif import load_raw_file

animation = load_raw_file("picture/explosion.gif")
print(animation.width, animation.height, animation.frames_count)
```

Malformed or truncated data raises `bbw.gif.GifError`.

`bbw.animation.load_animation(path)` composites every frame onto an RGBA
`Canvas`, honouring transparency and the frames' disposal methods, and
returns a `RenderedAnimation`. Its `bitmap_at(seconds)` picks the frame shown
at a moment of the looping animation, `frame_bitmap(index)` and
`frame_duration(index)` give one frame and its length in seconds, and
`Canvas.pixel(x, y)` reads a pixel back.

`bbw.geometry.Circle.overlaps` is the collision test used throughout the game:
two circles collide when they touch or intersect.

## Running the tests

```
pip install .[test]
pytest
```