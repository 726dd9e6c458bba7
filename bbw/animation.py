"""Rendering decoded GIF frames onto RGBA canvases and picking frames by time."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .gif import GifAnimation, GifError, load_raw_file

TRANSPARENT = (0, 0, 0, 0)


class Canvas:
    """A plain RGBA pixel buffer addressed by (x, y)."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("canvas size must not be negative")
        self.width = width
        self.height = height
        self.pixels: list[tuple[int, int, int, int]] = [TRANSPARENT] * (width * height)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Canvas):
            return NotImplemented
        return (self.width, self.height, self.pixels) == (other.width, other.height, other.pixels)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the RGBA value at (x, y)."""
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside the canvas")
        return self.pixels[y * self.width + x]

    def _put(self, x: int, y: int, rgba) -> None:
        if self._inside(x, y):
            self.pixels[y * self.width + x] = tuple(rgba)

    def fill_rect(self, x: int, y: int, w: int, h: int, rgba) -> None:
        """Set every pixel of the rectangle to ``rgba``, clipped to the canvas."""
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, self.width), min(y + h, self.height)
        if x1 <= x0 or y1 <= y0:
            return
        row = [tuple(rgba)] * (x1 - x0)
        for yy in range(y0, y1):
            start = yy * self.width
            self.pixels[start + x0:start + x1] = row

    def copy(self) -> Canvas:
        clone = Canvas(self.width, self.height)
        clone.pixels = list(self.pixels)
        return clone

    def copy_region(self, source: Canvas, x: int, y: int, w: int, h: int) -> None:
        """Copy a rectangle of ``source`` to the same place on this canvas."""
        x0, y0 = max(x, 0), max(y, 0)
        x1 = min(x + w, self.width, source.width)
        y1 = min(y + h, self.height, source.height)
        if x1 <= x0 or y1 <= y0:
            return
        for yy in range(y0, y1):
            dst = yy * self.width
            src = yy * source.width
            self.pixels[dst + x0:dst + x1] = source.pixels[src + x0:src + x1]


def render_frame(animation: GifAnimation, index: int, canvas: Canvas,
                 xpos: int = 0, ypos: int = 0, store: Canvas | None = None) -> Canvas | None:
    """Draw frame ``index`` onto ``canvas`` and return the saved background.

    ``store`` is the canvas saved by a previous frame whose disposal method is
    "restore previous"; the returned value is what the next call should get.
    """
    if not 0 <= index < animation.frames_count:
        raise IndexError(f"frame {index} does not exist")
    frame = animation.frames[index]
    if index == 0:
        canvas.fill_rect(xpos, ypos, animation.width, animation.height, TRANSPARENT)
    else:
        prev = animation.frames[index - 1]
        if prev.disposal_method == 2:
            canvas.fill_rect(xpos + prev.xoff, ypos + prev.yoff,
                             prev.bitmap.w, prev.bitmap.h, TRANSPARENT)
        elif prev.disposal_method == 3 and store is not None:
            canvas.copy_region(store, xpos + prev.xoff, ypos + prev.yoff,
                               prev.bitmap.w, prev.bitmap.h)
            store = None

    if frame.disposal_method == 3:
        store = canvas.copy()

    colors = (frame.palette if frame.palette.colors else animation.palette).colors
    bitmap = frame.bitmap
    for y in range(bitmap.h):
        row = bitmap.data[y * bitmap.w:(y + 1) * bitmap.w]
        for x, c in enumerate(row):
            if c == frame.transparent_index:
                continue
            if c >= len(colors):
                raise GifError(f"palette index {c} is out of range")
            rgb = colors[c]
            canvas._put(xpos + frame.xoff + x, ypos + frame.yoff + y,
                        (rgb.r, rgb.g, rgb.b, 255))
    return store


@dataclass
class RenderedAnimation:
    """A GIF with every frame rendered to its own canvas."""

    animation: GifAnimation
    frames: list[Canvas]
    start_time: float = 0.0

    @property
    def duration(self) -> int:
        """Total length in hundredths of a second."""
        return self.animation.duration

    def bitmap_at(self, seconds: float) -> Canvas:
        """Return the frame shown ``seconds`` into the (looping) animation."""
        if not self.frames:
            raise ValueError("animation has no frames")
        total = self.duration / 100.0
        if total <= 0:
            return self.frames[0]
        seconds = math.fmod(seconds, total)
        elapsed = 0.0
        for frame, canvas in zip(self.animation.frames, self.frames):
            elapsed += frame.duration / 100.0
            if seconds < elapsed:
                return canvas
        return self.frames[0]

    def frame_bitmap(self, index: int) -> Canvas:
        return self.frames[index]

    def frame_duration(self, index: int) -> float:
        """Length of frame ``index`` in seconds."""
        return self.animation.frames[index].duration / 100.0

    def elapsed(self, now: float) -> float:
        """Seconds since the first call, which fixes the start time."""
        if self.start_time == 0:
            self.start_time = now
        return now - self.start_time


def render_animation(animation: GifAnimation) -> RenderedAnimation:
    """Render every frame of ``animation`` onto a fresh canvas."""
    canvases = []
    store = None
    for index in range(animation.frames_count):
        canvas = Canvas(animation.width, animation.height)
        store = render_frame(animation, index, canvas, 0, 0, store)
        canvases.append(canvas)
    return RenderedAnimation(animation, canvases)


def load_animation(path) -> RenderedAnimation:
    """Read the GIF file at ``path`` and render all its frames."""
    return render_animation(load_raw_file(path))