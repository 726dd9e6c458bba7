"""Reading GIF files into indexed frames."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

_MAX_CODES = 4096


class GifError(Exception):
    """Raised when a GIF stream is malformed or truncated."""


@dataclass(frozen=True)
class Rgb:
    r: int
    g: int
    b: int


@dataclass
class Palette:
    colors: list[Rgb] = field(default_factory=list)

    @property
    def colors_count(self) -> int:
        return len(self.colors)


@dataclass
class IndexedBitmap:
    """A rectangle of 8-bit palette indices stored row by row."""

    w: int
    h: int
    data: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        if self.w < 0 or self.h < 0:
            raise ValueError("bitmap size must not be negative")
        if not self.data:
            self.data = bytearray(self.w * self.h)
        elif len(self.data) != self.w * self.h:
            raise ValueError("bitmap data does not match its size")
        else:
            self.data = bytearray(self.data)

    def blit(self, target: IndexedBitmap, xf, yf, xt, yt, w, h) -> None:
        """Copy a w x h region at (xf, yf) to (xt, yt) in ``target``, clipped."""
        if w <= 0 or h <= 0:
            return
        if xf < 0:
            w += xf
            xt -= xf
            xf = 0
        if yf < 0:
            h += yf
            yt -= yf
            yf = 0
        w = min(w, self.w - xf)
        h = min(h, self.h - yf)
        if xt < 0:
            w += xt
            xf -= xt
            xt = 0
        if yt < 0:
            h += yt
            yf -= yt
            yt = 0
        w = min(w, target.w - xt)
        h = min(h, target.h - yt)
        if w <= 0 or h <= 0:
            return
        for row in range(h):
            src = (yf + row) * self.w + xf
            dst = (yt + row) * target.w + xt
            target.data[dst:dst + w] = self.data[src:src + w]

    def deinterlace(self) -> None:
        """Reorder rows stored in GIF interlaced order into display order."""
        order = [
            *range(0, self.h, 8),
            *range(4, self.h, 8),
            *range(2, self.h, 4),
            *range(1, self.h, 2),
        ]
        result = bytearray(len(self.data))
        w = self.w
        for stored, y in enumerate(order):
            result[y * w:(y + 1) * w] = self.data[stored * w:(stored + 1) * w]
        self.data[:] = result


@dataclass
class GifFrame:
    bitmap: IndexedBitmap
    palette: Palette = field(default_factory=Palette)
    xoff: int = 0
    yoff: int = 0
    duration: int = 0  # hundredths of a second
    disposal_method: int = 0  # 0 any, 1 keep, 2 background, 3 previous
    transparent_index: int = -1


@dataclass
class GifAnimation:
    width: int
    height: int
    background_index: int = 0
    loop: int = 0  # 0 = forever, otherwise that many times
    palette: Palette = field(default_factory=Palette)
    frames: list[GifFrame] = field(default_factory=list)

    @property
    def frames_count(self) -> int:
        return len(self.frames)

    @property
    def duration(self) -> int:
        """Total length in hundredths of a second."""
        return sum(frame.duration for frame in self.frames)


def _read_byte(stream) -> int:
    data = stream.read(1)
    if not data:
        raise GifError("unexpected end of GIF data")
    return data[0]


def _read_exact(stream, count: int) -> bytes:
    data = stream.read(count)
    if len(data) != count:
        raise GifError("unexpected end of GIF data")
    return data


def _read_u16(stream) -> int:
    return int.from_bytes(_read_exact(stream, 2), "little")


def _read_palette(stream, count: int) -> Palette:
    raw = _read_exact(stream, 3 * count)
    return Palette([Rgb(*raw[i:i + 3]) for i in range(0, len(raw), 3)])


class _CodeReader:
    """Pulls variable-width codes out of GIF data sub-blocks."""

    def __init__(self, stream) -> None:
        self._stream = stream
        self._buf = bytearray(256)
        self._bit_pos = 0

    def read(self, bit_size: int) -> int:
        code = 0
        for bit in range(bit_size):
            byte_pos = (self._bit_pos >> 3) & 255
            if byte_pos == 0:
                length = _read_byte(self._stream)
                if length == 0:
                    raise GifError("image data ended before the end code")
                byte_pos = 256 - length
                self._buf[byte_pos:] = _read_exact(self._stream, length)
                self._bit_pos = byte_pos << 3
            if self._buf[byte_pos] & (1 << (self._bit_pos & 7)):
                code |= 1 << bit
            self._bit_pos += 1
        return code


def lzw_decode(stream, bitmap: IndexedBitmap) -> None:
    """Decode LZW image data from ``stream`` into ``bitmap``."""
    orig_bit_size = _read_byte(stream)
    if orig_bit_size > 11:
        raise GifError(f"invalid LZW code size {orig_bit_size}")
    n = 2 + (1 << orig_bit_size)
    prefixes = [0] * _MAX_CODES
    chars = list(range(n)) + [0] * (_MAX_CODES - n)
    lengths = [0] * _MAX_CODES
    clear_marker = n - 2
    end_marker = n - 1
    bit_size = orig_bit_size + 1
    reader = _CodeReader(stream)
    data = bitmap.data
    out_pos = 0

    prev = reader.read(bit_size)
    try:
        while True:
            code = reader.read(bit_size)
            if code == clear_marker:
                n = (1 << orig_bit_size) + 2
                bit_size = orig_bit_size + 1
                prev = code
                continue
            if code == end_marker:
                break

            c = code if code < n else prev
            out_pos += lengths[c]
            back = 0
            while True:
                data[out_pos - back] = chars[c]
                if not lengths[c]:
                    break
                c = prefixes[c]
                back += 1
            out_pos += 1

            if code >= n:
                data[out_pos] = chars[c]
                out_pos += 1

            if prev != clear_marker and n < _MAX_CODES:
                prefixes[n] = prev
                lengths[n] = lengths[prev] + 1
                chars[n] = chars[c]
                n += 1

            if n == (1 << bit_size) and bit_size < 12:
                bit_size += 1
            prev = code
    except IndexError as exc:
        raise GifError("image data does not fit the image size") from exc


def load_raw(stream) -> GifAnimation:
    """Read a GIF from a binary stream into indexed frames."""
    if _read_exact(stream, 4) != b"GIF8":
        raise GifError("not a GIF file")
    if _read_byte(stream) not in (ord("7"), ord("9")):
        raise GifError("unsupported GIF version")
    if _read_byte(stream) != ord("a"):
        raise GifError("unsupported GIF version")

    width = _read_u16(stream)
    height = _read_u16(stream)
    flags = _read_byte(stream)
    global_count = 1 << ((flags & 7) + 1) if flags & 128 else 0
    gif = GifAnimation(width, height, background_index=_read_byte(stream))
    stream.read(1)  # aspect ratio
    if global_count:
        gif.palette = _read_palette(stream, global_count)

    disposal, duration, transparent = 0, 0, -1
    while True:
        block = _read_byte(stream)
        if block == 0x2C:
            xoff = _read_u16(stream)
            yoff = _read_u16(stream)
            w = _read_u16(stream)
            h = _read_u16(stream)
            bitmap = IndexedBitmap(w, h)
            flags = _read_byte(stream)
            palette = _read_palette(stream, 1 << ((flags & 7) + 1)) if flags & 128 else Palette()
            lzw_decode(stream, bitmap)
            if flags & 64:
                bitmap.deinterlace()
            gif.frames.append(
                GifFrame(bitmap, palette, xoff, yoff, duration, disposal, transparent)
            )
            disposal, duration, transparent = 0, 0, -1
        elif block == 0x21:
            kind = _read_byte(stream)
            size = _read_byte(stream)
            if kind == 0xF9:
                if size != 4:
                    raise GifError("bad graphic control extension")
                packed = _read_byte(stream)
                disposal = (packed >> 2) & 7
                duration = _read_u16(stream)
                if packed & 1:
                    transparent = _read_byte(stream)
                else:
                    stream.read(1)
                    transparent = -1
                size = _read_byte(stream)
            elif kind == 0xFF and size == 11:
                name = _read_exact(stream, 11)
                size = _read_byte(stream)
                if name == b"NETSCAPE2.0" and size == 3:
                    sub_id = _read_byte(stream)
                    gif.loop = _read_u16(stream)
                    if sub_id != 1:
                        gif.loop = 0
                    size = _read_byte(stream)
            while size:
                stream.read(size)
                size = _read_byte(stream)
        elif block == 0x3B:
            return gif


def load_raw_file(path) -> GifAnimation:
    """Read the GIF file at ``path``."""
    with Path(path).open("rb") as stream:
        return load_raw(stream)