import io
import struct

import pytest

from bbw.gif import (
    GifError,
    IndexedBitmap,
    Rgb,
    lzw_decode,
    load_raw,
    load_raw_file,
)

PALETTE = [(0, 0, 0), (255, 0, 0), (0, 255, 0), (0, 0, 255)]


def pack_codes(codes, bits):
    acc, count, out = 0, 0, bytearray()
    for code in codes:
        acc |= code << count
        count += bits
        while count >= 8:
            out.append(acc & 255)
            acc >>= 8
            count -= 8
    if count:
        out.append(acc & 255)
    return bytes(out)


def sub_blocks(data):
    out = bytearray()
    for start in range(0, len(data), 255):
        chunk = data[start:start + 255]
        out.append(len(chunk))
        out += chunk
    out.append(0)
    return bytes(out)


def image_data(pixels):
    # clear code before every two literals keeps the code width at 3 bits
    codes = []
    for start in range(0, len(pixels), 2):
        codes.append(4)
        codes.extend(pixels[start:start + 2])
    codes.append(5)
    return bytes([2]) + sub_blocks(pack_codes(codes, 3))


def palette_bytes(colors):
    return b"".join(bytes(c) for c in colors)


def image_block(w, h, pixels, x=0, y=0, flags=0, local=b""):
    return b"\x2c" + struct.pack("<HHHHB", x, y, w, h, flags) + local + image_data(pixels)


def gce(duration, disposal=0, transparent=None):
    packed = (disposal << 2) | (1 if transparent is not None else 0)
    return b"\x21\xf9\x04" + struct.pack("<BHB", packed, duration, transparent or 0) + b"\x00"


def header(w, h):
    return b"GIF89a" + struct.pack("<HHBBB", w, h, 0x81, 0, 0) + palette_bytes(PALETTE)


def build(w, h, *blocks):
    return header(w, h) + b"".join(blocks) + b"\x3b"


def test_single_frame_round_trip():
    pixels = [0, 1, 2, 3, 3, 2]
    gif = load_raw(io.BytesIO(build(3, 2, image_block(3, 2, pixels))))
    assert (gif.width, gif.height) == (3, 2)
    assert gif.palette.colors == [Rgb(*c) for c in PALETTE]
    assert gif.frames_count == 1
    assert list(gif.frames[0].bitmap.data) == pixels


def test_odd_pixel_count_round_trip():
    pixels = [1, 2, 3, 0, 1]
    gif = load_raw(io.BytesIO(build(5, 1, image_block(5, 1, pixels))))
    assert list(gif.frames[0].bitmap.data) == pixels


def test_graphic_control_applies_to_next_frame_only():
    data = build(
        2, 1,
        gce(10, disposal=2, transparent=3),
        image_block(2, 1, [1, 3]),
        image_block(2, 1, [2, 2], x=0),
    )
    gif = load_raw(io.BytesIO(data))
    first, second = gif.frames
    assert (first.duration, first.disposal_method, first.transparent_index) == (10, 2, 3)
    assert (second.duration, second.disposal_method, second.transparent_index) == (0, 0, -1)
    assert gif.duration == 10 + 0


def test_frame_offsets_and_total_duration():
    data = build(
        4, 4,
        gce(7),
        image_block(2, 1, [1, 1], x=1, y=2),
        gce(20),
        image_block(1, 1, [3], x=3, y=3),
    )
    gif = load_raw(io.BytesIO(data))
    assert [(f.xoff, f.yoff) for f in gif.frames] == [(1, 2), (3, 3)]
    assert gif.duration == 7 + 20


def test_netscape_loop_count():
    ext = b"\x21\xff\x0bNETSCAPE2.0\x03\x01" + struct.pack("<H", 3) + b"\x00"
    gif = load_raw(io.BytesIO(build(1, 1, ext, image_block(1, 1, [0]))))
    assert gif.loop == 3


def test_netscape_wrong_sub_id_means_forever():
    ext = b"\x21\xff\x0bNETSCAPE2.0\x03\x02" + struct.pack("<H", 3) + b"\x00"
    gif = load_raw(io.BytesIO(build(1, 1, ext, image_block(1, 1, [0]))))
    assert gif.loop == 0


def test_unknown_extension_is_skipped():
    comment = b"\x21\xfe\x05hello\x00"
    gif = load_raw(io.BytesIO(build(2, 1, comment, image_block(2, 1, [3, 1]))))
    assert list(gif.frames[0].bitmap.data) == [3, 1]


def test_local_palette():
    local = [(1, 2, 3), (4, 5, 6), (7, 8, 9), (10, 11, 12)]
    block = image_block(1, 1, [2], flags=0x81, local=palette_bytes(local))
    gif = load_raw(io.BytesIO(build(1, 1, block)))
    assert gif.frames[0].palette.colors == [Rgb(*c) for c in local]
    assert gif.frames[0].palette.colors_count == len(local)


def test_interlaced_frame_is_reordered():
    stored = [0, 3, 2, 1, 1, 3, 2, 0]
    block = image_block(1, 8, stored, flags=0x40)
    gif = load_raw(io.BytesIO(build(1, 8, block)))
    expected = IndexedBitmap(1, 8, bytearray(stored))
    expected.deinterlace()
    assert gif.frames[0].bitmap.data == expected.data
    assert sorted(gif.frames[0].bitmap.data) == sorted(stored)


def test_deinterlace_follows_gif_row_order():
    # each stored row holds the display row it belongs to
    bitmap = IndexedBitmap(1, 8, bytearray([0, 4, 2, 6, 1, 3, 5, 7]))
    bitmap.deinterlace()
    assert bitmap.data == bytearray(range(8))


@pytest.mark.parametrize("prefix", [b"GIF", b"PNG89a", b"GIF87b", b"GIF86a"])
def test_bad_signature(prefix):
    with pytest.raises(GifError):
        load_raw(io.BytesIO(prefix + b"\x00" * 20))


def test_missing_trailer_is_an_error():
    data = build(1, 1, image_block(1, 1, [1]))[:-1]
    with pytest.raises(GifError):
        load_raw(io.BytesIO(data))


def test_bad_graphic_control_size():
    bad = b"\x21\xf9\x05" + b"\x00" * 6
    with pytest.raises(GifError):
        load_raw(io.BytesIO(build(1, 1, bad)))


def test_lzw_empty_block_is_an_error():
    with pytest.raises(GifError):
        lzw_decode(io.BytesIO(bytes([2, 0])), IndexedBitmap(1, 1))


def test_lzw_overflow_is_an_error():
    with pytest.raises(GifError):
        lzw_decode(io.BytesIO(image_data([1, 2, 3])), IndexedBitmap(1, 1))


def test_lzw_decode_fills_bitmap():
    bitmap = IndexedBitmap(4, 1)
    lzw_decode(io.BytesIO(image_data([3, 0, 2, 1])), bitmap)
    assert list(bitmap.data) == [3, 0, 2, 1]


def test_load_raw_file(tmp_path):
    path = tmp_path / "anim.gif"
    path.write_bytes(build(2, 2, image_block(2, 2, [1, 2, 3, 0])))
    gif = load_raw_file(path)
    assert list(gif.frames[0].bitmap.data) == [1, 2, 3, 0]


def test_load_raw_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_raw_file(tmp_path / "none.gif")


def test_bitmap_rejects_wrong_data_length():
    with pytest.raises(ValueError):
        IndexedBitmap(2, 2, bytearray(3))


def test_new_bitmap_is_zeroed():
    bitmap = IndexedBitmap(3, 2)
    assert bitmap.data == bytearray(6)


def test_blit_region():
    source = IndexedBitmap(3, 3, bytearray(range(9)))
    target = IndexedBitmap(3, 3)
    source.blit(target, 1, 1, 0, 0, 2, 2)
    assert target.data[0:2] == source.data[4:6]
    assert target.data[3:5] == source.data[7:9]
    assert target.data[2] == 0 and target.data[5:] == bytearray(4)


def test_blit_clips_negative_source():
    source = IndexedBitmap(3, 1, bytearray([7, 8, 9]))
    target = IndexedBitmap(3, 1)
    source.blit(target, -1, 0, 0, 0, 3, 1)
    assert target.data[0] == 0
    assert target.data[1:3] == source.data[0:2]


def test_blit_clips_destination():
    source = IndexedBitmap(3, 1, bytearray([7, 8, 9]))
    target = IndexedBitmap(2, 1)
    source.blit(target, 0, 0, 1, 0, 3, 1)
    assert target.data[1:] == source.data[:1]
    assert target.data[0] == 0


def test_blit_empty_region_changes_nothing():
    source = IndexedBitmap(2, 2, bytearray([1, 2, 3, 4]))
    target = IndexedBitmap(2, 2)
    source.blit(target, 0, 0, 0, 0, 0, 2)
    source.blit(target, 0, 0, 5, 5, 2, 2)
    assert target.data == bytearray(4)


def test_blit_full_copy_matches_source():
    source = IndexedBitmap(3, 2, bytearray([1, 2, 3, 4, 5, 6]))
    target = IndexedBitmap(3, 2)
    source.blit(target, 0, 0, 0, 0, source.w, source.h)
    assert target.data == source.data