import wave

import pygame
import pytest

from bbw.media import Sound, load_image, load_sound


@pytest.fixture
def wav_file(tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    path = tmp_path / "beep.wav"
    with wave.open(str(path), "wb") as out:
        out.setnchannels(1)
        out.setsampwidth(2)
        out.setframerate(22050)
        out.writeframes(b"\x00\x10" * 2205)
    return path


def test_load_image_round_trip(tmp_path):
    surface = pygame.Surface((4, 3))
    surface.fill((10, 20, 30))
    path = tmp_path / "pic.png"
    pygame.image.save(surface, str(path))
    loaded = load_image(path)
    assert loaded.get_size() == (4, 3)
    assert tuple(loaded.get_at((1, 1)))[:3] == (10, 20, 30)


def test_load_image_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "nothing.png")


def test_load_image_rejects_garbage(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"not an image at all")
    with pytest.raises(ValueError):
        load_image(path)


def test_load_sound_keeps_settings(wav_file):
    sound = load_sound(wav_file, gain=0.25, loop=True)
    assert sound.gain == 0.25
    assert sound.loop is True
    assert sound.path == wav_file


def test_sound_play_and_stop(wav_file):
    sound = load_sound(wav_file, gain=5, loop=False)
    assert sound.playing is False
    sound.play()
    assert sound.playing is True
    sound.stop()
    assert sound.playing is False


def test_sound_can_replay(wav_file):
    sound = load_sound(wav_file)
    sound.play()
    sound.play()
    assert sound.playing is True


def test_load_sound_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sound(tmp_path / "nothing.wav")


def test_silent_sound_tracks_state(tmp_path):
    sound = Sound(tmp_path / "x.wav", gain=0.8, loop=True)
    sound.play()
    assert sound.playing
    sound.stop()
    assert not sound.playing