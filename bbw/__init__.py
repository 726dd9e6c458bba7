"""A two-player arcade battle game with water bombs and power-up items, and a GIF reader."""

__version__ = "0.1.0"