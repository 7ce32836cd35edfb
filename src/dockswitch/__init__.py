"""Automatic xrandr layout for docked and undocked laptops."""

__version__ = "0.1.0"
