"""Exception hierarchy for dockswitch."""

from __future__ import annotations


class DisplaySetupError(Exception):
    """Base exception for every fatal display-setup condition."""


class SettingsError(DisplaySetupError):
    """Invalid settings file or setting value."""


class DetectionError(DisplaySetupError):
    """The display query could not be run or returned nothing."""


class UnsupportedLayoutError(DisplaySetupError):
    """No supported scenario and no laptop display to fall back to."""


class ApplyError(DisplaySetupError):
    """The configuration command failed."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)
