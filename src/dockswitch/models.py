"""Data models: Monitor, Topology, Scenario, OutputDirective, LayoutPlan, Settings."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar

from .errors import SettingsError


AUTO = "auto"

DEFAULT_LAPTOP_OUTPUTS: tuple[str, ...] = ("eDP-1", "eDP1", "eDP", "LVDS-1", "LVDS1", "DSI-1")


# ── Enums ────────────────────────────────────────────────────────────────

class Role(Enum):
    LAPTOP = "laptop"
    EXTERNAL = "external"


class Action(Enum):
    PRIMARY_ACTIVE = "primary-active"
    ACTIVE = "active"
    OFF = "off"


class Scenario(Enum):
    LAPTOP_ONLY = "laptop_only"
    LAPTOP_PLUS_1_EXTERNAL = "laptop_plus_1_external"
    LAPTOP_PLUS_2_EXTERNAL = "laptop_plus_2_external"
    LAPTOP_PLUS_3_EXTERNAL = "laptop_plus_3_external"
    ONE_EXTERNAL_ONLY = "1_external_only"
    TWO_EXTERNAL_ONLY = "2_external_only"
    THREE_EXTERNAL_ONLY = "3_external_only"
    FALLBACK = "fallback"

    @property
    def label(self) -> str:
        labels = {
            "laptop_only": "1 - Laptop display only",
            "laptop_plus_1_external": "2 - Laptop + 1 external monitor",
            "laptop_plus_2_external": "3 - Laptop + 2 external monitors",
            "laptop_plus_3_external": "4 - Laptop + 3 external monitors",
            "1_external_only": "5 - 1 external monitor only (lid closed)",
            "2_external_only": "6 - 2 external monitors only (lid closed)",
            "3_external_only": "7 - 3 external monitors only (lid closed)",
            "fallback": "Fallback - Unsupported configuration",
        }
        return labels[self.value]

    @property
    def uses_laptop(self) -> bool:
        """True if the laptop panel is part of the layout."""
        return self in (
            Scenario.LAPTOP_ONLY,
            Scenario.LAPTOP_PLUS_1_EXTERNAL,
            Scenario.LAPTOP_PLUS_2_EXTERNAL,
            Scenario.LAPTOP_PLUS_3_EXTERNAL,
        )


# ── Monitor / Topology ───────────────────────────────────────────────────

@dataclass(frozen=True)
class Monitor:
    name: str                   # e.g. "DP-1", "eDP-1"
    connected: bool = True
    modes: tuple[str, ...] = ()  # advertised modes in query order, e.g. "2560x1440"
    role: Role = Role.EXTERNAL

    def __str__(self) -> str:
        state = "connected" if self.connected else "disconnected"
        return f"{self.name} {state} ({len(self.modes)} modes)"


@dataclass(frozen=True)
class Topology:
    laptop: Monitor | None = None
    externals: tuple[Monitor, ...] = ()
    disconnected: tuple[Monitor, ...] = ()

    @property
    def external_count(self) -> int:
        return len(self.externals)

    @property
    def laptop_available(self) -> bool:
        """True if a laptop panel is known and currently connected."""
        return self.laptop is not None and self.laptop.connected

    @property
    def laptop_name(self) -> str | None:
        return self.laptop.name if self.laptop else None

    def summary(self) -> str:
        """One-line description used in error context."""
        laptop = self.laptop_name or "none"
        if self.laptop and not self.laptop.connected:
            laptop += " (disconnected)"
        externals = ", ".join(m.name for m in self.externals) or "none"
        return f"laptop={laptop}, externals=[{externals}], count={self.external_count}"


# ── Layout plan ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OutputDirective:
    name: str
    action: Action
    resolution: str = AUTO
    x: int = 0
    y: int = 0

    # Identity transform emitted for every active output
    _IDENTITY_ARGS: ClassVar[tuple[str, ...]] = ("--rotate", "normal", "--scale", "1x1")

    @property
    def is_active(self) -> bool:
        return self.action != Action.OFF

    def to_xrandr_args(self) -> list[str]:
        """Generate xrandr arguments for this output (without the ``xrandr`` prefix)."""
        if not self.is_active:
            return ["--output", self.name, "--off"]

        parts = ["--output", self.name]
        if self.action == Action.PRIMARY_ACTIVE:
            parts.append("--primary")

        # Resolution
        if self.resolution == AUTO:
            parts.append("--auto")
        else:
            parts.extend(["--mode", self.resolution])

        parts.extend(["--pos", f"{self.x}x{self.y}"])
        parts.extend(self._IDENTITY_ARGS)
        return parts


@dataclass(frozen=True)
class LayoutPlan:
    scenario: Scenario
    directives: tuple[OutputDirective, ...] = ()
    summary: str = ""

    @property
    def primary(self) -> OutputDirective | None:
        return next((d for d in self.directives if d.action == Action.PRIMARY_ACTIVE), None)

    @property
    def active(self) -> list[OutputDirective]:
        return [d for d in self.directives if d.is_active]

    def names(self) -> set[str]:
        return {d.name for d in self.directives}

    def to_command(self, binary: str = "xrandr") -> list[str]:
        """Serialize the plan into a single xrandr argument vector.

        All outputs go into one invocation so the server applies the
        modeset in one step.
        """
        cmd = [binary]
        for d in self.directives:
            cmd.extend(d.to_xrandr_args())
        return cmd

    def command_line(self, binary: str = "xrandr") -> str:
        return shlex.join(self.to_command(binary))


# ── Settings ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    preferred_resolution: str = "2560x1440"
    fallback_resolution: str = "1920x1080"
    laptop_outputs: tuple[str, ...] = DEFAULT_LAPTOP_OUTPUTS
    default_width: int = 1920
    notifications: bool = True
    log_file: Path | None = None

    @classmethod
    def from_dict(cls, d: dict) -> Settings:
        """Deserialize from a settings dict, ignoring unknown keys."""
        d = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}

        for key in ("preferred_resolution", "fallback_resolution"):
            if key in d and not isinstance(d[key], str):
                raise SettingsError(f"{key} must be a string, got {d[key]!r}")

        if "laptop_outputs" in d:
            outputs = d["laptop_outputs"]
            if not isinstance(outputs, list) or not all(isinstance(o, str) for o in outputs):
                raise SettingsError("laptop_outputs must be a list of output names")
            d["laptop_outputs"] = tuple(outputs)

        if "default_width" in d:
            width = d["default_width"]
            # bool is an int subclass; reject it explicitly
            if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
                raise SettingsError(f"default_width must be a positive integer, got {width!r}")

        if "notifications" in d and not isinstance(d["notifications"], bool):
            raise SettingsError("notifications must be true or false")

        if d.get("log_file") is not None:
            if not isinstance(d["log_file"], str):
                raise SettingsError(f"log_file must be a path string, got {d['log_file']!r}")
            d["log_file"] = Path(d["log_file"]).expanduser()

        return cls(**d)
