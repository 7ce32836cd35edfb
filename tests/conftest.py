from __future__ import annotations

import logging

import pytest

from dockswitch.models import LayoutPlan, Monitor, Role, Settings, Topology

XRANDR_DOCKED = """\
Screen 0: minimum 320 x 200, current 4480 x 1440, maximum 16384 x 16384
eDP-1 connected primary 1920x1080+4480+0 (normal left inverted right x axis y axis) 344mm x 193mm
   1920x1080     60.02*+  60.01    59.97
   1680x1050     59.95    59.88
HDMI-1 disconnected (normal left inverted right x axis y axis)
DP-1 connected 2560x1440+0+0 (normal left inverted right x axis y axis) 597mm x 336mm
   1920x1080     60.00 +  50.00
   2560x1440     59.95*
DP-2 connected 1920x1080+2560+0 (normal left inverted right x axis y axis) 527mm x 296mm
   1920x1080     60.00*+
   1280x720      60.00
DP-3 disconnected (normal left inverted right x axis y axis)
"""

XRANDR_LAPTOP_ONLY = """\
Screen 0: minimum 320 x 200, current 1920 x 1080, maximum 16384 x 16384
eDP-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis) 344mm x 193mm
   1920x1080     60.02*+
HDMI-1 disconnected (normal left inverted right x axis y axis)
DP-1 disconnected (normal left inverted right x axis y axis)
"""


def laptop(name: str = "eDP-1", connected: bool = True) -> Monitor:
    return Monitor(name, connected, ("1920x1080",) if connected else (), Role.LAPTOP)


def external(name: str, *modes: str) -> Monitor:
    return Monitor(name, True, tuple(modes), Role.EXTERNAL)


def gone(name: str) -> Monitor:
    return Monitor(name, False, (), Role.EXTERNAL)


def plan_actions(plan: LayoutPlan) -> list[tuple[str, str, str, int]]:
    return [(d.name, d.action.value, d.resolution, d.x) for d in plan.directives]


class FakeIPC:
    """Stands in for XrandrIPC without touching a display server."""

    def __init__(self, topology: Topology | None = None, *, query_error=None, apply_error=None) -> None:
        self.topology = topology
        self.query_error = query_error
        self.apply_error = apply_error
        self.applied: list[LayoutPlan] = []
        self.queries = 0

    def query(self, laptop_outputs=()) -> Topology:
        self.queries += 1
        if self.query_error is not None:
            raise self.query_error
        return self.topology

    def apply(self, plan: LayoutPlan) -> str:
        if self.apply_error is not None:
            raise self.apply_error
        self.applied.append(plan)
        return ""


class FakeNotifier:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def success(self, message: str) -> bool:
        self.sent.append(("success", message))
        return True

    def failure(self, message: str = "Configuration failed - check logs") -> bool:
        self.sent.append(("failure", message))
        return True


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def no_lid(tmp_path):
    """An empty ACPI lid directory, so only the xrandr heuristic applies."""
    root = tmp_path / "lid"
    root.mkdir()
    return root


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if (handler.get_name() or "").startswith("dockswitch-"):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
