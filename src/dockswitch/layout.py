"""Resolution selection and left-to-right layout planning."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .errors import UnsupportedLayoutError
from .models import AUTO, Action, LayoutPlan, Monitor, OutputDirective, Scenario, Topology

log = logging.getLogger(__name__)

DEFAULT_WIDTH = 1920


# ── Resolution ───────────────────────────────────────────────────────────

def select_resolution(monitor: Monitor, preferred: str, fallback: str) -> str:
    """Pick *preferred*, then *fallback*, from the monitor's advertised modes.

    Returns the ``"auto"`` sentinel when neither is advertised, leaving the
    choice to the X server.
    """
    if preferred in monitor.modes:
        log.debug("Using preferred resolution %s for %s", preferred, monitor.name)
        return preferred
    if fallback in monitor.modes:
        log.debug("Using fallback resolution %s for %s", fallback, monitor.name)
        return fallback
    log.debug("Using auto resolution for %s", monitor.name)
    return AUTO


def resolution_width(resolution: str, default_width: int = DEFAULT_WIDTH) -> int:
    """Width in pixels used to place the next output.

    ``"auto"`` resolves to *default_width*; the real mode picked by the
    server may differ and the following outputs will then be misplaced.
    """
    if resolution == AUTO:
        return default_width
    width, _, _ = resolution.partition("x")
    try:
        value = int(width)
    except ValueError:
        value = -1
    if value <= 0:
        log.error(
            "Cannot parse width from resolution %r, assuming %dpx", resolution, default_width,
        )
        return default_width
    return value


# ── Planning ─────────────────────────────────────────────────────────────

class _Planner:
    """Accumulates directives for one plan; never mutates its inputs."""

    def __init__(self, preferred: str, fallback: str, default_width: int) -> None:
        self._preferred = preferred
        self._fallback = fallback
        self._default_width = default_width
        self.directives: list[OutputDirective] = []

    def off(self, name: str) -> None:
        self.directives.append(OutputDirective(name, Action.OFF))

    def place_externals(self, externals: Sequence[Monitor], x: int = 0) -> int:
        """Place *externals* left to right starting at *x*, first one primary.

        Returns the x offset just past the last placed output.
        """
        for i, monitor in enumerate(externals):
            resolution = select_resolution(monitor, self._preferred, self._fallback)
            action = Action.PRIMARY_ACTIVE if i == 0 else Action.ACTIVE
            self.directives.append(OutputDirective(monitor.name, action, resolution, x))
            x += resolution_width(resolution, self._default_width)
        return x

    def place_laptop(self, name: str, x: int, *, primary: bool = False) -> None:
        action = Action.PRIMARY_ACTIVE if primary else Action.ACTIVE
        self.directives.append(OutputDirective(name, action, AUTO, x))

    def turn_off_disconnected(self, topology: Topology) -> None:
        mentioned = {d.name for d in self.directives}
        for monitor in topology.disconnected:
            if monitor.name not in mentioned:
                self.off(monitor.name)
                mentioned.add(monitor.name)


def _laptop_only(planner: _Planner, topology: Topology) -> None:
    planner.place_laptop(topology.laptop_name, 0, primary=True)
    for monitor in topology.externals:
        planner.off(monitor.name)


def _summary(scenario: Scenario, external_count: int) -> str:
    if scenario == Scenario.LAPTOP_ONLY:
        return "Laptop display only"
    if scenario == Scenario.LAPTOP_PLUS_1_EXTERNAL:
        return "External monitor + laptop display"
    if scenario in (Scenario.LAPTOP_PLUS_2_EXTERNAL, Scenario.LAPTOP_PLUS_3_EXTERNAL):
        return f"{external_count} external monitors + laptop display"
    if scenario == Scenario.ONE_EXTERNAL_ONLY:
        return "Single external monitor (laptop OFF)"
    if scenario in (Scenario.TWO_EXTERNAL_ONLY, Scenario.THREE_EXTERNAL_ONLY):
        return f"{external_count} external monitors (laptop OFF)"
    return "Fallback: Laptop display only"


def plan_layout(
    scenario: Scenario,
    topology: Topology,
    preferred: str,
    fallback: str,
    *,
    default_width: int = DEFAULT_WIDTH,
) -> LayoutPlan:
    """Build the LayoutPlan realising *scenario* on *topology*.

    Externals keep their query order. Disconnected outputs not otherwise
    mentioned are turned off at the end. Raises UnsupportedLayoutError for
    a fallback without a usable laptop display.
    """
    if scenario.uses_laptop and not topology.laptop_available:
        raise UnsupportedLayoutError(
            f"Scenario {scenario.value} needs a laptop display: {topology.summary()}"
        )

    planner = _Planner(preferred, fallback, default_width)

    if scenario == Scenario.LAPTOP_ONLY:
        _laptop_only(planner, topology)

    elif scenario == Scenario.LAPTOP_PLUS_1_EXTERNAL:
        x = planner.place_externals(topology.externals[:1])
        planner.place_laptop(topology.laptop_name, x)

    elif scenario in (Scenario.LAPTOP_PLUS_2_EXTERNAL, Scenario.LAPTOP_PLUS_3_EXTERNAL):
        x = planner.place_externals(topology.externals)
        planner.place_laptop(topology.laptop_name, x)

    elif scenario in (
        Scenario.ONE_EXTERNAL_ONLY,
        Scenario.TWO_EXTERNAL_ONLY,
        Scenario.THREE_EXTERNAL_ONLY,
    ):
        if topology.laptop is not None:
            planner.off(topology.laptop.name)
        planner.place_externals(topology.externals)

    elif scenario == Scenario.FALLBACK:
        log.error("Unsupported display configuration - falling back to laptop display")
        if not topology.laptop_available:
            log.error("No laptop display available and unsupported external configuration")
            raise UnsupportedLayoutError(
                f"No supported layout for {topology.summary()}"
            )
        _laptop_only(planner, topology)

    else:
        raise ValueError(f"Unknown scenario: {scenario!r}")

    planner.turn_off_disconnected(topology)
    return LayoutPlan(
        scenario=scenario,
        directives=tuple(planner.directives),
        summary=_summary(scenario, topology.external_count),
    )
