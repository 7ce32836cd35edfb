"""Map the detected topology and lid state onto a supported scenario."""

from __future__ import annotations

import logging

from .models import Scenario, Topology

log = logging.getLogger(__name__)

_WITH_LAPTOP: dict[int, Scenario] = {
    0: Scenario.LAPTOP_ONLY,
    1: Scenario.LAPTOP_PLUS_1_EXTERNAL,
    2: Scenario.LAPTOP_PLUS_2_EXTERNAL,
    3: Scenario.LAPTOP_PLUS_3_EXTERNAL,
}

_WITHOUT_LAPTOP: dict[int, Scenario] = {
    1: Scenario.ONE_EXTERNAL_ONLY,
    2: Scenario.TWO_EXTERNAL_ONLY,
    3: Scenario.THREE_EXTERNAL_ONLY,
}


def use_laptop_display(laptop_available: bool, lid_closed: bool) -> bool:
    return laptop_available and not lid_closed


def classify(laptop_available: bool, lid_closed: bool, external_count: int) -> Scenario:
    """Return the scenario for the given display cardinality.

    Any combination outside the table (no displays at all, or more than
    three externals) is ``Scenario.FALLBACK``.
    """
    table = _WITH_LAPTOP if use_laptop_display(laptop_available, lid_closed) else _WITHOUT_LAPTOP
    return table.get(external_count, Scenario.FALLBACK)


def classify_topology(topology: Topology, lid_closed: bool) -> Scenario:
    """Classify *topology* and log the configuration decision."""
    if not topology.laptop_available:
        log.info("Configuration Decision: Laptop display not available")
    elif lid_closed:
        log.info("Configuration Decision: Laptop lid closed - using external displays only")
    else:
        log.info("Configuration Decision: Laptop lid open - including laptop display")

    scenario = classify(topology.laptop_available, lid_closed, topology.external_count)
    if scenario == Scenario.FALLBACK:
        log.info(
            "Selected Scenario: %s (%d external, laptop available: %s)",
            scenario.label,
            topology.external_count,
            "yes" if topology.laptop_available else "no",
        )
    else:
        log.info("Selected Scenario: %s", scenario.label)
    return scenario
