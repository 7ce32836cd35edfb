"""Best-effort laptop lid state detection.

The answer is a heuristic, not an authoritative hardware reading: the ACPI
lid files are checked first, then a laptop panel that xrandr reports as
disconnected is taken as a hint that the lid is shut. When neither signal
is present the lid is assumed open so a run is never blocked on it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .models import Topology

log = logging.getLogger(__name__)

LID_ROOT = Path("/proc/acpi/button/lid")


def _read_lid_state(path: Path) -> str | None:
    """Return the state token of an ACPI lid file, or None if unreadable."""
    try:
        tokens = path.read_text(encoding="utf-8", errors="replace").split()
    except OSError:
        return None
    # "state:      closed"
    return tokens[1] if len(tokens) >= 2 else None


def lid_closed_from_acpi(lid_root: Path = LID_ROOT) -> bool:
    """True if any ACPI lid device reports exactly ``closed``."""
    try:
        if not lid_root.is_dir():
            return False
        state_files = sorted(lid_root.glob("*/state"))
    except OSError:
        return False

    for path in state_files:
        if _read_lid_state(path) == "closed":
            log.debug("Laptop lid detected as closed via %s", path)
            return True
    return False


def is_lid_closed(topology: Topology, lid_root: Path = LID_ROOT) -> bool:
    """Return True if the laptop lid looks closed."""
    if lid_closed_from_acpi(lid_root):
        return True

    if topology.laptop is not None and not topology.laptop.connected:
        log.debug("Laptop display %s appears disconnected (possible lid closed)", topology.laptop.name)
        return True

    log.debug("Laptop lid assumed to be open")
    return False
