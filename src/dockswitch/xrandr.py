"""xrandr communication: parse ``xrandr --query`` output and apply layout plans."""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Sequence

from .errors import ApplyError, DetectionError
from .models import DEFAULT_LAPTOP_OUTPUTS, LayoutPlan, Monitor, Role, Topology

log = logging.getLogger(__name__)

# "<name> connected primary 1920x1080+0+0 (normal left ...) 344mm x 193mm"
_OUTPUT_RE = re.compile(r"^(\S+) (connected|disconnected)\b")
# "   2560x1440     59.95*+  74.97"
_MODE_RE = re.compile(r"^\s+(\d+x\d+\S*)")


def _parse_outputs(text: str) -> list[tuple[str, bool, tuple[str, ...]]]:
    """Return (name, connected, modes) for every output line, in query order."""
    outputs: list[tuple[str, bool, tuple[str, ...]]] = []
    lines = text.splitlines()
    i = 0
    while i < len(lines):
        match = _OUTPUT_RE.match(lines[i])
        i += 1
        if not match:
            continue
        name, state = match.group(1), match.group(2)

        # Mode lines directly follow their output line; stop at the first
        # line that is not an indented mode entry.
        modes: list[str] = []
        while i < len(lines):
            mode_match = _MODE_RE.match(lines[i])
            if not mode_match:
                break
            modes.append(mode_match.group(1))
            i += 1

        outputs.append((name, state == "connected", tuple(modes)))
    return outputs


def parse_query(text: str, laptop_outputs: Sequence[str] = DEFAULT_LAPTOP_OUTPUTS) -> Topology:
    """Build a Topology from raw ``xrandr --query`` text.

    The laptop is the first name in *laptop_outputs* reported as connected.
    If none is connected, the first candidate reported as disconnected is
    kept as a known-but-disconnected laptop (used by lid detection).
    """
    outputs = _parse_outputs(text)
    connected = {name: modes for name, is_connected, modes in outputs if is_connected}
    seen = {name for name, _, _ in outputs}

    laptop: Monitor | None = None
    for candidate in laptop_outputs:
        if candidate in connected:
            laptop = Monitor(candidate, True, connected[candidate], Role.LAPTOP)
            break
    else:
        for candidate in laptop_outputs:
            if candidate in seen:
                laptop = Monitor(candidate, False, (), Role.LAPTOP)
                break

    laptop_name = laptop.name if laptop else None
    externals = tuple(
        Monitor(name, True, modes, Role.EXTERNAL)
        for name, is_connected, modes in outputs
        if is_connected and name != laptop_name
    )
    disconnected = tuple(
        Monitor(name, False, modes, Role.LAPTOP if name == laptop_name else Role.EXTERNAL)
        for name, is_connected, modes in outputs
        if not is_connected
    )
    return Topology(laptop=laptop, externals=externals, disconnected=disconnected)


class XrandrIPC:
    """Run xrandr to query outputs and apply layout plans."""

    def __init__(self, binary: str = "xrandr") -> None:
        self._binary = binary

    def query_text(self) -> str:
        """Run ``xrandr --query`` and return its raw output."""
        try:
            result = subprocess.run(
                [self._binary, "--query"],
                capture_output=True,
                text=True,
                check=True,
            )
        except OSError as e:
            raise DetectionError(f"Cannot run {self._binary}: {e}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise DetectionError(
                f"{self._binary} --query exited with status {e.returncode}: {stderr}"
            ) from e

        if not result.stdout.strip():
            raise DetectionError(f"{self._binary} --query returned no output")
        return result.stdout

    def query(self, laptop_outputs: Sequence[str] = DEFAULT_LAPTOP_OUTPUTS) -> Topology:
        """Query all outputs as a Topology."""
        return parse_query(self.query_text(), laptop_outputs)

    def apply(self, plan: LayoutPlan) -> str:
        """Apply *plan* with a single xrandr invocation. Returns its output."""
        cmd = plan.to_command(self._binary)
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise ApplyError(f"Cannot run {self._binary}: {e}") from e

        output = result.stdout or ""
        for line in output.splitlines():
            if line.strip():
                log.info("xrandr: %s", line)

        if result.returncode != 0:
            raise ApplyError(
                f"xrandr command failed with status {result.returncode}",
                returncode=result.returncode,
            )
        return output
