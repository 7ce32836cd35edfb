from __future__ import annotations

from conftest import external, laptop
from dockswitch.lid import is_lid_closed, lid_closed_from_acpi
from dockswitch.models import Topology


def _write_lid(root, state: str, device: str = "LID0"):
    path = root / device / "state"
    path.parent.mkdir(parents=True)
    path.write_text(f"state:      {state}\n", encoding="utf-8")
    return path


def test_acpi_closed(no_lid) -> None:
    _write_lid(no_lid, "closed")
    topology = Topology(laptop=laptop(), externals=(external("DP-1"),))

    assert lid_closed_from_acpi(no_lid)
    assert is_lid_closed(topology, no_lid)


def test_acpi_open_falls_through_to_open(no_lid) -> None:
    _write_lid(no_lid, "open")
    topology = Topology(laptop=laptop())

    assert not is_lid_closed(topology, no_lid)


def test_any_closed_lid_device_wins(no_lid) -> None:
    _write_lid(no_lid, "open", "LID0")
    _write_lid(no_lid, "closed", "LID1")

    assert lid_closed_from_acpi(no_lid)


def test_state_token_must_match_exactly(no_lid) -> None:
    _write_lid(no_lid, "Closed")

    assert not lid_closed_from_acpi(no_lid)


def test_disconnected_laptop_reads_as_closed(no_lid) -> None:
    topology = Topology(laptop=laptop(connected=False), externals=(external("DP-1"),))

    assert is_lid_closed(topology, no_lid)


def test_missing_lid_directory_defaults_to_open(tmp_path) -> None:
    topology = Topology(laptop=laptop())

    assert not is_lid_closed(topology, tmp_path / "does-not-exist")


def test_unreadable_state_file_is_ignored(no_lid) -> None:
    # A directory where the state file should be makes read_text fail
    (no_lid / "LID0" / "state").mkdir(parents=True)
    topology = Topology(laptop=laptop())

    assert not is_lid_closed(topology, no_lid)


def test_truncated_state_file_is_ignored(no_lid) -> None:
    path = no_lid / "LID0" / "state"
    path.parent.mkdir()
    path.write_text("state:\n", encoding="utf-8")

    assert not lid_closed_from_acpi(no_lid)


def test_no_laptop_defaults_to_open(no_lid) -> None:
    assert not is_lid_closed(Topology(externals=(external("DP-1"),)), no_lid)
