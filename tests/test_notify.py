from __future__ import annotations

import sys

from dockswitch.notify import Notifier


def test_disabled_notifier_sends_nothing() -> None:
    notifier = Notifier(enabled=False)

    assert not notifier.success("Laptop display only")
    assert not notifier.failure()


def test_missing_gi_disables_notifications(monkeypatch, caplog) -> None:
    # A None entry makes "import gi" raise ImportError
    monkeypatch.setitem(sys.modules, "gi", None)
    notifier = Notifier()

    with caplog.at_level("INFO", logger="dockswitch"):
        assert not notifier.success("Laptop display only")

    assert not notifier.enabled
    assert "notifications disabled" in caplog.text
