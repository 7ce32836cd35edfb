"""Desktop notifications via the freedesktop Notifications D-Bus service."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)

ICON_SUCCESS = "video-display"
ICON_FAILURE = "dialog-error"
DEFAULT_TITLE = "Display Setup"

_BUS_NAME = "org.freedesktop.Notifications"
_OBJECT_PATH = "/org/freedesktop/Notifications"
_INTERFACE = "org.freedesktop.Notifications"


class Notifier:
    """Fire-and-forget desktop notifications.

    Delivery is best effort: a missing PyGObject, session bus or
    notification daemon is logged at debug level and otherwise ignored.
    """

    def __init__(self, app_name: str = "dockswitch", *, enabled: bool = True) -> None:
        self._app_name = app_name
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def send(self, title: str, message: str, icon: str = ICON_SUCCESS) -> bool:
        """Show a notification. Returns True if the service accepted it."""
        if not self._enabled:
            return False
        try:
            import gi
            gi.require_version("Gio", "2.0")
            from gi.repository import Gio, GLib
        except (ImportError, ValueError):
            log.info("GLib not available, notifications disabled")
            self._enabled = False
            return False

        try:
            bus = Gio.bus_get_sync(Gio.BusType.SESSION)
            params = GLib.Variant(
                "(susssasa{sv}i)",
                (self._app_name, 0, icon, title, message, [], {}, -1),
            )
            bus.call_sync(_BUS_NAME, _OBJECT_PATH, _INTERFACE, "Notify", params,
                          GLib.VariantType("(u)"), Gio.DBusCallFlags.NONE, -1, None)
        except Exception as e:
            log.debug("Notification not delivered: %s", e)
            return False
        return True

    def success(self, message: str) -> bool:
        return self.send(DEFAULT_TITLE, message, ICON_SUCCESS)

    def failure(self, message: str = "Configuration failed - check logs") -> bool:
        return self.send(DEFAULT_TITLE, message, ICON_FAILURE)
