"""Application entry point: one-shot display detection, planning and apply."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .errors import DisplaySetupError, SettingsError
from .layout import plan_layout
from .lid import LID_ROOT, is_lid_closed
from .models import LayoutPlan, Scenario, Settings, Topology
from .notify import Notifier
from .scenario import classify_topology
from .utils import APP_NAME, append_text, default_log_file, load_app_settings
from .xrandr import XrandrIPC

log = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
SEPARATOR = "\n" + "=" * 81 + "\n\n"


def configure_logging(log_file: Path, *, verbose: bool = False) -> None:
    """Write the run separator and send log records to *log_file* and stderr."""
    append_text(log_file, SEPARATOR)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.set_name(f"{APP_NAME}-file")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    console_handler = logging.StreamHandler()
    console_handler.set_name(f"{APP_NAME}-console")
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[file_handler, console_handler],
        force=True,
    )


def _log_topology(topology: Topology) -> None:
    externals = " ".join(m.name for m in topology.externals)
    log.info("Display Detection Results:")
    log.info("  Laptop Display: %s", topology.laptop_name if topology.laptop_available else "Not Found")
    log.info("  External Displays: %s", externals or "None")
    log.info("  External Display Count: %d", topology.external_count)
    log.info("  Laptop Display Available: %s", "Yes" if topology.laptop_available else "No")
    for monitor in topology.externals + topology.disconnected:
        log.debug("  %s: %s", monitor, " ".join(monitor.modes) or "no modes")


def run(
    ipc: XrandrIPC,
    notifier: Notifier,
    settings: Settings,
    *,
    lid_root: Path = LID_ROOT,
    dry_run: bool = False,
) -> int:
    """Detect, plan and apply one display configuration. Returns the exit status."""
    topology: Topology | None = None
    scenario: Scenario | None = None
    plan: LayoutPlan | None = None

    try:
        topology = ipc.query(settings.laptop_outputs)
        _log_topology(topology)

        lid_closed = is_lid_closed(topology, lid_root)
        scenario = classify_topology(topology, lid_closed)
        plan = plan_layout(
            scenario,
            topology,
            settings.preferred_resolution,
            settings.fallback_resolution,
            default_width=settings.default_width,
        )

        log.info("Executing xrandr command: %s", plan.command_line())
        if dry_run:
            log.info("Dry run: configuration not applied")
            return 0
        ipc.apply(plan)
        log.info("xrandr command executed successfully")
    except DisplaySetupError as e:
        log.error("Display configuration failed: %s", e)
        log.error(
            "Context: scenario=%s, %s",
            scenario.value if scenario else "undetermined",
            topology.summary() if topology else "no topology detected",
        )
        if plan is not None:
            log.error("Attempted command: %s", plan.command_line())
        if not dry_run:
            notifier.failure()
        log.error("Display setup failed")
        return 1

    log.info("Display configuration successful: %s", plan.summary)
    notifier.success(plan.summary)
    log.info("Display setup completed successfully")
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Configure laptop and external monitors for the current dock state",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="settings file (default: ~/.config/dockswitch/settings.json)")
    parser.add_argument("--preferred", metavar="WxH",
                        help="resolution to use when a monitor supports it")
    parser.add_argument("--fallback", metavar="WxH",
                        help="resolution to use when the preferred one is missing")
    parser.add_argument("--log-file", type=Path, default=None,
                        help="append the run log to this file")
    parser.add_argument("--no-notify", action="store_true",
                        help="do not send a desktop notification")
    parser.add_argument("--dry-run", action="store_true",
                        help="print the xrandr command without applying it")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug messages")
    return parser.parse_args(argv)


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides: dict = {}
    if args.preferred:
        overrides["preferred_resolution"] = args.preferred
    if args.fallback:
        overrides["fallback_resolution"] = args.fallback
    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.no_notify:
        overrides["notifications"] = False
    return dataclasses.replace(settings, **overrides) if overrides else settings


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    settings_error: SettingsError | None = None
    try:
        settings = load_app_settings(args.config)
    except SettingsError as e:
        settings_error = e
        settings = Settings()
    settings = _apply_overrides(settings, args)

    log_file = settings.log_file or default_log_file()
    configure_logging(log_file, verbose=args.verbose)
    log.info("Display Setup Script Started")
    log.info("Log File: %s", log_file)

    if settings_error is not None:
        log.error("Invalid settings: %s", settings_error)
        return 1

    ipc = XrandrIPC()
    notifier = Notifier(APP_NAME, enabled=settings.notifications)
    return run(ipc, notifier, settings, dry_run=args.dry_run)


if __name__ == "__main__":
    sys.exit(main())
