"""Binary clock entry point.

Usage:
    python -m binclock [options] <command>

Commands:
    show              Print the binary layers and accessibility label
    render            Write a PNG of the widget for a display size
    style show        Print the stored style as JSON
    style set K=V...  Edit style fields (e.g. representation=bars bar.spacing=5)
    style reset       Restore the default style
    timeline          Print the widget entry and when it next refreshes
    config show       Print the active configuration as YAML
    config set S.F=V  Edit config fields (e.g. clock.timezone=Europe/Paris)
    preview           Re-render a PNG on every tick until interrupted

Options:
    --config PATH     Path to config file (default: ~/.config/binclock/config.yaml)
    --size SIZE       Display size: small, medium, large (default: small)
    --debug           Enable debug logging
"""

import argparse
import json
import logging
import signal
import sys
import threading
from datetime import datetime, timedelta
from pathlib import Path

import yaml
from pydantic.alias_generators import to_snake

from .converter import DigitMatrix
from .core.config import DEFAULT_CONFIG_PATH, Config, ConfigManager
from .core.errors import BinaryClockError, ConfigurationError
from .core.logging import setup_logging
from .display import BinaryRenderer, apply_rounded_corners
from .style import (
    DisplaySize,
    RGBAColor,
    StyleEditor,
    StyleStore,
    create_store,
    encode_style,
)
from .widget import Timeline, TimelineProvider, WidgetEntry

logger = logging.getLogger(__name__)


class BinaryClockApp:
    """Wires config, style store, converter and renderer together."""

    def __init__(self, config_path: Path, size: DisplaySize) -> None:
        """Initialize the application.

        Args:
            config_path: Path to configuration file
            size: Display size to work on
        """
        self._config_manager = ConfigManager.get_instance(config_path)
        self._config: Config = self._config_manager.get()
        self._size = size
        self._store: StyleStore = create_store(self._config.store)
        clock = self._config.clock
        self._provider = TimelineProvider(
            self._store,
            size,
            zone=clock.zone(),
            show_date=clock.show_date,
            refresh_interval=timedelta(seconds=clock.widget_interval),
        )
        self._shutdown_event = threading.Event()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def config_manager(self) -> ConfigManager:
        return self._config_manager

    @property
    def store(self) -> StyleStore:
        return self._store

    def _now(self, instant: datetime | None) -> datetime:
        return instant or datetime.now(self._config.clock.zone())

    def entry(self, instant: datetime | None = None) -> WidgetEntry:
        """Build the widget entry for an instant (default: now)."""
        return self._provider.snapshot(self._now(instant))

    def timeline(self, instant: datetime | None = None) -> Timeline:
        """Widget timeline for an instant, refreshing after widget_interval."""
        return self._provider.timeline(self._now(instant))

    def render_to(self, output: Path, instant: datetime | None = None) -> WidgetEntry:
        """Render the entry for an instant into a PNG file."""
        entry = self.entry(instant)
        renderer = BinaryRenderer.for_size(self._size, scale=self._config.render.scale)
        image = renderer.render(entry.time_layers, entry.style, entry.date_layers)
        image = apply_rounded_corners(
            image, self._config.render.corner_radius * self._config.render.scale
        )

        output.parent.mkdir(parents=True, exist_ok=True)
        temp_path = output.with_suffix(".tmp.png")
        image.save(temp_path, format="PNG")
        temp_path.replace(output)
        logger.debug("Rendered %s to %s", entry.accessibility_label, output)
        return entry

    def run_preview(self, output: Path) -> None:
        """Re-render on every live tick until stop() is called."""
        interval = self._config.clock.live_interval
        unsubscribe = self._store.subscribe(
            lambda size: logger.info("Style changed", extra={"size": size.value})
        )
        logger.info("Preview running, writing %s every %.1fs", output, interval)
        last_label = None
        try:
            while not self._shutdown_event.is_set():
                entry = self.render_to(output)
                if entry.accessibility_label != last_label:
                    logger.info(entry.accessibility_label)
                    last_label = entry.accessibility_label
                self._shutdown_event.wait(interval)
        finally:
            unsubscribe()

    def stop(self) -> None:
        """Stop a running preview loop."""
        self._shutdown_event.set()


def _format_matrix(matrix: DigitMatrix) -> str:
    return "\n".join(" ".join(str(bit) for bit in column) for column in matrix)


def _parse_instant(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid ISO timestamp: {value}") from e


def _apply_assignment(editor: StyleEditor, assignment: str) -> None:
    """Apply one KEY=VALUE edit to the editor."""
    key, sep, value = assignment.partition("=")
    if not sep or not key:
        raise ConfigurationError("Style edits must look like KEY=VALUE",
                                 details={"edit": assignment})

    if key.startswith("line_colors.") or key.startswith("lineColors."):
        index = int(key.split(".", 1)[1])
        editor.set_line_color(index, RGBAColor.from_hex(value))
    elif key.startswith("bar."):
        editor.update_bar(**{to_snake(key.split(".", 1)[1]): value})
    elif key.startswith("bar") and key != "bar":
        # Flat persisted names such as barSpacing
        editor.update_bar(**{to_snake(key[3:]): value})
    else:
        field_name = to_snake(key)
        if field_name.endswith("color"):
            editor.update(**{field_name: RGBAColor.from_hex(value)})
        else:
            editor.update(**{field_name: value})


def _parse_config_assignments(assignments: list[str]) -> dict[str, dict[str, object]]:
    """Group SECTION.FIELD=VALUE edits by section; values are YAML scalars."""
    sections: dict[str, dict[str, object]] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        section, dot, field_name = key.partition(".")
        if not sep or not dot or not section or not field_name:
            raise ConfigurationError("Config edits must look like SECTION.FIELD=VALUE",
                                     details={"edit": assignment})
        try:
            parsed = yaml.safe_load(value)
        except yaml.YAMLError as e:
            raise ConfigurationError("Unparseable config value",
                                     details={"edit": assignment}, cause=e) from e
        sections.setdefault(section, {})[to_snake(field_name)] = parsed
    return sections


def _cmd_show(app: BinaryClockApp, args: argparse.Namespace) -> int:
    entry = app.entry(args.at)
    print("Time")
    print(_format_matrix(entry.time_layers))
    if entry.date_layers is not None:
        print("Date")
        print(_format_matrix(entry.date_layers))
    print(entry.accessibility_label)
    return 0


def _cmd_render(app: BinaryClockApp, args: argparse.Namespace) -> int:
    entry = app.render_to(args.output, args.at)
    print(f"{args.output}: {entry.accessibility_label}")
    return 0


def _cmd_style(app: BinaryClockApp, args: argparse.Namespace) -> int:
    editor = StyleEditor(app.store, args.size)
    if args.style_command == "set":
        for assignment in args.assignments:
            _apply_assignment(editor, assignment)
    elif args.style_command == "reset":
        editor.reset()
    print(json.dumps(encode_style(editor.style), indent=2, sort_keys=True))
    return 0


def _cmd_timeline(app: BinaryClockApp, args: argparse.Namespace) -> int:
    timeline = app.timeline(args.at)
    for entry in timeline.entries:
        print(f"{entry.date.isoformat()} {entry.accessibility_label}")
    if timeline.refresh_at is not None:
        print(f"Refresh at {timeline.refresh_at.isoformat()}")
    return 0


def _cmd_config(app: BinaryClockApp, args: argparse.Namespace) -> int:
    manager = app.config_manager
    if args.config_command == "set":
        for section, fields in _parse_config_assignments(args.assignments).items():
            manager.update_section(section, **fields)
        logger.info("Saved config to %s", manager.path)
    print(yaml.safe_dump(manager.get().model_dump(mode="json"), sort_keys=False), end="")
    return 0


def _cmd_preview(app: BinaryClockApp, args: argparse.Namespace) -> int:
    def signal_handler(sig, frame):
        logger.info("Received signal %s, shutting down...", sig)
        app.stop()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    app.run_preview(args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="binclock",
        description="Binary clock widget renderer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to config file",
    )
    parser.add_argument(
        "--size",
        type=DisplaySize.parse,
        default=DisplaySize.COMPACT,
        help="Display size: small, medium, large",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Print binary layers")
    show.add_argument("--at", type=_parse_instant, help="ISO timestamp (default: now)")
    show.set_defaults(handler=_cmd_show)

    render = commands.add_parser("render", help="Render a PNG")
    render.add_argument("--output", "-o", type=Path, default=Path("binclock.png"))
    render.add_argument("--at", type=_parse_instant, help="ISO timestamp (default: now)")
    render.set_defaults(handler=_cmd_render)

    style = commands.add_parser("style", help="Inspect or edit the stored style")
    style_commands = style.add_subparsers(dest="style_command", required=True)
    style_commands.add_parser("show", help="Print the style")
    style_set = style_commands.add_parser("set", help="Edit style fields")
    style_set.add_argument("assignments", nargs="+", metavar="KEY=VALUE")
    style_commands.add_parser("reset", help="Restore the default style")
    style.set_defaults(handler=_cmd_style)

    timeline = commands.add_parser("timeline", help="Print the widget timeline")
    timeline.add_argument("--at", type=_parse_instant, help="ISO timestamp (default: now)")
    timeline.set_defaults(handler=_cmd_timeline)

    config = commands.add_parser("config", help="Inspect or edit the configuration")
    config_commands = config.add_subparsers(dest="config_command", required=True)
    config_commands.add_parser("show", help="Print the configuration")
    config_set = config_commands.add_parser("set", help="Edit config fields")
    config_set.add_argument("assignments", nargs="+", metavar="SECTION.FIELD=VALUE")
    config.set_defaults(handler=_cmd_config)

    preview = commands.add_parser("preview", help="Live preview loop")
    preview.add_argument("--output", "-o", type=Path, default=Path("binclock-preview.png"))
    preview.set_defaults(handler=_cmd_preview)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug)

    try:
        app = BinaryClockApp(args.config, args.size)
        setup_logging(app.config.logging, debug=args.debug)
        return args.handler(app, args)
    except (BinaryClockError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
