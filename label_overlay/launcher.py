from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import QApplication

from label_overlay.debug_config import DEBUG_CONFIG_ENABLED, DEV_MODE_ENV_VAR, DebugConfig, load_debug_config
from label_overlay.logging_utils import build_rotating_file_handler, resolve_logs_dir
from label_overlay.property_pane import DYNAMIC_OBJECT, STATIC_OBJECT, TEXT_OBJECT, enumerate_object_instances
from label_overlay.render_surface import LabelSurface, _CLIENT_LOGGER
from label_overlay.text_settings import VisualSettings, load_visual_settings
from label_overlay.value_format import DynamicValue, resolve_dynamic_value

PACKAGE_DIR = Path(__file__).resolve().parent
SETTINGS_ENV_VAR = "LABEL_OVERLAY_SETTINGS"
LOG_FILENAME = "label-overlay.log"
DEFAULT_SIZE = (640, 240)


def resolve_settings_path(args_settings: Optional[str]) -> Path:
    if args_settings:
        return Path(args_settings).expanduser().resolve()
    env_override = os.getenv(SETTINGS_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser().resolve()
    return (PACKAGE_DIR.parent / "label_settings.json").resolve()


def load_dynamic_value(value: Optional[str], data_view_path: Optional[str]) -> DynamicValue:
    if data_view_path:
        try:
            data_view = json.loads(Path(data_view_path).expanduser().read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            _CLIENT_LOGGER.warning("Could not read data view %s: %s", data_view_path, exc)
            return DynamicValue(text="", row_count=0)
        return resolve_dynamic_value(data_view)
    if value is None:
        return DynamicValue(text="", row_count=0)
    return DynamicValue(text=value, row_count=1)


def dump_properties(settings: VisualSettings) -> dict[str, list[dict]]:
    """Return the formatting-pane entries for every settings object, keyed by object name."""
    return {
        name: enumerate_object_instances(name, settings.text, settings.static, settings.dynamic)
        for name in (TEXT_OBJECT, STATIC_OBJECT, DYNAMIC_OBJECT)
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Label overlay client")
    parser.add_argument("--settings", help="Path to the visual settings JSON file")
    parser.add_argument("--label", help="Static label text (overrides staticText.postText)")
    parser.add_argument("--value", help="Dynamic value shown next to the label")
    parser.add_argument("--data-view", help="Path to a JSON data view to resolve the value from")
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE[0], help="Surface width in pixels")
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE[1], help="Surface height in pixels")
    parser.add_argument(
        "--dump-layout",
        action="store_true",
        help="Print the computed layout as JSON and exit without showing a window",
    )
    parser.add_argument(
        "--dump-properties",
        action="store_true",
        help="Print the formatting-pane properties of the loaded settings as JSON and exit",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    settings_path = resolve_settings_path(args.settings)
    settings = load_visual_settings(settings_path)
    debug_config_path = (PACKAGE_DIR.parent / "debug.json").resolve()
    debug_config = load_debug_config(debug_config_path)
    if not DEBUG_CONFIG_ENABLED:
        _CLIENT_LOGGER.debug(
            "debug.json tracing ignored (release mode). Export %s=1 or use a -dev version to enable it.",
            DEV_MODE_ENV_VAR,
        )

    log_dir = resolve_logs_dir(PACKAGE_DIR.parent)
    handler = build_rotating_file_handler(
        log_dir,
        LOG_FILENAME,
        retention=debug_config.log_retention or 5,
    )
    _CLIENT_LOGGER.addHandler(handler)
    try:
        _CLIENT_LOGGER.info("Starting label overlay (pid=%s)", os.getpid())
        _CLIENT_LOGGER.debug("Loaded settings from %s; logs in %s", settings_path, log_dir)
        qt_argv = sys.argv[:1] if argv is not None else sys.argv
        return _run(args, settings, debug_config, qt_argv)
    finally:
        _CLIENT_LOGGER.removeHandler(handler)
        handler.close()


def _run(args: argparse.Namespace, settings: VisualSettings, debug_config: DebugConfig, qt_argv: list[str]) -> int:
    if args.dump_properties:
        print(json.dumps(dump_properties(settings), indent=2, sort_keys=True))
        return 0

    label = args.label if args.label is not None else settings.static.post_text
    value = load_dynamic_value(args.value, args.data_view)

    app = QApplication.instance() or QApplication(qt_argv)
    surface = LabelSurface(settings=settings)
    surface.set_trace_layout(debug_config.trace_layout)
    surface.set_content(label, value)
    surface.resize(max(1, args.width), max(1, args.height))

    if args.dump_layout:
        _, measured, layout, geometry = surface.compute_layout()
        payload = {
            "layout": layout.as_dict(),
            "measured": asdict(measured),
            "box": asdict(geometry),
            "error": surface.error_message,
        }
        print(json.dumps(payload, indent=2, sort_keys=True))
        return 0

    surface.setWindowTitle("Label Overlay")
    surface.show()
    exit_code = app.exec()
    _CLIENT_LOGGER.info("Label overlay exiting with code %s", exit_code)
    return int(exit_code)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
