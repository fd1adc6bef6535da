from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .core.controller import InteractionController
from .core.location import StaticLocationProvider
from .core.validator import FormInput
from .errors import PersistenceError
from .frontend.map_display import FigureMapDisplay
from .frontend.view_projection import list_entry_content
from .frontend.workout_list import format_value
from .storage.data_models import WorkoutType
from .storage.export import export_workouts_csv, summarize_by_type
from .storage.kv_store import JsonFileStore
from .storage.workout_store import WorkoutStore
from .utils.config import WorkoutMapperConfig, get_config


def _open_store(config: WorkoutMapperConfig) -> WorkoutStore:
    return WorkoutStore(JsonFileStore(config.snapshot_path), key=config.storage.snapshot_key)


def _load_store(config: WorkoutMapperConfig) -> WorkoutStore:
    store = _open_store(config)
    store.load()
    return store


def cmd_serve(args: argparse.Namespace, config: WorkoutMapperConfig) -> int:
    from .app import create_app

    if args.host:
        config.update_server_settings(host=args.host)
    if args.port:
        config.update_server_settings(port=args.port)
    if args.debug:
        config.update_server_settings(debug=True)

    app = create_app(config)
    print(f"Serving workouts from {config.snapshot_path} on http://{config.server.host}:{config.server.port}")
    app.run(debug=config.server.debug, host=config.server.host, port=config.server.port)
    return 0


def cmd_add(args: argparse.Namespace, config: WorkoutMapperConfig) -> int:
    errors: List[str] = []
    coordinates = (args.lat, args.lng)
    controller = InteractionController(
        _open_store(config),
        FigureMapDisplay(config.map),
        StaticLocationProvider(coordinates),
        notify=errors.append,
        zoom=config.map.zoom,
    )
    controller.start()
    if errors:
        # Do not overwrite a snapshot that could not be read
        print(f"Error: {errors[0]}", file=sys.stderr)
        return 1
    controller.capture_location(coordinates)
    workout = controller.submit(FormInput(
        workout_type=args.type,
        distance=args.distance,
        duration=args.duration,
        cadence=args.cadence,
        elevation=args.elevation,
    ))
    for message in errors:
        print(f"Error: {message}", file=sys.stderr)
    if workout is None:
        return 1
    print(f"Added {workout.description} (id {workout.id}), {controller.store.size()} workouts stored")
    return 1 if errors else 0


def cmd_list(args: argparse.Namespace, config: WorkoutMapperConfig) -> int:
    store = _load_store(config)
    if not store.size():
        print("No workouts stored.")
        return 0
    for workout in store.all():
        entry = list_entry_content(workout)
        fields = ", ".join(f"{format_value(f.value)} {f.unit}" for f in entry.fields)
        lat, lng = workout.coordinates
        print(f"{entry.icon} [{entry.workout_id}] {entry.description} @ ({lat:.5f}, {lng:.5f}): {fields}")
    return 0


def cmd_export(args: argparse.Namespace, config: WorkoutMapperConfig) -> int:
    store = _load_store(config)
    count = export_workouts_csv(store, args.output)
    print(f"Wrote {count} workouts to {args.output}")
    return 0


def cmd_summary(args: argparse.Namespace, config: WorkoutMapperConfig) -> int:
    store = _load_store(config)
    summary = summarize_by_type(store)
    if summary.empty:
        print("No workouts stored.")
        return 0
    print(summary.round(1).to_string(index=False))
    return 0


def cmd_reset(args: argparse.Namespace, config: WorkoutMapperConfig) -> int:
    if not args.yes:
        print("Refusing to delete all workouts without --yes", file=sys.stderr)
        return 2
    _open_store(config).reset()
    print(f"Removed all workouts from {config.snapshot_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Log running and cycling workouts on a map")
    parser.add_argument("--data-dir", help="Directory holding the workout snapshot (default: from config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the map web app")
    p_serve.add_argument("--host", help="Interface to bind")
    p_serve.add_argument("--port", type=int, help="Port to listen on")
    p_serve.add_argument("--debug", action="store_true", help="Run Dash in debug mode")
    p_serve.set_defaults(func=cmd_serve)

    p_add = sub.add_parser("add", help="Log a workout at the given coordinates")
    p_add.add_argument("--type", choices=[t.value for t in WorkoutType], required=True)
    p_add.add_argument("--lat", type=float, required=True, help="Latitude")
    p_add.add_argument("--lng", type=float, required=True, help="Longitude")
    p_add.add_argument("--distance", required=True, help="Distance in km")
    p_add.add_argument("--duration", required=True, help="Duration in minutes")
    p_add.add_argument("--cadence", default="", help="Cadence in steps/min (running)")
    p_add.add_argument("--elevation", default="", help="Elevation gain in meters (cycling)")
    p_add.set_defaults(func=cmd_add)

    p_list = sub.add_parser("list", help="List stored workouts in creation order")
    p_list.set_defaults(func=cmd_list)

    p_export = sub.add_parser("export", help="Export workouts to CSV")
    p_export.add_argument("--output", "-o", default="workouts.csv", help="CSV file to write")
    p_export.set_defaults(func=cmd_export)

    p_summary = sub.add_parser("summary", help="Totals per workout type")
    p_summary.set_defaults(func=cmd_summary)

    p_reset = sub.add_parser("reset", help="Delete every stored workout")
    p_reset.add_argument("--yes", action="store_true", help="Confirm deletion")
    p_reset.set_defaults(func=cmd_reset)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = get_config()
    if args.data_dir:
        config.update_storage_settings(data_dir=args.data_dir)

    try:
        return args.func(args, config)
    except PersistenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
