"""
GolfTrack command-line entry point.

Works against the offline round store and prints shot analytics.

Usage:
    golftrack import rounds.json          # Load rounds exported by the web client
    golftrack export backup.json
    golftrack rounds                      # List stored rounds
    golftrack stats --round <id>          # Summary for one round
    golftrack clubs --hole 7              # Per-club breakdown
    golftrack heatmap --grid 20
    golftrack patterns
    golftrack trends --window month
    golftrack holes
    golftrack locate --preset walking     # Simulated GPS fix
    golftrack locate --lat 40.745 --lng -73.454
    golftrack track --green 40.7465 -73.4540 --updates 3
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from PyQt6.QtCore import QCoreApplication, QTimer

from golftrack.analytics.clubs import analyze_club_performance
from golftrack.analytics.heatmap import generate_heat_map_data
from golftrack.analytics.patterns import (
    analyze_shot_patterns,
    calculate_performance_trends,
    lie_distribution,
)
from golftrack.analytics.stats import (
    calculate_hole_performance,
    calculate_shot_stats,
    filter_shots,
)
from golftrack.database.db import Database
from golftrack.location import (
    PositionError,
    StaticLocationProvider,
    get_current_position,
)
from golftrack.location_poller import LocationPoller
from golftrack.mock_location import DEFAULT_ANCHOR, PRESETS, MockLocationProvider
from golftrack.models.course import Hole
from golftrack.models.shot import Coordinate
from golftrack.utils.config import Config
from golftrack.utils.constants import TREND_WINDOWS_MS


def setup_logging(verbose: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _selected_shots(db: Database, args) -> list:
    """Shots for --round (or every round), narrowed by --club / --hole."""
    if args.round:
        round_ = db.get_round(args.round)
        if round_ is None:
            raise SystemExit(f"❌ No round with id {args.round}")
        shots = round_.shots
    else:
        shots = db.get_all_shots()
    return filter_shots(shots, club=args.club, hole_number=args.hole)


def _rule():
    print("=" * 60)


# =============================================================================
# Commands
# =============================================================================

def cmd_import(args, db: Database, config: Config) -> int:
    try:
        count = db.import_json(Path(args.file))
    except (OSError, ValueError) as e:
        print(f"❌ Import failed: {e}")
        return 1
    print(f"✅ Imported {count} rounds from {args.file}")
    return 0


def cmd_export(args, db: Database, config: Config) -> int:
    count = db.export_json(Path(args.file))
    print(f"✅ Exported {count} rounds to {args.file}")
    return 0


def cmd_rounds(args, db: Database, config: Config) -> int:
    rounds = db.get_rounds()
    if not rounds:
        print("No rounds stored.")
        return 0
    for r in rounds:
        score = f"{r.total_score} ({r.to_par_label})" if r.holes_completed else "-"
        print(f"  {r.id}  {r.date:%Y-%m-%d}  {r.course_name:<30} "
              f"shots={len(r.shots):<4} score={score}")
    used, quota = db.storage_usage()
    print(f"\n  Storage: {used / 1024:.1f} KB of {quota / 1024 / 1024:.0f} MB")
    return 0


def cmd_stats(args, db: Database, config: Config) -> int:
    stats = calculate_shot_stats(_selected_shots(db, args))
    _rule()
    print(f"  Total Shots:     {stats.total_shots}")
    print(f"  Avg Distance:    {stats.average_distance} yds")
    print(f"  Accuracy:        {stats.accuracy}%")
    print(f"  Most Used Club:  {stats.most_used_club or '-'}")
    print(f"  Best Hole:       {stats.best_hole or '-'}")
    print(f"  Worst Hole:      {stats.worst_hole or '-'}")
    _rule()
    return 0


def cmd_clubs(args, db: Database, config: Config) -> int:
    performance = analyze_club_performance(_selected_shots(db, args))
    if not performance:
        print("No shots recorded.")
        return 0
    print(f"  {'Club':<10} {'Used':>5} {'Avg':>5} {'Min':>5} {'Max':>5} "
          f"{'Acc%':>5} {'Cons':>5}")
    for p in performance:
        print(f"  {p.club:<10} {p.usage:>5} {p.avg_distance:>5} "
              f"{p.min_distance:>5} {p.max_distance:>5} "
              f"{p.accuracy:>5} {p.consistency:>5}")
    return 0


def cmd_heatmap(args, db: Database, config: Config) -> int:
    grid = args.grid if args.grid is not None else config.get("heat_map_grid_size")
    try:
        points = generate_heat_map_data(_selected_shots(db, args), grid)
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 1
    for p in points:
        print(f"  {p.coordinates.latitude:.6f}, {p.coordinates.longitude:.6f}  "
              f"shots={p.shot_count:<3} avg={p.average_distance} yds")
    print(f"\n  {len(points)} cells (grid {grid}x{grid})")
    return 0


def cmd_patterns(args, db: Database, config: Config) -> int:
    shots = _selected_shots(db, args)
    patterns = analyze_shot_patterns(shots)
    print("  Lies:")
    for share in lie_distribution(shots):
        clubs = patterns.club_distribution_by_lie[share.lie]
        club_text = ", ".join(f"{c} x{n}" for c, n in clubs.items())
        print(f"    {share.lie:<8} {share.count:>4} ({share.percentage}%)  {club_text}")
    ranges = patterns.distance_ranges
    print(f"  Distances: short={ranges['short']} "
          f"medium={ranges['medium']} long={ranges['long']}")
    return 0


def cmd_trends(args, db: Database, config: Config) -> int:
    window = args.window or config.get("trend_window")
    try:
        trends = calculate_performance_trends(_selected_shots(db, args), window)
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 1
    _rule()
    print(f"  {'':<14}{'Recent':>8}{'Previous':>10}{'Change':>8}")
    print(f"  {'Shots':<14}{trends.recent.total_shots:>8}"
          f"{trends.previous.total_shots:>10}{trends.shots_change:>+8}")
    print(f"  {'Accuracy %':<14}{trends.recent.accuracy:>8}"
          f"{trends.previous.accuracy:>10}{trends.accuracy_change:>+8}")
    print(f"  {'Avg Distance':<14}{trends.recent.average_distance:>8}"
          f"{trends.previous.average_distance:>10}{trends.distance_change:>+8}")
    _rule()
    return 0


def cmd_holes(args, db: Database, config: Config) -> int:
    rounds = [db.get_round(args.round)] if args.round else db.get_rounds()
    rounds = [r for r in rounds if r is not None]

    # Par comes from the scorecards
    pars = {}
    for r in rounds:
        for entry in r.scores:
            pars.setdefault(entry.hole_number, entry)
    shots = filter_shots(
        [s for r in rounds for s in r.shots], club=args.club, hole_number=args.hole
    )
    for perf in calculate_hole_performance(shots, pars.values()):
        print(f"  Hole {perf.hole_number:>2} (par {perf.par})  "
              f"avg={perf.avg_shots}  best={perf.best_score}  "
              f"worst={perf.worst_score}  played={perf.played_count}")
    return 0


def cmd_locate(args, db: Database, config: Config) -> int:
    if args.lat is not None and args.lng is not None:
        provider = StaticLocationProvider(Coordinate(args.lat, args.lng))
    else:
        provider = MockLocationProvider(
            preset=args.preset or config.get("mock_preset")
        )

    try:
        position = asyncio.run(get_current_position(
            provider,
            timeout_ms=args.timeout or config.get("location_timeout_ms"),
            maximum_age_ms=config.get("location_maximum_age_ms"),
        ))
    except PositionError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"📍 {position.latitude:.6f}, {position.longitude:.6f}")
    return 0


def create_poller(args, config: Config) -> LocationPoller:
    """Build the location poller for `track` from the command line."""
    tee = Coordinate(*args.tee) if args.tee else None
    if args.lat is not None and args.lng is not None:
        provider = StaticLocationProvider(Coordinate(args.lat, args.lng))
    else:
        provider = MockLocationProvider(
            anchor=tee or DEFAULT_ANCHOR,
            preset=args.preset or config.get("mock_preset"),
        )

    hole = None
    if args.green:
        green = Coordinate(*args.green)
        hole = Hole(args.hole, args.par, tee or green, green)

    return LocationPoller(
        provider,
        hole=hole,
        interval_s=args.interval or config.get("refresh_interval_s"),
        maximum_age_ms=config.get("refresh_maximum_age_ms"),
        timeout_ms=config.get("location_timeout_ms"),
    )


def connect_poller_output(poller: LocationPoller, max_updates=None, on_done=None):
    """Print poller signals; call on_done after max_updates positions."""
    update_count = [0]

    def on_position(position):
        update_count[0] += 1
        print(f"📍 {position.latitude:.6f}, {position.longitude:.6f}")
        if max_updates and update_count[0] >= max_updates and on_done:
            on_done()

    def on_pin_distance(yards):
        print(f"   ⛳ {yards} yds to pin")

    def on_error(msg):
        print(f"❌ Error: {msg}")

    poller.position_updated.connect(on_position)
    poller.pin_distance_updated.connect(on_pin_distance)
    poller.error_occurred.connect(on_error)
    return update_count


def cmd_track(args, db: Database, config: Config) -> int:
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    poller = create_poller(args, config)

    def shutdown():
        poller.stop()
        poller.wait(3000)
        app.quit()

    connect_poller_output(poller, args.updates, shutdown)
    poller.started_polling.connect(
        lambda: print(f"✅ Tracking position every {poller.interval_s}s "
                      f"(Ctrl+C to quit)\n")
    )

    # Handle Ctrl+C gracefully
    def signal_handler(sig, frame):
        print("\n\nShutting down...")
        shutdown()

    signal.signal(signal.SIGINT, signal_handler)
    poller.start()

    # Keep the event loop ticking so SIGINT is noticed
    timer = QTimer()
    timer.timeout.connect(lambda: None)
    timer.start(100)

    app.exec()
    return 0


COMMANDS = {
    "import": cmd_import,
    "export": cmd_export,
    "rounds": cmd_rounds,
    "stats": cmd_stats,
    "clubs": cmd_clubs,
    "heatmap": cmd_heatmap,
    "patterns": cmd_patterns,
    "trends": cmd_trends,
    "holes": cmd_holes,
    "locate": cmd_locate,
    "track": cmd_track,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="golftrack",
        description="GolfTrack shot tracking and analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db", type=Path, default=None,
        help="Database file (default: ~/.golftrack/golftrack.db)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("import", help="Import rounds from a JSON file")
    p.add_argument("file")
    p = sub.add_parser("export", help="Export all rounds to a JSON file")
    p.add_argument("file")
    sub.add_parser("rounds", help="List stored rounds")

    # Analytics commands share the shot filters
    filters = argparse.ArgumentParser(add_help=False)
    filters.add_argument("--round", type=str, default=None,
                         help="Only shots from this round id")
    filters.add_argument("--club", type=str, default=None,
                         help="Only shots with this club")
    filters.add_argument("--hole", type=int, default=None,
                         help="Only shots on this hole")

    sub.add_parser("stats", parents=[filters], help="Shot statistics")
    sub.add_parser("clubs", parents=[filters], help="Club performance")
    p = sub.add_parser("heatmap", parents=[filters], help="Shot heat map cells")
    p.add_argument("--grid", type=int, default=None,
                   help="Grid size per axis (default: 50)")
    sub.add_parser("patterns", parents=[filters], help="Lie and distance patterns")
    p = sub.add_parser("trends", parents=[filters], help="Recent vs previous window")
    p.add_argument("--window", choices=list(TREND_WINDOWS_MS), default=None,
                   help="Comparison window (default: week)")
    sub.add_parser("holes", parents=[filters], help="Strokes per hole")

    p = sub.add_parser("locate", help="Get a position fix")
    p.add_argument("--preset", choices=list(PRESETS), default=None,
                   help="Mock GPS preset (default: good_signal)")
    p.add_argument("--lat", type=float, default=None)
    p.add_argument("--lng", type=float, default=None)
    p.add_argument("--timeout", type=int, default=None,
                   help="Timeout in milliseconds (default: 15000)")
    p = sub.add_parser("track", help="Follow position and distance to the pin")
    p.add_argument("--hole", type=int, default=1, help="Hole number (default: 1)")
    p.add_argument("--par", type=int, default=4, help="Hole par (default: 4)")
    p.add_argument("--green", type=float, nargs=2, metavar=("LAT", "LNG"),
                   default=None, help="Green position; enables pin distance")
    p.add_argument("--tee", type=float, nargs=2, metavar=("LAT", "LNG"),
                   default=None, help="Tee position (default: the green)")
    p.add_argument("--preset", choices=list(PRESETS), default=None,
                   help="Mock GPS preset (default: good_signal)")
    p.add_argument("--lat", type=float, default=None)
    p.add_argument("--lng", type=float, default=None)
    p.add_argument("--interval", type=float, default=None,
                   help="Seconds between updates (default: 30)")
    p.add_argument("--updates", type=int, default=None,
                   help="Stop after this many positions")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    config = Config.instance()
    db = Database(args.db, config)
    try:
        return COMMANDS[args.command](args, db, config)
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
