"""
Command line interface.

    posio dump mission.pof --accuracy mission.poq --limit 10
    posio interpolate trajectory.sbet --time 151631.0 --time 151631.5
    posio interpolate track.pos --start 0 --stop 60 --step 0.5

Rows are printed whitespace-separated with angles in degrees:

    time latitude longitude altitude roll pitch yaw [x y z pdop]
"""

import argparse
import logging
import sys
from contextlib import ExitStack
from itertools import islice
from typing import Iterable, List, Optional

import numpy as np

from posio.config import PRESETS, StreamConfig
from posio.errors import PosError
from posio.formats import open_accuracy_source, open_source
from posio.interpolate import Interpolator
from posio.point import Point
from posio.source import CombinedSource, Source

logger = logging.getLogger(__name__)

HEADER = ("time", "latitude", "longitude", "altitude", "roll", "pitch", "yaw")
ACCURACY_HEADER = ("x", "y", "z", "pdop")


def format_point(point: Point) -> str:
    """Format one point as a whitespace-separated row."""
    values = [
        f"{point.time:.6f}",
        f"{point.latitude.to_degrees():.9f}",
        f"{point.longitude.to_degrees():.9f}",
        f"{point.altitude:.4f}",
        f"{point.roll.to_degrees():.6f}",
        f"{point.pitch.to_degrees():.6f}",
        f"{point.yaw.to_degrees():.6f}",
    ]
    if point.accuracy is not None:
        accuracy = point.accuracy
        values += [
            f"{accuracy.x:.4f}",
            f"{accuracy.y:.4f}",
            f"{accuracy.z:.4f}",
            f"{accuracy.pdop:.3f}",
        ]
    return " ".join(values)


def _load_config(args: argparse.Namespace) -> StreamConfig:
    if args.config:
        return StreamConfig.from_json(args.config)
    if args.preset:
        return StreamConfig.from_preset(args.preset)
    return StreamConfig()


def _open(args: argparse.Namespace, config: StreamConfig) -> Source:
    with ExitStack() as stack:
        source = stack.enter_context(
            open_source(args.points, format=args.format, config=config)
        )
        if args.accuracy is not None:
            accuracy_source = stack.enter_context(
                open_accuracy_source(args.accuracy, config=config)
            )
            source = CombinedSource(
                source, accuracy_source, time_order=config.time_order
            )
        # keep the files open for the caller
        stack.pop_all()
    return source


def _print_rows(points: Iterable[Point], with_accuracy: bool) -> int:
    header = HEADER + (ACCURACY_HEADER if with_accuracy else ())
    print("# " + " ".join(header))
    count = 0
    for point in points:
        print(format_point(point))
        count += 1
    return count


def _query_times(args: argparse.Namespace) -> List[float]:
    if args.time:
        return list(args.time)
    if args.start is None or args.stop is None or args.step is None:
        raise ValueError("Give --time, or all of --start, --stop and --step")
    if args.step <= 0:
        raise ValueError(f"--step must be positive, got {args.step}")
    # stop is inclusive
    count = int(np.floor((args.stop - args.start) / args.step + 1e-9)) + 1
    return [float(t) for t in args.start + args.step * np.arange(max(count, 0))]


def cmd_dump(args: argparse.Namespace) -> int:
    """Print every point of a file, optionally with accuracy."""
    config = _load_config(args)
    with _open(args, config) as source:
        points: Iterable[Point] = source
        if args.limit is not None:
            points = islice(points, args.limit)
        count = _print_rows(points, args.accuracy is not None)
    logger.info("Printed %d points", count)
    return 0


def cmd_interpolate(args: argparse.Namespace) -> int:
    """Print points interpolated at the requested times."""
    config = _load_config(args)
    times = _query_times(args)
    source = _open(args, config)
    try:
        interpolator = Interpolator(source, time_order=config.time_order)
    except BaseException:
        source.close()
        raise
    with interpolator:
        points = (interpolator.interpolate(time) for time in times)
        count = _print_rows(points, args.accuracy is not None)
    logger.info("Interpolated %d points", count)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="posio",
        description="Read and interpolate IMU/GNSS position files",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("points", help="Point file (.pos, .sbet, .out, .pof)")
    common.add_argument(
        "--accuracy", default=None, help="Accuracy file (.poq) to merge"
    )
    common.add_argument(
        "--format",
        choices=["pos", "sbet", "pof"],
        default=None,
        help="Point file format (default: from suffix)",
    )
    group = common.add_mutually_exclusive_group()
    group.add_argument("--config", default=None, help="JSON configuration file")
    group.add_argument(
        "--preset", choices=sorted(PRESETS), default=None, help="Named configuration"
    )

    dump = subparsers.add_parser("dump", parents=[common], help="Print all points")
    dump.add_argument("--limit", type=int, default=None, help="Maximum rows")
    dump.set_defaults(func=cmd_dump)

    interp = subparsers.add_parser(
        "interpolate", parents=[common], help="Print points at given times"
    )
    interp.add_argument(
        "--time", type=float, action="append", default=None, help="Query time (repeatable)"
    )
    interp.add_argument("--start", type=float, default=None, help="First query time")
    interp.add_argument("--stop", type=float, default=None, help="Last query time")
    interp.add_argument("--step", type=float, default=None, help="Query time step")
    interp.set_defaults(func=cmd_interpolate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (PosError, ValueError, OSError) as exc:
        print(f"posio: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
