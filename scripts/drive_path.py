"""Build a curve from a waypoint file and drive a follower along it, printing CSV poses.

Usage:
  uv run python scripts/drive_path.py waypoints.json
  uv run python scripts/drive_path.py waypoints.json --loop --seconds 30 --speed 5
  uv run python scripts/drive_path.py waypoints.json --lane-step 2.0:+1 --lane-step 4.0:-1

``--lane-step T:S`` requests a lane step ``S`` (+1 right / -1 left) at time ``T``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from trackpath.config import TrackPathSettings  # noqa: E402
from trackpath.curve.bezier import BezierSplineCurve  # noqa: E402
from trackpath.track.builder import TrackPathBuilder  # noqa: E402
from trackpath.track.errors import TrackPathError  # noqa: E402
from trackpath.track.waypoints import load_waypoints  # noqa: E402
from trackpath.traversal.engine import TraversalEngine  # noqa: E402
from trackpath.traversal.follower import PathFollower  # noqa: E402


def _parse_lane_step(text: str) -> tuple[float, int]:
    when, _, step = text.partition(":")
    try:
        return float(when), int(step)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected T:S, got {text!r}") from exc


def main() -> None:
    ap = argparse.ArgumentParser(description="Drive a follower along a waypoint path")
    ap.add_argument("waypoints", help="JSON waypoint file")
    ap.add_argument("--open", action="store_true", help="Open path instead of a loop")
    ap.add_argument("--loop", action="store_true", help="Wrap at the end of the path")
    ap.add_argument("--speed", type=float, default=None, help="Units per second")
    ap.add_argument("--seconds", type=float, default=20.0, help="Simulated duration")
    ap.add_argument("--hz", type=float, default=60.0, help="Tick rate")
    ap.add_argument("--every", type=int, default=6, help="Print every N-th tick")
    ap.add_argument("--lane-step", type=_parse_lane_step, action="append", default=[])
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = TrackPathSettings.from_env()
    curve = BezierSplineCurve()
    builder = TrackPathBuilder(settings.make_orderer(), settings.make_fitter(), curve)
    try:
        builder.build(load_waypoints(args.waypoints), closed=not args.open)
    except TrackPathError as exc:
        print(f"  [!] Build failed: {exc}", file=sys.stderr)
        sys.exit(1)

    lanes = settings.make_lanes()
    follower = PathFollower(
        curve,
        speed=args.speed if args.speed is not None else settings.forward_speed,
        loop=args.loop,
        height_offset=settings.height_offset,
        samples=settings.samples,
        on_finish=lambda: print("# finished", file=sys.stderr),
    )
    engine = TraversalEngine(follower, lanes)

    dt = 1.0 / args.hz
    pending = sorted(args.lane_step)
    ticks = int(args.seconds * args.hz)

    print("time,x,y,z,distance,lane,offset")
    for i in range(ticks):
        now = i * dt
        while pending and pending[0][0] <= now:
            lanes.step(pending.pop(0)[1])
        pose = engine.tick(dt)
        if pose is None:
            break
        if i % args.every == 0:
            p = pose.position
            print(
                f"{now:.3f},{p.x:.4f},{p.y:.4f},{p.z:.4f},"
                f"{pose.distance:.4f},{lanes.current_index},{pose.lateral_offset:.4f}"
            )


if __name__ == "__main__":
    main()
