"""Build a curve from a waypoint file and print the ordering, knots and diagnostics.

Usage:
  uv run python scripts/build_path.py waypoints.json
  uv run python scripts/build_path.py waypoints.json --open --max-link 20 --passes 4
  uv run python scripts/build_path.py waypoints.json --guard-policy abort

The waypoint file is a JSON list of ``[x, y, z]`` triples or ``{"x", "y", "z"}``
objects. Defaults come from ``TRACKPATH_*`` environment variables (``.env``).
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from dotenv import load_dotenv

load_dotenv()

from trackpath.config import TrackPathSettings  # noqa: E402
from trackpath.curve.bezier import BezierSplineCurve  # noqa: E402
from trackpath.track.builder import TrackPathBuilder  # noqa: E402
from trackpath.track.errors import TrackPathError  # noqa: E402
from trackpath.track.vector import Vec3  # noqa: E402
from trackpath.track.waypoints import load_waypoints  # noqa: E402
from trackpath.traversal.arc_length import ArcLengthTable  # noqa: E402


def _fmt(v: Vec3) -> str:
    return f"({v.x:9.3f}, {v.y:9.3f}, {v.z:9.3f})"


def main() -> None:
    ap = argparse.ArgumentParser(description="Build a curve from unordered waypoints")
    ap.add_argument("waypoints", help="JSON waypoint file")
    ap.add_argument("--open", action="store_true", help="Build an open path instead of a loop")
    ap.add_argument("--max-link", type=float, default=None, help="Maximum link distance")
    ap.add_argument("--bias", type=float, default=None, help="Direction bias [0, 1]")
    ap.add_argument("--passes", type=int, default=None, help="2-opt refinement passes")
    ap.add_argument("--tightness", type=float, default=None, help="Handle tightness [0, 1]")
    ap.add_argument("--guard-policy", choices=["warn", "abort"], default=None)
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = TrackPathSettings.from_env()
    overrides = {
        "max_link_distance": args.max_link,
        "direction_bias": args.bias,
        "refinement_passes": args.passes,
        "handle_tightness": args.tightness,
        "guard_policy": args.guard_policy,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    points = load_waypoints(args.waypoints)
    print(f"Waypoints : {len(points)}  ({'open' if args.open else 'closed'})")

    curve = BezierSplineCurve()
    builder = TrackPathBuilder(settings.make_orderer(), settings.make_fitter(), curve)
    try:
        result = builder.build(points, closed=not args.open)
    except TrackPathError as exc:
        print(f"  [!] Build failed: {exc}", file=sys.stderr)
        sys.exit(1)

    print("\nOrder:")
    for i, p in enumerate(result.path.points):
        print(f"  {i:3d} {_fmt(p)}")

    print("\nKnots (position / tangent_out):")
    for i, k in enumerate(result.knots):
        print(f"  {i:3d} {_fmt(k.position)} {_fmt(k.tangent_out)}")

    table = ArcLengthTable.build(curve, settings.samples)
    print(f"\nPolyline edge length : {result.path.total_length():.3f}")
    print(f"Curve length         : {table.total_length:.3f}  ({settings.samples} samples)")

    if result.diagnostics:
        print("\nDiagnostics:")
        for d in result.diagnostics:
            print(f"  [{d.code.value}] {d.message}")
    print("\n[OK] done")


if __name__ == "__main__":
    main()
