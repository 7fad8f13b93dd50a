"""Waypoint file loading."""

from __future__ import annotations

import json
from pathlib import Path

from trackpath.track.vector import Vec3


def load_waypoints(path: str | Path) -> list[Vec3]:
    """Read a JSON list of ``[x, y(, z)]`` triples or ``{"x", "y", "z"}`` objects.

    Raises:
        ValueError: If an entry has the wrong number of coordinates or the
            file is not valid JSON.
        KeyError: If an object entry lacks ``x`` or ``y``.
    """
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)
    points = []
    for item in raw:
        if isinstance(item, dict):
            points.append(Vec3(float(item["x"]), float(item["y"]), float(item.get("z", 0.0))))
        else:
            points.append(Vec3.from_sequence(item))
    return points
