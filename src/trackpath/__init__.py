"""Build drivable paths from waypoint markers and traverse them at uniform speed."""

__version__ = "0.1.0"
