"""Orbit camera driven by dragging with the left mouse button."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

SENSITIVITY = 0.5
ELEVATION_LIMIT = 89.0


@dataclass
class OrbitControl:
    """Azimuth and elevation in degrees, changed by mouse drags."""

    azimuth: float = 0.0
    elevation: float = 20.0
    dragging: bool = False
    _last: tuple[int, int] = field(default=(0, 0), init=False, repr=False)

    def press(self, x, y) -> None:
        """Start a drag at the given window position."""
        self.dragging = True
        self._last = (x, y)

    def release(self) -> None:
        """End the current drag."""
        self.dragging = False

    def motion(self, x, y) -> bool:
        """Follow the pointer while dragging; returns True when the view changed."""
        if not self.dragging:
            return False
        last_x, last_y = self._last
        self.azimuth += (x - last_x) * SENSITIVITY
        self.elevation += (y - last_y) * SENSITIVITY
        self.elevation = max(-ELEVATION_LIMIT, min(ELEVATION_LIMIT, self.elevation))
        self._last = (x, y)
        return True

    def eye(self, radius) -> tuple[float, float, float]:
        """Point on a sphere of the given radius seen from the current angles."""
        az = math.radians(self.azimuth)
        el = math.radians(self.elevation)
        return (
            radius * math.cos(el) * math.sin(az),
            radius * math.sin(el),
            radius * math.cos(el) * math.cos(az),
        )