"""Height-field ground plane with small random bumps."""

from __future__ import annotations

import random
from collections.abc import Iterator

from .house import Mesh, Vec2, Vec3

TERRAIN_TEXTURE = "resources/Terrain.ppm"

_HEIGHT_SCALE = 0.1


class Terrain:
    """A rows x cols grid of heights spaced ``size`` apart, centred on the origin."""

    def __init__(self, rows, cols, size, rng=None, texture=None) -> None:
        if rows < 1 or cols < 1:
            raise ValueError("terrain needs at least one row and one column")
        self.rows = rows
        self.cols = cols
        self.size = size
        self.texture = texture
        rng = rng if rng is not None else random.Random()
        self.heights = tuple(
            (rng.random() - 0.5) * _HEIGHT_SCALE for _ in range(rows * cols)
        )

    def height_at(self, row, col) -> float:
        """Height of the grid point at the given row and column."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"grid point ({row}, {col}) is outside the terrain")
        return self.heights[row * self.cols + col]

    def strips(self) -> Iterator[Mesh]:
        """One triangle strip per pair of neighbouring rows."""
        du = 1.0 / (self.cols - 1) if self.cols > 1 else 0.0
        dv = 1.0 / (self.rows - 1) if self.rows > 1 else 0.0
        half_rows = self.rows // 2
        half_cols = self.cols // 2
        for r in range(self.rows - 1):
            z0 = (r - half_rows) * self.size
            z1 = (r + 1 - half_rows) * self.size
            vertices: list[Vec3] = []
            tex_coords: list[Vec2] = []
            for c in range(self.cols):
                x = (c - half_cols) * self.size
                u = c * du
                tex_coords += [(u, r * dv), (u, (r + 1) * dv)]
                vertices += [
                    (x, self.height_at(r, c), z0),
                    (x, self.height_at(r + 1, c), z1),
                ]
            yield Mesh("triangle_strip", vertices, tex_coords, self.texture, False)


def create_default_terrain(rng=None) -> Terrain:
    """The 100 x 100 ground used by the scene, 0.2 units between points."""
    return Terrain(100, 100, 0.2, rng=rng, texture=TERRAIN_TEXTURE)