"""Geometry of the piloti house: columns, floors, windows and the surrounding fence."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]

CONCRETE_TEXTURE = "resources/Concrete.ppm"
WINDOW_TEXTURE = "resources/Window.ppm"
FENCE_TEXTURE = "resources/Fence.ppm"

_START = -2.0
_GAP = 1.3
_STOREY_HEIGHT = 1.0
_PILOTI_RADIUS = 0.25

_FENCE_HEIGHT = 0.8
_FENCE_DEPTH = 0.3
_YARD_WIDTH = 16.0
_YARD_DEPTH = 12.0

_WINDOW_DEPTH = 0.08


@dataclass
class Mesh:
    """Textured primitive data in world coordinates, ready for drawing."""

    mode: str
    vertices: list[Vec3] = field(default_factory=list)
    tex_coords: list[Vec2] = field(default_factory=list)
    texture: str | None = None
    tiled: bool = False


@dataclass(frozen=True)
class Box:
    """Axis-aligned textured box, optionally turned 90 degrees about the Y axis."""

    center: Vec3
    width: float
    height: float
    depth: float
    rotate90: bool = False
    texture: str | None = None
    repeat_u: float = 1.0
    repeat_v: float = 1.0
    tiled: bool = False

    def _to_world(self, local: Vec3) -> Vec3:
        x, y, z = local
        if self.rotate90:
            x, z = z, -x
        cx, cy, cz = self.center
        return (cx + x, cy + y, cz + z)

    def faces(self) -> list[list[tuple[Vec2, Vec3]]]:
        """Six quads (front, back, right, left, top, bottom) of texture/vertex pairs."""
        w, h, d = self.width * 0.5, self.height * 0.5, self.depth * 0.5
        ru, rv = self.repeat_u, self.repeat_v
        face_uv = [(0.0, 0.0), (ru, 0.0), (ru, rv), (0.0, rv)]
        side_uv = [(0.0, 0.0), (rv, 0.0), (rv, ru), (0.0, ru)]
        corners = [
            ([(-w, -h, d), (w, -h, d), (w, h, d), (-w, h, d)], face_uv),
            ([(w, -h, -d), (-w, -h, -d), (-w, h, -d), (w, h, -d)], face_uv),
            ([(w, -h, d), (w, -h, -d), (w, h, -d), (w, h, d)], side_uv),
            ([(-w, -h, -d), (-w, -h, d), (-w, h, d), (-w, h, -d)], side_uv),
            ([(-w, h, d), (w, h, d), (w, h, -d), (-w, h, -d)], face_uv),
            ([(-w, -h, -d), (w, -h, -d), (w, -h, d), (-w, -h, d)], face_uv),
        ]
        return [
            [(uv, self._to_world(vertex)) for uv, vertex in zip(uvs, quad)]
            for quad, uvs in corners
        ]

    def mesh(self) -> Mesh:
        """The box as a list of quads."""
        pairs = [pair for face in self.faces() for pair in face]
        return Mesh(
            mode="quads",
            vertices=[vertex for _, vertex in pairs],
            tex_coords=[uv for uv, _ in pairs],
            texture=self.texture,
            tiled=self.tiled,
        )


@dataclass(frozen=True)
class Piloti:
    """Open cylindrical column standing on the ground plane."""

    x: float
    z: float
    height: float
    radius: float
    texture: str | None = None

    def mesh(self, slices=32) -> Mesh:
        """The column side as a quad strip wrapped once around the texture."""
        vertices: list[Vec3] = []
        tex_coords: list[Vec2] = []
        for i in range(slices + 1):
            u = i / slices
            theta = u * 2.0 * math.pi
            px = self.x + math.cos(theta) * self.radius
            pz = self.z + math.sin(theta) * self.radius
            tex_coords += [(u, 0.0), (u, 1.0)]
            vertices += [(px, 0.0, pz), (px, self.height, pz)]
        return Mesh("quad_strip", vertices, tex_coords, self.texture, False)


def create_piloti_list() -> list[Piloti]:
    """Four columns in a row along Z, spaced by the layout gap."""
    return [
        Piloti(_START, _START + _GAP * i, _STOREY_HEIGHT, _PILOTI_RADIUS, CONCRETE_TEXTURE)
        for i in range(4)
    ]


def create_first_floor() -> Box:
    """Ground storey block sized from the column layout."""
    height = _STOREY_HEIGHT
    return Box(
        center=(_START + _GAP * 2.0, height * 0.5, _START + _GAP * 1.5),
        width=_GAP * 2,
        height=height,
        depth=_GAP * 4,
        texture=CONCRETE_TEXTURE,
    )


def create_second_floor() -> Box:
    """Upper storey block resting on top of the first floor."""
    height = _STOREY_HEIGHT
    return Box(
        center=(_START + _GAP * 1.25, height * 1.5, _START + _GAP * 1.5),
        width=_GAP * 3.5,
        height=height,
        depth=_GAP * 4,
        texture=CONCRETE_TEXTURE,
    )


def create_window_front() -> Box:
    """Glass panel on the +Z face of the second floor."""
    return Box((-0.4, 1.5, 2.0 + 0.5 + 0.04), 4.2, 0.8, _WINDOW_DEPTH,
               texture=WINDOW_TEXTURE)


def create_window_back() -> Box:
    """Glass panel on the -Z face of the second floor."""
    return Box((-0.4, 1.5, -(2.1 + 0.5 + 0.04)), 4.2, 0.8, _WINDOW_DEPTH,
               texture=WINDOW_TEXTURE)


def create_window_right() -> Box:
    """Tall glass panel on the +X side, turned to run along Z."""
    return Box((1.35 + 0.5 + 0.04, 1.0, -0.05), 4.8, 1.8, _WINDOW_DEPTH,
               rotate90=True, texture=WINDOW_TEXTURE)


def _fence(x: float, z: float, length: float, rotate90: bool) -> Box:
    return Box(
        center=(x, _FENCE_HEIGHT * 0.5, z),
        width=length,
        height=_FENCE_HEIGHT,
        depth=_FENCE_DEPTH,
        rotate90=rotate90,
        texture=FENCE_TEXTURE,
        repeat_u=length / 1.0,
        repeat_v=1.0,
        tiled=True,
    )


def create_fence_back() -> Box:
    """Fence along the +Z edge of the yard."""
    return _fence(0.0, _YARD_DEPTH * 0.5, _YARD_WIDTH + _FENCE_DEPTH, False)


def create_fence_front() -> Box:
    """Fence along the -Z edge of the yard."""
    return _fence(0.0, -_YARD_DEPTH * 0.5, _YARD_WIDTH + _FENCE_DEPTH, False)


def create_fence_left() -> Box:
    """Fence along the -X edge of the yard."""
    return _fence(-_YARD_WIDTH * 0.5, 0.0, _YARD_DEPTH + _FENCE_DEPTH, True)


def create_fence_right() -> Box:
    """Fence along the +X edge of the yard."""
    return _fence(_YARD_WIDTH * 0.5, 0.0, _YARD_DEPTH + _FENCE_DEPTH, True)