import math

import pytest

from pilotihouse.house import (
    Box,
    Mesh,
    Piloti,
    create_fence_back,
    create_fence_front,
    create_fence_left,
    create_fence_right,
    create_first_floor,
    create_piloti_list,
    create_second_floor,
    create_window_back,
    create_window_front,
    create_window_right,
)


def _extent(box):
    vertices = [v for face in box.faces() for _, v in face]
    return [
        (min(v[axis] for v in vertices), max(v[axis] for v in vertices))
        for axis in range(3)
    ]


def test_box_has_six_quads():
    faces = Box((0.0, 0.0, 0.0), 2.0, 4.0, 6.0).faces()
    assert len(faces) == 6
    assert all(len(face) == 4 for face in faces)


def test_box_extent_matches_size():
    box = Box((1.0, 2.0, 3.0), 2.0, 4.0, 6.0)
    assert _extent(box) == [(0.0, 2.0), (0.0, 4.0), (0.0, 6.0)]


def test_rotated_box_swaps_footprint():
    plain = Box((0.0, 0.0, 0.0), 2.0, 1.0, 6.0)
    turned = Box((0.0, 0.0, 0.0), 2.0, 1.0, 6.0, rotate90=True)
    (px, py, pz) = _extent(plain)
    (tx, ty, tz) = _extent(turned)
    assert tx == pytest.approx(pz)
    assert tz == pytest.approx(px)
    assert ty == py


def test_front_face_uses_repeat_coordinates():
    box = Box((0.0, 0.0, 0.0), 3.0, 1.0, 1.0, repeat_u=3.0, repeat_v=1.0)
    front, _, right, *_ = box.faces()
    assert [uv for uv, _ in front] == [(0.0, 0.0), (3.0, 0.0), (3.0, 1.0), (0.0, 1.0)]
    assert [uv for uv, _ in right] == [(0.0, 0.0), (1.0, 0.0), (1.0, 3.0), (0.0, 3.0)]


def test_box_mesh_flattens_faces():
    box = create_first_floor()
    mesh = box.mesh()
    assert isinstance(mesh, Mesh)
    assert mesh.mode == "quads"
    assert len(mesh.vertices) == len(mesh.tex_coords) == 24
    assert mesh.vertices == [v for face in box.faces() for _, v in face]
    assert mesh.texture == "resources/Concrete.ppm"


def test_piloti_list_layout():
    pilotis = create_piloti_list()
    assert len(pilotis) == 4
    assert {p.x for p in pilotis} == {-2.0}
    zs = [p.z for p in pilotis]
    assert zs == sorted(zs)
    assert zs[0] == -2.0
    gaps = [b - a for a, b in zip(zs, zs[1:])]
    assert all(g == pytest.approx(1.3) for g in gaps)
    assert all(p.texture == "resources/Concrete.ppm" for p in pilotis)


@pytest.mark.parametrize("slices", [4, 32])
def test_piloti_mesh_is_closed_cylinder(slices):
    column = Piloti(1.0, -1.0, 2.0, 0.5, None)
    mesh = column.mesh(slices)
    assert mesh.mode == "quad_strip"
    assert len(mesh.vertices) == 2 * (slices + 1)
    for x, y, z in mesh.vertices:
        assert math.hypot(x - 1.0, z + 1.0) == pytest.approx(0.5)
        assert y in (0.0, 2.0)
    assert mesh.vertices[0] == pytest.approx(mesh.vertices[-2])
    assert mesh.tex_coords[-1] == (1.0, 1.0)


def test_first_floor_sits_on_ground_with_piloti_height():
    floor = create_first_floor()
    pilotis = create_piloti_list()
    (_, (ymin, ymax), _) = _extent(floor)
    assert ymin == pytest.approx(0.0)
    assert ymax == pytest.approx(pilotis[0].height)


def test_second_floor_stacks_on_first():
    first = _extent(create_first_floor())
    second = _extent(create_second_floor())
    assert second[1][0] == pytest.approx(first[1][1])
    assert create_second_floor().depth == pytest.approx(create_first_floor().depth)


def test_windows_match_source_placement():
    front = create_window_front()
    back = create_window_back()
    right = create_window_right()
    assert front.center[1] == back.center[1] == 1.5
    assert front.width == back.width == 4.2
    assert front.center[2] > 0 > back.center[2]
    assert right.rotate90 and not front.rotate90
    assert {w.texture for w in (front, back, right)} == {"resources/Window.ppm"}


def test_fences_enclose_yard_symmetrically():
    back, front = create_fence_back(), create_fence_front()
    left, right = create_fence_left(), create_fence_right()
    assert back.center[2] == -front.center[2]
    assert left.center[0] == -right.center[0]
    assert left.rotate90 and right.rotate90
    assert not back.rotate90 and not front.rotate90
    assert back.center[1] == pytest.approx(back.height / 2)
    for fence in (back, front, left, right):
        assert fence.tiled
        assert fence.repeat_u == fence.width
        assert fence.texture == "resources/Fence.ppm"


def test_fence_corners_meet():
    back = _extent(create_fence_back())
    right = _extent(create_fence_right())
    assert back[0][1] == pytest.approx(right[0][1])
    assert right[2][1] == pytest.approx(back[2][1])