"""Two-pass scene rendering: the house goes into an off-screen target shown on a screen quad."""

from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass, field

from .house import (
    Mesh,
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
from .mouse import OrbitControl
from .ppm import PPMError, load_ppm
from .terrain import create_default_terrain

logger = logging.getLogger(__name__)

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
TARGET_SIZE = 512
FIELD_OF_VIEW = 45.0
NEAR_PLANE = 2.0
FAR_PLANE = 20.0
CAMERA_RADIUS = 10.0
CAMERA_LIFT = 5.0
SCENE_CLEAR = (0.4, 0.4, 0.4, 1.0)
SCREEN_CLEAR = (0.0, 0.0, 0.0, 1.0)


def ortho_bounds(aspect) -> tuple[float, float, float, float]:
    """Left, right, bottom and top of the screen projection for an aspect ratio."""
    if aspect >= 1.0:
        return (-aspect, aspect, -1.0, 1.0)
    return (-1.0, 1.0, -1.0 / aspect, 1.0 / aspect)


def screen_quad(aspect) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    """Texture/position pairs of the quad that shows the off-screen image."""
    return [
        ((0.0, 0.0), (-aspect, -1.0)),
        ((1.0, 0.0), (aspect, -1.0)),
        ((1.0, 1.0), (aspect, 1.0)),
        ((0.0, 1.0), (-aspect, 1.0)),
    ]


@dataclass
class SceneState:
    """Window size, display mode and camera control shared by the event handlers."""

    width: int = WINDOW_WIDTH
    height: int = WINDOW_HEIGHT
    depth_mode: bool = False
    orbit: OrbitControl = field(default_factory=OrbitControl)

    @property
    def aspect(self) -> float:
        return self.width / max(self.height, 1)

    def toggle_depth(self) -> bool:
        """Switch between the colour and depth images; returns the new mode."""
        self.depth_mode = not self.depth_mode
        return self.depth_mode

    def reshape(self, width, height) -> None:
        self.width = width
        self.height = height

    def handle_key(self, key) -> bool:
        """React to a typed character; returns True when it changed the view."""
        if key in ("d", "D"):
            self.toggle_depth()
            return True
        return False


def _normalize(v):
    length = math.sqrt(sum(c * c for c in v))
    return tuple(c / length for c in v)


def _cross(a, b):
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def _look_at(eye, target, up) -> list[float]:
    """Column-major view matrix placing the camera at ``eye`` facing ``target``."""
    f = _normalize(tuple(t - e for t, e in zip(target, eye)))
    s = _normalize(_cross(f, up))
    u = _cross(s, f)
    return [
        s[0], u[0], -f[0], 0.0,
        s[1], u[1], -f[1], 0.0,
        s[2], u[2], -f[2], 0.0,
        -_dot(s, eye), -_dot(u, eye), _dot(f, eye), 1.0,
    ]


def _frustum(fovy, aspect, near, far) -> tuple[float, ...]:
    top = near * math.tan(math.radians(fovy) / 2.0)
    right = top * aspect
    return (-right, right, -top, top, near, far)


def _scene_meshes(rng=None) -> list[Mesh]:
    meshes = list(create_default_terrain(rng).strips())
    meshes += [piloti.mesh() for piloti in create_piloti_list()]
    boxes = (
        create_first_floor(),
        create_second_floor(),
        create_fence_back(),
        create_fence_left(),
        create_fence_right(),
        create_fence_front(),
        create_window_front(),
        create_window_back(),
        create_window_right(),
    )
    meshes += [box.mesh() for box in boxes]
    return meshes


class _RenderTarget:
    """Framebuffer with a colour and a depth texture attached."""

    def __init__(self, gl, width, height) -> None:
        self._gl = gl
        self.width = width
        self.height = height
        self._fbo = gl.GLuint()
        gl.glGenFramebuffers(1, self._fbo)
        gl.glBindFramebuffer(gl.GL_FRAMEBUFFER, self._fbo)

        self.color = self._texture(gl.GL_RGB, gl.GL_RGB, gl.GL_UNSIGNED_BYTE, gl.GL_LINEAR)
        gl.glFramebufferTexture2D(
            gl.GL_FRAMEBUFFER, gl.GL_COLOR_ATTACHMENT0, gl.GL_TEXTURE_2D, self.color, 0
        )
        self.depth = self._texture(
            gl.GL_DEPTH_COMPONENT24, gl.GL_DEPTH_COMPONENT, gl.GL_FLOAT, gl.GL_NEAREST
        )
        gl.glFramebufferTexture2D(
            gl.GL_FRAMEBUFFER, gl.GL_DEPTH_ATTACHMENT, gl.GL_TEXTURE_2D, self.depth, 0
        )

        if gl.glCheckFramebufferStatus(gl.GL_FRAMEBUFFER) != gl.GL_FRAMEBUFFER_COMPLETE:
            logger.error("Framebuffer creation failed")
        gl.glBindFramebuffer(gl.GL_FRAMEBUFFER, 0)

    def _texture(self, internal, fmt, kind, filtering) -> int:
        gl = self._gl
        tex = gl.GLuint()
        gl.glGenTextures(1, tex)
        gl.glBindTexture(gl.GL_TEXTURE_2D, tex)
        gl.glTexImage2D(gl.GL_TEXTURE_2D, 0, internal, self.width, self.height, 0,
                        fmt, kind, None)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, filtering)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, filtering)
        return tex.value

    def bind(self) -> None:
        self._gl.glBindFramebuffer(self._gl.GL_FRAMEBUFFER, self._fbo)

    def unbind(self) -> None:
        self._gl.glBindFramebuffer(self._gl.GL_FRAMEBUFFER, 0)

    def draw_quad(self, texture, aspect=1.0) -> None:
        gl = self._gl
        gl.glEnable(gl.GL_TEXTURE_2D)
        gl.glBindTexture(gl.GL_TEXTURE_2D, texture)
        gl.glColor3f(1.0, 1.0, 1.0)
        gl.glBegin(gl.GL_QUADS)
        for (u, v), (x, y) in screen_quad(aspect):
            gl.glTexCoord2f(u, v)
            gl.glVertex2f(x, y)
        gl.glEnd()
        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        gl.glDisable(gl.GL_TEXTURE_2D)

    def close(self) -> None:
        gl = self._gl
        for tex in (self.color, self.depth):
            if tex:
                gl.glDeleteTextures(1, gl.GLuint(tex))
        if self._fbo.value:
            gl.glDeleteFramebuffers(1, self._fbo)
        self.color = self.depth = 0


class SceneRenderer:
    """Draws the house scene; needs a current OpenGL compatibility context."""

    def __init__(self, state=None, rng=None) -> None:
        from pyglet import gl as core
        from pyglet.gl import gl_compat

        self._gl = gl_compat
        self._float_array = core.GLfloat * 16
        self.state = state if state is not None else SceneState()
        self._target = _RenderTarget(_GLNamespace(gl_compat, core), TARGET_SIZE, TARGET_SIZE)
        self._textures: dict[tuple[str, bool], int | None] = {}
        self._meshes = _scene_meshes(rng)
        self._modes = {
            "quads": gl_compat.GL_QUADS,
            "quad_strip": gl_compat.GL_QUAD_STRIP,
            "triangle_strip": gl_compat.GL_TRIANGLE_STRIP,
        }

    def _texture_for(self, mesh: Mesh) -> int | None:
        key = (mesh.texture, mesh.tiled)
        if key not in self._textures:
            self._textures[key] = self._upload(mesh.texture, mesh.tiled)
        return self._textures[key]

    def _upload(self, path, tiled) -> int | None:
        gl = self._gl
        try:
            image = load_ppm(path)
        except PPMError as exc:
            logger.error("%s", exc)
            return None
        tex = self._target._gl.GLuint()
        gl.glGenTextures(1, tex)
        gl.glBindTexture(gl.GL_TEXTURE_2D, tex)
        gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
        wrap = gl.GL_REPEAT if tiled else gl.GL_CLAMP_TO_EDGE
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, wrap)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, wrap)
        gl.glTexImage2D(gl.GL_TEXTURE_2D, 0, gl.GL_RGB, image.width, image.height, 0,
                        gl.GL_RGB, gl.GL_UNSIGNED_BYTE, image.data)
        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        return tex.value

    def _draw_axes(self) -> None:
        gl = self._gl
        gl.glPushMatrix()
        gl.glTranslatef(-3.0, 3.0, -3.0)
        gl.glLineWidth(2.5)
        gl.glBegin(gl.GL_LINES)
        for color, tip in (((1, 0, 0), (2, 0, 0)), ((0, 1, 0), (0, 2, 0)), ((0, 0, 1), (0, 0, 2))):
            gl.glColor3f(*color)
            gl.glVertex3f(0.0, 0.0, 0.0)
            gl.glVertex3f(*tip)
        gl.glEnd()
        gl.glLineWidth(1.0)
        gl.glColor3f(1.0, 1.0, 1.0)
        gl.glPopMatrix()

    def _draw_mesh(self, mesh: Mesh) -> None:
        gl = self._gl
        texture = self._texture_for(mesh) if mesh.texture else None
        if texture:
            gl.glEnable(gl.GL_TEXTURE_2D)
            gl.glBindTexture(gl.GL_TEXTURE_2D, texture)
            gl.glTexEnvf(gl.GL_TEXTURE_ENV, gl.GL_TEXTURE_ENV_MODE, float(gl.GL_REPLACE))
            gl.glColor3f(1.0, 1.0, 1.0)
        gl.glBegin(self._modes[mesh.mode])
        for (u, v), (x, y, z) in zip(mesh.tex_coords, mesh.vertices):
            gl.glTexCoord2f(u, v)
            gl.glVertex3f(x, y, z)
        gl.glEnd()
        if texture:
            gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
            gl.glDisable(gl.GL_TEXTURE_2D)

    def _draw_scene(self) -> None:
        x, y, z = self.state.orbit.eye(CAMERA_RADIUS)
        view = _look_at((x, y + CAMERA_LIFT, z), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        self._gl.glMultMatrixf(self._float_array(*view))
        self._draw_axes()
        for mesh in self._meshes:
            self._draw_mesh(mesh)

    def display(self) -> None:
        """Render the scene off screen, then show its colour or depth image."""
        gl = self._gl
        target = self._target

        target.bind()
        gl.glViewport(0, 0, target.width, target.height)
        gl.glClearColor(*SCENE_CLEAR)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glLoadIdentity()
        gl.glFrustum(*_frustum(FIELD_OF_VIEW, target.width / target.height,
                               NEAR_PLANE, FAR_PLANE))
        gl.glMatrixMode(gl.GL_MODELVIEW)
        gl.glLoadIdentity()
        self._draw_scene()
        target.unbind()

        gl.glViewport(0, 0, self.state.width, self.state.height)
        gl.glClearColor(*SCREEN_CLEAR)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glLoadIdentity()
        aspect = self.state.aspect
        gl.glOrtho(*ortho_bounds(aspect), -1.0, 1.0)
        gl.glMatrixMode(gl.GL_MODELVIEW)
        gl.glLoadIdentity()
        texture = target.depth if self.state.depth_mode else target.color
        target.draw_quad(texture, aspect)

    def reshape(self, width, height) -> None:
        self.state.reshape(width, height)
        self._gl.glViewport(0, 0, width, height)

    def close(self) -> None:
        """Release the textures and the framebuffer."""
        for tex in self._textures.values():
            if tex:
                self._gl.glDeleteTextures(1, self._target._gl.GLuint(tex))
        self._textures.clear()
        self._target.close()


class _GLNamespace:
    """Legacy GL entry points with the ctypes scalar types alongside."""

    def __init__(self, compat, core) -> None:
        self._compat = compat
        self.GLuint = core.GLuint

    def __getattr__(self, name):
        return getattr(self._compat, name)


def main(argv=None) -> int:
    """Open the window and run the viewer until it is closed."""
    parser = argparse.ArgumentParser(
        prog="pilotihouse",
        description="Orbit a textured piloti house; drag to rotate, press d for the depth image.",
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    import pyglet
    from pyglet.gl import gl_compat

    config = pyglet.gl.Config(double_buffer=True, depth_size=24,
                              major_version=2, minor_version=1)
    window = pyglet.window.Window(WINDOW_WIDTH, WINDOW_HEIGHT, caption="Piloti House",
                                  config=config, resizable=True)
    gl_compat.glEnable(gl_compat.GL_DEPTH_TEST)

    state = SceneState(WINDOW_WIDTH, WINDOW_HEIGHT)
    renderer = SceneRenderer(state)
    handled = pyglet.event.EVENT_HANDLED
    left = pyglet.window.mouse.LEFT

    def on_draw():
        renderer.display()
        return handled

    def on_resize(width, height):
        renderer.reshape(*window.get_framebuffer_size())
        return handled

    def on_mouse_press(x, y, button, modifiers):
        if button == left:
            state.orbit.press(x, window.height - y)

    def on_mouse_release(x, y, button, modifiers):
        if button == left:
            state.orbit.release()

    def on_mouse_drag(x, y, dx, dy, buttons, modifiers):
        state.orbit.motion(x, window.height - y)

    def on_text(text):
        state.handle_key(text)

    window.push_handlers(
        on_draw=on_draw,
        on_resize=on_resize,
        on_mouse_press=on_mouse_press,
        on_mouse_release=on_mouse_release,
        on_mouse_drag=on_mouse_drag,
        on_text=on_text,
    )
    try:
        pyglet.app.run()
    finally:
        renderer.close()
    return 0