# pilotihouse

A small interactive 3D scene: a two-storey house raised on pilotis, with
windows on the upper floor and a fence around the plot, standing on a gently
uneven textured terrain. Each frame the scene is rendered into an offscreen
512×512 framebuffer, which is then shown in the window as a textured quad,
either as the colour image or as the depth buffer.

Drawing uses pyglet with a legacy (fixed-function) OpenGL 2.1 context that
supports framebuffer objects.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Running

```
pilotihouse
```

The command takes no options apart from `--help`. It opens an 800×600
resizable window titled "Piloti House" and runs until the window is closed.
Progress messages, such as each texture that was loaded, are logged at INFO
level to standard error.

The textures are looked up relative to the working directory:

- `resources/Terrain.ppm`
- `resources/Concrete.ppm`
- `resources/Fence.ppm`
- `resources/Window.ppm`

Each must be a binary PPM (`P6`) image. A texture that is missing or cannot
be decoded is logged as an error and the objects that use it are drawn
without a texture. The fence texture repeats along the fence's length; the
others are stretched once over each face.

### Controls

- Drag with the left mouse button to orbit the camera around the house.
  Horizontal movement changes the azimuth and vertical movement the
  elevation, by half a degree per pixel; the elevation is held between
  -89° and 89°.
- Type `d` (or `D`) to switch between the colour view and the depth-buffer
  view.

## Using the pieces

Everything except `SceneRenderer` and `main` works without a window or an
OpenGL context.

```python
import random

from pilotihouse.ppm import load_ppm, PPMError
from pilotihouse.house import create_piloti_list, create_first_floor
from pilotihouse.terrain import create_default_terrain
from pilotihouse.mouse import OrbitControl
from pilotihouse.render import SceneState, ortho_bounds

image = load_ppm("resources/Concrete.ppm")   # PPMImage(width, height, data)
floor = create_first_floor()                 # Box
faces = floor.faces()                        # six quads of (uv, vertex) pairs
quads = floor.mesh()                         # Mesh with mode "quads"
pilotis = create_piloti_list()               # four Piloti columns
column = pilotis[0].mesh(32)                 # Mesh with mode "quad_strip"

terrain = create_default_terrain(random.Random(1))
strips = list(terrain.strips())              # 99 triangle-strip meshes

orbit = OrbitControl()
orbit.press(100, 100)
orbit.motion(140, 120)
print(orbit.eye(10.0))                       # camera position on a sphere

state = SceneState()
state.handle_key("d")                        # now shows the depth image
print(ortho_bounds(state.aspect))
```

### Modules

- `pilotihouse.ppm`: `load_ppm(path)` reads a `P6` file and returns a
  `PPMImage` whose `data` holds RGB bytes with the bottom row first, ready
  for texture upload. Any failure to open or decode the file raises
  `PPMError`.
- `pilotihouse.house`: `Mesh` (primitive mode, world-space vertices, texture
  coordinates, texture path), `Box` (a textured box, optionally turned 90°
  about the Y axis) and `Piloti` (an open cylindrical column), together with
  the factory functions `create_piloti_list`, `create_first_floor`,
  `create_second_floor`, `create_window_front`, `create_window_back`,
  `create_window_right`, `create_fence_back`, `create_fence_front`,
  `create_fence_left` and `create_fence_right`.
- `pilotihouse.terrain`: `Terrain(rows, cols, size, rng=None, texture=None)`,
  a grid of small random heights centred on the origin, with `height_at` and
  `strips`; `create_default_terrain(rng)` builds the 100×100 ground with 0.2
  units between points.
- `pilotihouse.mouse`: `OrbitControl` with `press`, `release`, `motion` and
  `eye`.
- `pilotihouse.render`: `SceneState` (window size, depth-view flag and the
  orbit control), `ortho_bounds` and `screen_quad` for fitting the offscreen
  image to the window, `SceneRenderer` (needs a current OpenGL context), and
  `main`, which the `pilotihouse` command runs.