[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pilotihouse"
version = "0.1.0"
description = "Interactive 3D scene of a piloti house on textured terrain, rendered to an offscreen buffer with a depth view"
requires-python = ">=3.10"
dependencies = [
    "pyglet",
]
keywords = ["opengl", "3d", "rendering", "ppm", "framebuffer", "depth-buffer", "scene", "orbit-camera"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pilotihouse = "pilotihouse.render:main"

[tool.hatch.build.targets.wheel]
packages = ["pilotihouse"]

[tool.pytest.ini_options]
addopts = "-ra"
