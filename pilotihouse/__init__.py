"""Piloti house scene: PPM textures, scene geometry, orbit camera and an offscreen OpenGL viewer."""

__version__ = "0.1.0"