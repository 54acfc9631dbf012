"""Scene files, chunk I/O, transforms, PNG I/O, a path font and orbit-camera helpers for a small vehicle combat game."""

__version__ = "0.1.0"