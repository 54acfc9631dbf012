"""Small helpers for finding scene objects and wrapping angles."""

from __future__ import annotations

import math

import numpy as np

from carbonk.scene import Scene


def find_suffix_in_scene(name: str, prefix: str, scene: Scene) -> str:
    """Find the numbered suffix (e.g. ".001") of the first transform after ``name`` that contains ``prefix``.

    Returns "" when that transform's name has no suffix or no such transform follows.
    Raises LookupError when ``name`` is not in the scene.
    """
    transforms = iter(scene.transforms)
    if not any(t.name == name for t in transforms):
        raise LookupError(f'Unable to find mesh: "{name}" in scene')
    for transform in transforms:
        if prefix in transform.name:
            suffix = transform.name[transform.name.rfind(".") + 1:]
            return "" if suffix == prefix else "." + suffix
    return ""


def rotate_yaw(yaw: float, vec) -> np.ndarray:
    """Rotate ``vec`` by ``yaw`` radians about the +z axis."""
    x, y, z = np.asarray(vec, dtype=float)
    c, s = math.cos(yaw), math.sin(yaw)
    return np.array([c * x - s * y, s * x + c * y, z])


def repeat(x: float, min_value: float, max_value: float) -> float:
    """Wrap ``x`` back into range with a single step; assumes ``x`` is near the range."""
    if x > max_value:
        x -= 2 * max_value
    if x < min_value:
        x -= 2 * min_value
    return x


def repeat_loop(x: float, min_value: float, max_value: float) -> float:
    """Wrap ``x`` back into range, stepping as many times as needed."""
    while x > max_value:
        x -= 2 * max_value
    while x < min_value:
        x -= 2 * min_value
    return x


def normalize_angles(v, min_value: float = -math.pi, max_value: float = math.pi) -> np.ndarray:
    """Apply :func:`repeat` to each component of ``v``."""
    return np.array([repeat(float(c), min_value, max_value) for c in v])