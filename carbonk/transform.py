"""Quaternion helpers and hierarchical transforms.

Quaternions are ``(w, x, y, z)`` arrays. Affine matrices are 3x4 arrays whose
first three columns are the linear part and whose last column is the translation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


def _vec(values) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _to_mat4(affine: np.ndarray) -> np.ndarray:
    """Pad a 3x4 affine matrix with a (0, 0, 0, 1) row."""
    return np.vstack([affine, [0.0, 0.0, 0.0, 1.0]])


def quat_to_mat3(q) -> np.ndarray:
    """Rotation matrix of quaternion ``q``."""
    w, x, y, z = _vec(q)
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ]
    )


def _mat3_to_quat(m: np.ndarray) -> np.ndarray:
    m = _vec(m)
    candidates = (
        m[0, 0] + m[1, 1] + m[2, 2],
        m[0, 0] - m[1, 1] - m[2, 2],
        m[1, 1] - m[0, 0] - m[2, 2],
        m[2, 2] - m[0, 0] - m[1, 1],
    )
    index = max(range(4), key=candidates.__getitem__)
    biggest = math.sqrt(candidates[index] + 1.0) * 0.5
    mult = 0.25 / biggest
    if index == 0:
        return np.array(
            [biggest, (m[2, 1] - m[1, 2]) * mult, (m[0, 2] - m[2, 0]) * mult, (m[1, 0] - m[0, 1]) * mult]
        )
    if index == 1:
        return np.array(
            [(m[2, 1] - m[1, 2]) * mult, biggest, (m[1, 0] + m[0, 1]) * mult, (m[0, 2] + m[2, 0]) * mult]
        )
    if index == 2:
        return np.array(
            [(m[0, 2] - m[2, 0]) * mult, (m[1, 0] + m[0, 1]) * mult, biggest, (m[2, 1] + m[1, 2]) * mult]
        )
    return np.array(
        [(m[1, 0] - m[0, 1]) * mult, (m[0, 2] + m[2, 0]) * mult, (m[2, 1] + m[1, 2]) * mult, biggest]
    )


def quat_inverse(q) -> np.ndarray:
    """Multiplicative inverse of ``q``."""
    q = _vec(q)
    conjugate = np.array([q[0], -q[1], -q[2], -q[3]])
    return conjugate / float(np.dot(q, q))


def quat_multiply(a, b) -> np.ndarray:
    """Hamilton product ``a * b`` (apply ``b`` first, then ``a``)."""
    aw, ax, ay, az = _vec(a)
    bw, bx, by, bz = _vec(b)
    return np.array(
        [
            aw * bw - ax * bx - ay * by - az * bz,
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
        ]
    )


def quat_rotate(q, v) -> np.ndarray:
    """Rotate vector ``v`` by quaternion ``q``."""
    q = _vec(q)
    v = _vec(v)
    u = q[1:]
    uv = np.cross(u, v)
    uuv = np.cross(u, uv)
    return v + 2.0 * (q[0] * uv + uuv)


def angle_axis(angle: float, axis) -> np.ndarray:
    """Quaternion rotating by ``angle`` radians about ``axis``."""
    half = 0.5 * angle
    return np.concatenate([[math.cos(half)], _vec(axis) * math.sin(half)])


def quat_look_at(direction, up) -> np.ndarray:
    """Orientation whose -z axis points along ``direction`` with +y toward ``up``."""
    back = -_vec(direction)
    right = np.cross(_vec(up), back)
    right = right / math.sqrt(max(1e-5, float(np.dot(right, right))))
    new_up = np.cross(back, right)
    return _mat3_to_quat(np.column_stack([right, new_up, back]))


def infinite_perspective(fovy: float, aspect: float, near: float) -> np.ndarray:
    """4x4 perspective projection with the far plane at infinity."""
    extent = math.tan(fovy / 2.0) * near
    left, right = -extent * aspect, extent * aspect
    bottom, top = -extent, extent
    result = np.zeros((4, 4))
    result[0, 0] = 2.0 * near / (right - left)
    result[1, 1] = 2.0 * near / (top - bottom)
    result[2, 2] = -1.0
    result[3, 2] = -1.0
    result[2, 3] = -2.0 * near
    return result


@dataclass(eq=False)
class Transform:
    """A named position/rotation/scale, optionally relative to a parent transform."""

    name: str = ""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0, 0.0]))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    parent: Transform | None = None

    def make_local_to_parent(self) -> np.ndarray:
        """translate * rotate * scale, as a 3x4 matrix."""
        linear = quat_to_mat3(self.rotation) * _vec(self.scale)
        return np.column_stack([linear, _vec(self.position)])

    def make_parent_to_local(self) -> np.ndarray:
        """Inverse of :meth:`make_local_to_parent`; zero scales give a degenerate matrix, not NaNs."""
        inv_scale = np.array([0.0 if s == 0.0 else 1.0 / s for s in _vec(self.scale)])
        inv_rot = quat_to_mat3(quat_inverse(self.rotation)) * inv_scale[:, np.newaxis]
        return np.column_stack([inv_rot, inv_rot @ -_vec(self.position)])

    def make_local_to_world(self) -> np.ndarray:
        local = self.make_local_to_parent()
        if self.parent is None:
            return local
        return self.parent.make_local_to_world() @ _to_mat4(local)

    def make_world_to_local(self) -> np.ndarray:
        local = self.make_parent_to_local()
        if self.parent is None:
            return local
        return local @ _to_mat4(self.parent.make_world_to_local())