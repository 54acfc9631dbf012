"""Scenes: a hierarchy of transforms with drawables, cameras and lights attached."""

from __future__ import annotations

import dataclasses
import enum
import math
import warnings
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Optional

import numpy as np

from carbonk.chunks import read_chunk
from carbonk.transform import Transform, infinite_perspective

GL_TRIANGLES = 0x0004
GL_TEXTURE_2D = 0x0DE1
NO_LOCATION = 0xFFFFFFFF
TEXTURE_COUNT = 4

_NO_PARENT = 0xFFFFFFFF
_DEGREES_TO_RADIANS = 3.1415926 / 180.0

_HIERARCHY_FORMAT = "<3I3f4f3f"
_MESH_FORMAT = "<3I"
_CAMERA_FORMAT = "<I4s3f"
_LIGHT_FORMAT = "<Ic3B3f"

OnDrawable = Callable[["Scene", Transform, str], None]
ExtraLoader = Callable[["Scene", BinaryIO, bytes, "list[Transform]"], None]


class SceneFormatError(ValueError):
    """Raised when a scene file is inconsistent."""


class LightType(enum.Enum):
    POINT = "p"
    HEMISPHERE = "h"
    SPOT = "s"
    DIRECTIONAL = "d"


@dataclass
class TextureInfo:
    texture: int = 0
    target: int = GL_TEXTURE_2D


@dataclass
class Pipeline:
    """Everything needed to submit one drawable to the rendering pipeline."""

    program: int = 0
    vao: int = 0
    type: int = GL_TRIANGLES
    start: int = 0
    count: int = 0
    OBJECT_TO_CLIP_mat4: int = NO_LOCATION
    OBJECT_TO_LIGHT_mat4x3: int = NO_LOCATION
    NORMAL_TO_LIGHT_mat3: int = NO_LOCATION
    set_uniforms: Optional[Callable[[], None]] = None
    textures: list[TextureInfo] = field(
        default_factory=lambda: [TextureInfo() for _ in range(TEXTURE_COUNT)]
    )

    def _copy(self) -> "Pipeline":
        return dataclasses.replace(
            self, textures=[dataclasses.replace(t) for t in self.textures]
        )


@dataclass(eq=False)
class Drawable:
    """Attaches pipeline data to a transform."""

    transform: Transform
    pipeline: Pipeline = field(default_factory=Pipeline)


@dataclass(eq=False)
class Camera:
    """A perspective camera looking along the -z axis of its transform."""

    transform: Transform
    fovy: float = math.radians(60.0)
    aspect: float = 1.0
    near: float = 0.01

    def make_projection(self) -> np.ndarray:
        return infinite_perspective(self.fovy, self.aspect, self.near)


@dataclass(eq=False)
class Light:
    """Light data attached to a transform; directed lights point along -z."""

    transform: Transform
    type: LightType = LightType.POINT
    energy: np.ndarray = field(default_factory=lambda: np.ones(3))
    spot_fov: float = math.radians(45.0)


def _name_slice(names: bytes, begin: int, end: int) -> Optional[str]:
    if begin <= end <= len(names):
        return names[begin:end].decode("utf-8", errors="replace")
    return None


class Scene:
    """Transforms plus the drawables, cameras and lights that hang off them."""

    #: Optional callable that reads extra chunks after the standard ones.
    extra_loader: Optional[ExtraLoader] = None

    def __init__(self, path=None, on_drawable: Optional[OnDrawable] = None):
        self.transforms: list[Transform] = []
        self.drawables: list[Drawable] = []
        self.cameras: list[Camera] = []
        self.lights: list[Light] = []
        if path is not None:
            self.load(path, on_drawable)

    def load(self, path, on_drawable: Optional[OnDrawable] = None) -> None:
        """Add the contents of a scene file; ``on_drawable`` is called for each mesh entry."""
        with open(path, "rb") as stream:
            names = read_chunk(stream, "str0", None)
            hierarchy = read_chunk(stream, "xfh0", _HIERARCHY_FORMAT)
            meshes = read_chunk(stream, "msh0", _MESH_FORMAT)
            cameras = read_chunk(stream, "cam0", _CAMERA_FORMAT)
            lights = read_chunk(stream, "lmp0", _LIGHT_FORMAT)

            created: list[Transform] = []
            for entry in hierarchy:
                parent_index, name_begin, name_end = entry[0:3]
                position = np.array(entry[3:6], dtype=float)
                qx, qy, qz, qw = entry[6:10]
                scale = np.array(entry[10:13], dtype=float)

                transform = Transform()
                if parent_index != _NO_PARENT:
                    if parent_index >= len(created):
                        raise SceneFormatError(
                            f"scene file '{path}' did not contain transforms in topological-sort order."
                        )
                    transform.parent = created[parent_index]
                name = _name_slice(names, name_begin, name_end)
                if name is None:
                    raise SceneFormatError(
                        f"scene file '{path}' contains hierarchy entry with invalid name indices"
                    )
                transform.name = name
                transform.position = position
                transform.rotation = np.array([qw, qx, qy, qz], dtype=float)
                transform.scale = scale
                self.transforms.append(transform)
                created.append(transform)

            for index, name_begin, name_end in meshes:
                if index >= len(created):
                    raise SceneFormatError(
                        f"scene file '{path}' contains mesh entry with invalid transform index ({index})"
                    )
                name = _name_slice(names, name_begin, name_end)
                if name is None:
                    raise SceneFormatError(
                        f"scene file '{path}' contains mesh entry with invalid name indices"
                    )
                if on_drawable is not None:
                    on_drawable(self, created[index], name)

            for index, kind, data, clip_near, _clip_far in cameras:
                if index >= len(created):
                    raise SceneFormatError(
                        f"scene file '{path}' contains camera entry with invalid transform index ({index})"
                    )
                kind_text = kind.decode("latin-1")
                if kind_text != "pers":
                    print(f"Ignoring non-perspective camera ({kind_text}) stored in file.")
                    continue
                self.cameras.append(
                    Camera(created[index], fovy=data * _DEGREES_TO_RADIANS, near=clip_near)
                )

            for index, kind, red, green, blue, energy, _distance, fov in lights:
                if index >= len(created):
                    raise SceneFormatError(
                        f"scene file '{path}' contains lamp entry with invalid transform index ({index})"
                    )
                kind_text = kind.decode("latin-1")
                try:
                    light_type = LightType(kind_text)
                except ValueError:
                    print(f"Ignoring unrecognized lamp type ({kind_text}) stored in file.")
                    continue
                self.lights.append(
                    Light(
                        created[index],
                        type=light_type,
                        energy=np.array([red, green, blue], dtype=float) / 255.0 * energy,
                        spot_fov=fov * _DEGREES_TO_RADIANS,
                    )
                )

            self.load_extra(stream, names, created)

            if stream.read(1):
                warnings.warn(f"trailing data in scene file '{path}'", stacklevel=2)

    def load_extra(self, stream: BinaryIO, names: bytes, transforms: list[Transform]) -> None:
        """Read extra chunks after the standard ones.

        Runs ``extra_loader`` when one is set; subclasses may override instead.
        """
        loader = self.extra_loader
        if loader is not None:
            loader(self, stream, names, transforms)

    def set(self, other: "Scene") -> dict[Transform, Transform]:
        """Replace this scene's contents with a copy of ``other``.

        Returns the mapping from ``other``'s transforms to the new copies.
        """
        mapping: dict = {None: None}
        transforms = []
        for t in other.transforms:
            copied = Transform(
                name=t.name,
                position=np.array(t.position, dtype=float),
                rotation=np.array(t.rotation, dtype=float),
                scale=np.array(t.scale, dtype=float),
                parent=t.parent,
            )
            mapping[t] = copied
            transforms.append(copied)
        for t in transforms:
            t.parent = mapping[t.parent]

        self.transforms = transforms
        self.drawables = [
            Drawable(mapping[d.transform], d.pipeline._copy()) for d in other.drawables
        ]
        self.cameras = [
            dataclasses.replace(c, transform=mapping[c.transform]) for c in other.cameras
        ]
        self.lights = [
            dataclasses.replace(
                l, transform=mapping[l.transform], energy=np.array(l.energy, dtype=float)
            )
            for l in other.lights
        ]
        del mapping[None]
        return mapping

    def copy(self) -> "Scene":
        """A deep copy whose objects refer to the copy's own transforms."""
        result = type(self)()
        result.set(self)
        return result

    def __copy__(self) -> "Scene":
        return self.copy()