"""Command that loads a scene file and prints its contents."""

from __future__ import annotations

import math
import sys

from carbonk.chunks import ChunkError
from carbonk.scene import Scene

_PROG = "show-scene"


def describe_scene(scene: Scene) -> str:
    """A text listing of a scene's transforms, drawables, cameras and lights."""
    lines = []
    for transform in scene.transforms:
        x, y, z = transform.make_local_to_world()[:, 3]
        line = f"'{transform.name}' at ({x:.3f}, {y:.3f}, {z:.3f})"
        if transform.parent is not None:
            line += f" parent '{transform.parent.name}'"
        lines.append(line)
    for drawable in scene.drawables:
        lines.append(f"drawable on '{drawable.transform.name}'")
    for camera in scene.cameras:
        lines.append(
            f"camera on '{camera.transform.name}': "
            f"fovy {math.degrees(camera.fovy):.1f} degrees, near {camera.near:g}"
        )
    for light in scene.lights:
        lines.append(f"{light.type.name.lower()} light on '{light.transform.name}'")
    return "\n".join(lines)


def _usage() -> str:
    return f"Usage:\n\t{_PROG} <path/to/scene.scene> [path/to/meshes.pnct]"


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (1, 2):
        print(_usage(), file=sys.stderr)
        return 1
    scene_file = args[0]
    meshes_file = args[1] if len(args) == 2 else ""

    failed = False
    if meshes_file:
        try:
            with open(meshes_file, "rb"):
                pass
        except OSError as exc:
            print(f"ERROR loading mesh buffer '{meshes_file}': {exc}", file=sys.stderr)
            failed = True

    scene = None
    if scene_file:
        try:
            scene = Scene(scene_file)
        except (OSError, ChunkError, ValueError) as exc:
            print(f"ERROR loading scene '{scene_file}': {exc}", file=sys.stderr)
            scene = None
    if scene is None or failed:
        print(_usage(), file=sys.stderr)
        return 1

    if meshes_file:
        print(f"Showing scene from '{scene_file}' with meshes from '{meshes_file}'")
    else:
        print(
            f"Showing scene from '{scene_file}' with no meshes -- "
            "consider passing a '.pnct' file as the second argument."
        )
    print(describe_scene(scene))
    return 0


if __name__ == "__main__":
    sys.exit(main())