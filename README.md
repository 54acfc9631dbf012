# carbonk

Building blocks for a small vehicle combat game that work without a GPU or a window.

## Modules

- `carbonk.chunks`: `read_chunk` and `write_chunk` handle tagged binary chunks. A chunk is a 4-byte magic, a 4-byte little-endian payload size, then packed records. Records are described by a `struct` format, or given as raw bytes when the format is `None`. Malformed or unexpected chunks raise `ChunkError`.
- `carbonk.transform`: quaternion helpers on `(w, x, y, z)` arrays:
  - `quat_to_mat3`, `quat_inverse`, `quat_multiply`, `quat_rotate`, `angle_axis` and `quat_look_at`.
  - `infinite_perspective`, a 4x4 projection with the far plane at infinity.
  - `Transform`, a named position/rotation/scale with an optional parent. It builds 3x4 affine matrices with `make_local_to_parent`, `make_parent_to_local`, `make_local_to_world` and `make_world_to_local`.
- `carbonk.scene`: `Scene` holds transforms plus the `Drawable`, `Camera` and `Light` objects attached to them. A `Drawable` carries a `Pipeline`; a `Light` has a `LightType`.
  - `Scene.load(path, on_drawable)` reads a `.scene` file. It calls `on_drawable(scene, transform, mesh_name)` for each mesh entry and skips non-perspective cameras and unknown lamp types.
  - `Scene.load_extra` runs afterwards; subclass it or set `extra_loader` to read further chunks.
  - Inconsistent files raise `SceneFormatError`.
  - `Scene.set` and `Scene.copy` make deep copies that refer to the copy's own transforms. `Scene.set` returns the old-to-new transform mapping.
- `carbonk.utils`:
  - `find_suffix_in_scene` finds the numbered suffix such as `.001` of the transform that follows a given name.
  - `rotate_yaw` rotates a vector about +z.
  - `repeat`, `repeat_loop` and `normalize_angles` wrap angles back into range.
- `carbonk.pathfont`: `PathFont` builds a line-based font from flat glyph tables. It maps each glyph's character string to its index in `glyph_map`, keeping the first of any duplicates with a warning. `glyph_coords` returns a glyph's stroke coordinates.
- `carbonk.png_io`: `load_png` and `save_png` read and write 8-bit RGBA images as flat pixel lists. Row order is chosen with `OriginLocation`.
- `carbonk.data_path`: `data_path(suffix, base=None)` joins a suffix onto a base directory. The base defaults to the running program's directory.
- `carbonk.trackball`:
  - `TrackballCamera` is a z-up orbit camera with `begin_drag`, `drag` (tumble or pan), `dolly`, `rotation` and `position`.
  - `next_name` and `prev_name` step through a set of names in sorted order.

## Installation

```
pip install .
```

## Inspecting a scene file

```
carbonk-show-scene path/to/world.scene [path/to/meshes.pnct]
```

This loads the scene and prints its transforms with world positions, its cameras and its lights. If a second path is given, it only checks that the file can be opened. The command exits with status 1 and a usage message when the arguments are wrong or a file cannot be read.

## Example

```python
from carbonk.scene import Scene

scene = Scene()
scene.load("world.scene", None)
for transform in scene.transforms:
    print(transform.name, transform.make_local_to_world())
```

## What this package does not do

- It has no renderer, window or input loop. `Pipeline` records what a renderer would need, but nothing here draws it.
- It does not read mesh buffer (`.pnct`) contents.
- It contains no game play logic such as vehicles, collisions or health.

## Tests

```
pip install .[test]
pytest
```