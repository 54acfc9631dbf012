import io
import math

import numpy as np
import pytest

from carbonk.chunks import ChunkError, write_chunk
from carbonk.scene import (
    Camera,
    Drawable,
    LightType,
    Pipeline,
    Scene,
    SceneFormatError,
)
from carbonk.transform import Transform, infinite_perspective

NO_PARENT = 0xFFFFFFFF


def _hier(parent, begin, end, pos=(0, 0, 0), quat_xyzw=(0, 0, 0, 1), scale=(1, 1, 1)):
    return (parent, begin, end, *pos, *quat_xyzw, *scale)


def _write_scene(path, names, hierarchy, meshes=(), cameras=(), lights=(), trailing=b""):
    buf = io.BytesIO()
    write_chunk(buf, "str0", None, names)
    write_chunk(buf, "xfh0", "3I3f4f3f", hierarchy)
    write_chunk(buf, "msh0", "3I", meshes)
    write_chunk(buf, "cam0", "I4s3f", cameras)
    write_chunk(buf, "lmp0", "Ic3B3f", lights)
    buf.write(trailing)
    path.write_bytes(buf.getvalue())
    return path


@pytest.fixture
def basic_scene_file(tmp_path):
    names = b"rootchildcam"
    hierarchy = [
        _hier(NO_PARENT, 0, 4, pos=(1, 2, 3)),
        _hier(0, 4, 9, pos=(0, 1, 0), quat_xyzw=(0, 0, 1, 0), scale=(2, 2, 2)),
        _hier(NO_PARENT, 9, 12),
    ]
    meshes = [(1, 4, 9)]
    cameras = [(2, b"pers", 60.0, 0.5, 100.0), (2, b"orth", 1.0, 0.1, 10.0)]
    lights = [(0, b"s", 255, 0, 0, 2.0, 10.0, 90.0), (0, b"x", 1, 1, 1, 1.0, 1.0, 1.0)]
    return _write_scene(tmp_path / "a.scene", names, hierarchy, meshes, cameras, lights)


def test_load_hierarchy(basic_scene_file):
    scene = Scene(basic_scene_file)
    assert [t.name for t in scene.transforms] == ["root", "child", "cam"]
    root, child, cam = scene.transforms
    assert child.parent is root
    assert root.parent is None
    np.testing.assert_allclose(root.position, [1, 2, 3])
    np.testing.assert_allclose(child.rotation, [0, 0, 0, 1])
    np.testing.assert_allclose(child.scale, [2, 2, 2])


def test_load_cameras_and_lights(basic_scene_file, capsys):
    scene = Scene(basic_scene_file)
    assert len(scene.cameras) == 1
    camera = scene.cameras[0]
    assert camera.transform is scene.transforms[2]
    assert camera.fovy == pytest.approx(math.radians(60.0), rel=1e-6)
    assert camera.near == pytest.approx(0.5)
    assert len(scene.lights) == 1
    light = scene.lights[0]
    assert light.type is LightType.SPOT
    np.testing.assert_allclose(light.energy, [2.0, 0.0, 0.0])
    assert light.spot_fov == pytest.approx(math.radians(90.0), rel=1e-6)
    out = capsys.readouterr().out
    assert "Ignoring non-perspective camera (orth)" in out
    assert "Ignoring unrecognized lamp type (x)" in out


def test_on_drawable_callback(basic_scene_file):
    calls = []

    def on_drawable(scene, transform, name):
        calls.append((transform.name, name))
        scene.drawables.append(Drawable(transform))

    scene = Scene(basic_scene_file, on_drawable)
    assert calls == [("child", "child")]
    assert scene.drawables[0].transform is scene.transforms[1]


def test_parent_out_of_order(tmp_path):
    path = _write_scene(tmp_path / "b.scene", b"ab", [_hier(1, 0, 1), _hier(NO_PARENT, 1, 2)])
    with pytest.raises(SceneFormatError, match="topological-sort"):
        Scene(path)


def test_invalid_name_indices(tmp_path):
    path = _write_scene(tmp_path / "c.scene", b"ab", [_hier(NO_PARENT, 1, 5)])
    with pytest.raises(SceneFormatError, match="invalid name indices"):
        Scene(path)


def test_mesh_bad_transform(tmp_path):
    path = _write_scene(tmp_path / "d.scene", b"ab", [_hier(NO_PARENT, 0, 1)], meshes=[(3, 0, 1)])
    with pytest.raises(SceneFormatError, match=r"invalid transform index \(3\)"):
        Scene(path)


def test_camera_bad_transform(tmp_path):
    path = _write_scene(
        tmp_path / "e.scene", b"a", [_hier(NO_PARENT, 0, 1)], cameras=[(1, b"pers", 60.0, 0.1, 1.0)]
    )
    with pytest.raises(SceneFormatError, match="camera entry"):
        Scene(path)


def test_wrong_chunk_order(tmp_path):
    path = tmp_path / "f.scene"
    buf = io.BytesIO()
    write_chunk(buf, "xfh0", "3I3f4f3f", [])
    path.write_bytes(buf.getvalue())
    with pytest.raises(ChunkError):
        Scene(path)


def test_trailing_data_warns(tmp_path):
    path = _write_scene(tmp_path / "g.scene", b"a", [_hier(NO_PARENT, 0, 1)], trailing=b"zz")
    with pytest.warns(UserWarning, match="trailing data"):
        scene = Scene(path)
    assert [t.name for t in scene.transforms] == ["a"]


def test_copy_remaps_references(basic_scene_file):
    scene = Scene(basic_scene_file, lambda s, t, n: s.drawables.append(Drawable(t)))
    scene.drawables[0].pipeline.count = 7
    copied = scene.copy()
    assert [t.name for t in copied.transforms] == ["root", "child", "cam"]
    assert copied.transforms[1].parent is copied.transforms[0]
    assert all(a is not b for a, b in zip(copied.transforms, scene.transforms))
    assert copied.drawables[0].transform is copied.transforms[1]
    assert copied.cameras[0].transform is copied.transforms[2]
    assert copied.lights[0].transform is copied.transforms[0]
    copied.transforms[0].position[0] = 99.0
    copied.drawables[0].pipeline.count = 1
    assert scene.transforms[0].position[0] == pytest.approx(1.0)
    assert scene.drawables[0].pipeline.count == 7


def test_set_returns_mapping(basic_scene_file):
    source = Scene(basic_scene_file)
    target = Scene()
    mapping = target.set(source)
    assert set(mapping) == set(source.transforms)
    for old, new in mapping.items():
        assert new.name == old.name
        assert new in target.transforms


def test_pipeline_defaults():
    pipeline = Pipeline()
    assert pipeline.count == 0
    assert pipeline.OBJECT_TO_CLIP_mat4 == 0xFFFFFFFF
    assert len(pipeline.textures) == 4
    assert all(t.texture == 0 for t in pipeline.textures)


def test_camera_projection():
    camera = Camera(Transform(), fovy=1.0, aspect=2.0, near=0.1)
    np.testing.assert_allclose(camera.make_projection(), infinite_perspective(1.0, 2.0, 0.1))