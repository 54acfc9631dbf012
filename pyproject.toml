[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "carbonk"
version = "0.1.0"
description = "Scene files, chunk I/O, transforms, PNG I/O and orbit-camera helpers for a small vehicle combat game"
requires-python = ">=3.10"
keywords = ["game", "scene", "transform", "quaternion", "chunk", "png", "trackball"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
carbonk-show-scene = "carbonk.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["carbonk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
