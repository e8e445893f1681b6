[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "virt"
version = "0.1.0"
description = "Ray-tracing building blocks: vectors, colours, rays, a virtual trackball, polygon ear-clipping triangulation and a mesh voxelizer."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "ray tracing",
    "rendering",
    "triangulation",
    "earcut",
    "voxelizer",
    "trackball",
    "quaternion",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["virt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
