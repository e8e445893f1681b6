"""Vectors, colours, rays, a virtual trackball, polygon triangulation and mesh voxelization."""

__version__ = "0.1.0"