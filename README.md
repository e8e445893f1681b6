# virt

Small building blocks for a ray tracer and for working with polygon and
triangle meshes. Plain Python, with no dependencies.

## What is inside

- `virt.vector`: `Vector` and `Point`. `Vector` supports addition,
  subtraction, scaling, negation, `norm()`, in-place `normalize()`, `dot`,
  `cross`, `abs()`, `max_dimension()`, `permute`, `faceforward`,
  `coordinate_system()` (two axes that complete an orthonormal basis) and
  `rotate(rx, ry, rz)` into a reference frame. `Point` supports `point - point`
  (which gives a `Vector`), `point + vector`, scaling, `vec2point`, `permute`,
  `cross` and `dot`.
- `virt.color`: `RGB` colours. They support `+`, `+=`, `-`, and `*` and `/`
  both per channel and by a scalar. They also have `luminance()`, which uses
  the Rec. 709 weights, and `is_zero()`.
- `virt.ray`: `Ray` has an origin, a direction, a face id, an inverse
  direction and a pixel position. `adjust_origin(normal)` moves the origin by
  `EPSILON` (1e-3) along the normal, to the side the ray is heading.
  `Intersection` records a hit point, its normals, the outgoing direction and
  depth, the material in `f`, the face id, and emitted radiance `le` for hits
  on light sources. The shading normal `sn` defaults to a copy of the
  geometric normal `gn`.
- `virt.trackball`: a virtual trackball. Quaternions are `(x, y, z, w)`
  tuples. The module provides:
  - `trackball(p1x, p1y, p2x, p2y)`, for mouse positions scaled to -1..1;
  - `axis_to_quat(axis, phi)`;
  - `add_quats(q1, q2)`, which composes `q1` after `q2`;
  - `build_rotmatrix(q)`, which returns a 4x4 tuple of tuples.

  `RotationAccumulator.add(q1, q2)` composes in the same way and renormalises
  the result once every `renorm_count + 1` calls (the default is 97).
- `virt.earcut`: ear-clipping triangulation of polygons with holes, through
  `earcut(polygon)` or `Earcut().triangulate(polygon)`. A polygon is a list of
  rings of `(x, y)` points. The outline comes first and the holes follow. The
  result is a flat list of vertex indices, three per triangle. Vertices are
  numbered across all rings in order. The linked-ring `Node` and the geometric
  predicates live in `virt.earcut_nodes`.
- `virt.voxel_geometry`: the `AABB` class (`center`, `half_size`, `merge`),
  plus `map_to_voxel`, `triangle_area`, `triangle_aabb`, `plane_box_overlap`
  and the separating-axis test `triangle_box_overlap`.
- `virt.voxelizer`: `Mesh` and `voxelize(mesh, sx, sy, sz, precision)`.
  `voxelize` returns a new `Mesh` with one cube for each distinct grid cell
  that a triangle overlaps. Each cube has 8 vertices and 36 indices, with six
  face normals and per-index `normal_indices`. `vertex_hash(position, n)` is
  the spatial hash used to find duplicate cells.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Triangulate a square with a square hole:

```python
from virt.earcut import earcut

outer = [(0, 0), (10, 0), (10, 10), (0, 10)]
hole = [(3, 3), (7, 3), (7, 7), (3, 7)]
indices = earcut([outer, hole])
# every three entries of `indices` form one triangle
```

Vectors and colours:

```python
from virt.vector import Vector
from virt.color import RGB

n = Vector(0.0, 0.0, 2.0)
n.normalize()
u, v = n.coordinate_system()

c = RGB(0.5, 0.5, 0.5) * 2.0
print(c.luminance())
```

Trackball rotation from two mouse positions:

```python
from virt.trackball import trackball, build_rotmatrix

q = trackball(0.0, 0.0, 0.2, 0.1)
matrix = build_rotmatrix(q)
```

Voxelize a single triangle:

```python
from virt.vector import Vector
from virt.voxelizer import Mesh, voxelize

mesh = Mesh(
    vertices=[Vector(0, 0, 0), Vector(2, 0, 0), Vector(0, 2, 0)],
    indices=[0, 1, 2],
)
cubes = voxelize(mesh, 1.0, 1.0, 1.0, 0.1)
print(cubes.n_vertices // 8, "voxels")
```

## What it does not do

This is a library of parts, not a renderer. It has no light sources, no
camera, no scene or model-file loading, and no image output. It also has no
command-line program. `Intersection.f` holds whatever material object the
caller supplies. Shading, sampling and rendering are left to code built on
top of these modules.