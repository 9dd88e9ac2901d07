# voronoi_terrain

Fortune's sweep-line algorithm for Voronoi diagrams in pure Python, and a
small simulation that turns the cells of a Voronoi diagram of moving sites
into circular platforms.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building a Voronoi diagram

```python
from voronoi_terrain.box import Box
from voronoi_terrain.fortune import FortuneAlgorithm
from voronoi_terrain.vector2 import Vector2

points = [Vector2(0.2, 0.3), Vector2(0.7, 0.6), Vector2(0.4, 0.8)]

algorithm = FortuneAlgorithm(points)  # (x, y) tuples are accepted too
algorithm.construct()
# Close the unbounded cells with a box slightly larger than the region of interest.
algorithm.bound(Box(-0.05, -0.05, 1.05, 1.05))
diagram = algorithm.diagram()

# Clip every cell to the unit square.
# Raises ValueError (after processing every cell) if an edge could not be clipped.
diagram.intersect(Box(0.0, 0.0, 1.0, 1.0))

for i in range(len(diagram)):
    site = diagram.site(i)
    print(site.index, site.point)
```

`bound` enlarges the box it is given, where needed, so that it holds every
vertex already in the diagram.

The diagram is a doubly connected edge list (`voronoi_terrain.voronoi_diagram`):
each `Site` has a `Face`, each face's `outer_component` is one `HalfEdge` on
its border, and half-edges link to `prev`, `next`, `twin`, `origin` and
`destination` (`Vertex` objects with a `point`). `VoronoiDiagram.vertices()`
and `VoronoiDiagram.half_edges()` list what the diagram currently holds.

`fortune.compute_convergence_point(p1, p2, p3)` returns the centre of the
circle through three points and the lowest y of that circle; it raises
`ValueError` for collinear points.

## Building blocks

- `vector2.Vector2`: an immutable 2-D vector with `+`, `-`, scalar `*`,
  unary `-`, `orthogonal()`, `dot()`, `norm()`, `distance()` and `det()`.
- `box.Box`: an axis-aligned rectangle (`left`, `bottom`, `right`, `top`,
  y pointing up) with `contains()`, `first_intersection()` for a ray from a
  point inside the box, and `intersections()` for the up to two crossings of
  a segment with the border, nearest first. `box.Side` names the sides and
  `box.Intersection` pairs a side with a point.
- `priority_queue.PriorityQueue`: a max-heap ordered by `<` that stores each
  element's position in its `index` attribute, so elements can be removed
  (`remove(i)`) or re-sorted (`update(i)`) in place. `pop()` on an empty
  queue raises `IndexError`.
- `event`: `site_event()` and `circle_event()` build the sweep-line events.
- `beachline.Beachline`: the red-black tree of parabolic arcs (`Arc`) used
  during the sweep; iterating it yields the arcs from left to right, and
  `beachline.compute_breakpoint()` gives the x of the breakpoint between two
  arcs for a sweep line at a given y.

## Moving platforms

`manager.PlatformManager` scatters seeded random sites inside a
`manager.VoronoiBounds` rectangle and gives each a random height and a
random velocity. On every `tick(dt)` it moves the sites (reversing a site
that reaches the bounds), rebuilds the Voronoi diagram clipped to the
bounds, and moves one `platform.MovingPlatform` per cell to the cell's
centroid, with a radius equal to the distance from that centroid to the
nearest edge of the cell.

```python
from voronoi_terrain.manager import PlatformManager, VoronoiBounds

manager = PlatformManager(
    platform_count=5,
    min_height=0.0,
    max_height=100.0,
    min_speed=5.0,
    max_speed=10.0,
    bounds=VoronoiBounds(-500.0, -500.0, 500.0, 500.0),
    seed=10,
    mesh_size=1.0,
)
manager.initialize_transform_data()
manager.create_platforms()

for _ in range(60):
    manager.tick(1 / 60)

print(manager.positions)  # (x, y, height) of each cell's platform
print(manager.radii)
for platform in manager.platforms:
    print(platform.index, platform.location, platform.scale)
```

The manager also exposes `sites`, `velocities`, `heights` and `edges` (the
clipped edges of each cell as pairs of 3-D points), and a `location` offset
added to every platform's position. A platform's scale is
`radius / mesh_size * 2` in x and y and `0.3` in z. A negative
`platform_count` or a `mesh_size` that is not positive raises `ValueError`.
`manager.point_distance_to_segment()` is the distance helper the radii use.

## What this package does not do

It only computes where platforms are and how large they are. It draws
nothing, has no physics or collision, loads no meshes or materials (a mesh
is represented only by its `mesh_size`), and has no command-line program.