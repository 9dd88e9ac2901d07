import math

import pytest

from voronoi_terrain.manager import (
    MAX_FLT,
    PlatformManager,
    VoronoiBounds,
    point_distance_to_segment,
)
from voronoi_terrain.vector2 import Vector2

TOL = 1e-6


def _initialized(**kwargs):
    manager = PlatformManager(**kwargs)
    manager.initialize_transform_data()
    return manager


def _dist2(a, b):
    return math.hypot(a[0] - b.x, a[1] - b.y)


def test_bounds_center_and_extent():
    bounds = VoronoiBounds(-500.0, -500.0, 500.0, 500.0)
    assert bounds.center() == (0.0, 0.0, 0.0)
    assert bounds.extent() == (500.0, 500.0, 0.0)


def test_default_bounds():
    bounds = VoronoiBounds()
    assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (0.0, 0.0, 1.0, 1.0)


def test_point_on_segment_has_zero_distance():
    assert point_distance_to_segment((0.5, 0.0, 0.0), (0.0, 0.0, 0.0), (1.0, 0.0, 0.0)) == 0.0


def test_point_distance_perpendicular():
    assert point_distance_to_segment((0.0, 1.0, 0.0), (-1.0, 0.0, 0.0), (1.0, 0.0, 0.0)) == pytest.approx(1.0)


def test_point_distance_beyond_end():
    assert point_distance_to_segment((3.0, 0.0, 0.0), (0.0, 0.0, 0.0), (1.0, 0.0, 0.0)) == pytest.approx(2.0)


def test_point_distance_degenerate_segment():
    assert point_distance_to_segment((3.0, 4.0, 0.0), (0.0, 0.0, 0.0), (0.0, 0.0, 0.0)) == pytest.approx(5.0)


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        PlatformManager(platform_count=-1)


def test_zero_mesh_size_rejected():
    with pytest.raises(ValueError):
        PlatformManager(mesh_size=0.0)


def test_random_points_are_deterministic():
    a = _initialized(seed=3)
    b = _initialized(seed=3)
    assert a.sites == b.sites
    assert a.velocities == b.velocities
    assert a.heights == b.heights


def test_random_points_respect_ranges():
    manager = PlatformManager(platform_count=20, min_height=10.0, max_height=20.0)
    manager.generate_random_points()
    b = manager.bounds
    assert len(manager.sites) == 20
    for site, velocity, height in zip(manager.sites, manager.velocities, manager.heights):
        assert b.min_x <= site.x <= b.max_x
        assert b.min_y <= site.y <= b.max_y
        assert 10.0 <= height <= 20.0
        assert manager.min_speed <= abs(velocity.x) <= manager.max_speed
        assert manager.min_speed <= abs(velocity.y) <= manager.max_speed


def test_update_moves_sites_by_velocity():
    manager = PlatformManager(platform_count=1)
    manager.sites = [Vector2(0.0, 0.0)]
    manager.velocities = [Vector2(10.0, -5.0)]
    manager.update_random_points(2.0)
    assert manager.sites[0] == Vector2(20.0, -10.0)
    assert manager.velocities[0] == Vector2(10.0, -5.0)


def test_update_bounces_on_right_side():
    manager = PlatformManager(platform_count=1)
    manager.sites = [Vector2(499.0, 0.0)]
    manager.velocities = [Vector2(10.0, 3.0)]
    manager.update_random_points(1.0)
    assert manager.sites[0].x == 500.0
    assert manager.velocities[0] == Vector2(-10.0, -3.0)


def test_update_bounces_on_bottom_side():
    manager = PlatformManager(platform_count=1)
    manager.sites = [Vector2(0.0, -499.0)]
    manager.velocities = [Vector2(2.0, -10.0)]
    manager.update_random_points(1.0)
    assert manager.sites[0].y == -500.0
    assert manager.velocities[0] == Vector2(-2.0, 10.0)


def test_every_cell_has_edges_inside_bounds():
    manager = _initialized()
    b = manager.bounds
    assert len(manager.edges) == manager.platform_count
    for edges in manager.edges:
        assert edges
        for start, end in edges:
            for x, y, z in (start, end):
                assert b.min_x - TOL <= x <= b.max_x + TOL
                assert b.min_y - TOL <= y <= b.max_y + TOL
                assert z == 0.0


def test_cell_vertices_are_nearest_to_their_site():
    manager = _initialized(platform_count=8, seed=42)
    for i, edges in enumerate(manager.edges):
        for start, end in edges:
            for vertex in (start, end):
                own = _dist2(vertex, manager.sites[i])
                for site in manager.sites:
                    assert own <= _dist2(vertex, site) + TOL


def test_cell_edges_form_closed_loop():
    manager = _initialized()
    for edges in manager.edges:
        for (_, end), (start, _) in zip(edges, edges[1:] + edges[:1]):
            assert end == pytest.approx(start)


def test_positions_lie_in_own_cell_at_height():
    manager = _initialized(platform_count=6, seed=7)
    assert len(manager.positions) == 6
    for i, position in enumerate(manager.positions):
        assert position[2] == manager.heights[i]
        own = _dist2(position, manager.sites[i])
        for site in manager.sites:
            assert own <= _dist2(position, site) + TOL


def test_radius_is_distance_to_nearest_edge():
    manager = _initialized()
    for edges, position, radius in zip(manager.edges, manager.positions, manager.radii):
        center = (position[0], position[1], 0.0)
        distances = [point_distance_to_segment(center, a, b) for a, b in edges]
        assert radius > 0.0
        assert radius == min(distances)


def test_single_site_has_no_edges():
    manager = _initialized(platform_count=1)
    assert manager.edges == [[]]
    assert math.isnan(manager.positions[0][0])
    assert manager.radii == [MAX_FLT]


def test_no_platforms():
    manager = _initialized(platform_count=0)
    manager.create_platforms()
    assert manager.edges == []
    assert manager.platforms == []


def test_create_platforms_places_them_on_cells():
    manager = _initialized(mesh_size=2.0)
    manager.location = (100.0, 0.0, 0.0)
    manager.create_platforms()
    assert len(manager.platforms) == manager.platform_count
    for i, platform in enumerate(manager.platforms):
        x, y, z = manager.positions[i]
        assert platform.index == i
        assert platform.location == pytest.approx((x + 100.0, y, z))
        assert platform.target_scale == pytest.approx(manager.radii[i])


def test_create_platforms_without_data_leaves_them_uninitialized():
    manager = PlatformManager(platform_count=3)
    manager.create_platforms()
    assert [p.index for p in manager.platforms] == [-1, -1, -1]


def test_create_platforms_replaces_old_ones():
    manager = _initialized()
    manager.create_platforms()
    first = list(manager.platforms)
    manager.create_platforms()
    assert len(manager.platforms) == manager.platform_count
    assert all(new is not old for new, old in zip(manager.platforms, first))


def test_destroy_platforms():
    manager = _initialized()
    manager.create_platforms()
    manager.destroy_platforms()
    assert manager.platforms == []


def test_tick_moves_platforms_with_cells():
    manager = _initialized(mesh_size=2.0)
    manager.create_platforms()
    before = list(manager.sites)
    manager.tick(0.5)
    assert manager.sites != before
    for platform, position, radius in zip(manager.platforms, manager.positions, manager.radii):
        assert platform.location == pytest.approx(position)
        assert platform.target_scale == pytest.approx(radius)
        assert platform.scale[0] == pytest.approx(radius)


def test_update_transform_data_keeps_counts():
    manager = _initialized()
    manager.update_transform_data(1.0)
    assert len(manager.sites) == manager.platform_count
    assert len(manager.positions) == manager.platform_count
    assert len(manager.radii) == manager.platform_count