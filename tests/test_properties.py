import pytest
from hypothesis import given, strategies as st

from route_analyzer.analysis import (
    calculate_path_length,
    find_intersections,
    max_distance_between_points,
    max_distance_from_start,
    most_frequented_area,
    waypoints_outside_geofence,
)
from route_analyzer.geometry import Waypoint, default_frequented_area_radius, haversine

EARTH_RADIUS_KM = 6371.0

# Strategy for valid GPS coordinates
valid_lat = st.floats(-90.0, 90.0)
valid_lon = st.floats(-180.0, 180.0)
valid_radius = st.floats(1.0, 10000.0)
valid_waypoint = st.builds(
    Waypoint,
    timestamp=st.integers(0, 2**40),
    latitude=valid_lat,
    longitude=valid_lon,
)
# A small coordinate grid makes exact repeats likely
grid_waypoint = st.builds(
    Waypoint,
    timestamp=st.integers(0, 100),
    latitude=st.sampled_from([45.0, 45.1, 45.2]),
    longitude=st.sampled_from([7.0, 7.1]),
)
routes = st.lists(valid_waypoint, min_size=1, max_size=15)


class TestDistanceProperties:

    @given(valid_lat, valid_lon, valid_radius)
    def test_distance_to_self_is_zero(self, lat, lon, radius):
        """Distance from a point to itself is always zero."""
        assert haversine(lat, lon, lat, lon, radius) == 0

    @given(valid_lat, valid_lon, valid_lat, valid_lon)
    def test_distance_is_non_negative(self, lat1, lon1, lat2, lon2):
        assert haversine(lat1, lon1, lat2, lon2, EARTH_RADIUS_KM) >= 0

    @given(valid_lat, valid_lon, valid_lat, valid_lon)
    def test_distance_is_symmetric(self, lat1, lon1, lat2, lon2):
        """Distance from A to B equals distance from B to A."""
        dist_ab = haversine(lat1, lon1, lat2, lon2, EARTH_RADIUS_KM)
        dist_ba = haversine(lat2, lon2, lat1, lon1, EARTH_RADIUS_KM)
        assert dist_ab == pytest.approx(dist_ba, abs=1e-9)

    @given(valid_lat, valid_lon, valid_lat, valid_lon)
    def test_distance_is_bounded_by_half_circumference(self, lat1, lon1, lat2, lon2):
        distance = haversine(lat1, lon1, lat2, lon2, EARTH_RADIUS_KM)
        assert distance <= EARTH_RADIUS_KM * 3.141592653589793 + 1e-9


class TestAnalysisProperties:

    @given(routes)
    def test_farthest_pair_bounds_farthest_from_start(self, waypoints):
        from_start = max_distance_from_start(waypoints, EARTH_RADIUS_KM)
        pair = max_distance_between_points(waypoints, EARTH_RADIUS_KM)
        assert pair.km >= from_start.distance_km

    @given(routes)
    def test_path_length_bounds_farthest_from_start(self, waypoints):
        """Walking the route covers at least the straight distance to any waypoint."""
        from_start = max_distance_from_start(waypoints, EARTH_RADIUS_KM)
        path = calculate_path_length(waypoints, EARTH_RADIUS_KM)
        assert path.km >= from_start.distance_km - 1e-3

    @given(routes)
    def test_farthest_pair_is_drawn_from_route(self, waypoints):
        pair = max_distance_between_points(waypoints, EARTH_RADIUS_KM)
        assert pair.waypoint1 in waypoints
        assert pair.waypoint2 in waypoints

    @given(routes, st.floats(0.0, 500.0))
    def test_frequented_area_count_in_range(self, waypoints, radius):
        result = most_frequented_area(waypoints, radius, EARTH_RADIUS_KM)
        assert 1 <= result.entries_count <= len(waypoints)

    @given(routes, valid_lat, valid_lon, st.floats(0.0, 5000.0))
    def test_geofence_filter_is_ordered_subsequence(self, waypoints, lat, lon, radius):
        result = waypoints_outside_geofence(waypoints, lat, lon, radius, EARTH_RADIUS_KM)
        assert result.count == len(result.waypoints)
        remaining = iter(waypoints)
        assert all(waypoint in remaining for waypoint in result.waypoints)

    @given(st.lists(grid_waypoint, max_size=20))
    def test_intersections_count_repeats(self, waypoints):
        result = find_intersections(waypoints)
        distinct = {(w.latitude, w.longitude) for w in waypoints}
        assert len(result.waypoints) == len(waypoints) - len(distinct)

    @given(st.floats(0.0, 1e6))
    def test_default_radius_rule(self, max_distance):
        radius = default_frequented_area_radius(max_distance)
        product = max_distance * 0.1
        if product < 1:
            assert radius == max(product, 0.1)
        else:
            assert radius == product
