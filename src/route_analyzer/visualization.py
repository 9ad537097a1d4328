#!/usr/bin/env python3
"""
Route visualization using folium maps.
"""

import logging
import folium
from folium.template import Template

from .analysis import AdvancedAnalysisResult, AnalysisResult
from .geometry import Waypoint
from .route import Route

logger = logging.getLogger(__name__)

ROUTE_COLOR = "#2E86AB"
GEOFENCE_COLOR = "#D23C4C"
FREQUENTED_AREA_COLOR = "#69498F"
INTERSECTION_COLOR = "#F18F01"

# Extra margin around the route when fitting the map view
BBOX_BUFFER_KM = 0.5


class AnalysisLegend(folium.MacroElement):
    """Custom legend for route analysis layers with dynamic counts."""

    def __init__(self, analysis: AnalysisResult, advanced: AdvancedAnalysisResult):
        super().__init__()
        self.outside_count = analysis.waypoints_outside_geofence.count
        self.entries_count = analysis.most_frequented_area.entries_count
        self.intersection_count = len(advanced.intersections.waypoints)
        self.path_length_km = f"{advanced.total_path_length.km:.2f}"

        # Use folium's template string approach
        self._template = Template(
            """
        {% macro html(this, kwargs) %}
        <div id="route-analyzer-legend" style="
            position: fixed;
            bottom: 50px;
            left: 50px;
            width: 240px;
            background-color: white;
            border: 2px solid grey;
            z-index: 9999;
            font-size: 13px;
            padding: 12px;
            font-family: Arial, sans-serif;
            border-radius: 5px;
            box-shadow: 0 2px 5px rgba(0,0,0,0.2);
            box-sizing: border-box;
        ">
            <b>Legend</b><br>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #2E86AB; font-size: 18px;">&mdash;</span>
                Route ({{ this.path_length_km }} km)
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #D23C4C; font-weight: bold; font-size: 18px;">&#9675;</span>
                Geofence ({{ this.outside_count }} outside)
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #69498F; font-weight: bold; font-size: 18px;">&#9675;</span>
                Most frequented area ({{ this.entries_count }} entries)
            </div>
            {% if this.intersection_count > 0 %}
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #F18F01; font-weight: bold; font-size: 18px;">&#9679;</span>
                Revisited coordinates ({{ this.intersection_count }})
            </div>
            {% endif %}
        </div>
        {% endmacro %}
        """
        )


def waypoint_to_html(title: str, waypoint: Waypoint) -> str:
    """
    Format a waypoint into HTML for popup display.

    Args:
        title: Bold heading of the popup
        waypoint: The waypoint to describe

    Returns:
        HTML-formatted string
    """
    return (
        f"<b>{title}</b>"
        f"<br><i>timestamp:</i> {waypoint.timestamp}"
        f"<br><i>latitude:</i> {waypoint.latitude}"
        f"<br><i>longitude:</i> {waypoint.longitude}"
    )


def create_route_map(
    route: Route,
    analysis: AnalysisResult,
    advanced: AdvancedAnalysisResult,
    output_filename: str,
) -> None:
    """
    Create an interactive map showing the route and its analysis results, save as HTML.

    Args:
        route: Route object representing the route
        analysis: Primary analysis result
        advanced: Advanced analysis result
        output_filename: Path where HTML map file should be saved

    Raises:
        ValueError: If route is empty
    """
    if not route:
        raise ValueError("Cannot create map for empty route")

    south, west, north, east = route.get_bbox(BBOX_BUFFER_KM)

    center_lat = (south + north) / 2
    center_lon = (west + east) / 2

    logger.debug(f"Creating map centered at ({center_lat:.4f}, {center_lon:.4f})")

    route_map = folium.Map(
        location=[center_lat, center_lon],
        tiles=None,
    )

    folium.TileLayer(
        tiles="CartoDB positron",
        attr=(
            "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
            "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
        ),
        name="Standard",
        control=True,
        show=True,
    ).add_to(route_map)

    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr=(
            "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
            "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
        name="Satellite",
        control=True,
        show=False,
    ).add_to(route_map)

    folium.LayerControl().add_to(route_map)

    folium.PolyLine(
        route.coordinate_list(),
        color=ROUTE_COLOR,
        weight=2,
        opacity=0.6,
        popup="Route",
        z_index=1,
    ).add_to(route_map)

    folium.Marker(
        [route[0].latitude, route[0].longitude],
        popup=folium.Popup(waypoint_to_html("Start", route[0]), max_width=300),
        icon=folium.Icon(color="green", icon="play"),
    ).add_to(route_map)

    folium.Marker(
        [route[-1].latitude, route[-1].longitude],
        popup=folium.Popup(waypoint_to_html("End", route[-1]), max_width=300),
        icon=folium.Icon(color="red", icon="stop"),
    ).add_to(route_map)

    farthest = analysis.max_distance_from_start
    folium.Marker(
        [farthest.waypoint.latitude, farthest.waypoint.longitude],
        popup=folium.Popup(
            waypoint_to_html(
                f"Farthest from start ({farthest.distance_km:.2f} km)",
                farthest.waypoint,
            ),
            max_width=300,
        ),
        icon=folium.Icon(color="orange", icon="flag"),
    ).add_to(route_map)

    # folium circle radii are in meters
    geofence = analysis.waypoints_outside_geofence
    folium.Circle(
        location=[
            geofence.central_waypoint.latitude,
            geofence.central_waypoint.longitude,
        ],
        radius=geofence.area_radius_km * 1000,
        color=GEOFENCE_COLOR,
        fill=False,
        popup=f"Geofence ({geofence.count} waypoints outside)",
    ).add_to(route_map)

    for waypoint in geofence.waypoints:
        folium.CircleMarker(
            location=[waypoint.latitude, waypoint.longitude],
            radius=3,
            color=GEOFENCE_COLOR,
            fill=True,
            popup=folium.Popup(
                waypoint_to_html("Outside geofence", waypoint), max_width=300
            ),
        ).add_to(route_map)

    area = analysis.most_frequented_area
    folium.Circle(
        location=[area.central_waypoint.latitude, area.central_waypoint.longitude],
        radius=area.area_radius_km * 1000,
        color=FREQUENTED_AREA_COLOR,
        fill=True,
        fill_opacity=0.2,
        popup=folium.Popup(
            waypoint_to_html(
                f"Most frequented area ({area.entries_count} entries)",
                area.central_waypoint,
            ),
            max_width=300,
        ),
    ).add_to(route_map)

    for waypoint in advanced.intersections.waypoints:
        folium.CircleMarker(
            location=[waypoint.latitude, waypoint.longitude],
            radius=5,
            color=INTERSECTION_COLOR,
            fill=True,
            popup=folium.Popup(
                waypoint_to_html("Revisited coordinate", waypoint), max_width=300
            ),
        ).add_to(route_map)

    legend = AnalysisLegend(analysis, advanced)
    route_map.add_child(legend)

    bounds = [[south, west], [north, east]]  # Southwest corner  # Northeast corner
    route_map.fit_bounds(bounds)

    route_map.save(output_filename)

    logger.info(f"Map saved to {output_filename}")
