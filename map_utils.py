"""
Kartfunktioner för visualisering
"""

import folium
from typing import List, Optional, Sequence

from models import Coordinate, Location


def create_map(
    center: List[float],
    path: Sequence[Coordinate] = (),
    origin: Optional[Location] = None,
    destination: Optional[Location] = None,
    waypoints: Sequence[Location] = (),
    distance_label: str = ""
) -> folium.Map:
    """
    Skapa Folium-karta med rutt och markörer

    Args:
        center: Kartans centrum [lat, lon]
        path: Avkodad rutt
        origin: Startpunkt
        destination: Slutpunkt
        waypoints: Via-punkter i ordning
        distance_label: Distans att visa i ruttens popup

    Returns:
        Folium Map-objekt
    """
    m = folium.Map(
        location=center,
        zoom_start=14,
        control_scale=True
    )

    if origin:
        folium.Marker(
            [origin.latitude, origin.longitude],
            popup=origin.name or "Start",
            icon=folium.Icon(color="green", icon="play")
        ).add_to(m)

    for i, waypoint in enumerate(waypoints, start=1):
        folium.Marker(
            [waypoint.latitude, waypoint.longitude],
            popup=waypoint.name or f"Via {i}",
            icon=folium.Icon(color="orange", icon="flag")
        ).add_to(m)

    if destination:
        folium.Marker(
            [destination.latitude, destination.longitude],
            popup=destination.name or "Mål",
            icon=folium.Icon(color="red", icon="stop")
        ).add_to(m)

    route_coords = [[p.latitude, p.longitude] for p in path]
    if route_coords:
        folium.PolyLine(
            route_coords,
            color="blue",
            weight=4,
            opacity=0.8,
            popup=distance_label or None
        ).add_to(m)

        # Anpassa zoom för att visa hela rutten
        if len(route_coords) > 1:
            bounds = [[min(p[0] for p in route_coords), min(p[1] for p in route_coords)],
                      [max(p[0] for p in route_coords), max(p[1] for p in route_coords)]]
            m.fit_bounds(bounds)

    return m
