"""KML rendering of a voyage for map viewers."""
from __future__ import annotations

from typing import List

from voyage_tracker.core.geodesy import Geocoordinate
from voyage_tracker.core.leg import Leg
from voyage_tracker.core.timeutil import format_iso
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.core.waypoint import Waypoint


STYLE_ICONS = {
    "location": "http://maps.google.com/mapfiles/kml/shapes/sailing.png",
    "message": "http://maps.google.com/mapfiles/kml/shapes/post_office.png",
    "ship_log": "http://maps.google.com/mapfiles/kml/shapes/man.png",
}


def _cdata(text: str) -> str:
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _xml_text(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def separate_thousands(value: float) -> str:
    return f"{int(value):,}"


def point_kml(location: Geocoordinate) -> str:
    return f"<Point><coordinates>{location.longitude:f},{location.latitude:f}</coordinates></Point>"


def placemark_kml(point: Waypoint, indent: int = 0, time_info: bool = False) -> str:
    """Render a located waypoint as a ``<Placemark>``; unlocated points render as nothing."""
    if point.location is None:
        return ""
    i = "\t" * indent
    ii = i + "\t"
    lines = [
        f"{i}<Placemark>",
        f"{ii}<name>{_cdata(point.title or '')}</name>",
        f"{ii}<styleUrl>#{point.style}</styleUrl>",
        f"{ii}{point_kml(point.location)}",
    ]
    if time_info:
        lines.append(f"{ii}<TimeStamp><when>{format_iso(point.time)}</when></TimeStamp>")
    if point.text:
        lines.append(f"{ii}<description>{_cdata(point.text)}</description>")
    lines.append(f"{i}</Placemark>")
    return "\n".join(lines) + "\n"


def leg_folder_kml(leg: Leg, waypoints: List[Waypoint], indent: int = 0, time_info: bool = False) -> str:
    i = "\t" * indent
    ii = i + "\t"
    iii = ii + "\t"
    parts = [
        f"{i}<Folder>\n",
        f"{ii}<name>{_cdata(leg.name)}</name>\n",
        f"{ii}<open>0</open>\n",
    ]
    if time_info:
        parts.append(
            f"{ii}<TimeSpan>\n{iii}<begin>{format_iso(leg.start)}</begin>\n"
            f"{iii}<end>{format_iso(leg.end)}</end>\n{ii}</TimeSpan>\n"
        )
    parts.extend(placemark_kml(point, indent + 1, time_info) for point in waypoints if leg.contains(point.time))
    parts.append(f"{i}</Folder>\n")
    return "".join(parts)


def route_kml(voyage: Voyage, indent: int = 0, time_info: bool = False) -> str:
    """The observed track as one ``LineString`` placemark with route totals."""
    i = "\t" * indent
    ii = i + "\t"
    iii = ii + "\t"
    description = f"{separate_thousands(voyage.distance)} nmi"
    if voyage.average_speed is not None:
        description += f"\nAverage speed: {voyage.average_speed:.2f} knots"
    if voyage.max_speed is not None:
        description += f"\nTop speed: {voyage.max_speed:.2f} knots"
    coordinates = " ".join(
        f"{point.location.longitude:f},{point.location.latitude:f}"
        for point in voyage.waypoints if point.is_observed
    )
    parts = [f"{i}<Placemark>\n", f"{ii}<name>Route</name>\n"]
    if time_info and voyage.waypoints:
        parts.append(
            f"{ii}<TimeSpan>\n{iii}<begin>{format_iso(voyage.waypoints[0].time)}</begin>\n"
            f"{iii}<end>{format_iso(voyage.waypoints[-1].time)}</end>\n{ii}</TimeSpan>\n"
        )
    parts.append(f"{ii}<description>{_xml_text(description)}</description>\n")
    parts.append(f"{ii}<LineString>\n{iii}<coordinates>{coordinates}</coordinates>\n{ii}</LineString>\n")
    parts.append(f"{i}</Placemark>\n")
    return "".join(parts)


def render_kml(voyage: Voyage, time_info: bool = False, leg_folders: bool = False) -> str:
    """Render the voyage as a KML document.

    Args:
        voyage: An up-to-date voyage.
        time_info: Add timestamps and time spans for time-slider viewers.
        leg_folders: Group placemarks into one folder per leg; points outside
            every leg follow the folders.
    """
    author = voyage.author
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>\n',
        '<kml xmlns="http://www.opengis.net/kml/2.2" xmlns:atom="http://www.w3.org/2005/Atom">\n',
        "<Document>\n",
        f"\t<name>{_xml_text(voyage.name)}</name>\n",
        f"\t<description>{_xml_text(voyage.description)}</description>\n",
    ]
    if author:
        parts.append(f"\t<atom:author><atom:name>{_xml_text(author)}</atom:name></atom:author>\n")
    for style, href in STYLE_ICONS.items():
        parts.append(f'\t<Style id="{style}"><IconStyle><Icon><href>{href}</href></Icon></IconStyle></Style>\n')
    parts.append("\n")

    if leg_folders:
        parts.append("\n".join(leg_folder_kml(leg, voyage.waypoints, 1, time_info) for leg in voyage.legs))
        parts.extend(placemark_kml(point, 1, time_info) for point in voyage.unassigned_waypoints())
    else:
        parts.extend(placemark_kml(point, 1, time_info) for point in voyage.waypoints)

    parts.append("\n")
    parts.append(route_kml(voyage, 1, time_info))
    parts.append("</Document>\n</kml>\n")
    return "".join(parts)
