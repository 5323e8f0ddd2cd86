"""
WKT parsing and ring extraction.

Handles:
- WKT -> Shapely Polygon/MultiPolygon with type checking
- Ring coordinate extraction (exteriors and holes)
- Tagging parsed geometries with a row id and CRS
"""

from typing import Any, Optional

import pyproj
from shapely import wkt
from shapely.errors import ShapelyError

from .errors import MalformedGeometry
from .models import Polygon

POLYGONAL_TYPES = ("Polygon", "MultiPolygon")


def parse_polygon(wkt_text: str, feature_id: Any = None):
    """Decode WKT to a Shapely Polygon or MultiPolygon."""
    if not isinstance(wkt_text, str):
        raise MalformedGeometry(feature_id, f"expected WKT text, got {type(wkt_text).__name__}")
    try:
        geom = wkt.loads(wkt_text)
    except ShapelyError as exc:
        raise MalformedGeometry(feature_id, str(exc), wkt_text) from exc
    if geom.geom_type not in POLYGONAL_TYPES:
        raise MalformedGeometry(
            feature_id, f"{geom.geom_type} is not polygonal", wkt_text
        )
    return geom


def polygon_rings(geom) -> list[list[tuple]]:
    """
    Extract ring coordinate lists from a Polygon or MultiPolygon.

    Each part contributes its exterior ring followed by its interior
    rings (holes). Rings are closed: first and last coordinates match.
    """
    if geom.geom_type == "Polygon":
        parts = [geom]
    elif geom.geom_type == "MultiPolygon":
        parts = list(geom.geoms)
    else:
        raise ValueError(f"Not a polygonal geometry: {geom.geom_type}")

    rings = []
    for poly in parts:
        if poly.is_empty:
            continue
        rings.append(list(poly.exterior.coords))
        for interior in poly.interiors:
            rings.append(list(interior.coords))
    return rings


def wkt_to_polygon(
    wkt_text: str,
    feature_id: Any,
    crs: Optional[pyproj.CRS] = None,
) -> Polygon:
    """Parse one row's WKT and tag it with its id and the shared CRS."""
    return Polygon(id=feature_id, geometry=parse_polygon(wkt_text, feature_id), crs=crs)
