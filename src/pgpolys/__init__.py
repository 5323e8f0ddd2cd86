"""Load PostGIS polygon tables into Shapely geometries with attributes."""

from .query import (
    AmbiguousSpatialReference,
    AttributeTable,
    InvalidArgument,
    MalformedGeometry,
    Polygon,
    PolygonCollection,
    PolygonFrame,
    load_polygons,
)

__version__ = "0.1.0"

__all__ = [
    "load_polygons",
    "Polygon",
    "PolygonCollection",
    "AttributeTable",
    "PolygonFrame",
    "InvalidArgument",
    "AmbiguousSpatialReference",
    "MalformedGeometry",
]
