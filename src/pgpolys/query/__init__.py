"""PostGIS polygon loader: table rows to tagged polygons and attributes."""

from .config import LoaderSettings, get_settings
from .engine import load_polygons
from .errors import (
    AmbiguousSpatialReference,
    InvalidArgument,
    MalformedGeometry,
    PolygonLoadError,
)
from .models import AttributeTable, Polygon, PolygonCollection, PolygonFrame

__all__ = [
    "load_polygons",
    "get_settings",
    "LoaderSettings",
    "Polygon",
    "PolygonCollection",
    "AttributeTable",
    "PolygonFrame",
    "PolygonLoadError",
    "InvalidArgument",
    "AmbiguousSpatialReference",
    "MalformedGeometry",
]
