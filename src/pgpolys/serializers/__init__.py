"""Response serializers for loaded polygons."""

from . import geojson

__all__ = ["geojson"]
