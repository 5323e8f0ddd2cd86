"""
Serialize loaded polygons -> GeoJSON FeatureCollection.
"""

import datetime
import decimal
from typing import Union

from shapely.geometry import mapping as geojson_mapping

from pgpolys.query.models import PolygonCollection, PolygonFrame


def serialize(result: Union[PolygonCollection, PolygonFrame]) -> dict:
    """Convert a PolygonCollection or PolygonFrame to a FeatureCollection."""

    if isinstance(result, PolygonFrame):
        pairs = list(result)
    else:
        pairs = [(polygon, {}) for polygon in result]

    features = []
    for polygon, record in pairs:
        features.append(
            {
                "type": "Feature",
                "id": _to_json_safe(polygon.id),
                "geometry": geojson_mapping(polygon.geometry),
                "properties": {k: _to_json_safe(v) for k, v in record.items()},
            }
        )

    return {
        "type": "FeatureCollection",
        "features": features,
    }


def _to_json_safe(val):
    """Convert database values to JSON-serializable Python types."""
    if val is None:
        return None
    if isinstance(val, (bytes, bytearray, memoryview)):
        return None
    if isinstance(val, decimal.Decimal):
        return float(val)
    if isinstance(val, (datetime.date, datetime.datetime, datetime.time)):
        return val.isoformat()
    if hasattr(val, "as_py"):
        return val.as_py()
    if isinstance(val, (str, int, float, bool, list, dict)):
        return val
    # inet, uuid, range and other driver types
    return str(val)
