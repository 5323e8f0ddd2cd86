"""Errors raised by the polygon loader.

Database driver errors are never wrapped; they reach the caller unchanged.
"""

from typing import Any, Optional


class PolygonLoadError(Exception):
    """Base class for loader errors."""


class InvalidArgument(PolygonLoadError, ValueError):
    """A call parameter is malformed (e.g. a table reference with 3 parts)."""


class AmbiguousSpatialReference(PolygonLoadError):
    """The geometry column does not resolve to exactly one SRID."""

    def __init__(self, table: str, geom: str, srids: list, sql: Optional[str] = None):
        self.table = table
        self.geom = geom
        self.srids = srids
        self.sql = sql
        if srids:
            detail = f"multiple SRIDs {srids}"
        else:
            detail = "no non-null geometries, SRID query returned no rows"
        if sql:
            detail = f"{detail} ({sql})"
        super().__init__(f"{table}.{geom}: {detail}")


class MalformedGeometry(PolygonLoadError, ValueError):
    """A row's WKT text is not a parseable polygon or multipolygon."""

    def __init__(self, feature_id: Any, reason: str, wkt: Optional[str] = None):
        self.feature_id = feature_id
        self.wkt = wkt
        super().__init__(f"Feature {feature_id!r}: {reason}")
