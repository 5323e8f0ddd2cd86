"""Spatial reference resolution: table SRID and its CRS."""

import logging
from typing import Optional

import pyproj

from .config import get_settings
from .errors import AmbiguousSpatialReference
from .sql import build_srid_sql, fetch_rows

logger = logging.getLogger(__name__)


def resolve_srid(conn, table: str, geom: str) -> int:
    """
    Return the single SRID used by ``table.geom``.

    Zero rows (no non-null geometries) and several distinct SRIDs both
    raise AmbiguousSpatialReference.
    """
    sql = build_srid_sql(table, geom)
    _, rows = fetch_rows(conn, sql)
    if len(rows) != 1:
        raise AmbiguousSpatialReference(table, geom, [row[0] for row in rows], sql)
    return int(rows[0][0])


def crs_from_srid(srid: int, authority: Optional[str] = None) -> Optional[pyproj.CRS]:
    """Look up the CRS for ``srid``.

    SRID 0 is PostGIS's "unknown" and yields None (untagged geometries).
    """
    if srid == 0:
        logger.warning("SRID 0 (unknown); polygons will carry no CRS")
        return None
    authority = authority or get_settings().crs_authority
    return pyproj.CRS.from_user_input(f"{authority}:{srid}")
