"""
Polygon loader. Reads a PostGIS-style table into polygons plus attributes.

This is the only place where the load pipeline is assembled:
1. Normalize the table reference
2. Resolve the geometry column's single SRID
3. Build and execute the data query
4. Parse each row's WKT into a Polygon tagged with its id and the CRS
5. Assemble the attribute table when extra columns were requested

Any failure aborts the load; no partial result is returned.
"""

import logging
from typing import Optional, Union

from .config import get_settings
from .geometry import wkt_to_polygon
from .models import AttributeTable, PolygonCollection, PolygonFrame
from .sql import build_select_sql, fetch_rows
from .srid import crs_from_srid, resolve_srid
from .tables import TableRef, normalize_table

logger = logging.getLogger(__name__)

ID_ALIAS = "tgid"
WKT_ALIAS = "wkt"


def load_polygons(
    conn,
    table: TableRef,
    geom: Optional[str] = None,
    gid: Optional[str] = None,
    other_cols: Optional[str] = "*",
    query: Optional[str] = None,
) -> Union[PolygonCollection, PolygonFrame]:
    """
    Load polygon geometries from ``table`` over a DB-API connection.

    Args:
        conn: open connection; each query runs on its own cursor.
        table: "table", "schema.table" or ("schema", "table").
        geom: geometry column (default from settings, "geom").
        gid: identifier column or expression. Defaults to a row
            sequence (``row_number() over()``) numbered in result order.
            Should be unique when other_cols is given.
        other_cols: comma-separated extra columns, "*" for all, or None
            for geometry only.
        query: raw SQL appended after the WHERE clause, e.g.
            "AND area > 1000000 ORDER BY population LIMIT 10".

    All names and ``query`` are interpolated unescaped; the caller is
    responsible for passing safe SQL.

    Returns:
        PolygonCollection when other_cols is None, else PolygonFrame.
    """
    settings = get_settings()
    table_name = normalize_table(table)
    if geom is None:
        geom = settings.geometry_column
    sequence_ids = gid is None
    if sequence_ids:
        gid = settings.row_id_expression

    srid = resolve_srid(conn, table_name, geom)
    crs = crs_from_srid(srid, settings.crs_authority)

    sql = build_select_sql(table_name, geom, gid, other_cols, query)
    columns, rows = fetch_rows(conn, sql)

    # row_number() is computed before any ORDER BY in ``query``, so
    # sequence ids are numbered here in the order rows came back.
    if sequence_ids:
        ids = list(range(1, len(rows) + 1))
    else:
        ids = [row[0] for row in rows]

    polygons = [wkt_to_polygon(row[1], feature_id, crs) for feature_id, row in zip(ids, rows)]
    collection = PolygonCollection(polygons=polygons, srid=srid, crs=crs)

    logger.info(
        "Loaded %d polygons from %s (SRID %s, %s)",
        len(collection),
        table_name,
        srid,
        "geometry only" if other_cols is None else "with attributes",
    )

    if other_cols is None:
        return collection

    attributes = _build_attributes(columns, rows, collection.ids, geom)
    return PolygonFrame(polygons=collection, attributes=attributes)


def _build_attributes(
    columns: list[str], rows: list[tuple], ids: list, geom: str
) -> AttributeTable:
    """
    Build the attribute table from the data query's rows.

    The geometry source column and the tgid/wkt helper columns are
    dropped if present; a wildcard selection may or may not include them.
    """
    helpers = {geom, ID_ALIAS, WKT_ALIAS}
    keep = [i for i, name in enumerate(columns) if name not in helpers]

    return AttributeTable(
        ids=ids,
        columns=[columns[i] for i in keep],
        rows=[tuple(row[i] for i in keep) for row in rows],
    )
