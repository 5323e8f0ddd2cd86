"""
SQL text construction and execution.

Table names, column names, the identifier expression and the trailing
``query`` fragment are interpolated verbatim. They are caller-trusted raw
SQL: nothing here quotes, escapes or validates them.
"""

import logging
from contextlib import closing
from typing import Optional

logger = logging.getLogger(__name__)


def build_srid_sql(table: str, geom: str) -> str:
    """SELECT the distinct SRIDs of the non-null geometries in ``table``."""
    return (
        f"SELECT DISTINCT(ST_SRID({geom})) FROM {table} "
        f"WHERE {geom} IS NOT NULL;"
    )


def build_select_sql(
    table: str,
    geom: str,
    gid: str,
    other_cols: Optional[str] = None,
    query: Optional[str] = None,
) -> str:
    """
    Build the data query.

    Columns are always ``tgid`` (the identifier expression) and ``wkt``;
    ``other_cols`` is appended when given. ``query`` follows the WHERE
    clause, so it may add predicates (``AND ...``), ORDER BY or LIMIT.
    """
    columns = f"{gid} AS tgid, ST_AsText({geom}) AS wkt"
    if other_cols is not None:
        columns = f"{columns}, {other_cols}"
    sql = f"SELECT {columns} FROM {table} WHERE {geom} IS NOT NULL"
    if query:
        sql = f"{sql} {query}"
    return f"{sql};"


def fetch_rows(conn, sql: str) -> tuple[list[str], list[tuple]]:
    """Execute ``sql`` on a new cursor of ``conn``.

    Returns column names and all rows. Driver errors propagate unchanged.
    """
    logger.debug("Executing: %s", sql)
    with closing(conn.cursor()) as cursor:
        cursor.execute(sql)
        rows = [tuple(row) for row in cursor.fetchall()]
        columns = [d[0] for d in cursor.description or []]
    return columns, rows
