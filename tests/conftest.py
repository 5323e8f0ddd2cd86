"""
Shared test fixtures.

Creates an in-memory DuckDB database holding PostGIS-like tables. Geometry
columns store EWKT text ("SRID=4326;POLYGON(...)") and two SQL macros
provide ST_SRID and ST_AsText over it, so the loader's generated SQL runs
unchanged.
"""

import sqlite3
from ipaddress import IPv4Address

import duckdb
import pytest
from shapely.geometry import box


def state_box(i: int):
    """Geometry of test row ``i`` in the states table."""
    return box(i, 0, i + 0.5, 1)


def state_area(i: int) -> float:
    return i * 200000.0


def state_population(i: int) -> int:
    return (i * 37) % 101 * 1000


@pytest.fixture(autouse=True)
def default_settings():
    """Use built-in settings for every test, independent of config files."""
    from pgpolys.query.config import LoaderSettings, reset_settings, set_settings

    set_settings(LoaderSettings())
    yield
    reset_settings()


@pytest.fixture
def duck():
    """DuckDB connection with the test tables."""
    conn = duckdb.connect()
    conn.execute("SET threads = 1")
    conn.execute(
        r"CREATE MACRO ST_SRID(g) AS "
        r"TRY_CAST(regexp_extract(g, '^SRID=(\d+);', 1) AS INTEGER)"
    )
    conn.execute(r"CREATE MACRO ST_AsText(g) AS regexp_replace(g, '^SRID=\d+;', '')")

    _create_states_table(conn)
    _create_counties_table(conn)

    conn.execute("CREATE TABLE mixed (gid INTEGER, geom VARCHAR)")
    conn.execute(
        "INSERT INTO mixed VALUES "
        "(1, 'SRID=4326;POLYGON((0 0, 1 0, 1 1, 0 0))'), "
        "(2, 'SRID=3857;POLYGON((0 0, 1 0, 1 1, 0 0))')"
    )

    conn.execute("CREATE TABLE no_geoms (gid INTEGER, geom VARCHAR)")
    conn.execute("INSERT INTO no_geoms VALUES (1, NULL), (2, NULL)")

    conn.execute("CREATE TABLE broken (gid INTEGER, geom VARCHAR)")
    conn.execute(
        "INSERT INTO broken VALUES "
        "(1, 'SRID=4326;POLYGON((0 0, 1 0, 1 1, 0 0))'), "
        "(2, 'SRID=4326;POLYGON((0 0, 1 0, 1 1'), "
        "(3, 'SRID=4326;POLYGON((5 5, 6 5, 6 6, 5 5))')"
    )

    conn.execute("CREATE TABLE sites (gid INTEGER, geom VARCHAR)")
    conn.execute("INSERT INTO sites VALUES (1, 'SRID=4326;POINT(1 2)')")

    conn.execute("CREATE TABLE sketches (gid INTEGER, geom VARCHAR)")
    conn.execute("INSERT INTO sketches VALUES (1, 'SRID=0;POLYGON((0 0, 1 0, 1 1, 0 0))')")

    yield conn
    conn.close()


@pytest.fixture
def recording(duck):
    """The duck connection, recording every statement executed."""
    return RecordingConnection(duck)


class RecordingConnection:
    """DB-API connection proxy that keeps the SQL text it executes."""

    def __init__(self, conn):
        self._conn = conn
        self.statements = []

    def cursor(self):
        return _RecordingCursor(self._conn.cursor(), self.statements)


class _RecordingCursor:
    def __init__(self, cursor, statements):
        self._cursor = cursor
        self._statements = statements

    def execute(self, sql):
        self._statements.append(sql)
        return self._cursor.execute(sql)

    def __getattr__(self, name):
        return getattr(self._cursor, name)


def _create_states_table(conn):
    """Create states with 20 rectangles (SRID 4326) and one NULL geometry."""
    conn.execute(
        "CREATE TABLE states (gid INTEGER, name VARCHAR, area DOUBLE, "
        "population INTEGER, geom VARCHAR)"
    )
    rows = [
        (i, f"S{i:02d}", state_area(i), state_population(i), f"SRID=4326;{state_box(i).wkt}")
        for i in range(1, 21)
    ]
    rows.append((21, "S21", 0.0, 0, None))
    conn.executemany("INSERT INTO states VALUES (?, ?, ?, ?, ?)", rows)


def _create_counties_table(conn):
    """Create gis.counties with a holed polygon and a multipolygon (SRID 3857)."""
    conn.execute("CREATE SCHEMA gis")
    conn.execute("CREATE TABLE gis.counties (county_id VARCHAR, shape VARCHAR)")
    conn.execute(
        "INSERT INTO gis.counties VALUES "
        "('A', 'SRID=3857;POLYGON((0 0, 10 0, 10 10, 0 10, 0 0), "
        "(2 2, 4 2, 4 4, 2 4, 2 2))'), "
        "('B', 'SRID=3857;MULTIPOLYGON(((0 0, 10 0, 10 10, 0 10, 0 0)), "
        "((20 20, 30 20, 30 30, 20 30, 20 20)))')"
    )


class CannedConnection:
    """DB-API connection answering each statement with the next canned result."""

    def __init__(self, *results):
        self._results = list(results)
        self.statements = []

    def cursor(self):
        return _CannedCursor(self)


class _CannedCursor:
    def __init__(self, conn):
        self._conn = conn
        self._rows = []
        self.description = None

    def execute(self, sql):
        self._conn.statements.append(sql)
        columns, rows = self._conn._results.pop(0)
        self.description = [(name, None, None, None, None, None, None) for name in columns]
        self._rows = rows

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


@pytest.fixture
def driver_values():
    """Connection returning values a PostgreSQL driver produces for inet and jsonb."""
    srid = (["st_srid"], [(4326,)])
    data = (
        ["tgid", "wkt", "gid", "addr", "doc", "geom"],
        [
            (1, "POLYGON((0 0, 1 0, 1 1, 0 0))", 1, IPv4Address("10.0.0.1"), {"a": 1}, "0103..."),
            (2, "POLYGON((2 0, 3 0, 3 1, 2 0))", 2, IPv4Address("10.0.0.2"), [1, 2], "0103..."),
            (3, "POLYGON((4 0, 5 0, 5 1, 4 0))", 3, None, None, "0103..."),
        ],
    )
    return CannedConnection(srid, data)


@pytest.fixture
def lite():
    """SQLite connection with an untyped column holding mixed values."""
    conn = sqlite3.connect(":memory:")
    conn.create_function(
        "ST_SRID", 1, lambda g: None if g is None else int(g.split(";")[0].split("=")[1])
    )
    conn.create_function("ST_AsText", 1, lambda g: None if g is None else g.split(";", 1)[1])
    conn.execute("CREATE TABLE plots (gid INTEGER, val, geom TEXT)")
    conn.executemany(
        "INSERT INTO plots VALUES (?, ?, ?)",
        [
            (1, 5, "SRID=4326;POLYGON((0 0, 1 0, 1 1, 0 0))"),
            (2, "x", "SRID=4326;POLYGON((2 0, 3 0, 3 1, 2 0))"),
        ],
    )
    yield conn
    conn.close()
