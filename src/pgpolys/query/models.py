"""
Pydantic models for loaded geometries and their attributes.
"""

import logging
from functools import cached_property
from typing import Any, Iterator, Optional

import pyarrow as pa
import pyproj
from pydantic import BaseModel, model_validator

logger = logging.getLogger(__name__)


class Polygon(BaseModel):
    """One polygonal feature, tagged with its row identifier and CRS."""

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    id: Any
    geometry: Any  # shapely Polygon or MultiPolygon
    crs: Optional[pyproj.CRS] = None

    @property
    def rings(self) -> list[list[tuple]]:
        """Ring coordinates: each part's exterior followed by its holes."""
        from .geometry import polygon_rings

        return polygon_rings(self.geometry)


class PolygonCollection(BaseModel):
    """Ordered polygons sharing one CRS, keyed by row identifier."""

    model_config = {"arbitrary_types_allowed": True}

    polygons: list[Polygon] = []
    srid: Optional[int] = None
    crs: Optional[pyproj.CRS] = None

    @property
    def ids(self) -> list:
        return [p.id for p in self.polygons]

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)

    def get(self, feature_id) -> Optional[Polygon]:
        """First polygon whose id equals ``feature_id``, or None."""
        for polygon in self.polygons:
            if polygon.id == feature_id:
                return polygon
        return None

    @property
    def bounds(self) -> Optional[tuple[float, float, float, float]]:
        """(xmin, ymin, xmax, ymax) over all polygons."""
        if not self.polygons:
            return None
        boxes = [p.geometry.bounds for p in self.polygons]
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )


class AttributeTable(BaseModel):
    """
    Extra column values, row-aligned with ``ids``.

    ``rows`` holds the values exactly as the driver returned them and is
    what ``record()`` and ``to_pydict()`` read. ``table`` is an Arrow view
    built on first access; a column whose values Arrow cannot type (inet
    addresses, ranges, jsonb mixing objects and arrays, SQLite columns
    mixing types) is stored there as text.
    """

    model_config = {"arbitrary_types_allowed": True}

    ids: list = []
    columns: list[str] = []
    rows: list[tuple] = []

    @model_validator(mode="after")
    def _check_row_count(self):
        if len(self.rows) != len(self.ids):
            raise ValueError(f"{len(self.rows)} attribute rows for {len(self.ids)} ids")
        for row in self.rows:
            if len(row) != len(self.columns):
                raise ValueError(
                    f"Row of {len(row)} values for {len(self.columns)} columns"
                )
        return self

    @classmethod
    def from_arrow(cls, ids: list, table: pa.Table) -> "AttributeTable":
        """Build from an Arrow table with one row per id."""
        values = [column.to_pylist() for column in table.columns]
        rows = list(zip(*values)) if values else [() for _ in ids]
        return cls(ids=ids, columns=table.column_names, rows=rows)

    @cached_property
    def table(self) -> pa.Table:
        arrays = [
            _to_arrow_column(name, [row[i] for row in self.rows])
            for i, name in enumerate(self.columns)
        ]
        return pa.Table.from_arrays(arrays, names=list(self.columns))

    def __len__(self) -> int:
        return len(self.ids)

    def record(self, feature_id) -> Optional[dict]:
        """Column values of the first row keyed by ``feature_id``."""
        try:
            index = self.ids.index(feature_id)
        except ValueError:
            return None
        return dict(zip(self.columns, self.rows[index]))

    def records(self) -> list[dict]:
        """One dict per row, in row order."""
        return [dict(zip(self.columns, row)) for row in self.rows]

    def to_pydict(self) -> dict[Any, dict]:
        """Map each id to its record. Later duplicates overwrite earlier ones."""
        return dict(zip(self.ids, self.records()))


def _to_arrow_column(name: str, values: list) -> pa.Array:
    try:
        return pa.array(values)
    except (pa.ArrowInvalid, pa.ArrowTypeError) as exc:
        logger.debug("Column %s stored as text in Arrow: %s", name, exc)
        return pa.array([None if v is None else str(v) for v in values], type=pa.string())


class PolygonFrame(BaseModel):
    """Polygons together with their attribute table, keyed by the same ids."""

    model_config = {"arbitrary_types_allowed": True}

    polygons: PolygonCollection
    attributes: AttributeTable

    @model_validator(mode="after")
    def _check_keys(self):
        if self.polygons.ids != self.attributes.ids:
            raise ValueError("Polygon ids and attribute ids differ")
        return self

    @property
    def ids(self) -> list:
        return self.polygons.ids

    @property
    def crs(self) -> Optional[pyproj.CRS]:
        return self.polygons.crs

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[tuple[Polygon, dict]]:
        """Yield (polygon, record) pairs in row order."""
        return iter(zip(self.polygons, self.attributes.records()))
