"""
Arrow / Arrow IPC output for loaded polygons.

Geometries are written as WKB in a large_binary "geometry" column next to
the "tgid" identifier and any attribute columns. The CRS, when known, is
stored as PROJJSON in the geometry field's metadata.
"""

from io import BytesIO
from typing import Union

import pyarrow as pa
import pyarrow.ipc as ipc
from shapely import wkb as wkb_mod

from pgpolys.query.models import PolygonCollection, PolygonFrame


class GeoArrowFormatter:
    """Format loaded polygons as an Arrow IPC stream."""

    mimetype = "application/vnd.apache.arrow.stream"

    def write(self, result: Union[PolygonCollection, PolygonFrame], **kwargs) -> bytes:
        """Convert result to Arrow IPC bytes."""
        arrow_table = to_arrow(result)

        sink = BytesIO()
        writer = ipc.new_stream(sink, arrow_table.schema)
        writer.write_table(arrow_table)
        writer.close()
        return sink.getvalue()


def to_arrow(result: Union[PolygonCollection, PolygonFrame]) -> pa.Table:
    """Build an Arrow table: tgid, geometry (WKB), then attribute columns."""
    if isinstance(result, PolygonFrame):
        collection = result.polygons
        attributes = result.attributes.table
    else:
        collection = result
        attributes = None

    metadata = None
    if collection.crs is not None:
        metadata = {b"crs": collection.crs.to_json().encode("utf-8")}

    arrays = [
        pa.array(collection.ids),
        pa.array(
            [wkb_mod.dumps(p.geometry) for p in collection],
            type=pa.large_binary(),
        ),
    ]
    fields = [
        pa.field("tgid", arrays[0].type),
        pa.field("geometry", pa.large_binary(), metadata=metadata),
    ]

    if attributes is not None:
        for name, column in zip(attributes.column_names, attributes.columns):
            arrays.append(column.combine_chunks())
            fields.append(pa.field(name, column.type))

    return pa.Table.from_arrays(arrays, schema=pa.schema(fields))
