"""Schema/table reference handling."""

from typing import Sequence, Union

from .errors import InvalidArgument

TableRef = Union[str, Sequence[str]]


def normalize_table(table: TableRef) -> str:
    """Join a ``table`` or ``(schema, table)`` reference into one name.

    The result is interpolated verbatim into SQL text.
    """
    parts = [table] if isinstance(table, str) else list(table)
    if len(parts) not in (1, 2):
        raise InvalidArgument(
            'The table name should be "table" or ("schema", "table"), '
            f"got {len(parts)} parts"
        )
    return ".".join(parts)
