"""
Column index resolution and key strategy selection.

Shared columns are given as signed 1-based indices: positive values count from
the start of a record, negative values from its end, and 0 is a sentinel that
makes every record unique (nothing gets matched).
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from merge_errors import ColumnOutOfRange, InconsistentColumnOrdering

MERGE_NONE_SENTINEL = 0


def resolve_column(index: int, width: int, record_id=None) -> int:
    """
    Translate a signed column index into a 0-based position.

    Args:
        index: 1-based index, negative to count from the end (never 0 here)
        width: number of fields in the record the index is applied to
        record_id: optional record identity used in the error message

    Returns:
        int: absolute position within the record
    """
    if index == MERGE_NONE_SENTINEL or abs(index) > width:
        raise ColumnOutOfRange(index, width, record_id)
    return index - 1 if index > 0 else width + index


def validate_column_order(columns: Sequence[int]) -> None:
    """Reject a negative shared column declared before a positive one."""
    first_negative = None
    for column in columns:
        if column < 0 and first_negative is None:
            first_negative = column
        elif column > 0 and first_negative is not None:
            raise InconsistentColumnOrdering(columns, first_negative, column)


@dataclass(frozen=True)
class PositionalKeys:
    """Records are keyed by the values found in the given columns."""
    columns: Tuple[int, ...]


@dataclass(frozen=True)
class MergeAll:
    """Every record gets the same (empty) key."""
    columns: Tuple[int, ...] = ()


@dataclass(frozen=True)
class MergeNone:
    """Every record gets a key of its own; real columns are still extracted."""
    columns: Tuple[int, ...] = ()


def key_strategy(columns: Sequence[int]):
    """
    Validate the declared shared columns and pick how keys are built.

    Returns:
        PositionalKeys, MergeAll or MergeNone
    """
    validate_column_order(columns)
    if not columns:
        return MergeAll()
    data_columns = tuple(column for column in columns if column != MERGE_NONE_SENTINEL)
    if len(data_columns) != len(columns):
        return MergeNone(data_columns)
    return PositionalKeys(data_columns)


def resolve_columns(columns: Sequence[int], width: int, record_id=None) -> List[int]:
    """Resolve every column of a strategy against one record width."""
    return [resolve_column(column, width, record_id) for column in columns]
