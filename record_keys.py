"""
Records, sheets and the join keys extracted from them.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Sequence, Tuple

from column_index import MergeAll, MergeNone, resolve_columns


class RecordId(NamedTuple):
    """Where a record came from: 0-based input number and 0-based record position."""
    input_index: int
    row_index: int

    def __str__(self):
        return f"<row #{self.row_index + 1} of the input #{self.input_index + 1}>"


@dataclass(frozen=True)
class Record:
    record_id: RecordId
    fields: Tuple[str, ...]

    @property
    def width(self) -> int:
        return len(self.fields)


@dataclass
class Sheet:
    """One parsed input file."""
    input_index: int
    name: str
    records: List[Record] = field(default_factory=list)

    @property
    def width(self) -> int:
        """Widest record of the file; shorter records are padded on output."""
        return max((record.width for record in self.records), default=0)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]], input_index: int, name: str = '') -> 'Sheet':
        records = [
            Record(RecordId(input_index, row_index), tuple(row))
            for row_index, row in enumerate(rows)
        ]
        return cls(input_index, name or f"input #{input_index + 1}", records)


def key_positions(record: Record, strategy) -> List[int]:
    """Absolute positions of the strategy's shared columns within this record."""
    return resolve_columns(strategy.columns, record.width, record.record_id)


def extract_key(record: Record, strategy) -> tuple:
    """
    Build the join key of a record.

    MergeAll yields the empty tuple for everybody. MergeNone appends the record
    identity, so the key can never equal another record's key.
    """
    if isinstance(strategy, MergeAll):
        return ()
    values = tuple(record.fields[position] for position in key_positions(record, strategy))
    if isinstance(strategy, MergeNone):
        return values + (record.record_id,)
    return values


def key_data(key: tuple) -> Tuple[str, ...]:
    """Only the field values of a key, without record identities."""
    return tuple(item for item in key if isinstance(item, str))


def format_key(key: tuple) -> str:
    if not key:
        return "<empty set of columns>"
    return ', '.join(str(item) for item in key)
