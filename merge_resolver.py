"""
Decide how the records of a key bucket are merged.

A bucket is unambiguous when at most one input holds more than one of its
records: inputs holding a single record have it repeated against every record of
the larger input. When two or more inputs hold several records, any pairing is
as valid as another, so the bucket is ambiguous; it is only merged when multiway
merging is allowed, and then positionally: the i-th records of all inputs form
the i-th merge group, and shorter inputs are absent from the excess groups.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from key_grouping import KeyBuckets
from merge_errors import AmbiguousMatch
from record_keys import Record, format_key

logger = logging.getLogger(__name__)

# one entry per input: the record it contributes, or None when absent
MergeGroup = Tuple[Optional[Record], ...]


@dataclass(frozen=True)
class Unambiguous:
    groups: List[MergeGroup]


@dataclass(frozen=True)
class Ambiguous:
    inputs: List[int]


def resolve_bucket(bucket: Sequence[Sequence[Record]]):
    """
    Classify a bucket without applying any permission policy.

    Returns:
        Unambiguous with its merge groups, or Ambiguous with the conflicting inputs
    """
    crowded = [index for index, records in enumerate(bucket) if len(records) > 1]
    if len(crowded) > 1:
        return Ambiguous(crowded)

    length = max((len(records) for records in bucket), default=0)
    groups = []
    for position in range(length):
        groups.append(tuple(
            None if not records else records[0] if len(records) == 1 else records[position]
            for records in bucket
        ))
    return Unambiguous(groups)


def positional_groups(bucket: Sequence[Sequence[Record]]) -> List[MergeGroup]:
    """Zip the inputs' records by position, leaving shorter inputs absent."""
    length = max((len(records) for records in bucket), default=0)
    return [
        tuple(records[position] if position < len(records) else None for records in bucket)
        for position in range(length)
    ]


def resolve_merge_groups(buckets: KeyBuckets, allow_multi_merge: bool = False,
                         flag: str = '--multi', names: Optional[Sequence[str]] = None) -> List[MergeGroup]:
    """
    Produce the merge groups of all buckets in global key order.

    Raises:
        AmbiguousMatch: for the first ambiguous bucket when multiway merging is not allowed
    """
    merged: List[MergeGroup] = []
    ambiguous_count = 0
    for key, bucket in buckets.items():
        outcome = resolve_bucket(bucket)
        if isinstance(outcome, Unambiguous):
            merged.extend(outcome.groups)
            continue
        if not allow_multi_merge:
            raise AmbiguousMatch(format_key(key), outcome.inputs, flag, names)
        ambiguous_count += 1
        merged.extend(positional_groups(bucket))

    if ambiguous_count:
        logger.info(f"Merged {ambiguous_count} ambiguous key buckets positionally")
    return merged
