"""
Group records of all inputs by join key.

Keys keep the order in which they first appear when the inputs are scanned in
declaration order, record by record. Inside a bucket every input keeps its own
records in file order.
"""

import logging
from typing import Dict, List, Sequence

from record_keys import Record, Sheet, extract_key

logger = logging.getLogger(__name__)

# key -> one list of records per input, indexed by input number
KeyBuckets = Dict[tuple, List[List[Record]]]


def group_records(sheets: Sequence[Sheet], strategy) -> KeyBuckets:
    """
    Bucket every record by its key.

    Args:
        sheets: parsed inputs in declaration order
        strategy: key strategy from column_index.key_strategy

    Returns:
        dict: insertion-ordered mapping of key to per-input record lists
    """
    buckets: KeyBuckets = {}
    for sheet in sheets:
        for record in sheet.records:
            key = extract_key(record, strategy)
            if key not in buckets:
                buckets[key] = [[] for _ in sheets]
            buckets[key][sheet.input_index].append(record)

    logger.debug(f"Grouped records into {len(buckets)} key buckets")
    return buckets


def contributing_inputs(bucket: List[List[Record]]) -> List[int]:
    """Numbers of the inputs that hold at least one record of the bucket."""
    return [index for index, records in enumerate(bucket) if records]
