"""
Warn about records of different inputs whose keys are almost, but not quite, equal.

Purely diagnostic: nothing here changes which records are merged.
"""

import logging
from dataclasses import dataclass
from typing import List

from rapidfuzz.distance import Levenshtein

from key_grouping import KeyBuckets
from record_keys import Record, format_key, key_data

logger = logging.getLogger(__name__)

KEY_SEPARATOR = '\x1f'


@dataclass(frozen=True)
class SimilarityWarning:
    record: Record
    other: Record
    distance: int
    key_text: str
    other_key_text: str

    def message(self) -> str:
        return (
            f"Similar records encountered (edit distance = {self.distance}):\n"
            f"{self.record.record_id}: {self.key_text}\n"
            f"{self.other.record_id}: {self.other_key_text}"
        )


def key_distance(key: tuple, other: tuple, threshold: int) -> int:
    """
    Levenshtein distance of the key values, capped just above threshold.

    The values are concatenated with KEY_SEPARATOR between them, so text moved
    from one shared column to the next still counts as an edit.
    """
    return Levenshtein.distance(
        KEY_SEPARATOR.join(key_data(key)),
        KEY_SEPARATOR.join(key_data(other)),
        score_cutoff=threshold,
    )


def find_similar_records(buckets: KeyBuckets, threshold: int) -> List[SimilarityWarning]:
    """
    Compare every pair of distinct keys and report record pairs from different
    inputs whose keys are within `threshold` edits of each other (but not equal).
    """
    warnings: List[SimilarityWarning] = []
    keys = list(buckets)
    for first, key in enumerate(keys):
        for other_key in keys[first + 1:]:
            distance = key_distance(key, other_key, threshold)
            if distance == 0 or distance > threshold:
                continue
            for input_index, records in enumerate(buckets[key]):
                for other_index, other_records in enumerate(buckets[other_key]):
                    if input_index == other_index:
                        continue
                    for record in records:
                        for other in other_records:
                            warnings.append(SimilarityWarning(
                                record, other, distance, format_key(key), format_key(other_key),
                            ))

    logger.debug(f"Found {len(warnings)} similar record pairs (threshold {threshold})")
    return warnings
