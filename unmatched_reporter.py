"""
Report records that have no counterpart in at least one other input.
"""

from dataclasses import dataclass
from typing import List

from key_grouping import KeyBuckets
from record_keys import Record, format_key


@dataclass(frozen=True)
class UnmatchedRecord:
    record: Record
    missing_inputs: List[int]
    key_text: str

    def message(self) -> str:
        missing = ', '.join(f"#{index + 1}" for index in self.missing_inputs)
        return (
            f"Unmatched record encountered (nothing in input {missing}):\n"
            f"{self.record.record_id}: {self.key_text}"
        )


def find_unmatched_records(buckets: KeyBuckets) -> List[UnmatchedRecord]:
    reports: List[UnmatchedRecord] = []
    for key, bucket in buckets.items():
        for input_index, records in enumerate(bucket):
            missing = [
                other for other, other_records in enumerate(bucket)
                if other != input_index and not other_records
            ]
            if not missing:
                continue
            for record in records:
                reports.append(UnmatchedRecord(record, missing, format_key(key)))
    return reports
