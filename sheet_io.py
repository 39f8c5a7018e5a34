"""
Reading and writing delimited text.

Inputs carry no header handling: the first line is a record like any other.
Blank lines are skipped.
"""

import csv
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

import pandas as pd

from merge_errors import SheetFileError
from record_keys import Sheet
from similarity_warner import SimilarityWarning

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ['kind', 'record', 'other_record', 'distance', 'missing_inputs', 'message']

# csv refuses fields above 128 KiB by default
FIELD_SIZE_LIMIT = min(sys.maxsize, 2**31 - 1)


def read_sheet(path: Path, input_index: int, delimiter: str = '\t', encoding: str = 'utf-8') -> Sheet:
    """
    Parse one delimited file into a Sheet.

    Args:
        path: file to read
        input_index: 0-based position of the file among the inputs
        delimiter: single-character field separator
        encoding: text encoding of the file
    """
    csv.field_size_limit(FIELD_SIZE_LIMIT)
    with open(path, 'r', newline='', encoding=encoding) as f:
        reader = csv.reader(f, delimiter=delimiter)
        try:
            rows = [row for row in reader if row]
        except (UnicodeDecodeError, csv.Error) as e:
            raise SheetFileError(path, e) from e

    sheet = Sheet.from_rows(rows, input_index, str(path))
    logger.info(f"Read {len(sheet.records)} records from {path} ({sheet.width} columns)")
    return sheet


def write_rows(path: Path, rows: Iterable[Sequence[str]], delimiter: str = '\t', encoding: str = 'utf-8') -> int:
    """Write merged rows; returns how many were written."""
    count = 0
    with open(path, 'w', newline='', encoding=encoding) as f:
        writer = csv.writer(f, delimiter=delimiter, lineterminator='\n')
        for row in rows:
            try:
                writer.writerow(row)
            except (UnicodeEncodeError, csv.Error) as e:
                raise SheetFileError(path, e) from e
            count += 1
    return count


def report_frame(diagnostics: Sequence) -> pd.DataFrame:
    """Tabulate similarity warnings and unmatched-record reports."""
    entries: List[dict] = []
    for diagnostic in diagnostics:
        if isinstance(diagnostic, SimilarityWarning):
            entries.append({
                'kind': 'similar',
                'record': str(diagnostic.record.record_id),
                'other_record': str(diagnostic.other.record_id),
                'distance': diagnostic.distance,
                'missing_inputs': '',
                'message': diagnostic.message(),
            })
        else:
            entries.append({
                'kind': 'unmatched',
                'record': str(diagnostic.record.record_id),
                'other_record': '',
                'distance': None,
                'missing_inputs': ','.join(str(index + 1) for index in diagnostic.missing_inputs),
                'message': diagnostic.message(),
            })
    frame = pd.DataFrame(entries, columns=REPORT_COLUMNS)
    frame['distance'] = frame['distance'].astype('Int64')
    return frame


def write_report(path: Path, diagnostics: Sequence, delimiter: str = '\t', encoding: str = 'utf-8') -> None:
    frame = report_frame(diagnostics)
    frame.to_csv(path, sep=delimiter, index=False, encoding=encoding)
    logger.info(f"Wrote {len(frame)} diagnostics to {path}")
