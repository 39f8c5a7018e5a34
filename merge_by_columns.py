#!/usr/bin/env python3
"""
Merge by Columns - consolidate two or more CSV/TSV files into one table.

Records of the inputs are matched on a set of shared columns and written side by
side: every output row holds the columns of all inputs in declaration order, and
inputs without a matching record are filled with a filler string.

Features:
- Shared columns are 1-based; negative values count from the end of a record
- No shared columns merges all records positionally (requires --multi)
- Column 0 makes every record unique, so nothing gets matched
- Ambiguous many-to-many matches are refused unless --multi is passed
- Optional warnings about similar keys and unmatched records

Usage:
python merge_by_columns.py -i countries.tsv areas.tsv -o merged.tsv -c 1 --filler N/A

Arguments:
-i, --inputs: Input files to consolidate (at least two)
-o, --output: Output file path (must differ from all inputs)
-c, --common: Shared column index (repeatable)
"""

import argparse
import csv
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from column_index import key_strategy
from key_grouping import group_records
from merge_errors import ConfigurationError, MergeError, SingleColumnInput
from merge_resolver import resolve_merge_groups
from record_keys import Sheet
from row_assembler import assemble_rows
from sheet_io import read_sheet, write_report, write_rows
from similarity_warner import find_similar_records
from unmatched_reporter import find_unmatched_records

logger = logging.getLogger('merge_by_columns')

MULTI_FLAG = '--multi'
SINGLE_FLAG = '--single'
HANDLER_NAMES = ('merge_by_columns.console', 'merge_by_columns.file')


@dataclass
class MergeConfig:
    shared_columns: List[int] = field(default_factory=list)
    filler: str = ''
    allow_multi_merge: bool = False
    allow_single_column: bool = False
    similarity_threshold: Optional[int] = None
    warn_unmatched: bool = False
    collapse_shared: bool = False


@dataclass
class MergeResult:
    rows: List[List[str]]
    diagnostics: list


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """Set up logging to the console and, optionally, to a file."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        if handler.get_name() in HANDLER_NAMES:
            root.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler()
    console_handler.set_name(HANDLER_NAMES[0])
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.set_name(HANDLER_NAMES[1])
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root.addHandler(file_handler)

    return logger


def check_delimiter(delimiter: str) -> str:
    if len(delimiter) != 1:
        raise ConfigurationError(f"'{delimiter}' is not a single character; only one-character delimiters are supported.")
    if not delimiter.isascii():
        raise ConfigurationError(f"'{delimiter}' is not an ASCII character; only ASCII delimiters are currently supported.")
    return delimiter


def check_paths(inputs: Sequence[Path], output: Path) -> None:
    output_resolved = output.resolve()
    for path in inputs:
        if not path.exists():
            raise ConfigurationError(f"{path} does not exist.")
        if not path.is_file():
            raise ConfigurationError(f"{path} is not a file.")
        if path.resolve() == output_resolved:
            raise ConfigurationError(f"{path} is used both as an input and as the output.")


def check_similarity_threshold(threshold: Optional[int]) -> None:
    if threshold is not None and threshold < 0:
        raise ConfigurationError(f"Similarity warn level must not be negative, got {threshold}.")


def check_proper_delimiter(sheets: Sequence[Sheet], allow_single_column: bool) -> None:
    """Refuse inputs that all look single-columned unless explicitly allowed."""
    if allow_single_column:
        return
    if not any(record.width > 1 for sheet in sheets for record in sheet.records):
        raise SingleColumnInput(SINGLE_FLAG)


def consolidate(sheets: Sequence[Sheet], config: MergeConfig) -> MergeResult:
    """
    Match the records of all sheets and build the merged table.

    Args:
        sheets: parsed inputs in declaration order
        config: merge settings

    Returns:
        MergeResult: output rows in global key order, plus diagnostics

    Raises:
        MergeError: on any fatal condition (bad columns, ambiguity, single-column input)
    """
    strategy = key_strategy(config.shared_columns)
    check_proper_delimiter(sheets, config.allow_single_column)

    buckets = group_records(sheets, strategy)
    groups = resolve_merge_groups(
        buckets, config.allow_multi_merge, MULTI_FLAG, [sheet.name for sheet in sheets],
    )
    rows = assemble_rows(groups, sheets, config.filler, strategy, config.collapse_shared)
    logger.info(f"Matched {sum(len(sheet.records) for sheet in sheets)} records into {len(rows)} rows")

    diagnostics = []
    if config.similarity_threshold is not None:
        diagnostics.extend(find_similar_records(buckets, config.similarity_threshold))
    if config.warn_unmatched:
        diagnostics.extend(find_unmatched_records(buckets))
    return MergeResult(rows, diagnostics)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Consolidate CSV/TSV files by matching records on shared columns.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python merge_by_columns.py -i a.tsv b.tsv -o merged.tsv -c 1
  python merge_by_columns.py -i a.csv b.csv -o merged.csv -d , -c 1 -c -1 --filler N/A
  python merge_by_columns.py -i a.tsv b.tsv -o merged.tsv --multi
        '''
    )
    parser.add_argument('-i', '--inputs', nargs='+', required=True, type=Path,
                        help='CSV/TSV files to consolidate (at least two)')
    parser.add_argument('-o', '--output', required=True, type=Path,
                        help='Consolidated file (must differ from all inputs; overwritten if it exists)')
    parser.add_argument('-d', '--delimiter', default='\t',
                        help='Delimiter character (default: tab)')
    parser.add_argument('-c', '--common', type=int, action='append', default=[],
                        help='Shared column, 1-based; negative counts from the end, 0 makes every record unique')
    parser.add_argument(SINGLE_FLAG, action='store_true',
                        help='Allow consolidation when all the inputs contain a single column')
    parser.add_argument(MULTI_FLAG, action='store_true',
                        help='Still allow consolidation when there are multiple ways to merge records')
    parser.add_argument('--filler', default='',
                        help='Text for output cells of inputs missing a matching record')
    parser.add_argument('--warn-similar', type=int, default=None, metavar='EDITS',
                        help='Warn about records whose shared columns are within EDITS edits of each other')
    parser.add_argument('--warn-unmatched', action='store_true',
                        help='Warn about records missing from some of the inputs')
    parser.add_argument('--collapse-shared', action='store_true',
                        help='Write shared columns once instead of once per input')
    parser.add_argument('--encoding', default='utf-8',
                        help='Encoding of the input and output files (default: utf-8)')
    parser.add_argument('--report', type=Path, default=None,
                        help='Also write all warnings as a delimited table to this file')
    parser.add_argument('--log-file', type=Path, default=None,
                        help='Write a detailed log to this file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show debug messages')

    args = parser.parse_args(argv)
    if len(args.inputs) < 2:
        parser.error('at least two input files are required')
    return args


def build_config(args) -> MergeConfig:
    """Validate everything that can be checked before reading data."""
    check_delimiter(args.delimiter)
    check_similarity_threshold(args.warn_similar)
    check_paths(args.inputs, args.output)
    key_strategy(args.common)
    return MergeConfig(
        shared_columns=list(args.common),
        filler=args.filler,
        allow_multi_merge=args.multi,
        allow_single_column=args.single,
        similarity_threshold=args.warn_similar,
        warn_unmatched=args.warn_unmatched,
        collapse_shared=args.collapse_shared,
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        config = build_config(args)
        sheets = [
            read_sheet(path, index, args.delimiter, args.encoding)
            for index, path in enumerate(args.inputs)
        ]
        result = consolidate(sheets, config)
        count = write_rows(args.output, result.rows, args.delimiter, args.encoding)
    except MergeError as e:
        logger.error(str(e))
        return e.exit_code
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.error(f"Could not process the files: {e}")
        return 1

    for diagnostic in result.diagnostics:
        logger.warning(diagnostic.message())
    if args.report is not None:
        try:
            write_report(args.report, result.diagnostics, args.delimiter, args.encoding)
        except OSError as e:
            logger.error(f"Could not write the report: {e}")
            return 1

    logger.info(f"Successfully merged {len(args.inputs)} files into {args.output} ({count} rows)")
    return 0


if __name__ == '__main__':
    sys.exit(main())
