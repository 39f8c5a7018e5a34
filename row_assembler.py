"""
Build output rows out of merge groups.

By default every input contributes all of its columns to every row, in
declaration order, and inputs absent from a merge group are replaced by the
filler. With shared columns collapsed, each shared column is written once,
taking the value of the first input present in the group.
"""

from typing import List, Sequence

from merge_resolver import MergeGroup
from record_keys import Record, Sheet, key_positions


def padded_cells(record: Record, width: int, filler: str) -> List[str]:
    """Record fields followed by filler up to the file width."""
    return list(record.fields) + [filler] * (width - record.width)


def split_sections(cells: Sequence[str], positions: Sequence[int]):
    """
    Cut a row into alternating non-shared and shared sections.

    Returns:
        list of (is_shared, values) pairs, always starting and ending with a
        non-shared section
    """
    sections = []
    start = 0
    for position in sorted(positions):
        sections.append((False, list(cells[start:position])))
        sections.append((True, [cells[position]]))
        start = position + 1
    sections.append((False, list(cells[start:])))
    return sections


def assemble_row(group: MergeGroup, sheets: Sequence[Sheet], filler: str) -> List[str]:
    row: List[str] = []
    for record, sheet in zip(group, sheets):
        if record is None:
            row.extend([filler] * sheet.width)
        else:
            row.extend(padded_cells(record, sheet.width, filler))
    return row


def section_widths(sheet: Sheet, strategy) -> List[int]:
    """
    Widest content of every section over the records of a sheet.

    Sections are cut around each record's own shared positions, so a ragged
    file keeps a fixed layout once every section is padded to these widths.
    """
    widths: List[int] = []
    for record in sheet.records:
        sections = split_sections(record.fields, key_positions(record, strategy))
        if not widths:
            widths = [0] * len(sections)
        widths = [max(width, len(values)) for width, (_, values) in zip(widths, sections)]
    return widths


def assemble_collapsed_row(group: MergeGroup, sheets: Sequence[Sheet], filler: str, strategy,
                           layouts: Sequence[List[int]]) -> List[str]:
    split = []
    for record, sheet, widths in zip(group, sheets, layouts):
        if not sheet.records:
            continue
        if record is None:
            sections = [(index % 2 == 1, [filler] * width) for index, width in enumerate(widths)]
        else:
            sections = [
                (is_shared, values + [filler] * (width - len(values)))
                for (is_shared, values), width in zip(
                    split_sections(record.fields, key_positions(record, strategy)), widths,
                )
            ]
        split.append((sections, record is not None))

    row: List[str] = []
    if not split:
        return row
    for index in range(len(split[0][0])):
        is_shared = split[0][0][index][0]
        if is_shared:
            present = [sections[index][1] for sections, filled in split if filled]
            row.extend(present[0] if present else [filler])
        else:
            for sections, _ in split:
                row.extend(sections[index][1])
    return row


def assemble_rows(groups: Sequence[MergeGroup], sheets: Sequence[Sheet], filler: str = '',
                  strategy=None, collapse_shared: bool = False) -> List[List[str]]:
    """
    Turn merge groups into output rows, keeping their order.

    Args:
        groups: merge groups from merge_resolver.resolve_merge_groups
        sheets: parsed inputs in declaration order
        filler: text written for every cell of an absent input
        strategy: key strategy, needed only when collapsing shared columns
        collapse_shared: write every shared column once instead of once per input
    """
    if collapse_shared and strategy is not None and strategy.columns:
        layouts = [section_widths(sheet, strategy) for sheet in sheets]
        return [assemble_collapsed_row(group, sheets, filler, strategy, layouts) for group in groups]
    return [assemble_row(group, sheets, filler) for group in groups]
