from column_index import MergeNone, PositionalKeys, key_strategy
from key_grouping import group_records
from merge_resolver import resolve_merge_groups
from record_keys import Sheet
from row_assembler import assemble_rows, split_sections


def merged(sheets, columns, filler='', collapse=False, multi=False):
    strategy = key_strategy(columns)
    groups = resolve_merge_groups(group_records(sheets, strategy), multi)
    return assemble_rows(groups, sheets, filler, strategy, collapse)


def test_rows_concatenate_all_inputs(countries, areas):
    rows = merged([countries, areas], [1], filler="N/A")
    assert rows == [
        ["Country", "Population", "Country", "Area"],
        ["China", "1.41B", "China", "9.6M km²"],
        ["India", "1.39B", "N/A", "N/A"],
        ["US", "333M", "US", "9.8M km²"],
        ["N/A", "N/A", "Canada", "10M km²"],
    ]


def test_width_is_sum_of_input_widths():
    first = Sheet.from_rows([["a", "1"], ["b", "2", "extra"]], 0)
    second = Sheet.from_rows([["a", "x", "y", "z"], ["c", "q"]], 1)
    rows = merged([first, second], [1], filler="-")
    assert len(rows) == 3
    assert all(len(row) == first.width + second.width for row in rows)
    assert rows[0] == ["a", "1", "-", "a", "x", "y", "z"]
    assert rows[2] == ["-", "-", "-", "c", "q", "-", "-"]


def test_collapsed_shared_columns(countries, areas):
    rows = merged([countries, areas], [1], filler="N/A", collapse=True)
    assert rows[0] == ["Country", "Population", "Area"]
    assert rows[2] == ["India", "1.39B", "N/A"]
    assert rows[4] == ["Canada", "N/A", "10M km²"]


def test_collapse_keeps_non_shared_columns_around_shared_ones():
    first = Sheet.from_rows([["a", "k", "b", "j"]], 0)
    second = Sheet.from_rows([["c", "k", "j"]], 1)
    rows = merged([first, second], [2, -1], collapse=True)
    assert rows == [["a", "c", "k", "b", "j"]]


def test_collapse_without_real_columns_is_plain_concatenation(countries, areas):
    rows = merged([countries, areas], [0], filler="", collapse=True)
    assert all(len(row) == 4 for row in rows)


def test_merge_none_fills_other_inputs(countries, areas):
    rows = merged([countries, areas], [0], filler="N/A")
    assert len(rows) == 8
    assert rows[1] == ["China", "1.41B", "N/A", "N/A"]
    assert rows[5] == ["N/A", "N/A", "Canada", "10M km²"]


def test_empty_input_adds_no_columns(countries):
    empty = Sheet.from_rows([], 1)
    rows = merged([countries, empty], [1], collapse=True)
    assert rows[0] == ["Country", "Population"]


def test_split_sections():
    assert split_sections(["a", "k", "b"], [1]) == [
        (False, ["a"]), (True, ["k"]), (False, ["b"]),
    ]
    assert split_sections(["a", "b"], []) == [(False, ["a", "b"])]


def test_strategy_classes_are_accepted_directly(countries, areas):
    sheets = [countries, areas]
    strategy = PositionalKeys((1,))
    groups = resolve_merge_groups(group_records(sheets, strategy))
    assert assemble_rows(groups, sheets, '', strategy, True)[0] == ["Country", "Population", "Area"]
    assert assemble_rows(groups, sheets, '', MergeNone(), True)[0] == ["Country", "Population", "Country", "Area"]


def test_collapse_keeps_columns_aligned_for_ragged_inputs():
    first = Sheet.from_rows([["a", "k1"], ["x", "y", "k2"]], 0)
    second = Sheet.from_rows([["B1", "k1"], ["B2", "k2"], ["B3", "k3"]], 1)
    rows = merged([first, second], [-1], filler="-", collapse=True)
    assert rows == [
        ["a", "-", "B1", "k1"],
        ["x", "y", "B2", "k2"],
        ["-", "-", "B3", "k3"],
    ]
