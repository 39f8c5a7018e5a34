from column_index import MergeAll, MergeNone, PositionalKeys
from key_grouping import contributing_inputs, group_records
from record_keys import Sheet


def test_keys_keep_first_appearance_order(countries, areas):
    buckets = group_records([countries, areas], PositionalKeys((1,)))
    assert list(buckets) == [("Country",), ("China",), ("India",), ("US",), ("Canada",)]


def test_bucket_holds_records_per_input(countries, areas):
    buckets = group_records([countries, areas], PositionalKeys((1,)))
    us = buckets[("US",)]
    assert [record.fields for record in us[0]] == [("US", "333M")]
    assert [record.fields for record in us[1]] == [("US", "9.8M km²")]
    assert contributing_inputs(buckets[("India",)]) == [0]
    assert contributing_inputs(buckets[("Canada",)]) == [1]


def test_records_keep_file_order_inside_bucket():
    sheet = Sheet.from_rows([["k", "1"], ["j", "0"], ["k", "2"], ["k", "3"]], 0)
    buckets = group_records([sheet], PositionalKeys((1,)))
    assert [record.fields[1] for record in buckets[("k",)][0]] == ["1", "2", "3"]


def test_merge_all_builds_one_bucket(countries, areas):
    buckets = group_records([countries, areas], MergeAll())
    assert list(buckets) == [()]
    assert [len(records) for records in buckets[()]] == [4, 4]


def test_merge_none_builds_one_bucket_per_record(countries, areas):
    buckets = group_records([countries, areas], MergeNone())
    assert len(buckets) == 8
    assert all(sum(len(records) for records in bucket) == 1 for bucket in buckets.values())
