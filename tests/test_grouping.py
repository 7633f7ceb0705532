import pytest

from array_manager.errors import InvalidArgumentError
from array_manager.grouping import (
    build_tree,
    count_by,
    duplicates,
    group_by,
    key_by,
    resolve,
    tree,
    unique,
)


def test_group_by_path_preserves_bucket_order(typed_records):
    assert group_by(typed_records, "type") == {
        "a": [{"type": "a", "v": 1}, {"type": "a", "v": 3}],
        "b": [{"type": "b", "v": 2}],
    }


def test_group_by_callback_receives_index(typed_records):
    grouped = group_by(typed_records, lambda record, index: index % 2)
    assert grouped == {0: [typed_records[0], typed_records[2]], 1: [typed_records[1]]}


def test_group_by_nested_path_and_missing_key():
    records = [{"meta": {"kind": "x"}}, {"meta": {}}, {"meta": {"kind": "x"}}]
    grouped = group_by(records, "meta.kind")
    assert list(grouped) == ["x", None]
    assert len(grouped["x"]) == 2


def test_group_by_container_values_use_canonical_json():
    records = [{"tags": {"b": 1, "a": 2}}, {"tags": {"a": 2, "b": 1}}]
    grouped = group_by(records, "tags")
    assert list(grouped) == ['{"a": 2, "b": 1}']


def test_key_by_keeps_last_record(typed_records):
    assert key_by(typed_records, "type") == {
        "a": {"type": "a", "v": 3},
        "b": {"type": "b", "v": 2},
    }


def test_count_by(typed_records):
    assert count_by(typed_records, "type") == {"a": 2, "b": 1}
    assert count_by(["x", "y", "x"]) == {"x": 2, "y": 1}


def test_unique_and_duplicates(typed_records):
    assert unique(typed_records, "type") == [typed_records[0], typed_records[1]]
    assert unique([1, 2, 1, 3]) == [1, 2, 3]
    assert unique({"a": 1, "b": 1, "c": 2}) == {"a": 1, "c": 2}
    assert duplicates(typed_records, "type") == [typed_records[0], typed_records[2]]
    assert duplicates([1, 2, 1]) == [1, 1]


def test_resolve():
    assert resolve({"a": {"b": 1}}, "a.b") == 1
    assert resolve({"a": 1}, lambda record: record["a"] + 1) == 2


def test_tree_nests_children():
    records = [
        {"id": 1, "parent_id": None},
        {"id": 2, "parent_id": 1},
        {"id": 3, "parent_id": 1},
    ]
    assert tree(records) == [
        {
            "id": 1,
            "parent_id": None,
            "children": [
                {"id": 2, "parent_id": 1, "children": []},
                {"id": 3, "parent_id": 1, "children": []},
            ],
        }
    ]
    assert "children" not in records[0]


def test_tree_missing_parent_field_is_a_root():
    records = [{"id": "a"}, {"id": "b", "up": "a"}, {"id": "c", "up": "b"}]
    roots = tree(records, parent_key="up", children_key="kids")
    assert len(roots) == 1
    assert roots[0]["kids"][0]["id"] == "b"
    assert roots[0]["kids"][0]["kids"][0]["id"] == "c"


def test_tree_skips_orphans():
    records = [{"id": 1, "parent_id": None}, {"id": 2, "parent_id": 99}]
    assert tree(records) == [{"id": 1, "parent_id": None, "children": []}]


def test_tree_cycle_recurses_without_limit():
    records = [{"id": 0, "parent_id": None}, {"id": 1, "parent_id": 2}, {"id": 2, "parent_id": 1}]
    # Records 1 and 2 are unreachable from the root, so no recursion happens.
    assert tree(records) == [{"id": 0, "parent_id": None, "children": []}]

    cyclic = [{"id": 1, "parent_id": None}, {"id": 1, "parent_id": 1}]
    with pytest.raises(RecursionError):
        tree(cyclic)


def test_tree_rejects_non_mapping_records():
    with pytest.raises(InvalidArgumentError):
        tree([1, 2])


def test_build_tree_without_parent_id():
    grouped = {1: [{"id": 2}]}
    assert build_tree(None, grouped) == []
    assert build_tree(1, grouped) == [{"id": 2, "children": []}]


def test_numeric_string_ids_match_integer_ids():
    records = [{"id": 1, "parent_id": None}, {"id": 2, "parent_id": "1"}]
    roots = tree(records)
    assert [child["id"] for child in roots[0]["children"]] == [2]
    assert count_by([1, "1", 1.0, "01"]) == {1: 3, "01": 1}
