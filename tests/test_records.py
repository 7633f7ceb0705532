import pytest

from array_manager import records
from array_manager.errors import InvalidArgumentError


@pytest.fixture
def orders():
    return [
        {"id": 1, "status": "paid", "total": 10, "customer": {"name": "Ada"}},
        {"id": 2, "status": "open", "total": 25, "customer": {"name": "Bob"}},
        {"id": 3, "status": "paid", "total": 5, "customer": None},
    ]


def test_resolve_items_by_root():
    data = {"orders": [{"id": 1}], "meta": {"count": 1}}
    assert records.resolve_items_by_root(data, "orders") == [{"id": 1}]
    assert records.resolve_items_by_root(data, "meta") == [{"count": 1}]
    assert records.resolve_items_by_root(data, "missing") == []
    assert records.resolve_items_by_root(data) == [data]
    assert records.resolve_items_by_root([1, 2], "(root)") == [1, 2]
    assert records.resolve_items_by_root(None) == []


def test_first_and_last(orders):
    assert records.first(orders)["id"] == 1
    assert records.first(orders, lambda o: o["total"] > 10)["id"] == 2
    assert records.first(orders, lambda o: o["total"] > 100, lambda: "none") == "none"
    assert records.first([], default="empty") == "empty"
    assert records.last(orders)["id"] == 3
    assert records.last(orders, lambda o, index: index < 2)["id"] == 2


def test_take():
    assert records.take([1, 2, 3, 4], 2) == [1, 2]
    assert records.take([1, 2, 3, 4], -2) == [3, 4]
    assert records.take({"a": 1, "b": 2}, 1) == {"a": 1}


def test_only_and_except_keys():
    data = {"a": 1, "b": {"c": 2, "d": 3}, 5: "five"}
    assert records.only(data, ["a", "5"]) == {"a": 1, 5: "five"}
    assert records.except_keys(data, ["a", "b.c"]) == {"b": {"d": 3}, 5: "five"}
    assert data["b"] == {"c": 2, "d": 3}


def test_where_and_reject(orders):
    assert [o["id"] for o in records.where(orders, lambda o: o["status"] == "paid")] == [1, 3]
    assert [o["id"] for o in records.reject(orders, lambda o: o["status"] == "paid")] == [2]
    assert records.where({"a": 1, "b": 2}, lambda v, k: k == "b") == {"b": 2}


def test_where_variants(orders):
    assert [o["id"] for o in records.where_equals(orders, "status", "paid")] == [1, 3]
    assert records.where_equals(orders, "total", 10.0) == []
    assert [o["id"] for o in records.where_in(orders, "total", ["10", 25])] == [1, 2]
    assert [o["id"] for o in records.where_not_in(orders, "total", [10])] == [2, 3]
    assert [o["id"] for o in records.where_between(orders, "total", 5, 10)] == [1, 3]
    assert [o["id"] for o in records.where_not_null(orders, "customer.name")] == [1, 2]
    assert records.where_not_null([1, None, 2]) == [1, 2]


def test_pluck(orders):
    assert records.pluck(orders, "customer.name") == ["Ada", "Bob", None]
    assert records.pluck(orders, "total", "id") == {1: 10, 2: 25, 3: 5}


def test_map_values_and_map_with_keys():
    assert records.map_values([1, 2], lambda v: v * 2) == [2, 4]
    assert records.map_values({"a": 1}, lambda v, k: f"{k}{v}") == {"a": "a1"}
    assert records.map_with_keys([{"id": 7, "n": "x"}], lambda v: {v["id"]: v["n"]}) == {7: "x"}


def test_partition(orders):
    paid, other = records.partition(orders, lambda o: o["status"] == "paid")
    assert [o["id"] for o in paid] == [1, 3]
    assert [o["id"] for o in other] == [2]


def test_columns(orders):
    assert records.columns(orders[:1], ["id", "customer.name"]) == [{"id": 1, "customer.name": "Ada"}]


def test_rename_keys():
    assert records.rename_keys({"a": 1, "b": 2}, {"a": "x"}) == {"x": 1, "b": 2}
    assert records.rename_keys_recursive({"a": {"a": 1}, "l": [{"a": 2}]}, {"a": "x"}) == {
        "x": {"x": 1},
        "l": [{"x": 2}],
    }
    assert records.keys_to_lower({"A": 1, 2: 2}) == {"a": 1, 2: 2}
    assert records.keys_to_upper({"a": 1}) == {"A": 1}


def test_every_some_each(orders):
    assert records.every(orders, lambda o: o["total"] > 0)
    assert not records.every(orders, lambda o: o["status"] == "paid")
    assert records.some(orders, lambda o: o["status"] == "open")

    visited = []

    def visit(order):
        visited.append(order["id"])
        return order["id"] != 2

    records.each(orders, visit)
    assert visited == [1, 2]


def test_search_and_contains():
    assert records.search(["a", "1", 2], 1) == 1
    assert records.search(["a", "1", 2], 2, strict=True) == 2
    assert records.search(["a"], "b") is None
    assert records.contains([1, 2], "2")
    assert not records.contains([1, 2], "2", strict=True)


def test_set_like_operations():
    assert records.diff([1, 2, 3, 4], [2], ["4"]) == [1, 3]
    assert records.without(["a", "b", "c"], "b") == ["a", "c"]
    assert records.intersect([1, 2, 3], [2, 3, 4], [3]) == [3]
    assert records.diff({"a": 1, "b": 2}, [2]) == {"a": 1}


def test_set_like_operations_with_callbacks():
    by_length = lambda a, b: len(a) - len(b)
    assert records.diff_using(["a", "bb", "ccc"], ["xx"], by_length) == ["a", "ccc"]
    assert records.intersect_using(["a", "bb", "ccc"], ["xx"], by_length) == ["bb"]


def test_clean_normalize_values_keys():
    assert records.clean([0, 1, "", None, "x", []]) == [1, "x"]
    assert records.normalize({"a": None, "b": 1}) == [1]
    assert records.values({"a": 1, "b": 2}) == [1, 2]
    assert records.keys({"a": 1, "b": "1", "c": 2}) == ["a", "b", "c"]
    assert records.keys({"a": 1, "b": "1", "c": 2}, 1) == ["a", "b"]
    assert records.keys({"a": 1, "b": "1", "c": 2}, 1, strict=True) == ["a"]


def test_aggregates(orders):
    assert records.sum_values(orders, "total") == 40
    assert records.sum_values([1, None, 2]) == 3
    assert records.avg([1, 2, 3]) == 2
    assert records.avg([]) is None
    assert records.min_value(orders, "total") == 5
    assert records.max_value(orders, lambda o: o["total"]) == 25
    assert records.count_values(["a", "b", "a"]) == {"a": 2, "b": 1}


def test_min_max_require_values():
    with pytest.raises(InvalidArgumentError):
        records.min_value([])
    with pytest.raises(InvalidArgumentError):
        records.max_value([])


def test_pipe_reduce_tap():
    assert records.pipe([3, 1, 2], [sorted, lambda values: values[0]]) == 1
    assert records.reduce([1, 2, 3], lambda carry, v: carry + v, 0) == 6

    seen = []
    data = [1]
    assert records.tap(data, seen.append) is data
    assert seen == [[1]]


def test_record_roots():
    data = {"store": "x", "items": [{"tags": ["a"], "meta": {"links": []}}], "nested": {"rows": []}}
    assert records.record_roots(data) == ["items", "items.meta.links", "items.tags", "nested.rows"]
    assert records.record_roots([{"children": []}]) == ["(root)", "children"]
    assert records.record_roots({"a": 1}) == []
