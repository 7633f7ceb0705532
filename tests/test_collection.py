import json

import pytest

from array_manager import ArrayCollection, KeyNotFoundError, collect


@pytest.fixture
def collection(typed_records):
    return collect(typed_records)


def test_constructor_copies_input(typed_records):
    c = ArrayCollection(typed_records)
    typed_records[0]["v"] = 100
    assert c.all()[0]["v"] == 1
    assert ArrayCollection().all() == []
    assert ArrayCollection(c).all() == c.all()


def test_path_writers_return_new_collections(nested):
    c = collect(nested)
    updated = c.set("user.name", "Grace")
    assert updated.get("user.name") == "Grace"
    assert c.get("user.name") == "Ada"

    forgotten = c.forget("user.address")
    assert not forgotten.has("user.address")
    assert c.has("user.address")

    pushed = c.push("viewer", "user.roles")
    assert pushed.get("user.roles") == ["admin", "editor", "viewer"]
    assert c.get("user.roles") == ["admin", "editor"]

    prepended = c.prepend("owner", "user.roles")
    assert prepended.get("user.roles.0") == "owner"

    ensured = c.ensure(["user.email"], "")
    assert ensured.get("user.email") == ""
    assert not c.has("user.email")


def test_item_access_uses_dot_paths(nested):
    c = collect(nested)
    assert c["user.address.city"] == "London"
    assert "user.address.zip" in c
    assert "user.email" not in c

    c["user.email"] = "ada@example.com"
    assert c["user.email"] == "ada@example.com"

    del c["user.email"]
    assert "user.email" not in c


def test_item_assignment_with_none_appends():
    c = collect([1])
    c[None] = 2
    assert c.all() == [1, 2]


def test_chaining(collection):
    result = collection.where(lambda r: r["v"] > 1).pluck("v")
    assert result.all() == [2, 3]
    assert collection.count() == 3


def test_grouping_and_sorting(collection, people):
    assert collection.group_by("type").all() == {
        "a": [{"type": "a", "v": 1}, {"type": "a", "v": 3}],
        "b": [{"type": "b", "v": 2}],
    }
    assert collection.count_by("type").all() == {"a": 2, "b": 1}
    assert list(collection.key_by("v").keys()) == [1, 2, 3]
    names = collect(people).sort_by_many([("age", "asc"), ("name", "desc")]).pluck("name").all()
    assert names == ["Dee", "Eve", "Bob", "Cid", "Ann"]
    assert collection.sort_by("v", descending=True).first()["v"] == 3


def test_tree():
    c = collect([{"id": 1, "parent_id": None}, {"id": 2, "parent_id": 1}])
    assert c.tree().all() == [
        {"id": 1, "parent_id": None, "children": [{"id": 2, "parent_id": 1, "children": []}]}
    ]


def test_dot_and_undot(nested):
    c = collect(nested)
    assert c.dot().undot() == c
    assert "user.address.city" in c.paths()


def test_aggregates(collection):
    assert collection.sum("v") == 6
    assert collection.avg("v") == 2
    assert collection.min("v") == 1
    assert collection.max("v") == 3
    assert collection.reduce(lambda carry, r: carry + r["v"], 0) == 6
    assert collection.contains({"type": "b", "v": 2})
    assert collection.search({"type": "b", "v": 2}) == 1
    assert collect([]).is_empty()
    assert collection.is_not_empty()


def test_filters(collection):
    assert collection.where_equals("type", "a").count() == 2
    assert collection.where_in("v", ["1", 3]).pluck("v").all() == [1, 3]
    assert collection.reject(lambda r: r["type"] == "a").count() == 1
    assert collection.unique("type").count() == 2
    assert collection.take(-1).all() == [{"type": "a", "v": 3}]
    first, rest = collection.partition(lambda r: r["v"] == 1)
    assert len(first) == 1 and len(rest) == 2


def test_equality(collection, typed_records):
    assert collection == typed_records
    assert collection == collect(typed_records)
    assert collection != collect([])
    assert collection.equals(typed_records)
    assert not collection.equals([{"type": "a", "v": 1.0}, typed_records[1], typed_records[2]])
    assert collection.equals([{"type": "a", "v": 1.0}, typed_records[1], typed_records[2]], strict=False)


def test_diff_recursive():
    c = collect({"a": 1, "b": {"c": 2, "d": 3}})
    assert c.diff_recursive(collect({"a": 1, "b": {"c": 2, "d": 4}})).all() == {"b": {"d": 3}}


def test_serialization(collection):
    assert json.loads(collection.to_json()) == collection.all()
    assert str(collection) == collection.to_json()
    assert collect({"a": 1}).to_string() == "[\n  'a' => 1\n]"
    assert repr(collect([1])) == "ArrayCollection([1])"
    assert collection.dump() is collection


def test_iteration_and_length(collection):
    assert [r["v"] for r in collection] == [1, 2, 3]
    assert len(collection) == 3


def test_tap_and_pipe(collection):
    seen = []
    assert collection.tap(lambda items: seen.append(len(items))) is collection
    assert seen == [3]
    assert collection.pipe([len]) == 3


def test_missing_item_raises_nothing():
    c = collect({"a": 1})
    assert c["missing"] is None
    del c["missing"]
    assert c.all() == {"a": 1}


def test_key_not_found_is_exported():
    assert issubclass(KeyNotFoundError, KeyError)


def test_empty_collection_accepts_keyed_writes():
    assert collect().set("name", "Ada").all() == {"name": "Ada"}
    assert collect().push("x").all() == ["x"]
    assert collect().ensure(["a.b"], 0).all() == {"a": {"b": 0}}

    c = collect()
    c["user.name"] = "Ada"
    assert c.all() == {"user": {"name": "Ada"}}


def test_keyed_write_on_list_root_keeps_items():
    assert collect(["a"]).set("name", "Ada").all() == {0: "a", "name": "Ada"}
    assert collect(["a"]).set("1", "b").all() == ["a", "b"]


def test_written_values_are_copied():
    inner = {"x": 1}
    c = collect({}).set("k", inner)
    c["k.x"] = 99
    assert inner == {"x": 1}

    whole = {"y": 1}
    replaced = collect({}).set(None, whole)
    replaced["y"] = 2
    assert whole == {"y": 1}

    tags = ["a"]
    pushed = collect({}).push(tags, "groups")
    pushed["groups.0"].append("b")
    assert tags == ["a"]

    item = {"z": 1}
    c2 = collect([])
    c2[None] = item
    c2["0.z"] = 5
    assert item == {"z": 1}


def test_ensure_default_is_copied_per_path():
    shared = []
    c = collect({}).ensure(["a", "b"], shared)
    c["a"].append(1)
    assert c["b"] == []
    assert shared == []
