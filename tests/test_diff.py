"""Leaf-level diff tests."""

from __future__ import annotations

import pytest
from metamodel.diff import ChangeType, Delta, DiffConfig, DiffEngine, compare_documents


def _records(changes: list[Delta]) -> list[tuple[str, str, object, object]]:
    return [(c.path, c.change_type.value, c.old_value, c.new_value) for c in changes]


@pytest.fixture
def engine() -> DiffEngine:
    return DiffEngine()


@pytest.mark.parametrize(
    "value",
    [
        {},
        [],
        None,
        "x",
        {"a": {"b": [1, {"c": [True, None]}]}, "d": "e"},
    ],
)
def test_diff_of_value_with_itself_is_empty(engine: DiffEngine, value: object) -> None:
    assert engine.diff(value, value) == []


def test_array_order_is_insignificant(engine: DiffEngine) -> None:
    assert engine.diff({"tags": ["a", "b"]}, {"tags": ["b", "a"]}) == []


def test_array_order_is_insignificant_for_equal_numbers(engine: DiffEngine) -> None:
    assert engine.diff({"l": [1, 2.0]}, {"l": [2, 1.0]}) == []
    assert engine.diff({"l": [{"n": 1}, {"n": 2}]}, {"l": [{"n": 2.0}, {"n": 1.0}]}) == []


def test_booleans_do_not_match_numbers_in_arrays(engine: DiffEngine) -> None:
    changes = engine.diff({"l": [1, True]}, {"l": [True, 1.0, 0]})

    assert [(c.path, c.change_type.value, c.new_value) for c in changes] == [("l.2", "added", 0)]


def test_nested_array_permutations_are_insignificant(engine: DiffEngine) -> None:
    old = {"indexes": [{"fields": ["a", "b"], "unique": True}, {"fields": ["c"]}]}
    new = {"indexes": [{"fields": ["c"]}, {"unique": True, "fields": ["b", "a"]}]}

    assert engine.diff(old, new) == []


def test_modified_leaf_reports_exactly_one_record(engine: DiffEngine) -> None:
    changes = engine.diff({"a": {"b": 1}}, {"a": {"b": 2}})

    assert _records(changes) == [("a.b", "modified", 1, 2)]
    assert changes[0].value == 2


def test_added_subtree_is_reported_as_leaves(engine: DiffEngine) -> None:
    changes = engine.diff({"a": {}}, {"a": {"b": {"c": 1, "d": [2, 3]}}})

    assert _records(changes) == [
        ("a.b.c", "added", None, 1),
        ("a.b.d.0", "added", None, 2),
        ("a.b.d.1", "added", None, 3),
    ]


def test_removed_subtree_is_reported_as_leaves(engine: DiffEngine) -> None:
    changes = engine.diff({"x": 1, "y": {"z": "gone", "w": None}}, {"x": 1})

    assert _records(changes) == [
        ("y.w", "removed", None, None),
        ("y.z", "removed", "gone", None),
    ]
    assert all(c.change_type == ChangeType.REMOVED for c in changes)
    assert changes[1].value == "gone"


def test_array_member_added_and_removed(engine: DiffEngine) -> None:
    changes = engine.diff({"find": ["a", "b"]}, {"find": ["b", "a", "c"]})

    assert _records(changes) == [("find.2", "added", None, "c")]


def test_array_leftovers_are_paired_and_diffed_by_leaf(engine: DiffEngine) -> None:
    old = {"fields": [{"name": "a", "type": "string"}, {"name": "b", "type": "int"}]}
    new = {"fields": [{"name": "b", "type": "int"}, {"name": "a", "type": "date"}]}

    changes = engine.diff(old, new)

    assert _records(changes) == [("fields.0.type", "modified", "string", "date")]


def test_extra_old_array_elements_are_removed(engine: DiffEngine) -> None:
    changes = engine.diff({"roles": ["a", "b", "c"]}, {"roles": ["c"]})

    assert _records(changes) == [
        ("roles.0", "removed", "a", None),
        ("roles.1", "removed", "b", None),
    ]


def test_duplicates_count_as_multiset_members(engine: DiffEngine) -> None:
    changes = engine.diff({"l": ["a", "a"]}, {"l": ["a"]})

    assert _records(changes) == [("l.1", "removed", "a", None)]


def test_type_change_reports_old_and_new_leaves(engine: DiffEngine) -> None:
    changes = engine.diff({"a": {"b": 1}}, {"a": "flat"})

    assert _records(changes) == [
        ("a.b", "removed", 1, None),
        ("a", "added", None, "flat"),
    ]


def test_scalar_type_change_is_a_modification(engine: DiffEngine) -> None:
    assert _records(engine.diff({"a": 1}, {"a": "1"})) == [("a", "modified", 1, "1")]
    assert _records(engine.diff({"a": 1}, {"a": True})) == [("a", "modified", 1, True)]
    assert engine.diff({"a": 1}, {"a": 1.0}) == []


def test_added_empty_container_is_reported(engine: DiffEngine) -> None:
    assert _records(engine.diff({}, {"access": {}})) == [("access", "added", None, {})]


def test_records_are_ordered_by_key(engine: DiffEngine) -> None:
    changes = engine.diff({"b": 1, "a": 1}, {"b": 2, "a": 2, "c": 3})

    assert [c.path for c in changes] == ["a", "b", "c"]


def test_ordered_mode_compares_arrays_by_index() -> None:
    engine = DiffEngine(DiffConfig(array_order_insignificant=False))

    changes = engine.diff({"tags": ["a", "b"]}, {"tags": ["b", "a"]})

    assert _records(changes) == [
        ("tags.0", "modified", "a", "b"),
        ("tags.1", "modified", "b", "a"),
    ]


def test_signature_groups_identical_changes() -> None:
    engine = DiffEngine()
    first = engine.diff({"v": "1.0"}, {"v": "2.0"})[0]
    second = engine.diff({"v": "1.0", "other": 1}, {"v": "2.0", "other": 1})[0]
    third = engine.diff({"v": "1.0"}, {"v": "3.0"})[0]

    assert first.signature == second.signature
    assert first.signature != third.signature


def test_delta_to_dict_includes_relevant_values() -> None:
    added = Delta(path="a", change_type=ChangeType.ADDED, new_value=None)
    modified = Delta(path="b", change_type=ChangeType.MODIFIED, old_value=1, new_value=2)

    assert added.to_dict() == {"path": "a", "change_type": "added", "signature": added.signature, "new_value": None}
    assert modified.to_dict()["old_value"] == 1
    assert modified.to_dict()["new_value"] == 2


def test_compare_documents_short_circuits_identical_documents() -> None:
    result = compare_documents({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1})

    assert result.is_identical
    assert result.change_count == 0
    assert result.old_hash == result.new_hash


def test_compare_documents_reports_changes() -> None:
    result = compare_documents({"a": 1}, {"a": 2})

    assert not result.is_identical
    assert result.change_count == 1
    assert result.old_hash != result.new_hash
    assert list(result.changes_by_signature) == [result.changes[0].signature]
    assert result.to_dict()["changes"][0]["path"] == "a"


def test_compare_documents_permuted_arrays_are_identical() -> None:
    result = compare_documents({"tags": ["a", "b"]}, {"tags": ["b", "a"]})

    assert result.old_hash != result.new_hash
    assert result.is_identical


def test_segments_keep_paths_unambiguous(engine: DiffEngine) -> None:
    changes = engine.diff({"a.b": 1, "a": {"b": 1}}, {"a.b": 2, "a": {"b": 2}, "l": ["x"]})

    assert [c.path for c in changes] == ["a.b", "a.b", "l.0"]
    assert [c.segments for c in changes] == [("a", "b"), ("a.b",), ("l", "0")]
