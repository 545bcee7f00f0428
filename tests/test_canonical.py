"""Canonical serialization tests."""

from __future__ import annotations

import json

import pytest
from metamodel.canonical import CanonicalSerializer, SerializerConfig, canonical


def test_keys_are_sorted_at_every_level() -> None:
    text = canonical({"b": 1, "a": {"d": True, "c": None}})

    assert text == '{\n    "a" : {\n        "c" : null,\n        "d" : true\n    },\n    "b" : 1\n}'


def test_arrays_keep_element_order() -> None:
    text = canonical({"tags": ["b", "a", {"z": 1, "y": 2}]})

    assert text == (
        "{\n"
        '    "tags" : [\n'
        '        "b",\n'
        '        "a",\n'
        "        {\n"
        '            "y" : 2,\n'
        '            "z" : 1\n'
        "        }\n"
        "    ]\n"
        "}"
    )


def test_insertion_order_does_not_matter() -> None:
    first = {"schema": {"version": {"value": "1", "changelog": "x"}}, "entityInfo": {"name": "n"}}
    second = {"entityInfo": {"name": "n"}, "schema": {"version": {"changelog": "x", "value": "1"}}}

    assert canonical(first) == canonical(second)


def test_empty_containers_and_scalars() -> None:
    assert canonical({}) == "{ }"
    assert canonical([]) == "[ ]"
    assert canonical({"a": [], "b": {}}) == '{\n    "a" : [ ],\n    "b" : { }\n}'
    assert canonical("text") == '"text"'
    assert canonical(1.5) == "1.5"
    assert canonical(False) == "false"


def test_strings_are_escaped_but_not_ascii_encoded() -> None:
    assert canonical({"q": 'say "hi"\n', "u": "Zürich"}) == '{\n    "q" : "say \\"hi\\"\\n",\n    "u" : "Zürich"\n}'


def test_canonical_round_trip_is_stable() -> None:
    document = {"z": [3, 1, {"b": [], "a": "x"}], "a": {"n": None, "m": 0.25}}

    text = canonical(document)

    assert canonical(json.loads(text)) == text


def test_custom_layout() -> None:
    serializer = CanonicalSerializer(SerializerConfig(indent="  ", line_terminator="\r\n", key_separator=": "))

    assert serializer.canonical({"b": [1], "a": 2}) == '{\r\n  "a": 2,\r\n  "b": [\r\n    1\r\n  ]\r\n}'


def test_digest_is_insensitive_to_key_order() -> None:
    serializer = CanonicalSerializer()

    assert serializer.digest({"a": 1, "b": 2}) == serializer.digest({"b": 2, "a": 1})
    assert serializer.digest({"a": 1}) != serializer.digest({"a": 2})
    assert len(serializer.digest({})) == 64


def test_non_json_values_are_rejected() -> None:
    with pytest.raises(TypeError):
        canonical({"when": object()})
