"""Shared fixtures for entity metadata tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def _document() -> dict:
    return {
        "entityInfo": {
            "_id": "customer|entityInfo",
            "name": "customer",
            "defaultVersion": "1.0.0",
            "indexes": [{"fields": [{"field": "login", "dir": "$asc"}], "unique": True}],
        },
        "schema": {
            "_id": "customer|1.0.0",
            "name": "customer",
            "version": {"value": "1.0.0", "changelog": "Initial version"},
            "access": {
                "find": ["anyone"],
                "insert": ["admin"],
                "update": ["admin", "support"],
                "delete": ["admin"],
            },
            "fields": {
                "login": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "string"}},
            },
        },
    }


@pytest.fixture
def entity_document() -> dict:
    return _document()


@pytest.fixture
def entity_text() -> str:
    return json.dumps(_document())


@pytest.fixture
def entity_file(tmp_path: Path) -> Path:
    path = tmp_path / "customer.json"
    path.write_text(json.dumps(_document()), encoding="utf-8")
    return path
