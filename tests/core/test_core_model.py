# topmark:header:start
#
#   project      : GetDoc
#   file         : test_core_model.py
#   file_relpath : tests/core/test_core_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the engine's data model."""

from __future__ import annotations

from pathlib import Path

import pytest

from getdoc.core.model import (
    BuildConfiguration,
    FileOriginRecord,
    MalformedMessageError,
    PerDiagnosticRecord,
    RawDiagnosticNode,
)
from tests.conftest import parametrize
from tests.fakes import diagnostic, span


def test_configuration_descriptor() -> None:
    """It should describe flagless configurations as the crate defaults."""
    assert BuildConfiguration(()).descriptor == "default features"
    assert (
        BuildConfiguration(("--no-default-features", "--features", "a,b")).descriptor
        == "--no-default-features --features a,b"
    )


def test_canonical_key_ignores_flag_order() -> None:
    """It should treat reordered flags as the same configuration."""
    a = BuildConfiguration(("--features", "x", "--no-default-features"))
    b = BuildConfiguration(("--no-default-features", "--features", "x"))

    assert a != b
    assert a.canonical_key == b.canonical_key


@parametrize(
    "payload",
    [
        [],
        {"spans": [], "children": []},
        {"level": "error", "spans": {}, "children": []},
        {"level": "error", "spans": [], "children": [], "code": "E0001"},
        {"level": "error", "spans": [{"file_name": "a.rs"}], "children": []},
        {"level": "error", "spans": [], "children": [], "rendered": 3},
    ],
)
def test_malformed_messages_are_rejected(payload: object) -> None:
    """It should reject diagnostic payloads that do not have the compiler's shape."""
    with pytest.raises(MalformedMessageError):
        RawDiagnosticNode.from_json(payload)  # type: ignore[arg-type]


def test_explanation_is_optional() -> None:
    """It should accept a code object without an explanation."""
    payload = diagnostic("error", "error: x", code="E0425")
    payload["code"] = {"code": "E0425"}

    node = RawDiagnosticNode.from_json(payload)

    assert node.code is not None
    assert node.code.explanation is None


def test_nested_children_have_the_parent_shape() -> None:
    """It should decode arbitrarily deep child trees."""
    leaf = diagnostic("note", "note: leaf", spans=[span("src/x.rs", 9)])
    payload = diagnostic(
        "error", "error: root", children=[diagnostic("help", None, children=[leaf])]
    )

    node = RawDiagnosticNode.from_json(payload)

    assert node.children[0].children[0].spans[0].location() == "src/x.rs:9"


def test_identity_key_is_structural() -> None:
    """It should compare identity keys field by field, including implicated files."""
    files = ((Path("/d/lib.rs"), "lib.rs:1"),)
    a = PerDiagnosticRecord("error", "E1", "error: t", "src/a.rs:1", files, "first")
    b = PerDiagnosticRecord("error", "E1", "error: t", "src/a.rs:1", files, "other")
    c = PerDiagnosticRecord("error", "E1", "error: t", "src/a.rs:1", ())

    assert a.identity_key() == b.identity_key()
    assert hash(a.identity_key()) == hash(b.identity_key())
    assert a.identity_key() != c.identity_key()


def test_file_origin_records_sort_codeless_first() -> None:
    """It should order backreferences with absent codes before present ones."""
    with_code = FileOriginRecord("error", "E0001", "src/a.rs:1", "default features")
    without = FileOriginRecord("error", None, "src/z.rs:1", "default features")

    assert sorted([with_code, without], key=lambda o: o.sort_key()) == [without, with_code]
