# topmark:header:start
#
#   project      : GetDoc
#   file         : rust.py
#   file_relpath : src/getdoc/extract/rust.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Extraction of documented items from a Rust source file.

Files are parsed with Tree-sitter's Rust grammar. A file whose syntax tree
contains errors yields no items at all (`ExtractionError`); it is still
listed in the report through its backreferences.

Extracted (in file order):
    * functions, structs, enums, unions, traits, type aliases;
    * modules (``mod x;`` without documentation is skipped);
    * impl blocks, followed by their methods, associated constants,
      associated types and macro invocations as sub-items;
    * constants and statics (values elided as ``...``);
    * ``extern crate`` declarations;
    * ``use`` declarations, only when plainly ``pub`` or documented.

Outer documentation comes from ``///`` line comments, ``/** */`` block
comments and ``#[doc = "..."]`` attributes; other attributes and plain
comments may appear in between without breaking the association.
Signatures are rebuilt from the source text of the declaration header
(comments dropped, whitespace collapsed). Top-level macro invocations,
foreign blocks and the contents of traits and inline modules are not
descended into.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cache
from typing import TYPE_CHECKING

import tree_sitter_rust
from tree_sitter import Language, Parser

from getdoc.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

    from tree_sitter import Node

    from getdoc.config.logging import GetdocLogger
    from getdoc.diagnostic.model import DiagnosticLog

logger: GetdocLogger = get_logger(__name__)

#: Use-statement display names longer than this are truncated.
MAX_USE_NAME_LEN: int = 70
USE_NAME_KEEP: int = 67


class ItemKind(str, Enum):
    """Display kind of an extracted item."""

    FUNCTION = "Function"
    STRUCT = "Struct"
    ENUM = "Enum"
    UNION = "Union"
    TRAIT = "Trait"
    MODULE = "Module"
    INHERENT_IMPL = "Inherent Impl Block"
    TRAIT_IMPL = "Trait Impl Block"
    IMPL_METHOD = "Impl Method"
    IMPL_CONST = "Impl Associated Constant"
    IMPL_TYPE = "Impl Associated Type"
    IMPL_MACRO = "Impl Macro Invocation"
    TYPE_ALIAS = "Type Alias"
    CONSTANT = "Constant"
    STATIC = "Static"
    EXTERN_CRATE = "Extern Crate"
    USE = "Use Statement"

    @property
    def is_impl_block(self) -> bool:
        """Return True for inherent and trait impl blocks."""
        return self in (ItemKind.INHERENT_IMPL, ItemKind.TRAIT_IMPL)


@dataclass(frozen=True, slots=True)
class ExtractedItem:
    """One displayable item of a dependency source file.

    Attributes:
        kind (ItemKind): What the item is.
        name (str): Display name.
        signature (str): Reconstructed declaration text, without the body.
        doc_lines (tuple[str, ...]): Outer documentation, one trimmed entry per line.
        is_sub_item (bool): True for items that belong to the preceding impl block.
    """

    kind: ItemKind
    name: str
    signature: str
    doc_lines: tuple[str, ...] = ()
    is_sub_item: bool = False

    @property
    def heading_name(self) -> str:
        """Return the name shown in the report heading.

        Trait impl blocks show their full ``impl ... for ...`` line.
        """
        if self.kind.is_impl_block and self.name.startswith("impl "):
            return self.signature.split("{", 1)[0].strip() or self.name
        return self.name


class ExtractionError(Exception):
    """Raised when a source file cannot be read or does not parse."""


@cache
def _parser() -> Parser:
    """Return the (shared) Tree-sitter parser for Rust."""
    return Parser(Language(tree_sitter_rust.language()))


_COMMENT_NODES: frozenset[str] = frozenset({"line_comment", "block_comment"})
_ESCAPES: dict[str, str] = {"n": "\n", "t": "\t", "r": "\r", "0": "\0"}


def _comments(node: Node) -> Iterator[Node]:
    """Yield the comment nodes below ``node`` in source order."""
    for child in node.children:
        if child.type in _COMMENT_NODES:
            yield child
        else:
            yield from _comments(child)


def _first_error(node: Node) -> Node:
    """Return the first ``ERROR`` or missing node below ``node``."""
    for child in node.children:
        if child.type == "ERROR" or child.is_missing:
            return child
        if child.has_error:
            return _first_error(child)
    return node


class _Source:
    """UTF-8 source bytes and text helpers over their syntax nodes."""

    def __init__(self, data: bytes) -> None:
        self.data = data

    def text(self, node: Node) -> str:
        return self.data[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def header(self, node: Node, end: int | None = None) -> str:
        """Return ``node``'s text up to byte ``end``, without comments, on one line."""
        stop: int = node.end_byte if end is None else end
        parts: list[bytes] = []
        cursor: int = node.start_byte
        for comment in _comments(node):
            if comment.end_byte > stop:
                break
            parts.append(self.data[cursor : comment.start_byte])
            cursor = comment.end_byte
        parts.append(self.data[cursor:stop])
        return " ".join(b" ".join(parts).decode("utf-8", errors="replace").split())

    def field(self, node: Node, name: str) -> str:
        child: Node | None = node.child_by_field_name(name)
        return "" if child is None else self.text(child)

    def string_value(self, literal: Node) -> str | None:
        """Return the value of a (raw) string literal, or None for other expressions."""
        if literal.type == "raw_string_literal":
            raw: str = self.text(literal).lstrip("r").strip("#")
            return raw[1:-1]
        if literal.type != "string_literal":
            return None
        parts: list[str] = []
        cursor: int = literal.start_byte + 1
        for child in literal.named_children:
            if child.type != "escape_sequence":
                continue
            parts.append(self.data[cursor : child.start_byte].decode("utf-8", errors="replace"))
            parts.append(_unescape(self.text(child)))
            cursor = child.end_byte
        parts.append(self.data[cursor : literal.end_byte - 1].decode("utf-8", errors="replace"))
        return "".join(parts)


def _unescape(sequence: str) -> str:
    body: str = sequence[1:]
    if body.startswith("u{"):
        return chr(int(body[2:-1].replace("_", ""), 16))
    if body.startswith("x"):
        return chr(int(body[1:], 16))
    return _ESCAPES.get(body, body)


# --- Documentation ---


def _block_doc_lines(body: str) -> list[str]:
    """Split the body of a ``/** ... */`` comment into trimmed lines."""
    lines: list[str] = [line.strip().removeprefix("*").strip() for line in body.splitlines()]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def _comment_docs(text: str) -> list[str]:
    """Return the outer documentation carried by one comment (usually none)."""
    if text.startswith("///") and not text.startswith("////"):
        return [text[3:].strip()]
    if text.startswith("/**") and not text.startswith(("/**/", "/***")):
        return _block_doc_lines(text[3:-2])
    return []


def _doc_attribute(source: _Source, node: Node) -> str | None:
    """Return the text of a ``#[doc = "..."]`` attribute item, if it is one."""
    attribute: Node | None = _child_of_type(node, "attribute")
    if attribute is None or attribute.named_child_count == 0:
        return None
    path: Node = attribute.named_children[0]
    if path.type != "identifier" or source.text(path) != "doc":
        return None
    value: Node | None = attribute.child_by_field_name("value")
    if value is None:
        return None
    text: str | None = source.string_value(value)
    return None if text is None else text.strip()


# --- Items ---

if TYPE_CHECKING:
    ItemBuilder = Callable[[_Source, Node, tuple[str, ...]], ExtractedItem | None]


def _compact(text: str) -> str:
    return "".join(text.split())


def _child_of_type(node: Node, node_type: str) -> Node | None:
    return next((c for c in node.named_children if c.type == node_type), None)


def _before_body(source: _Source, node: Node) -> str:
    body: Node | None = node.child_by_field_name("body")
    return source.header(node, None if body is None else body.start_byte).removesuffix(";")


def _function(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem:
    name: str = source.field(node, "name")
    return ExtractedItem(ItemKind.FUNCTION, name, _before_body(source, node), docs)


def _trait(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem:
    name: str = source.field(node, "name")
    return ExtractedItem(ItemKind.TRAIT, name, _before_body(source, node), docs)


def _type_definition(kind: ItemKind) -> ItemBuilder:
    """Return the builder for structs, enums and unions: name, generics and where clause."""

    def build(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem | None:
        name: Node | None = node.child_by_field_name("name")
        if name is None:
            return None
        generics: Node | None = node.child_by_field_name("type_parameters")
        signature: str = source.header(node, (generics or name).end_byte)
        where: Node | None = _child_of_type(node, "where_clause")
        if where is not None:
            signature = f"{signature} {source.header(where)}"
        return ExtractedItem(kind, source.text(name), signature, docs)

    return build


def _module(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem | None:
    has_body: bool = node.child_by_field_name("body") is not None
    if not has_body and not docs:
        return None
    name: Node | None = node.child_by_field_name("name")
    header: str = source.header(node, None if name is None else name.end_byte)
    signature: str = f"{header} {{ /* ... */ }}" if has_body else f"{header};"
    return ExtractedItem(ItemKind.MODULE, source.field(node, "name"), signature, docs)


def _impl(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem | None:
    self_ty: Node | None = node.child_by_field_name("type")
    if self_ty is None:
        return None
    signature: str = _before_body(source, node)
    trait: Node | None = node.child_by_field_name("trait")
    if trait is None:
        name: str = _compact(source.header(self_ty))
        return ExtractedItem(ItemKind.INHERENT_IMPL, name, signature, docs)
    trait_name: str = _compact(source.header(trait))
    type_name: str = _compact(source.header(self_ty))
    return ExtractedItem(ItemKind.TRAIT_IMPL, f"impl {trait_name} for {type_name}", signature, docs)


def _value_elided(kind: ItemKind, *, sub_item: bool = False) -> ItemBuilder:
    """Return the builder for constants and statics, whose values are shown as ``...``."""

    def build(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem | None:
        ty: Node | None = node.child_by_field_name("type")
        if ty is None:
            return None
        signature: str = f"{source.header(node, ty.end_byte)} = ...;"
        name: str = source.field(node, "name")
        return ExtractedItem(kind, name, signature, docs, is_sub_item=sub_item)

    return build


def _type_alias(kind: ItemKind, *, sub_item: bool = False) -> ItemBuilder:
    def build(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem:
        name: str = source.field(node, "name")
        return ExtractedItem(kind, name, source.header(node), docs, is_sub_item=sub_item)

    return build


def _extern_crate(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem:
    name: str = source.field(node, "alias") or source.field(node, "name")
    return ExtractedItem(ItemKind.EXTERN_CRATE, name, source.header(node), docs)


def _use(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem | None:
    visibility: Node | None = _child_of_type(node, "visibility_modifier")
    if not docs and (visibility is None or source.text(visibility) != "pub"):
        return None
    argument: Node | None = node.child_by_field_name("argument")
    tree: str = "" if argument is None else source.header(argument)
    if len(tree) > MAX_USE_NAME_LEN:
        tree = tree[:USE_NAME_KEEP] + "..."
    return ExtractedItem(ItemKind.USE, tree, source.header(node), docs)


def _method(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem:
    return ExtractedItem(
        ItemKind.IMPL_METHOD,
        source.field(node, "name"),
        f"{_before_body(source, node)};",
        docs,
        is_sub_item=True,
    )


def _macro_call(source: _Source, node: Node, docs: tuple[str, ...]) -> ExtractedItem | None:
    path: Node | None = node.child_by_field_name("macro")
    if path is None:
        return None
    if path.type == "scoped_identifier":
        name: str = source.field(path, "name")
    else:
        name = source.text(path)
    return ExtractedItem(ItemKind.IMPL_MACRO, name, source.header(node), docs, is_sub_item=True)


_TOP_LEVEL_ITEMS: dict[str, ItemBuilder] = {
    "function_item": _function,
    "struct_item": _type_definition(ItemKind.STRUCT),
    "enum_item": _type_definition(ItemKind.ENUM),
    "union_item": _type_definition(ItemKind.UNION),
    "trait_item": _trait,
    "mod_item": _module,
    "impl_item": _impl,
    "type_item": _type_alias(ItemKind.TYPE_ALIAS),
    "const_item": _value_elided(ItemKind.CONSTANT),
    "static_item": _value_elided(ItemKind.STATIC),
    "extern_crate_declaration": _extern_crate,
    "use_declaration": _use,
}

_IMPL_MEMBERS: dict[str, ItemBuilder] = {
    "function_item": _method,
    "const_item": _value_elided(ItemKind.IMPL_CONST, sub_item=True),
    "type_item": _type_alias(ItemKind.IMPL_TYPE, sub_item=True),
    "macro_invocation": _macro_call,
}


def _collect(
    source: _Source,
    container: Node,
    builders: dict[str, ItemBuilder],
) -> list[ExtractedItem]:
    """Extract the items declared directly in ``container`` (a file or an impl body)."""
    items: list[ExtractedItem] = []
    docs: list[str] = []
    for child in container.named_children:
        node_type: str = child.type
        if node_type in _COMMENT_NODES:
            docs.extend(_comment_docs(source.text(child)))
            continue
        if node_type == "attribute_item":
            doc: str | None = _doc_attribute(source, child)
            if doc is not None:
                docs.append(doc)
            continue
        if node_type == "empty_statement":
            continue
        if node_type == "expression_statement" and child.named_child_count == 1:
            child = child.named_children[0]
            node_type = child.type

        item_docs: tuple[str, ...] = tuple(docs)
        docs.clear()
        builder = builders.get(node_type)
        item: ExtractedItem | None = None if builder is None else builder(source, child, item_docs)
        if item is None:
            continue
        items.append(item)
        logger.trace("Extracted %s %r", item.kind.value, item.name)
        if item.kind.is_impl_block:
            body: Node | None = child.child_by_field_name("body")
            if body is not None:
                items.extend(_collect(source, body, _IMPL_MEMBERS))
    return items


def extract_items_from_source(src: str) -> list[ExtractedItem]:
    """Return the displayable items of Rust source text, in declaration order.

    Raises:
        ExtractionError: If the source has syntax errors.
    """
    data: bytes = src.encode("utf-8")
    root: Node = _parser().parse(data).root_node
    if root.has_error:
        line: int = _first_error(root).start_point[0] + 1
        raise ExtractionError(f"syntax error at line {line}")
    return _collect(_Source(data), root, _TOP_LEVEL_ITEMS)


def extract_items(path: Path) -> list[ExtractedItem]:
    """Return the displayable items of the Rust file at ``path``.

    Args:
        path (Path): Source file to inspect.

    Returns:
        list[ExtractedItem]: Items in declaration order (possibly empty).

    Raises:
        ExtractionError: If the file cannot be read, is not valid UTF-8 or does not parse.
    """
    try:
        src: str = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"Could not read {path}: {exc}") from exc
    try:
        items: list[ExtractedItem] = extract_items_from_source(src)
    except ExtractionError as exc:
        raise ExtractionError(f"Could not parse {path}: {exc}") from exc
    logger.debug("Extracted %d item(s) from %s", len(items), path)
    return items


def inspect_files(
    paths: Iterable[Path],
    *,
    diagnostics: DiagnosticLog,
    on_file: Callable[[Path], None] | None = None,
) -> dict[Path, list[ExtractedItem]]:
    """Extract items from every file in ``paths``.

    A file that cannot be read or parsed is left out of the result and
    reported in ``diagnostics``; it stays listed in the report through its
    backreferences.

    Args:
        paths (Iterable[Path]): Third-party files, in report order.
        diagnostics (DiagnosticLog): Receives a warning per failed file.
        on_file (Callable[[Path], None] | None): Called before each file, for progress output.

    Returns:
        dict[Path, list[ExtractedItem]]: Items per successfully processed file.
    """
    extracted: dict[Path, list[ExtractedItem]] = {}
    for path in paths:
        if on_file is not None:
            on_file(path)
        try:
            extracted[path] = extract_items(path)
        except ExtractionError as exc:
            logger.warning("%s", exc)
            diagnostics.add_warning(f"Could not process file {path}: {exc.__cause__ or exc}")
    return extracted
