# SPDX-License-Identifier: AGPL-3.0-only
"""Load markup trees from JSON snapshots or plain HTML."""

from __future__ import annotations

import json
from functools import lru_cache
from html.parser import HTMLParser
from pathlib import Path
from typing import Any, Mapping

from jsonschema import Draft202012Validator

from .taxonomy import is_void_element, schema_path
from .tree import SPREAD, Attribute, ComponentRef, Expression, Node, Spread, el, fragment
from .types import SnapshotError


TREE_SCHEMA = "ariasense.tree.v1"
JSON_SUFFIXES = frozenset({".json"})
HTML_SUFFIXES = frozenset({".html", ".htm", ".xhtml"})


@lru_cache(maxsize=1)
def _tree_validator() -> Draft202012Validator:
    schema = json.loads(schema_path(TREE_SCHEMA).read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def _branches(raw: Mapping[str, Any]) -> tuple[Any, Any] | None:
    branches = raw.get("branches")
    return None if branches is None else (branches[0], branches[1])


def _attribute(raw: Mapping[str, Any]) -> Attribute:
    if "spread" in raw:
        return Attribute(SPREAD, Spread(raw["spread"]))
    if "expression" in raw:
        return Attribute(raw["name"], Expression(raw["expression"], _branches(raw)))
    return Attribute(raw["name"], raw.get("value", True))


def _child(raw: Any) -> Any:
    if isinstance(raw, (str, int, float)) and not isinstance(raw, bool):
        return raw
    kind = raw.get("type", "element")
    if kind == "text":
        return raw["value"]
    if kind == "expression":
        return Expression(raw.get("source", ""), _branches(raw))
    return _element(raw)


def _element(raw: Mapping[str, Any]) -> Node:
    tag: str | ComponentRef = raw["tag"]
    if raw.get("component"):
        tag = ComponentRef(str(tag))
    attributes = [_attribute(a) for a in raw.get("attributes", [])]
    children = [_child(c) for c in raw.get("children", [])]
    return el(tag, *attributes, *children)


def load_snapshot(payload: Mapping[str, Any], *, source: str | None = None) -> Node:
    """Build a tree from an ``ariasense.tree.v1`` payload."""
    errors = [
        f"{'/'.join(str(p) for p in err.absolute_path) or '<root>'}: {err.message}"
        for err in _tree_validator().iter_errors(payload)
    ]
    if errors:
        where = f" in {source}" if source else ""
        raise SnapshotError(f"Invalid tree snapshot{where}: " + "; ".join(errors), errors)
    root = payload["root"]
    if isinstance(root, list):
        return fragment(*[_child(c) for c in root])
    return _element(root)


def load_snapshot_file(path: str | Path) -> Node:
    p = Path(path)
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Invalid JSON in {p}: {exc}", [str(exc)]) from exc
    return load_snapshot(payload, source=str(p))


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.top: list[Any] = []
        self.stack: list[Node] = []

    def _append(self, item: Any) -> None:
        if self.stack:
            parent = self.stack[-1]
            parent.children.append(item)
            if isinstance(item, Node):
                item.parent = parent
        else:
            self.top.append(item)

    def _node(self, tag: str, attrs: list[tuple[str, str | None]]) -> Node:
        # A bare attribute in HTML has the empty string as its value.
        return Node(tag=tag, attributes=[Attribute(name, "" if value is None else value) for name, value in attrs])

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        node = self._node(tag, attrs)
        self._append(node)
        if not is_void_element(tag):
            self.stack.append(node)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._append(self._node(tag, attrs))

    def handle_endtag(self, tag: str) -> None:
        for idx in range(len(self.stack) - 1, -1, -1):
            if self.stack[idx].tag == tag:
                del self.stack[idx:]
                return

    def handle_data(self, data: str) -> None:
        if data:
            self._append(data)


def parse_html(text: str) -> Node:
    """Parse HTML into a tree; several top-level nodes come back as a fragment."""
    builder = _TreeBuilder()
    builder.feed(text)
    builder.close()
    elements = [item for item in builder.top if isinstance(item, Node)]
    loose_text = [item for item in builder.top if isinstance(item, str) and item.strip()]
    if len(elements) == 1 and not loose_text:
        return elements[0]
    return fragment(*builder.top)


def load_tree(path: str | Path) -> Node:
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix in JSON_SUFFIXES:
        return load_snapshot_file(p)
    if suffix in HTML_SUFFIXES:
        return parse_html(p.read_text(encoding="utf-8"))
    raise SnapshotError(f"Unsupported snapshot type {p.suffix!r} for {p}", [f"unsupported suffix {p.suffix!r}"])
