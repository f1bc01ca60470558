# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Sequence

from .types import ABSENT, INDETERMINATE


SPREAD = "..."
FRAGMENT = "#fragment"


def _is_literal(value: Any) -> bool:
    return value is None or isinstance(value, (str, bool, int, float))


def is_component_name(name: str) -> bool:
    text = str(name)
    return bool(text) and (text[0].isupper() or "." in text)


def normalize_attr_name(name: str) -> str:
    return str(name).strip().lower().replace("_", "-")


@dataclass(frozen=True)
class ComponentRef:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Expression:
    """Placeholder for a value that is only known at run time.

    ``branches`` is set only for a two-way conditional whose branches are both
    literals (``cond ? "a" : "b"``); nothing else about the expression is
    ever evaluated.
    """

    source: str = ""
    branches: tuple[Any, Any] | None = None

    def __post_init__(self) -> None:
        if self.branches is None:
            return
        branches = tuple(self.branches)
        if len(branches) != 2 or not all(_is_literal(b) for b in branches):
            raise ValueError("Expression branches must be exactly two literal values")
        object.__setattr__(self, "branches", branches)


@dataclass(frozen=True)
class Spread:
    source: str = ""


@dataclass(frozen=True)
class Attribute:
    name: str
    value: Any = True

    @property
    def is_spread(self) -> bool:
        return isinstance(self.value, Spread)

    @property
    def display_name(self) -> str:
        return self.name.replace("_", "-")


def spread(source: str = "props") -> Attribute:
    return Attribute(SPREAD, Spread(source))


@dataclass
class Node:
    tag: str | ComponentRef
    attributes: list[Attribute] = field(default_factory=list)
    children: list[Any] = field(default_factory=list)
    parent: Node | None = field(default=None, repr=False, compare=False)

    @property
    def name(self) -> str:
        return str(self.tag)

    @property
    def is_component(self) -> bool:
        return isinstance(self.tag, ComponentRef) or is_component_name(self.name)

    @property
    def has_spread(self) -> bool:
        return any(attr.is_spread for attr in self.attributes)

    def element_children(self) -> list[Node]:
        return [child for child in self.children if isinstance(child, Node)]

    def get(self, name: str) -> Any:
        return attribute_value(self.attributes, name)


def _attributes_of(target: Node | Sequence[Attribute]) -> Sequence[Attribute]:
    if isinstance(target, Node):
        return target.attributes
    return target


def find_attribute(target: Node | Sequence[Attribute], name: str) -> Attribute | None | Any:
    """Return the attribute that wins for ``name``.

    Names match case-insensitively with ``_`` and ``-`` interchangeable. The
    last occurrence wins; a spread after it (or a spread with no named
    occurrence at all) makes the answer ``INDETERMINATE``.
    """
    wanted = normalize_attr_name(name)
    found: Attribute | None = None
    shadowed = False
    for attr in _attributes_of(target):
        if attr.is_spread:
            shadowed = True
        elif normalize_attr_name(attr.name) == wanted:
            found = attr
            shadowed = False
    if shadowed:
        return INDETERMINATE
    return found


def literal_value(attr: Attribute) -> Any:
    value = attr.value
    if isinstance(value, (Expression, Spread)):
        return INDETERMINATE
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return value


def attribute_value(target: Node | Sequence[Attribute], name: str) -> Any:
    attr = find_attribute(target, name)
    if attr is INDETERMINATE:
        return INDETERMINATE
    if attr is None:
        return ABSENT
    return literal_value(attr)


def has_attribute(target: Node | Sequence[Attribute], name: str) -> bool | Any:
    attr = find_attribute(target, name)
    if attr is INDETERMINATE:
        return INDETERMINATE
    return attr is not None


def has_any_attribute(target: Node | Sequence[Attribute], names: Iterable[str]) -> bool | Any:
    unknown = False
    for name in names:
        present = has_attribute(target, name)
        if present is True:
            return True
        if present is INDETERMINATE:
            unknown = True
    return INDETERMINATE if unknown else False


def has_value(value: Any) -> bool:
    """True for a readable, non-null literal."""
    return value is not ABSENT and value is not INDETERMINATE and value is not None


def el(tag: str | ComponentRef, *children: Any, **props: Any) -> Node:
    """Build a node.

    Positional ``Attribute``/``Spread`` items become attributes in the order
    given, followed by keyword props; everything else is a child.
    """
    if isinstance(tag, str) and is_component_name(tag):
        tag = ComponentRef(tag)
    attributes: list[Attribute] = []
    flat: list[Any] = []
    for child in children:
        if child is None:
            continue
        items = [x for x in child if x is not None] if isinstance(child, (list, tuple)) else [child]
        for item in items:
            if isinstance(item, Attribute):
                attributes.append(item)
            elif isinstance(item, Spread):
                attributes.append(Attribute(SPREAD, item))
            else:
                flat.append(item)
    attributes.extend(Attribute(name, value) for name, value in props.items())
    node = Node(tag=tag, attributes=attributes, children=flat)
    for child in flat:
        if isinstance(child, Node):
            child.parent = node
    return node


def fragment(*children: Any) -> Node:
    return el(FRAGMENT, *children)


def iter_elements(root: Node) -> Iterator[tuple[Node, str]]:
    """Yield ``(node, path)`` in document order with XPath-like paths.

    Sibling indexes count element children only; a fragment root is not
    yielded itself.
    """
    stack: list[tuple[Node, str]] = []
    if root.name == FRAGMENT:
        stack.extend(reversed(_child_paths(root, "")))
    else:
        stack.append((root, f"/{root.name}[1]"))
    while stack:
        node, path = stack.pop()
        yield node, path
        stack.extend(reversed(_child_paths(node, path)))


def _child_paths(node: Node, path: str) -> list[tuple[Node, str]]:
    out: list[tuple[Node, str]] = []
    idx = 0
    for child in node.element_children():
        idx += 1
        out.append((child, f"{path}/{child.name}[{idx}]"))
    return out


def text_children(node: Node) -> list[str]:
    return [str(child) for child in node.children if isinstance(child, str)]
