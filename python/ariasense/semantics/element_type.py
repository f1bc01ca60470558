# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Iterable, Mapping

from ..config import Configuration
from ..tree import ComponentRef, Node, attribute_value, is_component_name


_GLOB_CHARS = frozenset("*?[")


def is_glob(pattern: str) -> bool:
    return any(ch in _GLOB_CHARS for ch in pattern)


def match_name(name: str | None, patterns: Iterable[str]) -> bool:
    """Exact or glob match of ``name`` against any pattern."""
    if not name:
        return False
    for pattern in patterns:
        if name == pattern or (is_glob(pattern) and fnmatchcase(name, pattern)):
            return True
    return False


def lookup_component(name: str, mapping: Mapping[str, str]) -> str | None:
    mapped = mapping.get(name)
    if mapped is not None:
        return mapped
    for pattern, tag in mapping.items():
        if is_glob(pattern) and fnmatchcase(name, pattern):
            return tag
    return None


def raw_element_name(node: Node, config: Configuration | None = None) -> str:
    """Tag name after applying the polymorphic prop (``as="button"``)."""
    config = config or Configuration.default()
    raw = node.name
    prop = config.polymorphic_prop_name
    if prop:
        value = attribute_value(node.attributes, prop)
        allowed = not config.polymorphic_allow_list or raw in config.polymorphic_allow_list
        if isinstance(value, str) and value.strip() and allowed:
            raw = value.strip()
    return raw


def resolve_element_type(node: Node, config: Configuration | None = None) -> str | None:
    """Canonical markup tag for ``node``, or ``None`` for an opaque component.

    Plain markup names come back verbatim. Component names go through the
    configured map, exact match first and then glob patterns in configuration
    order.
    """
    config = config or Configuration.default()
    raw = raw_element_name(node, config)
    mapped = lookup_component(raw, config.component_tag_map)
    if mapped is not None:
        return mapped
    if is_component_name(raw) or (isinstance(node.tag, ComponentRef) and raw == node.name):
        return None
    return raw
