# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from ..tree import Attribute, find_attribute, literal_value
from ..types import ABSENT, INDETERMINATE


CATEGORY_INTERACTIVE = "interactive"
CATEGORY_NON_INTERACTIVE = "non_interactive"
CATEGORY_STATIC = "static"

_SELECTOR_RE = re.compile(r"^(?P<tag>[a-z][a-z0-9]*)(?:\[(?P<attr>[a-z-]+)(?:=(?P<value>[a-z-]+))?\])?$")


def _data_dir() -> Path:
    # python/ariasense/taxonomy/registry.py -> python/ariasense/data
    return Path(__file__).resolve().parents[1] / "data"


def registry_path(name: str) -> Path:
    return _data_dir() / f"{name}.json"


def schema_path(name: str) -> Path:
    return _data_dir() / "schemas" / f"{name}.schema.json"


def _load(name: str) -> dict[str, Any]:
    return json.loads(registry_path(name).read_text(encoding="utf-8"))


@lru_cache(maxsize=1)
def load_role_registry() -> dict[str, Any]:
    return _load("aria_roles.v1")


@lru_cache(maxsize=1)
def load_attribute_registry() -> dict[str, Any]:
    return _load("aria_attributes.v1")


@lru_cache(maxsize=1)
def load_element_registry() -> dict[str, Any]:
    return _load("html_elements.v1")


@dataclass(frozen=True)
class TagSelector:
    tag: str
    attribute: str | None = None
    value: str | None = None

    @classmethod
    def parse(cls, text: str) -> TagSelector:
        match = _SELECTOR_RE.match(text)
        if not match:
            raise ValueError(f"Invalid tag selector {text!r}")
        return cls(match["tag"], match["attr"], match["value"])

    def __str__(self) -> str:
        if not self.attribute:
            return f"<{self.tag}>"
        value = f'"{self.value}"' if self.value else "..."
        return f"<{self.tag} {self.attribute}={value}>"


@dataclass(frozen=True)
class RoleDefinition:
    name: str
    abstract: bool
    superclasses: tuple[str, ...]
    props: frozenset[str]
    elements: tuple[TagSelector, ...] = ()


@dataclass(frozen=True)
class AriaAttribute:
    name: str
    type: str
    values: tuple[Any, ...] = ()
    allow_undefined: bool = False


@dataclass(frozen=True)
class ElementVariant:
    when: Mapping[str, Mapping[str, Any]]
    role: str | None
    category: str
    hidden: bool = False

    def matches(self, attributes: Sequence[Attribute]) -> bool:
        return all(_condition_holds(attributes, name, cond) for name, cond in self.when.items())


@dataclass(frozen=True)
class ElementDefaults:
    tag: str
    role: str | None
    category: str
    void: bool = False
    hidden: bool = False
    variants: tuple[ElementVariant, ...] = ()

    def resolve(self, attributes: Sequence[Attribute]) -> tuple[str | None, str, bool]:
        """Return ``(implicit_role, category, hidden)`` for these attributes.

        The first matching variant wins. An unreadable value only satisfies a
        bare presence test.
        """
        for variant in self.variants:
            if variant.matches(attributes):
                return variant.role, variant.category, variant.hidden
        return self.role, self.category, self.hidden


def _condition_holds(attributes: Sequence[Attribute], name: str, cond: Mapping[str, Any]) -> bool:
    attr = find_attribute(attributes, name)
    if attr is INDETERMINATE:
        return False
    value = ABSENT if attr is None else literal_value(attr)
    if value is ABSENT or value is None:
        if "default" not in cond:
            return cond.get("present") is False
        value = cond["default"]
    elif cond.get("present") is False:
        return False
    if value is INDETERMINATE:
        # Present with a run-time value: only a bare presence test can hold.
        return cond.get("present") is True and set(cond) == {"present"}
    text = str(value).lower()
    if "equals" in cond and text != cond["equals"]:
        return False
    if "in" in cond and text not in cond["in"]:
        return False
    if "min" in cond:
        try:
            if float(value) < cond["min"]:
                return False
        except (TypeError, ValueError):
            return False
    return True


@lru_cache(maxsize=1)
def _roles() -> Mapping[str, RoleDefinition]:
    out: dict[str, RoleDefinition] = {}
    for name, raw in load_role_registry()["roles"].items():
        out[name] = RoleDefinition(
            name=name,
            abstract=bool(raw.get("abstract")),
            superclasses=tuple(raw.get("superclasses") or ()),
            props=frozenset(raw.get("props") or ()),
            elements=tuple(TagSelector.parse(s) for s in raw.get("elements") or ()),
        )
    return MappingProxyType(out)


@lru_cache(maxsize=1)
def _attributes() -> Mapping[str, AriaAttribute]:
    out: dict[str, AriaAttribute] = {}
    for name, raw in load_attribute_registry()["attributes"].items():
        out[name] = AriaAttribute(
            name=name,
            type=raw["type"],
            values=tuple(raw.get("values") or ()),
            allow_undefined=bool(raw.get("allow_undefined")),
        )
    return MappingProxyType(out)


@lru_cache(maxsize=1)
def _elements() -> Mapping[str, ElementDefaults]:
    out: dict[str, ElementDefaults] = {}
    for tag, raw in load_element_registry()["elements"].items():
        variants = tuple(
            ElementVariant(
                when=MappingProxyType({k: MappingProxyType(dict(v)) for k, v in item["when"].items()}),
                role=item.get("role"),
                category=item["category"],
                hidden=bool(item.get("hidden")),
            )
            for item in raw.get("variants") or ()
        )
        out[tag] = ElementDefaults(
            tag=tag,
            role=raw.get("role"),
            category=raw["category"],
            void=bool(raw.get("void")),
            hidden=bool(raw.get("hidden")),
            variants=variants,
        )
    return MappingProxyType(out)


def role_definition(name: str) -> RoleDefinition | None:
    return _roles().get(name)


def role_names() -> tuple[str, ...]:
    return tuple(_roles())


def concrete_role_names() -> tuple[str, ...]:
    return tuple(name for name, role in _roles().items() if not role.abstract)


@lru_cache(maxsize=None)
def role_ancestors(name: str) -> frozenset[str]:
    """Transitive superclasses of ``name`` (excluding the role itself)."""
    roles = _roles()
    seen: set[str] = set()
    pending = list(roles[name].superclasses) if name in roles else []
    while pending:
        current = pending.pop()
        if current in seen:
            continue
        seen.add(current)
        definition = roles.get(current)
        if definition is not None:
            pending.extend(definition.superclasses)
    return frozenset(seen)


@lru_cache(maxsize=None)
def role_props(name: str) -> frozenset[str]:
    """Properties a role supports, own plus inherited."""
    roles = _roles()
    if name not in roles:
        return frozenset()
    props = set(roles[name].props)
    for ancestor in role_ancestors(name):
        definition = roles.get(ancestor)
        if definition is not None:
            props.update(definition.props)
    return frozenset(props)


def aria_attribute(name: str) -> AriaAttribute | None:
    return _attributes().get(name)


def aria_attribute_names() -> tuple[str, ...]:
    return tuple(_attributes())


def element_defaults(tag: str | None) -> ElementDefaults | None:
    if not tag:
        return None
    return _elements().get(tag)


def element_names() -> tuple[str, ...]:
    return tuple(_elements())


def is_dom_element(tag: str | None) -> bool:
    return element_defaults(tag) is not None


def is_void_element(tag: str | None) -> bool:
    defaults = element_defaults(tag)
    return bool(defaults and defaults.void)
