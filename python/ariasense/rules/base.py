# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from jsonschema import Draft202012Validator

from ..config import LEVEL_ERROR, Configuration, RuleSetting, option_key
from ..semantics import raw_element_name, resolve_element_type
from ..tree import Attribute, Node, find_attribute, literal_value


STRING_LIST = {"type": "array", "items": {"type": "string"}, "uniqueItems": True}


def object_schema(properties: Mapping[str, Any] | None = None, **extra: Any) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": dict(properties or {})}
    schema.update(extra)
    return schema


def enum_list(values: Iterable[str], *, min_items: int = 0) -> dict[str, Any]:
    return {
        "type": "array",
        "items": {"type": "string", "enum": list(values)},
        "uniqueItems": True,
        "minItems": min_items,
    }


def prop_present(node: Node, name: str) -> bool:
    """Attribute exists with a value other than ``null``.

    An attribute hidden behind a spread does not count.
    """
    attr = find_attribute(node.attributes, name)
    if not isinstance(attr, Attribute):
        return False
    return literal_value(attr) is not None


def node_type(node: Node, config: Configuration) -> str:
    """Canonical element type, falling back to the raw name for unmapped components."""
    resolved = resolve_element_type(node, config)
    return resolved if resolved is not None else raw_element_name(node, config)


class RuleContext:
    def __init__(self, rule: Rule, config: Configuration, options: Mapping[str, Any], node: Node, path: str) -> None:
        self.rule = rule
        self.config = config
        self.options = options
        self.node = node
        self.path = path
        self.element_type = resolve_element_type(node, config)
        self.node_type = self.element_type if self.element_type is not None else raw_element_name(node, config)
        self.reports: list[dict[str, Any]] = []

    def option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)

    def type_of(self, node: Node) -> str:
        return node_type(node, self.config)

    def report(self, message: str, **extra: Any) -> None:
        self.reports.append({"message": message, **extra})


@dataclass(frozen=True, eq=False)
class Rule:
    id: str
    check: Callable[[Node, RuleContext], None]
    description: str = ""
    default_level: str = LEVEL_ERROR
    default_options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    options_schema: Mapping[str, Any] = field(default_factory=object_schema)
    deprecated: bool = False
    replaced_by: tuple[str, ...] = ()

    def normalize_options(self, options: Mapping[str, Any]) -> dict[str, Any]:
        """Snake-case option keys the schema knows; other keys (tag names) pass through."""
        known = set(self.options_schema.get("properties", {}))
        out: dict[str, Any] = {}
        for key, value in options.items():
            name = option_key(key)
            out[name if name in known else str(key)] = value
        return out

    def options_validator(self) -> Draft202012Validator:
        return _validator_for(self)

    def resolve_options(self, setting: RuleSetting | None) -> Mapping[str, Any]:
        if setting is not None and setting.options is not None:
            return setting.options
        return self.default_options

    def run(self, node: Node, path: str, config: Configuration, options: Mapping[str, Any]) -> list[dict[str, Any]]:
        ctx = RuleContext(self, config, options, node, path)
        self.check(node, ctx)
        return ctx.reports

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "default_level": self.default_level,
            "deprecated": self.deprecated,
            "replaced_by": list(self.replaced_by),
            "options": sorted(self.options_schema.get("properties", {})),
        }


@lru_cache(maxsize=None)
def _validator_for(rule: Rule) -> Draft202012Validator:
    return Draft202012Validator(dict(rule.options_schema))


def rule(
    rule_id: str,
    *,
    description: str = "",
    level: str = LEVEL_ERROR,
    options: Mapping[str, Any] | None = None,
    schema: Mapping[str, Any] | None = None,
    deprecated: bool = False,
    replaced_by: Iterable[str] = (),
) -> Callable[[Callable[[Node, RuleContext], None]], Rule]:
    def register(check: Callable[[Node, RuleContext], None]) -> Rule:
        return Rule(
            id=rule_id,
            check=check,
            description=description,
            default_level=level,
            default_options=MappingProxyType(dict(options or {})),
            options_schema=MappingProxyType(dict(schema or object_schema())),
            deprecated=deprecated,
            replaced_by=tuple(replaced_by),
        )

    return register
