# SPDX-License-Identifier: AGPL-3.0-only
"""Rules about ARIA roles and ``aria-*`` attributes."""

from __future__ import annotations

from typing import Any, Sequence

from ..config import LEVEL_OFF
from ..semantics import (
    explicit_role,
    implicit_role,
    is_interactive_element,
    is_valid_role,
    role_tokens,
    suggest,
    suggest_roles,
    tab_index,
)
from ..taxonomy import aria_attribute, aria_attribute_names, is_dom_element, role_definition, role_props
from ..tree import Node, find_attribute, has_attribute, literal_value, normalize_attr_name
from ..types import INDETERMINATE
from .base import STRING_LIST, RuleContext, object_schema, rule


def _is_aria_name(name: str) -> bool:
    return normalize_attr_name(name).startswith("aria-")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return True
        try:
            number = float(text)
        except ValueError:
            return False
        return number == number
    return False


def _same_token(value: Any, candidate: Any) -> bool:
    return type(value) is type(candidate) and value == candidate


def is_valid_aria_value(value: Any, value_type: str, permitted: Sequence[Any] = ()) -> bool:
    if value_type == "boolean":
        return isinstance(value, bool)
    if value_type in ("string", "id"):
        return isinstance(value, str)
    if value_type == "tristate":
        return isinstance(value, bool) or value == "mixed"
    if value_type in ("integer", "number"):
        return _is_number(value)
    if value_type == "token":
        probe = value.lower() if isinstance(value, str) else value
        return any(_same_token(probe, candidate) for candidate in permitted)
    if value_type == "idlist":
        return isinstance(value, str)
    if value_type == "tokenlist":
        if not isinstance(value, str):
            return False
        return all(token.lower() in permitted for token in value.split())
    return True


def _type_message(name: str, value_type: str, permitted: Sequence[Any]) -> str:
    if value_type == "tristate":
        return f'{name} 속성 값은 boolean 또는 문자열 "mixed"여야 합니다.'
    if value_type == "token":
        choices = ", ".join(str(v).lower() for v in permitted)
        return f"{name} 속성 값은 다음 중 하나여야 합니다: {choices}."
    if value_type == "tokenlist":
        choices = ", ".join(str(v) for v in permitted)
        return f"{name} 속성 값은 다음 중 하나 이상의 값으로 이루어진 공백 구분 문자열이어야 합니다: {choices}."
    if value_type == "idlist":
        return f"{name} 속성 값은 DOM 요소 ID를 나타내는 문자열들의 공백 구분 목록이어야 합니다."
    if value_type == "id":
        return f"{name} 속성 값은 DOM 요소 ID를 나타내는 문자열이어야 합니다."
    return f"{name} 속성 값은 {value_type} 타입이어야 합니다."


def _did_you_mean(suggestions: Sequence[str]) -> str:
    return f" 혹시 {', '.join(suggestions)} 를(을) 사용하려던 건가요?"


@rule("aria-props", description="`aria-*` 속성들이 모두 유효한지 검사합니다.")
def aria_props(node: Node, ctx: RuleContext) -> None:
    for attr in node.attributes:
        if attr.is_spread or not _is_aria_name(attr.name):
            continue
        name = attr.display_name
        if aria_attribute(name.lower()) is not None:
            continue
        message = f"{name}: 이 속성은 유효하지 않은 ARIA 속성입니다."
        suggestions = suggest(name, aria_attribute_names())
        if suggestions:
            message += _did_you_mean(suggestions)
        ctx.report(message, attribute=name, suggestions=suggestions)


@rule("aria-proptypes", description="ARIA 상태 및 속성 값이 명세에 맞는지 검사합니다.")
def aria_proptypes(node: Node, ctx: RuleContext) -> None:
    for attr in node.attributes:
        if attr.is_spread or not _is_aria_name(attr.name):
            continue
        definition = aria_attribute(attr.display_name.lower())
        if definition is None:
            continue
        value = literal_value(attr)
        if value is INDETERMINATE or value is None:
            continue
        if is_valid_aria_value(value, definition.type, definition.values):
            continue
        ctx.report(_type_message(definition.name, definition.type, definition.values), attribute=definition.name)


@rule(
    "aria-role",
    description="ARIA role 속성이 유효한 비추상 역할이어야 함을 강제합니다.",
    schema=object_schema({"allowed_invalid_roles": STRING_LIST, "ignore_non_dom": {"type": "boolean"}}),
)
def aria_role(node: Node, ctx: RuleContext) -> None:
    if ctx.option("ignore_non_dom", False) and not is_dom_element(ctx.node_type):
        return
    allowed = {*ctx.option("allowed_invalid_roles", ()), *ctx.config.allowed_invalid_roles}
    attr = find_attribute(node.attributes, "role")
    if attr is None or attr is INDETERMINATE:
        return
    value = literal_value(attr)
    if value is INDETERMINATE or value is None:
        return
    tokens = str(value).split()
    invalid = [token for token in tokens if not is_valid_role(token, allowed)] if tokens else [""]
    if not invalid:
        return
    message = "ARIA role은 유효한 역할이어야 하며, 추상(abstract) role은 사용할 수 없습니다."
    suggestions = suggest_roles(invalid[0]) if invalid[0] else []
    if suggestions:
        message += _did_you_mean(suggestions)
    ctx.report(message, attribute="role", invalid_roles=invalid, suggestions=suggestions)


@rule(
    "aria-activedescendant-has-tabindex",
    description="`aria-activedescendant` 속성을 사용하는 요소는 키보드로 포커스를 이동할 수 있어야 하며, 이를 위해 `tabindex`가 필요합니다.",
)
def aria_activedescendant_has_tabindex(node: Node, ctx: RuleContext) -> None:
    if has_attribute(node.attributes, "aria-activedescendant") is not True:
        return
    if not is_dom_element(ctx.node_type):
        return
    index = tab_index(node.attributes)
    if index is INDETERMINATE:
        return
    if index is None and is_interactive_element(ctx.node_type, node.attributes):
        return
    if index is not None and index >= -1:
        return
    ctx.report("`aria-activedescendant` 속성을 사용하는 요소는 반드시 `tabIndex` 속성을 포함해야 합니다.")


@rule(
    "role-supports-aria-props",
    description="역할(role)이 명시되었거나 암시적으로 적용된 경우, 해당 역할이 허용하는 aria-* 속성만 사용할 수 있도록 강제합니다.",
)
def role_supports_aria_props(node: Node, ctx: RuleContext) -> None:
    attrs = node.attributes
    role_attr = find_attribute(attrs, "role")
    if role_attr is INDETERMINATE:
        return
    if role_attr is not None:
        role = literal_value(role_attr)
        implicit = False
    else:
        role = implicit_role(ctx.element_type, attrs)
        implicit = True
    if not isinstance(role, str) or role_definition(role) is None:
        return
    allowed = role_props(role)
    for attr in attrs:
        if attr.is_spread or literal_value(attr) is None:
            continue
        name = attr.display_name.lower()
        if aria_attribute(name) is None or name in allowed:
            continue
        if implicit:
            message = (
                f'속성 "{name}"은(는) 역할 "{role}"에서 지원되지 않습니다. '
                f"이 역할은 <{ctx.node_type}> 요소에 암시적으로 부여되어 있습니다."
            )
        else:
            message = f'속성 "{name}"은(는) 역할 "{role}"에서 지원되지 않습니다.'
        ctx.report(message, attribute=name, role=role)


_DEFAULT_ROLE_EXCEPTIONS = {"nav": ("navigation",)}


@rule(
    "no-redundant-roles",
    description="기본적으로 지정된 implicit role과 동일한 role을 명시적으로 작성하지 않도록 강제합니다.",
    schema=object_schema(additionalProperties=STRING_LIST),
)
def no_redundant_roles(node: Node, ctx: RuleContext) -> None:
    tag = ctx.node_type
    implicit = implicit_role(ctx.element_type, node.attributes)
    explicit = explicit_role(node.attributes)
    if not implicit or not isinstance(explicit, str) or implicit != explicit:
        return
    if tag in ctx.options:
        exceptions = ctx.options[tag]
    else:
        exceptions = _DEFAULT_ROLE_EXCEPTIONS.get(tag, ())
    if implicit in exceptions:
        return
    ctx.report(
        f"요소 <{tag}>에는 기본적으로 '{implicit}' 역할이 암묵적으로 지정되어 있습니다. "
        "이를 명시적으로 지정하는 것은 중복이며 피해야 합니다.",
        role=implicit,
    )


def _join_choices(items: Sequence[str]) -> str:
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + ", or " + items[-1]


@rule(
    "prefer-tag-over-role",
    description="ARIA `role` 속성 대신 의미 있는 HTML 태그 사용을 권장합니다.",
    level=LEVEL_OFF,
)
def prefer_tag_over_role(node: Node, ctx: RuleContext) -> None:
    tokens = role_tokens(node.attributes)
    if not tokens or tokens is INDETERMINATE:
        return
    role = tokens[-1].lower()
    definition = role_definition(role)
    if definition is None or not definition.elements:
        return
    if any(selector.tag == ctx.node_type for selector in definition.elements):
        return
    tags = [str(selector) for selector in definition.elements]
    ctx.report(
        f'"{role}" 역할(role) 대신 {_join_choices(tags)} 태그를 사용하세요. 이는 모든 기기에서의 접근성을 높여줍니다.',
        role=role,
    )
