# SPDX-License-Identifier: AGPL-3.0-only
"""Rules about labels and their association with form controls."""

from __future__ import annotations

from collections import deque
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..config import LEVEL_OFF, MAX_SEARCH_DEPTH, Configuration
from ..semantics import (
    find_accessible_name,
    find_child_component,
    has_accessible_child,
    is_hidden_from_screen_reader,
    is_interactive_element,
    is_interactive_role,
    match_name,
    raw_element_name,
)
from ..taxonomy import is_dom_element
from ..tree import Node, attribute_value, find_attribute, literal_value
from ..types import INDETERMINATE
from .base import STRING_LIST, RuleContext, enum_list, object_schema, rule


FORM_CONTROLS = ("input", "meter", "output", "progress", "select", "textarea")
_DEPTH_SCHEMA = {"type": "integer", "minimum": 0}


def _depth(ctx: RuleContext) -> int:
    depth = ctx.option("depth")
    if depth is None:
        return ctx.config.max_search_depth
    return min(int(depth), MAX_SEARCH_DEPTH)


def _label_attributes(ctx: RuleContext) -> list[str]:
    return [*ctx.config.label_attributes, *ctx.option("label_attributes", ())]


def _control_components(ctx: RuleContext, base: Iterable[str] = ()) -> list[str]:
    return [*base, *ctx.config.control_components, *ctx.option("control_components", ())]


def _name_missing(node: Node, ctx: RuleContext, controls: list[str]) -> bool:
    search = find_accessible_name(
        node,
        ctx.config,
        _depth(ctx),
        label_attributes=_label_attributes(ctx),
        control_components=controls,
    )
    return not search.found and not search.indeterminate


@rule(
    "control-has-associated-label",
    description="인터랙티브 요소는 반드시 텍스트 레이블과 연결되어야 합니다.",
    level=LEVEL_OFF,
    schema=object_schema(
        {
            "label_attributes": STRING_LIST,
            "control_components": STRING_LIST,
            "ignore_elements": STRING_LIST,
            "ignore_roles": STRING_LIST,
            "depth": _DEPTH_SCHEMA,
        }
    ),
)
def control_has_associated_label(node: Node, ctx: RuleContext) -> None:
    tag = ctx.node_type
    attrs = node.attributes
    # <link> is never rendered, so it is always ignored.
    if tag in {"link", *ctx.option("ignore_elements", ())}:
        return
    role = attribute_value(attrs, "role")
    if role in ctx.option("ignore_roles", ()):
        return
    controls = _control_components(ctx)
    if is_hidden_from_screen_reader(tag, attrs):
        return
    is_control = (
        is_interactive_element(tag, attrs)
        or (is_dom_element(tag) and is_interactive_role(tag, attrs))
        or bool(match_name(tag, controls))
    )
    if is_control and _name_missing(node, ctx, controls):
        ctx.report("컨트롤 요소는 반드시 텍스트 레이블과 연결되어 있어야 합니다.")


def has_html_for(node: Node, config: Configuration) -> bool:
    """The first ``htmlFor``-style attribute present decides; an unreadable value counts as set."""
    for name in config.html_for_attributes:
        attr = find_attribute(node.attributes, name)
        if attr is INDETERMINATE:
            return True
        if attr is None:
            continue
        value = literal_value(attr)
        return value is INDETERMINATE or (bool(value) and value is not True)
    return False


_ASSERT_CHOICES = ("htmlFor", "nesting", "both", "either")

LABEL_MESSAGES = MappingProxyType(
    {
        "accessibleLabel": "폼 레이블에는 접근 가능한 텍스트가 포함되어야 합니다.",
        "htmlFor": "폼 레이블은 유효한 htmlFor 속성을 가져야 합니다.",
        "nesting": "폼 레이블은 내부에 연결된 폼 컨트롤을 자식으로 포함해야 합니다.",
        "either": "폼 레이블은 htmlFor 속성 또는 자식 폼 컨트롤 중 하나를 가져야 합니다.",
        "both": "폼 레이블은 htmlFor 속성과 자식 폼 컨트롤 둘 다 가져야 합니다.",
    }
)


@rule(
    "label-has-associated-control",
    description="`<label>` 태그에 접근 가능한 텍스트와 연결된 폼 컨트롤이 있어야 합니다.",
    options={"assert": "either"},
    schema=object_schema(
        {
            "label_components": STRING_LIST,
            "label_attributes": STRING_LIST,
            "control_components": STRING_LIST,
            "assert": {"type": "string", "enum": list(_ASSERT_CHOICES)},
            "depth": _DEPTH_SCHEMA,
        }
    ),
)
def label_has_associated_control(node: Node, ctx: RuleContext) -> None:
    labels = ["label", *ctx.option("label_components", ())]
    if not match_name(ctx.node_type, labels) and not match_name(node.name, labels):
        return
    controls = _control_components(ctx, FORM_CONTROLS)
    if _name_missing(node, ctx, controls):
        ctx.report(LABEL_MESSAGES["accessibleLabel"], message_id="accessibleLabel")
        return
    html_for = has_html_for(node, ctx.config)
    nested = find_child_component(node, controls, ctx.config, _depth(ctx)) is not False
    mode = ctx.option("assert", "either")
    if mode == "htmlFor":
        ok = html_for
    elif mode == "nesting":
        ok = nested
    elif mode == "both":
        ok = html_for and nested
    else:
        ok = html_for or nested
    if not ok:
        ctx.report(LABEL_MESSAGES[mode], message_id=mode)


_REQUIRED_SCHEMA = {
    "oneOf": [
        {"type": "string", "enum": ["nesting", "id"]},
        {
            "type": "object",
            "properties": {"some": enum_list(("nesting", "id"), min_items=1)},
            "required": ["some"],
            "additionalProperties": False,
        },
        {
            "type": "object",
            "properties": {"every": enum_list(("nesting", "id"), min_items=1)},
            "required": ["every"],
            "additionalProperties": False,
        },
    ]
}
_DEFAULT_REQUIRED = {"every": ["nesting", "id"]}
_NESTED_CONTROLS = frozenset({"input", "textarea", "select"})


def _has_nested_control(node: Node, config: Configuration) -> bool:
    queue: deque[Node] = deque(node.element_children())
    while queue:
        current = queue.popleft()
        if raw_element_name(current, config) in _NESTED_CONTROLS:
            return True
        queue.extend(current.element_children())
    return False


def _required_checks(required: Any) -> tuple[str, list[str]]:
    if isinstance(required, str):
        return "every", [required]
    if isinstance(required, Mapping) and "some" in required:
        return "some", list(required["some"])
    if isinstance(required, Mapping) and "every" in required:
        return "every", list(required["every"])
    return "every", list(_DEFAULT_REQUIRED["every"])


def _required_message(required: Any, how: str, checks: list[str]) -> str:
    if isinstance(required, str):
        return f'<label> 태그는 "{required}" 방식으로 폼 컨트롤과 연결되어야 합니다.'
    if how == "some":
        return f"<label> 태그는 다음 중 **하나 이상**의 방식으로 폼 컨트롤과 연결되어야 합니다: {', '.join(checks)}"
    return f"<label> 태그는 다음 **모든 방식**으로 폼 컨트롤과 연결되어야 합니다: {', '.join(checks)}"


@rule(
    "label-has-for",
    description="`<label>` 태그에 `htmlFor` 속성이 포함되어 있어야 합니다.",
    level=LEVEL_OFF,
    deprecated=True,
    replaced_by=("label-has-associated-control",),
    schema=object_schema(
        {"components": STRING_LIST, "required": _REQUIRED_SCHEMA, "allow_children": {"type": "boolean"}}
    ),
)
def label_has_for(node: Node, ctx: RuleContext) -> None:
    if ctx.node_type not in ("label", *ctx.option("components", ())):
        return
    required = ctx.option("required", _DEFAULT_REQUIRED)
    how, checks = _required_checks(required)

    def satisfied(check: str) -> bool:
        if ctx.option("allow_children", False) and has_accessible_child(node, ctx.config):
            return True
        if check == "nesting":
            return _has_nested_control(node, ctx.config)
        return has_html_for(node, ctx.config)

    results = [satisfied(check) for check in checks]
    if all(results) if how == "every" else any(results):
        return
    ctx.report(_required_message(required, how, checks), required={how: checks})

