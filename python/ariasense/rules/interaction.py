# SPDX-License-Identifier: AGPL-3.0-only
"""Rules about event handlers, focus and keyboard access."""

from __future__ import annotations

from typing import Any

from ..semantics import (
    conditional_role_branches,
    is_abstract_role_use,
    is_content_editable,
    is_disabled,
    is_focusable,
    is_hidden_from_screen_reader,
    is_interactive_element,
    is_interactive_role,
    is_non_interactive_element,
    is_non_interactive_role,
    is_presentation_role,
    tab_index,
)
from ..taxonomy import handlers_for, is_dom_element
from ..tree import (
    Attribute,
    Expression,
    Node,
    attribute_value,
    find_attribute,
    has_any_attribute,
    literal_value,
    normalize_attr_name,
)
from ..types import INDETERMINATE
from .base import STRING_LIST, RuleContext, object_schema, prop_present, rule


_KEY_HANDLERS = ("onKeyDown", "onKeyUp", "onKeyPress")
_RECOMMENDED_HANDLERS = ("onClick", "onMouseDown", "onMouseUp", "onKeyPress", "onKeyDown", "onKeyUp")


def _skip_presentation(node: Node, ctx: RuleContext) -> bool:
    return is_hidden_from_screen_reader(ctx.node_type, node.attributes) or is_presentation_role(
        ctx.node_type, node.attributes
    )


@rule(
    "click-events-have-key-events",
    description="클릭 가능한 비인터랙티브 요소에는 최소한 하나의 키보드 이벤트 리스너가 있어야 합니다.",
)
def click_events_have_key_events(node: Node, ctx: RuleContext) -> None:
    if not isinstance(find_attribute(node.attributes, "onClick"), Attribute):
        return
    if not is_dom_element(ctx.node_type) or _skip_presentation(node, ctx):
        return
    if is_interactive_element(ctx.node_type, node.attributes):
        return
    if has_any_attribute(node.attributes, _KEY_HANDLERS) is not False:
        return
    ctx.report(
        "보이는 비인터랙티브 요소에 클릭 핸들러가 있을 경우, 최소한 하나의 키보드 이벤트 리스너가 필요합니다.",
        attribute="onClick",
    )


@rule(
    "mouse-events-have-key-events",
    description=(
        "`onMouseOver` 또는 `onMouseOut` 이벤트 사용 시, 키보드 사용자를 위한 `onFocus` 또는 `onBlur` 이벤트도 "
        "함께 제공해야 합니다."
    ),
    options={"hover_in_handlers": ["onMouseOver"], "hover_out_handlers": ["onMouseOut"]},
    schema=object_schema({"hover_in_handlers": STRING_LIST, "hover_out_handlers": STRING_LIST}),
)
def mouse_events_have_key_events(node: Node, ctx: RuleContext) -> None:
    if not is_dom_element(node.name):
        return
    pairs = (
        (ctx.option("hover_in_handlers", ["onMouseOver"]), "onFocus"),
        (ctx.option("hover_out_handlers", ["onMouseOut"]), "onBlur"),
    )
    for handlers, focus_handler in pairs:
        first = next((h for h in handlers if prop_present(node, h)), None)
        if first is None or prop_present(node, focus_handler):
            continue
        if find_attribute(node.attributes, focus_handler) is INDETERMINATE:
            continue
        ctx.report(f"{first} must be accompanied by {focus_handler} for accessibility.", attribute=first)


_TABINDEX_FIX_MESSAGES = {
    0: "`tabIndex={0}`을 추가하여 키보드 탭 순서에 포함시킬 수 있습니다.",
    -1: "`tabIndex={-1}`을 추가하여 포커스는 가능하지만 탭 순서에서는 제외됩니다.",
}


def _tabindex_fix(value: int) -> dict[str, Any]:
    return {"message": _TABINDEX_FIX_MESSAGES[value], "insert": f" tabIndex={{{value}}}"}


@rule(
    "interactive-supports-focus",
    description="클릭 가능한 요소는 반드시 포커스 가능해야 합니다 (tabIndex 필요)",
    options={"tabbable": ["button", "checkbox", "link", "searchbox", "spinbutton", "switch", "textbox"]},
    schema=object_schema({"tabbable": STRING_LIST}),
)
def interactive_supports_focus(node: Node, ctx: RuleContext) -> None:
    attrs = node.attributes
    tag = ctx.node_type
    if not is_dom_element(tag):
        return
    if has_any_attribute(attrs, handlers_for("mouse", "keyboard")) is not True:
        return
    if is_disabled(attrs) or _skip_presentation(node, ctx):
        return
    if tab_index(attrs) is not None:
        return
    if not is_interactive_role(tag, attrs):
        return
    if is_interactive_element(tag, attrs) or is_non_interactive_element(tag, attrs):
        return
    if is_non_interactive_role(tag, attrs):
        return
    role = attribute_value(attrs, "role")
    if role in ctx.option("tabbable", ()):
        ctx.report(
            f"Elements with the '{role}' interactive role must be tabbable.",
            role=role,
            fixes=[_tabindex_fix(0)],
        )
    else:
        ctx.report(
            f"Elements with the '{role}' interactive role must be focusable.",
            role=role,
            fixes=[_tabindex_fix(0), _tabindex_fix(-1)],
        )


@rule(
    "no-noninteractive-element-interactions",
    description="비인터랙티브 요소에 마우스 또는 키보드 이벤트 핸들러를 부착하는 것을 방지합니다.",
    options={
        "handlers": ["onClick", "onError", "onLoad", "onMouseDown", "onMouseUp", "onKeyPress", "onKeyDown", "onKeyUp"],
        "alert": ["onKeyUp", "onKeyDown", "onKeyPress"],
        "body": ["onError", "onLoad"],
        "dialog": ["onKeyDown", "onKeyUp", "onKeyPress"],
        "iframe": ["onError", "onLoad"],
        "img": ["onError", "onLoad"],
    },
    schema=object_schema({"handlers": STRING_LIST}, additionalProperties=STRING_LIST),
)
def no_noninteractive_element_interactions(node: Node, ctx: RuleContext) -> None:
    tag = ctx.node_type
    attrs = node.attributes
    handlers = ctx.option("handlers", handlers_for("focus", "image", "keyboard", "mouse"))
    excluded = {normalize_attr_name(name) for name in ctx.option(tag, ())} if tag != "handlers" else set()
    wanted = [h for h in handlers if normalize_attr_name(h) not in excluded]
    if not any(prop_present(node, h) for h in wanted):
        return
    if not is_dom_element(tag):
        return
    if is_content_editable(attrs) or _skip_presentation(node, ctx):
        return
    if is_interactive_element(tag, attrs) or is_interactive_role(tag, attrs):
        return
    if not is_non_interactive_element(tag, attrs) and not is_non_interactive_role(tag, attrs):
        return
    if is_abstract_role_use(tag, attrs):
        return
    ctx.report("비인터랙티브 요소에는 마우스나 키보드 이벤트 핸들러를 사용할 수 없습니다.")


@rule(
    "no-static-element-interactions",
    description="정적이고 시각적으로 보이는 요소(예: `<div>` 등)에 클릭 핸들러가 있다면 role 속성을 반드시 명시해야 합니다.",
    options={"allow_expression_values": False, "handlers": list(_RECOMMENDED_HANDLERS)},
    schema=object_schema({"handlers": STRING_LIST, "allow_expression_values": {"type": "boolean"}}),
)
def no_static_element_interactions(node: Node, ctx: RuleContext) -> None:
    tag = ctx.node_type
    attrs = node.attributes
    handlers = ctx.option("handlers", handlers_for("focus", "keyboard", "mouse"))
    if not any(prop_present(node, h) for h in handlers):
        return
    if not is_dom_element(tag) or _skip_presentation(node, ctx):
        return
    if is_interactive_element(tag, attrs) or is_interactive_role(tag, attrs):
        return
    if is_non_interactive_element(tag, attrs) or is_non_interactive_role(tag, attrs):
        return
    if is_abstract_role_use(tag, attrs):
        return
    # Only the two-literal conditional role is excused.
    if ctx.option("allow_expression_values", False) and conditional_role_branches(attrs) is not None:
        return
    ctx.report(
        "정적인 요소에 마우스/키보드 이벤트를 사용하지 마세요. "
        "반드시 필요하다면 role 속성 추가 및 키보드/터치/탭 지원을 고려하세요."
    )


@rule(
    "no-noninteractive-tabindex",
    description="tabIndex는 오직 인터랙티브 요소에만 적용되어야 합니다.",
    options={"tags": [], "roles": ["tabpanel"], "allow_expression_values": False},
    schema=object_schema(
        {"tags": STRING_LIST, "roles": STRING_LIST, "allow_expression_values": {"type": "boolean"}}
    ),
)
def no_noninteractive_tabindex(node: Node, ctx: RuleContext) -> None:
    tag = ctx.node_type
    attrs = node.attributes
    index = tab_index(attrs)
    if index is None or index is INDETERMINATE:
        return
    if not is_dom_element(tag) or tag in ctx.option("tags", ()):
        return
    if attribute_value(attrs, "role") in ctx.option("roles", ()):
        return
    if ctx.option("allow_expression_values", False) and conditional_role_branches(attrs) is not None:
        return
    if is_interactive_element(tag, attrs) or is_interactive_role(tag, attrs):
        return
    if index >= 0:
        ctx.report("`tabIndex`는 인터랙티브한 요소에만 선언되어야 합니다.", attribute="tabIndex")


@rule("tabindex-no-positive", description="`tabIndex` 값이 0보다 크지 않도록 강제합니다.")
def tabindex_no_positive(node: Node, ctx: RuleContext) -> None:
    attr = find_attribute(node.attributes, "tabIndex")
    if not isinstance(attr, Attribute):
        return
    value = literal_value(attr)
    if value is INDETERMINATE or value is None or isinstance(value, bool):
        return
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except ValueError:
        return
    if number > 0:
        ctx.report("tabIndex에 양의 정수를 사용하는 것은 피해야 합니다.", attribute="tabIndex")


@rule("no-access-key", description="`accessKey` 속성을 어떤 요소에도 사용하지 않도록 강제합니다.")
def no_access_key(node: Node, ctx: RuleContext) -> None:
    attr = find_attribute(node.attributes, "accessKey")
    if not isinstance(attr, Attribute):
        return
    if isinstance(attr.value, Expression):
        if attr.value.source.strip() in ("undefined", "null"):
            return
    elif not literal_value(attr):
        return
    ctx.report(
        "`accessKey` 속성은 사용할 수 없습니다. "
        "키보드 단축키와 스크린 리더 간의 충돌로 접근성 문제가 발생할 수 있습니다.",
        attribute="accessKey",
    )


@rule(
    "no-autofocus",
    description="`autoFocus` 속성 사용을 금지합니다.",
    schema=object_schema({"ignore_non_dom": {"type": "boolean"}}),
)
def no_autofocus(node: Node, ctx: RuleContext) -> None:
    attr = find_attribute(node.attributes, "autoFocus")
    if not isinstance(attr, Attribute):
        return
    if ctx.option("ignore_non_dom", False) and not is_dom_element(ctx.node_type):
        return
    if literal_value(attr) is False:
        return
    message = "autoFocus 속성을 사용하지 마세요. 이 속성은 사용성과 접근성을 저하시킬 수 있습니다."
    ctx.report(message, attribute=attr.name)


@rule(
    "no-aria-hidden-on-focusable",
    description='aria-hidden="true" 속성이 포커스 가능한(focusable) 요소에 설정되지 않도록 강제합니다.',
)
def no_aria_hidden_on_focusable(node: Node, ctx: RuleContext) -> None:
    if attribute_value(node.attributes, "aria-hidden") is not True:
        return
    if is_focusable(ctx.node_type, node.attributes):
        ctx.report('aria-hidden="true"는 포커스 가능한 요소에 설정할 수 없습니다.', attribute="aria-hidden")
