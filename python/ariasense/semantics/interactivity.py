# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ..config import Configuration
from ..taxonomy import CATEGORY_INTERACTIVE, CATEGORY_NON_INTERACTIVE, CATEGORY_STATIC, is_dom_element
from ..tree import Attribute, Node, attribute_value, has_value
from ..types import ABSENT, INDETERMINATE, Interactivity
from .element_type import resolve_element_type
from .roles import (
    explicit_role,
    implicit_role,
    is_abstract_role_name,
    is_presentation_role_name,
    is_structure_role,
    is_valid_role,
    is_widget_role,
    resolve_defaults,
)


def _attrs(target: Node | Sequence[Attribute]) -> Sequence[Attribute]:
    return target.attributes if isinstance(target, Node) else target


def _category(canonical_type: str | None, attributes: Sequence[Attribute]) -> str | None:
    return resolve_defaults(canonical_type, attributes)[1]


def is_aria_hidden(attributes: Node | Sequence[Attribute]) -> bool:
    return attribute_value(_attrs(attributes), "aria-hidden") is True


def is_hidden_from_screen_reader(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> bool:
    attrs = _attrs(attributes)
    if is_aria_hidden(attrs):
        return True
    return resolve_defaults(canonical_type, attrs)[2]


def is_presentation_role(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> bool:
    return is_presentation_role_name(explicit_role(_attrs(attributes)))


def is_interactive_element(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> bool:
    return _category(canonical_type, _attrs(attributes)) == CATEGORY_INTERACTIVE


def is_non_interactive_element(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> bool:
    return _category(canonical_type, _attrs(attributes)) == CATEGORY_NON_INTERACTIVE


def is_static_element(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> bool:
    return _category(canonical_type, _attrs(attributes)) == CATEGORY_STATIC


def is_interactive_role(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> bool:
    role = explicit_role(_attrs(attributes))
    return isinstance(role, str) and is_widget_role(role)


def is_non_interactive_role(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> bool:
    role = explicit_role(_attrs(attributes))
    return isinstance(role, str) and is_structure_role(role)


def is_abstract_role_use(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> bool:
    if not is_dom_element(canonical_type):
        return False
    role = explicit_role(_attrs(attributes))
    return isinstance(role, str) and is_abstract_role_name(role)


def is_disabled(attributes: Node | Sequence[Attribute]) -> bool:
    attrs = _attrs(attributes)
    disabled = attribute_value(attrs, "disabled")
    if has_value(disabled) and disabled is not False:
        return True
    return attribute_value(attrs, "aria-disabled") is True


def is_content_editable(attributes: Node | Sequence[Attribute]) -> bool:
    return attribute_value(_attrs(attributes), "contentEditable") is True


def tab_index(attributes: Node | Sequence[Attribute]) -> int | None | Any:
    """Integer ``tabIndex``; ``None`` when absent or not an integer."""
    value = attribute_value(_attrs(attributes), "tabIndex")
    if value is INDETERMINATE:
        return INDETERMINATE
    if value is ABSENT or value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)


def is_focusable(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> bool:
    attrs = _attrs(attributes)
    index = tab_index(attrs)
    if is_interactive_element(canonical_type, attrs):
        return not isinstance(index, int) or index >= -1
    return isinstance(index, int) and index >= -1


def classify(canonical_type: str | None, attributes: Node | Sequence[Attribute] = ()) -> Interactivity:
    """Four-way interactivity verdict; the first matching rule wins.

    1. hidden from assistive technology or presentation role -> PRESENTATIONAL
    2. explicit concrete widget role -> INTERACTIVE
    3. natively interactive element -> INTERACTIVE
    4. explicit or implicit concrete non-widget role -> NON_INTERACTIVE
    5. any other known element -> NON_INTERACTIVE
    6. otherwise -> INDETERMINATE
    """
    attrs = _attrs(attributes)
    implicit, category, hidden = resolve_defaults(canonical_type, attrs)
    explicit = explicit_role(attrs)
    explicit_valid = explicit if isinstance(explicit, str) and is_valid_role(explicit) else None
    resolved = explicit_valid
    if resolved is None and explicit is not INDETERMINATE:
        resolved = implicit

    if is_aria_hidden(attrs) or hidden or is_presentation_role_name(resolved):
        return Interactivity.PRESENTATIONAL
    if explicit_valid is not None and is_widget_role(explicit_valid):
        return Interactivity.INTERACTIVE
    if category == CATEGORY_INTERACTIVE:
        return Interactivity.INTERACTIVE
    if resolved is not None and is_structure_role(resolved):
        return Interactivity.NON_INTERACTIVE
    if category is not None:
        return Interactivity.NON_INTERACTIVE
    return Interactivity.INDETERMINATE


@dataclass(frozen=True)
class ElementSemantics:
    element_type: str | None
    explicit_role: Any
    implicit_role: str | None
    interactivity: Interactivity
    hidden: bool
    disabled: bool
    content_editable: bool
    focusable: bool

    def as_dict(self) -> dict[str, Any]:
        explicit = self.explicit_role
        if explicit is INDETERMINATE:
            explicit = "indeterminate"
        return {
            "element_type": self.element_type,
            "explicit_role": explicit,
            "implicit_role": self.implicit_role,
            "interactivity": self.interactivity.value,
            "hidden": self.hidden,
            "disabled": self.disabled,
            "content_editable": self.content_editable,
            "focusable": self.focusable,
        }


def describe(node: Node, config: Configuration | None = None) -> ElementSemantics:
    element_type = resolve_element_type(node, config)
    attrs = node.attributes
    return ElementSemantics(
        element_type=element_type,
        explicit_role=explicit_role(attrs),
        implicit_role=implicit_role(element_type, attrs),
        interactivity=classify(element_type, attrs),
        hidden=is_hidden_from_screen_reader(element_type, attrs),
        disabled=is_disabled(attrs),
        content_editable=is_content_editable(attrs),
        focusable=is_focusable(element_type, attrs),
    )
