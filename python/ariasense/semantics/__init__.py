# SPDX-License-Identifier: AGPL-3.0-only
"""Accessibility semantics resolver: element types, roles, interactivity, accessible names."""

from .element_type import lookup_component, match_name, raw_element_name, resolve_element_type
from .interactivity import (
    ElementSemantics,
    classify,
    describe,
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
    is_static_element,
    tab_index,
)
from .names import (
    NameSearch,
    find_accessible_name,
    find_child_component,
    has_accessible_child,
    has_accessible_name,
    is_emoji_only,
)
from .roles import (
    conditional_role_branches,
    explicit_role,
    implicit_role,
    invalid_role_tokens,
    is_valid_role,
    is_widget_role,
    resolved_role,
    role_tokens,
    suggest_roles,
)
from .suggest import suggest

__all__ = [
    "ElementSemantics",
    "NameSearch",
    "classify",
    "conditional_role_branches",
    "describe",
    "explicit_role",
    "find_accessible_name",
    "find_child_component",
    "has_accessible_child",
    "has_accessible_name",
    "implicit_role",
    "invalid_role_tokens",
    "is_abstract_role_use",
    "is_content_editable",
    "is_disabled",
    "is_emoji_only",
    "is_focusable",
    "is_hidden_from_screen_reader",
    "is_interactive_element",
    "is_interactive_role",
    "is_non_interactive_element",
    "is_non_interactive_role",
    "is_presentation_role",
    "is_static_element",
    "is_valid_role",
    "is_widget_role",
    "lookup_component",
    "match_name",
    "raw_element_name",
    "resolve_element_type",
    "resolved_role",
    "role_tokens",
    "suggest",
    "suggest_roles",
    "tab_index",
]
