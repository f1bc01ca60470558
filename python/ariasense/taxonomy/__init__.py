# SPDX-License-Identifier: AGPL-3.0-only
"""Static reference tables: element defaults, the ARIA role graph, valid ARIA attributes."""

from .events import EVENT_HANDLERS, handlers_for
from .registry import (
    CATEGORY_INTERACTIVE,
    CATEGORY_NON_INTERACTIVE,
    CATEGORY_STATIC,
    AriaAttribute,
    ElementDefaults,
    ElementVariant,
    RoleDefinition,
    TagSelector,
    aria_attribute,
    aria_attribute_names,
    concrete_role_names,
    element_defaults,
    element_names,
    is_dom_element,
    is_void_element,
    load_attribute_registry,
    load_element_registry,
    load_role_registry,
    registry_path,
    role_ancestors,
    role_definition,
    role_names,
    role_props,
    schema_path,
)

__all__ = [
    "AriaAttribute",
    "CATEGORY_INTERACTIVE",
    "CATEGORY_NON_INTERACTIVE",
    "CATEGORY_STATIC",
    "EVENT_HANDLERS",
    "ElementDefaults",
    "ElementVariant",
    "RoleDefinition",
    "TagSelector",
    "aria_attribute",
    "aria_attribute_names",
    "concrete_role_names",
    "element_defaults",
    "element_names",
    "handlers_for",
    "is_dom_element",
    "is_void_element",
    "load_attribute_registry",
    "load_element_registry",
    "load_role_registry",
    "registry_path",
    "role_ancestors",
    "role_definition",
    "role_names",
    "role_props",
    "schema_path",
]
