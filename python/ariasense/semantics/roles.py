# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import Any, Iterable, Sequence

from ..taxonomy import concrete_role_names, element_defaults, role_ancestors, role_definition
from ..tree import Attribute, Expression, Node, find_attribute, literal_value
from ..types import INDETERMINATE
from .suggest import suggest


PRESENTATION_ROLES = frozenset({"presentation", "none"})

# Closed overrides on top of the role graph: toolbar manages focus like a
# composite widget, progressbar is read-only despite inheriting widget.
INTERACTIVE_ROLE_OVERRIDES = frozenset({"toolbar"})
NON_INTERACTIVE_ROLE_OVERRIDES = frozenset({"progressbar"})


def _attributes(target: Node | Sequence[Attribute]) -> Sequence[Attribute]:
    return target.attributes if isinstance(target, Node) else target


def is_role_defined(token: str) -> bool:
    return role_definition(token) is not None


def is_abstract_role_name(token: str) -> bool:
    definition = role_definition(token)
    return bool(definition and definition.abstract)


def is_valid_role(token: str, allowed_invalid: Iterable[str] = ()) -> bool:
    if token in set(allowed_invalid):
        return True
    definition = role_definition(token)
    return definition is not None and not definition.abstract


def role_tokens(target: Node | Sequence[Attribute]) -> list[str] | None | Any:
    """Whitespace-separated tokens of a literal ``role``.

    ``None`` when the role is provably absent or not a string,
    ``INDETERMINATE`` when it cannot be read statically.
    """
    attr = find_attribute(_attributes(target), "role")
    if attr is INDETERMINATE:
        return INDETERMINATE
    if attr is None:
        return None
    value = literal_value(attr)
    if value is INDETERMINATE:
        return INDETERMINATE
    if not isinstance(value, str):
        return None
    return value.split()


def explicit_role(target: Node | Sequence[Attribute]) -> str | None | Any:
    """Resolve the author-specified role with fallback-list semantics.

    The first token that names a concrete role wins; if none does, the last
    token is returned verbatim so invalid-role checks can still report it.
    """
    tokens = role_tokens(target)
    if tokens is INDETERMINATE:
        return INDETERMINATE
    if not tokens:
        return None
    lowered = [token.lower() for token in tokens]
    for token in lowered:
        if is_valid_role(token):
            return token
    return lowered[-1]


def conditional_role_branches(target: Node | Sequence[Attribute]) -> tuple[Any, Any] | None:
    """Both literal branches of ``role={cond ? "a" : "b"}``, else ``None``."""
    attr = find_attribute(_attributes(target), "role")
    if attr is None or attr is INDETERMINATE:
        return None
    if isinstance(attr.value, Expression) and attr.value.branches is not None:
        return attr.value.branches
    return None


def is_non_literal_role(target: Node | Sequence[Attribute]) -> bool:
    attr = find_attribute(_attributes(target), "role")
    if attr is None:
        return False
    return attr is INDETERMINATE or literal_value(attr) is INDETERMINATE


def invalid_role_tokens(value: str, allowed_invalid: Iterable[str] = ()) -> list[str]:
    allowed = set(allowed_invalid)
    return [token for token in str(value).split() if not is_valid_role(token, allowed)]


def suggest_roles(token: str) -> list[str]:
    return suggest(token, concrete_role_names())


def is_widget_role(role: str) -> bool:
    """Concrete role that descends from ``widget`` (with the closed overrides)."""
    if role in INTERACTIVE_ROLE_OVERRIDES:
        return True
    if role in NON_INTERACTIVE_ROLE_OVERRIDES:
        return False
    definition = role_definition(role)
    if definition is None or definition.abstract:
        return False
    return "widget" in role_ancestors(role)


def is_structure_role(role: str) -> bool:
    """Concrete, non-widget role."""
    definition = role_definition(role)
    if definition is None or definition.abstract:
        return False
    return not is_widget_role(role)


def is_presentation_role_name(role: Any) -> bool:
    return isinstance(role, str) and role in PRESENTATION_ROLES


def resolve_defaults(canonical_type: str | None, attributes: Sequence[Attribute]) -> tuple[str | None, str | None, bool]:
    """``(implicit_role, category, hidden)``; category is ``None`` for unknown types."""
    defaults = element_defaults(canonical_type)
    if defaults is None:
        return None, None, False
    return defaults.resolve(attributes)


def implicit_role(canonical_type: str | None, attributes: Node | Sequence[Attribute] = ()) -> str | None:
    role, _category, _hidden = resolve_defaults(canonical_type, _attributes(attributes))
    return role


def resolved_role(canonical_type: str | None, attributes: Node | Sequence[Attribute]) -> str | None | Any:
    """Explicit role when it names a concrete role, otherwise the implicit one."""
    attrs = _attributes(attributes)
    explicit = explicit_role(attrs)
    if explicit is INDETERMINATE:
        return INDETERMINATE
    if explicit is not None and is_valid_role(explicit):
        return explicit
    return implicit_role(canonical_type, attrs)
