# SPDX-License-Identifier: AGPL-3.0-only
"""Accessibility lint rules built on the semantics resolver."""

from __future__ import annotations

from types import MappingProxyType

from . import aria, content, interaction, labels
from .base import Rule, RuleContext, rule

_ALL = [
    value
    for module in (aria, interaction, content, labels)
    for value in vars(module).values()
    if isinstance(value, Rule)
]

RULES = MappingProxyType({r.id: r for r in sorted(_ALL, key=lambda r: r.id)})


def get_rule(rule_id: str) -> Rule | None:
    return RULES.get(rule_id)


__all__ = ["RULES", "Rule", "RuleContext", "get_rule", "rule"]
