# SPDX-License-Identifier: AGPL-3.0-only
"""Static accessibility semantics for JSX-like markup trees.

The resolver answers, for one element at a time: what kind of element it is
after component mapping, which ARIA role it exposes (explicitly or
implicitly), whether it is interactive, and whether it can produce an
accessible name. Unreadable values (expressions, spreads) are reported as
``INDETERMINATE`` rather than guessed. The lint rules in ``ariasense.rules``
are built on top of those answers.
"""

from .config import Configuration, load_config
from .linter import lint_file, lint_files, lint_tree
from .semantics import (
    classify,
    describe,
    explicit_role,
    find_accessible_name,
    has_accessible_name,
    implicit_role,
    is_hidden_from_screen_reader,
    resolve_element_type,
)
from .snapshot import load_snapshot, load_tree, parse_html
from .tree import Attribute, ComponentRef, Expression, Node, Spread, el, fragment, spread
from .types import (
    ABSENT,
    INDETERMINATE,
    ConfigError,
    Interactivity,
    LintError,
    LintWarning,
    SnapshotError,
)

SPDX_LICENSE_EXPRESSION = "AGPL-3.0-only"

__all__ = [
    "ABSENT",
    "Attribute",
    "ComponentRef",
    "ConfigError",
    "Configuration",
    "Expression",
    "INDETERMINATE",
    "Interactivity",
    "LintError",
    "LintWarning",
    "Node",
    "SPDX_LICENSE_EXPRESSION",
    "SnapshotError",
    "Spread",
    "classify",
    "describe",
    "el",
    "explicit_role",
    "find_accessible_name",
    "fragment",
    "has_accessible_name",
    "implicit_role",
    "is_hidden_from_screen_reader",
    "lint_file",
    "lint_files",
    "lint_tree",
    "load_config",
    "load_snapshot",
    "load_tree",
    "parse_html",
    "resolve_element_type",
    "spread",
]
