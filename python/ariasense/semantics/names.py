# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import emoji

from ..config import Configuration, clamp_depth
from ..tree import Attribute, Expression, Node, find_attribute, has_any_attribute, literal_value
from ..types import INDETERMINATE
from .element_type import match_name, resolve_element_type
from .interactivity import is_hidden_from_screen_reader


LABEL_ATTRIBUTES = ("aria-label", "aria-labelledby", "title", "alt")
# Props that inject content the tree cannot show.
CONTENT_PROPS = ("dangerouslySetInnerHTML", "children")

_JOINERS = "\u200d\ufe0e\ufe0f\u20e3"


@dataclass(frozen=True)
class NameSearch:
    """Outcome of an accessible-name search.

    ``indeterminate`` records that unreadable content (an expression child, a
    spread, an injected-content prop) was seen; it never makes ``found`` true.
    """

    found: bool
    source: str | None = None
    indeterminate: bool = False
    deepest_level: int = 0
    visited: int = 0

    def __bool__(self) -> bool:
        return self.found


def _is_pictograph(match: str) -> bool:
    # Unqualified matches are text-style symbols such as a bare "©" or "™".
    data = emoji.EMOJI_DATA.get(match)
    return data is None or data.get("status") != emoji.STATUS["unqualified"]


def is_emoji_only(text: str) -> bool:
    stripped = str(text).strip()
    if not stripped:
        return False
    matches = emoji.emoji_list(stripped)
    if not matches or not all(_is_pictograph(item["emoji"]) for item in matches):
        return False
    rest = emoji.replace_emoji(stripped, replace="")
    return not rest.strip().strip(_JOINERS).strip()


def is_label_text(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return bool(value.strip()) and not is_emoji_only(value)
    return False


def label_attribute_names(extra: Iterable[str] = ()) -> tuple[str, ...]:
    out: list[str] = []
    for name in (*extra, *LABEL_ATTRIBUTES):
        if name not in out:
            out.append(name)
    return tuple(out)


def _attribute_label(attr: Any, allow_conditional: bool) -> bool | Any:
    if attr is None:
        return False
    if attr is INDETERMINATE:
        return INDETERMINATE
    value = attr.value
    if isinstance(value, Expression):
        if allow_conditional and value.branches is not None:
            if all(isinstance(b, str) and b.strip() for b in value.branches):
                return True
        return INDETERMINATE
    value = literal_value(attr)
    if value is INDETERMINATE:
        return INDETERMINATE
    return isinstance(value, str) and bool(value.strip())


def labelling_attribute(
    attributes: Sequence[Attribute], names: Iterable[str], *, allow_conditional: bool = False
) -> tuple[bool | Any, str | None]:
    """``(True, name)`` for the first labelling attribute with a non-empty value.

    ``(INDETERMINATE, None)`` when none is readable but one might be; an
    attribute with a provably empty value is ``(False, None)``.
    """
    unknown = False
    for name in names:
        state = _attribute_label(find_attribute(attributes, name), allow_conditional)
        if state is True:
            return True, name
        if state is INDETERMINATE:
            unknown = True
    return (INDETERMINATE if unknown else False), None


def _injects_content(node: Node) -> bool:
    return node.has_spread or has_any_attribute(node.attributes, CONTENT_PROPS) is True


def find_accessible_name(
    node: Node,
    config: Configuration | None = None,
    depth: int | None = None,
    *,
    allow_conditional: bool = False,
    label_attributes: Iterable[str] | None = None,
    control_components: Iterable[str] | None = None,
) -> NameSearch:
    """Breadth-first search for an accessible name at or below ``node``.

    ``node`` is level 0 and only its own labelling attributes are read there;
    its children are level 1. Nodes deeper than the budget (``depth`` or
    ``config.max_search_depth``, capped at 25) are never visited.
    """
    config = config or Configuration.default()
    budget = clamp_depth(config.max_search_depth if depth is None else depth)
    names = label_attribute_names(config.label_attributes if label_attributes is None else label_attributes)
    controls = tuple(config.control_components if control_components is None else control_components)

    queue: deque[tuple[Any, int]] = deque([(node, 0)])
    visited = 0
    deepest = 0
    unknown = False

    def result(source: str | None) -> NameSearch:
        return NameSearch(
            found=source is not None,
            source=source,
            indeterminate=unknown,
            deepest_level=deepest,
            visited=visited,
        )

    while queue:
        current, level = queue.popleft()
        visited += 1
        deepest = max(deepest, level)
        if isinstance(current, Node):
            if level > 0:
                element_type = resolve_element_type(current, config)
                if is_hidden_from_screen_reader(element_type, current.attributes):
                    continue
                if controls and (match_name(current.name, controls) or match_name(element_type, controls)):
                    return result(f"control:{current.name}")
            state, name = labelling_attribute(current.attributes, names, allow_conditional=allow_conditional)
            if state is True:
                return result(f"attribute:{name}")
            if state is INDETERMINATE or _injects_content(current):
                unknown = True
            if level < budget:
                queue.extend((child, level + 1) for child in current.children)
        elif isinstance(current, Expression):
            if allow_conditional and current.branches is not None and all(is_label_text(b) for b in current.branches):
                return result("conditional")
            unknown = True
        elif is_label_text(current):
            return result("text")
    return result(None)


def has_accessible_name(
    node: Node,
    config: Configuration | None = None,
    depth: int | None = None,
    *,
    allow_conditional: bool = False,
) -> bool:
    return find_accessible_name(node, config, depth, allow_conditional=allow_conditional).found


def has_accessible_child(node: Node, config: Configuration | None = None) -> bool:
    """Whether any direct child may expose content, counting unreadable content as content."""
    for child in node.children:
        if isinstance(child, Node):
            if not is_hidden_from_screen_reader(resolve_element_type(child, config), child.attributes):
                return True
        elif isinstance(child, Expression):
            if child.source.strip() != "undefined":
                return True
        elif is_label_text(child) or (isinstance(child, str) and child.strip()):
            return True
    return has_any_attribute(node.attributes, CONTENT_PROPS) is not False


def find_child_component(
    node: Node,
    patterns: str | Iterable[str],
    config: Configuration | None = None,
    depth: int | None = None,
) -> bool | Any:
    """Whether a descendant within ``depth`` levels matches one of ``patterns``.

    Returns ``INDETERMINATE`` when nothing matched but an expression child
    could render one.
    """
    config = config or Configuration.default()
    wanted = (patterns,) if isinstance(patterns, str) else tuple(patterns)
    budget = clamp_depth(config.max_search_depth if depth is None else depth)
    queue: deque[tuple[Node, int]] = deque([(node, 0)])
    unknown = False
    while queue:
        current, level = queue.popleft()
        if level >= budget:
            continue
        for child in current.children:
            if isinstance(child, Expression):
                unknown = True
            elif isinstance(child, Node):
                if match_name(child.name, wanted) or match_name(resolve_element_type(child, config), wanted):
                    return True
                queue.append((child, level + 1))
    return INDETERMINATE if unknown else False
