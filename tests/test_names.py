from __future__ import annotations

from ariasense.config import Configuration
from ariasense.semantics import (
    find_accessible_name,
    find_child_component,
    has_accessible_child,
    has_accessible_name,
    is_emoji_only,
)
from ariasense.tree import Attribute, Expression, el, spread
from ariasense.types import INDETERMINATE


def _nest(depth: int, leaf):
    node = leaf
    for _ in range(depth):
        node = el("span", node)
    return node


def test_text_child_is_a_name() -> None:
    search = find_accessible_name(el("button", "Save"))
    assert search.found
    assert search.source == "text"
    assert bool(search)


def test_own_labelling_attribute_is_a_name() -> None:
    assert find_accessible_name(el("button", aria_label="Close")).source == "attribute:aria-label"
    assert not has_accessible_name(el("button", aria_label="   "))


def test_depth_budget_limits_the_search() -> None:
    node = el("label", _nest(3, "deep text"))
    assert not has_accessible_name(node, depth=2)
    assert has_accessible_name(node, depth=4)
    search = find_accessible_name(node, depth=2)
    assert search.deepest_level == 2


def test_depth_is_capped() -> None:
    node = el("label", _nest(29, "very deep"))
    assert not has_accessible_name(node, depth=30)
    assert has_accessible_name(el("label", _nest(20, "deep")), depth=30)


def test_configured_depth_is_used() -> None:
    node = el("label", _nest(3, "deep text"))
    assert has_accessible_name(node, Configuration(max_search_depth=5))


def test_emoji_only_text_is_not_a_name() -> None:
    assert is_emoji_only("\U0001F44D")
    assert is_emoji_only(" ❤️ ")
    assert not is_emoji_only("\U0001F44D Like")
    assert not is_emoji_only("")
    assert not has_accessible_name(el("button", "\U0001F44D"))


def test_hidden_descendants_do_not_count() -> None:
    node = el("button", el("span", "Hidden", aria_hidden="true"))
    assert not has_accessible_name(node)


def test_unreadable_content_is_indeterminate_not_found() -> None:
    search = find_accessible_name(el("button", Expression("label")))
    assert not search.found
    assert search.indeterminate

    with_spread = find_accessible_name(el("button", spread()))
    assert not with_spread.found
    assert with_spread.indeterminate


def test_conditional_text_counts_when_allowed() -> None:
    node = el("button", Expression("open ? 'Close' : 'Open'", ("Close", "Open")))
    assert not has_accessible_name(node)
    assert has_accessible_name(node, allow_conditional=True)


def test_control_components_and_extra_label_attributes() -> None:
    config = Configuration(control_components=("Custom*",), label_attributes=("label",))
    assert find_accessible_name(el("label", el("CustomInput")), config).source == "control:CustomInput"
    assert has_accessible_name(el("Field", Attribute("label", "Email")), config)
    assert not has_accessible_name(el("Field", Attribute("label", "Email")))


def test_has_accessible_child() -> None:
    assert has_accessible_child(el("a", "Home"))
    assert has_accessible_child(el("a", el("img", alt="Home")))
    assert has_accessible_child(el("a", Expression("children")))
    assert has_accessible_child(el("a", Attribute("dangerouslySetInnerHTML", Expression("html"))))
    assert not has_accessible_child(el("a"))
    assert not has_accessible_child(el("a", Expression("undefined")))
    assert not has_accessible_child(el("a", el("span", "x", aria_hidden=True)))


def test_find_child_component() -> None:
    assert find_child_component(el("label", el("input")), "input") is True
    assert find_child_component(el("label", el("div", el("div", el("input")))), "input") is False
    assert find_child_component(el("label", el("div", el("div", el("input")))), "input", depth=3) is True
    assert find_child_component(el("label", Expression("field")), ["input", "select"]) is INDETERMINATE


def test_emoji_only_child_gains_a_name_from_aria_label() -> None:
    assert not has_accessible_name(el("span", "\U0001F389"))
    assert has_accessible_name(el("span", "\U0001F389", aria_label="Celebrate"))


def test_thirty_levels_with_budget_two_never_go_past_level_two() -> None:
    search = find_accessible_name(el("div", _nest(30, "unreachable")), depth=2)
    assert not search.found
    assert search.deepest_level == 2
    assert search.visited == 3


def test_raising_the_budget_never_loses_a_name() -> None:
    node = el("label", _nest(3, "text"))
    found = [has_accessible_name(node, depth=d) for d in range(0, 26)]
    first = found.index(True)
    assert all(found[first:])


def test_text_style_symbols_are_not_pictographs() -> None:
    assert not is_emoji_only("©")
    assert not is_emoji_only("™")
    assert not is_emoji_only("\u2764")
    assert is_emoji_only("\u00a9\ufe0f")
    assert is_emoji_only("⌚")
    assert has_accessible_name(el("small", "©"))
    assert not has_accessible_name(el("small", "\u00a9\ufe0f"))
