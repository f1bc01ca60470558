from __future__ import annotations

import pytest

from ariasense.config import Configuration
from ariasense.rules import RULES
from ariasense.rules.aria import is_valid_aria_value
from ariasense.tree import Attribute, Expression, el, spread


def test_aria_props_flags_unknown_attributes_with_suggestions(run_rule) -> None:
    messages = run_rule("aria-props", el("div", aria_labeledby="title"))
    assert len(messages) == 1
    assert messages[0].startswith("aria-labeledby: 이 속성은 유효하지 않은 ARIA 속성입니다.")
    assert "혹시 aria-labelledby" in messages[0]

    assert run_rule("aria-props", el("div", aria_label="Close", aria_hidden="true")) == []
    assert run_rule("aria-props", el("div", spread())) == []


@pytest.mark.parametrize(
    ("value", "value_type", "permitted", "expected"),
    [
        (True, "boolean", (), True),
        ("yes", "boolean", (), False),
        ("mixed", "tristate", (), True),
        (False, "tristate", (), True),
        ("5", "number", (), True),
        ("", "integer", (), True),
        ("five", "integer", (), False),
        ("page", "token", ("page", "step", True, False), True),
        ("PAGE", "token", ("page", "step", True, False), True),
        (True, "token", ("page", True, False), True),
        ("true", "token", ("page",), False),
        ("additions text", "tokenlist", ("additions", "text"), True),
        ("additions bogus", "tokenlist", ("additions", "text"), False),
        ("a b", "idlist", (), True),
        (3, "id", (), False),
    ],
)
def test_aria_value_types(value, value_type, permitted, expected) -> None:
    assert is_valid_aria_value(value, value_type, permitted) is expected


def test_aria_proptypes_messages(run_rule) -> None:
    assert run_rule("aria-proptypes", el("div", aria_hidden="yes")) == [
        "aria-hidden 속성 값은 boolean 타입이어야 합니다."
    ]
    assert run_rule("aria-proptypes", el("div", aria_checked="maybe")) == [
        'aria-checked 속성 값은 boolean 또는 문자열 "mixed"여야 합니다.'
    ]
    assert run_rule("aria-proptypes", el("div", aria_current="bogus")) == [
        "aria-current 속성 값은 다음 중 하나여야 합니다: page, step, location, date, time, true, false."
    ]
    assert run_rule("aria-proptypes", el("div", aria_valuenow="high")) == [
        "aria-valuenow 속성 값은 number 타입이어야 합니다."
    ]


def test_aria_proptypes_skips_unreadable_and_null_values(run_rule) -> None:
    node = el("div", aria_hidden=Expression("hidden"), aria_checked=None, aria_current="page")
    assert run_rule("aria-proptypes", node) == []


def test_aria_role_rejects_invalid_and_abstract_roles(run_rule) -> None:
    assert run_rule("aria-role", el("div", role="button")) == []
    assert run_rule("aria-role", el("div", role="tabpanel row")) == []
    assert len(run_rule("aria-role", el("div", role="datepicker"))) == 1
    assert len(run_rule("aria-role", el("div", role="range"))) == 1
    assert run_rule("aria-role", el("div", role="")) == [
        "ARIA role은 유효한 역할이어야 하며, 추상(abstract) role은 사용할 수 없습니다."
    ]
    assert "혹시 button" in run_rule("aria-role", el("div", role="buton"))[0]


def test_aria_role_options(run_rule) -> None:
    assert run_rule("aria-role", el("div", role="fancy"), {"allowedInvalidRoles": ["fancy"]}) == []
    assert run_rule("aria-role", el("Foo", role="fancy"), {"ignoreNonDOM": True}) == []
    assert len(run_rule("aria-role", el("Foo", role="fancy"))) == 1
    config = Configuration(allowed_invalid_roles=("fancy",))
    assert run_rule("aria-role", el("div", role="fancy"), config=config) == []


def test_aria_role_ignores_unreadable_roles(run_rule) -> None:
    assert run_rule("aria-role", el("div", role=Expression("role"))) == []
    assert run_rule("aria-role", el("div", Attribute("role", "bogus"), spread())) == []


def test_aria_activedescendant_has_tabindex(run_rule) -> None:
    rule_id = "aria-activedescendant-has-tabindex"
    assert run_rule(rule_id, el("div", aria_activedescendant="opt1")) == [
        "`aria-activedescendant` 속성을 사용하는 요소는 반드시 `tabIndex` 속성을 포함해야 합니다."
    ]
    assert len(run_rule(rule_id, el("div", aria_activedescendant="opt1", tabIndex="-2"))) == 1
    assert run_rule(rule_id, el("div", aria_activedescendant="opt1", tabIndex="0")) == []
    assert run_rule(rule_id, el("div", aria_activedescendant="opt1", tabIndex="-1")) == []
    assert run_rule(rule_id, el("input", aria_activedescendant="opt1")) == []
    assert run_rule(rule_id, el("Combo", aria_activedescendant="opt1")) == []
    assert run_rule(rule_id, el("div", aria_activedescendant="opt1", tabIndex=Expression("i"))) == []


def test_role_supports_aria_props_explicit_and_implicit(run_rule) -> None:
    rule_id = "role-supports-aria-props"
    assert run_rule(rule_id, el("div", role="button", aria_checked="true")) == [
        '속성 "aria-checked"은(는) 역할 "button"에서 지원되지 않습니다.'
    ]
    assert run_rule(rule_id, el("a", href="/", aria_checked="true")) == [
        '속성 "aria-checked"은(는) 역할 "link"에서 지원되지 않습니다. 이 역할은 <a> 요소에 암시적으로 부여되어 있습니다.'
    ]
    assert run_rule(rule_id, el("div", role="checkbox", aria_checked="true")) == []
    assert run_rule(rule_id, el("input", type="checkbox", aria_checked="true")) == []
    assert run_rule(rule_id, el("button", aria_label="Close")) == []
    assert run_rule(rule_id, el("div", role="button", aria_checked=None)) == []


def test_no_redundant_roles(run_rule) -> None:
    assert run_rule("no-redundant-roles", el("button", role="button")) == [
        "요소 <button>에는 기본적으로 'button' 역할이 암묵적으로 지정되어 있습니다. "
        "이를 명시적으로 지정하는 것은 중복이며 피해야 합니다."
    ]
    assert run_rule("no-redundant-roles", el("button", role="link")) == []
    assert run_rule("no-redundant-roles", el("nav", role="navigation")) == []
    assert len(run_rule("no-redundant-roles", el("nav", role="navigation"), {"nav": []})) == 1
    assert run_rule("no-redundant-roles", el("ul", role="list"), {"ul": ["list"]}) == []


def test_prefer_tag_over_role(run_rule) -> None:
    assert run_rule("prefer-tag-over-role", el("div", role="button")) == [
        '"button" 역할(role) 대신 <button> 태그를 사용하세요. 이는 모든 기기에서의 접근성을 높여줍니다.'
    ]
    assert run_rule("prefer-tag-over-role", el("div", role="checkbox")) == [
        '"checkbox" 역할(role) 대신 <input type="checkbox"> 태그를 사용하세요. 이는 모든 기기에서의 접근성을 높여줍니다.'
    ]
    assert run_rule("prefer-tag-over-role", el("button", role="button")) == []
    assert run_rule("prefer-tag-over-role", el("div", role="menuitem")) == []


def test_rule_metadata() -> None:
    assert RULES["prefer-tag-over-role"].default_level == "off"
    info = RULES["aria-role"].as_dict()
    assert info["id"] == "aria-role"
    assert info["options"] == ["allowed_invalid_roles", "ignore_non_dom"]
    assert info["description"] == "ARIA role 속성이 유효한 비추상 역할이어야 함을 강제합니다."
