from __future__ import annotations

import pytest

from ariasense.config import Configuration
from ariasense.rules import RULES
from ariasense.rules.content import ALT_TEXT_MESSAGES, contains_redundant_word, is_language_tag
from ariasense.tree import Attribute, Expression, el, spread


def _message_ids(node, options=None, config=None):
    rule = RULES["alt-text"]
    opts = rule.default_options if options is None else rule.normalize_options(options)
    reports = rule.run(node, "/x[1]", config or Configuration.default(), opts)
    return [report["message_id"] for report in reports]


def test_accessible_emoji_is_deprecated_and_off() -> None:
    rule = RULES["accessible-emoji"]
    assert rule.deprecated
    assert rule.default_level == "off"


def test_accessible_emoji(run_rule) -> None:
    assert run_rule("accessible-emoji", el("span", "\U0001F43C")) == [
        'Emojis should be wrapped in <span>, have role="img", and have an accessible description '
        "with aria-label or aria-labelledby."
    ]
    assert len(run_rule("accessible-emoji", el("i", "\U0001F43C", role="img", aria_label="Panda"))) == 1
    assert run_rule("accessible-emoji", el("span", "\U0001F43C", role="img", aria_label="Panda")) == []
    assert run_rule("accessible-emoji", el("span", "\U0001F43C", aria_hidden="true")) == []
    assert run_rule("accessible-emoji", el("span", "Panda")) == []


def test_alt_text_img() -> None:
    assert _message_ids(el("img", src="a.png")) == ["imgMissingAlt"]
    assert _message_ids(el("img", alt="A cat")) == []
    assert _message_ids(el("img", alt="")) == []
    assert _message_ids(el("img", alt=Expression("alt"))) == []
    assert _message_ids(el("img", alt=True)) == ["imgInvalidAlt"]
    assert _message_ids(el("img", alt=None)) == ["imgInvalidAlt"]
    assert _message_ids(el("img", role="presentation")) == ["imgPreferAltOverRole"]
    assert _message_ids(el("img", aria_label="")) == ["ariaLabelEmpty"]
    assert _message_ids(el("img", aria_labelledby="")) == ["ariaLabelledbyEmpty"]
    assert _message_ids(el("img", aria_label="A cat")) == []
    assert _message_ids(el("img", spread())) == []


def test_alt_text_object_area_and_input_image() -> None:
    assert _message_ids(el("object")) == ["objectMissingText"]
    assert _message_ids(el("object", "Fallback text")) == []
    assert _message_ids(el("object", title="Chart")) == []
    assert _message_ids(el("area")) == ["areaMissingText"]
    assert _message_ids(el("area", alt="Home")) == []
    assert _message_ids(el("area", aria_label="Home")) == []
    assert _message_ids(el("input", type="image")) == ["inputImageMissingText"]
    assert _message_ids(el("input", type="image", alt="Submit")) == []
    assert _message_ids(el("input", type="text")) == []


def test_alt_text_custom_components_and_element_selection() -> None:
    assert _message_ids(el("Image"), {"img": ["Image"]}) == ["imgMissingAlt"]
    assert _message_ids(el("Image")) == []
    assert _message_ids(el("object"), {"elements": ["img"]}) == []


def test_alt_text_reports_the_localized_message(run_rule) -> None:
    assert run_rule("alt-text", el("img", src="a.png")) == [
        'img 요소에는 alt 속성이 필요합니다. 의미 있는 텍스트 또는 alt=""를 사용하세요.'
    ]
    assert run_rule("alt-text", el("area")) == [ALT_TEXT_MESSAGES["areaMissingText"]]
    assert sorted(ALT_TEXT_MESSAGES) == [
        "areaMissingText",
        "ariaLabelEmpty",
        "ariaLabelledbyEmpty",
        "imgInvalidAlt",
        "imgMissingAlt",
        "imgPreferAltOverRole",
        "inputImageMissingText",
        "objectMissingText",
    ]


def test_anchor_has_content(run_rule) -> None:
    message = "앵커(<a>) 요소는 반드시 콘텐츠를 포함해야 하며, 해당 콘텐츠는 스크린 리더가 접근 가능해야 합니다."
    assert run_rule("anchor-has-content", el("a")) == [message]
    assert run_rule("anchor-has-content", el("a", el("span", "x", aria_hidden="true"))) == [message]
    assert run_rule("anchor-has-content", el("a", "Home")) == []
    assert run_rule("anchor-has-content", el("a", title="Home")) == []
    assert run_rule("anchor-has-content", el("a", Expression("label"))) == []
    assert run_rule("anchor-has-content", el("Link"), {"components": ["Link"]}) == [message]


def _anchor_ids(node, options=None):
    rule = RULES["anchor-is-valid"]
    opts = rule.default_options if options is None else rule.normalize_options(options)
    return [r["message_id"] for r in rule.run(node, "/a[1]", Configuration.default(), opts)]


def test_anchor_is_valid() -> None:
    assert _anchor_ids(el("a", "Home")) == ["noHref"]
    assert _anchor_ids(el("a", "Home", href="/home")) == []
    assert _anchor_ids(el("a", "Home", href=Expression("url"))) == []
    assert _anchor_ids(el("a", "Home", href="#")) == ["invalidHref"]
    assert _anchor_ids(el("a", "Home", href="")) == ["invalidHref"]
    assert _anchor_ids(el("a", "Home", href="javascript:void(0)")) == ["invalidHref"]
    assert _anchor_ids(el("a", "Home", Attribute("onClick", Expression("go")))) == ["preferButton"]
    assert _anchor_ids(el("a", "Home", Attribute("onClick", Expression("go")), href="#")) == ["preferButton"]
    assert _anchor_ids(el("a", "Home", spread())) == []


def test_anchor_is_valid_options() -> None:
    assert _anchor_ids(el("a", "Home", href="#"), {"aspects": ["noHref"]}) == []
    assert _anchor_ids(el("a", "Home", to="/home"), {"specialLink": ["to"]}) == []
    assert _anchor_ids(el("Link", "Home"), {"components": ["Link"]}) == ["noHref"]
    assert _anchor_ids(el("a", "Home", Attribute("onClick", Expression("go"))), {"aspects": ["noHref"]}) == [
        "noHref"
    ]


def test_heading_has_content(run_rule) -> None:
    message = "제목 요소는 반드시 콘텐츠를 포함해야 하며, 해당 콘텐츠는 스크린 리더가 접근 가능해야 합니다."
    assert run_rule("heading-has-content", el("h1")) == [message]
    assert run_rule("heading-has-content", el("h2", "Title")) == []
    assert run_rule("heading-has-content", el("h3", aria_hidden="true")) == []
    assert run_rule("heading-has-content", el("Heading"), {"components": ["Heading"]}) == [message]


def test_html_has_lang(run_rule) -> None:
    message = "<html> 요소에는 반드시 lang 속성이 있어야 합니다."
    assert run_rule("html-has-lang", el("html")) == [message]
    assert run_rule("html-has-lang", el("html", lang="")) == [message]
    assert run_rule("html-has-lang", el("html", lang="en")) == []
    assert run_rule("html-has-lang", el("html", lang=Expression("locale"))) == []


def test_iframe_has_title(run_rule) -> None:
    message = "<iframe> 요소에는 반드시 고유한 title 속성이 있어야 합니다."
    assert run_rule("iframe-has-title", el("iframe")) == [message]
    assert run_rule("iframe-has-title", el("iframe", title="")) == [message]
    assert run_rule("iframe-has-title", el("iframe", title="Map")) == []
    assert run_rule("iframe-has-title", el("iframe", title=Expression("t"))) == []


def test_redundant_words() -> None:
    assert contains_redundant_word("Photo of a cat", ("image", "photo"))
    assert not contains_redundant_word("Photography club", ("photo",))
    assert contains_redundant_word("照片image", ("image",)) is False
    assert contains_redundant_word("照片", ("照片",))


def test_img_redundant_alt(run_rule) -> None:
    assert run_rule("img-redundant-alt", el("img", alt="Image of a dog")) == [
        'alt 속성에 "image", "photo", "picture"와 같은 단어는 불필요합니다. 스크린 리더는 이미 이미지를 인식합니다.'
    ]
    assert run_rule("img-redundant-alt", el("img", alt="A dog")) == []
    assert run_rule("img-redundant-alt", el("img", alt="Image of a dog", aria_hidden="true")) == []
    assert len(run_rule("img-redundant-alt", el("img", alt="A dog drawing"), {"words": ["drawing"]})) == 1


@pytest.mark.parametrize(
    ("value", "expected"),
    [("en", True), ("en-US", True), ("zh-Hant-TW", True), ("", False), ("e", False), ("en-", False), ("12", False)],
)
def test_language_tags(value, expected) -> None:
    assert is_language_tag(value) is expected


def test_lang(run_rule) -> None:
    assert run_rule("lang", el("html", lang="foo-bar-bazbazbaz")) == ["`lang` 속성은 유효한 언어 코드여야 합니다."]
    assert run_rule("lang", el("html", lang="en-GB")) == []
    assert run_rule("lang", el("html", lang=Expression("locale"))) == []
    assert run_rule("lang", el("div", lang="??")) == []


def test_media_has_caption(run_rule) -> None:
    message = '<audio> 및 <video> 요소에는 자막용 <track kind="captions"> 요소가 포함되어야 합니다.'
    assert run_rule("media-has-caption", el("video")) == [message]
    assert run_rule("media-has-caption", el("audio", el("track", kind="subtitles"))) == [message]
    assert run_rule("media-has-caption", el("video", el("track", kind="captions"))) == []
    assert run_rule("media-has-caption", el("video", el("track", kind="Captions"))) == []
    assert run_rule("media-has-caption", el("video", el("track", kind=Expression("k")))) == []
    assert run_rule("media-has-caption", el("video", muted=True)) == []
    options = {"video": ["Player"], "track": ["Caption"]}
    assert run_rule("media-has-caption", el("Player"), options) == [message]
    assert run_rule("media-has-caption", el("Player", el("Caption", kind="captions")), options) == []


def test_no_distracting_elements(run_rule) -> None:
    assert run_rule("no-distracting-elements", el("marquee")) == [
        "<marquee> 요소는 시각적 접근성에 문제가 있으며, 사용이 권장되지 않습니다. 사용하지 마세요."
    ]
    assert len(run_rule("no-distracting-elements", el("blink"))) == 1
    assert run_rule("no-distracting-elements", el("blink"), {"elements": ["marquee"]}) == []


def test_scope(run_rule) -> None:
    assert run_rule("scope", el("td", scope="col")) == ["`scope` 속성은 오직 `<th>` 요소에서만 사용할 수 있습니다."]
    assert run_rule("scope", el("th", scope="col")) == []
    assert run_rule("scope", el("Cell", scope="col")) == []
