# SPDX-License-Identifier: AGPL-3.0-only
"""Rules about text alternatives and element content."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Callable

import emoji

from ..config import LEVEL_OFF
from ..semantics import has_accessible_child, is_hidden_from_screen_reader, is_presentation_role
from ..taxonomy import is_dom_element
from ..tree import Attribute, Node, attribute_value, find_attribute, has_any_attribute, literal_value
from ..types import ABSENT, INDETERMINATE
from .base import STRING_LIST, RuleContext, enum_list, object_schema, rule


_JS_HREF_RE = re.compile(r"^\W*?javascript:", re.IGNORECASE)
_LANG_SUBTAG_RE = re.compile(r"^[A-Za-z0-9]{1,8}$")
_ASCII_RE = re.compile(r"[\x20-\x7F]+")

REDUNDANT_WORDS = ("image", "photo", "picture")
INPUT_IMAGE = 'input[type="image"]'
DEFAULT_ALT_ELEMENTS = ("img", "object", "area", INPUT_IMAGE)

ALT_TEXT_MESSAGES = MappingProxyType(
    {
        "imgMissingAlt": 'img 요소에는 alt 속성이 필요합니다. 의미 있는 텍스트 또는 alt=""를 사용하세요.',
        "imgPreferAltOverRole": 'role="presentation" 보다는 alt="" 속성을 사용하는 것이 권장됩니다.',
        "imgInvalidAlt": 'img 요소의 alt 속성이 유효하지 않습니다. 장식용이면 alt=""로 설정하세요.',
        "ariaLabelEmpty": "aria-label 속성에는 값이 필요합니다. 가능하면 alt 속성을 사용하세요.",
        "ariaLabelledbyEmpty": "aria-labelledby 속성에는 값이 필요합니다. 가능하면 alt 속성을 사용하세요.",
        "objectMissingText": "<object> 요소에는 내부 텍스트, aria-label 또는 aria-labelledby 중 하나가 필요합니다.",
        "areaMissingText": "<area> 요소는 alt, aria-label 또는 aria-labelledby 속성을 통해 대체 텍스트를 제공해야 합니다.",
        "inputImageMissingText": (
            'type="image"인 <input> 요소는 alt, aria-label 또는 aria-labelledby 중 하나를 사용해야 합니다.'
        ),
    }
)


def _label_state(node: Node, name: str) -> bool:
    """Whether a labelling attribute carries a non-empty value; unknown counts as set."""
    attr = find_attribute(node.attributes, name)
    if attr is INDETERMINATE:
        return True
    if attr is None:
        return False
    value = literal_value(attr)
    if value is INDETERMINATE:
        return True
    return bool(value) and value is not True


def _has_aria_label(node: Node) -> bool:
    return _label_state(node, "aria-label") or _label_state(node, "aria-labelledby")


def _report_alt(ctx: RuleContext, message_id: str) -> None:
    ctx.report(ALT_TEXT_MESSAGES[message_id], message_id=message_id)


@rule(
    "accessible-emoji",
    description="이모지를 <span>으로 감싸고, 스크린 리더를 위한 접근성을 제공해야 합니다.",
    level=LEVEL_OFF,
    deprecated=True,
)
def accessible_emoji(node: Node, ctx: RuleContext) -> None:
    literal = next((child for child in node.children if isinstance(child, str)), None)
    if literal is None or emoji.emoji_count(literal) == 0:
        return
    if is_hidden_from_screen_reader(ctx.node_type, node.attributes):
        return
    labelled = has_any_attribute(node.attributes, ("aria-label", "aria-labelledby"))
    role = attribute_value(node.attributes, "role")
    if labelled is INDETERMINATE or role is INDETERMINATE:
        return
    if labelled and role == "img" and ctx.node_type == "span":
        return
    ctx.report(
        'Emojis should be wrapped in <span>, have role="img", and have an accessible description '
        "with aria-label or aria-labelledby."
    )


def _check_img(node: Node, ctx: RuleContext) -> None:
    attrs = node.attributes
    alt = find_attribute(attrs, "alt")
    if alt is INDETERMINATE:
        return
    if alt is None:
        if is_presentation_role(ctx.node_type, attrs):
            _report_alt(ctx, "imgPreferAltOverRole")
            return
        for name, message_id in (("aria-label", "ariaLabelEmpty"), ("aria-labelledby", "ariaLabelledbyEmpty")):
            if not isinstance(find_attribute(attrs, name), Attribute):
                continue
            if not _label_state(node, name):
                _report_alt(ctx, message_id)
            return
        _report_alt(ctx, "imgMissingAlt")
        return
    value = literal_value(alt)
    if value is INDETERMINATE or value == "":
        return
    if value and value is not True:
        return
    _report_alt(ctx, "imgInvalidAlt")


def _check_object(node: Node, ctx: RuleContext) -> None:
    title = attribute_value(node.attributes, "title")
    if _has_aria_label(node) or title is INDETERMINATE or (isinstance(title, str) and title):
        return
    if has_accessible_child(node, ctx.config):
        return
    _report_alt(ctx, "objectMissingText")


def _alt_missing(node: Node) -> bool | None:
    """``None`` when unknown; otherwise whether the ``alt`` text is missing."""
    alt = find_attribute(node.attributes, "alt")
    if alt is INDETERMINATE:
        return None
    if alt is None:
        return True
    value = literal_value(alt)
    if value is INDETERMINATE or alt.value is True:
        return False
    return not value and value != ""


def _check_area(node: Node, ctx: RuleContext) -> None:
    if _has_aria_label(node) or not _alt_missing(node):
        return
    _report_alt(ctx, "areaMissingText")


def _check_input_image(node: Node, ctx: RuleContext) -> None:
    if ctx.node_type == "input":
        kind = attribute_value(node.attributes, "type")
        if not isinstance(kind, str) or kind.lower() != "image":
            return
    if _has_aria_label(node) or not _alt_missing(node):
        return
    _report_alt(ctx, "inputImageMissingText")


_ALT_CHECKS: dict[str, Callable[[Node, RuleContext], None]] = {
    "img": _check_img,
    "object": _check_object,
    "area": _check_area,
    INPUT_IMAGE: _check_input_image,
}


@rule(
    "alt-text",
    description="대체 텍스트가 필요한 모든 요소는 의미 있는 정보를 포함해야 합니다.",
    schema=object_schema(
        {
            "elements": STRING_LIST,
            "img": STRING_LIST,
            "object": STRING_LIST,
            "area": STRING_LIST,
            INPUT_IMAGE: STRING_LIST,
        }
    ),
)
def alt_text(node: Node, ctx: RuleContext) -> None:
    elements = list(ctx.option("elements", DEFAULT_ALT_ELEMENTS))
    custom = {component: element for element in elements for component in ctx.option(element, ())}
    tag = ctx.node_type
    if tag == "input" and INPUT_IMAGE in elements:
        target = INPUT_IMAGE
    elif tag in elements:
        target = tag
    else:
        target = custom.get(tag)
    check = _ALT_CHECKS.get(target) if target else None
    if check is not None:
        check(node, ctx)


def _type_check(ctx: RuleContext, base: tuple[str, ...]) -> bool:
    return ctx.node_type in (*base, *ctx.option("components", ()))


@rule(
    "anchor-has-content",
    description="모든 앵커 요소가 접근 가능한 콘텐츠를 포함하도록 강제합니다.",
    schema=object_schema({"components": STRING_LIST}),
)
def anchor_has_content(node: Node, ctx: RuleContext) -> None:
    if not _type_check(ctx, ("a",)):
        return
    if has_accessible_child(node, ctx.config):
        return
    if has_any_attribute(node.attributes, ("title", "aria-label")) is not False:
        return
    ctx.report("앵커(<a>) 요소는 반드시 콘텐츠를 포함해야 하며, 해당 콘텐츠는 스크린 리더가 접근 가능해야 합니다.")


ANCHOR_ASPECTS = ("noHref", "invalidHref", "preferButton")


@rule(
    "anchor-is-valid",
    description="모든 앵커가 유효하고 네비게이션 가능한 요소인지 검사합니다.",
    schema=object_schema(
        {"components": STRING_LIST, "special_link": STRING_LIST, "aspects": enum_list(ANCHOR_ASPECTS, min_items=1)}
    ),
)
def anchor_is_valid(node: Node, ctx: RuleContext) -> None:
    if not _type_check(ctx, ("a",)):
        return
    attrs = node.attributes
    aspects = set(ctx.option("aspects", ANCHOR_ASPECTS))
    values = [attribute_value(attrs, name) for name in ("href", *ctx.option("special_link", ()))]
    has_href = any(v is not ABSENT and v is not None for v in values)
    on_click = isinstance(find_attribute(attrs, "onClick"), Attribute)
    prefer_button = "preferButton" in aspects

    if not has_href:
        if node.has_spread:
            return
        if on_click and prefer_button:
            ctx.report(_PREFER_BUTTON, message_id="preferButton")
        elif "noHref" in aspects:
            ctx.report(_NO_HREF, message_id="noHref")
        return

    invalid = [v for v in values if isinstance(v, str) and (not v or v == "#" or _JS_HREF_RE.match(v))]
    if not invalid:
        return
    if on_click and prefer_button:
        ctx.report(_PREFER_BUTTON, message_id="preferButton")
    elif "invalidHref" in aspects:
        ctx.report(_INVALID_HREF, message_id="invalidHref", href=invalid[0])


_NO_HREF = (
    "키보드 접근성을 보장하려면 <a> 태그에 href 속성이 필수입니다. "
    "href를 제공할 수 없다면, 버튼을 사용하고 스타일로 링크처럼 보이게 하세요."
)
_INVALID_HREF = (
    'href에는 유효한 경로가 있어야 합니다. 빈 문자열, "#" 또는 "javascript:"는 접근성을 해칩니다. '
    "유효한 링크가 없다면 버튼을 사용하세요."
)
_PREFER_BUTTON = (
    "버튼처럼 사용된 앵커입니다. 앵커는 주로 페이지 이동 용도로 사용해야 하며, "
    "동작 트리거용이면 <button> 태그를 사용하세요."
)


@rule(
    "heading-has-content",
    description="모든 heading(`h1`, `h2` 등) 요소는 접근 가능한 콘텐츠를 포함해야 합니다.",
    schema=object_schema({"components": STRING_LIST}),
)
def heading_has_content(node: Node, ctx: RuleContext) -> None:
    if not _type_check(ctx, ("h1", "h2", "h3", "h4", "h5", "h6")):
        return
    if has_accessible_child(node, ctx.config):
        return
    if is_hidden_from_screen_reader(ctx.node_type, node.attributes):
        return
    ctx.report("제목 요소는 반드시 콘텐츠를 포함해야 하며, 해당 콘텐츠는 스크린 리더가 접근 가능해야 합니다.")


@rule("html-has-lang", description="`<html>` 요소가 `lang` 속성을 포함하도록 강제합니다.")
def html_has_lang(node: Node, ctx: RuleContext) -> None:
    if ctx.node_type != "html":
        return
    lang = attribute_value(node.attributes, "lang")
    if lang is INDETERMINATE or (lang is not ABSENT and lang):
        return
    ctx.report("<html> 요소에는 반드시 lang 속성이 있어야 합니다.", attribute="lang")


@rule("iframe-has-title", description="`<iframe>` 요소에 `title` 속성이 반드시 있어야 합니다.")
def iframe_has_title(node: Node, ctx: RuleContext) -> None:
    if ctx.node_type != "iframe":
        return
    title = attribute_value(node.attributes, "title")
    if title is INDETERMINATE or (isinstance(title, str) and title):
        return
    ctx.report("<iframe> 요소에는 반드시 고유한 title 속성이 있어야 합니다.", attribute="title")


def contains_redundant_word(text: str, words: tuple[str, ...]) -> bool:
    lowered = [w.lower() for w in words]
    if _ASCII_RE.search(text):
        return any(token.lower() in lowered for token in text.split())
    return any(word in text.lower() for word in lowered)


@rule(
    "img-redundant-alt",
    description="`<img>` 태그의 `alt` 속성에 중복된 단어가 포함되지 않도록 합니다.",
    schema=object_schema({"components": STRING_LIST, "words": STRING_LIST}),
)
def img_redundant_alt(node: Node, ctx: RuleContext) -> None:
    if not _type_check(ctx, ("img",)):
        return
    alt = find_attribute(node.attributes, "alt")
    if not isinstance(alt, Attribute):
        return
    value = literal_value(alt)
    if not isinstance(value, str) or is_hidden_from_screen_reader(ctx.node_type, node.attributes):
        return
    if contains_redundant_word(value, (*REDUNDANT_WORDS, *ctx.option("words", ()))):
        ctx.report(
            'alt 속성에 "image", "photo", "picture"와 같은 단어는 불필요합니다. 스크린 리더는 이미 이미지를 인식합니다.',
            attribute="alt",
        )


def is_language_tag(value: Any) -> bool:
    """Shape check for a BCP 47 tag: a 2-3 or 4-8 letter language, then 1-8 char subtags."""
    if not isinstance(value, str):
        return False
    text = value.strip()
    if not text or text.startswith("-") or text.endswith("-"):
        return False
    language, *rest = text.split("-")
    if not language.isalpha() or not language.isascii() or not 2 <= len(language) <= 8:
        return False
    return all(_LANG_SUBTAG_RE.match(subtag) for subtag in rest)


@rule("lang", description="`lang` 속성은 올바른 언어 코드 값을 가져야 합니다.")
def lang(node: Node, ctx: RuleContext) -> None:
    attr = find_attribute(node.attributes, "lang")
    if not isinstance(attr, Attribute) or ctx.node_type != "html":
        return
    value = literal_value(attr)
    if value is INDETERMINATE or is_language_tag(value):
        return
    ctx.report("`lang` 속성은 유효한 언어 코드여야 합니다.", attribute="lang")


@rule(
    "media-has-caption",
    description="`<audio>` 및 `<video>` 요소에는 자막을 위한 `<track>` 요소가 있어야 합니다.",
    schema=object_schema({"audio": STRING_LIST, "video": STRING_LIST, "track": STRING_LIST}),
)
def media_has_caption(node: Node, ctx: RuleContext) -> None:
    media = ("audio", "video", *ctx.option("audio", ()), *ctx.option("video", ()))
    if ctx.node_type not in media:
        return
    muted = attribute_value(node.attributes, "muted")
    if muted is True or muted == "":
        return
    tracks = ("track", *ctx.option("track", ()))
    children = [child for child in node.element_children() if ctx.type_of(child) in tracks]
    for child in children:
        kind = attribute_value(child.attributes, "kind")
        if kind is INDETERMINATE or (isinstance(kind, str) and kind.lower() == "captions"):
            return
    ctx.report('<audio> 및 <video> 요소에는 자막용 <track kind="captions"> 요소가 포함되어야 합니다.')


@rule(
    "no-distracting-elements",
    description="시각적으로 산만한 요소(`<marquee>`, `<blink>` 등)의 사용을 금지합니다.",
    schema=object_schema({"elements": enum_list(("marquee", "blink"))}),
)
def no_distracting_elements(node: Node, ctx: RuleContext) -> None:
    if ctx.node_type in ctx.option("elements", ("marquee", "blink")):
        ctx.report(
            f"<{ctx.node_type}> 요소는 시각적 접근성에 문제가 있으며, 사용이 권장되지 않습니다. 사용하지 마세요."
        )


@rule("scope", description="`<scope>` 속성은 오직 `<th>` 요소에서만 사용할 수 있도록 강제합니다.")
def scope(node: Node, ctx: RuleContext) -> None:
    if not isinstance(find_attribute(node.attributes, "scope"), Attribute):
        return
    if not is_dom_element(ctx.node_type) or ctx.node_type.lower() == "th":
        return
    ctx.report("`scope` 속성은 오직 `<th>` 요소에서만 사용할 수 있습니다.", attribute="scope")
