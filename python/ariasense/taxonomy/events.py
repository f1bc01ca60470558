# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from types import MappingProxyType


EVENT_HANDLERS = MappingProxyType(
    {
        "clipboard": ("onCopy", "onCut", "onPaste"),
        "composition": ("onCompositionEnd", "onCompositionStart", "onCompositionUpdate"),
        "keyboard": ("onKeyDown", "onKeyPress", "onKeyUp"),
        "focus": ("onFocus", "onBlur"),
        "form": ("onChange", "onInput", "onSubmit"),
        "mouse": (
            "onClick",
            "onContextMenu",
            "onDblClick",
            "onDoubleClick",
            "onDrag",
            "onDragEnd",
            "onDragEnter",
            "onDragExit",
            "onDragLeave",
            "onDragOver",
            "onDragStart",
            "onDrop",
            "onMouseDown",
            "onMouseEnter",
            "onMouseLeave",
            "onMouseMove",
            "onMouseOut",
            "onMouseOver",
            "onMouseUp",
        ),
        "selection": ("onSelect",),
        "touch": ("onTouchCancel", "onTouchEnd", "onTouchMove", "onTouchStart"),
        "ui": ("onScroll",),
        "wheel": ("onWheel",),
        "media": (
            "onAbort",
            "onCanPlay",
            "onCanPlayThrough",
            "onDurationChange",
            "onEmptied",
            "onEncrypted",
            "onEnded",
            "onError",
            "onLoadedData",
            "onLoadedMetadata",
            "onLoadStart",
            "onPause",
            "onPlay",
            "onPlaying",
            "onProgress",
            "onRateChange",
            "onSeeked",
            "onSeeking",
            "onStalled",
            "onSuspend",
            "onTimeUpdate",
            "onVolumeChange",
            "onWaiting",
        ),
        "image": ("onLoad", "onError"),
        "animation": ("onAnimationStart", "onAnimationEnd", "onAnimationIteration"),
        "transition": ("onTransitionEnd",),
    }
)


def handlers_for(*groups: str) -> tuple[str, ...]:
    out: list[str] = []
    for group in groups:
        for name in EVENT_HANDLERS[group]:
            if name not in out:
                out.append(name)
    return tuple(out)
