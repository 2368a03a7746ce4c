"""
动作翻译：ActionEvent → Fragment

固定的模板表，按动作名查表；表外的动作名立即报 UnknownActionError。
翻译只关心动作本身，dialog/popup/download 等信号由 codegen.signals 事后包装。
"""
from __future__ import annotations

import re
from typing import Callable

from recordgen.codegen.fragment import EXPECT_IMPORT, Fragment, py_str
from recordgen.codegen.locators import resolve_locator
from recordgen.errors import UnknownActionError
from recordgen.models import PRIMARY_PAGE_ALIAS, ActionEvent

# openPage 时视为“空白页”的地址，不生成 goto
BLANK_PAGE_URLS = frozenset({"about:blank", "chrome://newtab/"})

# 录制中的 modifiers 位掩码
_MODIFIER_BITS: list[tuple[int, str]] = [
    (1, "Alt"),
    (2, "ControlOrMeta"),
    (4, "Meta"),
    (8, "Shift"),
]

_EXPECT = frozenset({EXPECT_IMPORT})

_NON_IDENT = re.compile(r"[^a-zA-Z0-9]")


def page_symbol(event: ActionEvent) -> str:
    """主页面固定为 pg，其它页面别名映射为 pg_<alias>。"""
    alias = event.page_alias or PRIMARY_PAGE_ALIAS
    if alias == PRIMARY_PAGE_ALIAS:
        return "pg"
    return "pg_" + _NON_IDENT.sub("_", alias)


def frame_root(page: str, frame_path: list[str]) -> str:
    """framePath 中每个 iframe selector 依次进入 content_frame。"""
    root = page
    for selector in frame_path:
        root = f"{root}.locator({py_str(selector)}).content_frame"
    return root


def modifier_keys(modifiers: int | None) -> list[str]:
    if not modifiers or modifiers <= 0:
        return []
    return [key for bit, key in _MODIFIER_BITS if modifiers & bit]


def _position_arg(event: ActionEvent) -> str:
    pos = event.position
    return f'position={{"x": {pos.x!r}, "y": {pos.y!r}}}'


def _string_or_list(value: list[str] | str | None) -> str:
    # 单个值直接传字符串，多个值传列表
    if isinstance(value, list):
        if len(value) == 1:
            return py_str(value[0])
        return "[" + ", ".join(py_str(v) for v in value) + "]"
    return py_str(value)


class _Ctx:
    """单个动作翻译时的上下文：页面符号 + 惰性解析的定位表达式"""

    def __init__(self, event: ActionEvent) -> None:
        self.event = event
        self.page = page_symbol(event)
        self.root = frame_root(self.page, event.frame_path)

    @property
    def loc(self) -> str:
        return resolve_locator(self.root, self.event.selector, self.event.locator)


# ========== 各动作模板 ==========


def _open_page(ctx: _Ctx) -> Fragment:
    url = ctx.event.url
    comment = f"# New page: {ctx.page}"
    if url and url not in BLANK_PAGE_URLS:
        return Fragment.of(comment, f"{ctx.page}.goto({py_str(url)})")
    return Fragment.of(comment)


def _navigate(ctx: _Ctx) -> Fragment:
    return Fragment.of(f"{ctx.page}.goto({py_str(ctx.event.url)})")


def _close_page(ctx: _Ctx) -> Fragment:
    return Fragment.of(f"{ctx.page}.close()")


def _click(ctx: _Ctx) -> Fragment:
    event = ctx.event
    count = event.click_count or 1
    if count == 2:
        return Fragment.of(f"{ctx.loc}.dblclick()")
    if count > 2:
        return Fragment.of(f"{ctx.loc}.click(click_count={count})")

    opts: list[str] = []
    if event.button and event.button != "left":
        opts.append(f"button={py_str(event.button)}")
    mods = modifier_keys(event.modifiers)
    if mods:
        opts.append("modifiers=[" + ", ".join(py_str(m) for m in mods) + "]")
    if event.position is not None:
        opts.append(_position_arg(event))
    return Fragment.of(f"{ctx.loc}.click({', '.join(opts)})")


def _fill(ctx: _Ctx) -> Fragment:
    return Fragment.of(f"{ctx.loc}.fill({py_str(ctx.event.text)})")


def _press(ctx: _Ctx) -> Fragment:
    keys = modifier_keys(ctx.event.modifiers) + [ctx.event.key or ""]
    return Fragment.of(f"{ctx.loc}.press({py_str('+'.join(keys))})")


def _hover(ctx: _Ctx) -> Fragment:
    if ctx.event.position is not None:
        return Fragment.of(f"{ctx.loc}.hover({_position_arg(ctx.event)})")
    return Fragment.of(f"{ctx.loc}.hover()")


def _check(ctx: _Ctx) -> Fragment:
    return Fragment.of(f"{ctx.loc}.check()")


def _uncheck(ctx: _Ctx) -> Fragment:
    return Fragment.of(f"{ctx.loc}.uncheck()")


def _select(ctx: _Ctx) -> Fragment:
    return Fragment.of(f"{ctx.loc}.select_option({_string_or_list(ctx.event.options)})")


def _set_input_files(ctx: _Ctx) -> Fragment:
    files = ctx.event.files
    arg = "[]" if files is None or files == [] else _string_or_list(files)
    return Fragment.of(f"{ctx.loc}.set_input_files({arg})")


def _assert_text(ctx: _Ctx) -> Fragment:
    matcher = "to_contain_text" if ctx.event.substring else "to_have_text"
    return Fragment.of(f"expect({ctx.loc}).{matcher}({py_str(ctx.event.text)})", imports=_EXPECT)


def _assert_visible(ctx: _Ctx) -> Fragment:
    return Fragment.of(f"expect({ctx.loc}).to_be_visible()", imports=_EXPECT)


def _assert_checked(ctx: _Ctx) -> Fragment:
    # checked 缺省视为 true
    matcher = "not_to_be_checked" if ctx.event.checked is False else "to_be_checked"
    return Fragment.of(f"expect({ctx.loc}).{matcher}()", imports=_EXPECT)


def _assert_value(ctx: _Ctx) -> Fragment:
    value = ctx.event.value
    if value is None or not value.strip():
        return Fragment.of(f"expect({ctx.loc}).to_be_empty()", imports=_EXPECT)
    return Fragment.of(f"expect({ctx.loc}).to_have_value({py_str(value)})", imports=_EXPECT)


def _assert_snapshot(ctx: _Ctx) -> Fragment:
    return Fragment.of(f"expect({ctx.loc}).to_match_aria_snapshot({py_str(ctx.event.snapshot)})", imports=_EXPECT)


ACTION_TEMPLATES: dict[str, Callable[[_Ctx], Fragment]] = {
    # 页面生命周期
    "openPage": _open_page,
    "closePage": _close_page,
    "navigate": _navigate,
    # 交互
    "click": _click,
    "fill": _fill,
    "press": _press,
    "hover": _hover,
    "check": _check,
    "uncheck": _uncheck,
    "select": _select,
    "setInputFiles": _set_input_files,
    # 断言
    "assertText": _assert_text,
    "assertVisible": _assert_visible,
    "assertChecked": _assert_checked,
    "assertValue": _assert_value,
    "assertSnapshot": _assert_snapshot,
}


def translate_action(event: ActionEvent) -> Fragment:
    template = ACTION_TEMPLATES.get(event.name)
    if template is None:
        raise UnknownActionError(event.name, event.model_dump(by_alias=True, exclude_none=True))
    return template(_Ctx(event))
