"""
定位器解析：selector 字符串 / 结构化定位描述 → Playwright 定位表达式

两代定位描述格式用一张有序分派表处理（第一条命中的分支生效）：
- legacy：{role, name?, exact?}，以及更早的单键格式 {text} / {label} / {testId} ...
- versioned：{kind, body, options, next?}

没有结构化描述时解析 selector 字符串（internal:role= / internal:text= ...），
都不认识就原样当作普通 selector。格式异常一律降级为普通 selector，不报错。
"""
from __future__ import annotations

import json
import re
from typing import Any, Callable

from pydantic import ValidationError

from recordgen.codegen.fragment import py_str
from recordgen.models import LegacyRoleLocator, VersionedLocator
from recordgen.utils import get_logger

logger = get_logger("Locator")

# ========== 表达式构造 ==========


def _call(root: str, method: str, *args: str, name: str | None = None, exact: bool | None = None, **extra: Any) -> str:
    parts = [py_str(a) for a in args]
    if name is not None:
        parts.append(f"name={py_str(name)}")
    # 只渲染 exact=True；exact=False 与缺省等价，从不输出
    if exact is True:
        parts.append("exact=True")
    for key, value in extra.items():
        parts.append(f"{key}={_py_value(value)}")
    return f"{root}.{method}({', '.join(parts)})"


def _py_value(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return repr(value)
    if isinstance(value, (int, float)):
        return repr(value)
    return py_str(value)


def by_role(root: str, role: str, *, name: str | None = None, exact: bool | None = None, **extra: Any) -> str:
    return _call(root, "get_by_role", role, name=name, exact=exact, **extra)


def by_selector(root: str, selector: str) -> str:
    return _call(root, "locator", selector)


# versioned kind / internal: 前缀 → get_by_* 方法（这些方法都接受 exact）
_TEXT_LIKE_METHODS: dict[str, str] = {
    "text": "get_by_text",
    "label": "get_by_label",
    "placeholder": "get_by_placeholder",
    "alt": "get_by_alt_text",
    "title": "get_by_title",
}

# get_by_role 额外支持的 ARIA 属性（录制字段名 → 关键字参数名）
_ROLE_ATTR_KWARGS: dict[str, str] = {
    "checked": "checked",
    "disabled": "disabled",
    "expanded": "expanded",
    "includeHidden": "include_hidden",
    "include-hidden": "include_hidden",
    "level": "level",
    "pressed": "pressed",
    "selected": "selected",
}


def _role_attr_value(name: str, value: Any) -> Any:
    # level 在 get_by_role 中是整数
    if name == "level" and isinstance(value, str) and value.isdigit():
        return int(value)
    return value


# ========== legacy 格式 ==========


def _is_legacy_role(locator: Any) -> bool:
    return isinstance(locator, dict) and isinstance(locator.get("role"), str) and bool(locator["role"])


def _from_legacy_role(root: str, locator: dict[str, Any]) -> str | None:
    try:
        desc = LegacyRoleLocator.model_validate(locator)
    except ValidationError:
        return None
    return by_role(root, desc.role, name=desc.name, exact=desc.exact)


# 更早的单键格式，按顺序匹配
_LEGACY_SINGLE_KEYS: list[tuple[str, str]] = [
    ("text", "get_by_text"),
    ("label", "get_by_label"),
    ("placeholder", "get_by_placeholder"),
    ("testId", "get_by_test_id"),
    ("altText", "get_by_alt_text"),
    ("title", "get_by_title"),
    ("css", "locator"),
]


def _is_legacy_single_key(locator: Any) -> bool:
    return isinstance(locator, dict) and any(isinstance(locator.get(k), str) for k, _ in _LEGACY_SINGLE_KEYS)


def _from_legacy_single_key(root: str, locator: dict[str, Any]) -> str | None:
    for key, method in _LEGACY_SINGLE_KEYS:
        value = locator.get(key)
        if isinstance(value, str):
            return _call(root, method, value)
    return None


def _is_plain_string(locator: Any) -> bool:
    return isinstance(locator, str) and bool(locator)


def _from_plain_string(root: str, locator: str) -> str | None:
    return by_selector(root, locator)


# ========== versioned 格式 ==========


def _is_versioned(locator: Any) -> bool:
    return isinstance(locator, dict) and "kind" in locator and "body" in locator


def _from_versioned(root: str, locator: dict[str, Any]) -> str | None:
    try:
        desc = VersionedLocator.model_validate(locator)
    except ValidationError:
        return None
    return _build_versioned(root, desc)


def _build_versioned(root: str, desc: VersionedLocator) -> str | None:
    kind = desc.kind
    opts = desc.options

    if kind == "role":
        name = opts.name
        if opts.name is None and opts.exact is None:
            # 兼容旧版：name 放在 attrs 里
            name = next((str(a.value) for a in opts.attrs if a.name == "name" and a.value is not None), None)
        extra = {
            _ROLE_ATTR_KWARGS[a.name]: _role_attr_value(a.name, a.value)
            for a in opts.attrs
            if a.name in _ROLE_ATTR_KWARGS and a.value is not None
        }
        expr = by_role(root, desc.body, name=name, exact=opts.exact, **extra)
    elif kind in ("default", "css"):
        expr = by_selector(root, desc.body)
    elif kind in _TEXT_LIKE_METHODS:
        expr = _call(root, _TEXT_LIKE_METHODS[kind], desc.body, exact=opts.exact)
    elif kind in ("testid", "test-id"):
        expr = _call(root, "get_by_test_id", desc.body)
    elif kind == "nth" and desc.body.lstrip("-").isdigit():
        expr = f"{root}.nth({int(desc.body)})"
    elif kind in ("first", "last"):
        expr = f"{root}.{kind}"
    else:
        return None

    if desc.next is not None:
        return _build_versioned(expr, desc.next)
    return expr


# ========== 分派表 ==========

LocatorBuilder = Callable[[str, Any], str | None]

LOCATOR_DISPATCH: list[tuple[Callable[[Any], bool], LocatorBuilder]] = [
    (_is_legacy_role, _from_legacy_role),
    (_is_versioned, _from_versioned),
    (_is_legacy_single_key, _from_legacy_single_key),
    (_is_plain_string, _from_plain_string),
]


def locator_from_description(root: str, locator: Any) -> str | None:
    """按分派表解析结构化定位描述；无法识别时返回 None。"""
    for matches, build in LOCATOR_DISPATCH:
        if matches(locator):
            return build(root, locator)
    return None


# ========== selector 字符串 ==========

_QUOTED = r'"(?:[^"\\]|\\.)*"'
_ROLE_RE = re.compile(rf"internal:role=([A-Za-z-]+)((?:\[(?:{_QUOTED}|[^\]\"])*\])*)", re.S)
_ROLE_NAME_RE = re.compile(rf"\[name=({_QUOTED})([is]?)\]", re.S)
_TEXT_LIKE_RE = re.compile(rf"internal:(text|label)=({_QUOTED})([is]?)", re.S)
_TESTID_RE = re.compile(rf"internal:testid=(?:\[data-testid=({_QUOTED})[is]?\]|({_QUOTED})[is]?)", re.S)
_ATTR_RE = re.compile(rf"internal:attr=\[(placeholder|alt|title)=({_QUOTED})([is]?)\]", re.S)


def _unquote(quoted: str) -> str:
    try:
        return json.loads(quoted)
    except json.JSONDecodeError:
        return quoted[1:-1]


def _exact_flag(flag: str) -> bool | None:
    return True if flag == "s" else None


def locator_from_selector(root: str, selector: str) -> str:
    """解析 Playwright internal: selector；不认识的 selector 原样使用。"""
    m = _ROLE_RE.fullmatch(selector)
    if m:
        role, attrs = m.group(1), m.group(2) or ""
        if not attrs:
            return by_role(root, role)
        name_m = _ROLE_NAME_RE.fullmatch(attrs)
        if name_m:
            return by_role(root, role, name=_unquote(name_m.group(1)), exact=_exact_flag(name_m.group(2)))
        # 其它属性（正则 name、checked 等）无法无损改写，保留原 selector
        return by_selector(root, selector)

    m = _TEXT_LIKE_RE.fullmatch(selector)
    if m:
        kind, quoted, flag = m.groups()
        return _call(root, _TEXT_LIKE_METHODS[kind], _unquote(quoted), exact=_exact_flag(flag))

    m = _TESTID_RE.fullmatch(selector)
    if m:
        return _call(root, "get_by_test_id", _unquote(m.group(1) or m.group(2)))

    m = _ATTR_RE.fullmatch(selector)
    if m:
        attr, quoted, flag = m.groups()
        return _call(root, _TEXT_LIKE_METHODS[attr], _unquote(quoted), exact=_exact_flag(flag))

    return by_selector(root, selector)


def resolve_locator(root: str, selector: str | None, locator: Any = None) -> str:
    """
    结构化定位描述优先；其次解析 selector；两者都没有时退化为空 selector。
    """
    if locator is not None:
        expr = locator_from_description(root, locator)
        if expr is not None:
            return expr
        logger.warning(f"⚠️ 无法识别的定位描述，降级为 selector: {locator!r}")
        if not selector and isinstance(locator, dict) and isinstance(locator.get("body"), str):
            return by_selector(root, locator["body"])

    if selector:
        return locator_from_selector(root, selector)

    logger.warning("⚠️ 动作缺少 selector 与定位描述，使用空 selector")
    return by_selector(root, "")
