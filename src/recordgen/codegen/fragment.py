from __future__ import annotations

import json
from dataclasses import dataclass, field

# 生成代码中引用到的 (模块, 名字)
PLAYWRIGHT_MODULE = "playwright.sync_api"
EXPECT_IMPORT = (PLAYWRIGHT_MODULE, "expect")
SYNC_PLAYWRIGHT_IMPORT = (PLAYWRIGHT_MODULE, "sync_playwright")

INDENT = "    "


@dataclass(frozen=True)
class Fragment:
    """一个动作翻译出的代码片段（一行或多行，不含缩进前缀）"""

    lines: tuple[str, ...]
    imports: frozenset[tuple[str, str]] = field(default_factory=frozenset)

    @classmethod
    def of(cls, *lines: str, imports: frozenset[tuple[str, str]] = frozenset()) -> Fragment:
        return cls(lines=tuple(lines), imports=imports)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def indented(self, prefix: str = INDENT) -> tuple[str, ...]:
        return indent_lines(self.lines, prefix)


def indent_lines(lines: tuple[str, ...] | list[str], prefix: str) -> tuple[str, ...]:
    # 空行不加缩进，避免生成代码里出现行尾空白
    return tuple(prefix + line if line else line for line in lines)


def py_str(value: object) -> str:
    """渲染为双引号 Python 字符串字面量（JSON 转义与 Python 兼容，保留非 ASCII）。"""
    return json.dumps("" if value is None else str(value), ensure_ascii=False)
