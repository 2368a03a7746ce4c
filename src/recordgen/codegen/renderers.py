"""输出形态：body / script / test 三种渲染策略，共用同一份翻译结果。"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict

from recordgen.codegen.fragment import INDENT, SYNC_PLAYWRIGHT_IMPORT, Fragment, indent_lines
from recordgen.models import RecordingHeader

# 浏览器 → launcher，固定一一对应
LAUNCHERS: dict[str, str] = {
    "chromium": "chromium",
    "firefox": "firefox",
    "webkit": "webkit",
}

TEST_TITLE = "recorded test"


def lifecycle_lines(header: RecordingHeader) -> list[str]:
    """playwright → browser → context → page 四层资源获取，每层缩进一级，变量名固定。"""
    launcher = LAUNCHERS[header.browser_name]
    headless = header.launch_options.headless is not False
    blocks = [
        "with sync_playwright() as pw:",
        f"with pw.{launcher}.launch(headless={headless!r}) as browser:",
        "with browser.new_context() as ctx:",
        "with ctx.new_page() as pg:",
    ]
    return [INDENT * depth + line for depth, line in enumerate(blocks)]


def body_lines(fragments: list[Fragment]) -> list[str]:
    return [line for fragment in fragments for line in fragment.lines]


def import_lines(fragments: list[Fragment]) -> list[str]:
    """按实际引用生成 import：每个模块一行，模块与名字都排序去重。"""
    by_module: dict[str, set[str]] = defaultdict(set)
    for module, name in {SYNC_PLAYWRIGHT_IMPORT}.union(*(f.imports for f in fragments)):
        by_module[module].add(name)
    return [
        f"from {module} import {', '.join(sorted(names))}"
        for module, names in sorted(by_module.items())
    ]


class Renderer(ABC):
    """把片段列表与 header 组装成最终文本"""

    format: str = "unknown"

    @abstractmethod
    def render(self, fragments: list[Fragment], header: RecordingHeader) -> str:
        pass

    def _nested_body(self, fragments: list[Fragment], header: RecordingHeader, base: str) -> list[str]:
        lifecycle = lifecycle_lines(header)
        body_indent = base + INDENT * len(lifecycle)
        body = body_lines(fragments)
        if not any(line.strip() and not line.lstrip().startswith("#") for line in body):
            # 只有注释时 with 块为空，补 pass 保证语法正确
            body.append("pass")
        return [
            *indent_lines(lifecycle, base),
            *indent_lines(body, body_indent),
        ]


class BodyRenderer(Renderer):
    """只有动作代码本身，可直接粘贴到已有的 with 块里"""

    format = "body"

    def render(self, fragments: list[Fragment], header: RecordingHeader) -> str:
        return "\n".join(body_lines(fragments))


class ScriptRenderer(Renderer):
    """独立可运行脚本：按需 import + 四层 with"""

    format = "script"

    def render(self, fragments: list[Fragment], header: RecordingHeader) -> str:
        lines = [
            "# Auto-generated by recordgen",
            "",
            *import_lines(fragments),
            "",
            *self._nested_body(fragments, header, ""),
        ]
        return "\n".join(lines) + "\n"


class TestRenderer(Renderer):
    """pytest 测试文件：固定的 import 全集 + 测试类 + 测试方法"""

    __test__ = False  # 避免被 pytest 当作测试类收集

    format = "test"

    HEADER = [
        "# =============================================================================",
        "# Auto-generated by recordgen",
        "# Source: Playwright JSONL recording",
        "# =============================================================================",
        "",
        '"""Auto-generated Playwright test."""',
        "",
        "import re",
        "",
        "import pytest",
        "from playwright.sync_api import Page, expect, sync_playwright",
        "",
        "",
        "class TestGenerated:",
        f"{INDENT}def test_recorded_test(self):",
        f'{INDENT * 2}"""{TEST_TITLE}"""',
    ]

    def render(self, fragments: list[Fragment], header: RecordingHeader) -> str:
        lines = [
            *self.HEADER,
            *self._nested_body(fragments, header, INDENT * 2),
        ]
        return "\n".join(lines) + "\n"


RENDERERS: dict[str, Renderer] = {
    r.format: r for r in (BodyRenderer(), ScriptRenderer(), TestRenderer())
}


def get_renderer(fmt: str) -> Renderer:
    try:
        return RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown output format '{fmt}'. Expected one of: {', '.join(RENDERERS)}") from None
