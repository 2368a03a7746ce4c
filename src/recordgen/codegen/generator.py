"""
JSONL 录制 → Playwright Python 代码

    from recordgen.codegen import generate
    generate(jsonl_text, "script")

流程：解析 → 每个动作（定位 → 翻译 → 信号包装）→ 按 format 渲染。
任何不认识的动作或信号都会立即中止，不会返回部分结果。
"""
from __future__ import annotations

import sys
from pathlib import Path

from recordgen.codegen.actions import page_symbol, translate_action
from recordgen.codegen.fragment import Fragment
from recordgen.codegen.renderers import get_renderer
from recordgen.codegen.signals import wrap_signals
from recordgen.errors import CodegenError
from recordgen.models import ActionEvent
from recordgen.recording.jsonl_parser import parse_recording
from recordgen.utils import get_logger

logger = get_logger("Codegen")

DEFAULT_FORMAT = "test"

_RULE = "=" * 70


def action_to_fragment(event: ActionEvent) -> Fragment:
    fragment = translate_action(event)
    return wrap_signals(fragment, event, page_symbol(event))


def generate(text: str, fmt: str = DEFAULT_FORMAT, *, exit_on_error: bool = False) -> str:
    """
    把 JSONL 文本转换为 Playwright Python 代码。

    exit_on_error=False 时抛出 CodegenError（库/测试使用）；
    为 True 时把错误打印到 stderr 并以状态码 1 退出进程（CLI 使用）。
    """
    renderer = get_renderer(fmt)
    try:
        recording = parse_recording(text)
        fragments: list[Fragment] = []
        for idx, event in enumerate(recording.actions, start=1):
            logger.debug(f"[{idx}] {event.name}")
            fragments.append(action_to_fragment(event))
    except CodegenError as e:
        if exit_on_error:
            _die(e)
        raise

    logger.debug(f"生成完成：format={renderer.format}, actions={len(fragments)}")
    return renderer.render(fragments, recording.header)


def generate_file(path: Path, fmt: str = DEFAULT_FORMAT, *, exit_on_error: bool = False) -> str:
    return generate(path.read_text(encoding="utf-8"), fmt, exit_on_error=exit_on_error)


def _die(error: CodegenError) -> None:
    print("", file=sys.stderr)
    print(_RULE, file=sys.stderr)
    print("CODEGEN FATAL ERROR", file=sys.stderr)
    print(_RULE, file=sys.stderr)
    print("", file=sys.stderr)
    print(error.detail, file=sys.stderr)
    if error.record:
        print("", file=sys.stderr)
        print("Record data:", file=sys.stderr)
        print(repr(error.record), file=sys.stderr)
    print(_RULE, file=sys.stderr)
    sys.exit(1)
