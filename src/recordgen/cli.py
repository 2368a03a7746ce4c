from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

import typer
from dotenv import load_dotenv

from recordgen.codegen import generate
from recordgen.config import load_settings
from recordgen.errors import CodegenError
from recordgen.models import OUTPUT_FORMATS
from recordgen.recording import JsonlRecordingParser
from recordgen.utils import module_stem, preview_json, write_text

app = typer.Typer(no_args_is_help=True, add_completion=False, rich_markup_mode="markdown")


def _default_out_path(output_dir: Path, recording: Path | None, fmt: str) -> Path:
    stem = module_stem(recording.stem if recording else "recording")
    if fmt == "test":
        return output_dir / f"test_{stem}.py"
    return output_dir / f"{stem}.py"


@app.command("generate")
def generate_cmd(
    recording: Path | None = typer.Argument(None, exists=True, dir_okay=False, help="JSONL 录制文件（省略时从 stdin 读取）"),
    fmt: str | None = typer.Option(None, "--format", "-f", help="输出形态：test（默认）/ script / body"),
    out: Path | None = typer.Option(None, "--out", "-o", help="写入文件而不是输出到 stdout"),
    save: bool = typer.Option(False, "--save", help="未指定 --out 时写入 RECORDGEN_OUTPUT_DIR（默认 ./generated）"),
) -> None:
    """
    代码生成：把 `playwright codegen --target=jsonl` 的录制转换为 Playwright Python 代码。

    **输出形态**
    - test：pytest 测试文件（默认）
    - script：独立可运行脚本
    - body：只有动作代码，便于粘贴

    **示例**

        npx playwright codegen --target=jsonl -o recording.jsonl https://example.com
        recordgen generate recording.jsonl
        recordgen generate recording.jsonl --format script --out my_script.py
        cat recording.jsonl | recordgen generate --format body
    """
    load_dotenv()
    settings = load_settings()

    fmt = (fmt or settings.default_format).lower()
    if fmt not in OUTPUT_FORMATS:
        typer.secho(f"❌ 不支持的输出形态: {fmt}（可选: {', '.join(OUTPUT_FORMATS)}）", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    text = recording.read_text(encoding="utf-8") if recording else sys.stdin.read()

    # 生成失败时打印错误详情并以状态码 1 退出
    result = generate(text, fmt, exit_on_error=True)

    out_path = out
    if out_path is None and save:
        out_path = _default_out_path(settings.output_dir, recording, fmt)

    if out_path is None:
        typer.echo(result, nl=not result.endswith("\n"))
        return

    write_text(out_path, result)
    typer.secho(f"已写入: {out_path}", fg=typer.colors.GREEN, err=True)


@app.command()
def inspect(
    recording: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSONL 录制文件"),
) -> None:
    """
    查看录制概要：浏览器、启动参数、上下文参数、动作与信号统计。

    **示例**

        recordgen inspect recording.jsonl
    """
    load_dotenv()

    try:
        parsed = JsonlRecordingParser().load(recording)
    except CodegenError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1) from e

    header = parsed.header
    typer.echo(f"- 浏览器: {header.browser_name}")
    typer.echo(f"- headless: {header.launch_options.headless is not False}")
    typer.echo(f"- 上下文参数: {preview_json(header.context_options, limit=120)}")
    typer.echo(f"- 动作: {len(parsed.actions)} 个")

    counts = Counter(a.name for a in parsed.actions)
    for name, count in sorted(counts.items()):
        typer.echo(f"  - {name}: {count}")

    signals = Counter(s.name for a in parsed.actions for s in a.signals)
    if signals:
        typer.echo("- 信号:")
        for name, count in sorted(signals.items()):
            typer.echo(f"  - {name}: {count}")


if __name__ == "__main__":
    app()
