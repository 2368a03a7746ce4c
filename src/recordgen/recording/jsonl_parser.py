from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from recordgen.errors import EmptyInputError, HeaderOnlyError, MalformedRecordError
from recordgen.models import ActionEvent, ParsedRecording, RecordingHeader
from recordgen.utils import get_logger

logger = get_logger("Parser")


class JsonlRecordingParser:
    """
    把 `playwright codegen --target=jsonl` 的录制结果解析为 ParsedRecording。

    - 第 0 行是 header（浏览器/启动参数），其余每行一个动作，顺序即录制顺序
    - 空白行忽略；坏行直接报错并带上行号，不会跳过
    """

    def load(self, path: Path) -> ParsedRecording:
        return self.parse(path.read_text(encoding="utf-8"))

    def parse(self, text: str) -> ParsedRecording:
        lines = [(no, line) for no, line in enumerate(text.splitlines(), start=1) if line.strip()]
        if not lines:
            raise EmptyInputError()

        header_no, header_line = lines[0]
        header_obj = _decode_line(header_no, header_line)
        if len(lines) == 1:
            raise HeaderOnlyError(header_obj)

        header = _validate(RecordingHeader, header_no, header_obj)
        actions = [
            _validate(ActionEvent, no, _decode_line(no, line))
            for no, line in lines[1:]
        ]
        logger.debug(f"解析完成：browser={header.browser_name}, actions={len(actions)}")
        return ParsedRecording(header=header, actions=actions)


def parse_recording(text: str) -> ParsedRecording:
    return JsonlRecordingParser().parse(text)


def _decode_line(line_no: int, line: str) -> dict[str, Any]:
    try:
        obj = json.loads(line)
    except json.JSONDecodeError as e:
        raise MalformedRecordError(line_no, f"invalid JSON ({e.msg})") from e
    if not isinstance(obj, dict):
        raise MalformedRecordError(line_no, f"expected a JSON object, got {type(obj).__name__}")
    return obj


def _validate(model: type[Any], line_no: int, obj: dict[str, Any]) -> Any:
    try:
        return model.model_validate(obj)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise MalformedRecordError(line_no, problems, obj) from e
