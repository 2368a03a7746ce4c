from __future__ import annotations

from typing import Any


class CodegenError(Exception):
    """codegen 的硬错误：一律中止生成，不返回部分输出。"""

    def __init__(self, detail: str, record: dict[str, Any] | None = None) -> None:
        self.detail = detail
        self.record = record or {}
        super().__init__(f"Codegen error: {detail}")


class EmptyInputError(CodegenError):
    def __init__(self) -> None:
        super().__init__("Empty JSONL input. No actions recorded.")


class HeaderOnlyError(CodegenError):
    def __init__(self, header: dict[str, Any] | None = None) -> None:
        super().__init__("JSONL has header but no actions. Nothing was recorded.", header)


class MalformedRecordError(CodegenError):
    def __init__(self, line_no: int, reason: str, record: dict[str, Any] | None = None) -> None:
        self.line_no = line_no
        super().__init__(f"Malformed JSONL record on line {line_no}: {reason}", record)


class UnknownActionError(CodegenError):
    def __init__(self, action_name: str, record: dict[str, Any] | None = None) -> None:
        self.action_name = action_name
        super().__init__(f"Unknown action '{action_name}' is not implemented.", record)


class UnknownSignalError(CodegenError):
    def __init__(self, signal_name: str, record: dict[str, Any] | None = None) -> None:
        self.signal_name = signal_name
        super().__init__(f"Unknown signal '{signal_name}' is not implemented.", record)
