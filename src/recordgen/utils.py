from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any


def get_logger(name: str) -> logging.Logger:
    """
    获取一个配置好的 logger 实例。

    日志格式：[模块名] 消息，输出到 stderr，不会混进 stdout 上的生成代码
    默认日志级别：INFO，可通过环境变量 RECORDGEN_LOG_LEVEL 调整
    """
    logger = logging.getLogger(name)

    # 避免重复添加 handler
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
        logger.addHandler(handler)

        level_name = os.getenv("RECORDGEN_LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, level_name, logging.INFO))

    return logger


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


_NON_IDENT_RE = re.compile(r"\W")


def module_stem(name: str) -> str:
    """文件名 → 可 import 的模块名（pytest 收集要求）。"""
    stem = _NON_IDENT_RE.sub("_", name)
    if not stem or stem[0].isdigit():
        stem = "_" + stem
    return stem


def preview_json(value: Any, limit: int = 80) -> str:
    text = json.dumps(value, ensure_ascii=False, sort_keys=True)
    if len(text) > limit:
        return text[:limit] + "…"
    return text
