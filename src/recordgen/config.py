from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from recordgen.models import OUTPUT_FORMATS


@dataclass(frozen=True)
class Settings:
    default_format: str
    output_dir: Path


def load_settings() -> Settings:
    default_format = os.getenv("RECORDGEN_FORMAT", "test").strip().lower()
    if default_format not in OUTPUT_FORMATS:
        # 环境变量写错时回退默认值，不影响显式传入的 --format
        default_format = "test"
    output_dir = Path(os.getenv("RECORDGEN_OUTPUT_DIR", "./generated")).resolve()
    return Settings(
        default_format=default_format,
        output_dir=output_dir,
    )
