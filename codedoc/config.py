"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

MAX_FILE_SIZE = 100 * 1024 * 1024  # 100MB

DEFAULT_PORT = "3000"
DEFAULT_UPLOAD_PATH = "./uploads"
DEFAULT_OUTPUT_PATH = "./output"


@dataclass(frozen=True)
class Config:
    """Server settings: listening port, working directories and upload limit."""

    port: str = DEFAULT_PORT
    upload_path: str = DEFAULT_UPLOAD_PATH
    output_path: str = DEFAULT_OUTPUT_PATH
    max_file_size: int = MAX_FILE_SIZE


def _env(key: str, default: str) -> str:
    return os.environ.get(key, "") or default


def load_config() -> Config:
    """Build a Config from PORT, UPLOAD_PATH and OUTPUT_PATH, falling back to defaults."""
    return Config(
        port=_env("PORT", DEFAULT_PORT),
        upload_path=_env("UPLOAD_PATH", DEFAULT_UPLOAD_PATH),
        output_path=_env("OUTPUT_PATH", DEFAULT_OUTPUT_PATH),
        max_file_size=MAX_FILE_SIZE,
    )