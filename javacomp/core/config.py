from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from functools import lru_cache


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _str_from_env(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True, slots=True)
class Settings:
    scratch_root: str = field(default_factory=tempfile.gettempdir)
    compiler_command: str = "javac"
    runtime_command: str = "java"
    compile_timeout_ms: int = 10_000
    run_timeout_ms: int = 10_000
    max_output_bytes: int = 1_000_000  # cap per stream after each phase
    default_class_name: str = "Main"
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            scratch_root=_str_from_env("JAVACOMP_SCRATCH_ROOT", tempfile.gettempdir()),
            compiler_command=_str_from_env("JAVAC_COMMAND", "javac"),
            runtime_command=_str_from_env("JAVA_COMMAND", "java"),
            compile_timeout_ms=_int_from_env("COMPILE_TIMEOUT_MS", 10_000),
            run_timeout_ms=_int_from_env("RUN_TIMEOUT_MS", 10_000),
            max_output_bytes=_int_from_env("MAX_OUTPUT_BYTES", 1_000_000),
            default_class_name=_str_from_env("DEFAULT_CLASS_NAME", "Main"),
            log_level=_str_from_env("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
