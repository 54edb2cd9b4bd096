from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from config.diff_config import DiffConfig
from config.run_config import RunConfig


@dataclass(frozen=True, slots=True)
class AppConfig:
    diff_config: DiffConfig
    run_config: RunConfig

def build_settings(environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Defaults, overridable through TEXTDIFF_* environment variables.
    """
    env = os.environ if environ is None else environ

    diff_config = DiffConfig.from_strings(
        mode=env.get("TEXTDIFF_MODE", "token"),
        max_input_chars=env.get("TEXTDIFF_MAX_INPUT_CHARS", 200_000),
        cache_size=env.get("TEXTDIFF_CACHE_SIZE", 128),
    )
    diff_config.validate()

    run_config = RunConfig.from_strings(
        author=env.get("TEXTDIFF_AUTHOR", "textdiff"),
        log_level=env.get("TEXTDIFF_LOG_LEVEL", "WARNING"),
        json_logs=env.get("TEXTDIFF_JSON_LOGS", False),
        output_folder=env.get("TEXTDIFF_OUTPUT_FOLDER", "textdiff_out"),
    )
    run_config.validate()

    return AppConfig(
        diff_config=diff_config,
        run_config=run_config,
    )
