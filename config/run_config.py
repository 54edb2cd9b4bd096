from __future__ import annotations
from dataclasses import dataclass

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

@dataclass(frozen=True, slots=True)
class RunConfig:
    author: str
    log_level: str = "WARNING"
    json_logs: bool = False
    output_folder: str = "textdiff_out"

    def validate(self) -> None:
        if not isinstance(self.author, str) or not self.author.strip():
            raise ValueError("RunConfig.author must be a non-empty string.")

        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"RunConfig.log_level must be one of {', '.join(sorted(_LOG_LEVELS))}.")

        if not isinstance(self.json_logs, bool):
            raise ValueError("RunConfig.json_logs must be a boolean.")

        if not isinstance(self.output_folder, str) or not self.output_folder.strip():
            raise ValueError("RunConfig.output_folder must be a non-empty string.")


    @staticmethod
    def from_strings(
        author: str,
        log_level: str = "WARNING",
        json_logs: bool | str = False,
        output_folder: str = "textdiff_out",
    ) -> "RunConfig":
        def _to_bool(v: bool | str) -> bool:
            if isinstance(v, bool):
                return v
            if isinstance(v, str):
                s = v.strip().lower()
                if s in {"1", "true", "t", "yes", "y", "on"}:
                    return True
                if s in {"0", "false", "f", "no", "n", "off"}:
                    return False
            raise ValueError(f"Expected a boolean or boolean-string, got {v!r}")

        cfg = RunConfig(
            author=author,
            log_level=(log_level or "").strip().upper(),
            json_logs=_to_bool(json_logs),
            output_folder=output_folder,
        )
        cfg.validate()
        return cfg
