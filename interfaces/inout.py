from __future__ import annotations

from typing import Protocol
from pathlib import Path

class TextLoader(Protocol):
    def load_text(self, path: str | Path) -> str:
        ...
