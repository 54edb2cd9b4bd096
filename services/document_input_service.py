from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from config.logging_config import get_logger
from inout.text_loader import TEXT_SUFFIXES
from interfaces.inout import TextLoader

_log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LoadedDocument:
    source_path: Path
    source_kind: Literal["text", "docx"]
    text: str


@dataclass
class DocumentInputService:
    """
    App-facing input orchestrator.

    Keeps format-specific extraction in inout/* loaders and returns the
    plain text the diff engine compares.
    """

    text_loader: TextLoader
    docx_loader: TextLoader

    def load(self, path: str | Path) -> LoadedDocument:
        source = Path(path)
        suffix = source.suffix.lower()

        if suffix in TEXT_SUFFIXES:
            document = LoadedDocument(
                source_path=source,
                source_kind="text",
                text=self.text_loader.load_text(source),
            )
        elif suffix == ".docx":
            document = LoadedDocument(
                source_path=source,
                source_kind="docx",
                text=self.docx_loader.load_text(source),
            )
        else:
            raise ValueError(f"Unsupported input type: {source.name}")

        _log.info("document_loaded", path=str(source), kind=document.source_kind, chars=len(document.text))
        return document
