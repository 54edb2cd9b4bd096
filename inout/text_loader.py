from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from docx import Document

TEXT_SUFFIXES = (".txt", ".md")


@dataclass(frozen=True, slots=True)
class TextFileLoader():
    """
    Loads a plain UTF-8 text file verbatim
    """

    encoding: str = "utf-8"

    def load_text(self, path: str | Path) -> str:
        source = Path(path)
        _validate_path(source, TEXT_SUFFIXES)
        return source.read_text(encoding=self.encoding)


@dataclass(frozen=True, slots=True)
class DocxTextLoader():
    """
    Loads the body text of a .docx file, one line per paragraph
    """

    keep_empty_paragraphs: bool = True

    def load_paragraphs(self, docx_path: str | Path) -> list[str]:
        """
        Read a .docx and return its paragraph strings in document order.

        Parameters
        ----------
        docx_path:
            Path (or string path) to a .docx file.

        Returns
        ----------
        list[str]
            Paragraph texts, unstripped, optionally excluding empties
        """
        path = Path(docx_path)
        _validate_path(path, (".docx",))

        doc = Document(str(path))
        paragraphs = [p.text for p in doc.paragraphs]
        if not self.keep_empty_paragraphs:
            paragraphs = [p for p in paragraphs if p.strip()]
        return paragraphs

    def load_text(self, path: str | Path) -> str:
        return "\n".join(self.load_paragraphs(path))


def _validate_path(path: Path, suffixes: tuple[str, ...]) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Input path is not a file: {path}")
    if path.suffix.lower() not in suffixes:
        raise ValueError(f"Expected one of {', '.join(suffixes)}, but got: {path.name}")
