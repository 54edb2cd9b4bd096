from inout.text_loader import DocxTextLoader, TextFileLoader
from services.diff_service import DiffService
from services.document_input_service import DocumentInputService
from services.docx_output_service import DocxOutputService

# Standard utilities
from pathlib import Path
from app.settings import AppConfig

def _resolve_path(p: str | Path, project_root: Path) -> Path:
    """
    Resolve a path string to an absolute path
    - Expands ~
    - If relative, resolve it against the working directory root.
    """
    pp = Path(p).expanduser()
    return pp if pp.is_absolute() else (project_root / pp).resolve()


def build_container(app_cfg: AppConfig, project_root: Path | None = None):
    """
    Dependency container builder
    Responsibility
    - Takes a fully loaded config object
    - Constructs all the shared services exactly once
    - Returns a dictionary of ready-to-use services
    """
    root = project_root if project_root is not None else Path.cwd()

    # ----- Input layer -----
    document_input_service = DocumentInputService(
        text_loader=TextFileLoader(),
        docx_loader=DocxTextLoader(keep_empty_paragraphs=True),
    )

    # ----- Diff -----
    diff_service = DiffService(config=app_cfg.diff_config)

    # ----- Output layer -----
    docx_out_service = DocxOutputService(
        author=app_cfg.run_config.author,
        output_folder=_resolve_path(app_cfg.run_config.output_folder, root),
    )

    return {
        "project_root": root,
        "document_input_service": document_input_service,
        "diff_service": diff_service,
        "docx_out_service": docx_out_service,
    }
