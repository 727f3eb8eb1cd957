"""Loading a TOGAF vault directory into documents."""

from __future__ import annotations

import logging
from pathlib import Path

from archiexport.parsing import Document

logger = logging.getLogger(__name__)


def _hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts[:-1])


def load_vault(path: str | Path) -> list[Document]:
    """Read every ``*.md`` under *path* in sorted order, skipping dot-directories.

    Document names are POSIX paths relative to the vault root. A single
    Markdown file is accepted as a one-document vault.
    """
    root = Path(path)
    if root.is_file():
        return [Document(name=root.name, content=root.read_text(encoding="utf-8"))]
    if not root.is_dir():
        raise FileNotFoundError(f"Vault not found: {root}")

    documents = []
    for md_file in sorted(root.rglob("*.md")):
        if _hidden(md_file, root) or not md_file.is_file():
            continue
        name = md_file.relative_to(root).as_posix()
        documents.append(Document(name=name, content=md_file.read_text(encoding="utf-8")))
    logger.debug("loaded %d documents from %s", len(documents), root)
    return documents
