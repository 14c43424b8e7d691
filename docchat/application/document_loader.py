"""
Document loading using LangChain document loaders.

Converts the configured source document into LangChain Documents with
positional metadata (source path, page for PDFs).

Dependencies: langchain_community.document_loaders, pypdf
System role: Source text collaborator for index construction
"""

import logging
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader, TextLoader
from langchain_core.documents import Document

from docchat.core.exceptions import ParsingError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".md"}
SUPPORTED_SUFFIXES = {".pdf"} | TEXT_SUFFIXES


def load_document(file_path: str | Path) -> list[Document]:
    """
    Load a document into LangChain Documents.

    PDFs produce one Document per page; text files produce a single Document.

    Args:
        file_path: Path to a .pdf, .txt or .md file

    Returns:
        list[Document]: Documents with content and metadata

    Raises:
        ParsingError: When the file is missing, unsupported or has no text
    """
    path = Path(file_path)
    if not path.exists():
        raise ParsingError(f"File not found: {path}", str(path))

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ParsingError(
            f"Unsupported file format: {path.suffix}. Supported: {', '.join(sorted(SUPPORTED_SUFFIXES))}",
            str(path),
        )

    try:
        if suffix == ".pdf":
            loader = PyPDFLoader(str(path))
        else:
            loader = TextLoader(str(path), encoding="utf-8")
        documents = loader.load()
    except Exception as e:
        raise ParsingError(f"Failed to load document: {e}", str(path)) from e

    if not any(doc.page_content.strip() for doc in documents):
        raise ParsingError("Document contains no extractable text", str(path))

    logger.info("Loaded document", extra={"path": str(path), "pages": len(documents)})
    return documents
