"""
Test suite for document loading.

Tests text loading, page-per-document PDF loading through a patched loader,
and ParsingError cases.

System role: Verification of the source text collaborator
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from langchain_core.documents import Document

from docchat.application.document_loader import load_document
from docchat.core.exceptions import ParsingError


class TestLoadDocument:
    """Test suite for load_document."""

    def test_should_load_text_file(self, tmp_path: Path) -> None:
        """Test a .txt file becomes one Document with its source."""
        # Arrange
        path = tmp_path / "colors.txt"
        path.write_text("The sky is blue.", encoding="utf-8")

        # Act
        documents = load_document(path)

        # Assert
        assert len(documents) == 1
        assert documents[0].page_content == "The sky is blue."
        assert documents[0].metadata["source"] == str(path)

    def test_should_load_pdf_pages(self, tmp_path: Path) -> None:
        """Test PDFs are routed to PyPDFLoader and keep page metadata."""
        # Arrange
        path = tmp_path / "colors.pdf"
        path.write_bytes(b"%PDF-1.4")
        pages = [
            Document(page_content="The sky is blue.", metadata={"page": 0}),
            Document(page_content="The grass is green.", metadata={"page": 1}),
        ]

        # Act
        with patch("docchat.application.document_loader.PyPDFLoader") as loader_cls:
            loader_cls.return_value = MagicMock(load=MagicMock(return_value=pages))
            documents = load_document(path)

        # Assert
        loader_cls.assert_called_once_with(str(path))
        assert [doc.metadata["page"] for doc in documents] == [0, 1]

    def test_missing_file_should_raise(self, tmp_path: Path) -> None:
        """Test a nonexistent path raises ParsingError with the path."""
        # Arrange
        path = tmp_path / "missing.pdf"

        # Act / Assert
        with pytest.raises(ParsingError) as exc_info:
            load_document(path)

        assert exc_info.value.file_path == str(path)

    def test_unsupported_suffix_should_raise(self, tmp_path: Path) -> None:
        """Test unknown file types are rejected."""
        # Arrange
        path = tmp_path / "slides.pptx"
        path.write_bytes(b"binary")

        # Act / Assert
        with pytest.raises(ParsingError, match="Unsupported file format"):
            load_document(path)

    def test_empty_text_should_raise(self, tmp_path: Path) -> None:
        """Test a document without extractable text is an error."""
        # Arrange
        path = tmp_path / "blank.md"
        path.write_text("   \n\n", encoding="utf-8")

        # Act / Assert
        with pytest.raises(ParsingError, match="no extractable text"):
            load_document(path)

    def test_loader_failure_should_be_wrapped(self, tmp_path: Path) -> None:
        """Test loader exceptions become ParsingError with the cause chained."""
        # Arrange
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"not a pdf")

        # Act
        with patch("docchat.application.document_loader.PyPDFLoader") as loader_cls:
            loader_cls.return_value.load.side_effect = ValueError("EOF marker not found")
            with pytest.raises(ParsingError) as exc_info:
                load_document(path)

        # Assert
        assert isinstance(exc_info.value.__cause__, ValueError)
