"""Tests for PDF merger service."""

import base64
import io
import uuid

import pytest
from pypdf import PdfReader

from app.taxwise.services.pdf_service import (
    PDFMergeError,
    PDFMergerService,
    get_pdf_merger,
)


def page_sizes(content: bytes) -> list[tuple[float, float]]:
    reader = PdfReader(io.BytesIO(content))
    return [
        (float(page.mediabox.width), float(page.mediabox.height))
        for page in reader.pages
    ]


@pytest.fixture
def write_pdf(tmp_path):
    """Write PDF bytes into tmp_path and return the path."""

    def _write(name: str, content: bytes):
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return _write


class TestPDFMergerService:
    """Tests for PDFMergerService class."""

    def test_merge_preserves_upload_order(self, tmp_path, write_pdf, pdf_a, pdf_b):
        """Test that page 1 comes from A and page 2 from B."""
        paths = [write_pdf("a", pdf_a), write_pdf("b", pdf_b)]

        merged = PDFMergerService().merge(paths, tmp_path)

        assert merged.page_count == 2
        assert page_sizes(merged.content) == [(200, 200), (300, 400)]

    def test_merge_reversed_order(self, tmp_path, write_pdf, pdf_a, pdf_b):
        """Test that reversing the inputs reverses the pages."""
        paths = [write_pdf("b", pdf_b), write_pdf("a", pdf_a)]

        merged = PDFMergerService().merge(paths, tmp_path)

        assert page_sizes(merged.content) == [(300, 400), (200, 200)]

    def test_merge_multi_page_documents(self, tmp_path, write_pdf, make_pdf):
        """Test concatenation of multi-page inputs."""
        first = write_pdf("first", make_pdf((100, 100), (110, 110)))
        second = write_pdf("second", make_pdf((120, 120), (130, 130), (140, 140)))

        merged = PDFMergerService().merge([first, second], tmp_path)

        assert merged.page_count == 5
        assert [w for w, _ in page_sizes(merged.content)] == [100, 110, 120, 130, 140]

    def test_output_written_as_merged_uuid(self, tmp_path, write_pdf, pdf_a):
        """Test output naming and that content matches the file on disk."""
        merged = PDFMergerService().merge([write_pdf("a", pdf_a)], tmp_path)

        assert uuid.UUID(merged.unique_id).version == 4
        assert merged.filename == f"merged-{merged.unique_id}.pdf"
        assert merged.path == tmp_path / merged.filename
        assert merged.path.read_bytes() == merged.content

    def test_unique_ids_differ_between_merges(self, tmp_path, write_pdf, pdf_a):
        """Test that every merge gets a fresh identifier."""
        service = PDFMergerService()
        path = write_pdf("a", pdf_a)

        ids = {service.merge([path], tmp_path).unique_id for _ in range(5)}

        assert len(ids) == 5

    def test_as_base64_round_trips_content(self, tmp_path, write_pdf, pdf_a):
        merged = PDFMergerService().merge([write_pdf("a", pdf_a)], tmp_path)
        assert base64.b64decode(merged.as_base64()) == merged.content

    def test_merge_empty_list_raises_error(self, tmp_path):
        """Test that there must be at least one document."""
        with pytest.raises(PDFMergeError) as exc_info:
            PDFMergerService().merge([], tmp_path)
        assert "No documents" in str(exc_info.value)

    def test_merge_invalid_pdf_raises_error(
        self, tmp_path, write_pdf, pdf_a, invalid_file_bytes
    ):
        """Test that non-PDF content fails the whole merge with no output left."""
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        paths = [write_pdf("a", pdf_a), write_pdf("bad", invalid_file_bytes)]

        with pytest.raises(PDFMergeError):
            PDFMergerService().merge(paths, out_dir)

        assert list(out_dir.iterdir()) == []

    def test_merge_missing_file_raises_error(self, tmp_path):
        with pytest.raises(PDFMergeError):
            PDFMergerService().merge([tmp_path / "missing.pdf"], tmp_path)

    def test_get_page_count(self, make_pdf):
        assert PDFMergerService().get_page_count(make_pdf((1, 1), (2, 2), (3, 3))) == 3

    def test_get_page_count_invalid_raises_error(self, invalid_file_bytes):
        with pytest.raises(PDFMergeError):
            PDFMergerService().get_page_count(invalid_file_bytes)

    def test_custom_filename_prefix(self, tmp_path, write_pdf, pdf_a):
        merged = PDFMergerService(filename_prefix="combined-").merge(
            [write_pdf("a", pdf_a)], tmp_path
        )
        assert merged.filename.startswith("combined-")

    def test_singleton(self):
        assert get_pdf_merger() is get_pdf_merger()
