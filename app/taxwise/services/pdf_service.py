"""
PDF merging service using pypdf.

Concatenates uploaded documents, in order, into a single PDF on disk.
"""

import io
import logging
import uuid
from pathlib import Path
from typing import Sequence

from pypdf import PdfReader, PdfWriter

from ..models import MergedDocument

logger = logging.getLogger(__name__)


class PDFMergeError(Exception):
    """Raised when PDF merging fails."""

    pass


class PDFMergerService:
    """
    Service for PDF merge operations.

    Each merge produces ``merged-<uuid4>.pdf`` in the requested directory.
    """

    def __init__(self, filename_prefix: str = "merged-"):
        """
        Initialize the merger.

        Args:
            filename_prefix: Prefix of generated output filenames.
        """
        self.filename_prefix = filename_prefix

    def merge(
        self, paths: Sequence[Path | str], output_dir: Path | str
    ) -> MergedDocument:
        """
        Append each input PDF, in order, into one output document.

        Args:
            paths: Input files in the order their pages should appear.
            output_dir: Directory that receives the merged file.

        Returns:
            MergedDocument with the bytes read back from disk.

        Raises:
            PDFMergeError: If there is nothing to merge, an input is not a
                readable PDF, or the output cannot be written.
        """
        if not paths:
            raise PDFMergeError("No documents to merge")

        unique_id = str(uuid.uuid4())
        filename = f"{self.filename_prefix}{unique_id}.pdf"
        output_path = Path(output_dir) / filename

        writer = PdfWriter()
        try:
            for path in paths:
                writer.append(str(path))
            page_count = len(writer.pages)
            with open(output_path, "wb") as fh:
                writer.write(fh)
            content = output_path.read_bytes()
        except Exception as e:
            logger.exception("PDF merge failed for %s", filename)
            # No partial output survives a failed merge
            output_path.unlink(missing_ok=True)
            raise PDFMergeError(f"PDF merge failed: {e}") from e
        finally:
            writer.close()

        logger.info(
            "Merged %d document(s) into %s (%d pages, %d bytes)",
            len(paths),
            filename,
            page_count,
            len(content),
        )
        return MergedDocument(
            unique_id=unique_id,
            filename=filename,
            path=output_path,
            content=content,
            page_count=page_count,
        )

    def get_page_count(self, content: bytes) -> int:
        """
        Get the total number of pages in a PDF.

        Raises:
            PDFMergeError: If the content is not a readable PDF.
        """
        try:
            return len(PdfReader(io.BytesIO(content)).pages)
        except Exception as e:
            logger.error("Could not get page count: %s", e)
            raise PDFMergeError(f"Could not get page count: {e}") from e


# Singleton instance for convenience
_pdf_merger: PDFMergerService | None = None


def get_pdf_merger() -> PDFMergerService:
    """Get or create the PDF merger singleton."""
    global _pdf_merger
    if _pdf_merger is None:
        _pdf_merger = PDFMergerService()
    return _pdf_merger
