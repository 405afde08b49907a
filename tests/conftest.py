"""Pytest configuration and fixtures."""

import io
import json
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfWriter

from app.taxwise.dependencies import require_ai_service, require_storage
from app.taxwise.main import app
from app.taxwise.services.storage import TempStorage

COMPARISON_DATA = {
    "taxComparison": {
        "oldRegime": {"taxPayable": {"label": "Tax Payable", "amount": 112500}},
        "newRegime": {"taxPayable": {"label": "Tax Payable", "amount": 97500}},
        "comparisonSummary": {
            "regimeSavings": {"amount": 15000},
            "regimeRecommendation": {"text": "New Regime"},
        },
    }
}

CALCULATION_DATA = {"taxLiability": "97500", "effectiveTaxRate": "9.75%"}


def build_pdf(*page_sizes: tuple[float, float]) -> bytes:
    """Build a PDF with one blank page per (width, height) pair."""
    writer = PdfWriter()
    for width, height in page_sizes:
        writer.add_blank_page(width=width, height=height)
    buffer = io.BytesIO()
    writer.write(buffer)
    writer.close()
    return buffer.getvalue()


def fenced(data: Any, preamble: str = "Here is your analysis:") -> str:
    """Wrap data in the ```json block the model is asked to produce."""
    return f"{preamble}\n```json\n{json.dumps(data, indent=2)}\n```\n"


class FakeAIService:
    """Stand-in for AIService that records calls and returns canned text."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.model = "fake-model"
        self.text = text
        self.error = error
        self.documents: list[str] = []
        self.user_data: list[Any] = []

    async def analyze_document(self, pdf_base64: str, filename: str = "merged.pdf") -> str:
        self.documents.append(pdf_base64)
        if self.error:
            raise self.error
        return self.text

    async def calculate_tax(self, user_data: Any) -> str:
        self.user_data.append(user_data)
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def make_pdf():
    """Factory building PDFs from (width, height) page sizes."""
    return build_pdf


@pytest.fixture
def make_model_text():
    """Factory wrapping data in a fenced JSON block."""
    return fenced


@pytest.fixture
def comparison_data() -> dict[str, Any]:
    return COMPARISON_DATA


@pytest.fixture
def calculation_data() -> dict[str, str]:
    return CALCULATION_DATA


@pytest.fixture
def pdf_a() -> bytes:
    """Single page, 200x200 points."""
    return build_pdf((200, 200))


@pytest.fixture
def pdf_b() -> bytes:
    """Single page, 300x400 points."""
    return build_pdf((300, 400))


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


@pytest.fixture
def fake_ai() -> FakeAIService:
    return FakeAIService(text=fenced(COMPARISON_DATA))


@pytest.fixture
def storage(tmp_path) -> TempStorage:
    return TempStorage(tmp_path / "uploads")


@pytest.fixture
def client(
    fake_ai: FakeAIService, storage: TempStorage
) -> Generator[TestClient, None, None]:
    """Test client with the lifespan run and the AI model faked out."""
    app.dependency_overrides[require_ai_service] = lambda: fake_ai
    app.dependency_overrides[require_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def cold_client() -> Generator[TestClient, None, None]:
    """Test client whose lifespan never ran, so no adapter is initialized."""
    app.dependency_overrides.clear()
    yield TestClient(app)
