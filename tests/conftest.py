import base64
from io import BytesIO
from typing import Sequence, Tuple

import pytest
from fastapi.testclient import TestClient
from reportlab.lib.pagesizes import A4, letter
from reportlab.pdfgen import canvas

from pdf_watermark.core.config import get_settings
from pdf_watermark.main import app
from pdf_watermark.services.font_loader import FontProvider, get_font_provider


def make_pdf(page_sizes: Sequence[Tuple[float, float]] = (A4,)) -> bytes:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=page_sizes[0])
    for number, size in enumerate(page_sizes, start=1):
        c.setPageSize(size)
        c.setFont("Helvetica", 12)
        c.drawString(72, 72, f"Page {number}")
        c.showPage()
    c.save()
    return buffer.getvalue()


@pytest.fixture
def pdf_bytes() -> bytes:
    return make_pdf([A4, letter, A4])


@pytest.fixture
def pdf_base64(pdf_bytes) -> str:
    return base64.b64encode(pdf_bytes).decode("utf-8")


@pytest.fixture
def font_path():
    return get_settings().font_path


@pytest.fixture
def font_provider(font_path) -> FontProvider:
    return FontProvider(font_path)


@pytest.fixture
def client(font_provider):
    app.dependency_overrides[get_font_provider] = lambda: font_provider
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
