import warnings
from io import BytesIO

import pytest
from pypdf import PdfReader
from reportlab.lib.pagesizes import A4, landscape, letter

from conftest import make_pdf
from pdf_watermark.core.errors import DocumentProcessingFailure
from pdf_watermark.models import WatermarkOptions
from pdf_watermark.services.pdf_service import PDFService, decode_pdf, encode_pdf


@pytest.fixture
def service():
    return PDFService()


def _fill_alphas(page):
    states = page["/Resources"].get_object().get("/ExtGState", {})
    alphas = []
    for state in states.values():
        state = state.get_object()
        if "/ca" in state:
            alphas.append(float(state["/ca"]))
    return alphas


def test_keeps_page_count_and_sizes(service, font_provider):
    sizes = [A4, letter, landscape(A4)]
    source = make_pdf(sizes)

    output = service.add_text_watermark(
        source, "CONFIDENTIAL", "Jane Doe", font_provider.ensure_font_loaded(), WatermarkOptions()
    )

    reader = PdfReader(BytesIO(output))
    assert len(reader.pages) == 3
    for page, (width, height) in zip(reader.pages, sizes):
        assert float(page.mediabox.width) == pytest.approx(width)
        assert float(page.mediabox.height) == pytest.approx(height)


def test_overlay_is_merged_onto_writer_pages(service, font_provider):
    with warnings.catch_warnings():
        warnings.filterwarnings("error", message=".*not assigned to a writer.*")
        output = service.add_text_watermark(
            make_pdf([A4, letter]), "CONFIDENTIAL", "Jane Doe", font_provider.ensure_font_loaded(), WatermarkOptions()
        )

    reader = PdfReader(BytesIO(output))
    assert len(reader.pages) == 2
    assert all(_fill_alphas(page) for page in reader.pages)


def test_overlay_uses_requested_opacity(service, font_provider):
    options = WatermarkOptions(opacity=0.35)
    output = service.add_text_watermark(
        make_pdf(), "CONFIDENTIAL", " ", font_provider.ensure_font_loaded(), options
    )

    page = PdfReader(BytesIO(output)).pages[0]
    assert any(alpha == pytest.approx(0.35) for alpha in _fill_alphas(page))


def test_base64_round_trip_through_service(service, font_provider, pdf_base64):
    encoded = service.add_text_watermark_base64(
        pdf_base64, "CONFIDENTIAL", "Jane Doe", font_provider.ensure_font_loaded(), WatermarkOptions()
    )
    assert len(PdfReader(BytesIO(decode_pdf(encoded))).pages) == 3


def test_decode_accepts_wrapped_base64(pdf_bytes):
    encoded = encode_pdf(pdf_bytes)
    wrapped = "\n".join(encoded[i:i + 76] for i in range(0, len(encoded), 76))
    assert decode_pdf(wrapped) == pdf_bytes


def test_decode_rejects_invalid_base64():
    with pytest.raises(DocumentProcessingFailure) as excinfo:
        decode_pdf("this is *not* base64!")
    assert excinfo.value.status_code == 500
    assert excinfo.value.details.startswith("Invalid base64 data")


def test_non_pdf_bytes_fail_to_parse(service, font_provider):
    with pytest.raises(Exception):
        service.add_text_watermark(
            b"plain text, not a document", "A", "B", font_provider.ensure_font_loaded(), WatermarkOptions()
        )
