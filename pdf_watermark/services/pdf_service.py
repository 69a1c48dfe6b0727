from __future__ import annotations

import base64
import binascii
from io import BytesIO

from pypdf import PageObject, PdfReader, PdfWriter
from reportlab.pdfgen import canvas

from pdf_watermark.core.errors import DocumentProcessingFailure
from pdf_watermark.core.logging import configure_logging
from pdf_watermark.models import WatermarkOptions
from pdf_watermark.services.font_loader import FontResource
from pdf_watermark.services.placement import place_watermark

logger = configure_logging(__name__)


def decode_pdf(pdf_base64: str) -> bytes:
    cleaned = "".join(pdf_base64.split())
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DocumentProcessingFailure(f"Invalid base64 data: {exc}") from exc


def encode_pdf(pdf_bytes: bytes) -> str:
    return base64.b64encode(pdf_bytes).decode("utf-8")


class PDFService:
    """Applies the two-line text watermark to every page of a PDF."""

    def add_text_watermark(
        self,
        pdf_bytes: bytes,
        line1: str,
        line2: str,
        font: FontResource,
        options: WatermarkOptions,
    ) -> bytes:
        reader = PdfReader(BytesIO(pdf_bytes))
        writer = PdfWriter()
        font_name = font.embed()

        for page in reader.pages:
            width = float(page.mediabox.width)
            height = float(page.mediabox.height)
            overlay = self._create_watermark_page(
                width=width,
                height=height,
                line1=line1,
                line2=line2,
                font_name=font_name,
                options=options,
            )
            writer.add_page(page).merge_page(overlay)

        logger.info("Watermarked %s page(s)", len(reader.pages))
        return self._write_writer(writer)

    def add_text_watermark_base64(
        self,
        pdf_base64: str,
        line1: str,
        line2: str,
        font: FontResource,
        options: WatermarkOptions,
    ) -> str:
        pdf_bytes = decode_pdf(pdf_base64)
        return encode_pdf(self.add_text_watermark(pdf_bytes, line1, line2, font, options))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _write_writer(writer: PdfWriter) -> bytes:
        buffer = BytesIO()
        writer.write(buffer)
        return buffer.getvalue()

    @staticmethod
    def _create_watermark_page(
        width: float,
        height: float,
        line1: str,
        line2: str,
        font_name: str,
        options: WatermarkOptions,
    ) -> PageObject:
        packet = BytesIO()
        c = canvas.Canvas(packet, pagesize=(width, height))
        place_watermark(c, width, height, line1, line2, font_name, options)
        c.save()
        packet.seek(0)
        return PdfReader(packet).pages[0]
