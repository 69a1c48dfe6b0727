from typing import Optional

from fastapi import APIRouter, Body, Depends

from pdf_watermark.core.config import get_settings
from pdf_watermark.core.errors import DocumentProcessingFailure, MissingInput, WatermarkServiceError
from pdf_watermark.core.logging import configure_logging
from pdf_watermark.models import WatermarkRequest, WatermarkResponse, resolve_options
from pdf_watermark.services.font_loader import FontProvider, get_font_provider
from pdf_watermark.services.pdf_service import PDFService

router = APIRouter(tags=["PDF Watermark"])

logger = configure_logging(__name__)
settings = get_settings()
pdf_service = PDFService()


@router.post(
    "/addWatermark",
    response_model=WatermarkResponse,
    summary="Stamp a two-line text watermark on every page of a PDF",
)
def add_watermark(
    payload: Optional[WatermarkRequest] = Body(default=None),
    fonts: FontProvider = Depends(get_font_provider),
) -> WatermarkResponse:
    if payload is None or not payload.pdfBase64:
        raise MissingInput("PDF data (pdfBase64) is required.")

    font = fonts.ensure_font_loaded()

    line1, line2 = payload.resolve_lines(settings.default_line1)
    options = resolve_options(payload.watermarkOptions)

    try:
        watermarked = pdf_service.add_text_watermark_base64(
            payload.pdfBase64,
            line1=line1,
            line2=line2,
            font=font,
            options=options,
        )
    except WatermarkServiceError:
        raise
    except Exception as exc:
        logger.exception("Error generating watermarked PDF")
        raise DocumentProcessingFailure(str(exc)) from exc

    return WatermarkResponse(success=True, watermarkedPdfBase64=watermarked)
