from __future__ import annotations

import hashlib
from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO
from pathlib import Path

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from pdf_watermark.core.config import get_settings
from pdf_watermark.core.errors import FontUnavailable
from pdf_watermark.core.logging import configure_logging

logger = configure_logging(__name__)


@dataclass(frozen=True)
class FontResource:
    data: bytes
    path: Path

    @property
    def font_name(self) -> str:
        digest = hashlib.sha1(self.data).hexdigest()[:12]
        return f"Watermark-{digest}"

    def embed(self) -> str:
        """Register the glyph program with reportlab and return the font name.

        Every canvas that draws with the returned name embeds the font
        into its output, so the watermark renders the same in any viewer.
        """
        name = self.font_name
        if name not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(TTFont(name, BytesIO(self.data)))
        return name


class FontProvider:
    """Loads one TrueType font lazily and keeps it for the life of the process.

    A failed read leaves nothing cached, so the next call starts over.
    """

    def __init__(self, font_path: Path) -> None:
        self.font_path = Path(font_path)
        self._resource: FontResource | None = None

    @property
    def is_loaded(self) -> bool:
        return self._resource is not None

    def ensure_font_loaded(self) -> FontResource:
        if self._resource is not None:
            return self._resource

        try:
            data = self.font_path.read_bytes()
        except OSError as exc:
            logger.error("Error loading font file at %s: %s", self.font_path, exc)
            raise FontUnavailable(f"Failed to load font: {exc}") from exc

        if not data:
            logger.error("Font file at %s is empty", self.font_path)
            raise FontUnavailable(f"Failed to load font: {self.font_path} is empty")

        self._resource = FontResource(data=data, path=self.font_path)
        logger.info("Font loaded from %s (%s bytes)", self.font_path, len(data))
        return self._resource

    def reset(self) -> None:
        self._resource = None


@lru_cache()
def get_font_provider() -> FontProvider:
    return FontProvider(get_settings().font_path)
