from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WatermarkOptions(BaseModel):
    """Resolved drawing style for both watermark lines."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    font_size: float = Field(65, alias="size", description="Font size of the first line.")
    opacity: float = Field(0.2, ge=0, le=1, description="Fill opacity between 0 and 1.")
    rotate: float = Field(-45, description="Rotation in degrees, negative is clockwise.")
    subtitle_font_size: float = Field(40, alias="sizesubtitle", description="Font size of the second line.")


class WatermarkOptionsOverride(BaseModel):
    """Caller-supplied style; any subset of fields may be present."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    font_size: Optional[float] = Field(default=None, alias="size")
    opacity: Optional[float] = Field(default=None, ge=0, le=1)
    rotate: Optional[float] = None
    subtitle_font_size: Optional[float] = Field(default=None, alias="sizesubtitle")

    def merged_over(self, defaults: WatermarkOptions) -> WatermarkOptions:
        updates = {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }
        return defaults.model_copy(update=updates)


def resolve_options(override: Optional[WatermarkOptionsOverride]) -> WatermarkOptions:
    defaults = WatermarkOptions()
    if override is None:
        return defaults
    return override.merged_over(defaults)


class WatermarkRequest(BaseModel):
    pdfBase64: Optional[str] = Field(default=None, description="Source PDF, base64 encoded.")
    firstName: Optional[str] = Field(default=None, description="First half of the second line.")
    lastName: Optional[str] = Field(default=None, description="Second half of the second line.")
    watermarkLine1: Optional[str] = Field(default=None, description="Main watermark text.")
    watermarkOptions: Optional[WatermarkOptionsOverride] = None

    def resolve_lines(self, default_line1: str = "CONFIDENTIAL") -> tuple[str, str]:
        line1 = self.watermarkLine1 or default_line1
        line2 = f"{self.firstName or ''} {self.lastName or ''}"
        return line1, line2


class WatermarkResponse(BaseModel):
    success: bool = True
    watermarkedPdfBase64: str
