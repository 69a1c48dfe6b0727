from .watermark import (
    WatermarkOptions,
    WatermarkOptionsOverride,
    WatermarkRequest,
    WatermarkResponse,
    resolve_options,
)

__all__ = [
    "WatermarkOptions",
    "WatermarkOptionsOverride",
    "WatermarkRequest",
    "WatermarkResponse",
    "resolve_options",
]
