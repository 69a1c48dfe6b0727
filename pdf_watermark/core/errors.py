from __future__ import annotations

from typing import Optional

from fastapi import status


class WatermarkServiceError(Exception):
    """Base error carrying the HTTP status and the client-visible message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        payload: dict = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class MissingInput(WatermarkServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class FontUnavailable(WatermarkServiceError):
    pass


class DocumentProcessingFailure(WatermarkServiceError):
    DEFAULT_MESSAGE = "Failed to generate watermarked PDF"

    def __init__(self, details: str, message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(message, details=details)


class PayloadTooLarge(WatermarkServiceError):
    status_code = 413
