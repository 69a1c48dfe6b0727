# pdf_watermark/main.py
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pdf_watermark.api import routers
from pdf_watermark.core.config import get_settings
from pdf_watermark.core.errors import FontUnavailable, MissingInput, WatermarkServiceError
from pdf_watermark.core.logging import configure_logging
from pdf_watermark.core.middleware import BodySizeLimitMiddleware
from pdf_watermark.services.font_loader import FontProvider, get_font_provider

# === Settings and logging ===
settings = get_settings()
logger = configure_logging()


@asynccontextmanager
async def lifespan(app_: FastAPI):
    # Warm the font cache on cold start; requests retry if this fails.
    provider_factory = app_.dependency_overrides.get(get_font_provider, get_font_provider)
    try:
        provider_factory().ensure_font_loaded()
    except FontUnavailable as exc:
        logger.warning("Font not available at startup: %s", exc.message)
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

# === Body ceiling ===
app.add_middleware(BodySizeLimitMiddleware, settings=settings)

# === CORS ===
# Added last so it wraps the body ceiling and 413 replies carry CORS headers.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Error mapping ===
@app.exception_handler(WatermarkServiceError)
async def handle_service_error(_: Request, exc: WatermarkServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.message, exc.details or "")
    else:
        logger.info("Rejected request: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    # the body as a whole is absent or not an object, so there is no pdfBase64
    if any(tuple(error.get("loc", ())) == ("body",) for error in errors):
        return await handle_service_error(request, MissingInput("PDF data (pdfBase64) is required."))
    logger.info("Invalid request body: %s", errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body.", "details": str(errors)},
    )


# === Routers ===
for router in routers:
    app.include_router(router)


# === Basic endpoints ===
@app.get("/")
async def root() -> dict:
    logger.debug("Root endpoint accessed")
    return {"message": "PDF Watermark API", "endpoints": ["POST /addWatermark", "GET /health"]}


@app.get("/health")
async def health_check(fonts: FontProvider = Depends(get_font_provider)) -> dict:
    logger.debug("Health check invoked")
    return {
        "status": "ok",
        "message": "PDF Watermark API is running",
        "font_loaded": fonts.is_loaded,
    }
