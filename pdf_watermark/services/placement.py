from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from reportlab.lib.colors import Color
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from pdf_watermark.models import WatermarkOptions

# Second line anchor, relative to the first line's unrotated origin.
LINE2_OFFSET: Tuple[float, float] = (-20, -30)
WATERMARK_GREY = Color(0.5, 0.5, 0.5)

Point = Tuple[float, float]


@dataclass(frozen=True)
class PlacementResult:
    line1_origin: Point
    line2_origin: Point
    rotation: float


def compute_placement(
    width: float,
    height: float,
    line1: str,
    font_name: str,
    options: WatermarkOptions,
) -> PlacementResult:
    """Work out where both watermark lines start on a page.

    The first line's box is centred on the page before rotation, with its
    height taken to be the font size. The renderer rotates around the draw
    origin, so strongly rotated text sits a little off the true centre.
    The second line hangs off the first line's origin and is not centred
    on its own.
    """
    line1_width = pdfmetrics.stringWidth(line1, font_name, options.font_size)
    line1_height = options.font_size

    center_x = width / 2
    center_y = height / 2

    x1 = center_x - line1_width / 2
    y1 = center_y - line1_height / 2

    dx, dy = LINE2_OFFSET
    return PlacementResult(
        line1_origin=(x1, y1),
        line2_origin=(x1 + dx, y1 + dy),
        rotation=options.rotate,
    )


def _draw_line(
    canvas_: canvas.Canvas,
    text: str,
    origin: Point,
    font_name: str,
    size: float,
    opacity: float,
    rotation: float,
) -> None:
    canvas_.saveState()
    canvas_.setFillColor(WATERMARK_GREY)
    canvas_.setFillAlpha(opacity)
    canvas_.setFont(font_name, size)
    canvas_.translate(*origin)
    canvas_.rotate(rotation)
    canvas_.drawString(0, 0, text)
    canvas_.restoreState()


def place_watermark(
    canvas_: canvas.Canvas,
    width: float,
    height: float,
    line1: str,
    line2: str,
    font_name: str,
    options: WatermarkOptions,
) -> PlacementResult:
    placement = compute_placement(width, height, line1, font_name, options)

    _draw_line(
        canvas_,
        line1,
        placement.line1_origin,
        font_name,
        options.font_size,
        options.opacity,
        placement.rotation,
    )
    _draw_line(
        canvas_,
        line2,
        placement.line2_origin,
        font_name,
        options.subtitle_font_size,
        options.opacity,
        placement.rotation,
    )
    return placement
