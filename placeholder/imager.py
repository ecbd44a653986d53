"""Placeholder PNG rendering."""

from __future__ import annotations

import io

from PIL import Image, ImageDraw, ImageFont

BACKGROUND_COLOR = (204, 204, 204)
SQUARE_COLOR = (187, 187, 187)
TEXT_COLOR = (85, 85, 85)
MIN_FONT_SIZE = 8


def _font_size(width: int, height: int, text: str) -> int:
    # Roughly fill the width with the caption without exceeding a fifth of the height.
    by_width = int(width * 1.6 / max(len(text), 1))
    return max(MIN_FONT_SIZE, min(by_width, height // 5))


def render_image(
    width: int,
    height: int,
    square: int | None = None,
    text: str | None = None,
) -> bytes:
    """
    Render a grey placeholder image and return it as PNG bytes.

    When ``square`` is given the background is a checkerboard of squares of
    that size. The caption defaults to ``"<width>x<height>"``.
    """

    image = Image.new("RGB", (width, height), color=BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    if square is not None:
        for row, top in enumerate(range(0, height, square)):
            for col, left in enumerate(range(0, width, square)):
                if (row + col) % 2:
                    draw.rectangle(
                        (left, top, left + square - 1, top + square - 1),
                        fill=SQUARE_COLOR,
                    )

    caption = text if text is not None else f"{width}x{height}"
    if caption:
        font = ImageFont.load_default(size=_font_size(width, height, caption))
        left, top, right, bottom = draw.textbbox((0, 0), caption, font=font)
        draw.text(
            ((width - (right - left)) / 2 - left, (height - (bottom - top)) / 2 - top),
            caption,
            fill=TEXT_COLOR,
            font=font,
        )

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
