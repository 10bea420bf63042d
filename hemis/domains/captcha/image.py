# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Captcha image rendering with Pillow."""

import base64
import io
import secrets

from PIL import Image, ImageDraw, ImageFont

BACKGROUND = (255, 255, 255)
LINE_COLOR = (220, 220, 220)
TEXT_COLOR = (50, 50, 50)
DOT_COLOR = (180, 180, 180)
FONT_SIZE = 36
NOISE_LINES = 8
NOISE_DOTS = 50


def render_captcha(text: str, width: int = 200, height: int = 60) -> str:
    """Render text on a noisy PNG and return it as a data URI.

    Args:
        text: Characters to draw.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        ``data:image/png;base64,...`` string.
    """
    rng = secrets.SystemRandom()
    image = Image.new("RGB", (width, height), BACKGROUND)
    draw = ImageDraw.Draw(image)

    for _ in range(NOISE_LINES):
        start = (rng.randrange(width), rng.randrange(height))
        end = (rng.randrange(width), rng.randrange(height))
        draw.line([start, end], fill=LINE_COLOR, width=1)

    font = ImageFont.load_default(size=FONT_SIZE)
    text_width = draw.textlength(text, font=font)
    x = (width - text_width) / 2
    top = (height - FONT_SIZE) / 2
    for char in text:
        offset = rng.randint(-5, 5)
        draw.text((x, top + offset), char, font=font, fill=TEXT_COLOR)
        x += draw.textlength(char, font=font)

    for _ in range(NOISE_DOTS):
        nx, ny = rng.randrange(width), rng.randrange(height)
        draw.rectangle([nx, ny, nx + 1, ny + 1], fill=DOT_COLOR)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
