"""
Volunteer ID card rendering.

Produces a 350 px wide PNG with the volunteer's details and a QR code that
links to their public profile page.
"""

from __future__ import annotations

import io
import logging
from typing import List

import qrcode
from PIL import Image, ImageDraw, ImageFont
from qrcode.constants import ERROR_CORRECT_M

from constituency_hub.core.models.io.volunteers import VolunteerPublic

logger = logging.getLogger(__name__)

CARD_WIDTH = 350
HEADER_HEIGHT = 56
QR_SIZE = 140
PADDING = 16
LINE_HEIGHT = 20

HEADER_COLOR = (0, 106, 78)
TEXT_COLOR = (33, 33, 33)
MUTED_COLOR = (110, 110, 110)
BACKGROUND = (255, 255, 255)


def make_qr_image(data: str, size: int = QR_SIZE) -> Image.Image:
    qr = qrcode.QRCode(version=None, error_correction=ERROR_CORRECT_M, box_size=10, border=2)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white").convert("RGB")
    return img.resize((size, size))


def _wrap(text: str, draw: ImageDraw.ImageDraw, font, max_width: int) -> List[str]:
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if draw.textlength(candidate, font=font) <= max_width or not current:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def render_id_card(volunteer: VolunteerPublic) -> bytes:
    """Render the card and return PNG bytes."""
    font = ImageFont.load_default()
    scratch = ImageDraw.Draw(Image.new("RGB", (CARD_WIDTH, 10)))
    text_width = CARD_WIDTH - 2 * PADDING

    rows = [
        ("Name", volunteer.name),
        ("Volunteer ID", volunteer.volunteer_id),
        ("Thana", volunteer.thana.label.en),
        ("Ward", volunteer.ward),
    ]
    category_lines = _wrap(", ".join(c.label.en for c in volunteer.categories), scratch, font, text_width)

    body_height = (len(rows) + 1 + len(category_lines)) * LINE_HEIGHT
    height = HEADER_HEIGHT + PADDING + body_height + PADDING + QR_SIZE + PADDING + LINE_HEIGHT

    card = Image.new("RGB", (CARD_WIDTH, height), BACKGROUND)
    draw = ImageDraw.Draw(card)
    draw.rectangle([(0, 0), (CARD_WIDTH, HEADER_HEIGHT)], fill=HEADER_COLOR)
    draw.text((PADDING, 12), "VOLUNTEER ID CARD", fill=BACKGROUND, font=font)
    draw.text((PADDING, 32), f"Status: {volunteer.status}", fill=BACKGROUND, font=font)

    y = HEADER_HEIGHT + PADDING
    for label, value in rows:
        draw.text((PADDING, y), f"{label}: {value}", fill=TEXT_COLOR, font=font)
        y += LINE_HEIGHT
    draw.text((PADDING, y), "Categories:", fill=TEXT_COLOR, font=font)
    y += LINE_HEIGHT
    for line in category_lines:
        draw.text((PADDING, y), line, fill=MUTED_COLOR, font=font)
        y += LINE_HEIGHT

    y += PADDING
    card.paste(make_qr_image(volunteer.profile_url), ((CARD_WIDTH - QR_SIZE) // 2, y))
    y += QR_SIZE + 4
    draw.text((PADDING, y), "Scan to verify", fill=MUTED_COLOR, font=font)

    buffer = io.BytesIO()
    card.save(buffer, format="PNG")
    logger.debug(f"Rendered ID card for volunteer {volunteer.volunteer_id}")
    return buffer.getvalue()
