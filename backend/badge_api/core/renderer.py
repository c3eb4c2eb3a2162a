# badge_api/core/renderer.py
"""
Badge PNG renderer.

- Size comes from millimetres and DPI: px = (mm / 25.4) * dpi
- Layout uses a virtual ruler 500 x 800 scaled to the real canvas
- Name is split into up to 2 lines, bold, black on white
- QR (and the category under it) is drawn below the text
- Content is always drawn landscape, then rotated clockwise
"""
import logging
import math
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, ImageDraw

from .fonts import BadgeFont, load_font
from .layout import TextPlan, split_name_into_two_lines
from .qr_utils import encode_qr

logger = logging.getLogger("badge_api.renderer")

DEFAULT_DPI = 300
MIN_DPI = 72
MAX_DPI = 1200
ALLOWED_ROTATIONS = (0, 90, 180, 270)

# Virtual layout ruler (width x height)
VIRTUAL_W = 500
VIRTUAL_H = 800

TITLE_FONT = 140
SECOND_FONT = 140
LINE_GAP = 40
AFTER_TEXT_GAP = 220
QR_SIZE = 330
QR_SHRINK = 40
SINGLE_LINE_EXTRA = 30
CATEGORY_GAP = 18
CATEGORY_FONT_RATIO = 0.25
MIN_CATEGORY_FONT = 6

# Absolute pixel quantities (not scaled)
TOP_PADDING_PX = 30
BOTTOM_PADDING_PX = 30
SIDE_PADDING_PX = 0
MIN_AFTER_TEXT_GAP_PX = 40

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value, low, high):
    return max(low, min(high, value))


def mm_to_px(mm: float, dpi: float) -> int:
    return round_half_up(mm / 25.4 * dpi)


def normalize_dpi(dpi) -> float:
    """Missing, non-numeric or zero DPI becomes 300; the result is clamped."""
    try:
        value = float(dpi)
    except (TypeError, ValueError):
        value = DEFAULT_DPI
    if not math.isfinite(value) or value == 0:
        value = DEFAULT_DPI
    return clamp(value, MIN_DPI, MAX_DPI)


def normalize_rotation(rotation) -> int:
    try:
        value = float(rotation)
    except (TypeError, ValueError):
        return 0
    if value in ALLOWED_ROTATIONS:
        return int(value)
    return 0


@dataclass(frozen=True)
class BadgeGeometry:
    """Pixel placement of every element on the landscape content canvas."""

    width: int
    height: int
    scale_x: float
    scale_y: float
    uniform_scale: float
    center_x: float
    title_font_size: int
    second_font_size: int
    line1_y: float
    line2_y: float | None
    text_bottom_y: float
    after_text_gap: float
    qr_size: int
    qr_x: int | None = None
    qr_y: int | None = None
    category_font_size: int = 0
    category_gap: int = 0
    category_y: int | None = None


def compute_geometry(plan: TextPlan, dpi, mm_width: float, mm_height: float,
                     has_qr: bool, has_category: bool) -> BadgeGeometry:
    clamped_dpi = normalize_dpi(dpi)
    width = mm_to_px(mm_width, clamped_dpi)
    height = mm_to_px(mm_height, clamped_dpi)

    scale_x = width / VIRTUAL_W
    scale_y = height / VIRTUAL_H
    uniform_scale = min(scale_x, scale_y)

    inner_width = max(0, width - SIDE_PADDING_PX * 2)
    center_x = SIDE_PADDING_PX + inner_width / 2
    line_gap = LINE_GAP * scale_y
    after_text_gap = max(MIN_AFTER_TEXT_GAP_PX, AFTER_TEXT_GAP * scale_y)

    qr_render_size = round_half_up((QR_SIZE - QR_SHRINK) * uniform_scale)
    qr_size = min(qr_render_size, math.floor(inner_width))

    title_font_size = round_half_up(TITLE_FONT * uniform_scale)
    second_font_size = round_half_up(SECOND_FONT * uniform_scale)
    if has_category:
        category_font_size = max(MIN_CATEGORY_FONT, round_half_up(second_font_size * CATEGORY_FONT_RATIO))
        category_gap = round_half_up(CATEGORY_GAP * uniform_scale)
    else:
        category_font_size = 0
        category_gap = 0

    y = TOP_PADDING_PX
    line1_y = y
    line2_y = None
    if plan.line2:
        y += title_font_size + line_gap
        line2_y = y
    else:
        # A lone line gets extra breathing room
        y += title_font_size + line_gap + SINGLE_LINE_EXTRA * scale_y
    text_bottom_y = y
    y += after_text_gap

    qr_x = qr_y = category_y = None
    if has_qr:
        qr_x = round_half_up(SIDE_PADDING_PX + (inner_width - qr_size) / 2)
        reserve_below_qr = category_gap + category_font_size if has_category else 0
        max_qr_y = max(
            TOP_PADDING_PX,
            round_half_up(height - BOTTOM_PADDING_PX - qr_size - reserve_below_qr),
        )
        qr_y = min(round_half_up(y), max_qr_y)
        if has_category:
            category_y = qr_y + qr_size + category_gap

    return BadgeGeometry(
        width=width,
        height=height,
        scale_x=scale_x,
        scale_y=scale_y,
        uniform_scale=uniform_scale,
        center_x=center_x,
        title_font_size=title_font_size,
        second_font_size=second_font_size,
        line1_y=line1_y,
        line2_y=line2_y,
        text_bottom_y=text_bottom_y,
        after_text_gap=after_text_gap,
        qr_size=qr_size,
        qr_x=qr_x,
        qr_y=qr_y,
        category_font_size=category_font_size,
        category_gap=category_gap,
        category_y=category_y,
    )


def rotate_content(content: Image.Image, rotation: int) -> Image.Image:
    """Rotate ``content`` clockwise by ``rotation``; 90 and 270 swap width and height."""
    if rotation == 0:
        return content
    if rotation == 90:
        rotated = content.transpose(Image.Transpose.ROTATE_270)
    elif rotation == 180:
        rotated = content.transpose(Image.Transpose.ROTATE_180)
    elif rotation == 270:
        rotated = content.transpose(Image.Transpose.ROTATE_90)
    else:
        raise ValueError(f"Unsupported rotation: {rotation}")
    return rotated


# -----------------------------------------------------
# 🔹 Render badge
# -----------------------------------------------------
def render_badge_image(name: str, qr_text: str | None = None, category: str | None = None,
                       dpi=DEFAULT_DPI, mm_width: float = 80, mm_height: float = 50,
                       rotation=0, max_chars_line1=15, max_chars_line2=15,
                       font: BadgeFont | None = None) -> Image.Image:
    rotation = normalize_rotation(rotation)
    qr_text = qr_text.strip() if isinstance(qr_text, str) else None
    category = category.strip() if isinstance(category, str) else ""
    has_qr = bool(qr_text)
    has_category = bool(category)

    plan = split_name_into_two_lines(name, max_chars_line1, max_chars_line2)
    geo = compute_geometry(plan, dpi, mm_width, mm_height, has_qr, has_category)
    logger.debug("Rendering %dx%d badge, rotation=%d, plan=%s", geo.width, geo.height, rotation, plan)

    content = Image.new("RGB", (geo.width, geo.height), WHITE)
    draw = ImageDraw.Draw(content)

    if plan.line1:
        draw.text((geo.center_x, geo.line1_y), plan.line1, fill=BLACK,
                  font=load_font(font, geo.title_font_size), anchor="mt")
    if plan.line2:
        draw.text((geo.center_x, geo.line2_y), plan.line2, fill=BLACK,
                  font=load_font(font, geo.second_font_size), anchor="mt")

    if has_qr:
        qr_img = encode_qr(qr_text, geo.qr_size)
        content.paste(qr_img, (geo.qr_x, geo.qr_y))
        if has_category:
            draw.text((geo.center_x, geo.category_y), category, fill=BLACK,
                      font=load_font(font, geo.category_font_size), anchor="mt")

    return rotate_content(content, rotation)


def render_badge_png(name: str, qr_text: str | None = None, category: str | None = None,
                     dpi=DEFAULT_DPI, mm_width: float = 80, mm_height: float = 50,
                     rotation=0, max_chars_line1=15, max_chars_line2=15,
                     font: BadgeFont | None = None) -> bytes:
    img = render_badge_image(
        name,
        qr_text=qr_text,
        category=category,
        dpi=dpi,
        mm_width=mm_width,
        mm_height=mm_height,
        rotation=rotation,
        max_chars_line1=max_chars_line1,
        max_chars_line2=max_chars_line2,
        font=font,
    )
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
