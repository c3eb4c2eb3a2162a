import math
from typing import Any, Literal, Optional

from pydantic import BaseModel, model_validator

from ..core.config import settings
from ..core.layout import coerce_cap
from ..core.renderer import MAX_DPI, MIN_DPI, clamp, normalize_rotation

MAX_LINE1_KEYS = ("maxLine1", "max_line1", "maxcharsline1")
MAX_LINE2_KEYS = ("maxLine2", "max_line2", "maxcharsline2")


def _first_present(source: dict, keys):
    for key in keys:
        if source.get(key) is not None:
            return source[key]
    return None


def _to_number(value, fallback):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return number if math.isfinite(number) else fallback


class BadgeParams(BaseModel):
    """Badge request parameters, leniently normalized.

    Bad dpi, rotation, caps or format never fail validation; they fall back to
    defaults. Content is always rendered landscape, so ``mm_width`` is the long
    physical side.
    """

    name: str = ""
    qr: Optional[str] = None
    dpi: float = settings.DEFAULT_DPI
    mm_width: float = max(settings.BADGE_MM_WIDTH, settings.BADGE_MM_HEIGHT)
    mm_height: float = min(settings.BADGE_MM_WIDTH, settings.BADGE_MM_HEIGHT)
    rotation: Literal[0, 90, 180, 270] = 0
    output_format: Literal["png", "base64"] = "png"
    max_chars_line1: int = settings.DEFAULT_MAX_CHARS
    max_chars_line2: int = settings.DEFAULT_MAX_CHARS

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, source: Any):
        if not isinstance(source, dict):
            source = {}

        name = source.get("name")
        qr = source.get("qr")

        rotation = source.get("rotation")
        if rotation is None:
            rotation = source.get("rotate")

        fmt = source.get("format")
        fmt = fmt.lower() if isinstance(fmt, str) else "png"

        default_cap = settings.DEFAULT_MAX_CHARS
        max1 = _first_present(source, MAX_LINE1_KEYS)
        max2 = _first_present(source, MAX_LINE2_KEYS)

        return {
            "name": name.strip() if isinstance(name, str) else "",
            "qr": qr.strip() if isinstance(qr, str) else None,
            "dpi": clamp(_to_number(source.get("dpi"), settings.DEFAULT_DPI), MIN_DPI, MAX_DPI),
            "rotation": normalize_rotation(rotation),
            "output_format": fmt if fmt in ("png", "base64") else "png",
            "max_chars_line1": coerce_cap(_to_number(max1, default_cap), default_cap),
            "max_chars_line2": coerce_cap(_to_number(max2, default_cap), default_cap),
        }


class BadgeBase64Response(BaseModel):
    success: bool = True
    format: str = "base64"
    data: str
    dataUri: str
    mimeType: str = "image/png"


class ErrorResponse(BaseModel):
    error: str
