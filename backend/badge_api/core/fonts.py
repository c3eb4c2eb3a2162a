# badge_api/core/fonts.py
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from PIL import ImageFont

from .config import settings

logger = logging.getLogger("badge_api.fonts")

PACKAGE_FONT_DIR = Path(__file__).resolve().parent.parent / "fonts"

# Bold faces first found wins
FONT_CANDIDATES = (
    "arial.ttf",
    "Arial.ttf",
    "ARIAL.TTF",
    "arial_black.ttf",
    "ArialBlack.ttf",
    "Arial-Black.ttf",
    "DejaVuSans-Bold.ttf",
    "DejaVuSansCondensed-Bold.ttf",
    "Arial-Bold.ttf",
    "ArialBold.ttf",
)


@dataclass(frozen=True)
class BadgeFont:
    path: str | None = None
    family: str = "default"


DEFAULT_FONT = BadgeFont()


# -----------------------------------------------------
# 🔹 Look up candidate font files
# -----------------------------------------------------
def resolve_badge_font(font_dirs=None, candidates=FONT_CANDIDATES, search_system: bool = True) -> BadgeFont:
    """Return the first loadable candidate font.

    ``font_dirs`` are searched first. With ``search_system`` the candidates are
    then tried by bare file name, which FreeType looks up in the system font
    directories. Only when nothing loads is the Pillow default font used.
    """
    if font_dirs is None:
        font_dirs = [d for d in (settings.FONT_DIR, PACKAGE_FONT_DIR) if d]

    for font_dir in font_dirs:
        font_dir = Path(font_dir)
        if not font_dir.is_dir():
            logger.debug("Font directory missing: %s", font_dir)
            continue
        for filename in candidates:
            font_path = font_dir / filename
            logger.debug("Checking font path: %s", font_path)
            if not font_path.is_file():
                continue
            try:
                ImageFont.truetype(str(font_path), 12)
            except OSError as exc:
                logger.error("Error loading font %s: %s", font_path, exc)
                continue
            return _badge_font(filename, str(font_path))

    if search_system:
        for filename in candidates:
            try:
                ImageFont.truetype(filename, 12)
            except OSError:
                logger.debug("System font not found: %s", filename)
                continue
            return _badge_font(filename, filename)

    logger.info("No bold font found, using the Pillow default font")
    return DEFAULT_FONT


def _badge_font(filename: str, path: str) -> BadgeFont:
    family = "Arial" if "arial" in filename.lower() else "BadgeBold"
    font = BadgeFont(path=path, family=family)
    logger.info("Using badge font %s (%s)", font.family, font.path)
    return font


@lru_cache(maxsize=1)
def get_badge_font() -> BadgeFont:
    return resolve_badge_font()


def load_font(badge_font: BadgeFont | None, size: int):
    if badge_font and badge_font.path:
        try:
            return ImageFont.truetype(badge_font.path, size)
        except OSError:
            logger.warning("Could not load %s, falling back to default font", badge_font.path)
    return ImageFont.load_default(size=size)
