# badge_api/core/qr_utils.py
import logging

import qrcode
from qrcode.image.pil import PilImage
from PIL import Image

logger = logging.getLogger("badge_api.qr")


# -----------------------------------------------------
# 🔹 Generate QR bitmap
# -----------------------------------------------------
def encode_qr(text: str, size_px: int) -> Image.Image:
    """Encode ``text`` as a square black-on-white QR bitmap of ``size_px`` pixels.

    No quiet zone is added; error correction level is M.
    """
    size_px = max(1, int(size_px))
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=1,
        border=0,
        image_factory=PilImage,
    )
    qr.add_data(text)
    qr.make(fit=True)
    qr.box_size = max(1, size_px // qr.modules_count)

    img = qr.make_image(fill_color="black", back_color="white").get_image().convert("RGB")
    if img.size != (size_px, size_px):
        img = img.resize((size_px, size_px), Image.NEAREST)

    logger.debug("Encoded QR (%d modules) at %dpx for %r", qr.modules_count, size_px, text)
    return img
