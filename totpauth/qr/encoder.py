"""
Render provisioning URIs as scannable QR code images.

Uses the ``qrcode`` package (with Pillow) as the image encoder. Whatever the
encoder raises reaches the caller unchanged.
"""

import io
import logging
from typing import Optional

import qrcode
import qrcode.constants

from totpauth.core.config import Configuration
from totpauth.core.utils import FormatError
from totpauth.qr.parser import build_provisioning_uri

logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def encode_png(data: str, error_correction: str = "M") -> bytes:
    """
    Encode ``data`` as a PNG QR code.

    Args:
        data:             Text to encode (normally an otpauth URI).
        error_correction: One of ``L``, ``M``, ``Q``, ``H``.

    Returns:
        PNG image bytes.

    Raises:
        FormatError: On an unknown error-correction level.
    """
    level = ERROR_CORRECTION_LEVELS.get(str(error_correction).upper())
    if level is None:
        raise FormatError(
            f"Unknown error correction level '{error_correction}'. Expected L, M, Q or H."
        )

    qr = qrcode.QRCode(
        version=None,
        error_correction=level,
        box_size=8,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    logger.debug(
        "Encoded %d characters as QR version %d (level %s)",
        len(data), qr.version, error_correction,
    )
    return buffer.getvalue()


def barcode_image(
    label: str,
    secret_bytes: bytes,
    configuration: Optional[Configuration] = None,
    error_correction: str = "M",
) -> bytes:
    """
    Build the provisioning URI for ``label`` and render it as a PNG QR code.

    Raises:
        FormatError: If the label, secret or error-correction level is
            malformed.
    """
    uri = build_provisioning_uri(label, secret_bytes, configuration)
    return encode_png(uri, error_correction)
