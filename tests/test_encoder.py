"""Tests for totpauth.qr.encoder."""

import pytest
from qrcode.exceptions import DataOverflowError

from totpauth.core.config import Configuration
from totpauth.core.utils import FormatError
from totpauth.qr import encoder
from totpauth.qr.encoder import barcode_image, encode_png

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_barcode_image_default_configuration() -> None:
    image = barcode_image("foo@bar.com", b"hello")
    assert len(image) > 0
    assert image.startswith(PNG_MAGIC)


@pytest.mark.parametrize("level", ["L", "M", "Q", "H", "h"])
def test_encode_png_error_correction_levels(level: str) -> None:
    assert encode_png("otpauth://totp/a?secret=NBSWY3DP", level).startswith(PNG_MAGIC)


def test_unknown_error_correction_level() -> None:
    with pytest.raises(FormatError, match="error correction"):
        encode_png("otpauth://totp/a?secret=NBSWY3DP", "X")


def test_barcode_image_rejects_empty_label() -> None:
    with pytest.raises(FormatError):
        barcode_image("", b"hello", Configuration())


def test_encoder_overflow_propagates() -> None:
    """Data too large for any QR version surfaces the encoder's own error.

    Older qrcode releases raise DataOverflowError, newer ones ValueError.
    """
    with pytest.raises((DataOverflowError, ValueError)):
        barcode_image("a" * 4000, b"hello", error_correction="H")


def test_encoder_failure_not_wrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    class _BrokenQRCode:
        def __init__(self, *args, **kwargs) -> None:
            pass

        def add_data(self, data) -> None:
            raise RuntimeError("encoder exploded")

    monkeypatch.setattr(encoder.qrcode, "QRCode", _BrokenQRCode)
    with pytest.raises(RuntimeError, match="encoder exploded"):
        barcode_image("alice", b"hello")
