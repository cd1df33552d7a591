"""
Utility helpers for totpauth.
"""

import base64
import re
import unicodedata


class FormatError(ValueError):
    """Malformed input to a provisioning operation (label, secret or URI)."""


# ── Base32 ────────────────────────────────────────────────────────────────────

def normalize_secret(secret: str) -> str:
    """
    Normalise a base32 secret: strip spaces, uppercase, add padding.

    Args:
        secret: Raw user-supplied secret string.

    Returns:
        Uppercase base32 string with correct padding.

    Raises:
        FormatError: If the string contains invalid base32 characters.
    """
    secret = secret.strip().upper().replace(" ", "").replace("-", "")
    # Base32 alphabet: A-Z and 2-7
    if not re.fullmatch(r"[A-Z2-7]+=*", secret):
        raise FormatError("Secret contains invalid base32 characters.")
    # Pad to multiple of 8
    pad = (8 - len(secret) % 8) % 8
    secret = secret + "=" * pad
    return secret


def decode_secret(secret: str) -> bytes:
    """
    Decode a base32-encoded secret string to raw bytes.

    Padded and unpadded input are both accepted.

    Raises:
        FormatError: On invalid base32 input.
    """
    try:
        return base64.b32decode(normalize_secret(secret), casefold=True)
    except FormatError:
        raise
    except ValueError as exc:
        # binascii.Error is a ValueError subclass
        raise FormatError(f"Invalid base32 secret: {exc}") from exc


def encode_secret(raw: bytes, padded: bool = True) -> str:
    """
    Encode raw bytes as base32 (standard alphabet).

    Padding is kept by default; pass ``padded=False`` for authenticator apps
    that reject ``=``.
    """
    encoded = base64.b32encode(raw).decode("ascii")
    return encoded if padded else encoded.rstrip("=")


# ── Labels ────────────────────────────────────────────────────────────────────

def validate_label(label: str, what: str = "Label") -> str:
    """
    Check a provisioning label (or issuer) and return it unchanged.

    Surrounding whitespace is kept; only the emptiness check ignores it.

    Raises:
        FormatError: If the text is empty or contains control characters.
    """
    if not isinstance(label, str):
        raise FormatError(f"{what} must be a string.")
    if not label.strip():
        raise FormatError(f"{what} must not be empty.")
    if any(unicodedata.category(ch) == "Cc" for ch in label):
        raise FormatError(f"{what} must not contain control characters.")
    return label


# ── Codes ─────────────────────────────────────────────────────────────────────

def format_code(code: int, digits: int) -> str:
    """Render ``code`` as a decimal string zero-padded to ``digits`` characters."""
    return str(code).zfill(digits)


def is_digit_string(value: object) -> bool:
    """True if ``value`` is a non-empty string of ASCII decimal digits."""
    return isinstance(value, str) and value.isascii() and value.isdigit()


# ── Validation ────────────────────────────────────────────────────────────────

MIN_DIGITS = 1
MAX_DIGITS = 10


def validate_digits(digits: int) -> None:
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise ValueError("Digits must be an integer.")
    if digits < MIN_DIGITS or digits > MAX_DIGITS:
        raise ValueError(f"Digits must be between {MIN_DIGITS} and {MAX_DIGITS}.")


def validate_period(period: int) -> None:
    if isinstance(period, bool) or not isinstance(period, int):
        raise ValueError("Period must be an integer number of seconds.")
    if period < 1:
        raise ValueError("Period must be at least 1 second.")
