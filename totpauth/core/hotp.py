"""
HOTP (HMAC-based One-Time Password) code generation following RFC 4226.

TOTP (RFC 6238) is HOTP with the counter derived from the clock, so this is
the single place where codes are computed.
"""

import struct

from totpauth.core.hashing import Algorithm, KeyedHash, parse_algorithm
from totpauth.core.utils import format_code, validate_digits

_COUNTER_MASK = 0xFFFFFFFFFFFFFFFF


def hotp_value(keyed_hash: KeyedHash, counter: int, digits: int) -> int:
    """
    Core HOTP computation (RFC 4226 §5).

    Args:
        keyed_hash: Keyed primitive already holding the secret. It is reset
                    before use, so the same instance can serve many counters.
        counter:    Counter value; serialised as 64-bit two's complement.
        digits:     Number of OTP digits (1..10).

    Returns:
        Non-negative integer code below ``10 ** digits``.
    """
    msg = struct.pack(">Q", counter & _COUNTER_MASK)
    keyed_hash.reset()
    keyed_hash.update(msg)
    digest = keyed_hash.finalize()

    # Dynamic truncation
    offset = digest[-1] & 0x0F
    code = (
        (digest[offset] & 0x7F) << 24
        | (digest[offset + 1] & 0xFF) << 16
        | (digest[offset + 2] & 0xFF) << 8
        | (digest[offset + 3] & 0xFF)
    )
    return code % (10**digits)


def generate_hotp(
    secret_bytes: bytes,
    counter: int,
    digits: int = 6,
    algorithm: Algorithm = Algorithm.SHA1,
) -> str:
    """
    Generate an HOTP code for display.

    Args:
        secret_bytes: Raw decoded secret bytes.
        counter:      Synchronisation counter value.
        digits:       Number of OTP digits.
        algorithm:    HMAC algorithm.

    Returns:
        Zero-padded OTP string.
    """
    validate_digits(digits)
    keyed_hash = parse_algorithm(algorithm).keyed_hash(secret_bytes)
    return format_code(hotp_value(keyed_hash, counter, digits), digits)
