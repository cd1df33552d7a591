"""
TOTP (Time-based One-Time Password) verification following RFC 6238.

Produces and accepts codes identical to Google Authenticator when used with
:func:`~totpauth.core.config.default_configuration`.

Every function here is stateless and reentrant. Bad candidates never raise:
a code of the wrong length or with non-digit characters simply fails to
authenticate.
"""

import hmac
import logging
import math
from typing import Optional

from totpauth.core.config import Configuration, default_configuration
from totpauth.core.hotp import hotp_value
from totpauth.core.utils import format_code, is_digit_string

logger = logging.getLogger(__name__)


def counter_at(timestamp: float, period: int) -> int:
    """Return the TOTP counter (window number) for ``timestamp``."""
    return math.floor(timestamp) // period


def authenticate(
    secret_bytes: bytes,
    candidate: str,
    configuration: Optional[Configuration] = None,
) -> bool:
    """
    Verify a user-supplied TOTP code.

    Each offset in ``configuration.tried_offsets`` is added to the current
    counter in turn; the first window whose code matches authenticates.

    Args:
        secret_bytes:  Raw secret bytes (never logged).
        candidate:     Code typed by the user.
        configuration: Verification parameters. A fresh default is used if
                       None.

    Returns:
        True if ``candidate`` matches any tried window, False otherwise.
    """
    if configuration is None:
        configuration = default_configuration()

    digits = configuration.digits
    if not isinstance(candidate, str) or len(candidate) != digits:
        logger.debug("TOTP rejected: candidate length does not match %d digits", digits)
        return False
    if not is_digit_string(candidate):
        logger.debug("TOTP rejected: candidate is not a decimal number")
        return False

    counter = counter_at(configuration.clock.now(), configuration.period)
    keyed_hash = configuration.algorithm.keyed_hash(secret_bytes)

    for offset in configuration.tried_offsets:
        expected = hotp_value(keyed_hash, counter + offset, digits)
        if hmac.compare_digest(format_code(expected, digits), candidate):
            logger.debug("TOTP accepted at window offset %d", offset)
            return True

    logger.debug(
        "TOTP rejected: no match in %d tried window(s)",
        len(configuration.tried_offsets),
    )
    return False


def generate_totp(
    secret_bytes: bytes,
    configuration: Optional[Configuration] = None,
    timestamp: Optional[float] = None,
) -> str:
    """
    Generate the TOTP code for display.

    Args:
        secret_bytes:  Raw (already base32-decoded) secret bytes.
        configuration: Digits, period and algorithm to use (default if None).
        timestamp:     Override Unix timestamp (uses the configured clock if
                       None).

    Returns:
        OTP string, zero-padded to ``configuration.digits`` characters.
    """
    if configuration is None:
        configuration = default_configuration()
    t = timestamp if timestamp is not None else configuration.clock.now()
    counter = counter_at(t, configuration.period)
    keyed_hash = configuration.algorithm.keyed_hash(secret_bytes)
    code = hotp_value(keyed_hash, counter, configuration.digits)
    return format_code(code, configuration.digits)


def remaining_seconds(
    configuration: Optional[Configuration] = None,
    timestamp: Optional[float] = None,
) -> int:
    """Return seconds until the current TOTP window expires."""
    if configuration is None:
        configuration = default_configuration()
    t = timestamp if timestamp is not None else configuration.clock.now()
    period = configuration.period
    return period - (math.floor(t) % period)
