"""
Build and parse otpauth:// provisioning URIs as defined by the Google
Authenticator Key URI Format.

Reference: https://github.com/google/google-authenticator/wiki/Key-Uri-Format

Only the ``totp`` type is produced. The wire form is::

    otpauth://totp/<label>?secret=<base32>&digits=<n>&period=<seconds>

``algorithm`` and ``issuer`` are appended only when they differ from the
defaults, so a default configuration yields exactly the three parameters
above.
"""

import urllib.parse
from dataclasses import dataclass
from typing import Optional

from totpauth.core.clock import Clock
from totpauth.core.config import Configuration, default_configuration
from totpauth.core.hashing import Algorithm, parse_algorithm
from totpauth.core.utils import (
    FormatError,
    decode_secret,
    encode_secret,
    validate_digits,
    validate_label,
    validate_period,
)

SCHEME = "otpauth"
OTP_TYPE = "totp"


@dataclass(frozen=True)
class ProvisioningRecord:
    """Parsed representation of a TOTP provisioning URI."""

    label: str          # display text, e.g. "Example:alice@example.com"
    secret: bytes       # raw (base32-decoded) secret
    digits: int
    period: int
    algorithm: Algorithm = Algorithm.SHA1
    issuer: str = ""

    def configuration(self, clock: Optional[Clock] = None) -> Configuration:
        """Return a default configuration adjusted to this record's parameters."""
        changes = {"digits": self.digits, "period": self.period, "algorithm": self.algorithm}
        if clock is not None:
            changes["clock"] = clock
        return default_configuration().replace(**changes)

    def __repr__(self) -> str:
        return (
            f"ProvisioningRecord(label={self.label!r}, secret=<{len(self.secret)} bytes>, "
            f"digits={self.digits}, period={self.period}, "
            f"algorithm={self.algorithm.value}, issuer={self.issuer!r})"
        )


def build_provisioning_uri(
    label: str,
    secret_bytes: bytes,
    configuration: Optional[Configuration] = None,
    issuer: str = "",
) -> str:
    """
    Build the otpauth:// URI an authenticator app enrolls from.

    Args:
        label:         Display text shown by the authenticator app.
        secret_bytes:  Raw shared secret.
        configuration: Digits, period and algorithm (default if None).
        issuer:        Optional ``issuer`` query parameter.

    Returns:
        The provisioning URI. Nothing is cached; every call builds a new
        string.

    Raises:
        FormatError: If the label is empty or contains control characters,
            or if the secret is empty.
    """
    if configuration is None:
        configuration = default_configuration()

    label = validate_label(label)
    if not isinstance(secret_bytes, (bytes, bytearray)):
        raise FormatError("Secret must be bytes.")
    if not secret_bytes:
        raise FormatError("Secret must not be empty.")

    params: dict = {
        "secret": encode_secret(bytes(secret_bytes)),
        "digits": str(configuration.digits),
        "period": str(configuration.period),
    }
    if configuration.algorithm is not Algorithm.SHA1:
        params["algorithm"] = configuration.algorithm.value
    if issuer:
        params["issuer"] = validate_label(issuer, "Issuer")

    query = urllib.parse.urlencode(params)
    label_encoded = urllib.parse.quote(label, safe="")
    return f"{SCHEME}://{OTP_TYPE}/{label_encoded}?{query}"


def parse_provisioning_uri(uri: str) -> ProvisioningRecord:
    """
    Parse and validate a TOTP ``otpauth://`` URI.

    Args:
        uri: Full otpauth URI string.

    Returns:
        Populated :class:`ProvisioningRecord`.

    Raises:
        FormatError: If the URI is malformed or contains invalid values.
    """
    if not isinstance(uri, str):
        raise FormatError("Provisioning URI must be a string.")
    uri = uri.strip()

    parsed = urllib.parse.urlparse(uri)

    if parsed.scheme.lower() != SCHEME:
        raise FormatError(f"Expected '{SCHEME}' scheme, got '{parsed.scheme}'.")

    otp_type = parsed.netloc.lower()
    if otp_type != OTP_TYPE:
        raise FormatError(f"Unsupported OTP type '{otp_type}'. Expected totp.")

    # Label is the path component (strip leading slash)
    raw_label = urllib.parse.unquote(parsed.path.lstrip("/"))
    if not raw_label.strip():
        raise FormatError("Missing label in otpauth URI.")
    label = validate_label(raw_label)

    params = dict(urllib.parse.parse_qsl(parsed.query))

    issuer = params.get("issuer", "")
    if issuer:
        validate_label(issuer, "Issuer")

    # Secret (required)
    raw_secret = params.get("secret", "")
    if not raw_secret:
        raise FormatError("Missing 'secret' parameter in otpauth URI.")
    secret = decode_secret(raw_secret)

    try:
        algorithm = parse_algorithm(params.get("algorithm", Algorithm.SHA1))
    except ValueError as exc:
        raise FormatError(str(exc)) from exc

    try:
        digits = int(params.get("digits", 6))
        validate_digits(digits)
    except ValueError as exc:
        raise FormatError(f"Invalid 'digits' parameter: {exc}") from exc

    try:
        period = int(params.get("period", 30))
        validate_period(period)
    except ValueError as exc:
        raise FormatError(f"Invalid 'period' parameter: {exc}") from exc

    return ProvisioningRecord(
        label=label,
        secret=secret,
        digits=digits,
        period=period,
        algorithm=algorithm,
        issuer=issuer,
    )
