"""
Keyed-hash primitives used by the one-time-code generator.

The generator only talks to :class:`KeyedHash` through ``reset`` / ``update``
/ ``finalize``, so SHA-1, SHA-256, SHA-512 or any other keyed primitive can be
plugged in without touching the truncation logic.
"""

import hmac
from abc import ABC, abstractmethod
from enum import Enum


class Algorithm(str, Enum):
    """Supported HMAC algorithms."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    def keyed_hash(self, key: bytes) -> "KeyedHash":
        """Return a fresh HMAC primitive for ``key`` using this algorithm."""
        return HmacKeyedHash(key, self)


_ALG_MAP: dict[str, str] = {
    Algorithm.SHA1: "sha1",
    Algorithm.SHA256: "sha256",
    Algorithm.SHA512: "sha512",
}


def parse_algorithm(value) -> Algorithm:
    """
    Coerce ``value`` into an :class:`Algorithm`.

    Accepts enum members and case-insensitive names such as ``"sha256"``.

    Raises:
        ValueError: If the algorithm is not supported.
    """
    if isinstance(value, Algorithm):
        return value
    try:
        return Algorithm(str(value).upper())
    except ValueError:
        raise ValueError(
            f"Unsupported algorithm '{value}'. Supported: SHA1, SHA256, SHA512."
        )


class KeyedHash(ABC):
    """
    A keyed-hash primitive.

    Subclasses keep their key private and implement the three operations
    below. One instance may be reset and reused for several messages but
    must not be shared between threads.
    """

    digest_size: int = 0

    @abstractmethod
    def reset(self) -> None:
        """Discard any buffered input and start a new message."""
        raise NotImplementedError

    @abstractmethod
    def update(self, data: bytes) -> None:
        """Feed ``data`` into the current message."""
        raise NotImplementedError

    @abstractmethod
    def finalize(self) -> bytes:
        """Return the digest of the current message."""
        raise NotImplementedError


class HmacKeyedHash(KeyedHash):
    """HMAC over one of the :class:`Algorithm` digests."""

    def __init__(self, key: bytes, algorithm: Algorithm = Algorithm.SHA1) -> None:
        self._key = bytes(key)
        self._digestmod = _ALG_MAP[parse_algorithm(algorithm)]
        self._mac = hmac.new(self._key, digestmod=self._digestmod)
        self.digest_size = self._mac.digest_size

    def reset(self) -> None:
        self._mac = hmac.new(self._key, digestmod=self._digestmod)

    def update(self, data: bytes) -> None:
        self._mac.update(data)

    def finalize(self) -> bytes:
        return self._mac.digest()

    def __repr__(self) -> str:
        # never echo the key
        return f"HmacKeyedHash(algorithm={self._digestmod!r})"
