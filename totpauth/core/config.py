"""
Verification parameters for TOTP.

A :class:`Configuration` is built once and reused for many calls. It is a
frozen dataclass, so it can be shared read-only between threads. Never swap
its fields behind the dataclass's back (``object.__setattr__``) while a
verification using it may still be running; derive a new value with
:meth:`Configuration.replace` instead.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Tuple

from totpauth.core.clock import Clock, SystemClock
from totpauth.core.hashing import Algorithm, parse_algorithm
from totpauth.core.utils import validate_digits, validate_period


@dataclass(frozen=True)
class Configuration:
    """Immutable bundle of TOTP verification parameters."""

    clock: Clock = field(default_factory=SystemClock)
    tried_offsets: Tuple[int, ...] = (0, -1)   # evaluated in order
    period: int = 30                           # seconds per counter tick
    digits: int = 6                            # 1..10
    algorithm: Algorithm = Algorithm.SHA1

    def __post_init__(self) -> None:
        if not callable(getattr(self.clock, "now", None)):
            raise ValueError("clock must provide a now() method.")

        offsets = tuple(self.tried_offsets)
        for offset in offsets:
            if isinstance(offset, bool) or not isinstance(offset, int):
                raise ValueError(f"Tried offsets must be integers, got {offset!r}.")
        object.__setattr__(self, "tried_offsets", offsets)

        validate_period(self.period)
        validate_digits(self.digits)
        object.__setattr__(self, "algorithm", parse_algorithm(self.algorithm))

    def replace(self, **changes) -> "Configuration":
        """Return a copy with ``changes`` applied (and validated)."""
        return dataclasses.replace(self, **changes)


def default_configuration() -> Configuration:
    """
    Return a fresh configuration compatible with Google Authenticator.

    System clock, 30 second period, 6 digits, HMAC-SHA1, and the current plus
    the previous window are accepted. Each call returns a new object owned by
    the caller.
    """
    return Configuration()
