"""
Salt Sources
============
The single place the engine draws randomness from.

Encoders take a salt source instead of calling the RNG directly, so tests can
inject a fixed salt and pin exact outputs.
"""

import secrets
from abc import ABC, abstractmethod

import structlog

from .errors import RandomSourceFailure

logger = structlog.get_logger(__name__)


class SaltSource(ABC):
    """Anything that can hand out ``length`` salt bytes."""

    @abstractmethod
    def draw(self, length: int) -> bytes:
        """Return exactly ``length`` bytes."""
        pass


class SystemSaltSource(SaltSource):
    """Salt drawn from the operating system CSPRNG."""

    def draw(self, length: int) -> bytes:
        try:
            return secrets.token_bytes(length)
        except (OSError, NotImplementedError) as exc:
            logger.error("Random source failure", length=length, error=str(exc))
            raise RandomSourceFailure("could not draw salt from the system random source", exc) from exc


class FixedSaltSource(SaltSource):
    """
    Always returns the same salt.

    Only for reproducible vectors; a fixed salt defeats the purpose of
    salting in real use.
    """

    def __init__(self, salt: bytes):
        self.salt = bytes(salt)

    def draw(self, length: int) -> bytes:
        if len(self.salt) != length:
            raise ValueError(f"fixed salt is {len(self.salt)} bytes, {length} requested")
        return self.salt
