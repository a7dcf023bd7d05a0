"""
eqcrypt Models
==============
Result types returned by the verify and inspect paths.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class VerifyOutcome(str, Enum):
    """Verification result types."""
    VERIFIED = "verified"
    NOT_VERIFIED = "not_verified"
    UNSUPPORTED = "unsupported"      # Argon2: regenerate and compare instead
    UNRECOGNIZED = "unrecognized"    # No known prefix


class HashFamily(str, Enum):
    """Stored hash families told apart by prefix or length."""
    ESCRYPT = "escrypt"
    ARGON2 = "argon2"
    MD5 = "md5"
    SHA1 = "sha1"
    SHA512 = "sha512"
    UNKNOWN = "unknown"


@dataclass
class VerifyResult:
    """Result of checking a password against a stored hash."""
    outcome: VerifyOutcome
    scheme: Optional[str] = None
    reason: Optional[str] = None
    hash_length: int = 0

    @property
    def matched(self) -> bool:
        return self.outcome is VerifyOutcome.VERIFIED


@dataclass
class HashDescription:
    """What can be told about a stored hash without the password."""
    family: HashFamily
    length: int
    verifiable: bool = False
    well_formed: bool = True
    parameters: Dict[str, int] = field(default_factory=dict)
