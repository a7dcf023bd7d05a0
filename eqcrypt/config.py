"""
Engine Configuration
====================
Environment-driven settings and the fixed KDF presets.

The presets mirror libsodium's "interactive" limits and are not tunable:
hashes must match what the login server writes.
"""

import os
from dataclasses import dataclass, field

from .errors import ConfigurationError

# hashlib.scrypt takes maxmem as a C int
MAXMEM_LIMIT = 2**31 - 1


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Argon2Params:
    """Argon2id cost parameters."""
    memory_cost: int   # KiB
    time_cost: int     # Iterations
    parallelism: int
    hash_len: int
    salt_len: int
    version: int = 19


@dataclass(frozen=True)
class ScryptParams:
    """scrypt cost parameters for the escrypt format."""
    log2_n: int
    r: int
    p: int
    key_len: int
    salt_len: int

    @property
    def n(self) -> int:
        return 1 << self.log2_n

    @property
    def required_memory(self) -> int:
        """Bytes OpenSSL reserves for one derivation (B plus V blocks)."""
        return 128 * self.r * self.p + 128 * self.r * (self.n + 2)


# crypto_pwhash_OPSLIMIT_INTERACTIVE / MEMLIMIT_INTERACTIVE (64 MiB)
ARGON2ID_INTERACTIVE = Argon2Params(
    memory_cost=65536,
    time_cost=2,
    parallelism=1,
    hash_len=32,
    salt_len=16,
)

# crypto_pwhash_scryptsalsa208sha256 interactive limits: N=16384, r=8, p=1
SCRYPT_INTERACTIVE = ScryptParams(
    log2_n=14,
    r=8,
    p=1,
    key_len=32,
    salt_len=32,
)


@dataclass
class EngineConfig:
    """Runtime configuration for the hashing engine."""
    default_mode: int = field(
        default_factory=lambda: int(os.getenv("EQCRYPT_DEFAULT_MODE", "14"))
    )
    scrypt_maxmem: int = field(
        default_factory=lambda: int(os.getenv("EQCRYPT_SCRYPT_MAXMEM", str(64 * 1024 * 1024)))
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("EQCRYPT_LOG_LEVEL", "INFO")
    )
    log_json: bool = field(
        default_factory=lambda: _env_bool("EQCRYPT_LOG_JSON", True)
    )

    def __post_init__(self):
        if not SCRYPT_INTERACTIVE.required_memory <= self.scrypt_maxmem <= MAXMEM_LIMIT:
            raise ConfigurationError(
                f"scrypt_maxmem must be between {SCRYPT_INTERACTIVE.required_memory} "
                f"and {MAXMEM_LIMIT} bytes, got {self.scrypt_maxmem}"
            )
