"""
Argon2id PHC Encoder
====================
Mode 13: Argon2id with libsodium's interactive preset, serialized the way
``crypto_pwhash_str`` writes it:

    $argon2id$v=19$m=65536,t=2,p=1$<salt>$<hash>

Salt and hash use standard base64 with the padding stripped.

Verification is deliberately not offered here; the engine reports Argon2
hashes as unsupported on the verify path.
"""

import base64
import re
from typing import Dict, Tuple

import structlog
from argon2.low_level import Type, hash_secret_raw

from ..config import ARGON2ID_INTERACTIVE, Argon2Params
from ..errors import MalformedStoredHashError
from ..salt import SaltSource

logger = structlog.get_logger(__name__)

PREFIX = "$argon2"

_PHC_RE = re.compile(
    r"^\$(?P<variant>argon2(?:id|i|d))"
    r"\$v=(?P<v>\d+)"
    r"\$m=(?P<m>\d+),t=(?P<t>\d+),p=(?P<p>\d+)"
    r"\$(?P<salt>[A-Za-z0-9+/]+)"
    r"\$(?P<hash>[A-Za-z0-9+/]+)$"
)


def b64_unpadded(data: bytes) -> str:
    """Standard-alphabet base64 without trailing ``=``."""
    return base64.b64encode(data).decode("ascii").rstrip("=")


def encode_phc(salt: bytes, digest: bytes, params: Argon2Params = ARGON2ID_INTERACTIVE) -> str:
    """Assemble the PHC string for an Argon2id digest."""
    return (
        f"$argon2id$v={params.version}"
        f"$m={params.memory_cost},t={params.time_cost},p={params.parallelism}"
        f"${b64_unpadded(salt)}${b64_unpadded(digest)}"
    )


def hash_argon2id(
    password: str,
    salt_source: SaltSource,
    params: Argon2Params = ARGON2ID_INTERACTIVE,
) -> str:
    """
    Hash a password with Argon2id.

    Args:
        password: Plain text password
        salt_source: Where the 16 salt bytes come from
        params: Cost parameters (the interactive preset)

    Returns:
        PHC-formatted hash string

    Raises:
        RandomSourceFailure: if the salt could not be drawn
    """
    salt = salt_source.draw(params.salt_len)
    digest = hash_secret_raw(
        secret=password.encode("utf-8"),
        salt=salt,
        time_cost=params.time_cost,
        memory_cost=params.memory_cost,
        parallelism=params.parallelism,
        hash_len=params.hash_len,
        type=Type.ID,
        version=params.version,
    )
    logger.debug("Argon2id digest computed", memory_cost=params.memory_cost, time_cost=params.time_cost)
    return encode_phc(salt, digest, params)


def parse_phc(stored_hash: str) -> Tuple[str, Dict[str, int]]:
    """
    Split an Argon2 PHC string into its variant and cost parameters.

    Only the structure is checked; the digest is not verified.

    Args:
        stored_hash: ``$argon2...`` string

    Returns:
        Tuple of (variant, {"v", "m", "t", "p"})

    Raises:
        MalformedStoredHashError: if the string is not a PHC Argon2 hash
    """
    match = _PHC_RE.match(stored_hash)
    if not match:
        raise MalformedStoredHashError("not a well-formed Argon2 PHC string")
    params = {key: int(match.group(key)) for key in ("v", "m", "t", "p")}
    return match.group("variant"), params
