"""
Hash Schemes
============
The three families behind the encryption modes: legacy digests,
Argon2id (PHC) and scrypt (escrypt MCF).
"""

from .legacy import DigestAlgorithm, DigestLayout, DIGEST_HEX_LENGTHS, hex_digest, legacy_hash
from .argon2id import encode_phc, hash_argon2id, parse_phc
from .escrypt import EscryptHash, encode_setting, hash_escrypt, parse_escrypt, verify_escrypt

__all__ = [
    # Legacy
    "DigestAlgorithm",
    "DigestLayout",
    "DIGEST_HEX_LENGTHS",
    "hex_digest",
    "legacy_hash",
    # Argon2id
    "encode_phc",
    "hash_argon2id",
    "parse_phc",
    # Escrypt
    "EscryptHash",
    "encode_setting",
    "hash_escrypt",
    "parse_escrypt",
    "verify_escrypt",
]
