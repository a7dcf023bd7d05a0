"""
Escrypt MCF Encoder / Verifier
==============================
Mode 14: scrypt in libsodium's ``$7$`` format
(``crypto_pwhash_scryptsalsa208sha256_str``), interactive preset.

Layout:

    $7$ <log2N: 1 sym> <r: 5 sym> <p: 5 sym> <salt> $ <hash>

All fields use the crypt64 alphabet. The crypt64-*encoded* salt text, not
the raw salt bytes, is what goes into scrypt as the salt. The verifier must
do the same or no hash written by libsodium will ever match.
"""

import hashlib
from dataclasses import dataclass

import structlog

from .. import crypt64
from ..config import SCRYPT_INTERACTIVE, ScryptParams
from ..errors import MalformedEncodingError, MalformedStoredHashError
from ..salt import SaltSource

logger = structlog.get_logger(__name__)

PREFIX = "$7$"

# "$7$" + 1 + 5 + 5 parameter symbols
SETTING_LENGTH = 14

DEFAULT_MAXMEM = 64 * 1024 * 1024


@dataclass
class EscryptHash:
    """A ``$7$`` string split into its parts."""
    log2_n: int
    r: int
    p: int
    salt: str
    hash: str

    @property
    def n(self) -> int:
        return 1 << self.log2_n


def _derive(password: str, encoded_salt: str, params: ScryptParams, maxmem: int) -> str:
    key = hashlib.scrypt(
        password.encode("utf-8"),
        salt=encoded_salt.encode("utf-8"),
        n=params.n,
        r=params.r,
        p=params.p,
        maxmem=maxmem,
        dklen=params.key_len,
    )
    return crypt64.encode_bytes(key)


def encode_setting(params: ScryptParams = SCRYPT_INTERACTIVE) -> str:
    """The ``$7$`` prefix plus the three parameter fields."""
    return (
        PREFIX
        + crypt64.encode_uint(params.log2_n, 6)
        + crypt64.encode_uint(params.r, 30)
        + crypt64.encode_uint(params.p, 30)
    )


def hash_escrypt(
    password: str,
    salt_source: SaltSource,
    params: ScryptParams = SCRYPT_INTERACTIVE,
    maxmem: int = DEFAULT_MAXMEM,
) -> str:
    """
    Hash a password into a ``$7$`` escrypt string.

    Args:
        password: Plain text password
        salt_source: Where the 32 raw salt bytes come from
        params: Cost parameters (the interactive preset)
        maxmem: Memory ceiling handed to hashlib.scrypt

    Returns:
        MCF string, 101 characters for the interactive preset

    Raises:
        RandomSourceFailure: if the salt could not be drawn
    """
    encoded_salt = crypt64.encode_bytes(salt_source.draw(params.salt_len))
    encoded_hash = _derive(password, encoded_salt, params, maxmem)
    logger.debug("scrypt digest computed", log2_n=params.log2_n, r=params.r, p=params.p)
    return f"{encode_setting(params)}{encoded_salt}${encoded_hash}"


def verify_escrypt(
    stored_hash: str,
    password: str,
    params: ScryptParams = SCRYPT_INTERACTIVE,
    maxmem: int = DEFAULT_MAXMEM,
) -> bool:
    """
    Check a password against a ``$7$`` string.

    The parameter fields are not read back: the stored hash is assumed to use
    the interactive preset, as libsodium's interactive ``str`` output does.
    Comparison is plain string equality.

    Args:
        stored_hash: Hash from the accounts table
        password: Plain text password

    Returns:
        True on match; False on mismatch, malformed input or a failed
        derivation
    """
    if len(stored_hash) < SETTING_LENGTH or not stored_hash.startswith(PREFIX):
        return False

    last_dollar = stored_hash.rfind("$")
    if last_dollar <= 3:
        return False

    encoded_salt = stored_hash[SETTING_LENGTH:last_dollar]
    expected = stored_hash[last_dollar + 1:]

    # UnicodeEncodeError (lone surrogates) is a ValueError too
    try:
        derived = _derive(password, encoded_salt, params, maxmem)
    except ValueError as exc:
        logger.warning("scrypt derivation failed", error=type(exc).__name__)
        return False

    return derived == expected


def parse_escrypt(stored_hash: str) -> EscryptHash:
    """
    Decode the parameter fields of a ``$7$`` string.

    Raises:
        MalformedStoredHashError: if the prefix, separator or parameter
            fields are broken
    """
    if len(stored_hash) < SETTING_LENGTH or not stored_hash.startswith(PREFIX):
        raise MalformedStoredHashError("not a $7$ escrypt string")

    last_dollar = stored_hash.rfind("$")
    if last_dollar < SETTING_LENGTH:
        raise MalformedStoredHashError("missing salt/hash separator")

    try:
        log2_n = crypt64.decode_uint(stored_hash[3:4], 6)
        r = crypt64.decode_uint(stored_hash[4:9], 30)
        p = crypt64.decode_uint(stored_hash[9:14], 30)
    except MalformedEncodingError as exc:
        raise MalformedStoredHashError(f"bad parameter field: {exc}") from exc

    return EscryptHash(
        log2_n=log2_n,
        r=r,
        p=p,
        salt=stored_hash[SETTING_LENGTH:last_dollar],
        hash=stored_hash[last_dollar + 1:],
    )
