"""
Hash Inspection
===============
Tell what kind of hash a stored string is without knowing the password.

Legacy digests carry no prefix, so they are guessed from their hex length
(MD5=32, SHA1=40, SHA512=128). Only escrypt strings can be verified by the
engine.
"""

import string

from .errors import MalformedStoredHashError
from .models import HashDescription, HashFamily
from .schemes import argon2id, escrypt
from .schemes.legacy import DIGEST_HEX_LENGTHS, DigestAlgorithm

_HEX_DIGITS = frozenset(string.hexdigits)

_FAMILY_BY_LENGTH = {
    DIGEST_HEX_LENGTHS[DigestAlgorithm.MD5]: HashFamily.MD5,
    DIGEST_HEX_LENGTHS[DigestAlgorithm.SHA1]: HashFamily.SHA1,
    DIGEST_HEX_LENGTHS[DigestAlgorithm.SHA512]: HashFamily.SHA512,
}


def describe_hash(stored_hash: str) -> HashDescription:
    """
    Describe a stored hash.

    Surrounding whitespace is ignored, as it usually comes from copy/paste.

    Args:
        stored_hash: Hash text from the accounts table

    Returns:
        HashDescription with the family and any parsed parameters
    """
    text = stored_hash.strip()
    length = len(text)

    if text.startswith(escrypt.PREFIX):
        try:
            parsed = escrypt.parse_escrypt(text)
        except MalformedStoredHashError:
            return HashDescription(HashFamily.ESCRYPT, length, verifiable=True, well_formed=False)
        return HashDescription(
            HashFamily.ESCRYPT,
            length,
            verifiable=True,
            parameters={"log2_n": parsed.log2_n, "n": parsed.n, "r": parsed.r, "p": parsed.p},
        )

    if text.startswith(argon2id.PREFIX):
        try:
            _, params = argon2id.parse_phc(text)
        except MalformedStoredHashError:
            return HashDescription(HashFamily.ARGON2, length, well_formed=False)
        return HashDescription(HashFamily.ARGON2, length, parameters=params)

    family = _FAMILY_BY_LENGTH.get(length)
    if family is not None and set(text) <= _HEX_DIGITS:
        return HashDescription(family, length)

    return HashDescription(HashFamily.UNKNOWN, length, well_formed=False)
