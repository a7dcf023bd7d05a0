"""
Legacy Digest Schemes
=====================
Unsalted MD5/SHA1/SHA512 modes (1-12) of the login server.

Each algorithm comes in four layouts:
- plain:             H(password)
- password:username: H(password + ":" + username)
- username:password: H(username + ":" + password)
- triple:            H(hex(H(username)) + hex(H(password)))

Output is the lowercase hex digest. No salt, fully deterministic.
"""

import hashlib
from enum import Enum


class DigestAlgorithm(str, Enum):
    """Digest algorithms used by the legacy modes."""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA512 = "sha512"


class DigestLayout(str, Enum):
    """How username and password are combined before hashing."""
    PLAIN = "plain"
    PASSWORD_USERNAME = "password:username"
    USERNAME_PASSWORD = "username:password"
    TRIPLE = "triple"


# Hex digest length per algorithm
DIGEST_HEX_LENGTHS = {
    DigestAlgorithm.MD5: 32,
    DigestAlgorithm.SHA1: 40,
    DigestAlgorithm.SHA512: 128,
}


def hex_digest(algorithm: DigestAlgorithm, text: str) -> str:
    """Lowercase hex digest of the UTF-8 encoding of ``text``."""
    return hashlib.new(algorithm.value, text.encode("utf-8")).hexdigest()


def legacy_hash(
    algorithm: DigestAlgorithm,
    layout: DigestLayout,
    username: str,
    password: str,
) -> str:
    """
    Compute a legacy login-server digest.

    Args:
        algorithm: MD5, SHA1 or SHA512
        layout: How the username and password are combined
        username: Account name (ignored by the plain layout)
        password: Plain text password

    Returns:
        Lowercase hex digest
    """
    if layout is DigestLayout.PLAIN:
        return hex_digest(algorithm, password)
    if layout is DigestLayout.PASSWORD_USERNAME:
        return hex_digest(algorithm, f"{password}:{username}")
    if layout is DigestLayout.USERNAME_PASSWORD:
        return hex_digest(algorithm, f"{username}:{password}")
    return hex_digest(
        algorithm,
        hex_digest(algorithm, username) + hex_digest(algorithm, password),
    )
