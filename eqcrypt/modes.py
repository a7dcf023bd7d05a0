"""
Encryption Modes
================
The login server's ``EncryptionMode`` enum and the tables keyed by it.

Adding a mode means adding an enum member and a ``MODE_TABLE`` row; nothing
else dispatches on mode numbers.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, Optional

from .schemes.legacy import DigestAlgorithm, DigestLayout


class EncryptionMode(IntEnum):
    """Encryption modes, numbered as in loginserver/encryption.h."""
    MD5 = 1
    MD5_PASSWORD_USERNAME = 2
    MD5_USERNAME_PASSWORD = 3
    MD5_TRIPLE = 4
    SHA1 = 5
    SHA1_PASSWORD_USERNAME = 6
    SHA1_USERNAME_PASSWORD = 7
    SHA1_TRIPLE = 8
    SHA512 = 9
    SHA512_PASSWORD_USERNAME = 10
    SHA512_USERNAME_PASSWORD = 11
    SHA512_TRIPLE = 12
    ARGON2 = 13
    SCRYPT = 14


class SchemeKind(str, Enum):
    """Hash families a mode can map to."""
    LEGACY = "legacy"
    ARGON2ID = "argon2id"
    ESCRYPT = "escrypt"


@dataclass(frozen=True)
class ModeSpec:
    """How one encryption mode is computed and presented."""
    label: str
    kind: SchemeKind
    requires_username: bool = False
    algorithm: Optional[DigestAlgorithm] = None
    layout: Optional[DigestLayout] = None


def _legacy(label: str, algorithm: DigestAlgorithm, layout: DigestLayout) -> ModeSpec:
    return ModeSpec(
        label=label,
        kind=SchemeKind.LEGACY,
        requires_username=layout is not DigestLayout.PLAIN,
        algorithm=algorithm,
        layout=layout,
    )


_MD5, _SHA1, _SHA512 = DigestAlgorithm.MD5, DigestAlgorithm.SHA1, DigestAlgorithm.SHA512
_PLAIN = DigestLayout.PLAIN
_PU = DigestLayout.PASSWORD_USERNAME
_UP = DigestLayout.USERNAME_PASSWORD
_TRIPLE = DigestLayout.TRIPLE

MODE_TABLE: Dict[EncryptionMode, ModeSpec] = {
    EncryptionMode.MD5: _legacy("1 - MD5", _MD5, _PLAIN),
    EncryptionMode.MD5_PASSWORD_USERNAME: _legacy("2 - MD5 (password:username)", _MD5, _PU),
    EncryptionMode.MD5_USERNAME_PASSWORD: _legacy("3 - MD5 (username:password)", _MD5, _UP),
    EncryptionMode.MD5_TRIPLE: _legacy("4 - MD5 Triple", _MD5, _TRIPLE),
    EncryptionMode.SHA1: _legacy("5 - SHA1", _SHA1, _PLAIN),
    EncryptionMode.SHA1_PASSWORD_USERNAME: _legacy(
        "6 - SHA1 (password:username) [default without ENABLE_SECURITY]", _SHA1, _PU
    ),
    EncryptionMode.SHA1_USERNAME_PASSWORD: _legacy("7 - SHA1 (username:password)", _SHA1, _UP),
    EncryptionMode.SHA1_TRIPLE: _legacy("8 - SHA1 Triple", _SHA1, _TRIPLE),
    EncryptionMode.SHA512: _legacy("9 - SHA512", _SHA512, _PLAIN),
    EncryptionMode.SHA512_PASSWORD_USERNAME: _legacy("10 - SHA512 (password:username)", _SHA512, _PU),
    EncryptionMode.SHA512_USERNAME_PASSWORD: _legacy("11 - SHA512 (username:password)", _SHA512, _UP),
    EncryptionMode.SHA512_TRIPLE: _legacy("12 - SHA512 Triple", _SHA512, _TRIPLE),
    EncryptionMode.ARGON2: ModeSpec(
        label="13 - Argon2 [default with ENABLE_SECURITY]",
        kind=SchemeKind.ARGON2ID,
    ),
    EncryptionMode.SCRYPT: ModeSpec(
        label="14 - SCrypt",
        kind=SchemeKind.ESCRYPT,
    ),
}

# Modes that combine the username into the digest
USERNAME_REQUIRED_MODES = frozenset(
    mode for mode, spec in MODE_TABLE.items() if spec.requires_username
)


def to_mode(mode: object) -> Optional[EncryptionMode]:
    """Coerce an int-like value to an ``EncryptionMode``; None if it is not one."""
    if isinstance(mode, bool):
        return None
    try:
        return EncryptionMode(mode)
    except ValueError:
        return None


def mode_requires_username(mode: int) -> bool:
    """True if ``mode`` folds the username into the hash. Unknown modes: False."""
    return to_mode(mode) in USERNAME_REQUIRED_MODES


def mode_labels() -> List[str]:
    """Selector labels in mode order."""
    return [MODE_TABLE[mode].label for mode in EncryptionMode]


def parse_mode_selection(selection: str) -> int:
    """
    Recover the mode number from a selector label such as ``"14 - SCrypt"``.

    Returns:
        The leading integer, or 0 if there is none
    """
    head = selection.strip().split(" ", 1)[0] if selection else ""
    try:
        return int(head)
    except ValueError:
        return 0
