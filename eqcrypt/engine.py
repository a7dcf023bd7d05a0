"""
Hash Engine
===========
Mode dispatcher for generation and the prefix-sniffing verifier.

Generation routes an ``EncryptionMode`` through ``MODE_TABLE`` to one of the
scheme families. Verification only understands the escrypt ``$7$`` format;
Argon2 hashes are reported as unsupported and anything else as unrecognized.
"""

from functools import lru_cache
from typing import Callable, Dict, Optional

import structlog

from .config import ARGON2ID_INTERACTIVE, SCRYPT_INTERACTIVE, EngineConfig
from .errors import (
    FormatUnrecognizedError,
    PasswordRequiredError,
    UnsupportedModeError,
    UsernameRequiredError,
    VerificationUnsupportedError,
)
from .models import VerifyOutcome, VerifyResult
from .modes import MODE_TABLE, ModeSpec, SchemeKind, to_mode
from .salt import SaltSource, SystemSaltSource
from .schemes import argon2id, escrypt
from .schemes.legacy import legacy_hash

logger = structlog.get_logger(__name__)


class HashEngine:
    """Generates and verifies login-server password hashes."""

    def __init__(
        self,
        salt_source: Optional[SaltSource] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.salt_source = salt_source or SystemSaltSource()
        self.config = config or EngineConfig()
        self._generators: Dict[SchemeKind, Callable[[ModeSpec, str, str], str]] = {
            SchemeKind.LEGACY: self._generate_legacy,
            SchemeKind.ARGON2ID: self._generate_argon2id,
            SchemeKind.ESCRYPT: self._generate_escrypt,
        }

    def generate(self, username: str, password: str, mode: Optional[int] = None) -> str:
        """
        Produce the hash the login server would store for these credentials.

        The username policy is not enforced here; see ``check_credentials``.

        Args:
            username: Account name (used only by username modes)
            password: Plain text password
            mode: Encryption mode 1-14 (defaults to config.default_mode)

        Returns:
            Hash text for login_accounts.account_password

        Raises:
            UnsupportedModeError: mode outside 1-14
            RandomSourceFailure: salt draw failed (modes 13 and 14)
        """
        if mode is None:
            mode = self.config.default_mode

        encryption_mode = to_mode(mode)
        if encryption_mode is None:
            logger.warning("Unsupported encryption mode", mode=mode)
            raise UnsupportedModeError(mode)

        spec = MODE_TABLE[encryption_mode]
        result = self._generators[spec.kind](spec, username, password)
        logger.info(
            "Hash generated",
            mode=int(encryption_mode),
            scheme=spec.kind.value,
            length=len(result),
        )
        return result

    def generate_checked(self, username: str, password: str, mode: int) -> str:
        """``check_credentials`` followed by ``generate``."""
        self.check_credentials(username, password, mode)
        return self.generate(username, password, mode)

    def check_credentials(self, username: str, password: str, mode: int) -> None:
        """
        Apply the input policy the account tool enforces before hashing.

        Raises:
            UnsupportedModeError: no mode selected or mode outside 1-14
            PasswordRequiredError: empty password
            UsernameRequiredError: empty username for a username mode
        """
        encryption_mode = to_mode(mode)
        if encryption_mode is None:
            raise UnsupportedModeError(mode)
        if not password:
            raise PasswordRequiredError()
        if MODE_TABLE[encryption_mode].requires_username and not username:
            raise UsernameRequiredError(int(encryption_mode))

    def identify_and_verify(self, stored_hash: str, password: str) -> VerifyResult:
        """
        Verify a password against a stored hash, picking the scheme by prefix.

        Args:
            stored_hash: Hash copied from the accounts table; surrounding
                whitespace is ignored
            password: Plain text password, used as given

        Returns:
            VerifyResult; malformed ``$7$`` strings come back NOT_VERIFIED
        """
        stored_hash = stored_hash.strip()
        length = len(stored_hash)

        if stored_hash.startswith(escrypt.PREFIX):
            matched = escrypt.verify_escrypt(
                stored_hash,
                password,
                SCRYPT_INTERACTIVE,
                self.config.scrypt_maxmem,
            )
            outcome = VerifyOutcome.VERIFIED if matched else VerifyOutcome.NOT_VERIFIED
            logger.info("Hash verified", scheme="escrypt", outcome=outcome.value, length=length)
            return VerifyResult(outcome=outcome, scheme="escrypt", hash_length=length)

        if stored_hash.startswith(argon2id.PREFIX):
            logger.info("Argon2 verification requested", outcome=VerifyOutcome.UNSUPPORTED.value)
            return VerifyResult(
                outcome=VerifyOutcome.UNSUPPORTED,
                scheme="argon2id",
                reason=str(VerificationUnsupportedError()),
                hash_length=length,
            )

        logger.info("Unrecognized hash format", outcome=VerifyOutcome.UNRECOGNIZED.value, length=length)
        return VerifyResult(
            outcome=VerifyOutcome.UNRECOGNIZED,
            reason=str(FormatUnrecognizedError(length)),
            hash_length=length,
        )

    def verify(self, stored_hash: str, password: str) -> bool:
        """
        Boolean form of ``identify_and_verify``.

        Raises:
            VerificationUnsupportedError: stored hash is Argon2
            FormatUnrecognizedError: stored hash has no known prefix
        """
        result = self.identify_and_verify(stored_hash, password)
        if result.outcome is VerifyOutcome.UNSUPPORTED:
            raise VerificationUnsupportedError(result.scheme)
        if result.outcome is VerifyOutcome.UNRECOGNIZED:
            raise FormatUnrecognizedError(result.hash_length)
        return result.matched

    def _generate_legacy(self, spec: ModeSpec, username: str, password: str) -> str:
        return legacy_hash(spec.algorithm, spec.layout, username, password)

    def _generate_argon2id(self, spec: ModeSpec, username: str, password: str) -> str:
        return argon2id.hash_argon2id(password, self.salt_source, ARGON2ID_INTERACTIVE)

    def _generate_escrypt(self, spec: ModeSpec, username: str, password: str) -> str:
        return escrypt.hash_escrypt(
            password,
            self.salt_source,
            SCRYPT_INTERACTIVE,
            self.config.scrypt_maxmem,
        )


@lru_cache(maxsize=1)
def get_default_engine() -> HashEngine:
    """Cached engine using the system random source."""
    return HashEngine()


def generate(username: str, password: str, mode: Optional[int] = None) -> str:
    """Generate a hash with the default engine."""
    return get_default_engine().generate(username, password, mode)


def generate_checked(username: str, password: str, mode: int) -> str:
    """Check the input policy, then generate with the default engine."""
    return get_default_engine().generate_checked(username, password, mode)


def check_credentials(username: str, password: str, mode: int) -> None:
    """Apply the input policy with the default engine."""
    get_default_engine().check_credentials(username, password, mode)


def identify_and_verify(stored_hash: str, password: str) -> VerifyResult:
    """Verify by prefix with the default engine."""
    return get_default_engine().identify_and_verify(stored_hash, password)


def verify(stored_hash: str, password: str) -> bool:
    """Boolean verify with the default engine."""
    return get_default_engine().verify(stored_hash, password)
