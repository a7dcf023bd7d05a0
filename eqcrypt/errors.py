"""
eqcrypt Exceptions
==================
Exception classes raised by the hashing engine.
"""

from typing import Optional


class EqCryptError(Exception):
    """Base exception for all engine errors."""
    pass


class UnsupportedModeError(EqCryptError, ValueError):
    """Raised when an encryption mode is outside 1-14."""

    def __init__(self, mode: object):
        self.mode = mode
        super().__init__(f"unsupported encryption mode: {mode}")


class RandomSourceFailure(EqCryptError):
    """Raised when the system random source cannot supply salt bytes."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class VerificationUnsupportedError(EqCryptError):
    """Raised when verification is requested for an Argon2 hash."""

    def __init__(self, scheme: str = "argon2id"):
        self.scheme = scheme
        super().__init__(f"{scheme} verification is not supported; regenerate and compare instead")


class FormatUnrecognizedError(EqCryptError):
    """Raised when a stored hash matches no known prefix."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"hash format not recognized ({length} chars; MD5=32, SHA1=40, SHA512=128)"
        )


class MalformedStoredHashError(EqCryptError, ValueError):
    """Raised when a stored hash has a known prefix but a broken structure."""
    pass


class MalformedEncodingError(EqCryptError, ValueError):
    """Raised when crypt64 text cannot be decoded."""
    pass


class CredentialPolicyError(EqCryptError, ValueError):
    """Raised when credentials do not satisfy the selected mode."""
    pass


class PasswordRequiredError(CredentialPolicyError):
    """Raised when the password is empty."""

    def __init__(self):
        super().__init__("Password is required")


class UsernameRequiredError(CredentialPolicyError):
    """Raised when the selected mode needs a username and none was given."""

    def __init__(self, mode: int):
        self.mode = mode
        super().__init__(f"Username is required for mode {mode}")


class ConfigurationError(EqCryptError, ValueError):
    """Raised when engine settings cannot work with the fixed KDF presets."""
    pass
