"""
eqcrypt
=======
Password hashes for EQEmu login accounts.

Reproduces the 14 encryption modes of the login server (unsalted
MD5/SHA1/SHA512 variants, libsodium Argon2id and libsodium scrypt ``$7$``)
and verifies passwords against stored scrypt hashes.
"""

__version__ = "0.1.0"

# Codec
from eqcrypt.crypt64 import encode_uint, decode_uint, encode_bytes, decode_bytes

# Modes
from eqcrypt.modes import (
    EncryptionMode,
    MODE_TABLE,
    USERNAME_REQUIRED_MODES,
    mode_requires_username,
    mode_labels,
    parse_mode_selection,
)

# Engine
from eqcrypt.engine import (
    HashEngine,
    get_default_engine,
    generate,
    generate_checked,
    check_credentials,
    identify_and_verify,
    verify,
)

# Async
from eqcrypt.async_ops import generate_async, identify_and_verify_async, verify_async

# Inspection
from eqcrypt.inspection import describe_hash

# Models
from eqcrypt.models import VerifyOutcome, VerifyResult, HashFamily, HashDescription

# Salt
from eqcrypt.salt import SaltSource, SystemSaltSource, FixedSaltSource

# Errors
from eqcrypt.errors import (
    EqCryptError,
    UnsupportedModeError,
    RandomSourceFailure,
    VerificationUnsupportedError,
    FormatUnrecognizedError,
    MalformedStoredHashError,
    MalformedEncodingError,
    ConfigurationError,
    CredentialPolicyError,
    PasswordRequiredError,
    UsernameRequiredError,
)

__all__ = [
    # Codec
    "encode_uint",
    "decode_uint",
    "encode_bytes",
    "decode_bytes",
    # Modes
    "EncryptionMode",
    "MODE_TABLE",
    "USERNAME_REQUIRED_MODES",
    "mode_requires_username",
    "mode_labels",
    "parse_mode_selection",
    # Engine
    "HashEngine",
    "get_default_engine",
    "generate",
    "generate_checked",
    "check_credentials",
    "identify_and_verify",
    "verify",
    # Async
    "generate_async",
    "identify_and_verify_async",
    "verify_async",
    # Inspection
    "describe_hash",
    # Models
    "VerifyOutcome",
    "VerifyResult",
    "HashFamily",
    "HashDescription",
    # Salt
    "SaltSource",
    "SystemSaltSource",
    "FixedSaltSource",
    # Errors
    "EqCryptError",
    "UnsupportedModeError",
    "RandomSourceFailure",
    "VerificationUnsupportedError",
    "FormatUnrecognizedError",
    "MalformedStoredHashError",
    "MalformedEncodingError",
    "ConfigurationError",
    "CredentialPolicyError",
    "PasswordRequiredError",
    "UsernameRequiredError",
]
