"""
KDF Scheme Tests
================
Tests for the salted schemes: escrypt ($7$) and Argon2id (PHC), plus the
verify path and hash inspection.
"""

import re

import pytest

RAW_SALT = bytes(range(32))
ENCODED_SALT = ".2U.1EE/4Q.07ck0AoU1D.F2GA/3JMl3MYV4PkF5Sw/"
KNOWN_SCRYPT = (
    "$7$C6..../...."
    ".2U.1EE/4Q.07ck0AoU1D.F2GA/3JMl3MYV4PkF5Sw/"
    "$hGwWtG6/FvGnVcNK1rBUDVcIY1O3M1logjZZrSxiMl9"
)


@pytest.fixture
def fixed_engine():
    from eqcrypt.engine import HashEngine
    from eqcrypt.salt import FixedSaltSource

    return HashEngine(salt_source=FixedSaltSource(RAW_SALT))


class TestEscrypt:
    """Tests for the scrypt $7$ encoder and verifier."""

    def test_known_answer_with_fixed_salt(self, fixed_engine):
        """Should hash the encoded salt text, not the raw bytes."""
        assert fixed_engine.generate("", "correcthorse", 14) == KNOWN_SCRYPT

    def test_known_answer_verifies(self):
        """A pinned hash should verify with the right password only."""
        from eqcrypt.schemes.escrypt import verify_escrypt

        assert verify_escrypt(KNOWN_SCRYPT, "correcthorse") is True
        assert verify_escrypt(KNOWN_SCRYPT, "wrong") is False

    @pytest.mark.parametrize("password", ["correcthorse", "pa$$w0rd$", "pässwörd 密码", "x"])
    def test_round_trip_scenario(self, password):
        """Should generate a 101-char $7$ string that verifies."""
        from eqcrypt.engine import HashEngine

        engine = HashEngine()
        stored = engine.generate("anyone", password, 14)

        assert stored.startswith("$7$C6..../....")
        assert len(stored) == 3 + 1 + 5 + 5 + 43 + 1 + 43
        assert engine.verify(stored, password) is True
        assert engine.verify(stored, password + "!") is False

    def test_fresh_salt_each_call(self):
        """Two hashes of the same password should differ."""
        from eqcrypt.engine import HashEngine

        engine = HashEngine()

        assert engine.generate("", "correcthorse", 14) != engine.generate("", "correcthorse", 14)

    @pytest.mark.parametrize("position", [0, 1, 21, 41, 42])
    def test_flipped_hash_character_fails(self, position):
        """Any change after the final $ should fail verification."""
        from eqcrypt.crypt64 import ALPHABET
        from eqcrypt.schemes.escrypt import verify_escrypt

        start = KNOWN_SCRYPT.rfind("$") + 1
        index = start + position
        original = KNOWN_SCRYPT[index]
        replacement = ALPHABET[(ALPHABET.index(original) + 1) % len(ALPHABET)]
        tampered = KNOWN_SCRYPT[:index] + replacement + KNOWN_SCRYPT[index + 1:]

        assert verify_escrypt(tampered, "correcthorse") is False

    @pytest.mark.parametrize("stored", [
        "",
        "$7$",
        "$7$C6..../...",
        "$6$C6..../.....2U.1EE/4Q$abc",
        "7$C6..../.....2U.1EE/4Q.07ck0AoU1D$abc",
    ])
    def test_malformed_returns_false(self, stored):
        """Short or foreign strings should be rejected without raising."""
        from eqcrypt.schemes.escrypt import verify_escrypt

        assert verify_escrypt(stored, "correcthorse") is False

    def test_missing_separator_returns_false(self):
        """Without a $ after the setting block the hash is malformed."""
        from eqcrypt.schemes.escrypt import verify_escrypt

        assert verify_escrypt("$7$C6..../....abcdefgh", "correcthorse") is False

    def test_lone_surrogate_returns_false(self):
        """Text that cannot be encoded as UTF-8 is a failed match."""
        from eqcrypt.schemes.escrypt import verify_escrypt

        broken_salt = KNOWN_SCRYPT[:20] + "\ud800" + KNOWN_SCRYPT[21:]

        assert verify_escrypt(broken_salt, "correcthorse") is False
        assert verify_escrypt(KNOWN_SCRYPT, "correct\ud800horse") is False

    def test_derivation_error_returns_false(self):
        """A scrypt failure inside verify should not escape."""
        from eqcrypt.schemes.escrypt import verify_escrypt

        assert verify_escrypt(KNOWN_SCRYPT, "correcthorse", maxmem=16 * 1024 * 1024) is False

    def test_parse_escrypt(self):
        """Should decode the parameter fields."""
        from eqcrypt.schemes.escrypt import parse_escrypt

        parsed = parse_escrypt(KNOWN_SCRYPT)

        assert (parsed.log2_n, parsed.n, parsed.r, parsed.p) == (14, 16384, 8, 1)
        assert parsed.salt == ENCODED_SALT
        assert parsed.hash == "hGwWtG6/FvGnVcNK1rBUDVcIY1O3M1logjZZrSxiMl9"

    def test_parse_escrypt_rejects_broken_fields(self):
        """Foreign characters in a parameter field should raise."""
        from eqcrypt.errors import MalformedStoredHashError
        from eqcrypt.schemes.escrypt import parse_escrypt

        with pytest.raises(MalformedStoredHashError):
            parse_escrypt("$7$C6...-/....salt$hash")
        with pytest.raises(MalformedStoredHashError):
            parse_escrypt("$7$C6..../....nosep")


class TestArgon2id:
    """Tests for the Argon2id PHC encoder."""

    PHC_RE = re.compile(r"^\$argon2id\$v=19\$m=65536,t=2,p=1\$[A-Za-z0-9+/]{22}\$[A-Za-z0-9+/]{43}$")

    def test_phc_layout(self):
        """Should emit libsodium's interactive PHC string."""
        from eqcrypt.engine import HashEngine

        stored = HashEngine().generate("", "correcthorse", 13)

        assert self.PHC_RE.match(stored)
        assert all("=" not in field for field in stored.split("$")[4:])

    def test_fixed_salt_is_embedded(self):
        """The salt field is the unpadded base64 of the drawn salt."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.salt import FixedSaltSource

        stored = HashEngine(salt_source=FixedSaltSource(bytes(range(16)))).generate("", "correcthorse", 13)

        assert stored.split("$")[4] == "AAECAwQFBgcICQoLDA0ODw"

    def test_accepted_by_reference_verifier(self):
        """argon2-cffi should verify what we encode."""
        from argon2 import PasswordHasher
        from argon2.exceptions import VerifyMismatchError
        from eqcrypt.engine import HashEngine

        stored = HashEngine().generate("", "correcthorse", 13)
        hasher = PasswordHasher()

        assert hasher.verify(stored, "correcthorse") is True
        with pytest.raises(VerifyMismatchError):
            hasher.verify(stored, "wrong")

    def test_parse_phc(self):
        """Should extract the cost parameters."""
        from eqcrypt.schemes.argon2id import parse_phc

        variant, params = parse_phc(
            "$argon2id$v=19$m=65536,t=2,p=1$AAECAwQFBgcICQoLDA0ODw$"
            "hGwWtG6FvGnVcNK1rBUDVcIY1O3M1logjZZrSxiMl9A"
        )

        assert variant == "argon2id"
        assert params == {"v": 19, "m": 65536, "t": 2, "p": 1}


class TestVerify:
    """Tests for the prefix-sniffing verify path."""

    def test_scrypt_outcomes(self):
        """$7$ hashes should verify or not."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.models import VerifyOutcome

        engine = HashEngine()
        good = engine.identify_and_verify(KNOWN_SCRYPT, "correcthorse")
        bad = engine.identify_and_verify(KNOWN_SCRYPT, "wrong")

        assert good.outcome is VerifyOutcome.VERIFIED
        assert good.matched is True
        assert good.scheme == "escrypt"
        assert bad.outcome is VerifyOutcome.NOT_VERIFIED
        assert bad.matched is False

    def test_malformed_scrypt_is_not_verified(self):
        """A broken $7$ string is a failed match, not an error."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.models import VerifyOutcome

        result = HashEngine().identify_and_verify("$7$short", "correcthorse")

        assert result.outcome is VerifyOutcome.NOT_VERIFIED

    @pytest.mark.parametrize("stored", [
        KNOWN_SCRYPT + "\n",
        " " + KNOWN_SCRYPT,
        "\t" + KNOWN_SCRYPT + "\r\n",
    ])
    def test_surrounding_whitespace_ignored(self, stored):
        """A pasted hash should verify the same as the trimmed one."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.inspection import describe_hash
        from eqcrypt.models import VerifyOutcome

        engine = HashEngine()
        result = engine.identify_and_verify(stored, "correcthorse")

        assert result.outcome is VerifyOutcome.VERIFIED
        assert result.hash_length == len(KNOWN_SCRYPT)
        assert engine.verify(stored, "correcthorse") is True
        assert describe_hash(stored).verifiable is True

    def test_argon2_is_unsupported(self):
        """Argon2 hashes should be reported, not verified."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.errors import VerificationUnsupportedError
        from eqcrypt.models import VerifyOutcome

        engine = HashEngine()
        stored = "$argon2id$v=19$m=65536,t=2,p=1$AAECAwQFBgcICQoLDA0ODw$abc"

        assert engine.identify_and_verify(stored, "x").outcome is VerifyOutcome.UNSUPPORTED
        with pytest.raises(VerificationUnsupportedError):
            engine.verify(stored, "x")

    def test_legacy_digest_is_unrecognized(self):
        """Hex digests carry no prefix and cannot be verified without a username."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.errors import FormatUnrecognizedError
        from eqcrypt.models import VerifyOutcome

        engine = HashEngine()
        result = engine.identify_and_verify("2ab96390c7dbe3439de74d0c9b0b1767", "hunter2")

        assert result.outcome is VerifyOutcome.UNRECOGNIZED
        assert result.hash_length == 32
        assert "MD5=32" in result.reason
        with pytest.raises(FormatUnrecognizedError) as exc_info:
            engine.verify("2ab96390c7dbe3439de74d0c9b0b1767", "hunter2")
        assert exc_info.value.length == 32


class TestRandomSource:
    """Tests for salt drawing."""

    @pytest.mark.parametrize("mode", [13, 14])
    def test_random_failure_surfaces(self, monkeypatch, mode):
        """An entropy failure should raise, never fall back."""
        import eqcrypt.salt
        from eqcrypt.engine import HashEngine
        from eqcrypt.errors import RandomSourceFailure

        def boom(length):
            raise OSError("entropy pool unavailable")

        monkeypatch.setattr(eqcrypt.salt.secrets, "token_bytes", boom)

        with pytest.raises(RandomSourceFailure) as exc_info:
            HashEngine().generate("", "correcthorse", mode)
        assert isinstance(exc_info.value.cause, OSError)

    def test_fixed_salt_length_mismatch(self):
        """A fixed salt of the wrong size should be refused."""
        from eqcrypt.salt import FixedSaltSource

        with pytest.raises(ValueError):
            FixedSaltSource(b"short").draw(32)

    def test_legacy_modes_draw_nothing(self):
        """Unsalted modes should never touch the salt source."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.salt import SaltSource

        class Exploding(SaltSource):
            def draw(self, length):
                raise AssertionError("salt drawn")

        engine = HashEngine(salt_source=Exploding())
        for mode in range(1, 13):
            engine.generate("tester", "hunter2", mode)


class TestInspection:
    """Tests for describe_hash."""

    def test_escrypt(self):
        """Should parse $7$ parameters."""
        from eqcrypt.inspection import describe_hash
        from eqcrypt.models import HashFamily

        info = describe_hash(KNOWN_SCRYPT)

        assert info.family is HashFamily.ESCRYPT
        assert info.verifiable is True
        assert info.parameters == {"log2_n": 14, "n": 16384, "r": 8, "p": 1}
        assert info.length == 101

    def test_argon2(self):
        """Should parse PHC parameters."""
        from eqcrypt.inspection import describe_hash
        from eqcrypt.models import HashFamily

        info = describe_hash(
            "$argon2id$v=19$m=65536,t=2,p=1$AAECAwQFBgcICQoLDA0ODw$"
            "hGwWtG6FvGnVcNK1rBUDVcIY1O3M1logjZZrSxiMl9A"
        )

        assert info.family is HashFamily.ARGON2
        assert info.verifiable is False
        assert info.parameters["m"] == 65536

    @pytest.mark.parametrize("mode,family", [(1, "md5"), (5, "sha1"), (9, "sha512")])
    def test_legacy_length_heuristic(self, mode, family):
        """Hex digests should be classified by length."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.inspection import describe_hash

        info = describe_hash("  " + HashEngine().generate("", "hunter2", mode) + "\n")

        assert info.family.value == family
        assert info.verifiable is False

    def test_unknown(self):
        """Anything else is unknown."""
        from eqcrypt.inspection import describe_hash
        from eqcrypt.models import HashFamily

        assert describe_hash("not a hash").family is HashFamily.UNKNOWN
        assert describe_hash("z" * 32).family is HashFamily.UNKNOWN

    def test_broken_escrypt(self):
        """A $7$ prefix with a broken body is flagged malformed."""
        from eqcrypt.inspection import describe_hash

        info = describe_hash("$7$C6..")

        assert info.family.value == "escrypt"
        assert info.well_formed is False


class TestAsync:
    """Tests for the executor-backed wrappers."""

    @pytest.mark.asyncio
    async def test_generate_and_verify_async(self):
        """Should produce and verify a scrypt hash off the loop."""
        from eqcrypt.async_ops import generate_async, identify_and_verify_async, verify_async
        from eqcrypt.models import VerifyOutcome

        stored = await generate_async("", "correcthorse", 14)

        assert await verify_async(stored, "correcthorse") is True
        result = await identify_and_verify_async(stored, "wrong")
        assert result.outcome is VerifyOutcome.NOT_VERIFIED

    @pytest.mark.asyncio
    async def test_generate_async_with_engine(self, fixed_engine):
        """Should honour an injected engine."""
        from eqcrypt.async_ops import generate_async

        assert await generate_async("", "correcthorse", 14, engine=fixed_engine) == KNOWN_SCRYPT
