"""
Crypt64 Codec
=============
The base64 variant used by libsodium's escrypt ($7$) strings.

Differences from RFC 4648 base64:
- Alphabet is ``./0-9A-Za-z`` (index 0 = ``.``)
- Bits are packed little-endian: the low 6 bits of the first byte become
  the first symbol
- A trailing 1-byte group emits 2 symbols, a 2-byte group emits 3 symbols;
  no ``=`` padding is ever written
"""

from typing import Dict

from .errors import MalformedEncodingError

ALPHABET = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

_INDEX: Dict[str, int] = {char: i for i, char in enumerate(ALPHABET)}


def symbols_for_bits(bit_width: int) -> int:
    """Number of symbols needed to hold ``bit_width`` bits."""
    return (bit_width + 5) // 6


def encode_uint(value: int, bit_width: int) -> str:
    """
    Encode an unsigned integer into a fixed number of symbols.

    Args:
        value: Non-negative integer
        bit_width: Field width in bits (6 for log2(N), 30 for r and p)

    Returns:
        ceil(bit_width / 6) symbols, least-significant first
    """
    out = []
    for _ in range(symbols_for_bits(bit_width)):
        out.append(ALPHABET[value & 0x3F])
        value >>= 6
    return "".join(out)


def decode_uint(text: str, bit_width: int) -> int:
    """
    Decode a fixed-width integer field written by ``encode_uint``.

    Raises:
        MalformedEncodingError: wrong symbol count or foreign character
    """
    expected = symbols_for_bits(bit_width)
    if len(text) != expected:
        raise MalformedEncodingError(
            f"expected {expected} symbols for a {bit_width}-bit field, got {len(text)}"
        )
    value = 0
    for shift, char in enumerate(text):
        value |= _symbol_value(char) << (6 * shift)
    if value >> bit_width:
        raise MalformedEncodingError(f"value does not fit in {bit_width} bits")
    return value


def encode_bytes(data: bytes) -> str:
    """
    Encode raw bytes with the escrypt alphabet.

    Args:
        data: Bytes to encode

    Returns:
        Encoded text, 4 symbols per 3 bytes, unpadded
    """
    out = []
    for offset in range(0, len(data), 3):
        chunk = data[offset:offset + 3]
        value = 0
        for i, byte in enumerate(chunk):
            value |= byte << (8 * i)
        # 1 byte -> 2 symbols, 2 bytes -> 3, 3 bytes -> 4
        for i in range(len(chunk) + 1):
            out.append(ALPHABET[(value >> (6 * i)) & 0x3F])
    return "".join(out)


def decode_bytes(text: str) -> bytes:
    """
    Decode escrypt-alphabet text back into bytes.

    Args:
        text: Output of ``encode_bytes``

    Returns:
        The original bytes

    Raises:
        MalformedEncodingError: foreign character, impossible length, or
            non-zero bits left over in the final group
    """
    if len(text) % 4 == 1:
        raise MalformedEncodingError(f"invalid crypt64 length: {len(text)}")

    out = bytearray()
    for offset in range(0, len(text), 4):
        group = text[offset:offset + 4]
        value = 0
        for i, char in enumerate(group):
            value |= _symbol_value(char) << (6 * i)
        byte_count = len(group) - 1
        if value >> (8 * byte_count):
            raise MalformedEncodingError("non-canonical trailing bits in crypt64 text")
        out.extend((value >> (8 * i)) & 0xFF for i in range(byte_count))
    return bytes(out)


def _symbol_value(char: str) -> int:
    try:
        return _INDEX[char]
    except KeyError:
        raise MalformedEncodingError(f"character {char!r} is not in the crypt64 alphabet") from None
