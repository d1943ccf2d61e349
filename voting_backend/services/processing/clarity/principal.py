"""c32check address encoding for Stacks principals."""

import hashlib
from typing import Tuple

C32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

# Address versions
MAINNET_SINGLE_SIG = 22
MAINNET_MULTI_SIG = 20
TESTNET_SINGLE_SIG = 26
TESTNET_MULTI_SIG = 21

HASH160_LENGTH = 20
CHECKSUM_LENGTH = 4


def c32_normalize(text: str) -> str:
    """Map visually ambiguous characters onto the c32 alphabet."""
    return text.upper().replace("O", "0").replace("L", "1").replace("I", "1")


def c32_encode(data: bytes) -> str:
    number = int.from_bytes(data, "big")
    digits = []
    while number > 0:
        number, remainder = divmod(number, 32)
        digits.append(C32_ALPHABET[remainder])

    # Every leading zero byte is kept as one leading "0" digit
    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    return "0" * leading_zeros + "".join(reversed(digits))


def c32_decode(text: str) -> bytes:
    text = c32_normalize(text)
    number = 0
    for char in text:
        index = C32_ALPHABET.find(char)
        if index < 0:
            raise ValueError(f"Invalid c32 character: {char!r}")
        number = number * 32 + index

    leading_zeros = len(text) - len(text.lstrip("0"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * leading_zeros + body


def _checksum(payload: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:CHECKSUM_LENGTH]


def c32check_encode(version: int, data: bytes) -> str:
    if not 0 <= version < 32:
        raise ValueError(f"Invalid c32 version: {version}")
    checksum = _checksum(bytes([version]) + data)
    return C32_ALPHABET[version] + c32_encode(data + checksum)


def c32check_decode(text: str) -> Tuple[int, bytes]:
    text = c32_normalize(text)
    if len(text) < 2:
        raise ValueError("c32check string is too short")

    version = C32_ALPHABET.find(text[0])
    if version < 0:
        raise ValueError(f"Invalid c32 version character: {text[0]!r}")

    decoded = c32_decode(text[1:])
    if len(decoded) < CHECKSUM_LENGTH:
        raise ValueError("c32check string is missing its checksum")

    data, checksum = decoded[:-CHECKSUM_LENGTH], decoded[-CHECKSUM_LENGTH:]
    if _checksum(bytes([version]) + data) != checksum:
        raise ValueError("c32check checksum mismatch")
    return version, data


def encode_principal_address(version: int, hash160: bytes) -> str:
    """Render a version byte and hash160 as an ``S``-prefixed Stacks address."""
    if len(hash160) != HASH160_LENGTH:
        raise ValueError(f"hash160 must be {HASH160_LENGTH} bytes, got {len(hash160)}")
    return "S" + c32check_encode(version, hash160)


def decode_principal_address(address: str) -> Tuple[int, bytes]:
    """Parse a Stacks address into its version byte and hash160.

    Raises:
        ValueError: If the address is malformed or its checksum does not match
    """
    if not address or address[0].upper() != "S":
        raise ValueError(f"Stacks address must start with 'S': {address!r}")

    version, hash160 = c32check_decode(address[1:])
    if len(hash160) != HASH160_LENGTH:
        raise ValueError(f"Address does not encode a {HASH160_LENGTH}-byte hash160")
    return version, hash160
