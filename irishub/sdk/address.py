"""Account addresses and their bech32 text form."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

DEFAULT_PREFIX = "iaa"
ADDRESS_LENGTH = 20
MAX_ADDRESS_LENGTH = 255

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_CHARSET_INDEX = {char: index for index, char in enumerate(_CHARSET)}
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_MAX_BECH32_LENGTH = 1023
_CHECKSUM_LENGTH = 6


def _polymod(values: list[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATOR):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(char) >> 5 for char in hrp] + [0] + [ord(char) & 31 for char in hrp]


def _convert_bits(data, from_bits: int, to_bits: int, pad: bool) -> list[int]:
    accumulator = 0
    bits = 0
    out: list[int] = []
    max_value = (1 << to_bits) - 1
    max_accumulator = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise ValueError(f"invalid data value {value}")
        accumulator = ((accumulator << from_bits) | value) & max_accumulator
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((accumulator >> bits) & max_value)
    if pad:
        if bits:
            out.append((accumulator << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (accumulator << (to_bits - bits)) & max_value:
        raise ValueError("invalid padding in bech32 data")
    return out


def _check_hrp(hrp: str) -> None:
    if not hrp:
        raise ValueError("bech32 human-readable part is empty")
    if any(not 33 <= ord(char) <= 126 for char in hrp):
        raise ValueError(f"invalid character in human-readable part {hrp!r}")


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode 8-bit ``data`` as a bech32 string with the given prefix."""
    _check_hrp(hrp)
    hrp = hrp.lower()
    values = _convert_bits(bytes(data), 8, 5, True)
    polymod = _polymod(_hrp_expand(hrp) + values + [0] * _CHECKSUM_LENGTH) ^ 1
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(_CHECKSUM_LENGTH)]
    return hrp + "1" + "".join(_CHARSET[value] for value in values + checksum)


def bech32_decode(text: str) -> tuple[str, bytes]:
    """Decode a bech32 string into its prefix and 8-bit data."""
    if len(text) > _MAX_BECH32_LENGTH:
        raise ValueError(f"bech32 string too long: {len(text)} characters")
    if any(not 33 <= ord(char) <= 126 for char in text):
        raise ValueError("invalid character in bech32 string")
    if text.lower() != text and text.upper() != text:
        raise ValueError("bech32 string has mixed case")
    text = text.lower()
    separator = text.rfind("1")
    if separator < 1 or separator + _CHECKSUM_LENGTH + 1 > len(text):
        raise ValueError("invalid bech32 separator position")
    hrp = text[:separator]
    try:
        values = [_CHARSET_INDEX[char] for char in text[separator + 1 :]]
    except KeyError as exc:
        raise ValueError(f"invalid bech32 character {exc.args[0]!r}") from None
    if _polymod(_hrp_expand(hrp) + values) != 1:
        raise ValueError("invalid bech32 checksum")
    data = _convert_bits(values[:-_CHECKSUM_LENGTH], 5, 8, False)
    return hrp, bytes(data)


def address_hash(data: bytes) -> bytes:
    """Return the 20-byte address derived from ``data`` (truncated SHA-256)."""
    return hashlib.sha256(data).digest()[:ADDRESS_LENGTH]


@dataclass(frozen=True)
class AccAddress:
    """Raw account address bytes."""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def from_bech32(cls, text: str, prefix: str = DEFAULT_PREFIX) -> AccAddress:
        """Parse a bech32 address that must carry ``prefix``."""
        if not text.strip():
            raise ValueError("empty address string is not allowed")
        hrp, data = bech32_decode(text)
        if hrp != prefix:
            raise ValueError(f"invalid Bech32 prefix; expected {prefix}, got {hrp}")
        address = cls(data)
        address._verify()
        return address

    @classmethod
    def from_hex(cls, text: str) -> AccAddress:
        """Parse an address given as hexadecimal text."""
        if not text:
            raise ValueError("decoding Bech32 address failed: must provide an address")
        return cls(bytes.fromhex(text))

    def _verify(self) -> None:
        if not self.data:
            raise ValueError("addresses cannot be empty")
        if len(self.data) > MAX_ADDRESS_LENGTH:
            raise ValueError(
                f"address max length is {MAX_ADDRESS_LENGTH}, got {len(self.data)}"
            )

    def to_bech32(self, prefix: str = DEFAULT_PREFIX) -> str:
        """Return the bech32 form; an empty address gives an empty string."""
        if not self.data:
            return ""
        return bech32_encode(prefix, self.data)

    def hex(self) -> str:
        """Return the address as upper-case hexadecimal."""
        return self.data.hex().upper()

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.to_bech32()