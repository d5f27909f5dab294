"""Compact Base45 text for UUID v4 values.

A UUID v4 carries 6 fixed bits (the version nibble and the RFC 4122 variant),
so only 122 of its 128 bits need to be stored. Those are packed LSB first into
16 bytes and written in Base45, whose alphabet is exactly the QR alphanumeric
character set. The resulting 24 characters fit a version 1 symbol at level L
when packed in alphanumeric mode.
"""

import logging
import uuid
from itertools import compress

from encoding import ALPHANUMERIC_CHARSET
from utils import iter_bits, pack_bits, split_into_segments

logger = logging.getLogger(__name__)

UUID_LENGTH = 16

# (byte index, mask, value) of the bits every UUID v4 shares
VERSION_BITS = (6, 0b1111_0000, 0b0100_0000)
VARIANT_BITS = (8, 0b1100_0000, 0b1000_0000)

PADDING_MASK = 0b1111_1100


class Uuid45Error(ValueError):
    pass


class InvalidUuid(Uuid45Error):
    pass


class InvalidBase45(Uuid45Error):
    pass


class InvalidLength(Uuid45Error):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"Invalid length: expected {expected} got {actual}")
        self.expected = expected
        self.actual = actual


class NonZeroPadding(Uuid45Error):
    def __init__(self):
        super().__init__("Non-zero padding bits in compact payload")


# https://www.rfc-editor.org/rfc/rfc9285#section-4
def b45encode(data: bytes) -> str:
    characters: list[str] = []
    for segment in split_into_segments(list(data), 2):
        if len(segment) == 2:
            value, width = segment[0] * 256 + segment[1], 3
        else:
            value, width = segment[0], 2
        for _ in range(width):
            value, digit = divmod(value, 45)
            characters.append(ALPHANUMERIC_CHARSET[digit])
    return "".join(characters)


def b45decode(text: str) -> bytes:
    try:
        digits = [ALPHANUMERIC_CHARSET.index(c) for c in text]
    except ValueError:
        raise InvalidBase45(f"{text!r} contains characters outside the Base45 alphabet")

    decoded = bytearray()
    for segment in split_into_segments(digits, 3):
        if len(segment) == 1:
            raise InvalidBase45(f"{text!r} ends with a dangling character")

        value = sum(digit * 45**i for i, digit in enumerate(segment))
        if len(segment) == 3:
            if value > 0xFFFF:
                raise InvalidBase45(f"Group {value} in {text!r} overflows 16 bits")
            decoded += value.to_bytes(2, "big")
        else:
            if value > 0xFF:
                raise InvalidBase45(f"Group {value} in {text!r} overflows 8 bits")
            decoded.append(value)
    return bytes(decoded)


def _is_fixed_bit(position: int) -> bool:
    byte_index, bit = divmod(position, 8)
    for fixed_index, mask, _ in (VERSION_BITS, VARIANT_BITS):
        if byte_index == fixed_index and mask & (0x80 >> bit):
            return True
    return False


FREE_BIT_SELECTORS = tuple(not _is_fixed_bit(position) for position in range(8 * UUID_LENGTH))


def uuid_to_compact(uuid_bytes: bytes) -> bytes:
    if len(uuid_bytes) != UUID_LENGTH:
        raise InvalidLength(UUID_LENGTH, len(uuid_bytes))

    for byte_index, mask, value in (VERSION_BITS, VARIANT_BITS):
        if uuid_bytes[byte_index] & mask != value:
            # fixed bits are rebuilt on decode
            logger.debug("Byte %d of %s does not carry the UUID v4 marker", byte_index, uuid_bytes.hex())

    free_bits = compress(iter_bits(uuid_bytes), FREE_BIT_SELECTORS)
    return pack_bits(free_bits, UUID_LENGTH, lsb_first=True)


def compact_to_uuid(compact: bytes) -> bytes:
    if len(compact) != UUID_LENGTH:
        raise InvalidLength(UUID_LENGTH, len(compact))
    if compact[-1] & PADDING_MASK:
        raise NonZeroPadding()

    free_bits = iter_bits(compact, lsb_first=True)
    bits = [next(free_bits) if selected else 0 for selected in FREE_BIT_SELECTORS]
    restored = bytearray(pack_bits(bits, UUID_LENGTH))
    for byte_index, _, value in (VERSION_BITS, VARIANT_BITS):
        restored[byte_index] |= value
    return bytes(restored)


def parse_uuid(value: "uuid.UUID | str | bytes") -> bytes:
    """Raw 16 bytes of a UUID given as an object, a string (hyphenated or 32 hex) or bytes."""
    if isinstance(value, uuid.UUID):
        return value.bytes
    if isinstance(value, (bytes, bytearray)):
        if len(value) != UUID_LENGTH:
            raise InvalidLength(UUID_LENGTH, len(value))
        return bytes(value)
    try:
        return uuid.UUID(value.strip()).bytes
    except (AttributeError, ValueError) as e:
        raise InvalidUuid(f"Invalid UUID: {value!r}") from e


def encode_uuid(value: "uuid.UUID | str | bytes") -> str:
    return b45encode(uuid_to_compact(parse_uuid(value)))


def decode_uuid_bytes(text: str) -> bytes:
    return compact_to_uuid(b45decode(text))


def decode_uuid(text: str) -> uuid.UUID:
    return uuid.UUID(bytes=decode_uuid_bytes(text))


def generate_v4() -> uuid.UUID:
    return uuid.uuid4()
