import logging
from enum import IntEnum

from utils import split_into_segments, to_bit_string

logger = logging.getLogger(__name__)

MIN_VERSION = 1
MAX_VERSION = 40

MODE_INDICATOR_LENGTH = 4

# https://www.arscreatio.com/repositorio/images/n_23/SC031-N-1915-18004Text.pdf#page=33
ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"


class Mode(IntEnum):
    ALPHANUMERIC = 0b0010
    BYTE = 0b0100


# Character count indicator widths for versions 1-9, 10-26 and 27-40
CHARACTER_COUNT_INDICATOR_LENGTHS: dict[Mode, tuple[int, int, int]] = {
    Mode.ALPHANUMERIC: (9, 11, 13),
    Mode.BYTE: (8, 16, 16),
}


def version_tier(version: int) -> int:
    return 0 if version <= 9 else 1 if version <= 26 else 2


def get_character_count_indicator_length(version: int, mode: Mode = Mode.ALPHANUMERIC) -> int:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"Unable to calculate character count indicator for version {version} and mode {mode.name}")

    return CHARACTER_COUNT_INDICATOR_LENGTHS[mode][version_tier(version)]


def bit_cost(length: int, version: int) -> int:
    """Bits needed for an alphanumeric segment of `length` characters at `version`.

    Mode indicator, character count indicator, then 11 bits per pair of
    characters and 6 bits for a trailing single character. Versions above 26
    always take the 13 bit count indicator.
    """
    if length < 0:
        raise ValueError(f"Cannot encode a negative number of characters ({length})")

    count_length = CHARACTER_COUNT_INDICATOR_LENGTHS[Mode.ALPHANUMERIC][version_tier(version)]
    data_length = 11 * (length // 2) + 6 * (length % 2)

    return MODE_INDICATOR_LENGTH + count_length + data_length


def byte_bit_cost(length: int, version: int) -> int:
    if length < 0:
        raise ValueError(f"Cannot encode a negative number of bytes ({length})")

    count_length = CHARACTER_COUNT_INDICATOR_LENGTHS[Mode.BYTE][version_tier(version)]

    return MODE_INDICATOR_LENGTH + count_length + 8 * length


def lookup_alphanumeric_value(character: str) -> int:
    if len(character) != 1:
        raise ValueError(f"Expected a single character, got {character!r}")
    return ALPHANUMERIC_CHARSET.index(character)


def is_alphanumeric(data: str) -> bool:
    return all(c in ALPHANUMERIC_CHARSET for c in data)


def to_alphanumeric(data: str) -> tuple[int, int]:
    try:
        base45_data = [lookup_alphanumeric_value(c) for c in data]
    except ValueError:
        raise ValueError(f"Attempted to encode {data} with alphanumeric mode, but not all characters are compatible")

    bit_data = 0
    for segment in split_into_segments(base45_data, 2):
        if len(segment) == 2:
            bit_data = (bit_data << 11) | (segment[0] * 45 + segment[1])
        else:
            bit_data = (bit_data << 6) | segment[0]
    data_binary_length = 11 * (len(data) // 2) + 6 * (len(data) % 2)

    return bit_data, data_binary_length


def encode_alphanumeric(data: str, version: int) -> str:
    """Mode indicator, character count and data bits of `data` as a bit string."""
    count_length = get_character_count_indicator_length(version)
    if len(data) >= 1 << count_length:
        raise ValueError(f"{len(data)} characters do not fit the {count_length} bit count indicator of version {version}")

    data_bits, data_bits_size = to_alphanumeric(data)
    bit_stream = to_bit_string(Mode.ALPHANUMERIC, MODE_INDICATOR_LENGTH) + to_bit_string(len(data), count_length)
    if data_bits_size:
        bit_stream += to_bit_string(data_bits, data_bits_size)

    logger.debug("Encoded %d characters into %d bits at version %d", len(data), len(bit_stream), version)
    return bit_stream
