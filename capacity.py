"""Alphanumeric capacity lookup for QR Code symbols.

Every table here is derived from the ISO/IEC 18004 data codeword capacities
in `constants`, so the character tables and the bit cost formula can never
disagree with each other.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from constants import data_codeword_capacity
from encoding import MAX_VERSION, MIN_VERSION, bit_cost, byte_bit_cost, is_alphanumeric
from error_correction import LEVEL_ORDER, ErrorCorrection

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = ErrorCorrection.LOW

VERSIONS = range(MIN_VERSION, MAX_VERSION + 1)


class CapacityLookupError(LookupError):
    pass


def _largest_fitting_length(cost, bits: int, version: int) -> int:
    # cost is non-decreasing in length, so binary search for the last fit
    low, high = 0, bits
    while low < high:
        mid = (low + high + 1) // 2
        if cost(mid, version) <= bits:
            low = mid
        else:
            high = mid - 1
    return low


def _build_table(cost) -> Mapping[ErrorCorrection, tuple[int, ...]]:
    table: dict[ErrorCorrection, tuple[int, ...]] = {}
    for level in LEVEL_ORDER:
        table[level] = tuple(
            _largest_fitting_length(cost, 8 * data_codeword_capacity[version][level.index], version)
            for version in VERSIONS
        )
    return MappingProxyType(table)


# Characters that fit whichever of alphanumeric or 8-bit byte mode the
# encoder picks for them, i.e. the byte mode capacity.
CAPACITY = _build_table(byte_bit_cost)

# Characters that fit when packed in alphanumeric mode.
ALPHANUMERIC_CAPACITY = _build_table(bit_cost)


def _resolve_level(level: ErrorCorrection | str) -> ErrorCorrection:
    try:
        return ErrorCorrection.parse(level)
    except ValueError as e:
        raise CapacityLookupError(str(e)) from e


def _check_version(version: int) -> None:
    if isinstance(version, bool) or not isinstance(version, int) or not MIN_VERSION <= version <= MAX_VERSION:
        raise CapacityLookupError(f"No capacity for version {version!r}. Expected an integer {MIN_VERSION}-{MAX_VERSION}")


def capacity_at(level: ErrorCorrection | str, version: int) -> int:
    ec_level = _resolve_level(level)
    _check_version(version)
    return CAPACITY[ec_level][version - 1]


def data_bit_capacity(level: ErrorCorrection | str, version: int) -> int:
    ec_level = _resolve_level(level)
    _check_version(version)
    return 8 * data_codeword_capacity[version][ec_level.index]


def alphanumeric_capacity(level: ErrorCorrection | str, version: int) -> int:
    ec_level = _resolve_level(level)
    _check_version(version)
    return ALPHANUMERIC_CAPACITY[ec_level][version - 1]


def _parse_level_or_none(level: ErrorCorrection | str) -> ErrorCorrection | None:
    try:
        return ErrorCorrection.parse(level)
    except ValueError:
        logger.debug("Unrecognized error correction level %r", level)
        return None


def minimal_version(length: int, level: ErrorCorrection | str) -> int | None:
    """Smallest version whose capacity at `level` holds `length` characters.

    Returns None when `level` is not recognized or when even version 40 is
    too small.
    """
    if length < 0:
        raise ValueError(f"Payload length cannot be negative ({length})")

    ec_level = _parse_level_or_none(level)
    if ec_level is None:
        return None

    for version, capacity in zip(VERSIONS, CAPACITY[ec_level]):
        if length <= capacity:
            return version

    logger.debug("%d characters exceed the maximum capacity at level %s", length, ec_level.label)
    return None


def minimal_packed_version(length: int, level: ErrorCorrection | str) -> int | None:
    """Like `minimal_version`, but assumes the payload is packed in alphanumeric mode."""
    if length < 0:
        raise ValueError(f"Payload length cannot be negative ({length})")

    ec_level = _parse_level_or_none(level)
    if ec_level is None:
        return None

    for version in VERSIONS:
        if bit_cost(length, version) <= 8 * data_codeword_capacity[version][ec_level.index]:
            return version

    logger.debug("%d alphanumeric characters exceed the maximum capacity at level %s", length, ec_level.label)
    return None


def minimal_version_for(data: str, level: ErrorCorrection | str = DEFAULT_LEVEL) -> int | None:
    if not is_alphanumeric(data):
        raise ValueError(f"Attempted to size {data} for alphanumeric mode, but not all characters are compatible")
    return minimal_packed_version(len(data), level)
