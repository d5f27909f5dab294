from collections.abc import Iterable, Iterator
from typing import TypeVar

T = TypeVar("T")


def split_into_segments(data: list[T], segment_size: int) -> list[list[T]]:
    values: list[list[T]] = []
    for i in range(0, len(data), segment_size):
        values.append(data[i : i + segment_size])
    return values


def to_bit_string(value: int, width: int) -> str:
    if value < 0 or value >= 1 << width:
        raise ValueError(f"Cannot fit {value} into {width} bits")
    return bin(value)[2:].zfill(width)


def iter_bits(data: bytes, lsb_first: bool = False) -> Iterator[int]:
    bit_order = range(8) if lsb_first else range(7, -1, -1)
    for byte in data:
        for bit in bit_order:
            yield (byte >> bit) & 1


def pack_bits(bits: Iterable[int], size: int, lsb_first: bool = False) -> bytes:
    """Pack bits into `size` bytes, zero filling whatever the bits do not reach."""
    packed = bytearray(size)
    for position, bit in enumerate(bits):
        if position >= size * 8:
            raise ValueError(f"Too many bits to pack into {size} bytes")
        if not bit:
            continue
        offset = position % 8 if lsb_first else 7 - position % 8
        packed[position // 8] |= 1 << offset
    return bytes(packed)
