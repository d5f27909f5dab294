"""CLI entry point for qrcapacity."""

import argparse
import logging
import sys
from uuid import UUID

from capacity import CAPACITY, DEFAULT_LEVEL, minimal_packed_version, minimal_version
from encoding import MAX_VERSION, MIN_VERSION, bit_cost
from error_correction import LEVEL_ORDER, ErrorCorrection
from uuid45 import Uuid45Error, decode_uuid_bytes, encode_uuid, generate_v4, parse_uuid

__version__ = "0.1.0"

STDIN_MARKER = "@-"

logger = logging.getLogger(__name__)


def _level(value: str) -> ErrorCorrection:
    try:
        return ErrorCorrection.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} is negative")
    return number


def _version(value: str) -> int:
    number = int(value)
    if not MIN_VERSION <= number <= MAX_VERSION:
        raise argparse.ArgumentTypeError(f"{value} is not a version {MIN_VERSION}-{MAX_VERSION}")
    return number


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qrcapacity",
        description="QR Code alphanumeric capacity lookup and compact UUID v4 (Base45) codec.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  qrcapacity version 120 --level Q
  qrcapacity cost 11 1
  qrcapacity table --level H
  qrcapacity gen
  qrcapacity encode 550e8400-e29b-41d4-a716-446655440000
  qrcapacity decode @- < encoded.txt
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print the primary output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    version_parser = subparsers.add_parser("version", help="Smallest version holding LENGTH characters")
    version_parser.add_argument("length", type=_non_negative)
    version_parser.add_argument("-l", "--level", type=_level, default=DEFAULT_LEVEL, help="L, M, Q or H (default: L)")
    version_parser.add_argument(
        "--packed",
        action="store_true",
        help="Assume the payload is packed in alphanumeric mode instead of the encoder-independent capacity",
    )

    cost_parser = subparsers.add_parser("cost", help="Bits of an alphanumeric segment of LENGTH characters")
    cost_parser.add_argument("length", type=_non_negative)
    cost_parser.add_argument("symbol_version", metavar="VERSION", type=_version)

    table_parser = subparsers.add_parser("table", help="Print the capacity table")
    table_parser.add_argument("-l", "--level", type=_level, default=None, help="Only print this level")

    subparsers.add_parser("gen", help="Generate a random UUID v4 and print its Base45 form")

    encode_parser = subparsers.add_parser("encode", help="Encode a UUID (hyphenated, 32 hex, or @- for 16 raw bytes)")
    encode_parser.add_argument("input")
    encode_parser.add_argument("-l", "--level", type=_level, default=DEFAULT_LEVEL)

    decode_parser = subparsers.add_parser("decode", help="Decode Base45 text (or @- to read it from stdin)")
    decode_parser.add_argument("text")

    return parser


def _print_encoded(encoded: str, uuid_bytes: bytes, level: ErrorCorrection, quiet: bool) -> None:
    if quiet:
        print(encoded)
        return
    print(f"Base45: {encoded}")
    print(f"UUID:   {UUID(bytes=uuid_bytes)}")
    print(f"Bytes:  {uuid_bytes.hex()}")
    print(f"QR:     version {minimal_version(len(encoded), level)}-{level.label}")


def _run_version(args: argparse.Namespace) -> int:
    resolver = minimal_packed_version if args.packed else minimal_version
    version = resolver(args.length, args.level)
    if version is None:
        print(f"{args.length} characters exceed the capacity of version {MAX_VERSION}-{args.level.label}", file=sys.stderr)
        return 1
    print(version)
    return 0


def _run_table(args: argparse.Namespace) -> int:
    levels = [args.level] if args.level is not None else LEVEL_ORDER
    for level in levels:
        print(f"{level.label}: {' '.join(str(c) for c in CAPACITY[level])}")
    return 0


def _run_encode(args: argparse.Namespace) -> int:
    if args.input == STDIN_MARKER:
        raw = sys.stdin.buffer.read()
        uuid_bytes = parse_uuid(raw)
    else:
        uuid_bytes = parse_uuid(args.input)
    _print_encoded(encode_uuid(uuid_bytes), uuid_bytes, args.level, args.quiet)
    return 0


def _run_decode(args: argparse.Namespace) -> int:
    text = sys.stdin.read().rstrip("\r\n") if args.text == STDIN_MARKER else args.text
    uuid_bytes = decode_uuid_bytes(text)
    if args.quiet:
        print(UUID(bytes=uuid_bytes))
    else:
        print(f"UUID:   {UUID(bytes=uuid_bytes)}")
        print(f"Bytes:  {uuid_bytes.hex()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Running %s", args.command)

    try:
        if args.command == "version":
            return _run_version(args)
        elif args.command == "cost":
            print(bit_cost(args.length, args.symbol_version))
            return 0
        elif args.command == "table":
            return _run_table(args)
        elif args.command == "gen":
            uuid_bytes = generate_v4().bytes
            _print_encoded(encode_uuid(uuid_bytes), uuid_bytes, DEFAULT_LEVEL, args.quiet)
            return 0
        elif args.command == "encode":
            return _run_encode(args)
        else:
            return _run_decode(args)
    except (Uuid45Error, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
