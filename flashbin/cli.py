# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Command line entry point.

Usage:
    flashbin -f firmware.bin [-f other.bin] [-b 0x10040000] [-m 0x1003F000]
"""

import argparse
import sys
from typing import List, Optional

from flashbin import __version__
from flashbin.assembler import ConversionResult, convert_files
from flashbin.config import (
    DEFAULT_BASE_ADDRESS,
    DEFAULT_MASK_ADDRESS,
    FlashConfig,
    env_default,
    parse_address,
    parse_family,
)
from flashbin.errors import ConfigError, ConversionError
from flashbin.uf2 import RP2040_FAMILY_ID, iter_blocks

BANNER = "FlashBin: Generate flashbios .uf2 files from .bin for RP2040 Flash."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flashbin",
        description=BANNER,
        epilog="Defaults can also be set with FLASHBIN_BASE, FLASHBIN_MASK "
        "and FLASHBIN_FAMILY.",
    )
    parser.add_argument(
        "-b",
        "--base",
        default=env_default("FLASHBIN_BASE", f"0x{DEFAULT_BASE_ADDRESS:08X}"),
        help="Sets the base address where the .bin file is going to be "
        "flashed, default %(default)s",
    )
    parser.add_argument(
        "-m",
        "--mask",
        default=env_default("FLASHBIN_MASK", f"0x{DEFAULT_MASK_ADDRESS:08X}"),
        help="Sets the base address where the flashrom address mask will be "
        "flashed, default %(default)s (0xFFFFFFFF disables it)",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="files",
        action="append",
        default=[],
        help="File to add, can be multiple.",
    )
    parser.add_argument("extra_files", nargs="*", metavar="FILE", help=argparse.SUPPRESS)
    parser.add_argument(
        "--family",
        default=env_default("FLASHBIN_FAMILY", f"0x{RP2040_FAMILY_ID:08X}"),
        help="UF2 family ID, default %(default)s; 'none' stores the file size",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Read back each written .uf2 and compare it with its input",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> FlashConfig:
    return FlashConfig(
        base_address=parse_address(args.base, "base"),
        mask_address=parse_address(args.mask, "mask"),
        family_id=parse_family(args.family),
    )


def verify(result: ConversionResult) -> None:
    """Check that the data blocks of a written file reproduce its input."""
    blocks = sorted(
        iter_blocks(result.output_path.read_bytes()), key=lambda b: b.block_number
    )
    payload = b"".join(b.payload for b in blocks[result.mask_blocks :])
    if payload != result.input_path.read_bytes():
        raise ConversionError(f"Verification of '{result.output_path}' failed")
    print(f"Verified {result.output_path} ({result.size} bytes)")


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        print(BANNER)
        parser.print_help()
        return 0

    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
        results, failures = convert_files(args.files + args.extra_files, config)
    except ConfigError as e:
        print(BANNER, file=sys.stderr)
        print(e, file=sys.stderr)
        print("Try `flashbin --help' for more information.", file=sys.stderr)
        return 2

    if args.verify:
        for result in results:
            try:
                verify(result)
            except (ConversionError, OSError, ValueError) as e:
                failures.append((result.output_path, e))

    for path, error in failures:
        print(f"error: {path}: {error}", file=sys.stderr)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
