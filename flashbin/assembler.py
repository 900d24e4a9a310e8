# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Turn .bin files into .uf2 files.

Each file goes through the same linear pipeline:
    mask -> mask blocks (optional) -> data blocks -> numbering
    -> serialization -> single write next to the input.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

from flashbin.config import FlashConfig
from flashbin.errors import ConfigError, ConversionError
from flashbin.mask import compute_mask
from flashbin.uf2 import (
    MASK_REPLICAS,
    Block,
    data_blocks,
    encode,
    mask_blocks,
    number_blocks,
)

# First address past the 32-bit flash address space.
ADDRESS_SPACE = 1 << 32


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one successful conversion."""

    input_path: Path
    output_path: Path
    size: int
    data_blocks: int
    mask_blocks: int

    @property
    def total_blocks(self) -> int:
        return self.data_blocks + self.mask_blocks


def output_path(input_file: Path, extension: str = ".uf2") -> Path:
    """Sibling of *input_file* with the same stem and *extension*."""
    if not input_file.name:
        raise ConversionError(f"Cannot derive an output file name from '{input_file}'")
    return input_file.parent / f"{input_file.stem}{extension}"


def assemble(data: bytes, config: FlashConfig) -> List[Block]:
    """Build the numbered block sequence for one image."""
    blocks: List[Block] = []

    if config.mask_enabled:
        mask = compute_mask(len(data))
        blocks.extend(mask_blocks(config.mask_address, mask, config.family_id))

    blocks.extend(data_blocks(data, config.base_address, config.family_id))
    return number_blocks(blocks)


def render(blocks: Sequence[Block], file_size: int = 0) -> bytes:
    """Concatenate the encoded blocks."""
    return b"".join(encode(block, file_size) for block in blocks)


def convert_file(input_file: Path, config: FlashConfig) -> ConversionResult:
    """Convert one file and write the result next to it."""
    input_file = Path(input_file)
    target = output_path(input_file, config.extension)

    try:
        with open(input_file, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ConversionError(f"Cannot read '{input_file}': {e.strerror}") from e

    end = config.base_address + len(data)
    if end > ADDRESS_SPACE:
        raise ConversionError(
            f"'{input_file}' ({len(data)} bytes) does not fit in 32-bit flash at "
            f"0x{config.base_address:08X}: image would end at 0x{end:X}"
        )

    try:
        blocks = assemble(data, config)
    except ValueError as e:
        raise ConversionError(f"Cannot convert '{input_file}': {e}") from e
    uf2 = render(blocks, len(data))

    try:
        target.write_bytes(uf2)
    except OSError as e:
        raise ConversionError(f"Cannot write '{target}': {e.strerror}") from e

    mask_count = MASK_REPLICAS if config.mask_enabled else 0
    return ConversionResult(
        input_path=input_file,
        output_path=target,
        size=len(data),
        data_blocks=len(blocks) - mask_count,
        mask_blocks=mask_count,
    )


def validate_files(files: Sequence) -> List[Path]:
    """Resolve every input up front; nothing is converted if one is missing."""
    if not files:
        raise ConfigError("No file/files specified", "file")

    paths = []
    for file in files:
        path = Path(file).resolve()
        if not path.is_file():
            raise ConfigError(f"File '{file}' not found", "file")
        paths.append(path)
    return paths


def convert_files(
    files: Sequence,
    config: FlashConfig,
    report: Callable[[str], None] = print,
) -> Tuple[List[ConversionResult], List[Tuple[Path, ConversionError]]]:
    """Validate all *files*, then convert them one after another.

    A ``ConversionError`` only aborts its own file; the rest of the batch
    still runs. Returns ``(results, failures)``.
    """
    results = []
    failures = []

    for path in validate_files(files):
        try:
            result = convert_file(path, config)
        except ConversionError as e:
            failures.append((path, e))
            continue
        report(f"Total blocks written: {result.total_blocks}")
        results.append(result)

    return results, failures
