# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""UF2 block construction and serialization.

Block layout (https://github.com/microsoft/uf2), all words little-endian:

    0   magic start 0       0x0A324655 ("UF2\\n")
    4   magic start 1       0x9E5D5157
    8   flags
    12  target address
    16  payload size
    20  block number
    24  total blocks
    28  family ID, or file size when the family flag is clear
    32  data (476 bytes, payload zero-padded)
    508 magic end           0x0AB16F30
"""

import struct
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional

UF2_MAGIC_START0 = 0x0A324655
UF2_MAGIC_START1 = 0x9E5D5157
UF2_MAGIC_END = 0x0AB16F30
UF2_FLAG_FAMILY_ID = 0x00002000
RP2040_FAMILY_ID = 0xE48BFF56

BLOCK_SIZE = 512
PAYLOAD_SIZE = 256
DATA_AREA_SIZE = 476

# Flash erase granularity; the mask block is repeated to cover one sector.
SECTOR_SIZE = 4096
MASK_REPLICAS = SECTOR_SIZE // PAYLOAD_SIZE

BLOCK_STRUCT = struct.Struct(f"<8I{DATA_AREA_SIZE}sI")

assert BLOCK_STRUCT.size == BLOCK_SIZE
assert SECTOR_SIZE == MASK_REPLICAS * PAYLOAD_SIZE


@dataclass(frozen=True)
class Block:
    """One UF2 record.

    ``block_number`` and ``total_blocks`` stay 0 until the whole output
    sequence is known; see :func:`number_blocks`.
    """

    address: int
    payload: bytes
    block_number: int = 0
    total_blocks: int = 0
    family_id: Optional[int] = RP2040_FAMILY_ID

    def __post_init__(self):
        if len(self.payload) > PAYLOAD_SIZE:
            raise ValueError(
                f"payload of {len(self.payload)} bytes exceeds {PAYLOAD_SIZE}"
            )

    @property
    def payload_length(self) -> int:
        return len(self.payload)

    @property
    def flags(self) -> int:
        return UF2_FLAG_FAMILY_ID if self.family_id is not None else 0


def data_blocks(
    data: bytes, base_address: int, family_id: Optional[int] = RP2040_FAMILY_ID
) -> List[Block]:
    """Split *data* into payload-sized blocks starting at *base_address*."""
    return [
        Block(base_address + offset, bytes(data[offset : offset + PAYLOAD_SIZE]),
              family_id=family_id)
        for offset in range(0, len(data), PAYLOAD_SIZE)
    ]


def mask_blocks(
    mask_address: int, mask: int, family_id: Optional[int] = RP2040_FAMILY_ID
) -> List[Block]:
    """The address mask as a little-endian word, repeated to fill a sector.

    Every replica targets *mask_address*.
    """
    block = Block(mask_address, struct.pack("<I", mask), family_id=family_id)
    return [block] * MASK_REPLICAS


def number_blocks(blocks: List[Block]) -> List[Block]:
    """Assign block numbers and the total over the complete sequence."""
    total = len(blocks)
    return [
        replace(block, block_number=i, total_blocks=total)
        for i, block in enumerate(blocks)
    ]


def encode(block: Block, file_size: int = 0) -> bytes:
    """Serialize a numbered block into its 512-byte record.

    *file_size* is only written when the block carries no family ID.
    """
    if not 0 <= block.block_number < block.total_blocks:
        raise ValueError(
            f"block {block.block_number} of {block.total_blocks} is not numbered"
        )

    word7 = block.family_id if block.family_id is not None else file_size
    return BLOCK_STRUCT.pack(
        UF2_MAGIC_START0,
        UF2_MAGIC_START1,
        block.flags,
        block.address,
        block.payload_length,
        block.block_number,
        block.total_blocks,
        word7,
        block.payload,  # struct pads with zeros
        UF2_MAGIC_END,
    )


def decode(raw: bytes) -> Block:
    """Parse a 512-byte record back into a :class:`Block`."""
    if len(raw) != BLOCK_SIZE:
        raise ValueError(f"expected a {BLOCK_SIZE}-byte block, got {len(raw)}")

    (
        magic0,
        magic1,
        flags,
        address,
        payload_size,
        block_number,
        total_blocks,
        word7,
        data,
        magic_end,
    ) = BLOCK_STRUCT.unpack(raw)

    magic = (magic0, magic1, magic_end)
    expected = (UF2_MAGIC_START0, UF2_MAGIC_START1, UF2_MAGIC_END)
    if magic != expected:
        raise ValueError(f"bad magic numbers {magic}, expected {expected}")
    if payload_size > PAYLOAD_SIZE:
        raise ValueError(f"payload size {payload_size} exceeds {PAYLOAD_SIZE}")

    return Block(
        address=address,
        payload=data[:payload_size],
        block_number=block_number,
        total_blocks=total_blocks,
        family_id=word7 if flags & UF2_FLAG_FAMILY_ID else None,
    )


def iter_blocks(raw: bytes) -> Iterator[Block]:
    """Decode every record of a UF2 file image."""
    if len(raw) % BLOCK_SIZE:
        raise ValueError(f"size {len(raw)} is not a multiple of {BLOCK_SIZE}")
    for offset in range(0, len(raw), BLOCK_SIZE):
        yield decode(raw[offset : offset + BLOCK_SIZE])
