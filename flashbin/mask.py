# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Flash address mask derived from an image size."""

import os

# Largest image whose mask still fits in 32 bits.
MAX_LENGTH = 1 << 32


def compute_mask(length: int) -> int:
    """Return ``P - 1`` where ``P`` is the smallest power of two >= *length*.

    Lengths 0 and 1 both give 0.
    """
    if not 0 <= length <= MAX_LENGTH:
        raise ValueError(f"length must be in 0..{MAX_LENGTH}, got {length}")
    if length == 0:
        return 0

    bits = 0
    n = length - 1
    while n > 0:
        n >>= 1
        bits += 1

    return (1 << bits) - 1


def file_mask(path) -> int:
    """Mask for the file at *path*, from its size on disk."""
    return compute_mask(os.stat(path).st_size)
