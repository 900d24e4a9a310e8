# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Address mask derivation tests."""

import pytest

from flashbin.mask import MAX_LENGTH, compute_mask, file_mask

pytestmark = pytest.mark.encoder


class TestComputeMask:
    """Smallest power of two covering the length, minus one."""

    @pytest.mark.parametrize(
        "length, expected",
        [
            (0, 0),
            (1, 0),
            (2, 1),
            (3, 3),
            (256, 255),
            (257, 511),
            (300, 511),
            (4096, 4095),
            (4097, 8191),
            (2 * 1024 * 1024, 0x1F_FFFF),
        ],
    )
    def test_known_values(self, length, expected):
        assert compute_mask(length) == expected

    def test_mask_spans_length(self):
        for length in list(range(2, 2100)) + [65535, 65536, 65537, 0x8000_0001]:
            mask = compute_mask(length)
            k = mask.bit_length()
            assert mask == (1 << k) - 1, f"{length}: {mask:#x} is not 2^k - 1"
            assert (1 << k) >= length
            assert (1 << (k - 1)) < length

    def test_largest_supported_length(self):
        assert compute_mask(MAX_LENGTH) == 0xFFFF_FFFF

    @pytest.mark.parametrize("length", [-1, MAX_LENGTH + 1])
    def test_out_of_range(self, length):
        with pytest.raises(ValueError):
            compute_mask(length)


def test_file_mask_uses_size_on_disk(make_bin):
    assert file_mask(make_bin(300)) == 511
    assert file_mask(make_bin(0, "empty.bin")) == 0
