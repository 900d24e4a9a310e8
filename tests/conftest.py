# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Common fixtures for flashbin tests.

Environment variables read by the CLI are cleared for every test so that a
developer's shell settings never leak into the defaults under test.
"""

from pathlib import Path

import pytest

ENV_VARS = ("FLASHBIN_BASE", "FLASHBIN_MASK", "FLASHBIN_FAMILY")


def firmware_bytes(size: int) -> bytes:
    """Deterministic test image whose content differs from block to block."""
    return bytes((i * 7 + i // 256) & 0xFF for i in range(size))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove FLASHBIN_* overrides from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_bin(tmp_path):
    """Write a .bin file of *size* bytes and return its path."""

    def _make(size: int, name: str = "firmware.bin") -> Path:
        path = tmp_path / name
        path.write_bytes(firmware_bytes(size))
        return path

    return _make
