# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Conversion settings and address parsing.

Environment variables (used as defaults when CLI options are not provided):
    FLASHBIN_BASE     Base address of the image (e.g. 0x10040000)
    FLASHBIN_MASK     Address of the mask block, 0xFFFFFFFF to omit it
    FLASHBIN_FAMILY   UF2 family ID, or "none" to store the file size instead
"""

import os
from dataclasses import dataclass
from typing import Optional

from flashbin.errors import ConfigError
from flashbin.uf2 import RP2040_FAMILY_ID

DEFAULT_BASE_ADDRESS = 0x1004_0000
DEFAULT_MASK_ADDRESS = 0x1003_F000
MASK_DISABLED = 0xFFFF_FFFF
UF2_EXTENSION = ".uf2"


@dataclass(frozen=True)
class FlashConfig:
    """Where and how one run places its images in flash."""

    base_address: int = DEFAULT_BASE_ADDRESS
    mask_address: int = DEFAULT_MASK_ADDRESS
    family_id: Optional[int] = RP2040_FAMILY_ID
    extension: str = UF2_EXTENSION

    @property
    def mask_enabled(self) -> bool:
        return self.mask_address != MASK_DISABLED


def parse_address(text: str, option: str = "address") -> int:
    """Parse a ``0x``-prefixed hexadecimal 32-bit value.

    Raises ``ConfigError`` naming *option* for anything else.
    """
    error = ConfigError(f"{option.capitalize()} address is invalid", option)
    if text[:2].lower() != "0x":
        raise error
    try:
        value = int(text[2:], 16)
    except ValueError:
        raise error from None
    if not 0 <= value <= 0xFFFF_FFFF:
        raise error
    return value


def parse_family(text: str) -> Optional[int]:
    """Parse a family ID; ``none`` means write the file size instead."""
    if text.lower() == "none":
        return None
    try:
        return parse_address(text, "family")
    except ConfigError:
        raise ConfigError("Family ID is invalid", "family") from None


def env_default(name: str, fallback: str) -> str:
    """Read an environment variable, falling back when unset or empty."""
    return os.environ.get(name) or fallback
