# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Convert flat firmware images to UF2 files for RP2040 flash."""

from flashbin.assembler import ConversionResult, assemble, convert_file, convert_files
from flashbin.config import MASK_DISABLED, FlashConfig
from flashbin.errors import ConfigError, ConversionError, FlashBinError
from flashbin.mask import compute_mask

__version__ = "0.3.4"

__all__ = [
    "ConfigError",
    "ConversionError",
    "ConversionResult",
    "FlashBinError",
    "FlashConfig",
    "MASK_DISABLED",
    "assemble",
    "compute_mask",
    "convert_file",
    "convert_files",
]
