# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Exceptions raised by flashbin."""

from typing import Optional


class FlashBinError(Exception):
    """Base class for all flashbin failures."""


class ConfigError(FlashBinError):
    """Invalid option value, empty file list or missing input file.

    Detected before any file of the run is converted.
    """

    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(message)
        self.option = option


class ConversionError(FlashBinError):
    """I/O failure that aborts the conversion of a single file."""
