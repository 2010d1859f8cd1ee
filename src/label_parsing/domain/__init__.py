"""Доменные исключения Label Parsing."""

from .exceptions import (
    LabelDataFormatError,
    LabelFileNotFoundError,
    LabelFileSystemError,
    LabelFileWriteError,
    LabelParsingError,
    ScanProfileConfigurationError,
)

__all__ = [
    "LabelParsingError",
    "LabelFileSystemError",
    "LabelFileNotFoundError",
    "LabelFileWriteError",
    "LabelDataFormatError",
    "ScanProfileConfigurationError",
]
