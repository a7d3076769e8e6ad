"""Error types raised by the license pipeline."""

from pathlib import Path
from typing import Optional, Union


class LicenseError(Exception):
    """Base class for every failure that should abort a license task."""


class ConfigurationError(LicenseError):
    """A required setting is missing or has an invalid value."""


class FetchError(LicenseError):
    """The canonical license text could not be downloaded."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class IoError(LicenseError):
    """A template or license file could not be read or written."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None
