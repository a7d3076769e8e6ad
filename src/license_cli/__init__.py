"""license-sync: keep a project's license file in sync with a canonical text."""

from .version import __version__

__all__ = ['__version__']
