"""docdigest: document summary and keyword extraction."""

from docdigest.version import __version__

__all__ = ["__version__"]
