"""Stream video downloader preferences."""

__version__ = "0.3.0"
