"""
Custom exceptions for Recordshelf.
"""


class RecordshelfError(Exception):
    """Base exception for Recordshelf."""
    pass


class ScrapeError(RecordshelfError):
    """Exception raised when the storefront listing cannot be scraped."""
    pass


class ReleaseCountMismatchError(ScrapeError):
    """Exception raised when the listing yields an unexpected number of releases."""

    def __init__(self, expected: int, found: int):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected {expected} releases but found {found}")


class DownloadError(RecordshelfError):
    """Exception raised when an asset download attempt fails."""
    pass


class CatalogError(RecordshelfError):
    """Exception raised when the catalog file cannot be read or written."""
    pass


class ConfigurationError(RecordshelfError):
    """Exception raised when configuration is invalid."""
    pass


class NetworkError(RecordshelfError, ConnectionError):
    """Exception raised when network operations fail."""
    pass
