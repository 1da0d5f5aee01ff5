"""Custom exceptions for xapk-input."""


class XapkInputError(Exception):
    """Base exception for all xapk-input errors."""

    pass


class ZipSecurityError(XapkInputError):
    """Raised when a zip entry fails a security check."""

    pass


class UnsafeZipEntryError(ZipSecurityError):
    """Raised when an entry name could escape the extraction directory."""

    def __init__(self, entry_name: str, reason: str | None = None):
        self.entry_name = entry_name
        self.reason = reason
        message = f"Unsafe zip entry: '{entry_name}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ZipEntrySizeExceededError(ZipSecurityError):
    """Raised when an entry yields more bytes than its declared size."""

    def __init__(self, entry_name: str, limit: int):
        self.entry_name = entry_name
        self.limit = limit
        super().__init__(
            f"Zip entry '{entry_name}' exceeds its declared size of {limit} bytes"
        )


class ZipEntriesLimitError(ZipSecurityError):
    """Raised when an archive has more entries than the configured limit."""

    def __init__(self, limit: int, last_entry: str):
        self.limit = limit
        self.last_entry = last_entry
        super().__init__(
            f"Zip entries count limit exceeded: {limit}, last entry: {last_entry}"
        )


class ZipProcessingError(XapkInputError):
    """Raised when walking the entries of a zip file fails."""

    pass
