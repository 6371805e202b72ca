"""Error types raised across the Billed service."""


class FileTypeError(ValueError):
    """A selected receipt is not one of the accepted image types."""

    def __init__(self, filename: str) -> None:
        """Record the rejected filename."""
        super().__init__(f"Unsupported receipt file type: {filename!r}")
        self.filename = filename


class StoreError(Exception):
    """A bill store call failed.

    ``str(exc)`` is the message shown to the user as-is, e.g. ``"Erreur 404"``.
    """

    def __init__(self, status_code: int, message: str | None = None) -> None:
        """Build the error from an HTTP-like status code."""
        self.status_code = status_code
        self.message = message or f"Erreur {status_code}"
        super().__init__(self.message)

    @classmethod
    def not_found(cls) -> "StoreError":
        """Error for a bill or receipt that does not exist."""
        return cls(404)

    @classmethod
    def internal(cls) -> "StoreError":
        """Error for a storage backend failure."""
        return cls(500)
