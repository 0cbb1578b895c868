class DecodeError(Exception):
    """Raised when a local decoder cannot read a document."""
