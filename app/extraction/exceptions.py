class ExtractionError(Exception):
    """Base exception for every document extraction failure."""


class UnsupportedFormatError(ExtractionError):
    """Raised when the declared media type is outside the allow-list."""


class LaunchError(ExtractionError):
    """Raised when an async extraction job cannot be launched."""


class UpstreamError(ExtractionError):
    """Raised when the remote API answers non-2xx or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None, body: object = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedResultError(ExtractionError):
    """Raised when a finished job lacks the expected result field."""


class JobFailedError(ExtractionError):
    """Raised when the remote service reports the job as failed."""


class PollTimeoutError(ExtractionError):
    """Raised when the poll budget is exhausted before a terminal status."""


class ExtractionFailedError(ExtractionError):
    """Raised when extraction fails for any other reason."""


class JobStateError(Exception):
    """Raised on an illegal transition of an async job handle."""
