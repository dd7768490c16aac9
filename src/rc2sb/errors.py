"""Exception hierarchy for RC to SB conversion.

Every failure surfaced to callers derives from ConversionError so that
callers can catch a single type. Soft conditions (missing optional files,
unknown books, absent payloads) are logged and never raised.
"""

from pathlib import Path


class ConversionError(Exception):
    """Base exception for conversion errors."""

    pass


class ManifestError(ConversionError):
    """Raised when the RC manifest is missing, unreadable or malformed."""

    pass


class UnsupportedSubjectError(ConversionError):
    """Raised when no handler is registered for a manifest subject.

    Attributes:
        subject: The subject that could not be dispatched
        supported: Sorted list of every registered subject
    """

    def __init__(self, subject: str, supported: list[str]):
        self.subject = subject
        self.supported = supported
        super().__init__(
            f"unsupported subject '{subject}'; "
            f"supported subjects: {', '.join(supported) or 'none'}"
        )


class ConversionCancelled(ConversionError):
    """Raised when the caller's cancel event is set."""

    def __init__(self, message: str = "conversion cancelled"):
        super().__init__(message)


class FileOperationError(ConversionError):
    """Raised when copying, reading or writing a file fails.

    Attributes:
        operation: What was being done (e.g. 'copying', 'reading')
        path: The file the operation failed on
    """

    def __init__(self, operation: str, path: Path | str, reason: object = None):
        self.operation = operation
        self.path = Path(path)
        message = f"{operation} {self.path}"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)


class MetadataValidationError(ConversionError):
    """Raised when assembled metadata does not conform to the SB schema."""

    def __init__(self, message: str, error_path: str = "root"):
        self.error_path = error_path
        super().__init__(message)
