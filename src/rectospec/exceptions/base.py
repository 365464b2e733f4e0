"""
Base exceptions for RecToSpec.
"""


class RecToSpecError(Exception):
    """
    Base exception for all RecToSpec errors.

    All custom exceptions inherit from this class, so the CLI boundary
    can catch the whole family with one except clause.

    Attributes:
        message: Human-readable error message
        code: Stable machine-readable error code
        details: Optional additional error details (never secrets)
    """

    code: str = "RECTOSPEC_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigError(RecToSpecError):
    """
    Error in configuration.

    Raised for a missing or invalid credential, an unsupported provider,
    or a failure reading/writing the persisted configuration file.
    """

    code = "CONFIG_ERROR"


class FilesystemError(RecToSpecError):
    """
    Error reading, writing or accessing a path.

    Attributes:
        path: The path involved, when known
    """

    code = "FILESYSTEM_ERROR"

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message, {"path": path} if path else None)
        self.path = path
