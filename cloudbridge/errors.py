"""
Error hierarchy for the CloudBridge upload client.

Only two failure kinds are raised to callers: invalid input (before any
network activity) and rejected credentials. Transport and application
failures are returned as data in the UploadResult.
"""

from typing import Optional

from config.constants import ErrorCode, ERROR_MESSAGES


class CloudBridgeError(Exception):
    """Base exception for all CloudBridge client errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class InvalidInputError(CloudBridgeError, ValueError):
    """
    A file path argument is malformed or does not point to a regular file.

    Raised synchronously before the request is built; nothing is sent.
    """

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or ERROR_MESSAGES[ErrorCode.INVALID_INPUT],
            error_code=ErrorCode.INVALID_INPUT.value
        )


class InvalidCredentialsError(CloudBridgeError):
    """The API rejected the access key / signature pair (HTTP 401 or message match)."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or ERROR_MESSAGES[ErrorCode.INVALID_CREDENTIALS],
            error_code=ErrorCode.INVALID_CREDENTIALS.value
        )
