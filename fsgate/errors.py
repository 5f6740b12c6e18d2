from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    ACCESS_DENIED = 'access_denied'
    INVALID_ARGUMENT = 'invalid_argument'
    UNKNOWN_OPERATION = 'unknown_operation'
    NOT_FOUND = 'not_found'
    IS_A_DIRECTORY = 'is_a_directory'
    IO_ERROR = 'io_error'


class GatewayError(Exception):
    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AccessDenied(GatewayError):
    kind = ErrorKind.ACCESS_DENIED


class InvalidArgument(GatewayError):
    kind = ErrorKind.INVALID_ARGUMENT


class UnknownOperation(GatewayError):
    kind = ErrorKind.UNKNOWN_OPERATION


class NotFound(GatewayError):
    kind = ErrorKind.NOT_FOUND


class IsADirectory(GatewayError):
    kind = ErrorKind.IS_A_DIRECTORY


class StorageIOError(GatewayError):
    kind = ErrorKind.IO_ERROR


def from_os_error(exc: OSError, original_path: str) -> GatewayError:
    """Map an OSError raised by the storage layer onto the gateway taxonomy."""
    reason = exc.strerror or str(exc)
    if isinstance(exc, FileNotFoundError):
        return NotFound(f"Path '{original_path}' does not exist.")
    if isinstance(exc, IsADirectoryError):
        return IsADirectory(f"Path '{original_path}' is a directory, not a file.")
    return StorageIOError(f"I/O error on '{original_path}': {reason}")
