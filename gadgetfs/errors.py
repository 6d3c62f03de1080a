"""Error codes and the exception raised by gadget operations."""

from __future__ import annotations

import errno
from enum import IntEnum


class ErrorCode(IntEnum):
    """Result codes reported by gadget operations."""

    SUCCESS = 0
    NO_MEM = -1
    NO_ACCESS = -2
    INVALID_PARAM = -3
    NOT_FOUND = -4
    IO = -5
    EXIST = -6
    NO_DEV = -7
    BUSY = -8
    NOT_SUPPORTED = -9
    PATH_TOO_LONG = -10
    INVALID_FORMAT = -11
    MISSING_TAG = -12
    INVALID_TYPE = -13
    INVALID_VALUE = -14
    NOT_EMPTY = -15
    OTHER_ERROR = -99


_NAMES = {code: f"USBG_ERROR_{code.name}" for code in ErrorCode}
_NAMES[ErrorCode.SUCCESS] = "USBG_SUCCESS"

_MESSAGES = {
    ErrorCode.SUCCESS: "Success",
    ErrorCode.NO_MEM: "Insufficient memory",
    ErrorCode.NO_ACCESS: "Access denied (insufficient permissions)",
    ErrorCode.INVALID_PARAM: "Invalid parameter",
    ErrorCode.NOT_FOUND: "Not found (file or directory removed)",
    ErrorCode.IO: "Input/output error",
    ErrorCode.EXIST: "Already exist",
    ErrorCode.NO_DEV: "No such device (illegal device name)",
    ErrorCode.BUSY: "Busy (gadget enabled)",
    ErrorCode.NOT_SUPPORTED: "Function not supported",
    ErrorCode.PATH_TOO_LONG: "Created path was too long to process it.",
    ErrorCode.INVALID_FORMAT: "Given file has incompatible format.",
    ErrorCode.MISSING_TAG: "One of mandatory tags is missing.",
    ErrorCode.INVALID_TYPE: "One of attributes has incompatible type.",
    ErrorCode.INVALID_VALUE: "Incorrect value provided as attribute.",
    ErrorCode.NOT_EMPTY: "Entity is not empty.",
    ErrorCode.OTHER_ERROR: "Other error",
}

_ERRNO_MAP = {
    errno.ENOMEM: ErrorCode.NO_MEM,
    errno.EACCES: ErrorCode.NO_ACCESS,
    errno.EROFS: ErrorCode.NO_ACCESS,
    errno.EPERM: ErrorCode.NO_ACCESS,
    errno.ENOENT: ErrorCode.NOT_FOUND,
    errno.ENOTDIR: ErrorCode.NOT_FOUND,
    errno.ERANGE: ErrorCode.INVALID_PARAM,
    errno.EINVAL: ErrorCode.INVALID_PARAM,
    int(ErrorCode.INVALID_PARAM): ErrorCode.INVALID_PARAM,
    errno.EIO: ErrorCode.IO,
    errno.EEXIST: ErrorCode.EXIST,
    errno.ENODEV: ErrorCode.NO_DEV,
    errno.EBUSY: ErrorCode.BUSY,
    errno.ENOTEMPTY: ErrorCode.NOT_EMPTY,
}


def _as_code(code: int) -> ErrorCode | None:
    try:
        return ErrorCode(code)
    except ValueError:
        return None


def error_name(code: int) -> str:
    """Return the symbolic name of an error code, or "UNKNOWN"."""
    known = _as_code(code)
    return _NAMES[known] if known is not None else "UNKNOWN"


def strerror(code: int) -> str:
    """Return a human readable description of an error code."""
    known = _as_code(code)
    return _MESSAGES[known] if known is not None else "Unknown error"


def translate_errno(errno_value: int | None) -> ErrorCode:
    """Map an operating-system errno value onto an error code."""
    if errno_value is None:
        return ErrorCode.OTHER_ERROR
    return _ERRNO_MAP.get(errno_value, ErrorCode.OTHER_ERROR)


class UsbgError(Exception):
    """Raised when a gadget operation fails."""

    def __init__(self, code: int, message: str | None = None) -> None:
        known = _as_code(code)
        self.code = known if known is not None else ErrorCode.OTHER_ERROR
        self.message = message if message is not None else strerror(self.code)
        super().__init__(self.message)

    @classmethod
    def from_os_error(cls, exc: OSError) -> "UsbgError":
        """Build an error from an OSError, translating its errno."""
        code = translate_errno(exc.errno)
        detail = exc.strerror or strerror(code)
        if exc.filename is not None:
            detail = f"{detail}: {exc.filename}"
        return cls(code, detail)

    def __repr__(self) -> str:
        return f"UsbgError({error_name(self.code)}, {self.message!r})"