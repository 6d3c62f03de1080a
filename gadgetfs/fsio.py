"""Reading and writing configfs attribute files."""

from __future__ import annotations

import os
import re
import string
from contextlib import contextmanager
from typing import Iterator

from .errors import ErrorCode, UsbgError

MAX_PATH_LENGTH = 4096
MAX_STR_LENGTH = 256
MAX_FILE_SIZE = 4096
GUID_BIN_LENGTH = 16
GUID_CHAR_LENGTH = 36

_GUID_RE = re.compile(
    r"([0-9a-fA-F]{8})-([0-9a-fA-F]{4})-([0-9a-fA-F]{4})-"
    r"([0-9a-fA-F]{4})-([0-9a-fA-F]{12})"
)
_ETHER_RE = re.compile(r"((?:[0-9a-fA-F]{1,2}:){5}[0-9a-fA-F]{1,2})(?:\s.*)?", re.DOTALL)
_DEV_RE = re.compile(r"\s*([+-]?\d+):\s*([+-]?\d+)")


@contextmanager
def _os_errors() -> Iterator[None]:
    try:
        yield
    except OSError as exc:
        raise UsbgError.from_os_error(exc) from exc


def check_path_length(path: str | os.PathLike) -> str:
    """Return the path as a string, raising if it is too long to use."""
    text = os.fspath(path)
    if len(os.fsencode(text)) >= MAX_PATH_LENGTH:
        raise UsbgError(ErrorCode.PATH_TOO_LONG)
    return text


def read_raw(path, limit: int = MAX_STR_LENGTH) -> bytes:
    """Read at most ``limit`` bytes from an attribute file."""
    target = check_path_length(path)
    with _os_errors(), open(target, "rb") as fp:
        return fp.read(limit)


def read_exact(path, length: int) -> bytes:
    """Read exactly ``length`` bytes from an attribute file."""
    data = read_raw(path, length)
    if len(data) != length:
        raise UsbgError(ErrorCode.IO, f"expected {length} bytes, got {len(data)}")
    return data


def _cut_at_nul(data: bytes) -> bytes:
    nul = data.find(b"\0")
    return data if nul < 0 else data[:nul]


def read_string(path, limit: int = MAX_STR_LENGTH) -> str:
    """Read a one-line string attribute, without its trailing newline."""
    data = _cut_at_nul(read_raw(path, limit)[: max(limit - 1, 0)])
    text = data.decode("utf-8", errors="surrogateescape")
    return text.split("\n", 1)[0]


def _strtol(text: str, base: int) -> int:
    s = text.lstrip(" \t\n\r\f\v")
    sign = 1
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if base == 16 and s[:2].lower() == "0x" and s[2:3] and s[2] in string.hexdigits:
        s = s[2:]
    valid = string.digits[:base] if base <= 10 else string.digits + string.ascii_letters[: base - 10] + string.ascii_uppercase[: base - 10]
    end = 0
    while end < len(s) and s[end] in valid:
        end += 1
    if end == 0:
        return 0
    return sign * int(s[:end], base)


def read_int(path, base: int = 10) -> int:
    """Read an integer attribute, parsed like C's strtol."""
    text = _cut_at_nul(read_raw(path, MAX_STR_LENGTH)).decode("latin-1")
    return _strtol(text, base)


def read_bool(path) -> bool:
    """Read a decimal attribute and interpret it as a flag."""
    return read_int(path, 10) != 0


def write_raw(path, data: bytes) -> int:
    """Write bytes to an attribute file and return how many were written."""
    target = check_path_length(path)
    with _os_errors(), open(target, "wb") as fp:
        written = fp.write(data)
    if written < len(data):
        raise UsbgError(ErrorCode.IO)
    return written


def write_int(path, value: int, fmt: str) -> None:
    """Write an integer formatted with a printf-style format."""
    if value < 0 and any(c in fmt for c in "xX"):
        value &= 0xFFFFFFFF
    text = fmt % value
    if len(text) >= MAX_STR_LENGTH:
        raise UsbgError(ErrorCode.INVALID_PARAM)
    write_raw(path, text.encode("ascii"))


def write_dec(path, value: int) -> None:
    write_int(path, value, "%d\n")


def write_hex(path, value: int) -> None:
    write_int(path, value, "0x%x\n")


def write_hex8(path, value: int) -> None:
    write_int(path, value, "0x%02x\n")


def write_hex16(path, value: int) -> None:
    write_int(path, value, "0x%04x\n")


def write_bool(path, value: bool) -> None:
    write_dec(path, 1 if value else 0)


def write_string(path, value: str | None) -> None:
    """Write a string attribute as given."""
    if value is None:
        raise UsbgError(ErrorCode.INVALID_PARAM)
    write_raw(path, value.encode("utf-8", errors="surrogateescape"))


def format_guid(data: bytes) -> str:
    """Format 16 raw bytes as a textual GUID."""
    if len(data) != GUID_BIN_LENGTH:
        raise UsbgError(ErrorCode.INVALID_PARAM)
    h = data.hex()
    return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"


def write_guid(path, guid: str) -> None:
    """Write a textual GUID to an attribute file as 16 raw bytes."""
    if guid is None or len(guid) != GUID_CHAR_LENGTH:
        raise UsbgError(ErrorCode.INVALID_PARAM)
    match = _GUID_RE.fullmatch(guid)
    if not match:
        raise UsbgError(ErrorCode.INVALID_PARAM)
    write_raw(path, bytes.fromhex("".join(match.groups())))


def format_ether_addr(addr: bytes) -> str:
    """Format a 6-byte hardware address as colon separated hex."""
    if len(addr) != 6:
        raise UsbgError(ErrorCode.INVALID_PARAM)
    return ":".join(f"{b:02x}" for b in addr)


def parse_ether_addr(text: str) -> bytes:
    """Parse a colon separated hardware address into 6 bytes."""
    match = _ETHER_RE.fullmatch(text)
    if not match:
        raise UsbgError(ErrorCode.INVALID_VALUE)
    return bytes(int(part, 16) for part in match.group(1).split(":"))


def read_ether_addr(path) -> bytes:
    """Read a hardware address attribute."""
    text = read_string(path, MAX_STR_LENGTH)
    try:
        return parse_ether_addr(text)
    except UsbgError as exc:
        raise UsbgError(ErrorCode.IO) from exc


def write_ether_addr(path, addr: bytes) -> None:
    """Write a hardware address attribute."""
    write_string(path, format_ether_addr(addr))


def read_dev(path) -> int:
    """Read a "major:minor" attribute and return the device number."""
    text = read_string(path, MAX_STR_LENGTH)
    match = _DEV_RE.match(text)
    if not match:
        raise UsbgError(ErrorCode.INVALID_VALUE)
    major, minor = (int(g) for g in match.groups())
    try:
        return os.makedev(major, minor)
    except (OverflowError, ValueError) as exc:
        raise UsbgError(ErrorCode.INVALID_VALUE) from exc


def rm_file(path) -> None:
    """Remove a file or symbolic link."""
    target = check_path_length(path)
    with _os_errors():
        os.unlink(target)


def rm_dir(path) -> None:
    """Remove an empty directory."""
    target = check_path_length(path)
    with _os_errors():
        os.rmdir(target)


def list_entries(path) -> list[str]:
    """Return the names in a directory in sorted order."""
    target = check_path_length(path)
    with _os_errors():
        return sorted(os.listdir(target))


def rm_all_dirs(path) -> None:
    """Remove every subdirectory of a directory, stopping at the first failure."""
    for name in list_entries(path):
        rm_dir(os.path.join(os.fspath(path), name))


def check_dir(path) -> None:
    """Make sure a directory exists, creating it if it is missing."""
    target = check_path_length(path)
    try:
        with os.scandir(target):
            return
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise UsbgError.from_os_error(exc) from exc
    with _os_errors():
        os.mkdir(target, 0o777)