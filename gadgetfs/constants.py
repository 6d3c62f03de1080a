"""Function types, attribute names and name helpers for gadget configfs."""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Any, MutableSequence

from .errors import ErrorCode, UsbgError

STRINGS_DIR = "strings"
CONFIGS_DIR = "configs"
FUNCTIONS_DIR = "functions"
GADGETS_DIR = "usb_gadget"
OS_DESC_DIR = "os_desc"
DEFAULT_CONFIG_LABEL = "config"
LANG_US_ENG = 0x0409


class FunctionType(IntEnum):
    """Kinds of USB functions that a gadget may contain."""

    SERIAL = 0
    ACM = 1
    OBEX = 2
    ECM = 3
    SUBSET = 4
    NCM = 5
    EEM = 6
    RNDIS = 7
    PHONET = 8
    FFS = 9
    MASS_STORAGE = 10
    MIDI = 11
    LOOPBACK = 12
    HID = 13
    UAC2 = 14
    UVC = 15
    PRINTER = 16
    P9FS = 17


class GadgetAttr(IntEnum):
    """Numeric device descriptor attributes of a gadget."""

    BCD_USB = 0
    B_DEVICE_CLASS = 1
    B_DEVICE_SUB_CLASS = 2
    B_DEVICE_PROTOCOL = 3
    B_MAX_PACKET_SIZE_0 = 4
    ID_VENDOR = 5
    ID_PRODUCT = 6
    BCD_DEVICE = 7


class GadgetStr(IntEnum):
    """String descriptors of a gadget."""

    MANUFACTURER = 0
    PRODUCT = 1
    SERIAL_NUMBER = 2


class OsDescStr(IntEnum):
    """Attributes of a gadget's OS descriptors."""

    USE = 0
    B_VENDOR_CODE = 1
    QW_SIGN = 2


_FUNCTION_TYPE_NAMES = {
    FunctionType.SERIAL: "gser",
    FunctionType.ACM: "acm",
    FunctionType.OBEX: "obex",
    FunctionType.ECM: "ecm",
    FunctionType.SUBSET: "geth",
    FunctionType.NCM: "ncm",
    FunctionType.EEM: "eem",
    FunctionType.RNDIS: "rndis",
    FunctionType.PHONET: "phonet",
    FunctionType.FFS: "ffs",
    FunctionType.MASS_STORAGE: "mass_storage",
    FunctionType.MIDI: "midi",
    FunctionType.LOOPBACK: "Loopback",
    FunctionType.HID: "hid",
    FunctionType.UAC2: "uac2",
    FunctionType.UVC: "uvc",
    FunctionType.PRINTER: "printer",
    FunctionType.P9FS: "usb9pfs",
}

_GADGET_ATTR_NAMES = {
    GadgetAttr.BCD_USB: "bcdUSB",
    GadgetAttr.B_DEVICE_CLASS: "bDeviceClass",
    GadgetAttr.B_DEVICE_SUB_CLASS: "bDeviceSubClass",
    GadgetAttr.B_DEVICE_PROTOCOL: "bDeviceProtocol",
    GadgetAttr.B_MAX_PACKET_SIZE_0: "bMaxPacketSize0",
    GadgetAttr.ID_VENDOR: "idVendor",
    GadgetAttr.ID_PRODUCT: "idProduct",
    GadgetAttr.BCD_DEVICE: "bcdDevice",
}

_GADGET_STR_NAMES = {
    GadgetStr.MANUFACTURER: "manufacturer",
    GadgetStr.PRODUCT: "product",
    GadgetStr.SERIAL_NUMBER: "serialnumber",
}

_OS_DESC_NAMES = {
    OsDescStr.USE: "use",
    OsDescStr.B_VENDOR_CODE: "b_vendor_code",
    OsDescStr.QW_SIGN: "qw_sign",
}

_CONFIG_ID_RE = re.compile(r"[+-]?\d+")


def _lookup(table: dict, name: str | None):
    if name is None:
        raise UsbgError(ErrorCode.INVALID_PARAM)
    for member, member_name in table.items():
        if member_name == name:
            return member
    raise UsbgError(ErrorCode.NOT_FOUND, f"unknown name: {name}")


def _name_of(table: dict, enum_cls: type[IntEnum], value: Any) -> str | None:
    try:
        member = enum_cls(value)
    except (ValueError, TypeError):
        return None
    return table[member]


def lookup_function_type(name: str) -> FunctionType:
    """Return the function type whose configfs name is ``name``."""
    return _lookup(_FUNCTION_TYPE_NAMES, name)


def function_type_name(function_type: int) -> str | None:
    """Return the configfs name of a function type, or None if unknown."""
    return _name_of(_FUNCTION_TYPE_NAMES, FunctionType, function_type)


def lookup_gadget_attr(name: str) -> GadgetAttr:
    """Return the gadget attribute whose file name is ``name``."""
    return _lookup(_GADGET_ATTR_NAMES, name)


def gadget_attr_name(attr: int) -> str | None:
    """Return the file name of a gadget attribute, or None if unknown."""
    return _name_of(_GADGET_ATTR_NAMES, GadgetAttr, attr)


def lookup_gadget_str(name: str) -> GadgetStr:
    """Return the gadget string whose file name is ``name``."""
    return _lookup(_GADGET_STR_NAMES, name)


def gadget_str_name(string: int) -> str | None:
    """Return the file name of a gadget string, or None if unknown."""
    return _name_of(_GADGET_STR_NAMES, GadgetStr, string)


def os_desc_name(string: int) -> str | None:
    """Return the file name of an OS descriptor attribute, or None if unknown."""
    return _name_of(_OS_DESC_NAMES, OsDescStr, string)


def split_function_name(full_name: str) -> tuple[FunctionType, str]:
    """Split a function directory name "type.instance" into its parts."""
    type_name, dot, instance = full_name.partition(".")
    if not dot or not type_name or not instance:
        raise UsbgError(ErrorCode.INVALID_PARAM, f"bad function name: {full_name}")
    try:
        return lookup_function_type(type_name), instance
    except UsbgError as exc:
        raise UsbgError(
            ErrorCode.NOT_SUPPORTED, f"unsupported function type: {type_name}"
        ) from exc


def split_config_name(full_name: str) -> tuple[str, int]:
    """Split a config directory name "label.id" into label and id."""
    label, dot, id_string = full_name.rpartition(".")
    if not dot or not label or not id_string or id_string[0].isspace():
        raise UsbgError(ErrorCode.INVALID_PARAM, f"bad config name: {full_name}")
    if not _CONFIG_ID_RE.fullmatch(id_string):
        raise UsbgError(ErrorCode.INVALID_PARAM, f"bad config id: {id_string}")
    config_id = int(id_string)
    if not 0 <= config_id <= 255:
        raise UsbgError(ErrorCode.INVALID_PARAM, f"config id out of range: {config_id}")
    return label, config_id


def insert_sorted(items: MutableSequence[Any], item: Any) -> None:
    """Insert ``item`` before the first element whose name is not smaller."""
    name = item.name
    if not items or name < items[0].name:
        items.insert(0, item)
    elif name > items[-1].name:
        items.append(item)
    else:
        index = next(i for i, cur in enumerate(items) if not name > cur.name)
        items.insert(index, item)