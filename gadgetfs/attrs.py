"""Plain value types for gadget, config and OS descriptor attributes."""

from __future__ import annotations

from dataclasses import dataclass, fields

from .constants import GadgetAttr
from .errors import ErrorCode, UsbgError

# Attribute -> (dataclass field, bit width of the descriptor field)
_GADGET_ATTR_FIELDS = {
    GadgetAttr.BCD_USB: ("bcd_usb", 16),
    GadgetAttr.B_DEVICE_CLASS: ("b_device_class", 8),
    GadgetAttr.B_DEVICE_SUB_CLASS: ("b_device_sub_class", 8),
    GadgetAttr.B_DEVICE_PROTOCOL: ("b_device_protocol", 8),
    GadgetAttr.B_MAX_PACKET_SIZE_0: ("b_max_packet_size0", 8),
    GadgetAttr.ID_VENDOR: ("id_vendor", 16),
    GadgetAttr.ID_PRODUCT: ("id_product", 16),
    GadgetAttr.BCD_DEVICE: ("bcd_device", 16),
}


def _gadget_attr_field(attr) -> tuple[str, int]:
    try:
        return _GADGET_ATTR_FIELDS[GadgetAttr(attr)]
    except (ValueError, TypeError) as exc:
        raise UsbgError(ErrorCode.INVALID_PARAM, f"unknown gadget attribute: {attr!r}") from exc


@dataclass
class GadgetAttrs:
    """Device descriptor values of a gadget."""

    bcd_usb: int = 0
    b_device_class: int = 0
    b_device_sub_class: int = 0
    b_device_protocol: int = 0
    b_max_packet_size0: int = 0
    id_vendor: int = 0
    id_product: int = 0
    bcd_device: int = 0

    def get(self, attr) -> int:
        """Return the value of one attribute selected by its code."""
        field_name, _ = _gadget_attr_field(attr)
        return getattr(self, field_name)

    def set(self, attr, value: int) -> None:
        """Set one attribute, truncated to the width of its descriptor field."""
        field_name, width = _gadget_attr_field(attr)
        setattr(self, field_name, int(value) & ((1 << width) - 1))

    def __iter__(self):
        return iter(getattr(self, f.name) for f in fields(self))


@dataclass
class GadgetStrs:
    """String descriptors of a gadget in one language."""

    manufacturer: str | None = None
    product: str | None = None
    serial: str | None = None


@dataclass
class ConfigAttrs:
    """Attributes of a configuration."""

    bm_attributes: int = 0
    b_max_power: int = 0


@dataclass
class ConfigStrs:
    """String descriptors of a configuration in one language."""

    configuration: str | None = None


@dataclass
class GadgetOsDescs:
    """OS descriptor settings of a gadget."""

    use: bool = False
    b_vendor_code: int = 0
    qw_sign: str | None = None


@dataclass
class FunctionOsDesc:
    """OS descriptor compatibility ids of a function interface."""

    compatible_id: str | None = None
    sub_compatible_id: str | None = None