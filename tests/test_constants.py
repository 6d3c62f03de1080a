from dataclasses import dataclass

import pytest

from gadgetfs.constants import (
    FunctionType,
    GadgetAttr,
    GadgetStr,
    OsDescStr,
    function_type_name,
    gadget_attr_name,
    gadget_str_name,
    insert_sorted,
    lookup_function_type,
    lookup_gadget_attr,
    lookup_gadget_str,
    os_desc_name,
    split_config_name,
    split_function_name,
)
from gadgetfs.errors import ErrorCode, UsbgError

FUNCTION_TYPE_STRS = [
    (FunctionType.SERIAL, "gser"),
    (FunctionType.ACM, "acm"),
    (FunctionType.OBEX, "obex"),
    (FunctionType.ECM, "ecm"),
    (FunctionType.SUBSET, "geth"),
    (FunctionType.NCM, "ncm"),
    (FunctionType.EEM, "eem"),
    (FunctionType.RNDIS, "rndis"),
    (FunctionType.PHONET, "phonet"),
    (FunctionType.FFS, "ffs"),
]

GADGET_ATTR_STRS = [
    (GadgetAttr.BCD_USB, "bcdUSB"),
    (GadgetAttr.B_DEVICE_CLASS, "bDeviceClass"),
    (GadgetAttr.B_DEVICE_SUB_CLASS, "bDeviceSubClass"),
    (GadgetAttr.B_DEVICE_PROTOCOL, "bDeviceProtocol"),
    (GadgetAttr.B_MAX_PACKET_SIZE_0, "bMaxPacketSize0"),
    (GadgetAttr.ID_VENDOR, "idVendor"),
    (GadgetAttr.ID_PRODUCT, "idProduct"),
    (GadgetAttr.BCD_DEVICE, "bcdDevice"),
]

GADGET_STR_NAMES = [
    (GadgetStr.PRODUCT, "product"),
    (GadgetStr.MANUFACTURER, "manufacturer"),
    (GadgetStr.SERIAL_NUMBER, "serialnumber"),
]


@pytest.mark.parametrize("ftype, name", FUNCTION_TYPE_STRS)
def test_function_type_name(ftype, name):
    assert function_type_name(ftype) == name


@pytest.mark.parametrize("ftype, name", FUNCTION_TYPE_STRS)
def test_lookup_function_type(ftype, name):
    assert lookup_function_type(name) is ftype


def test_function_type_name_fail():
    assert function_type_name(-1) is None
    assert function_type_name(9001) is None


def test_every_function_type_round_trips():
    for ftype in FunctionType:
        assert lookup_function_type(function_type_name(ftype)) is ftype


def test_lookup_function_type_unknown():
    with pytest.raises(UsbgError) as info:
        lookup_function_type("nosuch")
    assert info.value.code == ErrorCode.NOT_FOUND


def test_lookup_function_type_none():
    with pytest.raises(UsbgError) as info:
        lookup_function_type(None)
    assert info.value.code == ErrorCode.INVALID_PARAM


@pytest.mark.parametrize("attr, name", GADGET_ATTR_STRS)
def test_gadget_attr_name(attr, name):
    assert gadget_attr_name(attr) == name
    assert lookup_gadget_attr(name) is attr


def test_gadget_attr_iteration():
    expected = dict(GADGET_ATTR_STRS)
    for attr in GadgetAttr:
        assert gadget_attr_name(int(attr)) == expected[attr]


def test_gadget_attr_name_fail():
    assert gadget_attr_name(min(GadgetAttr) - 1) is None
    assert gadget_attr_name(max(GadgetAttr) + 1) is None


@pytest.mark.parametrize("code, name", GADGET_STR_NAMES)
def test_gadget_str_name(code, name):
    assert gadget_str_name(code) == name


@pytest.mark.parametrize("code, name", GADGET_STR_NAMES)
def test_lookup_gadget_str(code, name):
    assert lookup_gadget_str(name) == code


def test_lookup_gadget_str_unknown():
    with pytest.raises(UsbgError) as info:
        lookup_gadget_str("vendor")
    assert info.value.code == ErrorCode.NOT_FOUND


def test_os_desc_names():
    assert os_desc_name(OsDescStr.USE) == "use"
    assert os_desc_name(OsDescStr.B_VENDOR_CODE) == "b_vendor_code"
    assert os_desc_name(OsDescStr.QW_SIGN) == "qw_sign"
    assert os_desc_name(3) is None


def test_split_function_name():
    assert split_function_name("acm.usb0") == (FunctionType.ACM, "usb0")
    assert split_function_name("ecm.a.b") == (FunctionType.ECM, "a.b")


@pytest.mark.parametrize("name", ["acm", ".usb0", "acm."])
def test_split_function_name_invalid(name):
    with pytest.raises(UsbgError) as info:
        split_function_name(name)
    assert info.value.code == ErrorCode.INVALID_PARAM


def test_split_function_name_unsupported():
    with pytest.raises(UsbgError) as info:
        split_function_name("bogus.0")
    assert info.value.code == ErrorCode.NOT_SUPPORTED


def test_split_config_name():
    assert split_config_name("c.1") == ("c", 1)
    assert split_config_name("my.label.255") == ("my.label", 255)
    assert split_config_name("c.0") == ("c", 0)


@pytest.mark.parametrize(
    "name", ["c", ".1", "c.", "c. 1", "c.1x", "c.256", "c.-1", "c.+"]
)
def test_split_config_name_invalid(name):
    with pytest.raises(UsbgError) as info:
        split_config_name(name)
    assert info.value.code == ErrorCode.INVALID_PARAM


@dataclass
class _Named:
    name: str


def _names(items):
    return [i.name for i in items]


def test_insert_sorted_into_empty():
    items = []
    insert_sorted(items, _Named("b"))
    assert _names(items) == ["b"]


def test_insert_sorted_orders_items():
    items = []
    for name in ["m", "a", "z", "k", "b"]:
        insert_sorted(items, _Named(name))
    assert _names(items) == ["a", "b", "k", "m", "z"]


def test_insert_sorted_equal_name_goes_before():
    first = _Named("b")
    items = [_Named("a"), first, _Named("c")]
    new = _Named("b")
    insert_sorted(items, new)
    assert items[1] is new
    assert items[2] is first


def test_insert_sorted_byte_order():
    items = []
    for name in ["g1", "G2", "g10"]:
        insert_sorted(items, _Named(name))
    assert _names(items) == ["G2", "g1", "g10"]