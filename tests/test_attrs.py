import pytest

from gadgetfs.attrs import (
    ConfigAttrs,
    ConfigStrs,
    FunctionOsDesc,
    GadgetAttrs,
    GadgetOsDescs,
    GadgetStrs,
)
from gadgetfs.constants import GadgetAttr
from gadgetfs.errors import ErrorCode, UsbgError

MAX_VALUES = {
    GadgetAttr.BCD_USB: 0xFFFF,
    GadgetAttr.B_DEVICE_CLASS: 0xFF,
    GadgetAttr.B_DEVICE_SUB_CLASS: 0xFF,
    GadgetAttr.B_DEVICE_PROTOCOL: 0xFF,
    GadgetAttr.B_MAX_PACKET_SIZE_0: 0xFF,
    GadgetAttr.ID_VENDOR: 0xFFFF,
    GadgetAttr.ID_PRODUCT: 0xFFFF,
    GadgetAttr.BCD_DEVICE: 0xFFFF,
}


def test_default_gadget_attrs_are_zero():
    attrs = GadgetAttrs()
    assert all(attrs.get(a) == 0 for a in GadgetAttr)


@pytest.mark.parametrize("attr", list(GadgetAttr))
def test_set_get_round_trip_max(attr):
    attrs = GadgetAttrs()
    attrs.set(attr, MAX_VALUES[attr])
    assert attrs.get(attr) == MAX_VALUES[attr]
    others = [a for a in GadgetAttr if a != attr]
    assert all(attrs.get(a) == 0 for a in others)


def test_set_by_int_code_matches_field():
    attrs = GadgetAttrs()
    attrs.set(int(GadgetAttr.ID_VENDOR), 0x1D6B)
    assert attrs.id_vendor == 0x1D6B
    assert attrs.get(GadgetAttr.ID_VENDOR) == 0x1D6B


def test_set_truncates_to_field_width():
    attrs = GadgetAttrs()
    attrs.set(GadgetAttr.B_DEVICE_CLASS, 0x1FF)
    attrs.set(GadgetAttr.ID_PRODUCT, 0x1FFFF)
    assert attrs.b_device_class == MAX_VALUES[GadgetAttr.B_DEVICE_CLASS]
    assert attrs.id_product == MAX_VALUES[GadgetAttr.ID_PRODUCT]


@pytest.mark.parametrize("bad", [-1, len(GadgetAttr), 9001])
def test_get_invalid_attr_raises(bad):
    with pytest.raises(UsbgError) as info:
        GadgetAttrs().get(bad)
    assert info.value.code == ErrorCode.INVALID_PARAM


def test_set_invalid_attr_raises():
    with pytest.raises(UsbgError) as info:
        GadgetAttrs().set(len(GadgetAttr), 1)
    assert info.value.code == ErrorCode.INVALID_PARAM


def test_iteration_follows_attr_order():
    attrs = GadgetAttrs()
    for attr in GadgetAttr:
        attrs.set(attr, int(attr) + 1)
    assert list(attrs) == [int(a) + 1 for a in GadgetAttr]


def test_gadget_attrs_equality():
    a = GadgetAttrs(id_vendor=0xFFFF)
    b = GadgetAttrs()
    b.set(GadgetAttr.ID_VENDOR, 0xFFFF)
    assert a == b
    b.set(GadgetAttr.BCD_DEVICE, 0xFF)
    assert not a == b


def test_gadget_strs_defaults_and_values():
    strs = GadgetStrs()
    assert (strs.manufacturer, strs.product, strs.serial) == (None, None, None)
    strs = GadgetStrs(manufacturer="m", product="p", serial="s")
    assert strs == GadgetStrs("m", "p", "s")


def test_config_attrs_and_strs():
    attrs = ConfigAttrs(bm_attributes=0xFF, b_max_power=0xFF)
    assert (attrs.bm_attributes, attrs.b_max_power) == (0xFF, 0xFF)
    assert ConfigAttrs() == ConfigAttrs(bm_attributes=0x00, b_max_power=0x00)
    strs = ConfigStrs(configuration="configuration string")
    assert strs.configuration == "configuration string"
    assert ConfigStrs().configuration is None


def test_os_desc_types():
    descs = GadgetOsDescs(use=True, b_vendor_code=0xFF, qw_sign="MSFT100")
    assert descs == GadgetOsDescs(True, 0xFF, "MSFT100")
    assert GadgetOsDescs().use is False
    desc = FunctionOsDesc(compatible_id="RNDIS", sub_compatible_id="5162001")
    assert (desc.compatible_id, desc.sub_compatible_id) == ("RNDIS", "5162001")