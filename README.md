# gadgetfs

Building blocks for working with the Linux configfs USB gadget interface
(`<configfs>/usb_gadget`): error codes, attribute file I/O, the names
configfs uses for functions and descriptors, plain attribute value types,
and objects for configurations, functions, bindings and UDCs.

## Installation

```
pip install gadgetfs
```

To run the tests:

```
pip install "gadgetfs[test]"
pytest
```

## Modules

- `gadgetfs.errors`: `ErrorCode` (an `IntEnum` of result codes),
  `UsbgError` (the exception every failing operation raises; its `code`
  attribute is an `ErrorCode`), `error_name(code)` (for example
  `"USBG_ERROR_EXIST"`, or `"UNKNOWN"`), `strerror(code)` and
  `translate_errno(errno_value)`, which maps an OS errno onto an
  `ErrorCode`.
- `gadgetfs.fsio`: reading and writing configfs attribute files.
  `read_raw`, `read_exact`, `read_string` (first line only),
  `read_int` (parsed like C `strtol`), `read_bool`, `write_raw`,
  `write_dec`, `write_hex`, `write_hex8`, `write_hex16`, `write_bool`,
  `write_string`, GUID helpers (`format_guid`, `write_guid`), hardware
  address helpers (`format_ether_addr`, `parse_ether_addr`,
  `read_ether_addr`, `write_ether_addr`), `read_dev` for `major:minor`
  files, and directory helpers `list_entries`, `check_dir` (creates the
  directory if missing), `rm_file`, `rm_dir` and `rm_all_dirs`. OS errors
  are raised as `UsbgError`; paths of 4096 bytes or more raise
  `ErrorCode.PATH_TOO_LONG`.
- `gadgetfs.constants`: the enums `FunctionType`, `GadgetAttr`,
  `GadgetStr` and `OsDescStr`, lookups in both directions
  (`lookup_function_type`, `function_type_name`, `lookup_gadget_attr`,
  `gadget_attr_name`, `lookup_gadget_str`, `gadget_str_name`,
  `os_desc_name`), `split_function_name("acm.usb0")`,
  `split_config_name("c.1")` and `insert_sorted`, which keeps a list of
  named objects in name order.
- `gadgetfs.attrs`: dataclasses `GadgetAttrs`, `GadgetStrs`,
  `ConfigAttrs`, `ConfigStrs`, `GadgetOsDescs` and `FunctionOsDesc`.
  `GadgetAttrs.get(attr)` and `GadgetAttrs.set(attr, value)` select a
  field by `GadgetAttr`; `set` truncates to the field's 8 or 16 bits.
- `gadgetfs.config`: `Config`, `Function`, `Binding` and `Udc`.

## Usage

Names and errors:

```python
from gadgetfs.constants import FunctionType, function_type_name, split_function_name
from gadgetfs.errors import ErrorCode, UsbgError, strerror

assert function_type_name(FunctionType.SERIAL) == "gser"
assert split_function_name("acm.usb0") == (FunctionType.ACM, "usb0")

try:
    split_function_name("unknown.0")
except UsbgError as exc:
    assert exc.code is ErrorCode.NOT_SUPPORTED
print(strerror(ErrorCode.EXIST))  # "Already exist"
```

Attribute files:

```python
from gadgetfs import fsio

fsio.write_hex16("/sys/kernel/config/usb_gadget/g1/idVendor", 0x1D6B)
vendor = fsio.read_int("/sys/kernel/config/usb_gadget/g1/idVendor", 16)

fsio.parse_ether_addr("02:00:00:00:00:01")  # b"\x02\x00\x00\x00\x00\x01"
```

Configurations and functions. These objects take a `parent` that stands
for the gadget; the caller supplies it. It needs `functions` and
`configs` lists and a `get_function(function_type, instance)` method;
`Config.remove(recursive=True)` also uses its `os_desc_binding` attribute
and `set_os_desc_config(None)`.

```python
from gadgetfs.attrs import ConfigAttrs
from gadgetfs.config import Config, Function
from gadgetfs.constants import FunctionType

base = "/sys/kernel/config/usb_gadget/g1"

acm = Function(my_gadget, f"{base}/functions", FunctionType.ACM, "usb0")
config = Config(my_gadget, f"{base}/configs", "c", 1)
my_gadget.functions.append(acm)
my_gadget.configs.append(config)

config.set_attrs(ConfigAttrs(bm_attributes=0x80, b_max_power=120))
config.set_string(0x409, "CDC ACM")
binding = config.add_function(acm)   # creates configs/c.1/acm.usb0 -> functions/acm.usb0
```

The `Function` and `Config` constructors only build the objects; the
`functions/acm.usb0` and `configs/c.1` directories must already exist.
`Config.add_function` creates the link, `Binding.remove`, `Function.remove`
and `Config.remove` delete the directory entries and drop the object from
its parent's list.

## What this package does not do

There is no object for the whole configfs tree or for a gadget. The
package does not scan `usb_gadget` or `/sys/class/udc`, does not create
or remove gadget directories, does not set a gadget's device descriptor,
strings or OS descriptors, and does not bind a gadget to a UDC or unbind
it. `Udc.current_gadget()` only works with a gadget object, supplied by
the caller, that has a `current_udc()` method and a `udc` attribute.
There is no command-line tool.