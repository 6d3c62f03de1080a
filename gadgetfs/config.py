"""Configurations, functions, bindings and UDCs of a gadget."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any

from . import fsio
from .attrs import ConfigAttrs, ConfigStrs, FunctionOsDesc
from .constants import (
    OS_DESC_DIR,
    STRINGS_DIR,
    FunctionType,
    function_type_name,
    insert_sorted,
    split_function_name,
)
from .errors import ErrorCode, UsbgError

_LANG_RE = re.compile(r"(?:0[xX])?[0-9a-fA-F]+")


def _strings_langs(directory: str) -> list[int]:
    """Return the language codes of the string directories under ``directory``."""
    langs = []
    for entry in fsio.list_entries(os.path.join(directory, STRINGS_DIR)):
        if not _LANG_RE.fullmatch(entry):
            raise UsbgError(ErrorCode.OTHER_ERROR, f"bad language directory: {entry}")
        value = int(entry, 16)
        if value >= 65535:
            raise UsbgError(ErrorCode.OTHER_ERROR, f"language out of range: {entry}")
        langs.append(value)
    return langs


def _lang_dir(directory: str, lang: int) -> str:
    return os.path.join(directory, STRINGS_DIR, f"0x{lang:x}")


@dataclass(eq=False)
class Udc:
    """A USB device controller that a gadget can be bound to."""

    parent: Any
    name: str
    gadget: Any = None

    def current_gadget(self):
        """Return the gadget bound to this UDC, dropping a stale binding."""
        if self.gadget is None:
            return None
        if self.gadget.current_udc() is not None:
            return self.gadget
        self.gadget.udc = None
        self.gadget = None
        return None


@dataclass(eq=False)
class Function:
    """A function instance inside a gadget's functions directory."""

    parent: Any
    path: str
    function_type: FunctionType
    instance: str
    name: str = field(init=False)

    def __post_init__(self) -> None:
        type_name = function_type_name(self.function_type)
        if type_name is None:
            raise UsbgError(
                ErrorCode.INVALID_PARAM, f"unknown function type: {self.function_type!r}"
            )
        if not self.instance:
            raise UsbgError(ErrorCode.INVALID_PARAM, "empty function instance")
        self.function_type = FunctionType(self.function_type)
        self.name = f"{type_name}.{self.instance}"

    @property
    def directory(self) -> str:
        return os.path.join(self.path, self.name)

    def remove(self, recursive: bool = False) -> None:
        """Remove the function; with ``recursive`` also every binding to it."""
        if recursive:
            for config in self.parent.configs:
                for binding in [b for b in config.bindings if b.target is self]:
                    binding.remove()
        fsio.rm_dir(self.directory)
        self.parent.functions.remove(self)

    def _os_desc_dir(self, iname: str | None) -> str:
        if iname is None:
            raise UsbgError(ErrorCode.NOT_SUPPORTED, "function has no OS descriptor interface")
        return os.path.join(self.directory, OS_DESC_DIR, f"interface.{iname}")

    def get_os_desc(self, iname: str | None) -> FunctionOsDesc:
        """Read the OS descriptor ids of interface ``iname``."""
        directory = self._os_desc_dir(iname)
        compatible = fsio.read_string(
            os.path.join(directory, "compatible_id"), fsio.MAX_FILE_SIZE
        )
        sub_compatible = fsio.read_string(
            os.path.join(directory, "sub_compatible_id"), fsio.MAX_FILE_SIZE
        )
        return FunctionOsDesc(compatible_id=compatible, sub_compatible_id=sub_compatible)

    def set_os_desc(self, iname: str | None, desc: FunctionOsDesc) -> None:
        """Write the OS descriptor ids of interface ``iname``."""
        directory = self._os_desc_dir(iname)
        fsio.write_string(os.path.join(directory, "compatible_id"), desc.compatible_id)
        fsio.write_string(
            os.path.join(directory, "sub_compatible_id"), desc.sub_compatible_id
        )


@dataclass(eq=False)
class Binding:
    """A link from a configuration to a function."""

    parent: Any
    path: str
    name: str
    target: Function

    def remove(self) -> None:
        """Remove the link and forget the binding."""
        fsio.rm_file(os.path.join(self.path, self.name))
        self.parent.bindings.remove(self)


@dataclass(eq=False)
class Config:
    """A configuration of a gadget."""

    parent: Any
    path: str
    label: str
    id: int
    name: str = field(init=False)
    bindings: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.name = f"{self.label}.{self.id}"

    @property
    def directory(self) -> str:
        return os.path.join(self.path, self.name)

    def _load_bindings(self) -> None:
        """Read the function links present in the configuration directory."""
        directory = fsio.check_path_length(self.directory)
        for entry in fsio.list_entries(directory):
            link = os.path.join(directory, entry)
            if not os.path.islink(link):
                continue
            try:
                target = os.readlink(link)
            except OSError as exc:
                raise UsbgError.from_os_error(exc) from exc
            function_type, instance = split_function_name(os.path.basename(target))
            function = self.parent.get_function(function_type, instance)
            if function is None:
                raise UsbgError(ErrorCode.OTHER_ERROR, f"binding to unknown function: {target}")
            self.bindings.append(Binding(self, directory, entry, function))

    def get_binding(self, name: str) -> Binding | None:
        """Return the binding called ``name``, if any."""
        return next((b for b in self.bindings if b.name == name), None)

    def get_link_binding(self, function: Function) -> Binding | None:
        """Return the binding that targets ``function``, if any."""
        return next((b for b in self.bindings if b.target is function), None)

    def add_function(self, function: Function, name: str | None = None) -> Binding:
        """Link ``function`` into this configuration."""
        if function is None:
            raise UsbgError(ErrorCode.INVALID_PARAM)
        if name is None:
            name = function.name
        if self.get_binding(name) is not None:
            raise UsbgError(ErrorCode.EXIST, "duplicate binding name")
        if self.get_link_binding(function) is not None:
            raise UsbgError(ErrorCode.EXIST, "duplicate binding link")
        target = fsio.check_path_length(function.directory)
        bpath = fsio.check_path_length(self.directory)
        link = fsio.check_path_length(os.path.join(bpath, name))
        try:
            os.symlink(target, link)
        except OSError as exc:
            raise UsbgError.from_os_error(exc) from exc
        binding = Binding(self, bpath, name, function)
        insert_sorted(self.bindings, binding)
        return binding

    def get_attrs(self) -> ConfigAttrs:
        """Read the configuration attributes."""
        max_power = fsio.read_int(os.path.join(self.directory, "MaxPower"), 10)
        bm_attributes = fsio.read_int(os.path.join(self.directory, "bmAttributes"), 16)
        return ConfigAttrs(bm_attributes=bm_attributes & 0xFF, b_max_power=max_power & 0xFF)

    def set_attrs(self, attrs: ConfigAttrs) -> None:
        """Write the configuration attributes."""
        if attrs is None:
            raise UsbgError(ErrorCode.INVALID_PARAM)
        self.set_max_power(attrs.b_max_power)
        self.set_bm_attrs(attrs.bm_attributes)

    def set_max_power(self, value: int) -> None:
        fsio.write_dec(os.path.join(self.directory, "MaxPower"), value)

    def set_bm_attrs(self, value: int) -> None:
        fsio.write_hex8(os.path.join(self.directory, "bmAttributes"), value)

    def get_strs(self, lang: int) -> ConfigStrs:
        """Read the configuration strings in language ``lang``."""
        directory = _lang_dir(self.directory, lang)
        fsio.list_entries(directory)
        text = fsio.read_string(os.path.join(directory, "configuration"), fsio.MAX_FILE_SIZE)
        return ConfigStrs(configuration=text)

    def set_strs(self, lang: int, strs: ConfigStrs) -> None:
        """Write the configuration strings in language ``lang``."""
        if strs is None:
            raise UsbgError(ErrorCode.INVALID_PARAM)
        self.set_string(lang, strs.configuration)

    def set_string(self, lang: int, value: str | None) -> None:
        """Write the configuration string in language ``lang``."""
        if value is None:
            raise UsbgError(ErrorCode.INVALID_PARAM)
        directory = _lang_dir(self.directory, lang)
        fsio.check_dir(directory)
        fsio.write_string(os.path.join(directory, "configuration"), value)

    def remove_strings(self, lang: int) -> None:
        """Remove the strings directory of language ``lang``."""
        fsio.rm_dir(_lang_dir(self.directory, lang))

    def strings_langs(self) -> list[int]:
        """Return the languages that have configuration strings."""
        return _strings_langs(self.directory)

    def remove(self, recursive: bool = False) -> None:
        """Remove the configuration; with ``recursive`` also its links and strings."""
        if recursive:
            if getattr(self.parent, "os_desc_binding", None) is self:
                self.parent.set_os_desc_config(None)
            while self.bindings:
                self.bindings[0].remove()
            fsio.rm_all_dirs(os.path.join(self.directory, STRINGS_DIR))
        fsio.rm_dir(self.directory)
        self.parent.configs.remove(self)