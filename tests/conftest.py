from __future__ import annotations

import sys
import types
from typing import Any

import pytest


class FakeRegistryKey:
    def __init__(self, values: dict[str, tuple[Any, int]]) -> None:
        self.values = values

    def __enter__(self) -> "FakeRegistryKey":
        return self

    def __exit__(self, *exc: object) -> None:
        return None


def make_fake_winreg() -> types.ModuleType:
    """In-memory stand-in for the winreg module"""
    module = types.ModuleType("winreg")
    module.HKEY_CURRENT_USER = "HKCU"
    module.HKEY_LOCAL_MACHINE = "HKLM"
    module.KEY_WRITE = 0x20006
    module.REG_SZ = 1
    module.REG_BINARY = 3
    module.REG_DWORD = 4
    module.REG_MULTI_SZ = 7
    module.REG_QWORD = 11
    module.hives = {"HKCU": {}, "HKLM": {}}

    def open_key(hive: str, sub_key: str) -> FakeRegistryKey:
        try:
            return FakeRegistryKey(module.hives[hive][sub_key.lower()])
        except KeyError:
            raise FileNotFoundError(sub_key) from None

    def create_key_ex(hive: str, sub_key: str, reserved: int, access: int) -> FakeRegistryKey:
        return FakeRegistryKey(module.hives[hive].setdefault(sub_key.lower(), {}))

    def enum_value(key: FakeRegistryKey, index: int) -> tuple[str, Any, int]:
        items = list(key.values.items())
        if index >= len(items):
            raise OSError("No more data is available")
        name, (value, value_type) = items[index]
        return name, value, value_type

    def set_value_ex(key: FakeRegistryKey, name: str, reserved: int, value_type: int, value: Any) -> None:
        key.values[name] = (value, value_type)

    module.OpenKey = open_key
    module.CreateKeyEx = create_key_ex
    module.EnumValue = enum_value
    module.SetValueEx = set_value_ex
    return module


@pytest.fixture()
def fake_winreg(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    module = make_fake_winreg()
    monkeypatch.setitem(sys.modules, "winreg", module)
    return module
