"""Windows registry backend.

Values live under ``HKEY_CURRENT_USER\\Software\\<Company>\\<Application>``
(or HKEY_LOCAL_MACHINE). Integers, byte arrays and string arrays keep
their native registry types; everything else is stored as REG_SZ.
"""

import importlib
from enum import Enum
from typing import Any

from ..logging_config import get_logger
from .base import SettingsBackend

logger = get_logger("registry_backend")

_DWORD_MAX = 2**32 - 1
_QWORD_MAX = 2**64 - 1


class RegistryScope(Enum):
    """Registry hive the settings are stored under"""
    CURRENT_USER = "HKEY_CURRENT_USER"
    LOCAL_MACHINE = "HKEY_LOCAL_MACHINE"


def _winreg():
    """Import winreg on first use so this module imports on every platform"""
    return importlib.import_module("winreg")


class RegistryBackend(SettingsBackend):
    """Stores settings as values of one registry key.

    The key is opened and closed within each load() and flush() call;
    no handle is kept between calls.

    Args:
        company_name: First path component under ``Software``
        application_name: Second path component under ``Software``
        scope: Which hive to use
    """

    accepts_native_values = True

    def __init__(self, company_name: str, application_name: str,
                 scope: RegistryScope = RegistryScope.CURRENT_USER):
        super().__init__()
        self.sub_key = f"Software\\{company_name}\\{application_name}"
        self.scope = scope

    @property
    def location(self) -> str:
        return f"{self.scope.value}\\{self.sub_key}"

    def _hive(self, winreg) -> Any:
        return getattr(winreg, self.scope.value)

    def load(self) -> bool:
        """Read all values of the settings key.

        Raises:
            OSError: If the key exists but can't be read
        """
        self.reset()
        winreg = _winreg()
        try:
            key = winreg.OpenKey(self._hive(winreg), self.sub_key)
        except FileNotFoundError:
            logger.debug(f"No registry key at {self.location}")
            return False

        with key:
            index = 0
            while True:
                try:
                    name, value, value_type = winreg.EnumValue(key, index)
                except OSError:
                    # No more values
                    break
                if value is None and value_type == winreg.REG_BINARY:
                    value = b""
                self.set(name, value)
                index += 1
        return True

    def flush(self) -> None:
        winreg = _winreg()
        with winreg.CreateKeyEx(self._hive(winreg), self.sub_key, 0, winreg.KEY_WRITE) as key:
            for name, value in self.items():
                value_type, data = self._to_registry(winreg, value)
                winreg.SetValueEx(key, name, 0, value_type, data)

    @staticmethod
    def _to_registry(winreg, value: Any) -> tuple[int, Any]:
        """Pick the registry value type for a storable value"""
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value <= _DWORD_MAX:
                return winreg.REG_DWORD, value
            if 0 <= value <= _QWORD_MAX:
                return winreg.REG_QWORD, value
            # Negative numbers have no unsigned registry type
            return winreg.REG_SZ, str(value)
        if isinstance(value, (bytes, bytearray)):
            return winreg.REG_BINARY, bytes(value)
        if isinstance(value, list):
            return winreg.REG_MULTI_SZ, value
        return winreg.REG_SZ, str(value)
