"""Storage backends.

Submodules:
    base: SettingsBackend contract shared by all backends
    ini_backend: IniBackend storing settings in one INI file section
    xml_backend: XmlBackend storing settings as XML elements
    registry_backend: RegistryBackend storing settings in the Windows registry
"""

from .base import SettingsBackend
from .ini_backend import IniBackend
from .registry_backend import RegistryBackend, RegistryScope
from .xml_backend import XmlBackend

__all__ = [
    "SettingsBackend",
    "IniBackend",
    "XmlBackend",
    "RegistryBackend",
    "RegistryScope",
]
