"""persistent-settings - typed application settings saved to INI, XML or the registry.

An application declares its settings as an ordered list of typed fields,
each with a getter/setter pair. The framework saves and loads them to one
of several interchangeable backends and can encrypt individual fields.

Package Structure:
    settings: Settings base class plus IniSettings, XmlSettings, RegistrySettings
    core: field descriptors, value marshaling, the array codec and INI format
    backends: INI, XML and Windows registry storage backends
    config: default settings paths and the Fernet encryption adapter
    errors: ConfigurationError, MarshalError

Quick Start::

    from persistent_settings import Field, FieldKind, IniSettings

    class AppSettings(IniSettings):
        def __init__(self, path):
            self.volume = 80
            self.api_key = ""
            super().__init__(path, encryption="Password123")

        def fields(self):
            return [
                Field.attribute(self, "volume", FieldKind.INT32, name="Volume"),
                Field.attribute(self, "api_key", FieldKind.STRING, name="ApiKey", encrypted=True),
            ]

    settings = AppSettings("app.ini")
    settings.load()
    settings.volume = 65
    settings.save()
"""

from .backends import IniBackend, RegistryBackend, RegistryScope, SettingsBackend, XmlBackend
from .config import EncryptionAdapter, FernetEncryption, SettingsPaths
from .core import Field, FieldDescriptorSet, FieldKind, IniFile
from .errors import ConfigurationError, MarshalError, SettingsError
from .settings import IniSettings, RegistrySettings, Settings, XmlSettings

__version__ = "1.0.0"

__all__ = [
    "Settings",
    "IniSettings",
    "XmlSettings",
    "RegistrySettings",
    "RegistryScope",
    "Field",
    "FieldKind",
    "FieldDescriptorSet",
    "IniFile",
    "SettingsBackend",
    "IniBackend",
    "XmlBackend",
    "RegistryBackend",
    "EncryptionAdapter",
    "FernetEncryption",
    "SettingsPaths",
    "SettingsError",
    "ConfigurationError",
    "MarshalError",
]
