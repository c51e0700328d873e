"""Field descriptors, value conversion and the INI format.

Submodules:
    array_codec: encode/decode string sequences as one delimited string
    fields: FieldKind, Field declarations and the validated FieldDescriptorSet
    marshaling: ValueMarshaler converting native values to storable values
    ini_file: IniFile parser/writer with typed accessors
    session: SettingsSession running Save/Load against a backend
"""

from .fields import Field, FieldDescriptor, FieldDescriptorSet, FieldKind
from .ini_file import DEFAULT_SECTION_NAME, IniFile
from .marshaling import ValueMarshaler
from .session import SettingsSession

__all__ = [
    "Field",
    "FieldDescriptor",
    "FieldDescriptorSet",
    "FieldKind",
    "IniFile",
    "DEFAULT_SECTION_NAME",
    "ValueMarshaler",
    "SettingsSession",
]
