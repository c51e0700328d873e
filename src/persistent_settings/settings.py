"""Settings base classes binding fields to a storage backend"""

from pathlib import Path
from typing import Iterable, Optional, Union

from .backends import IniBackend, RegistryBackend, RegistryScope, SettingsBackend, XmlBackend
from .config.security import FernetEncryption
from .core.fields import Field, FieldDescriptorSet
from .core.ini_file import DEFAULT_SECTION_NAME
from .core.marshaling import ValueMarshaler
from .core.session import SettingsSession
from .errors import MarshalError
from .logging_config import get_logger

logger = get_logger("settings")


def _resolve_encryption(encryption):
    """Accept an adapter, a password string or None"""
    if isinstance(encryption, str):
        return FernetEncryption(encryption)
    return encryption


class Settings:
    """Base class for an application's settings.

    Subclasses declare their persistable fields by overriding
    :meth:`fields`, or pass a field list to the constructor::

        class MySettings(IniSettings):
            def __init__(self, path):
                self.count = 0
                self.tags = []
                super().__init__(path)

            def fields(self):
                return [
                    Field.attribute(self, "count", FieldKind.INT32, name="Count"),
                    Field.attribute(self, "tags", FieldKind.STRING_ARRAY, name="Tags"),
                ]

    The field list is validated once, here; the set of persisted fields
    can't change afterwards.

    Args:
        backend: Where values are stored
        encryption: Adapter (or password) for encrypted fields
        fields: Explicit field list, overriding :meth:`fields`

    Raises:
        ConfigurationError: If the field declarations are invalid
    """

    def __init__(self, backend: SettingsBackend, encryption=None,
                 fields: Optional[Iterable[Field]] = None):
        self.backend = backend
        self.encryption = _resolve_encryption(encryption)
        declared = list(fields) if fields is not None else self.fields()
        self.descriptors = FieldDescriptorSet.build(declared, self.encryption)
        self.last_errors: list[MarshalError] = []
        self._session = SettingsSession(self.descriptors, backend, ValueMarshaler(self.encryption))
        logger.debug(f"{type(self).__name__}: {len(self.descriptors)} fields stored in {backend.location}")

    def fields(self) -> list[Field]:
        """Fields to persist, in write order. Override in subclasses."""
        return []

    def save(self) -> list[MarshalError]:
        """Save all settings.

        Returns:
            Per-field conversion errors (those fields were not written)
        """
        self.last_errors = self._session.save()
        return self.last_errors

    def load(self) -> list[MarshalError]:
        """Load all settings.

        Fields missing from storage keep their current values.

        Returns:
            Per-field conversion errors (those fields were left unchanged)
        """
        self.last_errors = self._session.load()
        return self.last_errors


class IniSettings(Settings):
    """Settings stored in an INI file.

    Args:
        filename: Path of the INI file
        encryption: Adapter (or password) for encrypted fields
        section: Section the settings are written to
        fields: Explicit field list, overriding :meth:`fields`
    """

    def __init__(self, filename: Union[str, Path], encryption=None, *,
                 section: str = DEFAULT_SECTION_NAME, fields: Optional[Iterable[Field]] = None):
        super().__init__(IniBackend(filename, section), encryption, fields)

    @property
    def filename(self) -> Path:
        return self.backend.path


class XmlSettings(Settings):
    """Settings stored in an XML file.

    Args:
        filename: Path of the XML file
        encryption: Adapter (or password) for encrypted fields
        fields: Explicit field list, overriding :meth:`fields`
    """

    def __init__(self, filename: Union[str, Path], encryption=None, *,
                 fields: Optional[Iterable[Field]] = None):
        super().__init__(XmlBackend(filename), encryption, fields)

    @property
    def filename(self) -> Path:
        return self.backend.path


class RegistrySettings(Settings):
    """Settings stored in the Windows registry.

    Args:
        company_name: Used in the key path Software\\<company>\\<application>
        application_name: Used in the key path
        scope: Current user or local machine
        encryption: Adapter (or password) for encrypted fields
        fields: Explicit field list, overriding :meth:`fields`
    """

    def __init__(self, company_name: str, application_name: str,
                 scope: RegistryScope = RegistryScope.CURRENT_USER, encryption=None, *,
                 fields: Optional[Iterable[Field]] = None):
        super().__init__(RegistryBackend(company_name, application_name, scope), encryption, fields)
