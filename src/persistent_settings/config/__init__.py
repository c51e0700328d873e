"""Framework configuration: default paths and field encryption.

Submodules:
    paths: SettingsPaths with per-platform default settings locations
    security: FernetEncryption adapter using password-derived Fernet keys
"""

from .paths import SettingsPaths
from .security import EncryptionAdapter, FernetEncryption

__all__ = [
    "SettingsPaths",
    "EncryptionAdapter",
    "FernetEncryption",
]
