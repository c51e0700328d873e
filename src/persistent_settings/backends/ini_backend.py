"""INI file backend"""

from pathlib import Path
from typing import Optional, Union

from ..config.paths import SettingsPaths
from ..core.ini_file import DEFAULT_SECTION_NAME, IniFile
from ..logging_config import get_logger
from .base import SettingsBackend

logger = get_logger("ini_backend")


class IniBackend(SettingsBackend):
    """Stores settings as ``Name=Value`` lines of one INI section.

    Args:
        path: INI file to read and write
        section: Section the settings live in
    """

    def __init__(self, path: Union[str, Path], section: str = DEFAULT_SECTION_NAME):
        super().__init__()
        self.path = SettingsPaths.expand_path(path)
        self.section = section
        self._ini = IniFile()

    @property
    def location(self) -> str:
        return str(self.path)

    def reset(self) -> None:
        self._ini = IniFile()

    def load(self) -> bool:
        if not self.path.exists():
            logger.debug(f"No settings file at {self.path}")
            return False
        self._ini.load(self.path)
        return True

    def get(self, name: str) -> Optional[str]:
        return self._ini.get_string(self.section, name)

    def set(self, name: str, value: str) -> None:
        self._ini.set_string(self.section, name, value)

    def items(self) -> list[tuple[str, str]]:
        return [(s.name, s.value) for s in self._ini.get_section_settings(self.section)]

    def flush(self) -> None:
        SettingsPaths.ensure_parent(self.path)
        self._ini.save(self.path)
