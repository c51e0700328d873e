"""INI file parser and writer.

The format is line oriented:

    ; comment
    Key=Value            <- before any header, lands in [General]
    [Section]
    Other=raw value kept as-is

Section and key names are case-insensitive. Values are never escaped by
this layer; array values arrive here already encoded by the array codec.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from ..logging_config import get_logger

logger = get_logger("ini_file")

DEFAULT_SECTION_NAME = "General"

TRUE_STRINGS = ("true", "yes", "on")
FALSE_STRINGS = ("false", "no", "off")

# ASCII digits only, no digit separators
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_bool(text: Optional[str]) -> Optional[bool]:
    """Interpret an INI boolean.

    Accepts true/yes/on and false/no/off (case-insensitive), then any
    integer (0 is False). Returns None when the text is none of these.
    """
    if text is None:
        return None
    value = text.strip().lower()
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    if INTEGER_PATTERN.fullmatch(value):
        return int(value) != 0
    return None


@dataclass
class IniSetting:
    """One name/value pair in an INI file"""
    name: str
    value: str = ""


class IniSection:
    """A named group of settings, keyed case-insensitively"""

    def __init__(self, name: str):
        self.name = name
        self._settings: dict[str, IniSetting] = {}

    def get(self, name: str) -> Optional[IniSetting]:
        return self._settings.get(name.lower())

    def set(self, name: str, value: str) -> None:
        setting = self._settings.get(name.lower())
        if setting is None:
            self._settings[name.lower()] = IniSetting(name=name, value=value)
        else:
            setting.value = value

    def __iter__(self) -> Iterator[IniSetting]:
        return iter(self._settings.values())

    def __len__(self) -> int:
        return len(self._settings)


class IniFile:
    """In-memory INI document with load/save and typed accessors.

    Typed getters never raise on bad data; they fall back to the default
    the caller supplies, so a hand-edited file cannot crash the host
    application.
    """

    def __init__(self):
        self._sections: dict[str, IniSection] = {}
        self._clear()

    def _clear(self) -> None:
        self._sections.clear()
        self._add_section(DEFAULT_SECTION_NAME)

    def _add_section(self, name: str) -> IniSection:
        section = IniSection(name)
        self._sections[name.lower()] = section
        return section

    def _get_or_add_section(self, name: str) -> IniSection:
        section = self._sections.get(name.lower())
        if section is None:
            section = self._add_section(name)
        return section

    # File functions

    def load(self, path: Union[str, Path]) -> None:
        """Load an INI file, replacing everything currently held.

        Args:
            path: File to read

        Raises:
            FileNotFoundError: If the file doesn't exist
            OSError: If the file can't be read
        """
        logger.debug(f"Loading INI file {path}")
        self._clear()
        section = self._sections[DEFAULT_SECTION_NAME.lower()]

        with open(path, "r", encoding="utf-8-sig") as f:
            for raw_line in f:
                line = raw_line.rstrip("\r\n").lstrip()
                if not line or line.startswith(";"):
                    continue

                if line.startswith("["):
                    end = line.find("]", 1)
                    if end == -1:
                        end = len(line)
                    name = line[1:end].strip()
                    if name:
                        section = self._get_or_add_section(name)
                    continue

                name, sep, value = line.partition("=")
                name = name.strip()
                if not sep:
                    value = ""
                if name:
                    section.set(name, value)

    def save(self, path: Union[str, Path]) -> None:
        """Write all non-empty sections to a file, overwriting it.

        Args:
            path: File to write

        Raises:
            OSError: If the file can't be written
        """
        logger.debug(f"Saving INI file {path}")
        blocks = []
        for section in self._sections.values():
            if not len(section):
                continue
            lines = [f"[{section.name}]"]
            lines.extend(f"{setting.name}={setting.value}" for setting in section)
            blocks.append("\n".join(lines) + "\n")

        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write("\n".join(blocks))

    # Read values

    def sections(self) -> list[str]:
        """Names of all sections, in first-seen order"""
        return [section.name for section in self._sections.values()]

    def get_section_settings(self, section: str) -> Iterator[IniSetting]:
        """Iterate the settings of a section (empty if it doesn't exist)"""
        ini_section = self._sections.get(section.lower())
        if ini_section is not None:
            yield from ini_section

    def get_string(self, section: str, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return a setting's raw value, or ``default`` if not found"""
        ini_section = self._sections.get(section.lower())
        if ini_section is not None:
            setting = ini_section.get(name)
            if setting is not None:
                return setting.value
        return default

    def get_int(self, section: str, name: str, default: int = 0) -> int:
        value = self.get_string(section, name)
        if value is None:
            return default
        value = value.strip()
        if not INTEGER_PATTERN.fullmatch(value):
            return default
        return int(value)

    def get_float(self, section: str, name: str, default: float = 0.0) -> float:
        value = self.get_string(section, name)
        if value is None:
            return default
        try:
            return float(value.strip())
        except ValueError:
            return default

    def get_bool(self, section: str, name: str, default: bool = False) -> bool:
        """Return a setting as a boolean.

        Unrecognized text is not an error: it yields ``default``.
        """
        value = parse_bool(self.get_string(section, name))
        return default if value is None else value

    # Write values

    def set_string(self, section: str, name: str, value: str) -> None:
        """Set a setting; nothing is written until :meth:`save`"""
        self._get_or_add_section(section).set(name, value)

    def set_int(self, section: str, name: str, value: int) -> None:
        self.set_string(section, name, str(value))

    def set_float(self, section: str, name: str, value: float) -> None:
        self.set_string(section, name, repr(float(value)))

    def set_bool(self, section: str, name: str, value: bool) -> None:
        self.set_string(section, name, str(bool(value)).lower())
