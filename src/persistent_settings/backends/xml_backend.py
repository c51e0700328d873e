"""XML file backend"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Union

from ..config.paths import SettingsPaths
from ..logging_config import get_logger
from .base import SettingsBackend

logger = get_logger("xml_backend")

ROOT_ELEMENT = "Settings"


class XmlBackend(SettingsBackend):
    """Stores settings as child elements of a ``<Settings>`` document.

    Example file::

        <?xml version='1.0' encoding='utf-8'?>
        <Settings>
          <Count>-59883</Count>
          <Tags>"a,b","c""d",e</Tags>
        </Settings>

    Args:
        path: XML file to read and write
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = SettingsPaths.expand_path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def load(self) -> bool:
        """Load values from the XML file.

        Raises:
            ET.ParseError: If the XML is malformed
        """
        self.reset()
        if not self.path.exists():
            logger.debug(f"No settings file at {self.path}")
            return False

        tree = ET.parse(self.path)
        for elem in tree.getroot():
            self.set(elem.tag, elem.text or "")
        return True

    def flush(self) -> None:
        root = ET.Element(ROOT_ELEMENT)
        for name, value in self.items():
            ET.SubElement(root, name).text = value

        SettingsPaths.ensure_parent(self.path)
        tree = ET.ElementTree(root)
        ET.indent(tree, space="  ")
        tree.write(self.path, encoding="utf-8", xml_declaration=True)
