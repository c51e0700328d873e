"""Default locations for settings files"""

import os
from pathlib import Path
from typing import Union

from ..errors import ConfigurationError


class SettingsPaths:
    """Per-platform default paths for settings files.

    Windows uses %APPDATA%\\<app>; elsewhere $XDG_CONFIG_HOME/<app>,
    falling back to ~/.config/<app>.
    """

    @classmethod
    def config_dir(cls, app_name: str) -> Path:
        """Get the settings directory for an application.

        Args:
            app_name: Application name used as the directory name

        Returns:
            Path to the (possibly not yet existing) settings directory
        """
        if os.name == "nt":
            base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        return base / app_name

    @classmethod
    def settings_file(cls, app_name: str, filename: str) -> Path:
        """Path of a settings file inside the application's settings directory"""
        return cls.config_dir(app_name) / filename

    @classmethod
    def expand_path(cls, path: Union[str, Path]) -> Path:
        """Expand environment variables and ~ in a path.

        Raises:
            ConfigurationError: If the path is empty or whitespace
        """
        if not str(path).strip():
            raise ConfigurationError("A valid path and file name is required.")
        return Path(os.path.expanduser(os.path.expandvars(str(path))))

    @classmethod
    def ensure_parent(cls, path: Path) -> Path:
        """Ensure the directory holding ``path`` exists.

        Returns:
            The directory
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        return path.parent
