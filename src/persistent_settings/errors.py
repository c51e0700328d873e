"""Exceptions raised by the settings framework."""

from typing import Optional


class SettingsError(Exception):
    """Base exception for all settings framework errors"""
    pass


class ConfigurationError(SettingsError):
    """Raised when a settings class is declared incorrectly.

    This is always raised at construction time, before any save or load
    is attempted, so a misconfigured settings class never runs with an
    incomplete field list.
    """
    pass


class MarshalError(SettingsError):
    """Raised when a single field value cannot be converted.

    The session records these per field and carries on with the rest of
    the batch; the affected field keeps its previous value.
    """

    def __init__(self, message: str, *, field_name: Optional[str] = None, kind=None):
        super().__init__(message)
        self.field_name = field_name
        self.kind = kind

    def __str__(self) -> str:
        message = super().__str__()
        if self.field_name:
            return f"{self.field_name}: {message}"
        return message


__all__ = [
    "SettingsError",
    "ConfigurationError",
    "MarshalError",
]
