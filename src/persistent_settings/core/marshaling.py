"""Conversion between native field values and storable values.

Every FieldKind has one (format, parse) pair in ``_CONVERTERS``. The
canonical string forms are locale-invariant:

    Bool        true / false
    integers    decimal digits, range-checked on parse
    floats      repr(float); Float32 is narrowed to single precision
    Decimal     str(Decimal)
    DateTime    ISO-8601
    ByteArray   array-codec list of per-byte decimal strings
    StringArray array-codec string
    Enum        member name
"""

import struct
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Optional

from . import array_codec
from .fields import FieldKind
from .ini_file import INTEGER_PATTERN, parse_bool
from ..errors import MarshalError
from ..logging_config import get_logger

logger = get_logger("marshaling")

INTEGER_RANGES = {
    FieldKind.INT8: (-2**7, 2**7 - 1),
    FieldKind.UINT8: (0, 2**8 - 1),
    FieldKind.INT16: (-2**15, 2**15 - 1),
    FieldKind.UINT16: (0, 2**16 - 1),
    FieldKind.INT32: (-2**31, 2**31 - 1),
    FieldKind.UINT32: (0, 2**32 - 1),
    FieldKind.INT64: (-2**63, 2**63 - 1),
    FieldKind.UINT64: (0, 2**64 - 1),
}


def _check_range(kind: FieldKind, value: int) -> int:
    low, high = INTEGER_RANGES[kind]
    if not low <= value <= high:
        raise ValueError(f"{value} is out of range for {kind.value} ({low}..{high})")
    return value


def _parse_integer(text: str) -> int:
    text = text.strip()
    if not INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def _integer_converters(kind: FieldKind):
    def format_int(value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return str(_check_range(kind, value))

    def parse_int(text: str) -> int:
        return _check_range(kind, _parse_integer(text))

    return format_int, parse_int


def _format_string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return value


def _format_char(value: Any) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise TypeError(f"expected a single character, got {value!r}")
    return value


def _parse_char(text: str) -> str:
    if len(text) != 1:
        raise ValueError(f"expected a single character, got {text!r}")
    return text


def _format_bool(value: Any) -> str:
    if not isinstance(value, bool):
        raise TypeError(f"expected bool, got {type(value).__name__}")
    return "true" if value else "false"


def _parse_bool(text: str) -> bool:
    value = parse_bool(text)
    if value is None:
        raise ValueError(f"not a boolean: {text!r}")
    return value


def _narrow_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _format_float(value: Any) -> str:
    return repr(float(value))


def _parse_float32(text: str) -> float:
    return _narrow_float32(float(text.strip()))


def _parse_float64(text: str) -> float:
    return float(text.strip())


def _format_decimal(value: Any) -> str:
    if isinstance(value, float):
        # Decimal(0.1) would keep the full binary expansion
        value = str(value)
    return str(Decimal(value))


def _parse_decimal(text: str) -> Decimal:
    return Decimal(text.strip())


def _format_datetime(value: Any) -> str:
    if not isinstance(value, datetime):
        raise TypeError(f"expected datetime, got {type(value).__name__}")
    return value.isoformat()


def _parse_datetime(text: str) -> datetime:
    return datetime.fromisoformat(text.strip())


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (int, str)):
        # bytes(5) would give five zero bytes
        raise TypeError(f"expected bytes, got {type(value).__name__}")
    return bytes(value)


def _format_byte_array(value: Any) -> str:
    return array_codec.encode(str(b) for b in _to_bytes(value))


def _parse_byte_array(text: str) -> bytes:
    return bytes(_parse_integer(item) for item in array_codec.decode(text))


def _format_string_array(value: Any) -> str:
    if isinstance(value, str):
        raise TypeError("expected a sequence of strings, got str")
    return array_codec.encode(_format_string(item) for item in value)


_CONVERTERS: dict[FieldKind, tuple[Callable[[Any], str], Callable[[str], Any]]] = {
    FieldKind.STRING: (_format_string, str),
    FieldKind.CHAR: (_format_char, _parse_char),
    FieldKind.BOOL: (_format_bool, _parse_bool),
    FieldKind.FLOAT32: (_format_float, _parse_float32),
    FieldKind.FLOAT64: (_format_float, _parse_float64),
    FieldKind.DECIMAL: (_format_decimal, _parse_decimal),
    FieldKind.DATETIME: (_format_datetime, _parse_datetime),
    FieldKind.BYTE_ARRAY: (_format_byte_array, _parse_byte_array),
    FieldKind.STRING_ARRAY: (_format_string_array, array_codec.decode),
}
_CONVERTERS.update({kind: _integer_converters(kind) for kind in INTEGER_RANGES})

_CONVERSION_ERRORS = (ValueError, TypeError, OverflowError, InvalidOperation, KeyError, struct.error)


def format_value(kind: FieldKind, value: Any) -> str:
    """Convert a native value to its canonical string form.

    Raises:
        MarshalError: If the value doesn't fit the kind
    """
    try:
        if kind is FieldKind.ENUM:
            if not isinstance(value, Enum):
                raise TypeError(f"expected Enum member, got {type(value).__name__}")
            return value.name
        formatter, _ = _CONVERTERS[kind]
        return formatter(value)
    except _CONVERSION_ERRORS as e:
        raise MarshalError(f"cannot format {kind.value} value: {e}", kind=kind) from e


def parse_value(kind: FieldKind, text: str, enum_type: Optional[type] = None) -> Any:
    """Convert a canonical string back to a native value.

    Raises:
        MarshalError: If the text can't be parsed as the kind
    """
    try:
        if kind is FieldKind.ENUM:
            if enum_type is None:
                raise TypeError("no enum type given")
            return enum_type[text.strip()]
        _, parser = _CONVERTERS[kind]
        return parser(text)
    except _CONVERSION_ERRORS as e:
        raise MarshalError(f"cannot parse {text!r} as {kind.value}: {e}", kind=kind) from e


def _to_native(kind: FieldKind, value: Any) -> Any:
    """Storable value for backends that keep native types"""
    if kind in INTEGER_RANGES:
        format_value(kind, value)
        return value
    if kind is FieldKind.STRING:
        return _format_string(value)
    if kind is FieldKind.BYTE_ARRAY:
        return _to_bytes(value)
    if kind is FieldKind.STRING_ARRAY:
        _format_string_array(value)
        return list(value)
    return format_value(kind, value)


def _from_native(kind: FieldKind, value: Any, enum_type: Optional[type]) -> Any:
    if isinstance(value, str):
        return parse_value(kind, value, enum_type)
    if kind in INTEGER_RANGES and isinstance(value, int) and not isinstance(value, bool):
        try:
            return _check_range(kind, value)
        except ValueError as e:
            raise MarshalError(str(e), kind=kind) from e
    if kind is FieldKind.BYTE_ARRAY and isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if kind is FieldKind.STRING_ARRAY and isinstance(value, list):
        return [str(item) for item in value]
    raise MarshalError(
        f"cannot convert stored {type(value).__name__} to {kind.value}", kind=kind
    )


class ValueMarshaler:
    """Converts field values to and from their storable representation.

    Args:
        encryption: Adapter used for fields marked encrypted
    """

    def __init__(self, encryption=None):
        self.encryption = encryption

    def to_storable(self, kind: FieldKind, value: Any, encrypted: bool = False, *, native: bool = False) -> Any:
        """Convert a native value for storage.

        Args:
            kind: Semantic type of the field
            value: The field's current value
            encrypted: Whether the field is stored encrypted
            native: Whether the backend accepts native values

        Returns:
            A string, or for native backends an int/bytes/list/str

        Raises:
            MarshalError: If the value can't be converted
        """
        if encrypted:
            if self.encryption is None:
                raise MarshalError("no encryption adapter configured", kind=kind)
            return self.encryption.encrypt(format_value(kind, value))
        try:
            if native:
                return _to_native(kind, value)
            return format_value(kind, value)
        except _CONVERSION_ERRORS as e:
            raise MarshalError(f"cannot convert {kind.value} value: {e}", kind=kind) from e

    def from_storable(
        self,
        kind: FieldKind,
        storable: Any,
        encrypted: bool = False,
        *,
        enum_type: Optional[type] = None,
    ) -> Any:
        """Convert a stored value back to a native value.

        Raises:
            MarshalError: If the stored value is malformed or can't be decrypted
        """
        if encrypted:
            if self.encryption is None:
                raise MarshalError("no encryption adapter configured", kind=kind)
            if not isinstance(storable, str):
                raise MarshalError(
                    f"encrypted value must be stored as a string, not {type(storable).__name__}",
                    kind=kind,
                )
            return self.encryption.decrypt(storable, kind, enum_type)
        return _from_native(kind, storable, enum_type)
