"""Field declarations and the validated descriptor set built from them."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Optional

from ..errors import ConfigurationError
from ..logging_config import get_logger

logger = get_logger("fields")

Getter = Callable[[], Any]
Setter = Callable[[Any], None]


def _is_storable_name(name: str) -> bool:
    """Whether a name reads back unchanged as an INI key"""
    if name != name.strip() or name.startswith(("[", ";")):
        return False
    return not any(char in name for char in "=\r\n")


class FieldKind(Enum):
    """Semantic types a persistable field may have"""
    STRING = "String"
    CHAR = "Char"
    BOOL = "Bool"
    INT8 = "Int8"
    UINT8 = "UInt8"
    INT16 = "Int16"
    UINT16 = "UInt16"
    INT32 = "Int32"
    UINT32 = "UInt32"
    INT64 = "Int64"
    UINT64 = "UInt64"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    DECIMAL = "Decimal"
    DATETIME = "DateTime"
    BYTE_ARRAY = "ByteArray"
    STRING_ARRAY = "StringArray"
    ENUM = "Enum"


@dataclass
class Field:
    """One field as declared by the application.

    The framework never holds field values itself; it reads and writes
    them through ``getter`` and ``setter``.
    """
    name: str
    kind: FieldKind
    getter: Getter
    setter: Setter
    encrypted: bool = False
    excluded: bool = False
    enum_type: Optional[type] = None

    @classmethod
    def attribute(
        cls,
        owner: Any,
        attr: str,
        kind: FieldKind,
        *,
        name: Optional[str] = None,
        encrypted: bool = False,
        excluded: bool = False,
        enum_type: Optional[type] = None,
    ) -> "Field":
        """Declare a field backed by an attribute of ``owner``.

        Args:
            owner: Object holding the value
            attr: Attribute name on ``owner``
            kind: Semantic type of the value
            name: Stored name, defaults to ``attr``

        Returns:
            A Field whose accessors are getattr/setattr on ``owner``
        """
        return cls(
            name=name or attr,
            kind=kind,
            getter=lambda: getattr(owner, attr),
            setter=lambda value: setattr(owner, attr, value),
            encrypted=encrypted,
            excluded=excluded,
            enum_type=enum_type,
        )


@dataclass(frozen=True)
class FieldDescriptor:
    """Validated metadata for one persistable field"""
    name: str
    kind: FieldKind
    encrypted: bool = False
    enum_type: Optional[type] = None
    getter: Getter = field(default=lambda: None, compare=False, repr=False)
    setter: Setter = field(default=lambda value: None, compare=False, repr=False)


class FieldDescriptorSet:
    """Ordered, read-only list of the fields a settings instance persists.

    Use :meth:`build` to construct one; it validates every declaration
    up front and raises ConfigurationError rather than silently dropping
    a field.
    """

    def __init__(self, descriptors: Iterable[FieldDescriptor]):
        self._descriptors = tuple(descriptors)
        self._by_name = {d.name.lower(): d for d in self._descriptors}

    @classmethod
    def build(cls, fields: Iterable[Field], encryption=None) -> "FieldDescriptorSet":
        """Validate declared fields and build the descriptor set.

        Args:
            fields: Field declarations in the order they should be written
            encryption: Optional encryption adapter for encrypted fields

        Returns:
            The descriptor set, excluding fields flagged ``excluded``

        Raises:
            ConfigurationError: If any included field is misconfigured
        """
        descriptors = []
        seen: set[str] = set()

        for declared in fields:
            if declared.excluded:
                logger.debug(f"Excluding field {declared.name}")
                continue

            if not declared.name or not declared.name.strip():
                raise ConfigurationError("Settings field names cannot be empty.")

            if not _is_storable_name(declared.name):
                raise ConfigurationError(
                    f"Settings field name {declared.name!r} can't be stored: names must not have "
                    "surrounding whitespace, line breaks or '=', or start with '[' or ';'."
                )

            if not isinstance(declared.kind, FieldKind):
                raise ConfigurationError(
                    f"Settings field '{declared.name}' has an unsupported data type "
                    f"'{declared.kind}'. Change the field type or mark it excluded."
                )

            if declared.kind is FieldKind.ENUM and not (
                isinstance(declared.enum_type, type) and issubclass(declared.enum_type, Enum)
            ):
                raise ConfigurationError(
                    f"Settings field '{declared.name}' is an Enum field but has no Enum enum_type."
                )

            if declared.encrypted:
                if encryption is None:
                    raise ConfigurationError(
                        "Encryption cannot be None if one or more settings fields are encrypted "
                        f"(field '{declared.name}')."
                    )
                if not encryption.supports_type(declared.kind):
                    raise ConfigurationError(
                        f"Encryption does not support data type '{declared.kind.value}' "
                        f"of settings field '{declared.name}'."
                    )

            key = declared.name.lower()
            if key in seen:
                raise ConfigurationError(f"Duplicate settings field name '{declared.name}'.")
            seen.add(key)

            descriptors.append(FieldDescriptor(
                name=declared.name,
                kind=declared.kind,
                encrypted=declared.encrypted,
                enum_type=declared.enum_type,
                getter=declared.getter,
                setter=declared.setter,
            ))

        return cls(descriptors)

    def get(self, name: str) -> Optional[FieldDescriptor]:
        """Look up a descriptor by name (case-insensitive)"""
        return self._by_name.get(name.lower())

    @property
    def names(self) -> list[str]:
        return [d.name for d in self._descriptors]

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name
