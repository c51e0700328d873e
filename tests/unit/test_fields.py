import pytest

from persistent_settings import (
    ConfigurationError,
    FernetEncryption,
    Field,
    FieldDescriptorSet,
    FieldKind,
    SettingsError,
)
from tests.sample_settings import Color, SampleValues


class StringOnlyEncryption:
    def supports_type(self, kind: FieldKind) -> bool:
        return kind is FieldKind.STRING

    def encrypt(self, plain_text: str) -> str:
        return plain_text[::-1]

    def decrypt(self, encrypted_text: str, kind: FieldKind, enum_type=None):
        return encrypted_text[::-1]


def _field(name: str, kind=FieldKind.STRING, **kwargs) -> Field:
    return Field(name, kind, lambda: None, lambda value: None, **kwargs)


def test_preserves_declaration_order_and_drops_excluded() -> None:
    descriptors = FieldDescriptorSet.build([
        _field("Zeta"),
        _field("Hidden", excluded=True),
        _field("Alpha", FieldKind.INT32),
    ])
    assert descriptors.names == ["Zeta", "Alpha"]
    assert len(descriptors) == 2
    assert "hidden" not in descriptors


def test_lookup_is_case_insensitive() -> None:
    descriptors = FieldDescriptorSet.build([_field("Volume", FieldKind.INT32)])
    assert "VOLUME" in descriptors
    assert descriptors.get("volume").kind is FieldKind.INT32


def test_duplicate_names_rejected() -> None:
    with pytest.raises(ConfigurationError):
        FieldDescriptorSet.build([_field("Name"), _field("NAME")])


def test_unsupported_kind_rejected() -> None:
    with pytest.raises(ConfigurationError, match="unsupported data type"):
        FieldDescriptorSet.build([_field("Window", kind=dict)])


def test_unsupported_kind_allowed_when_excluded() -> None:
    descriptors = FieldDescriptorSet.build([_field("Window", kind=dict, excluded=True)])
    assert len(descriptors) == 0


def test_enum_field_requires_enum_type() -> None:
    with pytest.raises(ConfigurationError):
        FieldDescriptorSet.build([_field("Color", FieldKind.ENUM)])
    with pytest.raises(ConfigurationError):
        FieldDescriptorSet.build([_field("Color", FieldKind.ENUM, enum_type=int)])
    descriptors = FieldDescriptorSet.build([_field("Color", FieldKind.ENUM, enum_type=Color)])
    assert descriptors.get("Color").enum_type is Color


def test_encrypted_field_without_adapter_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Encryption cannot be None"):
        FieldDescriptorSet.build([_field("Secret", encrypted=True)])


def test_encrypted_field_kind_must_be_supported_by_adapter() -> None:
    adapter = StringOnlyEncryption()
    FieldDescriptorSet.build([_field("Secret", encrypted=True)], adapter)
    with pytest.raises(ConfigurationError):
        FieldDescriptorSet.build([_field("Pin", FieldKind.INT32, encrypted=True)], adapter)


def test_empty_name_rejected() -> None:
    with pytest.raises(ConfigurationError):
        FieldDescriptorSet.build([_field("  ")])


@pytest.mark.parametrize("name", [" Count", "Count ", "a=b", "[Count", ";Count", "Line\nBreak", "Ret\rurn"])
def test_name_that_cannot_be_stored_as_ini_key_rejected(name: str) -> None:
    with pytest.raises(ConfigurationError):
        FieldDescriptorSet.build([_field(name)])


def test_name_with_inner_spaces_and_brackets_allowed() -> None:
    descriptors = FieldDescriptorSet.build([_field("Window Size"), _field("Size[0]")])
    assert descriptors.names == ["Window Size", "Size[0]"]


def test_attribute_field_reads_and_writes_owner() -> None:
    values = SampleValues()
    values.int32_value = 4
    field = Field.attribute(values, "int32_value", FieldKind.INT32, name="Count")
    assert field.name == "Count"
    assert field.getter() == 4
    field.setter(9)
    assert values.int32_value == 9


def test_fernet_adapter_supports_every_kind() -> None:
    adapter = FernetEncryption("pw")
    fields = [_field(kind.value, kind, encrypted=True, enum_type=Color) for kind in FieldKind]
    assert len(FieldDescriptorSet.build(fields, adapter)) == len(FieldKind)


def test_configuration_error_is_a_settings_error() -> None:
    with pytest.raises(SettingsError):
        FieldDescriptorSet.build([_field("Secret", encrypted=True)])
