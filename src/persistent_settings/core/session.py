"""Save/Load orchestration over a descriptor set and a backend"""

from ..errors import MarshalError
from ..logging_config import get_logger
from .fields import FieldDescriptorSet
from .marshaling import ValueMarshaler

logger = get_logger("session")


class SettingsSession:
    """Moves field values between accessors and a backend.

    Both operations process every descriptor in one pass. A field that
    fails to convert is recorded and skipped; the rest of the batch
    still runs.

    Args:
        descriptors: Fields to persist, in write order
        backend: Storage the values go to and come from
        marshaler: Converter between native and storable values
    """

    def __init__(self, descriptors: FieldDescriptorSet, backend, marshaler: ValueMarshaler):
        self.descriptors = descriptors
        self.backend = backend
        self.marshaler = marshaler

    def save(self) -> list[MarshalError]:
        """Write every field to the backend, then flush it.

        Returns:
            Errors for fields that could not be converted (not written)

        Raises:
            OSError: If the backend can't be written
        """
        logger.debug(f"Saving {len(self.descriptors)} settings to {self.backend.location}")
        native = self.backend.accepts_native_values
        errors: list[MarshalError] = []

        self.backend.reset()
        for descriptor in self.descriptors:
            value = descriptor.getter()
            if value is None:
                logger.debug(f"Skipping {descriptor.name}: no value")
                continue
            try:
                storable = self.marshaler.to_storable(
                    descriptor.kind, value, descriptor.encrypted, native=native
                )
            except MarshalError as e:
                errors.append(self._record(e, descriptor))
                continue
            self.backend.set(descriptor.name, storable)

        self.backend.flush()
        logger.debug(f"Saved settings to {self.backend.location} ({len(errors)} errors)")
        return errors

    def load(self) -> list[MarshalError]:
        """Read every stored field back through its setter.

        Fields with no stored value, or whose stored value is malformed,
        keep their current value.

        Returns:
            Errors for fields whose stored value could not be converted

        Raises:
            OSError: If the backend exists but can't be read
        """
        errors: list[MarshalError] = []
        if not self.backend.load():
            logger.debug(f"Nothing to load from {self.backend.location}")
            return errors

        for descriptor in self.descriptors:
            storable = self.backend.get(descriptor.name)
            if storable is None:
                continue
            try:
                value = self.marshaler.from_storable(
                    descriptor.kind, storable, descriptor.encrypted,
                    enum_type=descriptor.enum_type,
                )
            except MarshalError as e:
                errors.append(self._record(e, descriptor))
                continue
            descriptor.setter(value)

        logger.debug(f"Loaded settings from {self.backend.location} ({len(errors)} errors)")
        return errors

    @staticmethod
    def _record(error: MarshalError, descriptor) -> MarshalError:
        error.field_name = descriptor.name
        logger.warning(f"Settings field skipped: {error}")
        return error
