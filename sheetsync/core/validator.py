"""Option validation for decoded select / multi-select values."""

from sheetsync.core.decoder import Value
from sheetsync.core.errors import OptionValidationError, TypeMismatchError
from sheetsync.core.schema import PropertyDef, PropertyType


def validate_value(prop: PropertyDef, value: Value) -> None:
    """Raise OptionValidationError if value is outside the declared options.

    Properties without a declared option list, and types other than
    select / multi_select, always pass.
    """
    if prop.options is None:
        return

    if prop.type == PropertyType.SELECT.value:
        if value and value not in prop.options:
            raise OptionValidationError(prop.name, [str(value)])

    elif prop.type == PropertyType.MULTI_SELECT.value:
        if not isinstance(value, list):
            raise TypeMismatchError(prop.type, "array", value)
        not_found = [v for v in value if v not in prop.options]
        if not_found:
            raise OptionValidationError(prop.name, not_found)
