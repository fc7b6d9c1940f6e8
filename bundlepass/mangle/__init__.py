"""Private-field-to-property conversion for bundled JavaScript."""

from bundlepass.mangle.names import (
    SHORT_NAME_ALPHABET,
    SHORT_NAME_PREFIX,
    ShortNameAllocator,
    generate_short_name,
)
from bundlepass.mangle.privates import ConvertPrivateFieldsResult, convert_private_fields

__all__ = [
    "SHORT_NAME_ALPHABET",
    "SHORT_NAME_PREFIX",
    "ConvertPrivateFieldsResult",
    "ShortNameAllocator",
    "convert_private_fields",
    "generate_short_name",
]
