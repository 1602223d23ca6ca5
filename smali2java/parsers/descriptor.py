"""
Type Descriptor Decoder
========================

Maps Dalvik type descriptors to readable Java type names.

Grammar handled here::

    I Z J F D V          primitive codes (table below)
    <any other letter>   -> Object
    Lpkg/sub/Name;       object type -> pkg.sub.Name
    [<descriptor>        array of <descriptor> -> <decoded>[]

References:
    - Google. (2024). Dalvik executable format, TypeDescriptor semantics.
      https://source.android.com/docs/core/runtime/dex-format#typedescriptor
"""

from __future__ import annotations

from smali2java.core.models import DescriptorError


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PRIMITIVE_TYPES: dict[str, str] = {
    "I": "Integer",
    "Z": "Boolean",
    "J": "Long",
    "F": "Float",
    "D": "Double",
    "V": "void",
}

DEFAULT_TYPE: str = "Object"
ROOT_CLASS: str = "java.lang.Object"

PATH_DELIMITER: str = "/"
NAMESPACE_DELIMITER: str = "."
OBJECT_PREFIX: str = "L"
OBJECT_SUFFIX: str = ";"
ARRAY_MARKER: str = "["


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode_descriptor(descriptor: str) -> str:
    """Decode a type descriptor into a readable type name.

    A descriptor whose last path segment is a single character is looked
    up in :data:`PRIMITIVE_TYPES`, falling back to ``Object``.  Anything
    longer must be an ``L...;`` object descriptor, whose path is
    rejoined with dots.

    Args:
        descriptor: Raw descriptor, e.g. ``"I"`` or ``"Ljava/lang/String;"``.

    Returns:
        The readable type name, e.g. ``"Integer"`` or ``"java.lang.String"``.

    Raises:
        DescriptorError: If a multi-character descriptor is not wrapped
            in ``L`` and ``;``.
    """
    if descriptor.startswith(ARRAY_MARKER):
        element = descriptor.lstrip(ARRAY_MARKER)
        if not element:
            raise DescriptorError(f"array descriptor without element type: {descriptor!r}")
        dimensions = len(descriptor) - len(element)
        return decode_descriptor(element) + "[]" * dimensions

    segments = descriptor.split(PATH_DELIMITER)
    if len(segments[-1]) == 1:
        return PRIMITIVE_TYPES.get(segments[-1], DEFAULT_TYPE)

    if (
        len(descriptor) < 3
        or not descriptor.startswith(OBJECT_PREFIX)
        or not descriptor.endswith(OBJECT_SUFFIX)
    ):
        raise DescriptorError(f"not an object descriptor: {descriptor!r}")

    joined = NAMESPACE_DELIMITER.join(segments)
    return joined[len(OBJECT_PREFIX):-len(OBJECT_SUFFIX)]


def simple_class_name(descriptor: str) -> str:
    """Decode *descriptor* and drop its package, e.g. ``La/b/C;`` -> ``C``."""
    return decode_descriptor(descriptor).rsplit(NAMESPACE_DELIMITER, 1)[-1]
