"""Projection of decoded D-Bus types onto Rust/zbus types."""

from .signature import (
    Array,
    Handle,
    Map,
    Primitive,
    PrimitiveKind,
    Struct,
    Text,
    TextKind,
    TypeNode,
    Variant,
    decode,
    fold,
)

PRIMITIVE_TYPE_MAP = {
    PrimitiveKind.BYTE: "u8",
    PrimitiveKind.BOOLEAN: "bool",
    PrimitiveKind.INT16: "i16",
    PrimitiveKind.UINT16: "u16",
    PrimitiveKind.INT32: "i32",
    PrimitiveKind.UINT32: "u32",
    PrimitiveKind.INT64: "i64",
    PrimitiveKind.UINT64: "u64",
    PrimitiveKind.DOUBLE: "f64",
}

# (borrowed, owned) forms of the zvariant wrapper types
ZVARIANT_TYPE_MAP = {
    TextKind.OBJECT_PATH: ("zbus::zvariant::ObjectPath<'_>", "zbus::zvariant::OwnedObjectPath"),
    TextKind.SIGNATURE: ("zbus::zvariant::Signature<'_>", "zbus::zvariant::OwnedSignature"),
}
VALUE_TYPES = ("zbus::zvariant::Value<'_>", "zbus::zvariant::OwnedValue")
FD_TYPES = ("zbus::zvariant::Fd<'_>", "zbus::zvariant::OwnedFd")

HASH_MAP = "std::collections::HashMap"


class UnsupportedType(TypeError):
    """Raised when a type node has no Rust projection."""


def _ref(is_by_reference: bool) -> str:
    return "&" if is_by_reference else ""


def _wrapper(types: tuple[str, str], is_input: bool, is_by_reference: bool) -> str:
    borrowed, owned = types
    if is_input:
        return f"{_ref(is_by_reference)}{borrowed}"
    return owned


def _project_one(
    node: TypeNode, parts: list[str], is_input: bool, is_by_reference: bool
) -> str:
    if isinstance(node, Primitive):
        return PRIMITIVE_TYPE_MAP[node.kind]

    if isinstance(node, Handle):
        return FD_TYPES[0] if is_input else FD_TYPES[1]

    if isinstance(node, Text):
        if node.kind == TextKind.STRING:
            return "&str" if is_input or is_by_reference else "String"
        return _wrapper(ZVARIANT_TYPE_MAP[node.kind], is_input, is_by_reference)

    if isinstance(node, Variant):
        return _wrapper(VALUE_TYPES, is_input, is_by_reference)

    if isinstance(node, Map):
        key, value = parts
        return f"{HASH_MAP}<{key}, {value}>"

    if isinstance(node, Array):
        if is_input:
            return f"&[{parts[0]}]"
        return f"{_ref(is_by_reference)}Vec<{parts[0]}>"

    if isinstance(node, Struct):
        if len(parts) == 1:
            return f"{_ref(is_by_reference)}({parts[0]},)"
        return f"{_ref(is_by_reference)}({', '.join(parts)})"

    raise UnsupportedType(f"No Rust type for {node!r}")


def project(node: TypeNode, is_input: bool, is_by_reference: bool) -> str:
    """Map a decoded type to the Rust type used in a proxy declaration.

    `is_input` selects parameter (borrowed) or return (owned) types;
    `is_by_reference` only applies to the outermost type. Nested elements
    keep the position but are never taken by reference.
    """
    return fold(
        node,
        lambda current, parts, outermost: _project_one(
            current, parts, is_input, is_by_reference and outermost
        ),
    )


def to_rust_type(signature: str, is_input: bool, is_by_reference: bool) -> str:
    """Decode a single-type signature and project it."""
    return project(decode(signature), is_input, is_by_reference)
