"""D-Bus type signature decoding."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar, Union

ARRAY_CHAR = "a"
STRUCT_START_CHAR = "("
STRUCT_END_CHAR = ")"
DICT_ENTRY_START_CHAR = "{"
DICT_ENTRY_END_CHAR = "}"
HANDLE_CHAR = "h"
VARIANT_CHAR = "v"


class PrimitiveKind(StrEnum):
    """Fixed-width basic types, valued by their signature code."""

    BYTE = "y"
    BOOLEAN = "b"
    INT16 = "n"
    UINT16 = "q"
    INT32 = "i"
    UINT32 = "u"
    INT64 = "x"
    UINT64 = "t"
    DOUBLE = "d"


class TextKind(StrEnum):
    """String-like basic types, valued by their signature code."""

    STRING = "s"
    OBJECT_PATH = "o"
    SIGNATURE = "g"


PRIMITIVE_CODES = frozenset(kind.value for kind in PrimitiveKind)
TEXT_CODES = frozenset(kind.value for kind in TextKind)


class SignatureError(ValueError):
    """Raised when a signature is not a well-formed sequence of complete types."""

    def __init__(
        self, signature: str, reason: str, position: int, member: str | None = None
    ) -> None:
        self.signature = signature
        self.reason = reason
        self.position = position
        self.member = member
        super().__init__(str(self))

    def with_member(self, member: str) -> SignatureError:
        """Return a copy of this error naming the interface member it came from."""
        return SignatureError(self.signature, self.reason, self.position, member)

    def __str__(self) -> str:
        text = f"invalid signature {self.signature!r} at offset {self.position}: {self.reason}"
        if self.member:
            text = f"{self.member}: {text}"
        return text


@dataclass(frozen=True, slots=True)
class Primitive:
    kind: PrimitiveKind


@dataclass(frozen=True, slots=True)
class Handle:
    """Unix file descriptor."""


@dataclass(frozen=True, slots=True)
class Text:
    kind: TextKind


@dataclass(frozen=True, slots=True)
class Variant:
    pass


@dataclass(frozen=True, slots=True)
class Array:
    element: TypeNode


@dataclass(frozen=True, slots=True)
class Map:
    """Array of dict entries. The key is always a basic type."""

    key: TypeNode
    value: TypeNode


@dataclass(frozen=True, slots=True)
class Struct:
    """Struct with one or more fields.

    A dict entry found outside of an array is kept as a two-field struct
    with `dict_entry` set, so that it encodes back to braces.
    """

    fields: tuple[TypeNode, ...]
    dict_entry: bool = False


TypeNode = Union[Primitive, Handle, Text, Variant, Array, Map, Struct]


class SignatureCursor:
    """Single-character lookahead over a signature string."""

    def __init__(self, signature: str):
        self.signature = signature
        self.position = 0

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.signature)

    def error(self, reason: str) -> SignatureError:
        return SignatureError(self.signature, reason, self.position)

    def peek(self) -> str:
        """Return the next code without consuming it."""
        if self.at_end:
            raise self.error("unexpected end of signature")
        return self.signature[self.position]

    def advance(self) -> str:
        """Consume and return the next code."""
        code = self.peek()
        self.position += 1
        return code

    def expect(self, code: str) -> None:
        if self.peek() != code:
            raise self.error(f"expected {code!r}, found {self.peek()!r}")
        self.position += 1


_MAP = ARRAY_CHAR + DICT_ENTRY_START_CHAR
_BLOCK_END = {STRUCT_START_CHAR: STRUCT_END_CHAR, DICT_ENTRY_START_CHAR: DICT_ENTRY_END_CHAR}
_CLOSERS = frozenset(_BLOCK_END.values())


@dataclass
class _Container:
    """A container whose closing code hasn't been reached yet."""

    opener: str
    fields: list[TypeNode] = field(default_factory=list)


def _leaf(cursor: SignatureCursor, code: str) -> TypeNode:
    if code in PRIMITIVE_CODES:
        return Primitive(PrimitiveKind(code))
    if code in TEXT_CODES:
        return Text(TextKind(code))
    if code == HANDLE_CHAR:
        return Handle()
    if code == VARIANT_CHAR:
        return Variant()

    cursor.position -= 1
    raise cursor.error(f"unrecognized type code {code!r}")


def _close_block(cursor: SignatureCursor, container: _Container) -> Struct | None:
    """Consume the closing code of a struct or dict entry if it comes next."""
    code = cursor.peek()
    if code not in _CLOSERS:
        return None

    end = _BLOCK_END[container.opener]
    if code != end:
        raise cursor.error(f"container closed with {code!r} instead of {end!r}")
    dict_entry = container.opener == DICT_ENTRY_START_CHAR
    if dict_entry and len(container.fields) != 2:
        raise cursor.error("dict entry must have exactly two fields")
    cursor.advance()
    return Struct(tuple(container.fields), dict_entry=dict_entry)


def decode_next(cursor: SignatureCursor) -> TypeNode:
    """Decode one complete type from the front of `cursor`.

    Open containers are kept on an explicit stack, so nesting depth is only
    limited by the length of the signature.
    """
    stack: list[_Container] = []

    while True:
        code = cursor.advance()

        if code == ARRAY_CHAR:
            if cursor.peek() == DICT_ENTRY_START_CHAR:
                cursor.advance()
                if cursor.peek() in _CLOSERS:
                    raise cursor.error("empty container")
                stack.append(_Container(_MAP))
            else:
                stack.append(_Container(ARRAY_CHAR))
            continue

        if code in _BLOCK_END:
            if cursor.peek() in _CLOSERS:
                raise cursor.error("empty container")
            stack.append(_Container(code))
            continue

        node: TypeNode | None = _leaf(cursor, code)

        # hand the finished type to the enclosing containers, closing any
        # that are now complete
        while stack:
            container = stack[-1]
            container.fields.append(node)
            if container.opener == ARRAY_CHAR:
                node = Array(node)
            elif container.opener == _MAP:
                if len(container.fields) < 2:
                    break
                cursor.expect(DICT_ENTRY_END_CHAR)
                node = Map(*container.fields)
            else:
                node = _close_block(cursor, container)
                if node is None:
                    break
            stack.pop()
        else:
            return node


def decode(signature: str) -> TypeNode:
    """Decode a signature that holds exactly one complete type."""
    cursor = SignatureCursor(signature)
    node = decode_next(cursor)
    if not cursor.at_end:
        raise cursor.error("trailing characters after complete type")
    return node


def decode_all(signature: str) -> list[TypeNode]:
    """Decode a concatenation of complete types, such as a method's in-signature."""
    cursor = SignatureCursor(signature)
    nodes = []
    while not cursor.at_end:
        nodes.append(decode_next(cursor))
    return nodes


def children(node: TypeNode) -> tuple[TypeNode, ...]:
    """Direct element types of a container, in signature order."""
    if isinstance(node, Array):
        return (node.element,)
    if isinstance(node, Map):
        return (node.key, node.value)
    if isinstance(node, Struct):
        return node.fields
    return ()


T = TypeVar("T")


def fold(node: TypeNode, visit: Callable[[TypeNode, list[T], bool], T]) -> T:
    """Combine a type tree bottom-up without recursing.

    `visit` is called once per node with the results for its children, in
    order, and whether the node is the outermost one.
    """
    results: list[T] = []
    stack: list[tuple[TypeNode, bool]] = [(node, False)]

    while stack:
        current, expanded = stack.pop()
        elements = children(current)
        if elements and not expanded:
            stack.append((current, True))
            stack.extend((element, False) for element in reversed(elements))
            continue

        start = len(results) - len(elements)
        parts = results[start:]
        del results[start:]
        results.append(visit(current, parts, current is node))

    return results[0]


def _encode_one(node: TypeNode, parts: list[str], _outermost: bool) -> str:
    if isinstance(node, (Primitive, Text)):
        return node.kind.value
    if isinstance(node, Handle):
        return HANDLE_CHAR
    if isinstance(node, Variant):
        return VARIANT_CHAR
    if isinstance(node, Array):
        return ARRAY_CHAR + parts[0]
    if isinstance(node, Map):
        return f"{ARRAY_CHAR}{{{parts[0]}{parts[1]}}}"
    if isinstance(node, Struct):
        inner = "".join(parts)
        if node.dict_entry:
            return f"{{{inner}}}"
        return f"({inner})"
    raise TypeError(f"Unknown type node: {node!r}")


def encode(node: TypeNode) -> str:
    """Serialize a decoded type back to its signature."""
    return fold(node, _encode_one)
