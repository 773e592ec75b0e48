"""Type complexity estimation for generated declarations.

Clippy's `type_complexity` lint fires on deeply nested Rust types. The
generator cannot run clippy, so it walks the signature and scores its
structure instead; declarations scoring at or above `COMPLEXITY_THRESHOLD`
get an `#[allow(clippy::type_complexity)]` attribute.

This walk is independent of the decoder in `signature.py` and is
permissive: unknown codes score nothing and running out of input stops it.
The weights are empirical and must stay fixed.
"""

from dataclasses import dataclass

from .signature import (
    ARRAY_CHAR,
    DICT_ENTRY_END_CHAR,
    DICT_ENTRY_START_CHAR,
    HANDLE_CHAR,
    PRIMITIVE_CODES,
    STRUCT_END_CHAR,
    STRUCT_START_CHAR,
    VARIANT_CHAR,
    TextKind,
)

COMPLEXITY_THRESHOLD = 1700

CONTAINER_WEIGHT = 50
ELEMENT_WEIGHT = 5
HANDLE_WEIGHT = 10
MULTIPLIER = 10

_SCALAR_CODES = PRIMITIVE_CODES | {TextKind.STRING.value}
_MULTIPLIED_CODES = frozenset(
    {TextKind.OBJECT_PATH.value, TextKind.SIGNATURE.value, VARIANT_CHAR}
)

_MAP = ARRAY_CHAR + DICT_ENTRY_START_CHAR
_CLOSERS = frozenset({STRUCT_END_CHAR, DICT_ENTRY_END_CHAR})


class _Codes:
    def __init__(self, signature: str):
        self.signature = signature
        self.position = 0

    def peek(self) -> str | None:
        if self.position < len(self.signature):
            return self.signature[self.position]
        return None

    def next(self) -> str | None:
        code = self.peek()
        if code is not None:
            self.position += 1
        return code


@dataclass
class _Open:
    """A container still being scored: its opening code and score so far."""

    opener: str
    score: int


def complexity(signature: str) -> int:
    """Score the first complete type in `signature`."""
    codes = _Codes(signature)
    stack: list[_Open] = []

    while True:
        code = codes.next()
        score: int | None = 0

        if code in _SCALAR_CODES:
            score = 1
        elif code == HANDLE_CHAR:
            score = HANDLE_WEIGHT
        elif code in _MULTIPLIED_CODES:
            score *= MULTIPLIER
        elif code == ARRAY_CHAR:
            if codes.peek() == DICT_ENTRY_START_CHAR:
                stack.append(_Open(_MAP, 0 * MULTIPLIER))
            else:
                stack.append(_Open(ARRAY_CHAR, 0))
            continue
        elif code in (STRUCT_START_CHAR, DICT_ENTRY_START_CHAR):
            stack.append(_Open(STRUCT_START_CHAR, CONTAINER_WEIGHT))
            score = None

        while stack:
            top = stack[-1]
            if top.opener == ARRAY_CHAR:
                score = top.score + ELEMENT_WEIGHT * score
            elif top.opener == _MAP:
                score = top.score + score
            else:
                if score is not None:
                    top.score += ELEMENT_WEIGHT * score
                nxt = codes.peek()
                if nxt is not None and nxt not in _CLOSERS:
                    break
                codes.next()
                score = top.score
            stack.pop()
        else:
            return score


def is_complex(signature: str) -> bool:
    """Whether a declaration using this type needs the complexity lint suppressed."""
    return complexity(signature) >= COMPLEXITY_THRESHOLD
