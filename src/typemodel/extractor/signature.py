"""
Type signature codec.

Signatures are the encoded type references exchanged between a source symbol
provider and the extractor. The encoding follows the JDT conventions:

    I, Z, J, ...          primitive types (V is void, return types only)
    [I                    one leading "[" per array dimension
    QList<QString;>;      unresolved (source) reference with type arguments
    Ljava.util.List;      resolved reference
    TT;                   type variable
    *, +QNumber;, -QT;    wildcard type arguments (?, ? extends, ? super)

Simple names keep any qualification written in the source:
``Qjava.util.List<QString;>;`` renders as ``java.util.List<String>``.
"""

import functools
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from typemodel.extractor.errors import MalformedSignatureError
from typemodel.extractor.models import WildcardKind

SIG_VOID = "V"

PRIMITIVE_TYPES = {
    "B": "byte",
    "C": "char",
    "D": "double",
    "F": "float",
    "I": "int",
    "J": "long",
    "S": "short",
    "Z": "boolean",
}
PRIMITIVE_SIGNATURES = {name: marker for marker, name in PRIMITIVE_TYPES.items()}
PRIMITIVE_SIGNATURES["void"] = SIG_VOID

# Guards the recursive descent against pathological nesting
MAX_NESTING_DEPTH = 256

_WILDCARDS = {
    "*": WildcardKind.UNBOUNDED,
    "+": WildcardKind.EXTENDS,
    "-": WildcardKind.SUPER,
}


@dataclass
class _Segment:
    name: str
    arguments: List[str] = field(default_factory=list)  # raw argument signatures


@dataclass
class _ParsedSignature:
    array_count: int
    marker: str
    segments: List[_Segment]


def _malformed(signature: str, reason: str) -> MalformedSignatureError:
    return MalformedSignatureError(
        f"Malformed type signature {signature!r}: {reason}", signature=signature
    )


def _is_name_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


def _parse_type(
    signature: str, pos: int, depth: int, allow_void: bool
) -> Tuple[_ParsedSignature, int]:
    """Parse one type signature starting at pos.

    Returns:
        Tuple of (parsed signature, index after the signature)
    """
    if depth > MAX_NESTING_DEPTH:
        raise _malformed(signature, "nesting too deep")

    length = len(signature)
    array_count = 0
    while pos < length and signature[pos] == "[":
        array_count += 1
        pos += 1
    if pos >= length:
        raise _malformed(signature, "missing element type")

    marker = signature[pos]
    if marker in PRIMITIVE_TYPES:
        return _ParsedSignature(array_count, marker, [_Segment(PRIMITIVE_TYPES[marker])]), pos + 1
    if marker == SIG_VOID:
        if not allow_void or array_count:
            raise _malformed(signature, "void is only valid as a return type")
        return _ParsedSignature(0, marker, [_Segment("void")]), pos + 1
    if marker == "T":
        end = signature.find(";", pos)
        name = signature[pos + 1 : end] if end != -1 else ""
        if not name or not all(_is_name_char(c) for c in name):
            raise _malformed(signature, "invalid type variable")
        return _ParsedSignature(array_count, marker, [_Segment(name)]), end + 1
    if marker in "QL":
        segments, pos = _parse_class_type(signature, pos + 1, depth)
        return _ParsedSignature(array_count, marker, segments), pos
    raise _malformed(signature, f"unexpected character {marker!r} at {pos}")


def _parse_class_type(
    signature: str, pos: int, depth: int
) -> Tuple[List[_Segment], int]:
    length = len(signature)
    segments: List[_Segment] = []
    start = pos
    current: Optional[_Segment] = None
    while pos < length:
        char = signature[pos]
        if char == ";" or char == "<":
            if current is None:
                name = signature[start:pos]
                if not name or name.startswith(".") or name.endswith(".") or ".." in name:
                    raise _malformed(signature, "invalid type name")
                current = _Segment(name)
                segments.append(current)
            if char == ";":
                return segments, pos + 1
            if current.arguments:
                raise _malformed(signature, "repeated type arguments")
            current.arguments, pos = _parse_arguments(signature, pos, depth)
            if pos >= length or signature[pos] not in ".;":
                raise _malformed(signature, "expected '.' or ';' after type arguments")
            continue
        if char == "." and current is not None:
            # member type of a parameterized outer type
            current = None
            start = pos + 1
        elif not (_is_name_char(char) or char == "."):
            raise _malformed(signature, f"unexpected character {char!r} at {pos}")
        pos += 1
    raise _malformed(signature, "missing ';'")


def _parse_arguments(signature: str, pos: int, depth: int) -> Tuple[List[str], int]:
    length = len(signature)
    arguments: List[str] = []
    pos += 1  # skip "<"
    while pos < length and signature[pos] != ">":
        start = pos
        char = signature[pos]
        if char == "*":
            pos += 1
        else:
            if char in "+-":
                pos += 1
            _, pos = _parse_type(signature, pos, depth + 1, allow_void=False)
        arguments.append(signature[start:pos])
    if pos >= length:
        raise _malformed(signature, "unbalanced '<'")
    if not arguments:
        raise _malformed(signature, "empty type argument list")
    return arguments, pos + 1


@functools.lru_cache(maxsize=4096)
def _parse(signature: str) -> _ParsedSignature:
    if not isinstance(signature, str) or not signature:
        raise _malformed(str(signature), "empty signature")
    parsed, end = _parse_type(signature, 0, 0, allow_void=True)
    if end != len(signature):
        raise _malformed(signature, f"trailing characters at {end}")
    return parsed


def _render(parsed: _ParsedSignature) -> str:
    parts = []
    for segment in parsed.segments:
        text = segment.name
        if segment.arguments:
            text += "<" + ", ".join(_render_argument(arg) for arg in segment.arguments) + ">"
        parts.append(text)
    return ".".join(parts) + "[]" * parsed.array_count


def _render_argument(argument: str) -> str:
    kind = _WILDCARDS.get(argument[0])
    if kind is WildcardKind.UNBOUNDED:
        return "?"
    if kind is not None:
        return f"? {kind.value} {_render(_parse(argument[1:]))}"
    return _render(_parse(argument))


def validate(signature: str) -> None:
    """Check that a signature is structurally valid.

    Raises:
        MalformedSignatureError: If the signature cannot be parsed
    """
    _parse(signature)


def is_void(signature: str) -> bool:
    return _parse(signature).marker == SIG_VOID


def is_primitive_name(name: str) -> bool:
    """Check whether a rendered simple name is a primitive or void."""
    return name in PRIMITIVE_SIGNATURES


def get_array_count(signature: str) -> int:
    """Number of array dimensions of a signature."""
    return _parse(signature).array_count


def get_element_type(signature: str) -> str:
    """Signature without its leading array markers."""
    _parse(signature)
    return signature.lstrip("[")


def get_signature_simple_name(signature: str) -> str:
    """Readable name of a signature, e.g. ``List<String>[]``.

    Qualification written in the source is kept, type arguments are
    rendered recursively.
    """
    return _render(_parse(signature))


def get_type_arguments(signature: str) -> List[str]:
    """Type argument signatures of the innermost type, in declaration order.

    Arguments of a parameterized outer type (``QOuter<QT;>.Inner;``) belong to
    the outer type and are not returned.
    """
    parsed = _parse(get_element_type(signature))
    return list(parsed.segments[-1].arguments)


def get_wildcard_kind(argument: str) -> Optional[WildcardKind]:
    """Wildcard kind of a type argument signature, None for plain types."""
    if not argument:
        raise _malformed(argument, "empty signature")
    return _WILDCARDS.get(argument[0])


def strip_wildcard(argument: str) -> Optional[str]:
    """Bound signature of a wildcard argument.

    Returns:
        The bound for ``+``/``-`` arguments, None for ``*``, the argument
        itself for plain types
    """
    kind = get_wildcard_kind(argument)
    if kind is WildcardKind.UNBOUNDED:
        if argument != "*":
            raise _malformed(argument, "trailing characters after '*'")
        return None
    if kind is not None:
        return argument[1:]
    return argument
