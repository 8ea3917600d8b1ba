"""
Well-known platform (JDK) types.

Sources of the JDK are rarely available next to a project. These declarations
let supertype chains reach java.lang.Throwable and give common library types
an external stub. Only the type hierarchy is described, no members. All
names are written fully qualified so the declarations need no scope.
"""

from typing import Dict, List, Optional, Tuple

from typemodel.extractor.models import TypeKind
from typemodel.provider.base import SourceType, SourceTypeParameter


def _ref(name: str, *arguments: str) -> str:
    """Unresolved signature of a name with already encoded type arguments."""
    if arguments:
        return f"Q{name}<{''.join(arguments)}>;"
    return f"Q{name};"


# (type parameter name, bound signatures)
PlatformTypeParameter = Tuple[str, Tuple[str, ...]]
# (qualified name, kind, type parameters, superclass, interfaces, modifiers)
PlatformEntry = Tuple[
    str, TypeKind, Tuple[PlatformTypeParameter, ...], Optional[str], Tuple[str, ...], Tuple[str, ...]
]

_CLASS = TypeKind.CLASS
_INTERFACE = TypeKind.INTERFACE

OBJECT = "java.lang.Object"

_OBJECT = _ref(OBJECT)
_SERIALIZABLE = _ref("java.io.Serializable")
_CLONEABLE = _ref("java.lang.Cloneable")
_NUMBER = _ref("java.lang.Number")
_THROWABLE = _ref("java.lang.Throwable")
_EXCEPTION = _ref("java.lang.Exception")
_RUNTIME_EXCEPTION = _ref("java.lang.RuntimeException")
_ERROR = _ref("java.lang.Error")
_E = (("E", ()),)
_T = (("T", ()),)
_K_V = (("K", ()), ("V", ()))


def _comparable(name: str) -> str:
    return _ref("java.lang.Comparable", _ref(name))


def _collection(name: str) -> str:
    return _ref(name, _ref("E"))


PLATFORM_TYPES: List[PlatformEntry] = [
    # java.lang
    (OBJECT, _CLASS, (), None, (), ("public",)),
    ("java.lang.String", _CLASS, (), _OBJECT,
     (_SERIALIZABLE, _comparable("java.lang.String"), _ref("java.lang.CharSequence")),
     ("public", "final")),
    ("java.lang.CharSequence", _INTERFACE, (), None, (), ("public",)),
    ("java.lang.Comparable", _INTERFACE, _T, None, (), ("public",)),
    ("java.lang.Iterable", _INTERFACE, _T, None, (), ("public",)),
    ("java.lang.Runnable", _INTERFACE, (), None, (), ("public",)),
    ("java.lang.AutoCloseable", _INTERFACE, (), None, (), ("public",)),
    ("java.lang.Cloneable", _INTERFACE, (), None, (), ("public",)),
    ("java.lang.Number", _CLASS, (), _OBJECT, (_SERIALIZABLE,), ("public", "abstract")),
    ("java.lang.Boolean", _CLASS, (), _OBJECT,
     (_SERIALIZABLE, _comparable("java.lang.Boolean")), ("public", "final")),
    ("java.lang.Character", _CLASS, (), _OBJECT,
     (_SERIALIZABLE, _comparable("java.lang.Character")), ("public", "final")),
    ("java.lang.Byte", _CLASS, (), _NUMBER, (_comparable("java.lang.Byte"),), ("public", "final")),
    ("java.lang.Short", _CLASS, (), _NUMBER, (_comparable("java.lang.Short"),), ("public", "final")),
    ("java.lang.Integer", _CLASS, (), _NUMBER, (_comparable("java.lang.Integer"),), ("public", "final")),
    ("java.lang.Long", _CLASS, (), _NUMBER, (_comparable("java.lang.Long"),), ("public", "final")),
    ("java.lang.Float", _CLASS, (), _NUMBER, (_comparable("java.lang.Float"),), ("public", "final")),
    ("java.lang.Double", _CLASS, (), _NUMBER, (_comparable("java.lang.Double"),), ("public", "final")),
    ("java.lang.Enum", _CLASS, (("E", (_ref("java.lang.Enum", _ref("E")),)),), _OBJECT,
     (_ref("java.lang.Comparable", _ref("E")), _SERIALIZABLE), ("public", "abstract")),
    ("java.lang.Record", _CLASS, (), _OBJECT, (), ("public", "abstract")),
    ("java.lang.Class", _CLASS, _T, _OBJECT, (_SERIALIZABLE,), ("public", "final")),
    ("java.lang.Throwable", _CLASS, (), _OBJECT, (_SERIALIZABLE,), ("public",)),
    ("java.lang.Exception", _CLASS, (), _THROWABLE, (), ("public",)),
    ("java.lang.Error", _CLASS, (), _THROWABLE, (), ("public",)),
    ("java.lang.RuntimeException", _CLASS, (), _EXCEPTION, (), ("public",)),
    ("java.lang.IllegalArgumentException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
    ("java.lang.IllegalStateException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
    ("java.lang.NullPointerException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
    ("java.lang.UnsupportedOperationException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
    ("java.lang.ClassCastException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
    ("java.lang.ArithmeticException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
    ("java.lang.IndexOutOfBoundsException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
    ("java.lang.InterruptedException", _CLASS, (), _EXCEPTION, (), ("public",)),
    ("java.lang.CloneNotSupportedException", _CLASS, (), _EXCEPTION, (), ("public",)),
    ("java.lang.ReflectiveOperationException", _CLASS, (), _EXCEPTION, (), ("public",)),
    ("java.lang.ClassNotFoundException", _CLASS, (), _ref("java.lang.ReflectiveOperationException"), (),
     ("public",)),
    ("java.lang.AssertionError", _CLASS, (), _ERROR, (), ("public",)),
    ("java.lang.OutOfMemoryError", _CLASS, (), _ERROR, (), ("public",)),
    # java.io
    ("java.io.Serializable", _INTERFACE, (), None, (), ("public",)),
    ("java.io.Closeable", _INTERFACE, (), None, (_ref("java.lang.AutoCloseable"),), ("public",)),
    ("java.io.IOException", _CLASS, (), _EXCEPTION, (), ("public",)),
    ("java.io.FileNotFoundException", _CLASS, (), _ref("java.io.IOException"), (), ("public",)),
    ("java.io.UncheckedIOException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
    # java.util
    ("java.util.Iterator", _INTERFACE, _E, None, (), ("public",)),
    ("java.util.Collection", _INTERFACE, _E, None, (_collection("java.lang.Iterable"),), ("public",)),
    ("java.util.List", _INTERFACE, _E, None, (_collection("java.util.Collection"),), ("public",)),
    ("java.util.Set", _INTERFACE, _E, None, (_collection("java.util.Collection"),), ("public",)),
    ("java.util.Queue", _INTERFACE, _E, None, (_collection("java.util.Collection"),), ("public",)),
    ("java.util.Deque", _INTERFACE, _E, None, (_collection("java.util.Queue"),), ("public",)),
    ("java.util.Map", _INTERFACE, _K_V, None, (), ("public",)),
    ("java.util.ArrayList", _CLASS, _E, _OBJECT,
     (_collection("java.util.List"), _CLONEABLE, _SERIALIZABLE), ("public",)),
    ("java.util.LinkedList", _CLASS, _E, _OBJECT,
     (_collection("java.util.List"), _collection("java.util.Deque"), _CLONEABLE, _SERIALIZABLE),
     ("public",)),
    ("java.util.HashSet", _CLASS, _E, _OBJECT,
     (_collection("java.util.Set"), _CLONEABLE, _SERIALIZABLE), ("public",)),
    ("java.util.HashMap", _CLASS, _K_V, _OBJECT,
     (_ref("java.util.Map", _ref("K"), _ref("V")), _CLONEABLE, _SERIALIZABLE), ("public",)),
    ("java.util.Optional", _CLASS, _T, _OBJECT, (), ("public", "final")),
    ("java.util.NoSuchElementException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
    ("java.util.ConcurrentModificationException", _CLASS, (), _RUNTIME_EXCEPTION, (), ("public",)),
]


def _declaration(entry: PlatformEntry) -> SourceType:
    name, kind, type_parameters, superclass, interfaces, modifiers = entry
    return SourceType(
        qualified_name=name,
        kind=kind,
        modifiers=frozenset(modifiers),
        superclass_signature=superclass,
        interface_signatures=list(interfaces),
        type_parameters=[SourceTypeParameter(p, list(bounds)) for p, bounds in type_parameters],
    )


def platform_types() -> Dict[str, SourceType]:
    """Declarations of the well-known platform types, keyed by qualified name."""
    return {entry[0]: _declaration(entry) for entry in PLATFORM_TYPES}
