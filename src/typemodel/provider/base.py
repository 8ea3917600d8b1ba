"""
Source symbol provider interface.

The extractor never reads source code itself. It consumes the declaration
records defined here, produced by a SymbolProvider implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Optional

from typemodel.extractor.models import TypeKind
from typemodel.extractor.signature import SIG_VOID


@dataclass
class SourceField:
    """A declared field or enum constant."""

    name: str
    signature: str
    modifiers: FrozenSet[str] = frozenset()
    is_enum_constant: bool = False


@dataclass
class SourceParameter:
    """A declared method parameter. Varargs signatures exclude the extra dimension."""

    name: str
    signature: str
    varargs: bool = False


@dataclass
class SourceTypeParameter:
    """A declared type parameter with its bound signatures."""

    name: str
    bound_signatures: List[str] = field(default_factory=list)


@dataclass
class SourceMethod:
    """A declared method or constructor.

    ``scope`` sees the method's own type parameters on top of the names
    visible in the declaring type. Without a scope, the method's signatures
    resolve in the declaring type.
    """

    name: str
    return_signature: str = SIG_VOID
    parameters: List[SourceParameter] = field(default_factory=list)
    exception_signatures: List[str] = field(default_factory=list)
    modifiers: FrozenSet[str] = frozenset()
    is_constructor: bool = False
    type_parameters: List[SourceTypeParameter] = field(default_factory=list)
    scope: Any = field(default=None, repr=False, compare=False)

    def resolve_type(self, simple_name: str) -> Optional[str]:
        if self.scope is None:
            return None
        return self.scope.resolve(simple_name)


@dataclass
class SourceType:
    """A type declaration as exposed by a provider.

    ``scope`` resolves short names visible from this declaration. It is any
    object with a ``resolve(name) -> Optional[str]`` method; without a scope
    no name resolves.
    """

    qualified_name: str
    kind: TypeKind
    modifiers: FrozenSet[str] = frozenset()
    superclass_signature: Optional[str] = None
    interface_signatures: List[str] = field(default_factory=list)
    type_parameters: List[SourceTypeParameter] = field(default_factory=list)
    fields: List[SourceField] = field(default_factory=list)
    methods: List[SourceMethod] = field(default_factory=list)
    outer_type: Optional[str] = None
    scope: Any = field(default=None, repr=False, compare=False)
    source_file: Optional[str] = None

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    def resolve_type(self, simple_name: str) -> Optional[str]:
        """Resolve a name visible in this declaration to a qualified name.

        Args:
            simple_name: Name as written in the source, possibly qualified or
                parameterized

        Returns:
            Qualified name, or None if the name does not resolve
        """
        if self.scope is None:
            return None
        return self.scope.resolve(simple_name)


class SymbolProvider(ABC):
    """Access to the type declarations of a project and its dependencies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the project."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Check whether the project exists."""
        pass

    @abstractmethod
    def get_types(self) -> List[SourceType]:
        """All type declarations of the project, nested types included.

        Returns:
            Declarations in a deterministic order
        """
        pass

    @abstractmethod
    def find_type(self, qualified_name: str) -> Optional[SourceType]:
        """Look up any known declaration (project, library or platform).

        Returns:
            The declaration, or None if the name is unknown
        """
        pass
