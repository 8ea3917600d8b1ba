"""
Data models of the intermediate type model.

Every type reference is stored as a qualified name, never as an object
reference, so the model can be handed to a generator as a flat registry.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


class TypeKind(Enum):
    """Variant of an extracted type."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"


class AccessLevelModifier(Enum):
    """Access level of a member. NO_MODIFIER is package-private."""

    PUBLIC = "public"
    PROTECTED = "protected"
    NO_MODIFIER = "package"
    PRIVATE = "private"

    @classmethod
    def from_modifiers(cls, modifiers) -> "AccessLevelModifier":
        """Pick the access level from a collection of modifier keywords.

        Args:
            modifiers: Modifier keywords such as {"public", "static"}

        Returns:
            The matching access level, NO_MODIFIER if none is present
        """
        modifiers = modifiers or ()
        if "public" in modifiers:
            return cls.PUBLIC
        if "protected" in modifiers:
            return cls.PROTECTED
        if "private" in modifiers:
            return cls.PRIVATE
        return cls.NO_MODIFIER


class WildcardKind(Enum):
    """Wildcard form of a generic type argument."""

    UNBOUNDED = "?"
    EXTENDS = "extends"
    SUPER = "super"


def _simple_name(full_name: str) -> str:
    return full_name.rsplit(".", 1)[-1]


@dataclass
class ExtractedDataType:
    """A resolved type reference with array dimensions and generic arguments."""

    full_name: str
    array_count: int = 0
    generic_arguments: List["ExtractedDataType"] = field(default_factory=list)
    wildcard: Optional[WildcardKind] = None

    @property
    def name(self) -> str:
        """Simple name without the package."""
        return _simple_name(self.full_name)

    @property
    def is_array(self) -> bool:
        return self.array_count > 0

    @property
    def is_generic(self) -> bool:
        return bool(self.generic_arguments)

    @property
    def type_string(self) -> str:
        """Java-like rendering, e.g. java.util.List<java.lang.String>[]."""
        if self.wildcard is WildcardKind.UNBOUNDED:
            return "?"
        text = self.full_name
        if self.generic_arguments:
            arguments = ", ".join(arg.type_string for arg in self.generic_arguments)
            text = f"{text}<{arguments}>"
        text += "[]" * self.array_count
        if self.wildcard is not None:
            text = f"? {self.wildcard.value} {text}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_name": self.full_name,
            "array_count": self.array_count,
            "generic_arguments": [arg.to_dict() for arg in self.generic_arguments],
            "wildcard": self.wildcard.value if self.wildcard else None,
        }


@dataclass
class ExtractedVariable:
    """A named, typed element (attribute or parameter)."""

    identifier: str
    data_type: ExtractedDataType

    @property
    def array_count(self) -> int:
        return self.data_type.array_count

    @property
    def full_type_name(self) -> str:
        return self.data_type.full_name

    def to_dict(self) -> Dict[str, Any]:
        return {"identifier": self.identifier, "data_type": self.data_type.to_dict()}


@dataclass
class ExtractedParameter(ExtractedVariable):
    """A method parameter."""

    pass


@dataclass
class ExtractedAttribute(ExtractedVariable):
    """A field of a type."""

    static: bool = False
    final: bool = False
    modifier: AccessLevelModifier = AccessLevelModifier.NO_MODIFIER

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(
            static=self.static, final=self.final, modifier=self.modifier.value
        )
        return result


@dataclass
class ExtractedTypeParameter:
    """A type parameter of a generic type, e.g. T extends Comparable<T>."""

    identifier: str
    bounds: List[ExtractedDataType] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "bounds": [bound.to_dict() for bound in self.bounds],
        }


@dataclass
class ExtractedMethod:
    """A method or constructor of a type."""

    full_name: str  # declaring type + "." + method name
    return_type: Optional[ExtractedDataType] = None  # None for void and constructors
    constructor: bool = False
    parameters: List[ExtractedParameter] = field(default_factory=list)
    throws_declarations: List[ExtractedDataType] = field(default_factory=list)
    type_parameters: List[ExtractedTypeParameter] = field(default_factory=list)  # generic methods
    static: bool = False
    abstract: bool = False
    modifier: AccessLevelModifier = AccessLevelModifier.NO_MODIFIER

    @property
    def name(self) -> str:
        return _simple_name(self.full_name)

    def set_flags(
        self, modifier: AccessLevelModifier, static: bool, abstract: bool
    ) -> None:
        self.modifier = modifier
        self.static = static
        self.abstract = abstract

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_name": self.full_name,
            "return_type": self.return_type.to_dict() if self.return_type else None,
            "constructor": self.constructor,
            "parameters": [param.to_dict() for param in self.parameters],
            "throws_declarations": [t.to_dict() for t in self.throws_declarations],
            "type_parameters": [p.to_dict() for p in self.type_parameters],
            "static": self.static,
            "abstract": self.abstract,
            "modifier": self.modifier.value,
        }


@dataclass
class ExtractedEnumConstant:
    """A constant of an enumeration."""

    name: str


@dataclass
class BaseExtractedType:
    """State shared by all type variants. Use one of the subclasses."""

    kind: ClassVar[TypeKind]

    full_name: str
    outer_type: Optional[str] = None  # qualified name of the declaring type
    interfaces: List[ExtractedDataType] = field(default_factory=list)
    attributes: List[ExtractedAttribute] = field(default_factory=list)
    methods: List[ExtractedMethod] = field(default_factory=list)
    type_parameters: List[ExtractedTypeParameter] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Simple name of the type (inner types without their outer name)."""
        return _simple_name(self.full_name)

    @property
    def is_inner_type(self) -> bool:
        return self.outer_type is not None

    def add_attribute(self, attribute: ExtractedAttribute) -> None:
        self.attributes.append(attribute)

    def add_method(self, method: ExtractedMethod) -> None:
        self.methods.append(method)

    def add_interface(self, interface: ExtractedDataType) -> None:
        self.interfaces.append(interface)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "full_name": self.full_name,
            "outer_type": self.outer_type,
            "type_parameters": [param.to_dict() for param in self.type_parameters],
            "interfaces": [interface.to_dict() for interface in self.interfaces],
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "methods": [method.to_dict() for method in self.methods],
        }


@dataclass
class ExtractedClass(BaseExtractedType):
    """A class, possibly abstract, possibly part of the exception lineage."""

    kind: ClassVar[TypeKind] = TypeKind.CLASS

    abstract: bool = False
    throwable: bool = False
    super_class: Optional[ExtractedDataType] = None

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(
            abstract=self.abstract,
            throwable=self.throwable,
            super_class=self.super_class.to_dict() if self.super_class else None,
        )
        return result


@dataclass
class ExtractedInterface(BaseExtractedType):
    """An interface."""

    kind: ClassVar[TypeKind] = TypeKind.INTERFACE


@dataclass
class ExtractedEnum(BaseExtractedType):
    """An enumeration with its constants."""

    kind: ClassVar[TypeKind] = TypeKind.ENUM

    enumerals: List[ExtractedEnumConstant] = field(default_factory=list)

    def add_enumeral(self, enumeral: ExtractedEnumConstant) -> None:
        self.enumerals.append(enumeral)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["enumerals"] = [enumeral.name for enumeral in self.enumerals]
        return result


# Closed set of variants. Dispatch over TypeKind must cover all three.
ExtractedType = Union[ExtractedClass, ExtractedInterface, ExtractedEnum]
