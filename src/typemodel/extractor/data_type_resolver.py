"""
Resolution of type signatures into extracted data types.

A signature is always resolved in the scope of the type that declares it:
short names are qualified by asking that type (imports, same package, member
types), everything else is kept verbatim.
"""

import logging
from typing import Any, List, Optional, Set

from typemodel.extractor import signature as sig
from typemodel.extractor.errors import MalformedSignatureError
from typemodel.extractor.models import (
    ExtractedAttribute,
    ExtractedDataType,
    ExtractedParameter,
    ExtractedTypeParameter,
)
from typemodel.extractor.properties import DEFAULT_MAX_RESOLUTION_DEPTH

logger = logging.getLogger(__name__)


class DataTypeResolver:
    """Turns signatures into ExtractedDataType instances.

    Every qualified name produced is recorded in ``referenced_types``; the
    external type pass uses that set to find types outside the project.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_RESOLUTION_DEPTH):
        """Initialize the resolver.

        Args:
            max_depth: Maximum nesting of generic arguments
        """
        self.max_depth = max_depth
        self.referenced_types: Set[str] = set()

    def resolve(self, signature: str, context: Any) -> ExtractedDataType:
        """Resolve a signature in the scope of a declaring type.

        Args:
            signature: Encoded type signature
            context: Declaring type, anything with ``resolve_type(name)``

        Returns:
            The resolved data type

        Raises:
            MalformedSignatureError: If the signature is invalid or nested
                deeper than ``max_depth``
        """
        return self._resolve(signature, context, depth=0)

    def resolve_return_type(self, method: Any, context: Any) -> Optional[ExtractedDataType]:
        """Resolve the return type of a method.

        Returns:
            None for void methods and constructors, the data type otherwise
        """
        if method.is_constructor or sig.is_void(method.return_signature):
            return None
        return self.resolve(method.return_signature, context)

    def resolve_field(self, field: Any, context: Any) -> ExtractedAttribute:
        """Create an attribute from a field declaration (without flags)."""
        return ExtractedAttribute(field.name, self.resolve(field.signature, context))

    def resolve_parameter(self, parameter: Any, context: Any) -> ExtractedParameter:
        """Create a parameter; varargs add one array dimension."""
        signature = parameter.signature
        if parameter.varargs:
            signature = "[" + signature
        return ExtractedParameter(parameter.name, self.resolve(signature, context))

    def resolve_type_parameter(self, parameter: Any, context: Any) -> ExtractedTypeParameter:
        """Create a type parameter with its resolved bounds."""
        bounds = [self.resolve(bound, context) for bound in parameter.bound_signatures]
        return ExtractedTypeParameter(parameter.name, bounds)

    def qualified_name(self, signature: str, context: Any) -> str:
        """Qualified name of a signature's element type.

        Unlike ``resolve`` the name is not recorded as a reference.
        """
        return self._full_name(sig.get_element_type(signature), context)

    def _resolve(self, signature: str, context: Any, depth: int) -> ExtractedDataType:
        if depth > self.max_depth:
            raise MalformedSignatureError(
                f"Generic arguments of {signature!r} are nested deeper than {self.max_depth}",
                signature=signature,
            )
        array_count = sig.get_array_count(signature)
        element = sig.get_element_type(signature)
        full_name = self._full_name(element, context)
        if not sig.is_primitive_name(full_name):
            self.referenced_types.add(full_name)

        data_type = ExtractedDataType(full_name, array_count)
        data_type.generic_arguments = self._resolve_arguments(signature, context, depth)
        return data_type

    def _resolve_arguments(
        self, signature: str, context: Any, depth: int
    ) -> List[ExtractedDataType]:
        arguments = []
        for argument in sig.get_type_arguments(signature):
            kind = sig.get_wildcard_kind(argument)
            bound = sig.strip_wildcard(argument)
            if bound is None:
                arguments.append(ExtractedDataType("?", wildcard=kind))
                continue
            data_type = self._resolve(bound, context, depth + 1)
            data_type.wildcard = kind
            arguments.append(data_type)
        return arguments

    def _full_name(self, element: str, context: Any) -> str:
        """Qualified name of an element signature, e.g. java.util.List or int."""
        simple_name = sig.get_signature_simple_name(element)
        resolved = context.resolve_type(simple_name) if context is not None else None
        if resolved:
            return resolved
        if "<" in simple_name:
            # unresolved parameterized name, keep the raw type
            return simple_name[: simple_name.index("<")]
        if not sig.is_primitive_name(simple_name):
            logger.debug(f"Keeping unresolved type name {simple_name}")
        return simple_name
