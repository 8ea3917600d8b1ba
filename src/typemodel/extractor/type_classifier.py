"""
Classification of type declarations into model types.

Each declaration becomes exactly one ExtractedClass, ExtractedInterface or
ExtractedEnum. Members are delegated to the MemberExtractor.
"""

import logging
from typing import Any, Callable, Dict, Optional

from typemodel.extractor.data_type_resolver import DataTypeResolver
from typemodel.extractor.errors import MalformedSignatureError
from typemodel.extractor.member_extractor import MemberExtractor
from typemodel.extractor.models import (
    ExtractedClass,
    ExtractedEnum,
    ExtractedInterface,
    ExtractedType,
    TypeKind,
)
from typemodel.extractor.properties import ExtractionProperties

logger = logging.getLogger(__name__)


class TypeClassifier:
    """Builds model types from source declarations."""

    def __init__(
        self,
        provider: Any,
        resolver: DataTypeResolver,
        properties: Optional[ExtractionProperties] = None,
    ):
        """Initialize the classifier.

        Args:
            provider: Source symbol provider, used to walk supertype chains
            resolver: Resolver shared by the whole extraction run
            properties: Extraction settings (defaults if omitted)
        """
        self.provider = provider
        self.resolver = resolver
        self.properties = properties or ExtractionProperties()
        self.member_extractor = MemberExtractor(resolver)
        self._builders: Dict[TypeKind, Callable[[Any], ExtractedType]] = {
            TypeKind.CLASS: self._classify_class,
            TypeKind.INTERFACE: self._classify_interface,
            TypeKind.ENUM: self._classify_enum,
        }

    def classify(self, declaration: Any) -> ExtractedType:
        """Classify a declaration and extract its structure.

        Args:
            declaration: Source type declaration

        Returns:
            The populated model type

        Raises:
            TypeError: If the declaration kind is not a TypeKind
            MalformedSignatureError: If any signature cannot be resolved
        """
        builder = self._builders.get(declaration.kind)
        if builder is None:
            raise TypeError(
                f"Unsupported kind {declaration.kind!r} of {declaration.qualified_name}"
            )
        extracted_type = builder(declaration)

        if declaration.outer_type is not None:
            extracted_type.outer_type = declaration.outer_type
        for parameter in declaration.type_parameters:
            extracted_type.type_parameters.append(
                self.resolver.resolve_type_parameter(parameter, declaration)
            )
        self.member_extractor.extract(declaration, extracted_type)
        for signature in declaration.interface_signatures:
            extracted_type.add_interface(self.resolver.resolve(signature, declaration))

        logger.debug(f"Classified {declaration.qualified_name} as {extracted_type.kind.value}")
        return extracted_type

    def inherits_from_throwable(self, declaration: Any) -> bool:
        """Check whether a supertype of the declaration is the exception root.

        Each superclass name is resolved in the scope of the type declaring it,
        then looked up through the provider to continue the walk. The chain
        ends at a type without superclass or one the provider does not know.

        Raises:
            MalformedSignatureError: If the chain is longer than the
                configured maximum depth
        """
        current = declaration
        for _ in range(self.properties.max_resolution_depth):
            signature = current.superclass_signature
            if signature is None:
                return False
            super_name = self.resolver.qualified_name(signature, current)
            if super_name == self.properties.exception_root:
                return True
            current = self.provider.find_type(super_name)
            if current is None:
                return False
        raise MalformedSignatureError(
            f"Supertype chain of {declaration.qualified_name} exceeds "
            f"{self.properties.max_resolution_depth} types",
            signature=declaration.superclass_signature,
        )

    def _classify_class(self, declaration: Any) -> ExtractedClass:
        extracted_class = ExtractedClass(
            declaration.qualified_name,
            abstract="abstract" in declaration.modifiers,
            throwable=self.inherits_from_throwable(declaration),
        )
        if declaration.superclass_signature is not None:
            extracted_class.super_class = self.resolver.resolve(
                declaration.superclass_signature, declaration
            )
        return extracted_class

    def _classify_interface(self, declaration: Any) -> ExtractedInterface:
        return ExtractedInterface(declaration.qualified_name)

    def _classify_enum(self, declaration: Any) -> ExtractedEnum:
        extracted_enum = ExtractedEnum(declaration.qualified_name)
        self.member_extractor.extract_enum_constants(declaration, extracted_enum)
        return extracted_enum
