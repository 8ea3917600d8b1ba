"""
Extraction of fields and methods of a single type declaration.
"""

import logging
from typing import Any

from typemodel.extractor.data_type_resolver import DataTypeResolver
from typemodel.extractor.models import (
    AccessLevelModifier,
    BaseExtractedType,
    ExtractedEnum,
    ExtractedEnumConstant,
    ExtractedMethod,
)

logger = logging.getLogger(__name__)


class MemberExtractor:
    """Populates attributes and methods of an ExtractedType shell."""

    def __init__(self, resolver: DataTypeResolver):
        self.resolver = resolver

    def extract(self, declaration: Any, extracted_type: BaseExtractedType) -> None:
        """Extract fields and methods of a declaration.

        Args:
            declaration: Source type declaration
            extracted_type: Type shell created by the TypeClassifier
        """
        self.extract_fields(declaration, extracted_type)
        self.extract_methods(declaration, extracted_type)

    def extract_enum_constants(self, declaration: Any, extracted_enum: ExtractedEnum) -> None:
        """Add the enumeration constants of a declaration, in declaration order."""
        for field in declaration.fields:
            if field.is_enum_constant:
                extracted_enum.add_enumeral(ExtractedEnumConstant(field.name))

    def extract_fields(self, declaration: Any, extracted_type: BaseExtractedType) -> None:
        """Add every field that is not an enumeration constant as attribute."""
        for field in declaration.fields:
            if field.is_enum_constant:
                continue
            attribute = self.resolver.resolve_field(field, declaration)
            attribute.static = "static" in field.modifiers
            attribute.final = "final" in field.modifiers
            attribute.modifier = AccessLevelModifier.from_modifiers(field.modifiers)
            extracted_type.add_attribute(attribute)

    def extract_methods(self, declaration: Any, extracted_type: BaseExtractedType) -> None:
        """Add every method and constructor, in declaration order.

        Signatures resolve in the method's own scope when it has one, so
        method type parameters shadow types of the same name.
        """
        for method in declaration.methods:
            context = method if getattr(method, "scope", None) is not None else declaration
            return_type = self.resolver.resolve_return_type(method, context)
            extracted_method = ExtractedMethod(
                f"{declaration.qualified_name}.{method.name}",
                return_type,
                constructor=method.is_constructor,
            )
            for type_parameter in getattr(method, "type_parameters", ()):
                extracted_method.type_parameters.append(
                    self.resolver.resolve_type_parameter(type_parameter, context)
                )
            for parameter in method.parameters:
                extracted_method.parameters.append(
                    self.resolver.resolve_parameter(parameter, context)
                )
            for exception in method.exception_signatures:
                extracted_method.throws_declarations.append(
                    self.resolver.resolve(exception, context)
                )
            extracted_method.set_flags(
                AccessLevelModifier.from_modifiers(method.modifiers),
                "static" in method.modifiers,
                "abstract" in method.modifiers,
            )
            extracted_type.add_method(extracted_method)
        logger.debug(
            f"Extracted {len(extracted_type.attributes)} attributes and "
            f"{len(extracted_type.methods)} methods of {declaration.qualified_name}"
        )
