"""
Extractor module for type model extraction.

This module is organized in passes:
- models: Data classes of the intermediate model
- signature: Type signature codec
- data_type_resolver: Signatures to qualified, generic-aware data types
- member_extractor / type_classifier: Declarations to model types
- intermediate_model: Duplicate-free type registry
- external_resolver: Stubs for types outside the project
- project_extractor: Main ProjectExtractor orchestrator
"""

from typemodel.extractor.data_type_resolver import DataTypeResolver
from typemodel.extractor.errors import (
    DuplicateTypeError,
    ExtractionError,
    FrozenModelError,
    InvalidProjectError,
    MalformedSignatureError,
    ProviderError,
)
from typemodel.extractor.external_resolver import ExternalTypeResolver
from typemodel.extractor.intermediate_model import IntermediateModel
from typemodel.extractor.member_extractor import MemberExtractor
from typemodel.extractor.models import (
    AccessLevelModifier,
    ExtractedAttribute,
    ExtractedClass,
    ExtractedDataType,
    ExtractedEnum,
    ExtractedEnumConstant,
    ExtractedInterface,
    ExtractedMethod,
    ExtractedParameter,
    ExtractedType,
    ExtractedTypeParameter,
    TypeKind,
    WildcardKind,
)
from typemodel.extractor.project_extractor import ProjectExtractor, extract
from typemodel.extractor.properties import ExtractionProperties
from typemodel.extractor.type_classifier import TypeClassifier

__all__ = [
    "ProjectExtractor",
    "extract",
    "ExtractionProperties",
    "DataTypeResolver",
    "MemberExtractor",
    "TypeClassifier",
    "ExternalTypeResolver",
    "IntermediateModel",
    "AccessLevelModifier",
    "ExtractedAttribute",
    "ExtractedClass",
    "ExtractedDataType",
    "ExtractedEnum",
    "ExtractedEnumConstant",
    "ExtractedInterface",
    "ExtractedMethod",
    "ExtractedParameter",
    "ExtractedType",
    "ExtractedTypeParameter",
    "TypeKind",
    "WildcardKind",
    "ExtractionError",
    "InvalidProjectError",
    "MalformedSignatureError",
    "DuplicateTypeError",
    "FrozenModelError",
    "ProviderError",
]
