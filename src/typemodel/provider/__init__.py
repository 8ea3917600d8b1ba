"""
Source symbol providers.

- base: Declaration records and the SymbolProvider interface
- parser: Tree-sitter Java parser
- java_source: JavaProject, a provider over a directory of Java sources
- platform: Built-in declarations of well-known JDK types
"""

from typemodel.provider.base import (
    SourceField,
    SourceMethod,
    SourceParameter,
    SourceType,
    SourceTypeParameter,
    SymbolProvider,
)
from typemodel.provider.java_source import JavaProject, JavaSourceReader, TypeScope
from typemodel.provider.parser import parse_java_file, parse_java_source

__all__ = [
    "JavaProject",
    "JavaSourceReader",
    "TypeScope",
    "SymbolProvider",
    "SourceType",
    "SourceField",
    "SourceMethod",
    "SourceParameter",
    "SourceTypeParameter",
    "parse_java_file",
    "parse_java_source",
]
