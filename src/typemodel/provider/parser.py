"""
Tree-sitter Parser Module

Provides core Tree-sitter parsing functionality for Java sources.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import tree_sitter_java
from tree_sitter import Language, Parser

from typemodel.extractor.errors import ProviderError

logger = logging.getLogger(__name__)

# Type aliases
TreeSitterNode = Any  # tree_sitter.Node

_parser: Optional[Parser] = None


class ParserInitializationError(ProviderError):
    """Raised when Tree-sitter parser initialization fails."""

    pass


def get_java_parser() -> Parser:
    """
    Initialize (once) and return a Tree-sitter parser for Java.

    Returns:
        Parser: Configured Tree-sitter parser for Java

    Raises:
        ParserInitializationError: If parser initialization fails

    Examples:
        >>> parser = get_java_parser()
        >>> tree = parser.parse(b"class Hello {}")
    """
    global _parser
    if _parser is not None:
        return _parser
    try:
        java_language = Language(tree_sitter_java.language())

        parser = Parser()
        parser.language = java_language

        logger.debug("Tree-sitter Java parser initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize Tree-sitter parser: {e}")
        raise ParserInitializationError(f"Cannot initialize parser: {e}") from e
    _parser = parser
    return parser


def parse_java_source(source_code: str) -> TreeSitterNode:
    """
    Parse Java source code.

    Tree-sitter is error tolerant: a file with syntax errors still yields a
    tree, with ERROR nodes where the input could not be parsed.

    Args:
        source_code: Java source code

    Returns:
        Tree-sitter root node (``program``)
    """
    return get_java_parser().parse(bytes(source_code, "utf-8")).root_node


def parse_java_file(file_path: str | Path) -> TreeSitterNode:
    """
    Parse a Java file.

    Args:
        file_path: Path to the Java file

    Returns:
        Tree-sitter root node

    Raises:
        ProviderError: If the file cannot be read
    """
    file_path = Path(file_path)

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            source_code = f.read()
    except UnicodeDecodeError as e:
        raise ProviderError(f"Encoding error reading {file_path}: {e}") from e
    except OSError as e:
        raise ProviderError(f"Error reading {file_path}: {e}") from e

    return parse_java_source(source_code)


def node_text(node: Optional[TreeSitterNode]) -> str:
    """
    Text of a Tree-sitter node.

    Args:
        node: Tree-sitter node or None

    Returns:
        str: Decoded text, empty for None
    """
    if node is None:
        return ""
    text = node.text
    return text.decode("utf-8") if isinstance(text, bytes) else text
