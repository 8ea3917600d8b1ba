"""
Java source symbol provider built on Tree-sitter.

Reads the type declarations of a directory of Java sources: classes,
interfaces, enums, records and annotation types with their fields, methods
and nested types. Method bodies are never looked at.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set

from typemodel.extractor.errors import MalformedSignatureError
from typemodel.extractor.models import TypeKind
from typemodel.extractor.signature import (
    MAX_NESTING_DEPTH,
    PRIMITIVE_SIGNATURES,
    SIG_VOID,
    get_signature_simple_name,
    is_primitive_name,
)
from typemodel.provider.base import (
    SourceField,
    SourceMethod,
    SourceParameter,
    SourceType,
    SourceTypeParameter,
    SymbolProvider,
)
from typemodel.provider.parser import TreeSitterNode, node_text, parse_java_file
from typemodel.provider.platform import platform_types

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATTERNS = ["build", "target", "bin", "out", ".git", ".gradle", ".idea"]

TYPE_DECLARATIONS: Dict[str, TypeKind] = {
    "class_declaration": TypeKind.CLASS,
    "record_declaration": TypeKind.CLASS,
    "interface_declaration": TypeKind.INTERFACE,
    "annotation_type_declaration": TypeKind.INTERFACE,
    "enum_declaration": TypeKind.ENUM,
}

MODIFIER_KEYWORDS = {
    "public",
    "protected",
    "private",
    "abstract",
    "static",
    "final",
    "strictfp",
    "default",
    "synchronized",
    "native",
    "transient",
    "volatile",
    "sealed",
    "non-sealed",
}

PRIMITIVE_TYPE_NODES = {"integral_type", "floating_point_type", "boolean_type", "void_type"}
CLASS_TYPE_NODES = {"type_identifier", "scoped_type_identifier", "generic_type"}

# Comments and annotations may sit between the parts of any type
IGNORED_NODES = {"line_comment", "block_comment", "annotation", "marker_annotation"}

MAX_INHERITANCE_DEPTH = 64


@dataclass
class CompilationUnit:
    """Package and imports of one source file."""

    path: Optional[Path]
    package: str = ""
    single_imports: Dict[str, str] = field(default_factory=dict)  # simple -> qualified
    on_demand_imports: List[str] = field(default_factory=list)  # packages or outer types


def erase_type_arguments(name: str) -> str:
    """Remove type arguments and array brackets, e.g. Map<K, V>.Entry -> Map.Entry."""
    result = []
    depth = 0
    for char in name:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        elif depth == 0 and char not in "[] ":
            result.append(char)
    return "".join(result)


def _parts(node: TreeSitterNode) -> List[TreeSitterNode]:
    return [child for child in node.named_children if child.type not in IGNORED_NODES]


def _dimension_count(node: Optional[TreeSitterNode]) -> int:
    """Number of ``[]`` pairs of a ``dimensions`` node."""
    if node is None:
        return 0
    return sum(1 for child in node.children if child.type == "[")


def _qualified_identifier(node: TreeSitterNode) -> str:
    """Dotted name of an ``identifier`` or ``scoped_identifier`` node."""
    if node.type == "scoped_identifier":
        scope = _qualified_identifier(node.child_by_field_name("scope"))
        return f"{scope}.{node_text(node.child_by_field_name('name'))}"
    return node_text(node)


def encode_type(node: TreeSitterNode, depth: int = 0) -> str:
    """Encode a Tree-sitter type node as an unresolved signature.

    Annotations and comments inside the type are ignored.

    Examples:
        ``Map<String, List<Integer>>[]`` -> ``[QMap<QString;QList<QInteger;>;>;``
        ``List<? extends Number>`` -> ``QList<+QNumber;>;``

    Raises:
        MalformedSignatureError: If the node is not a type
    """
    if depth > MAX_NESTING_DEPTH:
        raise MalformedSignatureError("Type arguments nested too deep", node_text(node))
    node_type = node.type
    if node_type in PRIMITIVE_TYPE_NODES:
        signature = PRIMITIVE_SIGNATURES.get(node_text(node))
        if signature is not None:
            return signature
    elif node_type in CLASS_TYPE_NODES:
        return f"Q{_class_type(node, depth)};"
    elif node_type == "array_type":
        element = encode_type(node.child_by_field_name("element"), depth)
        return "[" * _dimension_count(node.child_by_field_name("dimensions")) + element
    elif node_type == "annotated_type":
        parts = _parts(node)
        if parts:
            return encode_type(parts[-1], depth)
    raise MalformedSignatureError(
        f"Unexpected {node_type} node in type {node_text(node)!r}", node_text(node)
    )


def _class_type(node: TreeSitterNode, depth: int) -> str:
    if node.type == "type_identifier":
        return node_text(node)
    parts = _parts(node)
    if node.type == "generic_type" and len(parts) == 2:
        return _class_type(parts[0], depth) + _type_arguments(parts[1], depth)
    if node.type == "scoped_type_identifier" and len(parts) == 2:
        # Outer.Inner, java.util.List or Outer<T>.Inner
        return f"{_class_type(parts[0], depth)}.{node_text(parts[1])}"
    raise MalformedSignatureError(
        f"Unexpected {node.type} node in type {node_text(node)!r}", node_text(node)
    )


def _type_arguments(node: TreeSitterNode, depth: int) -> str:
    arguments = [_type_argument(argument, depth + 1) for argument in _parts(node)]
    if node.type != "type_arguments" or not arguments:
        raise MalformedSignatureError(f"Invalid type arguments {node_text(node)!r}", node_text(node))
    return "<" + "".join(arguments) + ">"


def _type_argument(node: TreeSitterNode, depth: int) -> str:
    if node.type != "wildcard":
        return encode_type(node, depth)
    bounds = [part for part in _parts(node) if part.type != "super"]
    if not bounds:
        return "*"
    lower = any(child.type == "super" for child in node.children)
    return ("-" if lower else "+") + encode_type(bounds[-1], depth)


class TypeScope:
    """Names visible from one type or method declaration.

    Resolution order: type variables (never resolved), the declaring and
    enclosing types, their member types (declared, then inherited),
    single-type imports, the same package, on-demand imports, java.lang.
    """

    def __init__(
        self,
        index: Dict[str, SourceType],
        unit: CompilationUnit,
        enclosing: Sequence[str],
        type_variables: FrozenSet[str] = frozenset(),
    ):
        """Initialize the scope.

        Args:
            index: Every known declaration by qualified name (filled lazily)
            unit: Compilation unit of the declaration
            enclosing: Qualified names of the declaring type and its
                enclosing types, innermost first
            type_variables: Type parameters visible in the declaration
        """
        self.index = index
        self.unit = unit
        self.enclosing = list(enclosing)
        self.type_variables = type_variables

    def with_type_variables(self, names: Iterable[str]) -> "TypeScope":
        """Scope of a generic method: this scope plus its type parameters."""
        return TypeScope(self.index, self.unit, self.enclosing, self.type_variables | frozenset(names))

    def resolve(self, name: str, inherited: bool = True) -> Optional[str]:
        """Resolve a written type name to a qualified name.

        Args:
            name: Name as written, possibly qualified or parameterized
            inherited: Also search member types inherited from supertypes

        Returns:
            Qualified name, or None for primitives, type variables and
            unknown names
        """
        name = erase_type_arguments(name)
        if not name or name.startswith("?") or is_primitive_name(name):
            return None
        if "." not in name:
            return self._resolve_simple(name, inherited)
        head, _, rest = name.partition(".")
        resolved_head = self._resolve_simple(head, inherited)
        if resolved_head is not None:
            # Outer.Inner written relative to a visible outer type
            return f"{resolved_head}.{rest}"
        if name in self.index:
            return name
        return None

    def _resolve_simple(self, name: str, inherited: bool) -> Optional[str]:
        if name in self.type_variables:
            return None
        for qualified in self.enclosing:
            if qualified.rsplit(".", 1)[-1] == name:
                return qualified
        for qualified in self.enclosing:
            member = f"{qualified}.{name}"
            if member in self.index:
                return member
            if inherited:
                member = self._inherited_member(qualified, name, set(), 0)
                if member is not None:
                    return member
        if name in self.unit.single_imports:
            return self.unit.single_imports[name]
        candidate = f"{self.unit.package}.{name}" if self.unit.package else name
        if candidate in self.index:
            return candidate
        for prefix in self.unit.on_demand_imports:
            candidate = f"{prefix}.{name}"
            if candidate in self.index:
                return candidate
        candidate = f"java.lang.{name}"
        if candidate in self.index:
            return candidate
        return None

    def _inherited_member(self, owner: str, name: str, visited: Set[str], depth: int) -> Optional[str]:
        """Member type ``name`` declared in a supertype of ``owner``, depth first."""
        declaration = self.index.get(owner)
        if declaration is None or owner in visited or depth > MAX_INHERITANCE_DEPTH:
            return None
        visited.add(owner)
        for supertype in self._supertypes(declaration):
            member = f"{supertype}.{name}"
            if member in self.index:
                return member
            member = self._inherited_member(supertype, name, visited, depth + 1)
            if member is not None:
                return member
        return None

    def _supertypes(self, declaration: SourceType) -> List[str]:
        signatures = list(declaration.interface_signatures)
        if declaration.superclass_signature:
            signatures.insert(0, declaration.superclass_signature)
        supertypes = []
        for signature in signatures:
            written = erase_type_arguments(get_signature_simple_name(signature))
            if declaration.scope is not None:
                # supertypes never name inherited member types of themselves
                resolved = declaration.scope.resolve(written, inherited=False)
            else:
                resolved = written if written in self.index else None
            if resolved is not None:
                supertypes.append(resolved)
        return supertypes


class JavaSourceReader:
    """Turns a parsed Java file into SourceType declarations."""

    def __init__(self, index: Dict[str, SourceType]):
        self.index = index

    def read(self, root: TreeSitterNode, path: Optional[Path] = None) -> List[SourceType]:
        """Read all type declarations of a compilation unit.

        Args:
            root: Tree-sitter ``program`` node
            path: Source file, for diagnostics

        Returns:
            Declarations, each outer type before its nested types

        Raises:
            MalformedSignatureError: If a declared type cannot be encoded
        """
        if getattr(root, "has_error", False):
            logger.warning(f"Syntax errors in {path}, extracting recoverable declarations")
        unit = CompilationUnit(path)
        declarations: List[SourceType] = []
        for child in root.named_children:
            if child.type == "package_declaration":
                unit.package = self._package_name(child)
            elif child.type == "import_declaration":
                self._add_import(child, unit)
            elif child.type in TYPE_DECLARATIONS:
                declarations.extend(self._read_type(child, unit, None, frozenset()))
        return declarations

    def _package_name(self, node: TreeSitterNode) -> str:
        for child in node.named_children:
            if child.type in ("scoped_identifier", "identifier"):
                return _qualified_identifier(child)
        return ""

    def _add_import(self, node: TreeSitterNode, unit: CompilationUnit) -> None:
        names = [c for c in node.named_children if c.type in ("scoped_identifier", "identifier")]
        if not names:
            logger.warning(f"Could not read import {node_text(node)!r} in {unit.path}")
            return
        name = _qualified_identifier(names[0])
        if any(child.type == "asterisk" for child in node.children):
            unit.on_demand_imports.append(name)
        elif not any(child.type == "static" for child in node.children):
            # static single imports name members, not types
            unit.single_imports[name.rsplit(".", 1)[-1]] = name

    def _read_type(
        self,
        node: TreeSitterNode,
        unit: CompilationUnit,
        outer: Optional[SourceType],
        outer_variables: FrozenSet[str],
    ) -> List[SourceType]:
        name = node_text(node.child_by_field_name("name"))
        if not name:
            logger.warning(f"Type declaration without name at line {node.start_point[0] + 1} of {unit.path}")
            return []

        if outer is not None:
            qualified_name = f"{outer.qualified_name}.{name}"
            enclosing = [qualified_name] + outer.scope.enclosing
        else:
            qualified_name = f"{unit.package}.{name}" if unit.package else name
            enclosing = [qualified_name]

        kind = TYPE_DECLARATIONS[node.type]
        is_interface = kind is TypeKind.INTERFACE
        type_parameters = self._type_parameters(node, unit)
        variables = outer_variables | {p.name for p in type_parameters}

        declaration = SourceType(
            qualified_name=qualified_name,
            kind=kind,
            modifiers=self._modifiers(node),
            type_parameters=type_parameters,
            outer_type=outer.qualified_name if outer is not None else None,
            scope=TypeScope(self.index, unit, enclosing, frozenset(variables)),
            source_file=str(unit.path) if unit.path else None,
        )

        for child in node.children:
            if child.type == "superclass":
                declaration.superclass_signature = self._signature(_parts(child)[-1], unit)
            elif child.type in ("super_interfaces", "extends_interfaces"):
                declaration.interface_signatures.extend(self._type_list(child, unit))
        if node.type == "record_declaration":
            declaration.superclass_signature = "Qjava.lang.Record;"
            declaration.fields.extend(self._record_components(node, unit))

        nested: List[SourceType] = []
        body = node.child_by_field_name("body")
        if body is not None:
            self._read_body(body, declaration, unit, is_interface, nested, variables)
        return [declaration] + nested

    def _read_body(
        self,
        body: TreeSitterNode,
        declaration: SourceType,
        unit: CompilationUnit,
        is_interface: bool,
        nested: List[SourceType],
        variables: FrozenSet[str],
    ) -> None:
        for member in body.named_children:
            member_type = member.type
            if member_type == "enum_constant":
                declaration.fields.append(
                    SourceField(
                        node_text(member.child_by_field_name("name")),
                        f"Q{declaration.simple_name};",
                        frozenset({"public", "static", "final"}),
                        is_enum_constant=True,
                    )
                )
            elif member_type == "enum_body_declarations":
                self._read_body(member, declaration, unit, is_interface, nested, variables)
            elif member_type in ("field_declaration", "constant_declaration"):
                declaration.fields.extend(self._fields(member, unit, is_interface))
            elif member_type in ("method_declaration", "annotation_type_element_declaration"):
                declaration.methods.append(self._method(member, declaration, unit, is_interface))
            elif member_type in ("constructor_declaration", "compact_constructor_declaration"):
                declaration.methods.append(self._constructor(member, declaration, unit))
            elif member_type in TYPE_DECLARATIONS:
                # static member types do not see the outer type parameters
                visible = frozenset() if "static" in self._modifiers(member) else variables
                nested.extend(self._read_type(member, unit, declaration, visible))

    def _fields(self, node: TreeSitterNode, unit: CompilationUnit, is_interface: bool) -> List[SourceField]:
        modifiers = self._modifiers(node)
        if is_interface:
            modifiers = modifiers | {"public", "static", "final"}
        type_signature = self._signature(node.child_by_field_name("type"), unit)
        fields = []
        for declarator in node.named_children:
            if declarator.type != "variable_declarator":
                continue
            dimensions = _dimension_count(declarator.child_by_field_name("dimensions"))
            fields.append(
                SourceField(
                    node_text(declarator.child_by_field_name("name")),
                    "[" * dimensions + type_signature,
                    modifiers,
                )
            )
        return fields

    def _method(
        self, node: TreeSitterNode, declaration: SourceType, unit: CompilationUnit, is_interface: bool
    ) -> SourceMethod:
        return_signature = self._signature(node.child_by_field_name("type"), unit)
        dimensions = _dimension_count(node.child_by_field_name("dimensions"))
        modifiers = self._modifiers(node)
        if is_interface and "private" not in modifiers:
            modifiers = modifiers | {"public"}
            has_body = node.child_by_field_name("body") is not None
            if not has_body and not modifiers & {"static", "default"}:
                modifiers = modifiers | {"abstract"}
        method = SourceMethod(
            node_text(node.child_by_field_name("name")),
            "[" * dimensions + return_signature,
            modifiers=modifiers,
        )
        self._read_signature_parts(node, method, declaration, unit)
        return method

    def _constructor(self, node: TreeSitterNode, declaration: SourceType, unit: CompilationUnit) -> SourceMethod:
        method = SourceMethod(
            declaration.simple_name,
            SIG_VOID,
            modifiers=self._modifiers(node),
            is_constructor=True,
        )
        if node.type == "compact_constructor_declaration":
            # parameters are the record components
            method.parameters = [
                SourceParameter(f.name, f.signature) for f in declaration.fields
            ]
        self._read_signature_parts(node, method, declaration, unit)
        return method

    def _read_signature_parts(
        self, node: TreeSitterNode, method: SourceMethod, declaration: SourceType, unit: CompilationUnit
    ) -> None:
        method.type_parameters = self._type_parameters(node, unit)
        method.scope = declaration.scope.with_type_variables(p.name for p in method.type_parameters)
        parameters = node.child_by_field_name("parameters")
        if parameters is not None:
            method.parameters.extend(self._parameters(parameters, unit))
        for child in node.children:
            if child.type == "throws":
                method.exception_signatures.extend(self._signature(t, unit) for t in _parts(child))

    def _parameters(self, node: TreeSitterNode, unit: CompilationUnit) -> List[SourceParameter]:
        parameters = []
        for child in node.named_children:
            if child.type == "formal_parameter":
                signature = self._signature(child.child_by_field_name("type"), unit)
                dimensions = _dimension_count(child.child_by_field_name("dimensions"))
                parameters.append(
                    SourceParameter(
                        node_text(child.child_by_field_name("name")),
                        "[" * dimensions + signature,
                    )
                )
            elif child.type == "spread_parameter":
                parameters.append(self._spread_parameter(child, unit))
        return parameters

    def _spread_parameter(self, node: TreeSitterNode, unit: CompilationUnit) -> SourceParameter:
        type_node = None
        name = ""
        for child in _parts(node):
            if child.type == "variable_declarator":
                name = node_text(child.child_by_field_name("name"))
            elif child.type != "modifiers" and type_node is None:
                type_node = child
        return SourceParameter(name, self._signature(type_node, unit), varargs=True)

    def _record_components(self, node: TreeSitterNode, unit: CompilationUnit) -> List[SourceField]:
        parameters = node.child_by_field_name("parameters")
        if parameters is None:
            return []
        return [
            SourceField(p.name, "[" + p.signature if p.varargs else p.signature, frozenset({"private", "final"}))
            for p in self._parameters(parameters, unit)
        ]

    def _type_parameters(self, node: TreeSitterNode, unit: CompilationUnit) -> List[SourceTypeParameter]:
        parameters_node = node.child_by_field_name("type_parameters")
        if parameters_node is None:
            return []
        parameters = []
        for child in parameters_node.named_children:
            if child.type != "type_parameter":
                continue
            name = ""
            bounds: List[str] = []
            for part in _parts(child):
                if part.type in ("type_identifier", "identifier") and not name:
                    name = node_text(part)
                elif part.type == "type_bound":
                    bounds.extend(self._signature(t, unit) for t in _parts(part))
            if name:
                parameters.append(SourceTypeParameter(name, bounds))
        return parameters

    def _type_list(self, node: TreeSitterNode, unit: CompilationUnit) -> List[str]:
        signatures = []
        for child in _parts(node):
            types = _parts(child) if child.type == "type_list" else [child]
            signatures.extend(self._signature(type_node, unit) for type_node in types)
        return signatures

    def _modifiers(self, node: TreeSitterNode) -> FrozenSet[str]:
        for child in node.children:
            if child.type == "modifiers":
                return frozenset(
                    node_text(keyword)
                    for keyword in child.children
                    if node_text(keyword) in MODIFIER_KEYWORDS
                )
        return frozenset()

    def _signature(self, type_node: Optional[TreeSitterNode], unit: CompilationUnit) -> str:
        """Encode a type node, failing with the source location of bad types."""
        if type_node is None:
            raise MalformedSignatureError(f"Declaration without type in {unit.path}")
        try:
            return encode_type(type_node)
        except MalformedSignatureError as e:
            line = type_node.start_point[0] + 1
            raise MalformedSignatureError(f"{e} at line {line} of {unit.path}", e.signature) from e


class JavaProject(SymbolProvider):
    """A directory of Java sources, optionally with library source folders.

    Library types are visible through ``find_type`` only, they are never
    returned by ``get_types``. Sources are read on first access.
    """

    def __init__(
        self,
        root: str | Path,
        library_paths: Iterable[str | Path] = (),
        exclude_patterns: Optional[List[str]] = None,
        name: Optional[str] = None,
    ):
        """Initialize the project.

        Args:
            root: Project directory
            library_paths: Directories with sources of dependencies
            exclude_patterns: Directory names to skip (default:
                DEFAULT_EXCLUDE_PATTERNS)
            name: Project name (default: directory name)
        """
        self.root = Path(root)
        self.library_paths = [Path(path) for path in library_paths]
        if exclude_patterns is None:
            exclude_patterns = list(DEFAULT_EXCLUDE_PATTERNS)
        self.exclude_patterns = exclude_patterns
        self._name = name or self.root.resolve().name
        self._index: Dict[str, SourceType] = {}
        self._project_types: Dict[str, SourceType] = {}
        self._loaded = False

    @property
    def name(self) -> str:
        return self._name

    def exists(self) -> bool:
        return self.root.is_dir()

    def get_types(self) -> List[SourceType]:
        self._load()
        return list(self._project_types.values())

    def find_type(self, qualified_name: str) -> Optional[SourceType]:
        self._load()
        return self._index.get(qualified_name)

    def source_files(self, root: Path) -> List[Path]:
        """Java files below a directory, without excluded directories."""
        files = []
        for path in sorted(root.rglob("*.java")):
            relative = path.relative_to(root)
            if any(part in self.exclude_patterns for part in relative.parts[:-1]):
                continue
            files.append(path)
        return files

    def _load(self) -> None:
        if self._loaded:
            return
        reader = JavaSourceReader(self._index)
        library_types: Dict[str, SourceType] = {}
        for library_path in self.library_paths:
            for declaration in self._read_directory(reader, library_path):
                library_types.setdefault(declaration.qualified_name, declaration)

        for declaration in self._read_directory(reader, self.root):
            if declaration.qualified_name in self._project_types:
                logger.warning(
                    f"Duplicate declaration of {declaration.qualified_name} in "
                    f"{declaration.source_file}, keeping the first one"
                )
                continue
            self._project_types[declaration.qualified_name] = declaration

        # project types shadow library types, which shadow platform types
        self._index.update(platform_types())
        self._index.update(library_types)
        self._index.update(self._project_types)
        self._loaded = True
        logger.info(
            f"Read {len(self._project_types)} project types and "
            f"{len(library_types)} library types"
        )

    def _read_directory(self, reader: JavaSourceReader, root: Path) -> List[SourceType]:
        declarations = []
        for path in self.source_files(root):
            declarations.extend(reader.read(parse_java_file(path), path))
        return declarations
