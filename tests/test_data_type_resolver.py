"""
Tests for DataTypeResolver.
"""

import pytest

from typemodel.extractor.data_type_resolver import DataTypeResolver
from typemodel.extractor.errors import MalformedSignatureError
from typemodel.extractor.models import WildcardKind
from typemodel.provider.base import SourceMethod, SourceParameter, SourceTypeParameter

NAMES = {
    "List": "java.util.List",
    "Map": "java.util.Map",
    "String": "java.lang.String",
    "Integer": "java.lang.Integer",
    "Number": "java.lang.Number",
    "Foo": "com.example.Foo",
}


@pytest.fixture
def context(make_type):
    return make_type("com.example.Bar", names=NAMES)


@pytest.fixture
def resolver():
    return DataTypeResolver()


@pytest.mark.parametrize("signature, arrays", [("I", 0), ("[I", 1), ("[[I", 2), ("[[[QString;", 3)])
def test_array_count_matches_leading_brackets(resolver, context, signature, arrays):
    """Test that every leading '[' is one array dimension."""
    assert resolver.resolve(signature, context).array_count == arrays


def test_primitive_is_not_recorded(resolver, context):
    """Test that primitives resolve to their name and are no references."""
    data_type = resolver.resolve("[[I", context)

    assert data_type.full_name == "int"
    assert data_type.is_array
    assert "int" not in resolver.referenced_types


def test_generic_arguments_resolved_in_order(resolver, context):
    """Test resolution of a parameterized type in the declaring scope."""
    data_type = resolver.resolve("QMap<QString;QList<QInteger;>;>;", context)

    assert data_type.full_name == "java.util.Map"
    assert data_type.name == "Map"
    assert [arg.full_name for arg in data_type.generic_arguments] == [
        "java.lang.String",
        "java.util.List",
    ]
    nested = data_type.generic_arguments[1]
    assert len(nested.generic_arguments) == 1
    assert nested.generic_arguments[0].full_name == "java.lang.Integer"
    assert data_type.type_string == "java.util.Map<java.lang.String, java.util.List<java.lang.Integer>>"
    assert {"java.util.Map", "java.lang.String", "java.util.List", "java.lang.Integer"} <= resolver.referenced_types


def test_unresolved_names_are_kept_verbatim(resolver, context):
    """Test that names the scope does not know are not invented."""
    assert resolver.resolve("QUnknown;", context).full_name == "Unknown"
    assert resolver.resolve("Qorg.acme.Widget;", context).full_name == "org.acme.Widget"


def test_unresolved_parameterized_name_keeps_raw_type(resolver, make_type):
    """Test that type arguments are cut from an unresolved parameterized name."""
    data_type = resolver.resolve("QList<QString;>;", make_type("p.Bare"))

    assert data_type.full_name == "List"
    assert [arg.full_name for arg in data_type.generic_arguments] == ["String"]


def test_wildcard_arguments(resolver, context):
    """Test unbounded and bounded wildcards."""
    data_type = resolver.resolve("QMap<*-QInteger;>;", context)
    unbounded, lower = data_type.generic_arguments

    assert unbounded.full_name == "?"
    assert unbounded.wildcard is WildcardKind.UNBOUNDED
    assert lower.full_name == "java.lang.Integer"
    assert lower.wildcard is WildcardKind.SUPER
    assert data_type.type_string == "java.util.Map<?, ? super java.lang.Integer>"


def test_type_variable_is_not_resolved(resolver, context):
    """Test that a type variable keeps its name."""
    assert resolver.resolve("TT;", context).full_name == "T"


def test_nesting_beyond_max_depth_raises(context):
    """Test the recursion cap on generic arguments."""
    resolver = DataTypeResolver(max_depth=2)

    assert resolver.resolve("QList<QList<QString;>;>;", context).full_name == "java.util.List"
    with pytest.raises(MalformedSignatureError):
        resolver.resolve("QList<QList<QList<QString;>;>;>;", context)


def test_malformed_signature_raises(resolver, context):
    """Test that an unparsable signature is reported."""
    with pytest.raises(MalformedSignatureError):
        resolver.resolve("QList<", context)


def test_void_and_constructor_have_no_return_type(resolver, context):
    """Test that void methods and constructors resolve to None."""
    assert resolver.resolve_return_type(SourceMethod("run"), context) is None
    assert resolver.resolve_return_type(SourceMethod("Bar", is_constructor=True), context) is None
    assert resolver.resolve_return_type(SourceMethod("size", "I"), context).full_name == "int"


def test_varargs_parameter_adds_dimension(resolver, context):
    """Test that varargs parameters are arrays."""
    parameter = resolver.resolve_parameter(SourceParameter("args", "QString;", varargs=True), context)

    assert parameter.identifier == "args"
    assert parameter.array_count == 1
    assert parameter.full_type_name == "java.lang.String"


def test_type_parameter_bounds(resolver, context):
    """Test resolution of type parameter bounds."""
    parameter = resolver.resolve_type_parameter(SourceTypeParameter("N", ["QNumber;"]), context)

    assert parameter.identifier == "N"
    assert [bound.full_name for bound in parameter.bounds] == ["java.lang.Number"]


def test_qualified_name_does_not_record(resolver, context):
    """Test that qualified_name resolves without adding a reference."""
    assert resolver.qualified_name("[QFoo;", context) == "com.example.Foo"
    assert "com.example.Foo" not in resolver.referenced_types
