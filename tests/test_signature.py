"""
Tests for the type signature codec.
"""

import pytest

from typemodel.extractor.errors import MalformedSignatureError
from typemodel.extractor.models import WildcardKind
from typemodel.extractor.signature import (
    get_array_count,
    get_element_type,
    get_signature_simple_name,
    get_type_arguments,
    get_wildcard_kind,
    is_primitive_name,
    is_void,
    strip_wildcard,
    validate,
)


@pytest.mark.parametrize(
    "signature",
    ["", "Q", "QString", "[", "QList<>;", "QList<QString;", "X", "[V", "QString;extra", "TT", "Q.a;", "QList<V>;"],
)
def test_validate_rejects_malformed_signatures(signature):
    """Test that structurally invalid signatures raise."""
    with pytest.raises(MalformedSignatureError):
        validate(signature)


def test_malformed_signature_error_carries_signature():
    """Test that the offending signature is attached to the error."""
    with pytest.raises(MalformedSignatureError) as exc_info:
        validate("QString")

    assert exc_info.value.signature == "QString"


def test_array_count_and_element_type():
    """Test array dimension helpers."""
    assert get_array_count("[[I") == 2
    assert get_array_count("QString;") == 0
    assert get_element_type("[[QString;") == "QString;"


def test_simple_name_keeps_qualification_and_arguments():
    """Test rendering of signatures as readable names."""
    assert get_signature_simple_name("QList<QString;>;") == "List<String>"
    assert get_signature_simple_name("Qjava.util.Map<QString;[I>;") == "java.util.Map<String, int[]>"
    assert get_signature_simple_name("QList<+QNumber;>;") == "List<? extends Number>"
    assert get_signature_simple_name("TT;") == "T"


def test_type_arguments_in_declaration_order():
    """Test that type arguments are returned in order, for the innermost type only."""
    assert get_type_arguments("QMap<QString;QInteger;>;") == ["QString;", "QInteger;"]
    assert get_type_arguments("[QList<QString;>;") == ["QString;"]
    assert get_type_arguments("QOuter<QT;>.Inner;") == []
    assert get_type_arguments("I") == []


def test_wildcards():
    """Test wildcard kinds and bounds of type arguments."""
    assert get_wildcard_kind("*") is WildcardKind.UNBOUNDED
    assert get_wildcard_kind("+QNumber;") is WildcardKind.EXTENDS
    assert get_wildcard_kind("-QT;") is WildcardKind.SUPER
    assert get_wildcard_kind("QString;") is None

    assert strip_wildcard("*") is None
    assert strip_wildcard("+QNumber;") == "QNumber;"
    assert strip_wildcard("QString;") == "QString;"


def test_void_and_primitives():
    """Test void and primitive detection."""
    assert is_void("V")
    assert not is_void("I")
    assert is_primitive_name("int")
    assert is_primitive_name("void")
    assert not is_primitive_name("String")
