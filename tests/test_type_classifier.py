"""
Tests for TypeClassifier.
"""

import pytest

from typemodel.extractor.data_type_resolver import DataTypeResolver
from typemodel.extractor.errors import MalformedSignatureError
from typemodel.extractor.models import (
    ExtractedClass,
    ExtractedEnum,
    ExtractedInterface,
    TypeKind,
)
from typemodel.extractor.properties import ExtractionProperties
from typemodel.extractor.type_classifier import TypeClassifier
from typemodel.provider.base import SourceField, SourceType, SourceTypeParameter


def _classifier(provider, **properties):
    return TypeClassifier(provider, DataTypeResolver(), ExtractionProperties(**properties))


def test_kind_selects_variant(make_type, fake_provider):
    """Test that each kind produces its own model type."""
    classifier = _classifier(fake_provider())

    assert isinstance(classifier.classify(make_type("p.A")), ExtractedClass)
    assert isinstance(classifier.classify(make_type("p.B", TypeKind.INTERFACE)), ExtractedInterface)
    assert isinstance(classifier.classify(make_type("p.C", TypeKind.ENUM)), ExtractedEnum)


def test_unknown_kind_raises(fake_provider):
    """Test that the dispatch over kinds is closed."""
    with pytest.raises(TypeError):
        _classifier(fake_provider()).classify(SourceType("p.S", "struct"))


def test_exception_lineage_through_chain(make_type, fake_provider):
    """Test A -> B -> Throwable, each superclass resolved in its declaring scope."""
    base = make_type(
        "q.B",
        names={"Throwable": "java.lang.Throwable"},
        superclass_signature="QThrowable;",
    )
    child = make_type("p.A", names={"B": "q.B"}, superclass_signature="QB;")
    classifier = _classifier(fake_provider([child, base]))

    extracted_child = classifier.classify(child)
    extracted_base = classifier.classify(base)

    assert extracted_child.throwable
    assert extracted_base.throwable
    assert extracted_child.super_class.full_name == "q.B"


def test_lineage_false_without_exception_root(make_type, fake_provider):
    """Test chains ending at a root class or an unknown type."""
    plain = make_type("p.Plain")
    orphan = make_type("p.Orphan", names={"Gone": "x.Gone"}, superclass_signature="QGone;")
    classifier = _classifier(fake_provider([plain, orphan]))

    assert not classifier.classify(plain).throwable
    assert not classifier.classify(orphan).throwable
    assert classifier.classify(plain).super_class is None


def test_custom_exception_root(make_type, fake_provider):
    """Test that the lineage root is configurable."""
    declaration = make_type("p.Fault", names={"Base": "p.Base"}, superclass_signature="QBase;")
    classifier = _classifier(fake_provider([declaration]), exception_root="p.Base")

    assert classifier.inherits_from_throwable(declaration)


def test_cyclic_supertype_chain_hits_cap(make_type, fake_provider):
    """Test that a cycle in the supertypes raises instead of looping."""
    first = make_type("p.First", names={"Second": "p.Second"}, superclass_signature="QSecond;")
    second = make_type("p.Second", names={"First": "p.First"}, superclass_signature="QFirst;")
    classifier = _classifier(fake_provider([first, second]), max_resolution_depth=4)

    with pytest.raises(MalformedSignatureError):
        classifier.classify(first)


def test_structure_of_generic_inner_type(make_type, fake_provider):
    """Test outer type, type parameters and interfaces."""
    declaration = make_type(
        "p.Outer.Node",
        TypeKind.CLASS,
        names={"Comparable": "java.lang.Comparable"},
        modifiers=frozenset({"abstract", "static"}),
        outer_type="p.Outer",
        type_parameters=[SourceTypeParameter("T", ["QComparable<TT;>;"])],
        interface_signatures=["QComparable<QNode<TT;>;>;"],
    )

    extracted = _classifier(fake_provider()).classify(declaration)

    assert extracted.name == "Node"
    assert extracted.is_inner_type
    assert extracted.outer_type == "p.Outer"
    assert extracted.abstract
    assert [p.identifier for p in extracted.type_parameters] == ["T"]
    bound = extracted.type_parameters[0].bounds[0]
    assert bound.full_name == "java.lang.Comparable"
    assert bound.generic_arguments[0].full_name == "T"
    assert [i.full_name for i in extracted.interfaces] == ["java.lang.Comparable"]


def test_empty_interface(make_type, fake_provider):
    """Test that an interface without members has empty lists."""
    extracted = _classifier(fake_provider()).classify(make_type("Empty", TypeKind.INTERFACE))

    assert extracted.kind is TypeKind.INTERFACE
    assert extracted.attributes == []
    assert extracted.methods == []
    assert extracted.interfaces == []
    assert not extracted.is_inner_type


def test_enum_constants_classified(make_type, fake_provider):
    """Test that enum constants land in the enumerals."""
    declaration = make_type(
        "p.Level",
        TypeKind.ENUM,
        fields=[
            SourceField("LOW", "QLevel;", is_enum_constant=True),
            SourceField("HIGH", "QLevel;", is_enum_constant=True),
        ],
    )

    extracted = _classifier(fake_provider()).classify(declaration)

    assert [e.name for e in extracted.enumerals] == ["LOW", "HIGH"]
    assert extracted.attributes == []
