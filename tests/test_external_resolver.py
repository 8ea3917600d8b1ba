"""
Tests for ExternalTypeResolver.
"""

from typemodel.extractor.data_type_resolver import DataTypeResolver
from typemodel.extractor.external_resolver import ExternalTypeResolver
from typemodel.extractor.intermediate_model import IntermediateModel
from typemodel.extractor.models import ExtractedClass, TypeKind
from typemodel.extractor.type_classifier import TypeClassifier


def _setup(provider):
    resolver = DataTypeResolver()
    classifier = TypeClassifier(provider, resolver)
    return resolver, ExternalTypeResolver(provider, classifier)


def test_repeated_reference_adds_one_stub(make_type, fake_provider):
    """Test that two references to one external type create one entry."""
    provider = fake_provider(known=[make_type("java.util.List", TypeKind.INTERFACE)])
    _, external = _setup(provider)
    model = IntermediateModel("demo")

    added = external.resolve_externals(["java.util.List", "java.util.List"], model)

    assert added == 1
    assert list(model.external_types) == ["java.util.List"]
    assert model.external_types["java.util.List"].kind is TypeKind.INTERFACE


def test_project_types_and_unknown_names_skipped(make_type, fake_provider):
    """Test that internal types are not duplicated and unknown names are dropped."""
    provider = fake_provider(known=[make_type("p.Internal")])
    _, external = _setup(provider)
    model = IntermediateModel("demo")
    model.add(ExtractedClass("p.Internal"))

    added = external.resolve_externals(["p.Internal", "T", "org.missing.Thing"], model)

    assert added == 0
    assert len(model.external_types) == 0
    assert "find_type:p.Internal" not in provider.calls


def test_stub_references_are_not_followed(make_type, fake_provider):
    """Test a single pass: types referenced only by stubs stay out."""
    base = make_type("x.Base")
    ext = make_type("x.Ext", names={"Base": "x.Base"}, superclass_signature="QBase;")
    provider = fake_provider(known=[base, ext])
    resolver, external = _setup(provider)
    model = IntermediateModel("demo")

    external.resolve_externals(["x.Ext"], model)

    assert list(model.external_types) == ["x.Ext"]
    assert model.external_types["x.Ext"].super_class.full_name == "x.Base"
    assert "x.Base" in resolver.referenced_types


def test_stubs_added_in_sorted_order(make_type, fake_provider):
    """Test deterministic order of external types."""
    provider = fake_provider(known=[make_type("b.Two"), make_type("a.One")])
    _, external = _setup(provider)
    model = IntermediateModel("demo")

    external.resolve_externals({"b.Two", "a.One"}, model)

    assert list(model.external_types) == ["a.One", "b.Two"]
