"""
Pytest configuration and shared fixtures for typemodel tests.
"""

import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, Iterable, List, Optional

import pytest

from typemodel.extractor.models import TypeKind
from typemodel.provider.base import SourceType, SymbolProvider


class FakeScope:
    """Scope resolving names from a fixed mapping, generic arguments ignored."""

    def __init__(self, names: Optional[Dict[str, str]] = None):
        self.names = dict(names or {})

    def resolve(self, name: str) -> Optional[str]:
        return self.names.get(name.split("<", 1)[0])


class FakeProvider(SymbolProvider):
    """In-memory provider that records the calls it receives."""

    def __init__(
        self,
        types: Iterable[SourceType] = (),
        known: Iterable[SourceType] = (),
        name: str = "fake",
        exists: bool = True,
    ):
        self.types = list(types)
        self.known = {t.qualified_name: t for t in known}
        for declaration in self.types:
            self.known.setdefault(declaration.qualified_name, declaration)
        self._name = name
        self._exists = exists
        self.calls: List[str] = []

    @property
    def name(self) -> str:
        return self._name

    def exists(self) -> bool:
        self.calls.append("exists")
        return self._exists

    def get_types(self) -> List[SourceType]:
        self.calls.append("get_types")
        return list(self.types)

    def find_type(self, qualified_name: str) -> Optional[SourceType]:
        self.calls.append(f"find_type:{qualified_name}")
        return self.known.get(qualified_name)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is cleaned up after test.

    Yields:
        Path to temporary directory
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_type() -> Callable[..., SourceType]:
    """Factory for in-memory declarations.

    Returns:
        Function ``(qualified_name, kind=TypeKind.CLASS, names=None, **kwargs)``
        where ``names`` maps visible simple names to qualified names
    """

    def _make(
        qualified_name: str,
        kind: TypeKind = TypeKind.CLASS,
        names: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> SourceType:
        return SourceType(qualified_name, kind, scope=FakeScope(names), **kwargs)

    return _make


@pytest.fixture
def fake_provider() -> Callable[..., FakeProvider]:
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def fake_scope() -> Callable[..., FakeScope]:
    """Factory for FakeScope instances."""
    return FakeScope


@pytest.fixture
def write_java(temp_dir: Path) -> Callable[[str, str], Path]:
    """Write Java files below the temporary directory.

    Args:
        temp_dir: Temporary directory fixture

    Returns:
        Function ``(relative_path, content) -> Path``
    """

    def _write(relative_path: str, content: str) -> Path:
        file_path = temp_dir / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def sample_project(temp_dir: Path, write_java: Callable[[str, str], Path]) -> Path:
    """Create a small Java project with an exception, an interface and an enum.

    Args:
        temp_dir: Temporary directory fixture
        write_java: File writer fixture

    Returns:
        Path to project root directory
    """
    write_java(
        "src/com/example/Foo.java",
        """package com.example;

import java.util.List;

public class Foo extends RuntimeException {
    int x;

    public String bar(List<String> y) {
        return y.get(0);
    }
}
""",
    )
    write_java(
        "src/com/example/Shape.java",
        """package com.example;

public interface Shape {
    double area();
}
""",
    )
    write_java(
        "src/com/example/Color.java",
        """package com.example;

public enum Color {
    RED, GREEN;

    private final int code = 0;
}
""",
    )
    return temp_dir
