"""
The intermediate model: a duplicate-free registry of extracted types.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

from typemodel.extractor.errors import DuplicateTypeError, FrozenModelError
from typemodel.extractor.models import ExtractedType

logger = logging.getLogger(__name__)


class IntermediateModel:
    """Internal and external types of one extraction run, keyed by qualified name.

    A qualified name is stored in exactly one of the two mappings. The model
    is append-only until it is frozen; callers receive read-only views.
    """

    def __init__(self, project_name: str):
        self.project_name = project_name
        self._types: Dict[str, ExtractedType] = {}
        self._external_types: Dict[str, ExtractedType] = {}
        self._frozen = False

    def contains(self, name: str) -> bool:
        """Check whether a type is part of the model (internal or external)."""
        return name in self._types or name in self._external_types

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def add(self, extracted_type: ExtractedType) -> None:
        """Add a type declared in the project.

        Raises:
            DuplicateTypeError: If the name is already in the model
            FrozenModelError: If the model is frozen
        """
        self._check_addable(extracted_type.full_name)
        self._types[extracted_type.full_name] = extracted_type
        logger.debug(f"Added {extracted_type.kind.value} {extracted_type.full_name}")

    def add_external(self, extracted_type: ExtractedType) -> None:
        """Add a stub for a type declared outside the project.

        Raises:
            DuplicateTypeError: If the name is already in the model
            FrozenModelError: If the model is frozen
        """
        self._check_addable(extracted_type.full_name)
        self._external_types[extracted_type.full_name] = extracted_type
        logger.debug(f"Added external {extracted_type.kind.value} {extracted_type.full_name}")

    def freeze(self) -> None:
        """Reject any further additions. Called once extraction is complete."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get_type(self, name: str) -> Optional[ExtractedType]:
        """Look up a type in both mappings."""
        found = self._types.get(name)
        if found is None:
            found = self._external_types.get(name)
        return found

    def get_internal(self, name: str) -> Optional[ExtractedType]:
        return self._types.get(name)

    def is_external(self, name: str) -> bool:
        return name in self._external_types

    @property
    def types(self) -> Mapping[str, ExtractedType]:
        """Types declared in the project, in extraction order."""
        return MappingProxyType(self._types)

    @property
    def external_types(self) -> Mapping[str, ExtractedType]:
        """Stubs of external types, in resolution order."""
        return MappingProxyType(self._external_types)

    def __len__(self) -> int:
        return len(self._types) + len(self._external_types)

    def __iter__(self) -> Iterator[ExtractedType]:
        yield from self._types.values()
        yield from self._external_types.values()

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for downstream generators."""
        return {
            "project": self.project_name,
            "types": [t.to_dict() for t in self._types.values()],
            "external_types": [t.to_dict() for t in self._external_types.values()],
        }

    def __repr__(self) -> str:
        return (
            f"IntermediateModel({self.project_name!r}, types={len(self._types)}, "
            f"external_types={len(self._external_types)})"
        )

    def _check_addable(self, name: str) -> None:
        if self._frozen:
            raise FrozenModelError(name)
        if self.contains(name):
            raise DuplicateTypeError(name)
