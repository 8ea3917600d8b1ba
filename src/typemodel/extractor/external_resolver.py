"""
Resolution of external types referenced by the project.
"""

import logging
from typing import Any, Iterable

from typemodel.extractor.intermediate_model import IntermediateModel
from typemodel.extractor.type_classifier import TypeClassifier

logger = logging.getLogger(__name__)


class ExternalTypeResolver:
    """Adds stubs for referenced types that are declared outside the project."""

    def __init__(self, provider: Any, classifier: TypeClassifier):
        self.provider = provider
        self.classifier = classifier

    def resolve_externals(self, candidate_names: Iterable[str], model: IntermediateModel) -> int:
        """Add an external stub for every candidate the provider can find.

        Candidates already in the model are skipped, as are names the
        provider does not know (library types without sources, primitives,
        type variables). References found while classifying the stubs are not
        followed.

        Args:
            candidate_names: Qualified names referenced during extraction
            model: Model receiving the stubs

        Returns:
            Number of stubs added
        """
        logger.info("Resolving external types...")
        added = 0
        skipped = 0
        # snapshot, classifying stubs records new references in the live set
        for name in sorted(set(candidate_names)):
            if model.contains(name):
                continue
            declaration = self.provider.find_type(name)
            if declaration is None:
                logger.debug(f"External type {name} not found, skipping")
                skipped += 1
                continue
            model.add_external(self.classifier.classify(declaration))
            added += 1
        logger.info(f"Added {added} external types ({skipped} unresolved references)")
        return added
