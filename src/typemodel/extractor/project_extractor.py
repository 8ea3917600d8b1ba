"""
Entry point of the type model extraction.

Refactored into passes: every project type is classified first, external
types are resolved afterwards from the references collected on the way.
"""

import logging
from typing import Any, Optional

from codetiming import Timer

from typemodel.extractor.data_type_resolver import DataTypeResolver
from typemodel.extractor.errors import InvalidProjectError
from typemodel.extractor.external_resolver import ExternalTypeResolver
from typemodel.extractor.intermediate_model import IntermediateModel
from typemodel.extractor.properties import ExtractionProperties
from typemodel.extractor.type_classifier import TypeClassifier

logger = logging.getLogger(__name__)


class ProjectExtractor:
    """Builds an IntermediateModel from a project's source symbol provider."""

    def __init__(self, properties: Optional[ExtractionProperties] = None):
        self.properties = properties or ExtractionProperties()

    def extract(self, project: Any) -> IntermediateModel:
        """Extract the type model of a project.

        Args:
            project: Source symbol provider of the project

        Returns:
            The complete intermediate model, frozen

        Raises:
            InvalidProjectError: If the project is None or does not exist
            ExtractionError: If any declaration cannot be extracted
        """
        self._check(project)
        logger.info(f"Started extraction of project {project.name}")

        resolver = DataTypeResolver(self.properties.max_resolution_depth)
        classifier = TypeClassifier(project, resolver, self.properties)
        model = IntermediateModel(project.name)

        timer = Timer(logger=None)
        timer.start()
        for declaration in project.get_types():
            model.add(classifier.classify(declaration))
        type_time = timer.stop()
        logger.info(f"Extracted {len(model.types)} types in {type_time:.2f}s")

        if self.properties.extract_external_types:
            timer = Timer(logger=None)
            timer.start()
            external = ExternalTypeResolver(project, classifier)
            external.resolve_externals(resolver.referenced_types, model)
            logger.info(f"External type resolution took {timer.stop():.2f}s")

        model.freeze()
        logger.info(
            f"Finished extraction of {project.name}: {len(model.types)} types, "
            f"{len(model.external_types)} external types"
        )
        return model

    def _check(self, project: Any) -> None:
        """Reject a missing or nonexistent project before touching it."""
        if project is None:
            raise InvalidProjectError("Project can't be None")
        if not project.exists():
            raise InvalidProjectError(f"Project {project.name} does not exist")


def extract(project: Any, properties: Optional[ExtractionProperties] = None) -> IntermediateModel:
    """Extract the type model of a project with the given settings."""
    return ProjectExtractor(properties).extract(project)
