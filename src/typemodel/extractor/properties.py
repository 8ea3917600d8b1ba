"""
Extraction properties.

Settings that change how a project is extracted. The CLI builds an instance
from its options; library users construct one directly.
"""

from dataclasses import dataclass

DEFAULT_EXCEPTION_ROOT = "java.lang.Throwable"
DEFAULT_MAX_RESOLUTION_DEPTH = 64


@dataclass
class ExtractionProperties:
    """Configuration of a single extraction run.

    Attributes:
        extract_external_types: Whether referenced types outside the project
            are materialized as external stubs
        max_resolution_depth: Limit for nested generic arguments and
            supertype chain walks
        exception_root: Qualified name of the root of the exception lineage
    """

    extract_external_types: bool = True
    max_resolution_depth: int = DEFAULT_MAX_RESOLUTION_DEPTH
    exception_root: str = DEFAULT_EXCEPTION_ROOT

    def __post_init__(self) -> None:
        if self.max_resolution_depth < 1:
            raise ValueError(
                f"max_resolution_depth must be positive, got {self.max_resolution_depth}"
            )
