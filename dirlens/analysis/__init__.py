"""Directory structure analysis.

Infers the purpose of each directory from file paths, shallow file contents
and the project's declared dependencies.
"""

from dirlens.analysis.results import (
    ArchitectureClassification,
    CoLocation,
    ContentAnalysis,
    Dependency,
    DirectoryRecord,
    FileClassification,
    ModuleBoundary,
    StructureAnalysis,
    VersionIsolation,
)
from dirlens.analysis.dependencies import DependencyKeywordIndex, DependencyMatcher
from dirlens.analysis.file_types import FileTypeIdentifier
from dirlens.analysis.content import FileContentAnalyzer
from dirlens.analysis.siblings import SiblingPatternAnalyzer
from dirlens.analysis.resolver import DEFAULT_STAGES, DirectoryPurposeResolver
from dirlens.analysis.architecture import ArchitectureDetector
from dirlens.analysis.hierarchy import HierarchyBuilder
from dirlens.analysis.engine import StructureAnalyzer

__all__ = [
    "ArchitectureClassification",
    "CoLocation",
    "ContentAnalysis",
    "Dependency",
    "DirectoryRecord",
    "FileClassification",
    "ModuleBoundary",
    "StructureAnalysis",
    "VersionIsolation",
    "DependencyKeywordIndex",
    "DependencyMatcher",
    "FileTypeIdentifier",
    "FileContentAnalyzer",
    "SiblingPatternAnalyzer",
    "DEFAULT_STAGES",
    "DirectoryPurposeResolver",
    "ArchitectureDetector",
    "HierarchyBuilder",
    "StructureAnalyzer",
]
