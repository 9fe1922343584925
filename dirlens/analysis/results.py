"""Data models for directory structure analysis results."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import json


@dataclass(frozen=True)
class Dependency:
    """A declared external dependency."""
    name: str
    version: str = ""


@dataclass(frozen=True)
class ModuleBoundary:
    """A module root supplied by module detection."""
    name: str
    path: str


@dataclass
class FileClassification:
    """File type of a single file, from its name and location."""
    category: str = "other"
    confidence: str = "low"  # high, medium, low
    indicators: List[str] = field(default_factory=list)


@dataclass
class ContentAnalysis:
    """Result of shallow content analysis of a directory's files."""

    purpose: str = ""
    confidence: str = "low"
    indicators: List[str] = field(default_factory=list)
    business_keywords: List[str] = field(default_factory=list)  # most salient first
    role: Optional[str] = None  # page, component, api, utility, model, hook


@dataclass
class CoLocation:
    """Whether styles, tests and types sit next to source files."""
    styles: bool = False
    tests: bool = False
    types: bool = False

    def to_dict(self) -> dict:
        return {"styles": self.styles, "tests": self.tests, "types": self.types}

    @classmethod
    def from_dict(cls, data: dict) -> "CoLocation":
        return cls(
            styles=data.get("styles", False),
            tests=data.get("tests", False),
            types=data.get("types", False),
        )


@dataclass
class DirectoryRecord:
    """Everything inferred about one directory."""

    path: str
    purpose: str = ""
    category: str = "other"

    # Direct child files
    file_type_distribution: Dict[str, int] = field(default_factory=dict)
    primary_file_types: List[str] = field(default_factory=list)
    naming_pattern: str = "mixed"  # PascalCase, camelCase, kebab-case, snake_case, mixed
    co_location: CoLocation = field(default_factory=CoLocation)
    has_index_files: bool = False
    file_count: int = 0
    total_file_count: int = 0

    architecture_pattern: Optional[str] = None
    depth: int = 0
    module: Optional[str] = None
    version: Optional[str] = None
    resolved_by: Optional[str] = None  # cascade stage that produced the purpose

    # Back-references, assigned by HierarchyBuilder
    parent_directory: Optional[str] = None
    child_directories: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "purpose": self.purpose,
            "category": self.category,
            "file_type_distribution": self.file_type_distribution,
            "primary_file_types": self.primary_file_types,
            "naming_pattern": self.naming_pattern,
            "co_location": self.co_location.to_dict(),
            "has_index_files": self.has_index_files,
            "file_count": self.file_count,
            "total_file_count": self.total_file_count,
            "architecture_pattern": self.architecture_pattern,
            "depth": self.depth,
            "module": self.module,
            "version": self.version,
            "resolved_by": self.resolved_by,
            "parent_directory": self.parent_directory,
            "child_directories": self.child_directories,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DirectoryRecord":
        """Create from dictionary."""
        return cls(
            path=data["path"],
            purpose=data.get("purpose", ""),
            category=data.get("category", "other"),
            file_type_distribution=data.get("file_type_distribution", {}),
            primary_file_types=data.get("primary_file_types", []),
            naming_pattern=data.get("naming_pattern", "mixed"),
            co_location=CoLocation.from_dict(data.get("co_location", {})),
            has_index_files=data.get("has_index_files", False),
            file_count=data.get("file_count", 0),
            total_file_count=data.get("total_file_count", 0),
            architecture_pattern=data.get("architecture_pattern"),
            depth=data.get("depth", 0),
            module=data.get("module"),
            version=data.get("version"),
            resolved_by=data.get("resolved_by"),
            parent_directory=data.get("parent_directory"),
            child_directories=data.get("child_directories", []),
        )


@dataclass
class VersionIsolation:
    """How (and whether) a project keeps versions side by side."""
    has_versioning: bool = False
    versions: List[str] = field(default_factory=list)
    pattern: str = "none"  # directory, prefix, suffix, none

    def to_dict(self) -> dict:
        return {
            "has_versioning": self.has_versioning,
            "versions": self.versions,
            "pattern": self.pattern,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VersionIsolation":
        return cls(
            has_versioning=data.get("has_versioning", False),
            versions=data.get("versions", []),
            pattern=data.get("pattern", "none"),
        )


@dataclass
class ArchitectureClassification:
    """Whole-project architecture classification."""

    type: str = "unknown"  # monorepo, clean-architecture, feature-based, mvc, domain-driven, microservices
    confidence: str = "low"
    indicators: List[str] = field(default_factory=list)

    layer_structure: Dict[str, List[str]] = field(default_factory=dict)  # layer -> directories
    feature_structure: Dict[str, List[str]] = field(default_factory=dict)  # features/shared -> directories
    version_isolation: VersionIsolation = field(default_factory=VersionIsolation)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.type,
            "confidence": self.confidence,
            "indicators": self.indicators,
            "layer_structure": self.layer_structure,
            "feature_structure": self.feature_structure,
            "version_isolation": self.version_isolation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ArchitectureClassification":
        """Create from dictionary."""
        return cls(
            type=data.get("type", "unknown"),
            confidence=data.get("confidence", "low"),
            indicators=data.get("indicators", []),
            layer_structure=data.get("layer_structure", {}),
            feature_structure=data.get("feature_structure", {}),
            version_isolation=VersionIsolation.from_dict(data.get("version_isolation", {})),
        )

    def format_summary(self) -> str:
        """Format a human-readable summary."""
        lines = ["## Architecture"]

        lines.append(f"\nDetected pattern: {self.type} ({self.confidence} confidence)")

        if self.indicators:
            lines.append("\nIndicators:")
            for indicator in self.indicators:
                lines.append(f"  - {indicator}")

        if self.layer_structure:
            lines.append("\nLayer structure:")
            for layer, dirs in self.layer_structure.items():
                lines.append(f"  - {layer}: {len(dirs)} directories")

        if self.feature_structure.get("features"):
            lines.append(f"\nFeature directories: {len(self.feature_structure['features'])}")

        if self.version_isolation.has_versioning:
            versions = ", ".join(self.version_isolation.versions)
            lines.append(f"Versions: {versions} ({self.version_isolation.pattern})")

        return "\n".join(lines)


@dataclass
class StructureAnalysis:
    """Complete result of one directory structure analysis run."""

    project_path: str = ""
    records: List[DirectoryRecord] = field(default_factory=list)
    architecture: ArchitectureClassification = field(default_factory=ArchitectureClassification)
    tree: str = ""
    skipped: List[str] = field(default_factory=list)  # directories whose analysis failed

    def get(self, path: str) -> Optional[DirectoryRecord]:
        """Look up the record for a relative directory path."""
        for record in self.records:
            if record.path == path:
                return record
        return None

    def purposes(self) -> Dict[str, str]:
        """Map of directory path to purpose."""
        return {r.path: r.purpose for r in self.records}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "project_path": self.project_path,
            "records": [r.to_dict() for r in self.records],
            "architecture": self.architecture.to_dict(),
            "tree": self.tree,
            "skipped": self.skipped,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StructureAnalysis":
        """Create from dictionary."""
        return cls(
            project_path=data.get("project_path", ""),
            records=[DirectoryRecord.from_dict(r) for r in data.get("records", [])],
            architecture=ArchitectureClassification.from_dict(data.get("architecture", {})),
            tree=data.get("tree", ""),
            skipped=data.get("skipped", []),
        )

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "StructureAnalysis":
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def format_summary(self) -> str:
        """Format a complete human-readable summary."""
        lines = [
            f"# Directory Structure: {self.project_path}",
            f"\nDirectories: {len(self.records)}",
        ]

        categories: Dict[str, int] = {}
        for record in self.records:
            categories[record.category] = categories.get(record.category, 0) + 1
        if categories:
            lines.append("\nDirectories by category:")
            for category, count in sorted(categories.items(), key=lambda x: (-x[1], x[0])):
                lines.append(f"  - {category}: {count}")

        if self.skipped:
            lines.append(f"\nSkipped directories: {', '.join(self.skipped)}")

        if self.tree:
            lines.append("\n```\n" + self.tree + "\n```")

        lines.append("\n" + self.architecture.format_summary())

        return "\n".join(lines)
