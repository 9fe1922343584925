"""Directory structure analysis: one run over a project's file list."""

import re
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import structlog

from dirlens.analysis import paths
from dirlens.analysis.architecture import ArchitectureDetector, tag_directory
from dirlens.analysis.content import FileContentAnalyzer
from dirlens.analysis.dependencies import DependencyKeywordIndex
from dirlens.analysis.file_types import FileTypeIdentifier
from dirlens.analysis.hierarchy import HierarchyBuilder
from dirlens.analysis.resolver import DirectoryPurposeResolver
from dirlens.analysis.results import (
    CoLocation,
    DirectoryRecord,
    FileClassification,
    ModuleBoundary,
    StructureAnalysis,
)
from dirlens.analysis.vocabulary import FILE_TYPE_CATEGORIES
from dirlens.config import DirlensConfig
from dirlens.errors import classify_error

log = structlog.get_logger()


VERSION_DIRECTORY = re.compile(r"^v\d+$")
VERSION_TOKEN = re.compile(r"(?<![a-z])v\d+(?![a-z])")
ERA_NAMES = {"legacy", "old", "new", "current"}
INDEX_FILES = {"index", "__init__.py"}

NAMING_PATTERNS = (
    ("PascalCase", re.compile(r"^[A-Z][a-zA-Z0-9]+$")),
    ("camelCase", re.compile(r"^[a-z][a-zA-Z0-9]+$")),
    ("kebab-case", re.compile(r"^[a-z][a-z0-9-]+$")),
    ("snake_case", re.compile(r"^[a-z][a-z0-9_]+$")),
)


def detect_naming_pattern(files: Sequence[str]) -> str:
    """Dominant file naming convention; ``mixed`` below a 60% majority."""
    counts = {name: 0 for name, _ in NAMING_PATTERNS}
    for file_path in files:
        stem, _ = paths.stem_and_extension(paths.basename(file_path))
        for name, pattern in NAMING_PATTERNS:
            if pattern.match(stem):
                counts[name] += 1
                break

    total = sum(counts.values())
    if total == 0:
        return "mixed"
    best = max(counts, key=lambda name: counts[name])
    if counts[best] / total > 0.6:
        return best
    return "mixed"


def identify_version(directory: str, files: Sequence[str]) -> Optional[str]:
    """Version or era tag from the path segments, the name, or the file names."""
    parts = paths.parts(directory)
    for part in parts:
        if VERSION_DIRECTORY.match(part.lower()) or part.lower() in ERA_NAMES:
            return part

    match = VERSION_TOKEN.search(paths.basename(directory).lower())
    if match:
        return match.group(0)

    for file_path in sorted(files):
        match = VERSION_TOKEN.search(paths.basename(file_path).lower())
        if match:
            return match.group(0)
    return None


def _module_boundaries(project_path: str, modules: Optional[Iterable]) -> List[Tuple[str, str]]:
    boundaries = []
    for module in modules or ():
        if isinstance(module, ModuleBoundary):
            name, path = module.name, module.path
        elif isinstance(module, Mapping):
            name, path = module.get("name", ""), module.get("path", "")
        else:
            continue
        relative = paths.relative_to(project_path, path) if path else None
        if name and relative:
            boundaries.append((name, relative))
    return boundaries


class StructureAnalyzer:
    """Infers the purpose of every directory in a project."""

    def __init__(self, config: Optional[DirlensConfig] = None):
        self.config = config or DirlensConfig()
        self.file_types = FileTypeIdentifier()
        self.hierarchy = HierarchyBuilder()
        self.architecture = ArchitectureDetector()

    def analyze(
        self,
        project_path: str,
        files: Iterable[str],
        dependencies: Optional[Iterable] = None,
        modules: Optional[Iterable] = None,
    ) -> StructureAnalysis:
        """Analyze a project's directory structure.

        Args:
            project_path: Project root
            files: Absolute or project-relative file paths; files outside
                the project are ignored
            dependencies: Declared dependencies (``Dependency``, mappings or names)
            modules: Module boundaries (``ModuleBoundary`` or mappings)

        Returns:
            StructureAnalysis with one record per directory holding files
        """
        project_path = str(project_path)
        relative_files = sorted({
            rel for rel in (paths.relative_to(project_path, f) for f in files) if rel
        })
        log.info("analyzing_structure", project=project_path, files=len(relative_files))

        index = DependencyKeywordIndex.build(dependencies)
        resolver = DirectoryPurposeResolver(
            index=index,
            locale=self.config.locale,
            content_analyzer=FileContentAnalyzer(
                locale=self.config.locale,
                sample_size=self.config.content_sample_size,
                max_read_bytes=self.config.max_read_bytes,
            ),
            confirm_sample=self.config.dependency_confirm_sample,
            max_read_bytes=self.config.max_read_bytes,
        )
        classifications = self.file_types.classify_many(relative_files)
        boundaries = _module_boundaries(project_path, modules)

        direct_files: Dict[str, List[str]] = defaultdict(list)
        total_counts: Dict[str, int] = defaultdict(int)
        for file_path in relative_files:
            directory = paths.dirname(file_path)
            if not directory:
                continue
            direct_files[directory].append(file_path)
            parts = paths.parts(directory)
            for depth in range(1, len(parts) + 1):
                total_counts["/".join(parts[:depth])] += 1

        directories = sorted(total_counts)
        children: Dict[str, List[str]] = defaultdict(list)
        for directory in directories:
            children[paths.dirname(directory)].append(paths.basename(directory))

        records: List[DirectoryRecord] = []
        skipped: List[str] = []
        for directory in directories:
            name = paths.basename(directory)
            siblings = [s for s in children[paths.dirname(directory)] if s != name]
            try:
                record = self._build_record(
                    directory,
                    direct_files.get(directory, []),
                    total_counts[directory],
                    classifications,
                    siblings,
                    boundaries,
                    resolver,
                    project_path,
                )
            except Exception as e:
                classified = classify_error(e, context=directory)
                log.warning(
                    "directory_analysis_failed",
                    directory=directory,
                    category=classified.category.value,
                    error=classified.message,
                )
                skipped.append(directory)
                continue
            records.append(record)

        records = self.hierarchy.build(records)
        tree = self.hierarchy.render_tree(
            records, root_name=Path(project_path).name or project_path, locale=self.config.locale
        )
        architecture = self.architecture.detect(records, relative_files)

        log.info(
            "structure_analysis_complete",
            directories=len(records),
            skipped=len(skipped),
            pattern=architecture.type,
        )
        return StructureAnalysis(
            project_path=project_path,
            records=records,
            architecture=architecture,
            tree=tree,
            skipped=skipped,
        )

    def _build_record(
        self,
        directory: str,
        files: List[str],
        total_count: int,
        classifications: Dict[str, FileClassification],
        siblings: List[str],
        boundaries: List[Tuple[str, str]],
        resolver: DirectoryPurposeResolver,
        project_path: str,
    ) -> DirectoryRecord:
        distribution = self._distribution(files, classifications)
        primary_types = self._primary_types(distribution, len(files))

        ctx = resolver.context(
            directory,
            files=files,
            distribution=distribution,
            primary_types=primary_types,
            siblings=siblings,
            project_path=project_path,
        )
        resolution = resolver.resolve(ctx)

        categories = {classifications[f].category for f in files if f in classifications}
        return DirectoryRecord(
            path=directory,
            purpose=resolution.purpose,
            category=resolver.category_for(resolution, primary_types),
            file_type_distribution=distribution,
            primary_file_types=primary_types,
            naming_pattern=detect_naming_pattern(files),
            co_location=CoLocation(
                styles="style" in categories,
                tests="test" in categories,
                types="type" in categories,
            ),
            has_index_files=any(
                paths.stem_and_extension(paths.basename(f))[0] in INDEX_FILES
                or paths.basename(f) in INDEX_FILES
                for f in files
            ),
            file_count=len(files),
            total_file_count=total_count,
            architecture_pattern=tag_directory(directory, distribution),
            depth=len(paths.parts(directory)),
            module=self._module_for(directory, boundaries),
            version=identify_version(directory, files),
            resolved_by=resolution.stage,
        )

    @staticmethod
    def _distribution(files: List[str], classifications: Dict[str, FileClassification]) -> Dict[str, int]:
        counts: Dict[str, int] = defaultdict(int)
        for file_path in files:
            classification = classifications.get(file_path)
            counts[classification.category if classification else "other"] += 1
        return {c: counts[c] for c in FILE_TYPE_CATEGORIES if counts.get(c)}

    def _primary_types(self, distribution: Dict[str, int], total: int) -> List[str]:
        """Categories holding at least the configured share of the direct files."""
        if total == 0:
            return []
        threshold = total * self.config.primary_type_threshold
        order = {c: i for i, c in enumerate(FILE_TYPE_CATEGORIES)}
        primary = [c for c, count in distribution.items() if count >= threshold]
        return sorted(primary, key=lambda c: (-distribution[c], order[c]))

    @staticmethod
    def _module_for(directory: str, boundaries: List[Tuple[str, str]]) -> Optional[str]:
        best: Optional[Tuple[str, str]] = None
        for name, path in boundaries:
            if directory == path or directory.startswith(path + "/"):
                if best is None or len(path) > len(best[1]):
                    best = (name, path)
        return best[0] if best else None
