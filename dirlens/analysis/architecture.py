"""Architecture pattern detection for projects."""

from collections import defaultdict
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import structlog

from dirlens.analysis import paths
from dirlens.analysis.results import ArchitectureClassification, DirectoryRecord, VersionIsolation
from dirlens.analysis.vocabulary import CATEGORY_SYNONYMS

log = structlog.get_logger()


MONOREPO_FILES = {
    "pnpm-workspace.yaml",
    "lerna.json",
    "nx.json",
    "turbo.json",
    "rush.json",
    "go.work",
}
MONOREPO_ROOTS = {"packages", "apps"}

# Clean architecture layers, in display order
CLEAN_LAYERS = ("presentation", "application", "domain", "infrastructure")

FEATURE_ROOTS = {"features", "feature", "modules"}
DOMAIN_DRIVEN_NAMES = {"domain", "domains", "entities", "entity", "aggregates", "aggregate"}

COMPOSE_FILES = {"docker-compose.yml", "docker-compose.yaml", "compose.yml", "compose.yaml"}


def tag_directory(path: str, distribution: Dict[str, int]) -> Optional[str]:
    """Architecture style a single directory belongs to, if any."""
    parts = [p.lower() for p in paths.parts(path)]
    name = parts[-1] if parts else ""

    if set(parts) & set(CLEAN_LAYERS):
        return "clean-architecture"
    if "features" in parts or "modules" in parts or "feature" in name:
        return "feature-based"
    if (
        set(parts) & {"models", "views", "controllers"}
        and distribution.get("model", 0) > 0
        and distribution.get("controller", 0) > 0
    ):
        return "mvc"
    if set(parts) & DOMAIN_DRIVEN_NAMES:
        return "domain-driven"
    if "layers" in parts or ("presentation" in parts and "business" in parts):
        return "layered"
    return None


def detect_version_isolation(records: Sequence[DirectoryRecord]) -> VersionIsolation:
    """How versions are kept side by side: directory, prefix or suffix."""
    versions: List[str] = []
    has_directory = has_prefix = has_suffix = False

    for record in records:
        if not record.version:
            continue
        if record.version not in versions:
            versions.append(record.version)

        parts = paths.parts(record.path)
        if record.version in parts:
            has_directory = True
        elif record.name.startswith(record.version):
            has_prefix = True
        elif record.name.endswith(record.version):
            has_suffix = True

    if has_directory:
        pattern = "directory"
    elif has_prefix:
        pattern = "prefix"
    elif has_suffix:
        pattern = "suffix"
    else:
        pattern = "none"

    return VersionIsolation(has_versioning=bool(versions), versions=versions, pattern=pattern)


class ArchitectureDetector:
    """Classifies a whole project from its directory records.

    Detectors run in priority order. The first positive one decides the type;
    every positive one adds its indicators.
    """

    def detect(
        self,
        records: Sequence[DirectoryRecord],
        files: Sequence[str] = (),
    ) -> ArchitectureClassification:
        """Classify the project.

        Args:
            records: Directory records of the project
            files: Project-relative file paths

        Returns:
            ArchitectureClassification
        """
        detectors: List[Tuple[str, str, Callable[[], List[str]]]] = [
            ("monorepo", "high", lambda: self._check_monorepo(records, files)),
            ("clean-architecture", "high", lambda: self._check_clean_architecture(records)),
            ("feature-based", "high", lambda: self._check_feature_based(records)),
            ("mvc", "medium", lambda: self._check_mvc(records)),
            ("domain-driven", "high", lambda: self._check_domain_driven(records)),
            ("microservices", "high", lambda: self._check_microservices(files)),
        ]

        result = ArchitectureClassification()
        for pattern, confidence, detector in detectors:
            indicators = detector()
            if not indicators:
                continue
            if result.type == "unknown":
                result.type = pattern
                result.confidence = confidence
            result.indicators.extend(indicators)

        result.layer_structure = self._build_layer_structure(records)
        result.feature_structure = self._build_feature_structure(records)
        result.version_isolation = detect_version_isolation(records)

        log.info(
            "architecture_detected",
            pattern=result.type,
            confidence=result.confidence,
            indicators=len(result.indicators),
        )
        return result

    def _check_monorepo(self, records: Sequence[DirectoryRecord], files: Sequence[str]) -> List[str]:
        indicators = []
        workspace_files = sorted({
            paths.basename(paths.normalize(f)) for f in files
            if paths.basename(paths.normalize(f)) in MONOREPO_FILES
        })
        if workspace_files:
            indicators.append(f"workspace files: {', '.join(workspace_files)}")

        roots = sorted(r.path for r in records if r.path in MONOREPO_ROOTS)
        if roots:
            indicators.append(f"top-level package directories: {', '.join(roots)}")
        return indicators

    def _check_clean_architecture(self, records: Sequence[DirectoryRecord]) -> List[str]:
        names = {r.name.lower() for r in records}
        layers = [layer for layer in CLEAN_LAYERS if layer in names]
        if len(layers) >= 2:
            return [f"clean architecture layers: {', '.join(layers)}"]
        return []

    def _check_feature_based(self, records: Sequence[DirectoryRecord]) -> List[str]:
        feature_dirs = [
            r.path for r in records
            if r.name.lower() in FEATURE_ROOTS or "feature" in r.name.lower()
        ]
        if feature_dirs:
            return [f"feature directories: {', '.join(feature_dirs)}"]
        return []

    def _check_mvc(self, records: Sequence[DirectoryRecord]) -> List[str]:
        categories = {CATEGORY_SYNONYMS.get(r.name.lower()) for r in records}
        if "model" in categories and "controller" in categories:
            return ["model and controller directories"]
        return []

    def _check_domain_driven(self, records: Sequence[DirectoryRecord]) -> List[str]:
        found = sorted({r.name.lower() for r in records if r.name.lower() in DOMAIN_DRIVEN_NAMES})
        if found:
            return [f"domain-driven directories: {', '.join(found)}"]
        return []

    def _check_microservices(self, files: Sequence[str]) -> List[str]:
        normalized = [paths.normalize(f) for f in files]
        has_compose = any(paths.basename(f) in COMPOSE_FILES for f in normalized)
        docker_dirs = {
            paths.dirname(f) for f in normalized
            if paths.basename(f) == "Dockerfile" or paths.basename(f).startswith("Dockerfile.")
        }
        if has_compose and len(docker_dirs) >= 2:
            return [f"compose file with Dockerfiles in {len(docker_dirs)} directories"]
        return []

    def _build_layer_structure(self, records: Sequence[DirectoryRecord]) -> Dict[str, List[str]]:
        layers: Dict[str, List[str]] = defaultdict(list)
        for record in records:
            parts = [p.lower() for p in paths.parts(record.path)]
            for layer in CLEAN_LAYERS:
                if layer in parts:
                    layers[layer].append(record.path)
        return {layer: layers[layer] for layer in CLEAN_LAYERS if layers.get(layer)}

    def _build_feature_structure(self, records: Sequence[DirectoryRecord]) -> Dict[str, List[str]]:
        features: List[str] = []
        shared: List[str] = []
        for record in records:
            parts = [p.lower() for p in paths.parts(record.path)]
            if not ("features" in parts[:-1] or "modules" in parts[:-1]):
                continue
            if record.category == "shared":
                shared.append(record.path)
            else:
                features.append(record.path)

        structure: Dict[str, List[str]] = {}
        if features:
            structure["features"] = features
        if shared:
            structure["shared"] = shared
        return structure
