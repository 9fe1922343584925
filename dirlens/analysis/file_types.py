"""File type identification from filename and path conventions."""

import re
from typing import Dict, Iterable, List, Optional, Tuple
import structlog

from dirlens.analysis import paths
from dirlens.analysis.results import FileClassification

log = structlog.get_logger()


STYLE_EXTENSIONS = {".css", ".scss", ".sass", ".less", ".styl"}
MARKUP_EXTENSIONS = {".tsx", ".jsx", ".vue", ".svelte"}
SCRIPT_EXTENSIONS = {".ts", ".js", ".mjs", ".cjs"}
CODE_EXTENSIONS = SCRIPT_EXTENSIONS | MARKUP_EXTENSIONS | {".py"}

TEST_SEGMENTS = {"__tests__", "__test__", "tests", "test"}
CONFIG_SEGMENTS = {"config", "configs"}
TYPE_SEGMENTS = {"types", "@types", "interfaces", "typings"}
PAGE_SEGMENTS = {"pages", "app", "views", "screens"}
LAYOUT_SEGMENTS = {"layouts"}
HOOK_SEGMENTS = {"hooks"}
ROUTE_SEGMENTS = {"routes", "route", "routers", "router"}
MIDDLEWARE_SEGMENTS = {"middleware", "middlewares"}
CONTROLLER_SEGMENTS = {"controllers", "controller"}
MODEL_SEGMENTS = {"models", "model", "entities", "entity"}
REPOSITORY_SEGMENTS = {"repositories", "repository", "repo"}
SERVICE_SEGMENTS = {"services", "service", "api", "apis"}
UTILITY_SEGMENTS = {"utils", "utilities", "helpers", "helper", "lib", "libs"}

HOOK_NAME = re.compile(r"^use(?:[A-Z0-9]|-[a-z])")
PYTHON_TEST_NAME = re.compile(r"^(?:test_.+|.+_test|conftest)$")
API_NAME = re.compile(r"(?:^|[._-])api(?:[._-]|$)|[a-z]Api$")
PASCAL_CASE = re.compile(r"^[A-Z][a-zA-Z0-9]+$")
CAMEL_CASE = re.compile(r"^[a-z][a-zA-Z0-9]+$")
KEBAB_CASE = re.compile(r"^[a-z][a-z0-9-]+$")

# Nearest directory name fragment -> category
DIRECTORY_NAME_HINTS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("component",), "component"),
    (("page", "view"), "page"),
    (("hook",), "hook"),
    (("util", "helper"), "utility"),
    (("service",), "service"),
    (("type", "interface"), "type"),
    (("model", "entity", "entities"), "model"),
    (("controller",), "controller"),
    (("repository", "repositories"), "repository"),
    (("route", "router"), "route"),
    (("middleware",), "middleware"),
    (("layout",), "layout"),
)


class FileTypeIdentifier:
    """Classifies files into a fixed category set without reading them."""

    def classify(self, file_path: str) -> FileClassification:
        """Classify one file from its project-relative path."""
        rel_path = paths.normalize(file_path)
        file_name = paths.basename(rel_path)
        dir_segments = [s.lower() for s in paths.parts(paths.dirname(rel_path))]
        stem, extension = paths.stem_and_extension(file_name)

        result = self._classify_by_convention(file_name, stem, extension, dir_segments)
        if result:
            return result

        result = self._classify_by_naming(stem, extension)
        if result:
            return result

        result = self._classify_by_directory_name(dir_segments)
        if result:
            return result

        return FileClassification(category="other", confidence="low")

    def classify_many(self, files: Iterable[str]) -> Dict[str, FileClassification]:
        """Classify a batch of files; a failure yields ``other``."""
        results: Dict[str, FileClassification] = {}
        for file_path in files:
            try:
                results[file_path] = self.classify(file_path)
            except Exception as e:
                log.debug("file_type_failed", file=file_path, error=str(e))
                results[file_path] = FileClassification(
                    category="other",
                    confidence="low",
                    indicators=["classification failed"],
                )
        return results

    def _classify_by_convention(
        self,
        file_name: str,
        stem: str,
        extension: str,
        segments: List[str],
    ) -> Optional[FileClassification]:
        lower = stem.lower()
        segment_set = set(segments)

        def hit(category: str, indicator: str, confidence: str = "high") -> FileClassification:
            return FileClassification(category=category, confidence=confidence, indicators=[indicator])

        # Tests
        if ".test." in file_name or ".spec." in file_name:
            return hit("test", "test file suffix")
        if extension == ".py" and PYTHON_TEST_NAME.match(stem):
            return hit("test", "pytest file naming")
        if segment_set & TEST_SEGMENTS:
            return hit("test", "inside a test directory")

        if extension in STYLE_EXTENSIONS:
            return hit("style", f"style extension: {extension}")

        # Configuration
        if (
            file_name.startswith(".")
            or lower in ("config", "settings")
            or "config." in file_name
            or lower.endswith(".config")
            or segment_set & CONFIG_SEGMENTS
        ):
            return hit("config", "configuration file name or location")

        is_script = extension in SCRIPT_EXTENSIONS or extension in MARKUP_EXTENSIONS

        if is_script and HOOK_NAME.match(stem):
            return hit("hook", "hook naming convention (useXxx)")
        if extension in SCRIPT_EXTENSIONS and segment_set & HOOK_SEGMENTS:
            return hit("hook", "inside a hooks directory")

        if extension in SCRIPT_EXTENSIONS or extension == ".py":
            if (
                file_name.endswith(".d.ts")
                or lower in ("types", "type", "interfaces", "interface", "typings")
                or lower.endswith((".types", ".type", ".interface", ".d"))
                or segment_set & TYPE_SEGMENTS
            ):
                return hit("type", "type definition name or location")
            if "enum" in lower or re.match(r"^[A-Z][a-zA-Z]*Enum$", stem):
                return hit("type", "enum file naming")
            if "constant" in lower or lower in ("const", "consts") or (
                stem.isupper() and any(c.isalpha() for c in stem)
            ):
                return hit("config", "constants file naming")

        if extension in MARKUP_EXTENSIONS:
            if lower == "layout" or "Layout" in stem:
                return hit("layout", "layout file naming")
            if segment_set & PAGE_SEGMENTS or lower == "page" or stem.endswith("Page"):
                return hit("page", "page file location or naming")
            if segment_set & LAYOUT_SEGMENTS:
                return hit("layout", "inside a layouts directory")
            return hit("component", f"component extension: {extension}")

        if "route" in lower or segment_set & ROUTE_SEGMENTS:
            return hit("route", "route file naming or location")
        if "middleware" in lower or segment_set & MIDDLEWARE_SEGMENTS:
            return hit("middleware", "middleware file naming or location")
        if "controller" in lower or segment_set & CONTROLLER_SEGMENTS:
            return hit("controller", "controller file naming or location")
        if "model" in lower or segment_set & MODEL_SEGMENTS:
            return hit("model", "model file naming or location")
        if "repository" in lower or lower.endswith("repo") or segment_set & REPOSITORY_SEGMENTS:
            return hit("repository", "repository file naming or location")
        if "service" in lower or API_NAME.search(stem) or segment_set & SERVICE_SEGMENTS:
            return hit("service", "service/API file naming or location")

        if extension in CODE_EXTENSIONS and segment_set & UTILITY_SEGMENTS:
            return hit("utility", "inside a utility directory", confidence="medium")

        return None

    def _classify_by_naming(self, stem: str, extension: str) -> Optional[FileClassification]:
        if extension not in SCRIPT_EXTENSIONS:
            return None

        if PASCAL_CASE.match(stem):
            return FileClassification(
                category="type", confidence="medium", indicators=["PascalCase script file"]
            )
        if CAMEL_CASE.match(stem) or KEBAB_CASE.match(stem):
            return FileClassification(
                category="utility", confidence="medium", indicators=["camelCase/kebab-case function module"]
            )
        return None

    def _classify_by_directory_name(self, segments: List[str]) -> Optional[FileClassification]:
        if not segments:
            return None

        dir_name = segments[-1]
        tokens = set(re.split(r"[-_.]", dir_name))
        if "api" in tokens or "apis" in tokens:
            return FileClassification(
                category="service", confidence="medium", indicators=[f"API directory: {dir_name}"]
            )

        for fragments, category in DIRECTORY_NAME_HINTS:
            if any(fragment in dir_name for fragment in fragments):
                return FileClassification(
                    category=category,
                    confidence="medium",
                    indicators=[f"{category} directory: {dir_name}"],
                )
        return None
