"""Dependency keyword matching for directory names."""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import structlog

from dirlens.analysis import paths
from dirlens.analysis.results import Dependency
from dirlens.analysis.vocabulary import (
    DEFAULT_LOCALE,
    DEPENDENCY_RULES,
    dependency_display,
    phrase,
)

log = structlog.get_logger()


@dataclass(frozen=True)
class DependencyEntry:
    """An activated dependency and the directory keywords it implies."""
    name: str
    keywords: Tuple[str, ...]
    role: Optional[str] = None


@dataclass(frozen=True)
class DependencyRelation:
    """Outcome of matching a directory against the declared dependencies."""
    is_related: bool = False
    dependency_name: Optional[str] = None
    purpose: Optional[str] = None
    role: Optional[str] = None
    confirmed: bool = False  # an import of the dependency was seen in the directory


def dependency_names(dependencies: Optional[Iterable]) -> Tuple[str, ...]:
    """Lowercased, de-duplicated dependency names in declaration order.

    Accepts ``Dependency`` records, mappings with a ``name`` key, or strings.
    """
    names: List[str] = []
    seen = set()
    for dep in dependencies or ():
        if isinstance(dep, Dependency):
            name = dep.name
        elif isinstance(dep, Mapping):
            name = dep.get("name", "")
        else:
            name = str(dep)
        name = (name or "").strip().lower()
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return tuple(names)


def name_forms(dependency_name: str) -> Tuple[str, ...]:
    """Directory-name spellings of a package name.

    ``@mui/material`` -> (``@mui/material``, ``material``, ``mui-material``)
    """
    name = dependency_name.lower()
    forms = [name]
    if "/" in name:
        forms.append(name.rsplit("/", 1)[-1])
    dashed = re.sub(r"[@/]+", "-", name).strip("-")
    forms.append(dashed)
    unique = []
    for form in forms:
        if form and form not in unique:
            unique.append(form)
    return tuple(unique)


def keyword_matches(dir_name: str, keyword: str) -> bool:
    """Exact, plural, prefix, suffix or embedded hyphen-segment match."""
    return (
        dir_name == keyword
        or dir_name == f"{keyword}s"
        or dir_name.startswith(f"{keyword}-")
        or dir_name.endswith(f"-{keyword}")
        or f"-{keyword}-" in dir_name
    )


def declared_name_match(dir_name: str, dependency_name: str) -> Optional[str]:
    """Spelling of a declared package that names the directory, if any.

    The full name and a scoped package's base name must match exactly; the
    dashed form of a scoped name may appear anywhere in the directory name.
    """
    name = dependency_name.lower()
    base = name.rsplit("/", 1)[-1]
    if dir_name in (name, base):
        return dir_name
    if "/" in name:
        dashed = re.sub(r"[@/]+", "-", name).strip("-")
        if dashed in dir_name:
            return dashed
    return None


class DependencyKeywordIndex:
    """Immutable map of activated dependencies to directory keywords.

    Built once per run from the declared dependency list; iteration order is
    registration order, which decides ties.
    """

    def __init__(self, entries: Mapping[str, DependencyEntry], declared: Sequence[str] = ()):
        self._entries = MappingProxyType(dict(entries))
        self._declared = tuple(declared)

    @classmethod
    def build(cls, dependencies: Optional[Iterable]) -> "DependencyKeywordIndex":
        """Activate every curated rule whose package is declared."""
        declared = dependency_names(dependencies)
        declared_set = set(declared)

        entries: Dict[str, DependencyEntry] = {}
        for rule in DEPENDENCY_RULES:
            for package in rule.packages:
                if package not in declared_set:
                    continue
                existing = entries.get(package)
                if existing:
                    entries[package] = DependencyEntry(
                        name=package,
                        keywords=existing.keywords + rule.keywords,
                        role=existing.role,
                    )
                else:
                    entries[package] = DependencyEntry(
                        name=package, keywords=rule.keywords, role=rule.role
                    )

        log.debug(
            "dependency_index_built",
            declared=len(declared),
            activated=list(entries),
        )
        return cls(entries, declared)

    @classmethod
    def empty(cls) -> "DependencyKeywordIndex":
        return cls({}, ())

    @property
    def entries(self) -> Mapping[str, DependencyEntry]:
        return self._entries

    @property
    def declared(self) -> Tuple[str, ...]:
        return self._declared

    def get(self, name: str) -> Optional[DependencyEntry]:
        return self._entries.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._declared)


class DependencyMatcher:
    """Decides whether a directory is the conventional home of a dependency."""

    def __init__(
        self,
        index: DependencyKeywordIndex,
        locale: str = DEFAULT_LOCALE,
        confirm_sample: int = 5,
        max_read_bytes: int = 65536,
    ):
        self.index = index
        self.locale = locale
        self.confirm_sample = confirm_sample
        self.max_read_bytes = max_read_bytes

    def check_relation(
        self,
        directory_path: str,
        directory_files: Sequence[str] = (),
        project_path: str = "",
    ) -> DependencyRelation:
        """Match the directory's own basename against the index.

        Ancestors are never considered. A basename match stands on its own;
        reading the files only sets ``confirmed``.
        """
        if not self.index:
            return DependencyRelation()

        dir_name = paths.basename(directory_path).lower()
        match = self._match_name(dir_name)
        if match is None:
            return DependencyRelation()

        dependency, keyword, role = match
        confirmed = self.confirm_by_content(dependency, directory_files, project_path)
        purpose = self.generate_purpose(dependency, dir_name, keyword)

        log.debug(
            "directory_matches_dependency",
            directory=directory_path,
            dependency=dependency,
            keyword=keyword,
            confirmed=confirmed,
        )
        return DependencyRelation(
            is_related=True,
            dependency_name=dependency,
            purpose=purpose,
            role=role,
            confirmed=confirmed,
        )

    def _match_name(self, dir_name: str) -> Optional[Tuple[str, str, Optional[str]]]:
        for entry in self.index.entries.values():
            for keyword in entry.keywords:
                if keyword_matches(dir_name, keyword.lower()):
                    return entry.name, keyword.lower(), entry.role

        # Directories named after any declared package
        for declared in self.index.declared:
            form = declared_name_match(dir_name, declared)
            if form:
                entry = self.index.get(declared)
                return declared, form, entry.role if entry else None

        return None

    def confirm_by_content(
        self,
        dependency: str,
        files: Sequence[str],
        project_path: str = "",
    ) -> bool:
        """Look for an import of the dependency in a small sample of files."""
        js_import = re.compile(
            r"""(?:from|import|require\()\s*['"]"""
            + re.escape(dependency)
            + r"""(?:/[^'"]*)?['"]"""
        )
        py_import = re.compile(
            r"^\s*(?:from|import)\s+" + re.escape(dependency.replace("-", "_")) + r"\b",
            re.MULTILINE,
        )

        for file_path in list(files)[: self.confirm_sample]:
            content = paths.read_head(paths.resolve(project_path, file_path), self.max_read_bytes)
            if content is None:
                continue
            if js_import.search(content) or py_import.search(content):
                return True

        return False

    def generate_purpose(self, dependency: str, dir_name: str, keyword: str) -> str:
        """Display purpose, qualified when the folder is more than the dependency."""
        display = dependency_display(dependency, self.locale)

        if dir_name in name_forms(dependency) or dir_name in (keyword, f"{keyword}s"):
            return display

        submodule = _strip_keyword(dir_name, keyword) or dir_name
        return phrase("submodule", self.locale, display=display, name=submodule)


def _strip_keyword(dir_name: str, keyword: str) -> str:
    """Remove the hyphen segments spelling ``keyword`` from ``dir_name``."""
    segments = dir_name.split("-")
    needle = keyword.split("-")
    width = len(needle)
    for start in range(len(segments) - width + 1):
        if segments[start:start + width] == needle:
            return "-".join(segments[:start] + segments[start + width:])
    return dir_name
