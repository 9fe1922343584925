"""Project inputs: the file list and the declared dependencies."""

import json
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional
import structlog
import toml

from dirlens.analysis.results import Dependency, ModuleBoundary

log = structlog.get_logger()

__all__ = ["Dependency", "ModuleBoundary", "collect_files", "read_dependencies"]


PACKAGE_JSON_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")

# "requests>=2.0 ; python_version < '3.8'" -> name "requests", version ">=2.0"
REQUIREMENT_LINE = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)(?:\[[^\]]*\])?\s*([^;#]*)")


def collect_files(root: str, exclude_dirs: Optional[Iterable[str]] = None) -> List[str]:
    """All files below ``root`` as sorted absolute paths.

    Hidden directories and directories named in ``exclude_dirs`` are not
    entered.
    """
    excluded = set(exclude_dirs or ())
    root_path = Path(root).resolve()
    files: List[str] = []

    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and d not in excluded
        )
        for filename in filenames:
            files.append(str(Path(dirpath) / filename))

    files.sort()
    log.info("files_collected", root=str(root_path), count=len(files))
    return files


def read_dependencies(root: str) -> List[Dependency]:
    """Dependencies declared in the manifests at ``root``, de-duplicated in order.

    Reads ``package.json``, ``pyproject.toml`` (PEP 621 and Poetry) and
    ``requirements*.txt``. A manifest that cannot be parsed is logged and
    skipped.
    """
    root_path = Path(root)
    found: List[Dependency] = []

    package_json = root_path / "package.json"
    if package_json.is_file():
        found.extend(_read_package_json(package_json))

    pyproject = root_path / "pyproject.toml"
    if pyproject.is_file():
        found.extend(_read_pyproject(pyproject))

    for requirements in sorted(root_path.glob("requirements*.txt")):
        found.extend(_read_requirements(requirements))

    unique: List[Dependency] = []
    seen = set()
    for dep in found:
        key = dep.name.lower()
        if key not in seen:
            seen.add(key)
            unique.append(dep)

    log.info("dependencies_read", root=str(root_path), count=len(unique))
    return unique


def _read_package_json(path: Path) -> List[Dependency]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("manifest_unreadable", path=str(path), error=str(e))
        return []

    deps = []
    for section in PACKAGE_JSON_SECTIONS:
        for name, version in (data.get(section) or {}).items():
            deps.append(Dependency(name=name, version=str(version)))
    return deps


def _read_pyproject(path: Path) -> List[Dependency]:
    try:
        data = toml.load(path)
    except (OSError, ValueError) as e:
        log.warning("manifest_unreadable", path=str(path), error=str(e))
        return []

    deps = []
    project = data.get("project", {})
    requirements = list(project.get("dependencies", []))
    for extra in project.get("optional-dependencies", {}).values():
        requirements.extend(extra)
    for requirement in requirements:
        dep = _parse_requirement(requirement)
        if dep:
            deps.append(dep)

    poetry = data.get("tool", {}).get("poetry", {})
    poetry_tables = [poetry.get("dependencies", {}), poetry.get("dev-dependencies", {})]
    for group in poetry.get("group", {}).values():
        poetry_tables.append(group.get("dependencies", {}))
    for table in poetry_tables:
        for name, spec in table.items():
            if name.lower() == "python":
                continue
            version = spec.get("version", "") if isinstance(spec, dict) else str(spec)
            deps.append(Dependency(name=name, version=version))
    return deps


def _read_requirements(path: Path) -> List[Dependency]:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        log.warning("manifest_unreadable", path=str(path), error=str(e))
        return []

    deps = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "-")):
            continue
        dep = _parse_requirement(stripped)
        if dep:
            deps.append(dep)
    return deps


def _parse_requirement(requirement: str) -> Optional[Dependency]:
    match = REQUIREMENT_LINE.match(requirement)
    if not match:
        return None
    return Dependency(name=match.group(1), version=match.group(2).strip())
