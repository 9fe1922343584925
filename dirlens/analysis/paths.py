"""Path helpers shared by the analyzers.

Directory paths are handled as relative, ``/``-separated strings so results do
not depend on the host platform.
"""

import os
from pathlib import Path, PurePosixPath
from typing import List, Optional, Union
import structlog

log = structlog.get_logger()

PathLike = Union[str, Path]


def normalize(path: PathLike) -> str:
    """Convert a path to ``/``-separated form without a trailing slash."""
    text = str(path).replace("\\", "/")
    while "//" in text:
        text = text.replace("//", "/")
    if len(text) > 1:
        text = text.rstrip("/")
    if text.startswith("./"):
        text = text[2:]
    return text


def relative_to(project_path: PathLike, file_path: PathLike) -> Optional[str]:
    """Path of ``file_path`` relative to the project, or None if outside it.

    Relative inputs are taken to be relative to the project already.
    """
    file_text = normalize(file_path)
    if not os.path.isabs(str(file_path)) and not file_text.startswith("/"):
        return file_text or None

    root = normalize(os.path.abspath(str(project_path)))
    absolute = normalize(os.path.abspath(str(file_path)))
    if absolute == root:
        return None
    prefix = root if root.endswith("/") else root + "/"
    if not absolute.startswith(prefix):
        return None
    return absolute[len(prefix):]


def parts(path: str) -> List[str]:
    """Non-empty segments of a relative path."""
    return [p for p in path.split("/") if p and p != "."]


def basename(path: str) -> str:
    return PurePosixPath(path).name


def dirname(path: str) -> str:
    """Parent of a relative path; ``""`` for top-level entries."""
    parent = str(PurePosixPath(path).parent)
    return "" if parent == "." else parent


def stem_and_extension(file_name: str):
    """Split ``Button.test.tsx`` into (``Button.test``, ``.tsx``)."""
    suffix = PurePosixPath(file_name).suffix
    if not suffix or suffix == file_name:
        return file_name, ""
    return file_name[: -len(suffix)], suffix.lower()


def resolve(project_path: PathLike, file_path: PathLike) -> Path:
    """Absolute location of a file given as absolute or project-relative."""
    path = Path(file_path)
    if path.is_absolute():
        return path
    return Path(project_path) / path


def read_head(path: PathLike, max_bytes: int) -> Optional[str]:
    """Read at most ``max_bytes`` of a text file, or None when unreadable."""
    try:
        with open(path, "rb") as f:
            data = f.read(max_bytes)
    except OSError as e:
        log.debug("file_unreadable", file=str(path), error=str(e))
        return None
    return data.decode("utf-8", errors="ignore")
