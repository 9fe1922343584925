"""Shallow content analysis of a directory's files.

Nothing here parses code. Each sampled file is scanned with a handful of
regular expressions; a signal seen in any file counts for the directory.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
import structlog

from dirlens.analysis import paths
from dirlens.analysis.results import ContentAnalysis
from dirlens.analysis.vocabulary import (
    AMBIGUOUS_TERM_MARKERS,
    AMBIGUOUS_TERM_PATTERNS,
    BUSINESS_TERMS,
    DEFAULT_LOCALE,
    ROLE_DIRECTORY_NAMES,
    UI_LIBRARIES,
    business_label,
    category_label,
    compose,
    content_suffix,
    is_generic_name,
)

log = structlog.get_logger()


CODE_EXTENSIONS = {".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".vue", ".svelte", ".py"}

# Role precedence when several signals fire
ROLE_ORDER = ("page", "component", "api", "utility", "model", "hook")

PAGE_PATTERNS = [
    re.compile(r"export\s+default\s+(?:async\s+)?function\s+\w*Page\s*\(", re.IGNORECASE),
    re.compile(r"\b(?:getServerSideProps|getStaticProps|getStaticPaths|generateStaticParams)\b"),
]

COMPONENT_PATTERNS = [
    re.compile(r"return\s*\(?\s*<[A-Za-z]"),
    re.compile(r"extends\s+(?:React\.)?(?:Pure)?Component\b"),
    re.compile(r"<template[\s>]"),
]

API_PATTERNS = [
    re.compile(r"\bfetch\s*\("),
    re.compile(r"\b(?:axios|http|requests|httpx|ky|got)\.(?:get|post|put|patch|delete|request)\s*\("),
    re.compile(r"\.(?:get|post|put|patch|delete)\s*\(\s*[`'\"]"),
    re.compile(r"""['"`]/api/"""),
    re.compile(r"""['"`]https?://"""),
]

MODEL_PATTERNS = [
    re.compile(r"(?:interface|type|class)\s+\w+Model\b"),
    re.compile(r"\b(?:schema|model|entity)\s*[:=]", re.IGNORECASE),
    re.compile(r"\b(?:prisma|mongoose)\b"),
    re.compile(r"\bclass\s+\w+\((?:[\w.]*BaseModel|models\.Model|Base)\)"),
    re.compile(r"\bdeclarative_base\s*\("),
]

HOOK_EXPORT = re.compile(r"export\s+(?:const|function)\s+use[A-Z]\w*")
JS_FUNCTION_EXPORT = re.compile(r"export\s+(?:async\s+)?(?:const|function)\s+\w+")
PY_FUNCTION_DEF = re.compile(r"^(?:async\s+)?def\s+[a-zA-Z]\w*\s*\(", re.MULTILINE)

UI_MARKERS = re.compile(r"react|\bvue\b|svelte")
NETWORK_MARKERS = re.compile(r"\bfetch\b|axios|\brequests\b|httpx")
STATE_HOOK_MARKERS = re.compile(r"\buse(?:State|Effect)\b")

STATIC_ASSET_MARKERS = ("/public/assets", "/public/static", "/static/")


@dataclass
class FileSignals:
    """Signals detected in one file."""
    page: bool = False
    component: bool = False
    api: bool = False
    utility: bool = False
    model: bool = False
    hook: bool = False
    ui_library: Optional[str] = None
    keywords: List[str] = field(default_factory=list)


def _business_patterns(term: str) -> List[re.Pattern]:
    escaped = re.escape(term)
    return [
        # Declarations: const userList, interface UserProfile, def user_info
        re.compile(
            r"\b(?:const|let|var|function|interface|type|class|enum|def)\s+" + escaped + r"\w*",
            re.IGNORECASE,
        ),
        # Property access: user.name
        re.compile(r"\b" + escaped + r"\.\w+", re.IGNORECASE),
        # Path-like string literals: '/api/user'
        re.compile(r"""['"`]/[^'"`\n]*""" + escaped + r"""[^'"`\n]*['"`]""", re.IGNORECASE),
        # Import paths: from './user'
        re.compile(r"""(?:from|import)[^\n]*['"]\.?/?[^'"\n]*""" + escaped + r"""[^'"\n]*['"]""",
                   re.IGNORECASE),
    ]


BUSINESS_PATTERNS: Dict[str, List[re.Pattern]] = {
    term: _business_patterns(term) for term in BUSINESS_TERMS
}

SUPPRESSION_PATTERNS: Dict[str, List[re.Pattern]] = {
    term: [re.compile(p) for p in patterns] for term, patterns in AMBIGUOUS_TERM_PATTERNS.items()
}


def detect_signals(content: str) -> FileSignals:
    """Run every detector over one file's text."""
    signals = FileSignals()

    signals.page = any(p.search(content) for p in PAGE_PATTERNS)
    signals.component = any(p.search(content) for p in COMPONENT_PATTERNS)

    for markers, library in UI_LIBRARIES:
        if any(marker in content for marker in markers):
            signals.ui_library = library
            break

    signals.api = any(p.search(content) for p in API_PATTERNS)

    exported = len(JS_FUNCTION_EXPORT.findall(content)) + len(PY_FUNCTION_DEF.findall(content))
    signals.hook = bool(HOOK_EXPORT.search(content))
    signals.utility = (
        exported >= 3
        and not signals.hook
        and not UI_MARKERS.search(content.lower())
        and not NETWORK_MARKERS.search(content)
        and not STATE_HOOK_MARKERS.search(content)
    )

    signals.model = any(p.search(content) for p in MODEL_PATTERNS)
    signals.keywords = extract_business_keywords(content)
    return signals


def extract_business_keywords(content: str) -> List[str]:
    """Business terms mentioned structurally in a file, in table order."""
    found = []
    for term in BUSINESS_TERMS:
        markers = AMBIGUOUS_TERM_MARKERS.get(term)
        if markers and any(marker in content for marker in markers):
            continue
        if any(p.search(content) for p in SUPPRESSION_PATTERNS.get(term, ())):
            continue
        if any(p.search(content) for p in BUSINESS_PATTERNS[term]):
            found.append(term)
    return found


def rank_keywords(per_file: Sequence[Sequence[str]]) -> List[str]:
    """Order keywords by the number of files mentioning them, then table order."""
    counts: Dict[str, int] = {}
    for keywords in per_file:
        for keyword in set(keywords):
            counts[keyword] = counts.get(keyword, 0) + 1
    order = {term: i for i, term in enumerate(BUSINESS_TERMS)}
    return sorted(counts, key=lambda k: (-counts[k], order.get(k, len(order))))


class FileContentAnalyzer:
    """Infers a directory's role from a bounded sample of its files."""

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        sample_size: int = 10,
        max_read_bytes: int = 65536,
    ):
        self.locale = locale
        self.sample_size = sample_size
        self.max_read_bytes = max_read_bytes

    def analyze(
        self,
        directory_path: str,
        files: Sequence[str],
        project_path: str = "",
    ) -> ContentAnalysis:
        """Analyze the direct files of one directory.

        Args:
            directory_path: Directory path relative to the project
            files: Files of the directory (relative or absolute)
            project_path: Project root used to resolve relative files

        Returns:
            ContentAnalysis; an empty purpose when nothing was detected
        """
        marker_path = f"/{paths.normalize(directory_path).lower()}/"
        if any(marker in marker_path for marker in STATIC_ASSET_MARKERS) or (
            "/assets/" in marker_path and "/public/" in marker_path
        ):
            return ContentAnalysis(
                purpose=category_label("static", self.locale),
                confidence="high",
                indicators=["static asset directory"],
            )

        sample = self._sample(files)
        combined = FileSignals()
        per_file_keywords: List[List[str]] = []

        for file_path in sample:
            content = paths.read_head(paths.resolve(project_path, file_path), self.max_read_bytes)
            if content is None:
                continue
            signals = detect_signals(content)
            combined.page |= signals.page
            combined.component |= signals.component
            combined.api |= signals.api
            combined.utility |= signals.utility
            combined.model |= signals.model
            combined.hook |= signals.hook
            combined.ui_library = combined.ui_library or signals.ui_library
            per_file_keywords.append(signals.keywords)

        keywords = rank_keywords(per_file_keywords)
        result = self._derive_purpose(directory_path, combined, keywords)

        log.debug(
            "content_analyzed",
            directory=directory_path,
            sampled=len(sample),
            role=result.role,
            confidence=result.confidence,
        )
        return result

    def _sample(self, files: Sequence[str]) -> List[str]:
        code_files = [
            f for f in files
            if paths.stem_and_extension(paths.basename(paths.normalize(f)))[1] in CODE_EXTENSIONS
        ]
        return sorted(code_files)[: self.sample_size]

    def _derive_purpose(
        self,
        directory_path: str,
        signals: FileSignals,
        keywords: List[str],
    ) -> ContentAnalysis:
        indicators = []
        if signals.ui_library:
            indicators.append(f"UI library: {signals.ui_library}")
        if keywords:
            indicators.append(f"business keywords: {', '.join(keywords)}")

        role = next((r for r in ROLE_ORDER if getattr(signals, r)), None)
        if role is None:
            if keywords:
                return ContentAnalysis(
                    purpose=business_label(keywords[0], self.locale),
                    confidence="medium",
                    indicators=indicators,
                    business_keywords=keywords,
                )
            return ContentAnalysis(indicators=indicators)

        indicators.insert(0, f"{role} signal")
        dir_name = paths.basename(directory_path)

        if keywords:
            subject = business_label(keywords[0], self.locale)
            suffix_key = f"{role}_keyword"
            suffix = content_suffix(
                suffix_key if suffix_key in ("api_keyword", "utility_keyword") else role,
                self.locale,
            )
        else:
            is_role_name = dir_name.lower() in ROLE_DIRECTORY_NAMES.get(role, ())
            subject = None if is_role_name or is_generic_name(dir_name) else dir_name
            suffix = content_suffix(role, self.locale)

        if role == "component" and signals.ui_library:
            suffix = compose(signals.ui_library, suffix)

        return ContentAnalysis(
            purpose=compose(subject, suffix),
            confidence="high",
            indicators=indicators,
            business_keywords=keywords,
            role=role,
        )
