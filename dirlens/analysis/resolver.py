"""Directory purpose resolution.

The resolver runs an ordered tuple of stage functions over a
``ResolutionContext``. Each stage returns a ``Resolution`` or None; the first
result wins and later stages never run.

    special_path -> container -> dependency -> category -> business
        -> inheritance -> fallback
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import structlog

from dirlens.analysis.content import FileContentAnalyzer
from dirlens.analysis.dependencies import DependencyKeywordIndex, DependencyMatcher
from dirlens.analysis.results import ContentAnalysis
from dirlens.analysis.siblings import SiblingPatternAnalyzer
from dirlens.analysis.vocabulary import (
    CATEGORY_SYNONYMS,
    CONTAINER_NAMES,
    DEFAULT_LOCALE,
    FUNCTION_WORD_ORDER,
    MEANINGLESS_NAMES,
    NAMED_FILE_TYPE_PURPOSES,
    PARENT_FUNCTION_WORDS,
    ROLE_CATEGORIES,
    SPECIAL_PATHS,
    SpecialPath,
    category_label,
    compose,
    is_generic_name,
    phrase,
)

log = structlog.get_logger()


@dataclass(frozen=True)
class Resolution:
    """Purpose produced by one cascade stage."""
    purpose: str
    stage: str
    role: Optional[str] = None  # canonical id used to derive the directory category


@dataclass
class ResolutionContext:
    """Everything a stage may look at for one directory."""

    path: str
    files: List[str] = field(default_factory=list)  # direct files, project-relative
    distribution: Dict[str, int] = field(default_factory=dict)
    primary_types: List[str] = field(default_factory=list)
    siblings: List[str] = field(default_factory=list)  # sibling basenames, self excluded
    project_path: str = ""
    locale: str = DEFAULT_LOCALE
    matcher: Optional[DependencyMatcher] = None
    content_analyzer: Optional[FileContentAnalyzer] = None

    _content: Optional[ContentAnalysis] = field(default=None, init=False, repr=False)

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def parts(self) -> List[str]:
        return [p for p in self.path.split("/") if p]

    def content(self) -> ContentAnalysis:
        """Content analysis, computed at most once per directory."""
        if self._content is None:
            if self.content_analyzer is None:
                self._content = ContentAnalysis()
            else:
                self._content = self.content_analyzer.analyze(self.path, self.files, self.project_path)
        return self._content


Stage = Callable[[ResolutionContext], Optional[Resolution]]


def category_key(name: str) -> Optional[str]:
    """Canonical category id of a directory name, if it is a synonym."""
    return CATEGORY_SYNONYMS.get(name.lower())


def nearest_meaningful_ancestor(ctx: ResolutionContext) -> Optional[str]:
    """Closest ancestor name, skipping meaningless names such as ``src``."""
    for ancestor in reversed(ctx.parts[:-1]):
        if ancestor.lower() not in MEANINGLESS_NAMES:
            return ancestor
    return None


def nearest_category_ancestor(ctx: ResolutionContext) -> Optional[Tuple[str, str]]:
    """Closest ancestor that is a category synonym, as (name, category id)."""
    for ancestor in reversed(ctx.parts[:-1]):
        if ancestor.lower() in MEANINGLESS_NAMES:
            continue
        key = category_key(ancestor)
        if key:
            return ancestor, key
    return None


def function_word(ctx: ResolutionContext, parent_key: Optional[str] = None) -> Tuple[Optional[str], Optional[str]]:
    """Function word for a compound purpose, as (label, role).

    Taken from the dominant file types; failing that, from the parent's
    category.
    """
    for file_type in FUNCTION_WORD_ORDER:
        if file_type in ctx.primary_types:
            return category_label(file_type, ctx.locale), file_type
    if parent_key:
        key = PARENT_FUNCTION_WORDS.get(parent_key, parent_key)
        return category_label(key, ctx.locale), parent_key
    return None, None


def compound(ctx: ResolutionContext, name: str, parent_key: Optional[str], stage: str) -> Resolution:
    word, role = function_word(ctx, parent_key)
    if not word:
        return Resolution(purpose=name, stage=stage, role=parent_key)
    return Resolution(purpose=phrase("compound", ctx.locale, name=name, word=word), stage=stage, role=role)


# Stages


def _special_path_matches(rule: SpecialPath, ctx: ResolutionContext) -> bool:
    name = ctx.name.lower()
    if name in rule.names:
        return True
    if rule.name_fragment and rule.name_fragment in name and rule.requires_extension:
        if any(f.lower().endswith(rule.requires_extension) for f in ctx.files):
            return True

    marker = f"/{ctx.path.lower()}/"
    if any(segment in marker for segment in rule.path_segments):
        return True
    if rule.path_fragments:
        position = 0
        for fragment in rule.path_fragments:
            found = marker.find(fragment, position)
            if found < 0:
                return False
            position = found + len(fragment) - 1
        return True
    return False


def special_path_stage(ctx: ResolutionContext) -> Optional[Resolution]:
    """Protocol, mock, public script and public asset folders."""
    for rule in SPECIAL_PATHS:
        if _special_path_matches(rule, ctx):
            return Resolution(category_label(rule.key, ctx.locale), "special_path_stage")
    return None


def container_stage(ctx: ResolutionContext) -> Optional[Resolution]:
    """Structural containers get an empty purpose."""
    if ctx.name.lower() in CONTAINER_NAMES:
        return Resolution("", "container_stage")
    return None


def dependency_stage(ctx: ResolutionContext) -> Optional[Resolution]:
    """Directories named after a declared dependency's convention."""
    if ctx.matcher is None:
        return None
    relation = ctx.matcher.check_relation(ctx.path, ctx.files, ctx.project_path)
    if relation.is_related and relation.purpose:
        return Resolution(relation.purpose, "dependency_stage", role=relation.role)
    return None


def category_stage(ctx: ResolutionContext) -> Optional[Resolution]:
    """Category synonym lookup on the name, or on the nearest ancestor of a generic name."""
    key = category_key(ctx.name)
    if key:
        return Resolution(category_label(key, ctx.locale), "category_stage", role=key)

    if not is_generic_name(ctx.name):
        return None

    ancestor = nearest_meaningful_ancestor(ctx)
    ancestor_key = category_key(ancestor) if ancestor else None
    if ancestor_key:
        return compound(ctx, ctx.name, ancestor_key, "category_stage")
    return None


def _split_name_purpose(ctx: ResolutionContext) -> Optional[Resolution]:
    # gateway-common -> "gateway common files"
    parts = [p for p in ctx.name.replace("_", "-").split("-") if p]
    if len(parts) < 2:
        return None
    for part in parts:
        key = category_key(part)
        if key:
            business = "-".join(p for p in parts if p != part)
            return Resolution(
                compose(business, category_label(key, ctx.locale)),
                "business_stage",
                role=key,
            )
    return None


def business_stage(ctx: ResolutionContext) -> Optional[Resolution]:
    """Sibling templates, then the directory's own name, then content for generic names."""
    sibling_pattern = SiblingPatternAnalyzer().analyze(ctx.siblings)
    if sibling_pattern.is_project_pattern:
        return Resolution(phrase("project", ctx.locale, name=ctx.name), "business_stage")

    if not is_generic_name(ctx.name):
        ancestor = nearest_category_ancestor(ctx)
        if ancestor:
            return compound(ctx, ctx.name, ancestor[1], "business_stage")

        split = _split_name_purpose(ctx)
        if split:
            return split

        if "utility" in ctx.primary_types and ctx.distribution.get("utility", 0) > 0:
            return Resolution(
                phrase("compound", ctx.locale, name=ctx.name, word=category_label("utility", ctx.locale)),
                "business_stage",
                role="utility",
            )

        return compound(ctx, ctx.name, None, "business_stage")

    content = ctx.content()
    if content.purpose and content.confidence != "low":
        return Resolution(content.purpose, "business_stage", role=content.role)
    return None


def inheritance_stage(ctx: ResolutionContext) -> Optional[Resolution]:
    """Compound purpose from the nearest category ancestor at any distance."""
    ancestor = nearest_category_ancestor(ctx)
    if ancestor:
        return compound(ctx, ctx.name, ancestor[1], "inheritance_stage")
    return None


def fallback_stage(ctx: ResolutionContext) -> Optional[Resolution]:
    """Low-confidence content, the top file type, the raw name, or ``other``."""
    content = ctx.content()
    if content.purpose:
        return Resolution(content.purpose, "fallback_stage", role=content.role)

    if ctx.primary_types:
        top = ctx.primary_types[0]
        if top in NAMED_FILE_TYPE_PURPOSES:
            return Resolution(
                phrase("compound", ctx.locale, name=ctx.name, word=category_label(top, ctx.locale)),
                "fallback_stage",
                role=top,
            )
        if top != "other":
            return Resolution(category_label(top, ctx.locale), "fallback_stage", role=top)

    if ctx.name and ctx.name.lower() not in MEANINGLESS_NAMES:
        return Resolution(ctx.name, "fallback_stage")

    return Resolution(category_label("other", ctx.locale), "fallback_stage")


DEFAULT_STAGES: Tuple[Stage, ...] = (
    special_path_stage,
    container_stage,
    dependency_stage,
    category_stage,
    business_stage,
    inheritance_stage,
    fallback_stage,
)


class DirectoryPurposeResolver:
    """Runs the purpose cascade for one directory at a time."""

    def __init__(
        self,
        index: Optional[DependencyKeywordIndex] = None,
        locale: str = DEFAULT_LOCALE,
        content_analyzer: Optional[FileContentAnalyzer] = None,
        confirm_sample: int = 5,
        max_read_bytes: int = 65536,
        stages: Sequence[Stage] = DEFAULT_STAGES,
    ):
        self.locale = locale
        self.matcher = DependencyMatcher(
            index or DependencyKeywordIndex.empty(),
            locale=locale,
            confirm_sample=confirm_sample,
            max_read_bytes=max_read_bytes,
        )
        self.content_analyzer = content_analyzer or FileContentAnalyzer(
            locale=locale, max_read_bytes=max_read_bytes
        )
        self.stages = tuple(stages)

    def context(self, path: str, **kwargs) -> ResolutionContext:
        """Build a context wired to this resolver's matcher and content analyzer."""
        kwargs.setdefault("locale", self.locale)
        return ResolutionContext(
            path=path,
            matcher=self.matcher,
            content_analyzer=self.content_analyzer,
            **kwargs,
        )

    def resolve(self, ctx: ResolutionContext) -> Resolution:
        for stage in self.stages:
            resolution = stage(ctx)
            if resolution is not None:
                log.debug(
                    "directory_resolved",
                    directory=ctx.path,
                    stage=resolution.stage,
                    purpose=resolution.purpose,
                )
                return resolution

        # Only reachable with a custom stage tuple lacking the fallback
        return Resolution(category_label("other", ctx.locale), "none")

    @staticmethod
    def category_for(resolution: Resolution, primary_types: Sequence[str]) -> str:
        """Coarse directory category from the winning role or the file types."""
        if not resolution.purpose:
            return "other"
        if resolution.role and resolution.role in ROLE_CATEGORIES:
            return ROLE_CATEGORIES[resolution.role]
        for file_type in primary_types:
            if file_type in ROLE_CATEGORIES:
                return ROLE_CATEGORIES[file_type]
        return "other"
