"""Tests for dependency keyword matching."""

import pytest

from dirlens.analysis.dependencies import (
    DependencyKeywordIndex,
    DependencyMatcher,
    dependency_names,
    keyword_matches,
    name_forms,
)
from dirlens.analysis.results import Dependency


class TestDependencyKeywordIndex:
    """Tests for the immutable keyword index."""

    def test_build_activates_declared_rules(self):
        index = DependencyKeywordIndex.build([Dependency("redux"), "react"])
        assert "redux" in index
        assert "react" not in index
        assert len(index) == 1
        assert index.declared == ("redux", "react")
        assert "store" in index.get("redux").keywords

    def test_empty_index_is_falsy(self):
        assert not DependencyKeywordIndex.build([])
        assert not DependencyKeywordIndex.empty()

    def test_declared_without_rule_is_truthy(self):
        """Any declared dependency makes the index usable for name matching."""
        index = DependencyKeywordIndex.build(["framer-motion"])
        assert index
        assert len(index) == 0

    def test_entries_are_read_only(self):
        index = DependencyKeywordIndex.build(["redux"])
        with pytest.raises(TypeError):
            index.entries["zustand"] = index.get("redux")

    def test_dependency_names_accepts_mixed_inputs(self):
        names = dependency_names([Dependency("Redux"), {"name": "zustand"}, "redux", " "])
        assert names == ("redux", "zustand")


class TestKeywordMatching:
    """Tests for directory name matching rules."""

    @pytest.mark.parametrize("dir_name,expected", [
        ("store", True),
        ("stores", True),
        ("store-legacy", True),
        ("cart-store", True),
        ("my-store-v2", True),
        ("restore", False),
        ("storefront", False),
    ])
    def test_keyword_matches(self, dir_name, expected):
        assert keyword_matches(dir_name, "store") is expected

    def test_name_forms_of_scoped_package(self):
        assert name_forms("@mui/material") == ("@mui/material", "material", "mui-material")


class TestDependencyMatcher:
    """Tests for directory/dependency relations."""

    def test_keyword_directory_is_related(self):
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["redux"]))
        relation = matcher.check_relation("src/redux")
        assert relation.is_related
        assert relation.dependency_name == "redux"
        assert relation.purpose == "Redux state management"
        assert relation.role == "store"
        assert not relation.confirmed

    def test_qualified_folder_becomes_submodule(self):
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["redux"]))
        relation = matcher.check_relation("src/redux-checkout")
        assert relation.purpose == "Redux state management submodule (checkout)"

    def test_only_the_basename_is_matched(self):
        """A directory below a dependency folder is not itself related."""
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["redux"]))
        assert not matcher.check_relation("src/redux/components").is_related

    def test_registration_order_breaks_ties(self):
        """Several dependencies claim 'store'; the first registered wins."""
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["zustand", "redux"]))
        assert matcher.check_relation("src/store").dependency_name == "redux"

    def test_directory_named_after_declared_package(self):
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["framer-motion"]))
        relation = matcher.check_relation("src/framer-motion")
        assert relation.is_related
        assert relation.purpose == "framer-motion"
        assert relation.role is None

    def test_scoped_base_name_must_match_exactly(self):
        """Folders merely sharing a word with a scoped package stay unrelated."""
        matcher = DependencyMatcher(
            DependencyKeywordIndex.build(["@prisma/client", "@babel/core", "@nestjs/common"])
        )
        assert not matcher.check_relation("src/api-client").is_related
        assert not matcher.check_relation("src/core-utils").is_related
        assert matcher.check_relation("src/common").dependency_name == "@nestjs/common"

    def test_dashed_scoped_name_inside_directory(self):
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["@emotion/styled"]))
        relation = matcher.check_relation("src/emotion-styled-theme")
        assert relation.dependency_name == "@emotion/styled"
        assert relation.purpose == "@emotion/styled submodule (theme)"

    def test_declared_name_is_not_pattern_matched(self):
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["framer-motion"]))
        assert not matcher.check_relation("src/framer-motion-utils").is_related

    def test_empty_index_never_relates(self):
        matcher = DependencyMatcher(DependencyKeywordIndex.empty())
        assert matcher.check_relation("src/store").is_related is False

    def test_content_confirms_relation(self, make_project):
        """An import of the dependency in the directory sets confirmed."""
        root = make_project({"src/store/index.ts": "import { createStore } from 'redux';\n"})
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["redux"]))
        relation = matcher.check_relation("src/store", ["src/store/index.ts"], str(root))
        assert relation.is_related
        assert relation.confirmed

    def test_python_import_confirms(self, make_project):
        root = make_project({"app/tasks/jobs.py": "from celery import shared_task\n"})
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["celery"]))
        assert matcher.confirm_by_content("celery", ["app/tasks/jobs.py"], str(root))

    def test_locale_changes_display(self):
        matcher = DependencyMatcher(DependencyKeywordIndex.build(["redux"]), locale="zh")
        assert matcher.check_relation("src/redux").purpose == "Redux 状态管理"
