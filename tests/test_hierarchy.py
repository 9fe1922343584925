"""Tests for hierarchy assembly and tree rendering."""

import pytest

from dirlens.analysis.hierarchy import HierarchyBuilder
from dirlens.analysis.results import DirectoryRecord


@pytest.fixture
def records():
    return [
        DirectoryRecord(path="src/utils", purpose="utilities", file_count=1),
        DirectoryRecord(path="docs", purpose="other", file_count=1),
        DirectoryRecord(path="src", purpose=""),
        DirectoryRecord(path="src/components", purpose="components", file_count=2),
    ]


class TestHierarchyBuilder:
    """Tests for HierarchyBuilder.build."""

    def test_parents_and_children(self, records):
        built = HierarchyBuilder().build(records)
        by_path = {r.path: r for r in built}

        assert [r.path for r in built] == ["docs", "src", "src/components", "src/utils"]
        assert by_path["src/components"].parent_directory == "src"
        assert by_path["src"].child_directories == ["src/components", "src/utils"]
        assert by_path["docs"].parent_directory is None

    def test_longest_existing_prefix_is_parent(self):
        """Missing intermediate directories are skipped over."""
        built = HierarchyBuilder().build([DirectoryRecord(path="a"), DirectoryRecord(path="a/b/c")])
        assert built[1].parent_directory == "a"
        assert built[0].child_directories == ["a/b/c"]

    def test_rebuild_is_idempotent(self, records):
        builder = HierarchyBuilder()
        first = [r.to_dict() for r in builder.build(records)]
        second = [r.to_dict() for r in builder.build(records)]
        assert first == second

    def test_roots(self, records):
        built = HierarchyBuilder().build(records)
        assert [r.path for r in HierarchyBuilder.roots(built)] == ["docs", "src"]


class TestRenderTree:
    """Tests for HierarchyBuilder.render_tree."""

    def test_render(self, records):
        builder = HierarchyBuilder()
        tree = builder.render_tree(builder.build(records), root_name="proj")
        assert tree.splitlines() == [
            "proj/",
            "├── docs/",
            "└── src/",
            "    ├── components/  # components (2 files)",
            "    └── utils/  # utilities (1 files)",
        ]

    def test_empty(self):
        assert HierarchyBuilder().render_tree([], root_name="proj") == "proj/"
        assert HierarchyBuilder().render_tree([]) == ""

    def test_localized_other_is_hidden(self):
        builder = HierarchyBuilder()
        built = builder.build([DirectoryRecord(path="misc", purpose="其他", file_count=1)])
        assert builder.render_tree(built, locale="zh") == "└── misc/"
