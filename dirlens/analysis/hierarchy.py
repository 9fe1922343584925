"""Directory hierarchy assembly and tree rendering."""

from typing import Dict, List, Optional, Sequence

from dirlens.analysis.results import DirectoryRecord
from dirlens.analysis.vocabulary import DEFAULT_LOCALE, category_label


class HierarchyBuilder:
    """Links directory records into a parent/child tree."""

    def build(self, records: Sequence[DirectoryRecord]) -> List[DirectoryRecord]:
        """Assign parents by longest matching path prefix and fill children.

        Records are updated in place and returned sorted by path.
        """
        ordered = sorted(records, key=lambda r: r.path)
        by_path: Dict[str, DirectoryRecord] = {r.path: r for r in ordered}

        for record in ordered:
            record.parent_directory = None
            record.child_directories = []

        for record in ordered:
            parts = record.path.split("/")
            for length in range(len(parts) - 1, 0, -1):
                candidate = "/".join(parts[:length])
                if candidate in by_path:
                    record.parent_directory = candidate
                    by_path[candidate].child_directories.append(record.path)
                    break

        for record in ordered:
            record.child_directories.sort()

        return ordered

    @staticmethod
    def roots(records: Sequence[DirectoryRecord]) -> List[DirectoryRecord]:
        """Records without a parent, sorted by path."""
        return sorted((r for r in records if r.parent_directory is None), key=lambda r: r.path)

    def render_tree(
        self,
        records: Sequence[DirectoryRecord],
        root_name: Optional[str] = None,
        locale: str = DEFAULT_LOCALE,
    ) -> str:
        """Render linked records as an indented tree with purpose annotations.

        Example:
            src/
            ├── components/  # components (4 files)
            │   └── Button/  # Button components (2 files)
            └── utils/  # utilities (3 files)
        """
        by_path = {r.path: r for r in records}
        hidden_purposes = {"", "other", category_label("other", locale)}
        lines: List[str] = []
        if root_name:
            lines.append(f"{root_name}/")

        def annotate(record: DirectoryRecord) -> str:
            if record.purpose in hidden_purposes:
                return ""
            return f"  # {record.purpose} ({record.file_count} files)"

        def walk(record: DirectoryRecord, prefix: str, is_last: bool):
            connector = "└── " if is_last else "├── "
            extension = "    " if is_last else "│   "
            lines.append(f"{prefix}{connector}{record.name}/{annotate(record)}")

            children = [by_path[c] for c in record.child_directories if c in by_path]
            for i, child in enumerate(children):
                walk(child, prefix + extension, i == len(children) - 1)

        roots = self.roots(records)
        for i, root in enumerate(roots):
            walk(root, "", i == len(roots) - 1)

        return "\n".join(lines)
