"""Tests for shallow content analysis."""

import pytest

from dirlens.analysis.content import (
    FileContentAnalyzer,
    detect_signals,
    extract_business_keywords,
    rank_keywords,
)


@pytest.fixture
def analyzer():
    return FileContentAnalyzer()


@pytest.fixture
def analyze_dir(make_project):
    """Write files into one directory and analyze it."""

    def _analyze(analyzer, directory, files):
        root = make_project({f"{directory}/{name}": content for name, content in files.items()})
        rel_files = [f"{directory}/{name}" for name in files]
        return analyzer.analyze(directory, rel_files, str(root))

    return _analyze


class TestSignals:
    """Tests for per-file signal detection."""

    def test_hook_export(self, hook_source):
        signals = detect_signals(hook_source)
        assert signals.hook
        assert not signals.utility

    def test_pure_functions_are_utility(self, pure_functions_source):
        assert detect_signals(pure_functions_source).utility

    def test_network_calls_are_not_utility(self, pure_functions_source):
        source = pure_functions_source + "\nexport const load = () => fetch('/x');\n"
        signals = detect_signals(source)
        assert signals.api
        assert not signals.utility

    def test_python_functions_count_as_exports(self):
        source = "def a():\n    pass\n\ndef b():\n    pass\n\ndef c():\n    pass\n"
        assert detect_signals(source).utility


class TestBusinessKeywords:
    """Tests for business keyword extraction and ranking."""

    def test_property_access(self):
        assert extract_business_keywords("const name = user.name;") == ["user"]

    def test_react_hook_markers_suppress_user(self):
        source = "const [user, setUser] = useState(null);\nconsole.log(user.name);"
        assert "user" not in extract_business_keywords(source)

    def test_hook_naming_suppresses_user(self):
        """A custom hook declaration is not a mention of users."""
        source = "export function useResize() {\n  return window.innerWidth;\n}\n"
        assert "user" not in extract_business_keywords(source)

    def test_custom_hook_directory_has_no_user_subject(self, analyzer, analyze_dir):
        source = "export function useResize() {\n  return window.innerWidth;\n}\n"
        result = analyze_dir(analyzer, "src/misc", {"useResize.ts": source})
        assert "user" not in result.business_keywords
        assert "user" not in (result.purpose or "")

    def test_path_literal(self):
        assert "order" in extract_business_keywords("fetch('/api/orders')")

    def test_rank_by_file_count_then_table_order(self):
        ranked = rank_keywords([["order", "user"], ["user"], ["user", "order"], ["cart"]])
        assert ranked == ["user", "order", "cart"]
        assert rank_keywords([["order"], ["user"]]) == ["user", "order"]


class TestFileContentAnalyzer:
    """Tests for directory-level purpose derivation."""

    def test_hook_directory_with_generic_name(self, analyzer, analyze_dir, hook_source):
        result = analyze_dir(analyzer, "src/misc", {"useToggle.ts": hook_source})
        assert result.role == "hook"
        assert result.purpose == "hooks"
        assert result.confidence == "high"

    def test_component_directory_uses_its_name(self, analyzer, analyze_dir, component_source):
        result = analyze_dir(analyzer, "src/cards", {"Card.tsx": component_source})
        assert result.role == "component"
        assert result.purpose == "cards components"

    def test_ui_library_prefixes_component_suffix(self, analyzer, analyze_dir, component_source):
        source = "import { Button } from '@mui/material';\n" + component_source
        result = analyze_dir(analyzer, "src/cards", {"Card.tsx": source})
        assert result.purpose == "cards Material-UI components"
        assert "UI library: Material-UI" in result.indicators

    def test_api_with_keyword(self, analyzer, analyze_dir):
        source = (
            "export async function getOrders() {\n"
            "  const res = await fetch('/api/orders');\n"
            "  return res.json();\n"
            "}\n"
        )
        result = analyze_dir(analyzer, "src/remote", {"orders.ts": source})
        assert result.role == "api"
        assert result.purpose == "order API"
        assert result.business_keywords == ["order"]

    def test_utility_directory(self, analyzer, analyze_dir, pure_functions_source):
        result = analyze_dir(analyzer, "src/math", {"ops.ts": pure_functions_source})
        assert result.role == "utility"
        assert result.purpose == "math utility functions"

    def test_role_named_directory_is_not_repeated(self, analyzer, analyze_dir, pure_functions_source):
        result = analyze_dir(analyzer, "src/helpers", {"ops.ts": pure_functions_source})
        assert result.purpose == "utility functions"

    def test_model_with_keyword(self, analyzer, analyze_dir):
        source = "export interface UserModel {\n  id: string;\n}\n"
        result = analyze_dir(analyzer, "src/shapes", {"user.ts": source})
        assert result.role == "model"
        assert result.purpose == "user data model"

    def test_page_directory(self, analyzer, analyze_dir):
        source = "export default function CheckoutPage() {\n  return <main />;\n}\n"
        result = analyze_dir(analyzer, "src/checkout", {"index.tsx": source})
        assert result.role == "page"
        assert result.purpose == "checkout pages"

    def test_keyword_without_role_is_medium(self, analyzer, analyze_dir):
        result = analyze_dir(analyzer, "src/misc", {"total.ts": "const total = order.amount;\n"})
        assert result.role is None
        assert result.purpose == "order"
        assert result.confidence == "medium"

    def test_nothing_detected(self, analyzer, analyze_dir):
        result = analyze_dir(analyzer, "src/misc", {"empty.ts": ""})
        assert result.purpose == ""
        assert result.confidence == "low"

    def test_static_asset_path_short_circuits(self, analyzer):
        result = analyzer.analyze("public/assets/img", [])
        assert result.purpose == "static assets"
        assert result.confidence == "high"

    def test_unreadable_files_are_skipped(self, analyzer, temp_dir):
        result = analyzer.analyze("src/misc", ["src/misc/missing.ts"], str(temp_dir))
        assert result.purpose == ""

    def test_sample_is_bounded(self, mocker):
        """Only sample_size code files are read."""
        read_head = mocker.patch("dirlens.analysis.paths.read_head", return_value="")
        analyzer = FileContentAnalyzer(sample_size=2)
        analyzer.analyze("src/misc", [f"src/misc/f{i}.ts" for i in range(5)] + ["src/misc/a.png"])
        assert read_head.call_count == 2

    def test_zh_locale(self, analyze_dir, hook_source):
        result = analyze_dir(FileContentAnalyzer(locale="zh"), "src/misc", {"useToggle.ts": hook_source})
        assert result.purpose == "Hooks"
