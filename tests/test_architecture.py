"""Tests for architecture detection."""

import pytest

from dirlens.analysis.architecture import (
    ArchitectureDetector,
    detect_version_isolation,
    tag_directory,
)
from dirlens.analysis.results import DirectoryRecord


def make_records(*specs):
    """Records from paths or (path, category) pairs."""
    records = []
    for spec in specs:
        if isinstance(spec, tuple):
            records.append(DirectoryRecord(path=spec[0], category=spec[1]))
        else:
            records.append(DirectoryRecord(path=spec))
    return records


@pytest.fixture
def detector():
    return ArchitectureDetector()


class TestArchitectureDetector:
    """Tests for ArchitectureDetector.detect."""

    def test_monorepo(self, detector):
        records = make_records("packages", "packages/ui")
        result = detector.detect(records, ["pnpm-workspace.yaml", "packages/ui/index.ts"])
        assert result.type == "monorepo"
        assert result.confidence == "high"
        assert any("pnpm-workspace.yaml" in i for i in result.indicators)
        assert any("packages" in i for i in result.indicators)

    def test_clean_architecture(self, detector):
        records = make_records("src/domain", "src/application", "src/infrastructure")
        result = detector.detect(records)
        assert result.type == "clean-architecture"
        assert list(result.layer_structure) == ["application", "domain", "infrastructure"]
        # The domain layer also counts as a domain-driven indicator
        assert len(result.indicators) == 2

    def test_single_layer_is_not_clean_architecture(self, detector):
        result = detector.detect(make_records("src/domain"))
        assert result.type == "domain-driven"

    def test_feature_based(self, detector):
        records = make_records("src/features", "src/features/auth", ("src/features/shared", "shared"))
        result = detector.detect(records)
        assert result.type == "feature-based"
        assert result.feature_structure == {
            "features": ["src/features/auth"],
            "shared": ["src/features/shared"],
        }

    def test_mvc(self, detector):
        result = detector.detect(make_records("app/models", "app/controllers", "app/views"))
        assert result.type == "mvc"
        assert result.confidence == "medium"

    def test_microservices(self, detector):
        files = ["docker-compose.yml", "svc-a/Dockerfile", "svc-b/Dockerfile"]
        result = detector.detect(make_records("svc-a", "svc-b"), files)
        assert result.type == "microservices"

    def test_single_dockerfile_is_not_microservices(self, detector):
        result = detector.detect(make_records("svc-a"), ["docker-compose.yml", "svc-a/Dockerfile"])
        assert result.type == "unknown"

    def test_unknown(self, detector):
        result = detector.detect(make_records("src/utils"))
        assert result.type == "unknown"
        assert result.confidence == "low"
        assert result.indicators == []

    def test_priority_keeps_all_indicators(self, detector):
        """The first positive detector decides; later ones still add indicators."""
        records = make_records("packages", "packages/web/features")
        result = detector.detect(records, ["lerna.json"])
        assert result.type == "monorepo"
        assert any("feature" in i for i in result.indicators)


class TestTagDirectory:
    """Tests for per-directory architecture tags."""

    @pytest.mark.parametrize("path,distribution,expected", [
        ("src/domain/user", {}, "clean-architecture"),
        ("src/features/auth", {}, "feature-based"),
        ("app/models", {"model": 1, "controller": 1}, "mvc"),
        ("app/models", {"model": 1}, None),
        ("src/aggregates/order", {}, "domain-driven"),
        ("src/layers/data", {}, "layered"),
        ("src/utils", {}, None),
    ])
    def test_tags(self, path, distribution, expected):
        assert tag_directory(path, distribution) == expected


class TestVersionIsolation:
    """Tests for version isolation detection."""

    def test_directory_versions(self):
        records = [
            DirectoryRecord(path="api/v1", version="v1"),
            DirectoryRecord(path="api/v2", version="v2"),
            DirectoryRecord(path="api"),
        ]
        result = detect_version_isolation(records)
        assert result.has_versioning
        assert result.versions == ["v1", "v2"]
        assert result.pattern == "directory"

    def test_prefix_and_suffix(self):
        assert detect_version_isolation([DirectoryRecord(path="v3-api", version="v3")]).pattern == "prefix"
        assert detect_version_isolation([DirectoryRecord(path="api-v2", version="v2")]).pattern == "suffix"

    def test_no_versions(self):
        result = detect_version_isolation([DirectoryRecord(path="src")])
        assert not result.has_versioning
        assert result.pattern == "none"
