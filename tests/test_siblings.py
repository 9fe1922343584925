"""Tests for sibling naming templates."""

from dirlens.analysis.siblings import SiblingPattern, SiblingPatternAnalyzer


class TestSiblingPatternAnalyzer:
    """Tests for SiblingPatternAnalyzer."""

    def test_fewer_than_two_siblings(self):
        assert SiblingPatternAnalyzer().analyze(["gateway-web-id"]) == SiblingPattern()
        assert not SiblingPatternAnalyzer().analyze([]).is_project_pattern

    def test_market_suffixes_are_country_based(self):
        result = SiblingPatternAnalyzer().analyze(["gateway-web-id", "gateway-web-my"])
        assert result.is_project_pattern
        assert result.pattern == "country-based"

    def test_names_are_compared_lowercase(self):
        result = SiblingPatternAnalyzer().analyze(["Gateway-Web-HK", "Gateway-Web-ID"])
        assert result.pattern == "country-based"

    def test_shared_prefix(self):
        result = SiblingPatternAnalyzer().analyze(["admin-portal-web", "admin-portal-api"])
        assert result.is_project_pattern
        assert result.pattern == "admin-portal"

    def test_hyphenated_majority(self):
        result = SiblingPatternAnalyzer().analyze(["user-center", "order-service", "docs"])
        assert result.pattern == "hyphen-based"

    def test_functional_siblings_have_no_pattern(self):
        result = SiblingPatternAnalyzer().analyze(["components", "utils", "hooks"])
        assert not result.is_project_pattern
        assert result.pattern is None
