"""Tests for PatternGuideTable and IssueSolutionResolver."""

import pytest

from promptloom.core.enrichment.guidance import (
    ISSUE_SOLUTIONS,
    PATTERN_GUIDES,
    IssueSolutionResolver,
    PatternGuideTable,
)


class TestPatternGuideTable:

    @pytest.mark.parametrize(
        "pattern",
        ["auth", "fetch", "form", "router", "state", "effect", "callback", "memo"],
    )
    def test_known_patterns_have_guidance(self, pattern):
        table = PatternGuideTable()
        assert table.lookup(pattern)
        assert pattern in table

    def test_unknown_pattern_returns_none(self):
        assert PatternGuideTable().lookup("graphql") is None

    def test_no_partial_or_case_insensitive_match(self):
        table = PatternGuideTable()
        assert table.lookup("Auth") is None
        assert table.lookup("aut") is None
        assert table.lookup("authentication") is None

    def test_patterns_keep_table_order(self):
        assert PatternGuideTable().patterns == tuple(p for p, _ in PATTERN_GUIDES)

    def test_custom_entries_first_duplicate_wins(self):
        table = PatternGuideTable([("x", "first"), ("x", "second")])
        assert table.lookup("x") == "first"


class TestIssueSolutionResolver:

    def test_substring_match(self):
        resolver = IssueSolutionResolver()
        assert resolver.resolve("Line 12: Magic Number 3600") == (
            "Extract to constants with descriptive names"
        )

    def test_first_trigger_in_priority_order_wins(self):
        resolver = IssueSolutionResolver()
        issue = "Class Component renders with dangerouslySetInnerHTML"
        assert resolver.resolve(issue) == ISSUE_SOLUTIONS[0][1]

    def test_priority_follows_rule_order_not_text_position(self):
        resolver = IssueSolutionResolver()
        issue = "Missing alt text; also eval() call"
        assert resolver.resolve(issue) == dict(ISSUE_SOLUTIONS)["eval()"]

    def test_no_match_returns_none(self):
        assert IssueSolutionResolver().resolve("Unused variable 'foo'") is None

    def test_match_is_case_sensitive(self):
        assert IssueSolutionResolver().resolve("class component found") is None

    def test_triggers_in_priority_order(self):
        assert IssueSolutionResolver().triggers == (
            "Class Component",
            "dangerouslySetInnerHTML",
            "eval()",
            "Inline function",
            "Magic Number",
            "Missing alt",
        )
