"""Tests for the rule table and the line matcher."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from coderef.matcher import PatternMatcher, best_match
from coderef.models import SearchType
from coderef.patterns import RULES, PatternRule


def _categories(hits):
    return {category for category, _ in hits}


class TestPatternRule:
    """Test rule compilation."""

    def test_symbol_is_taken_literally(self):
        rule = PatternRule("identifier", r"{name}")
        assert rule.compile("$scope").search("angular.$scope.x")
        assert not rule.compile("a.b").search("axb")

    def test_word_boundaries(self):
        rule = PatternRule("identifier", r"{name}")
        pattern = rule.compile("getUser")
        assert pattern.search("getUser()")
        assert not pattern.search("getUserById()")
        assert not pattern.search("_getUser()")

    def test_family_restriction(self):
        rule = PatternRule("php-only", r"{name}", frozenset({"php"}))
        assert rule.applies_to("php")
        assert not rule.applies_to("python")
        assert PatternRule("any", r"{name}").applies_to(None)

    def test_every_category_has_rules(self):
        for category in SearchType.categories():
            assert RULES[category]


class TestExactMatching:
    """Test exact-mode matching."""

    def test_definition(self):
        matcher = PatternMatcher("getUser", SearchType.DEFINITION)
        hits = matcher.match_line("export function getUser() {}", "src/user.ts")
        assert hits == [(SearchType.DEFINITION, 1.0)]

    def test_import_is_not_a_definition(self):
        matcher = PatternMatcher("getUser", SearchType.DEFINITION)
        assert matcher.match_line("import { getUser } from './user'", "src/app.ts") == []

    @pytest.mark.parametrize("line,path", [
        ("def get_user(self):", "app.py"),
        ("async def get_user():", "app.py"),
        ("class get_user:", "app.py"),
        ("get_user = make_getter()", "app.py"),
        ("fn get_user() -> User {", "lib.rs"),
        ("const get_user = async (id) => {", "app.js"),
        ("let get_user;", "app.js"),
    ])
    def test_definition_shapes(self, line, path):
        matcher = PatternMatcher("get_user", SearchType.DEFINITION)
        assert matcher.match_line(line, path) == [(SearchType.DEFINITION, 1.0)]

    def test_go_method_definition(self):
        matcher = PatternMatcher("Handle", SearchType.DEFINITION)
        line = "func (s *Server) Handle(w http.ResponseWriter) {"
        assert matcher.match_line(line, "server.go") == [(SearchType.DEFINITION, 1.0)]

    def test_java_method_definition(self):
        matcher = PatternMatcher("findUser", SearchType.DEFINITION)
        assert matcher.match_line("    public User findUser(String id) {", "Repo.java")
        assert matcher.match_line("        return findUser(id);", "Repo.java") == []

    def test_call_reference(self):
        matcher = PatternMatcher("getUser", SearchType.REFERENCES)
        assert matcher.match_line("const u = getUser(id);", "app.ts") == [(SearchType.REFERENCES, 1.0)]

    def test_member_access_reference(self):
        matcher = PatternMatcher("getUser", SearchType.REFERENCES)
        assert matcher.match_line("return api.getUser", "app.ts") == [(SearchType.REFERENCES, 1.0)]

    def test_declaration_is_not_a_call(self):
        matcher = PatternMatcher("getUser", SearchType.REFERENCES)
        assert matcher.match_line("function getUser() {", "app.js") == []

    def test_usage_in_string(self):
        matcher = PatternMatcher("getUser", SearchType.USAGE)
        assert matcher.match_line('log("getUser called")', "app.js") == [(SearchType.USAGE, 1.0)]

    def test_dependency_line(self):
        matcher = PatternMatcher("getUser", SearchType.DEPENDENCIES)
        hits = matcher.match_line("import { getUser } from './user'", "app.ts")
        assert hits == [(SearchType.DEPENDENCIES, 1.0)]

    def test_reverse_dependency_lines(self):
        matcher = PatternMatcher("getUser", SearchType.REVERSE_DEPENDENCIES)
        assert matcher.match_line("export function getUser() {}", "user.ts")
        assert matcher.match_line("module.exports = { getUser, saveUser }", "user.js")
        assert matcher.match_line("__all__ = ['getUser']", "user.py")

    def test_longer_identifier_does_not_match(self):
        matcher = PatternMatcher("getUser")
        assert matcher.match_line("getUserById(1);", "app.ts") == []

    def test_all_emits_every_category(self):
        matcher = PatternMatcher("getUser", SearchType.ALL)
        hits = matcher.match_line("const user = getUser();", "app.ts")
        assert _categories(hits) == {SearchType.REFERENCES, SearchType.USAGE}
        assert all(confidence == 1.0 for _, confidence in hits)

    def test_one_hit_per_category(self):
        matcher = PatternMatcher("getUser", SearchType.USAGE)
        hits = matcher.match_line("getUser(getUser)", "app.ts")
        assert hits == [(SearchType.USAGE, 1.0)]


class TestCommentHandling:
    """Test comment-only lines."""

    def test_comment_lines_skipped(self):
        matcher = PatternMatcher("getUser", SearchType.ALL)
        assert matcher.match_line("// getUser() is slow", "app.ts") == []

    def test_comment_lines_included_on_request(self):
        matcher = PatternMatcher("getUser", SearchType.ALL, include_comments=True)
        hits = matcher.match_line("// getUser() is slow", "app.ts")
        assert SearchType.USAGE in _categories(hits)


class TestFuzzyMatching:
    """Test fuzzy-mode matching."""

    def test_typo_matches_fuzzily(self):
        matcher = PatternMatcher("getUsr", SearchType.DEFINITION, fuzzy_match=True)
        hits = matcher.match_line("export function getUser() {}", "src/user.ts")
        assert len(hits) == 1
        category, confidence = hits[0]
        assert category == SearchType.DEFINITION
        assert 0.6 < confidence < 0.95

    def test_typo_without_fuzzy_finds_nothing(self):
        matcher = PatternMatcher("getUsr", SearchType.DEFINITION)
        assert matcher.match_line("export function getUser() {}", "src/user.ts") == []

    def test_exact_token_still_scores_one(self):
        matcher = PatternMatcher("getUser", SearchType.REFERENCES, fuzzy_match=True)
        assert matcher.match_line("getUser();", "app.ts") == [(SearchType.REFERENCES, 1.0)]

    def test_best_token_wins(self):
        matcher = PatternMatcher("getUser", SearchType.USAGE, fuzzy_match=True)
        hits = matcher.match_line("getUserById(getuser)", "app.ts")
        assert hits == [(SearchType.USAGE, 0.95)]

    def test_custom_scorer(self):
        matcher = PatternMatcher(
            "anything", SearchType.USAGE, fuzzy_match=True,
            scorer=lambda found, target: 0.7 if found == "token" else 0.0,
        )
        assert matcher.match_line("token other", "app.ts") == [(SearchType.USAGE, 0.7)]


class TestBestMatch:
    """Test the per-category reduction."""

    def test_keeps_highest(self):
        hits = [
            (SearchType.REFERENCES, 0.7),
            (SearchType.REFERENCES, 0.9),
            (SearchType.REFERENCES, 0.8),
        ]
        assert best_match(hits) == (SearchType.REFERENCES, 0.9)

    def test_first_of_equals_kept(self):
        hits = [(SearchType.USAGE, 0.8), (SearchType.DEFINITION, 0.8)]
        assert best_match(hits) == (SearchType.USAGE, 0.8)

    def test_empty(self):
        assert best_match([]) is None
        assert best_match(iter(())) is None
