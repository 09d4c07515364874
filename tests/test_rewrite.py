# tests/test_rewrite.py
"""Tests for the rewrite rule evaluator."""

import pytest
from seotools.rewrite import RewriteTester, evaluate, parse_rules, tokenize
from seotools.constants import MAX_REWRITE_ITERATIONS, NO_MATCH_DESCRIPTION


class TestTokenize:
    """Test suite for the rewrite configuration tokenizer."""

    def test_skips_blank_lines_and_comments(self):
        directives = tokenize("# redirects\n\nRewriteEngine On\n  RewriteRule ^a$ /b [L]\n")

        assert [d.kind for d in directives] == ["RewriteEngine", "RewriteRule"]
        assert directives[1].arguments == ["^a$", "/b", "[L]"]
        assert directives[1].line_number == 4

    def test_counts_conditions_and_skips_bad_rules(self):
        rules, skipped, conditions = parse_rules(
            "RewriteCond %{HTTPS} off\n"
            "RewriteRule ^(unclosed /x [L]\n"
            "RewriteRule ^ok$ /fine [L]\n"
            "RewriteRule lonely\n"
        )

        assert len(rules) == 1
        assert skipped == [2, 4]
        assert conditions == 1


class TestRewriteTester:
    """Test suite for RewriteTester."""

    @pytest.fixture
    def tester(self):
        """Create a RewriteTester instance."""
        return RewriteTester()

    def test_single_permanent_redirect(self, tester):
        """A matching [R=301,L] rule yields exactly one step."""
        rules = "RewriteEngine On\nRewriteRule ^old-page/?$ /new-page [R=301,L]"

        report = tester.test(rules, "/old-page")

        assert len(report.steps) == 1
        step = report.steps[0]
        assert step.matched is True
        assert step.input_path == "/old-page"
        assert step.output_path == "/new-page"
        assert step.status_code == 301
        assert step.rule_description == "RewriteRule ^old-page/?$ /new-page [R=301,L]"
        assert report.final_path == "/new-page"

    def test_no_match_emits_single_unmatched_step(self, tester):
        report = tester.test("RewriteRule ^foo$ /bar [L]", "/baz")

        assert len(report.steps) == 1
        assert report.steps[0].matched is False
        assert report.steps[0].output_path == "/baz"
        assert report.steps[0].rule_description == NO_MATCH_DESCRIPTION
        assert report.matched is False

    def test_empty_rules(self, tester):
        report = tester.test("", "/anything")

        assert len(report.steps) == 1
        assert report.steps[0].matched is False

    def test_self_feeding_rule_stops_at_iteration_cap(self, tester):
        report = tester.test("RewriteRule ^(.*)$ /$1x", "/a")

        assert len(report.steps) == MAX_REWRITE_ITERATIONS
        assert report.final_path == "/a" + "x" * MAX_REWRITE_ITERATIONS

    def test_two_rule_cycle_terminates(self, tester):
        report = tester.test("RewriteRule ^a$ /b\nRewriteRule ^b$ /a", "/a")

        assert len(report.steps) == MAX_REWRITE_ITERATIONS
        assert [s.output_path for s in report.steps[:3]] == ["/b", "/a", "/b"]

    def test_custom_iteration_cap(self):
        report = RewriteTester(max_iterations=3).test("RewriteRule ^(.*)$ /$1", "/loop")

        assert len(report.steps) == 3

    def test_chain_continues_until_last_flag(self, tester):
        rules = (
            "RewriteRule ^a$ /b\n"
            "RewriteRule ^b$ /c [L]\n"
            "RewriteRule ^c$ /d\n"
        )

        report = tester.test(rules, "/a")

        assert [s.output_path for s in report.steps] == ["/b", "/c"]

    def test_backreferences(self, tester):
        rules = r"RewriteRule ^blog/(\d+)/(.*)$ /posts/$2?id=$1 [L]"

        report = tester.test(rules, "/blog/42/hello")

        assert report.final_path == "/posts/hello?id=42"

    def test_missing_group_substitutes_empty_string(self, tester):
        report = tester.test("RewriteRule ^x(.*)$ /y$1$5 [L]", "/xab")

        assert report.final_path == "/yab"

    def test_dash_keeps_path(self, tester):
        report = tester.test("RewriteRule ^keep$ - [L]", "/keep")

        assert report.steps[0].matched is True
        assert report.final_path == "/keep"

    def test_bare_redirect_flag_defaults_to_302(self, tester):
        report = tester.test("RewriteRule ^a$ /b [R,L]", "/a")

        assert report.steps[0].status_code == 302

    def test_rewrite_without_redirect_has_no_status(self, tester):
        report = tester.test("RewriteRule ^a$ /b [L]", "/a")

        assert report.steps[0].status_code is None

    def test_nocase_flag(self, tester):
        report = tester.test("RewriteRule ^About$ /about-us [NC,L]", "/about")

        assert report.final_path == "/about-us"

    def test_case_sensitive_by_default(self, tester):
        report = tester.test("RewriteRule ^About$ /about-us [L]", "/about")

        assert report.matched is False

    def test_long_flag_names(self, tester):
        report = tester.test("RewriteRule ^a$ /b [redirect=308,last]", "/a")

        assert report.steps[0].status_code == 308
        assert len(report.steps) == 1

    def test_negated_pattern(self, tester):
        report = tester.test("RewriteRule !^index /index.php [L]", "/foo")

        assert report.final_path == "/index.php"

    def test_bad_pattern_is_skipped_with_warning(self, tester):
        rules = "RewriteRule ^(unclosed /x [L]\nRewriteRule ^ok$ /fine [L]"

        report = tester.test(rules, "/ok")

        assert report.final_path == "/fine"
        assert report.skipped_lines == [1]
        assert any("Line 1" in w for w in report.warnings)

    def test_conditions_are_reported(self, tester):
        rules = (
            "RewriteCond %{HTTPS} off\n"
            "RewriteRule ^(.*)$ https://example.com/$1 [R=301,L]"
        )

        report = tester.test(rules, "/page")

        assert report.final_path == "https://example.com/page"
        assert report.condition_count == 1
        assert len(report.warnings) == 1
        assert "RewriteCond" in report.warnings[0]

    def test_server_context_matching(self):
        tester = RewriteTester(per_directory=False)

        report = tester.test("RewriteRule ^/old$ /new [L]", "/old")

        assert report.final_path == "/new"


class TestEvaluate:
    """Test the module-level evaluate() helper."""

    def test_returns_steps(self):
        steps = evaluate("RewriteRule ^old-page/?$ /new-page [R=301,L]", "/old-page/")

        assert len(steps) == 1
        assert steps[0].output_path == "/new-page"
