"""
Tests for placeholder-scoped rewriting.
"""

from selenium2playwright.core.rewriter import (
    PLACEHOLDER_SENTINEL,
    PlaceholderRewriter,
    indent,
    method_stub_pattern,
    step_stub_pattern,
    stub_body,
)

PAGE_TS = """export class LoginPage extends BasePage {
  async login(user: string): Promise<void> {
    // TODO: Implement - login
    throw new Error('Not implemented');
  }

  async logout(): Promise<void> {
    await this.logoutButton.click();
  }
}
"""

STEPS_TS = """Then('user sees {string}', async ({ loginPage }, text: string) => {
  // TODO: Implement - Original method: sees
  throw new Error('Not implemented');
});

When('user can\\'t log in', async ({ loginPage }) => {
  // TODO: Implement - Original method: cannotLogIn
  throw new Error('Not implemented');
});
"""


class TestStubs:
    def test_stub_body(self):
        assert stub_body("login") == f"// {PLACEHOLDER_SENTINEL} - login\nthrow new Error('Not implemented');"

    def test_indent_skips_blank_lines(self):
        assert indent("a\n\nb", "  ") == "  a\n\n  b"


class TestPatterns:
    def test_method_stub_matches_placeholder(self):
        assert method_stub_pattern("login").search(PAGE_TS)

    def test_converted_method_not_matched(self):
        assert method_stub_pattern("logout").search(PAGE_TS) is None

    def test_method_name_is_exact(self):
        assert method_stub_pattern("log").search(PAGE_TS) is None

    def test_step_stub_keeps_keyword(self):
        match = step_stub_pattern("user sees {string}").search(STEPS_TS)
        assert match.group(1) == "Then"

    def test_step_with_quote(self):
        assert step_stub_pattern("user can't log in").search(STEPS_TS)


class TestPlaceholderRewriter:
    def test_rewrite_replaces_stub(self):
        rewriter = PlaceholderRewriter(PAGE_TS)
        pattern = method_stub_pattern("login")

        assert rewriter.rewrite(pattern, lambda m: "async login(user: string): Promise<void> {\n    done();\n  }")
        assert "done();" in rewriter.content
        assert rewriter.content.count(PLACEHOLDER_SENTINEL) == 0
        assert rewriter.changed
        assert rewriter.counts() == (1, 0, 0)

    def test_rewrite_is_idempotent(self):
        """Once replaced the stub is gone, so a second pass finds nothing."""
        pattern = method_stub_pattern("login")
        first = PlaceholderRewriter(PAGE_TS)
        first.rewrite(pattern, lambda m: "async login(user: string): Promise<void> {\n    done();\n  }")

        second = PlaceholderRewriter(first.content)
        assert not second.rewrite(pattern, lambda m: "SHOULD NOT APPEAR")
        assert second.content == first.content
        assert second.counts() == (0, 0, 1)

    def test_build_returning_none_leaves_stub(self):
        rewriter = PlaceholderRewriter(PAGE_TS)

        assert not rewriter.rewrite(method_stub_pattern("login"), lambda m: None)
        assert rewriter.content == PAGE_TS
        assert not rewriter.changed
        assert rewriter.skipped == 1

    def test_has_placeholder(self):
        rewriter = PlaceholderRewriter(PAGE_TS)

        assert rewriter.has_placeholder(method_stub_pattern("login"))
        assert not rewriter.has_placeholder(method_stub_pattern("logout"))

    def test_rest_of_file_untouched(self):
        rewriter = PlaceholderRewriter(STEPS_TS)
        rewriter.rewrite(step_stub_pattern("user sees {string}"), lambda m: f"{m.group(1)}('user sees {{string}}');")

        assert rewriter.content.startswith("Then('user sees {string}');\n\nWhen('user can\\'t log in'")
