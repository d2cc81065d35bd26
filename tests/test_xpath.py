"""
Tests for locator translation.
"""

import pytest

from selenium2playwright.core.extraction_result import FALLBACK_SENTINEL, RuleTag
from selenium2playwright.languages.xpath import (
    fallback_locator,
    split_qaf_locator,
    translate_locator,
    translate_xpath,
)


class TestTranslateXPath:
    """XPath expressions to Playwright locators."""

    @pytest.mark.parametrize(
        "xpath,expected",
        [
            ("//button[text()='Save']", "getByRole('button', { name: 'Save' })"),
            ("//button[normalize-space()='Save']", "getByRole('button', { name: 'Save' })"),
            ("//button[contains(text(),'Sub')]", "getByRole('button', { name: /Sub/i })"),
            ("//a[text()='Home']", "getByRole('link', { name: 'Home' })"),
            ("//input[@placeholder='Search']", "getByPlaceholder('Search')"),
            ("//label[text()='Email']/following-sibling::input", "getByLabel('Email')"),
            ("//div[@data-testid='cart']", "getByTestId('cart')"),
            ("//span[@aria-label='Close']", "getByLabel('Close')"),
            ("//h1[text()='Welcome']", "getByText('Welcome', { exact: true })"),
            ("//div[contains(text(),'Welcome')]", "getByText('Welcome')"),
        ],
    )
    def test_semantic_rules(self, xpath, expected):
        result = translate_xpath(xpath)

        assert result.text == expected
        assert result.tag is RuleTag.SEMANTIC

    @pytest.mark.parametrize(
        "xpath,expected",
        [
            ("//input[@id='username']", "locator('#username')"),
            ("//*[@id='main']", "locator('#main')"),
            ("//div[@class='nav bar']", "locator('div.nav.bar')"),
            ("//div[contains(@class,'active')]", "locator('div[class*=\"active\"]')"),
            ("//input[@name='email']", "locator('input[name=\"email\"]')"),
        ],
    )
    def test_structural_rules(self, xpath, expected):
        result = translate_xpath(xpath)

        assert result.text == expected
        assert result.tag is RuleTag.STRUCTURAL

    def test_select_by_id_needs_review(self):
        """Select elements match before the generic id rule and are flagged."""
        result = translate_xpath("//select[@id='country']")

        assert result.text == "locator('#country')"
        assert result.rule == "select-by-id-or-name"
        assert result.needs_review

    def test_xpath_prefix_is_stripped(self):
        assert translate_xpath("xpath=//input[@id='q']").text == "locator('#q')"

    def test_quote_in_name_is_escaped(self):
        result = translate_xpath('//button[text()="Don\'t save"]')

        assert result.text == "getByRole('button', { name: 'Don\\'t save' })"

    def test_unmatched_xpath_falls_back_with_full_original(self):
        xpath = "//table[@id='orders']//tr[3]/td[contains(@class,'status')]/span[2]"
        result = translate_xpath(xpath)

        assert result.tag is RuleTag.FALLBACK
        assert FALLBACK_SENTINEL in result.text
        # The original expression is embedded verbatim, not truncated
        assert xpath in result.text
        assert result.text.startswith('locator("xpath=')

    def test_positional_xpath_falls_back(self):
        result = translate_xpath("//div[@class='x']/span[2]/a")

        assert result.tag is RuleTag.FALLBACK
        assert "//div[@class='x']/span[2]/a" in result.text

    def test_fallback_is_deterministic(self):
        assert translate_xpath("//div[3]/span").text == translate_xpath("//div[3]/span").text


class TestFallbackLocator:
    def test_keeps_existing_prefix(self):
        assert fallback_locator("xpath=//div") == f"locator('xpath=//div') /* {FALLBACK_SENTINEL} */"

    def test_adds_prefix(self):
        assert fallback_locator("//div[2]") == f"locator('xpath=//div[2]') /* {FALLBACK_SENTINEL} */"


class TestTranslateLocator:
    """@FindBy strategies."""

    @pytest.mark.parametrize(
        "strategy,value,expected",
        [
            ("id", "login", "locator('#login')"),
            ("css", "div.card > a", "locator('div.card > a')"),
            ("name", "email", "locator('[name=\"email\"]')"),
            ("className", "btn-primary", "locator('.btn-primary')"),
            ("tagName", "h1", "locator('h1')"),
            ("linkText", "Sign up", "getByRole('link', { name: 'Sign up' })"),
            ("partialLinkText", "Sign", "getByRole('link', { name: /Sign/i })"),
        ],
    )
    def test_strategies(self, strategy, value, expected):
        assert translate_locator(strategy, value).text == expected

    def test_xpath_strategy_uses_xpath_rules(self):
        assert translate_locator("xpath", "//a[text()='Home']").rule == "link-text"

    def test_id_with_unusual_characters(self):
        assert translate_locator("id", "form:user.name").text == "locator('[id=\"form:user.name\"]')"

    def test_qaf_prefixed_locator(self):
        assert translate_locator("locator", "css=#cart").text == "locator('#cart')"

    def test_qaf_json_locator(self):
        result = translate_locator("locator", '{"locator": "xpath=//input[@id=\'q\']", "desc": "search"}')
        assert result.text == "locator('#q')"

    def test_qaf_property_key_falls_back(self):
        result = translate_locator("locator", "login.username.input")

        assert result.tag is RuleTag.FALLBACK
        assert "login.username.input" in result.text


class TestSplitQafLocator:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("xpath=//div", ("xpath", "//div")),
            ("css = .card", ("css", ".card")),
            ("//div[@id='x']", ("xpath", "//div[@id='x']")),
            ("(//div)[2]", ("xpath", "(//div)[2]")),
            ('{"locator": "id=user"}', ("id", "user")),
            ("{not json", ("locator", "{not json")),
            ("home.title", ("locator", "home.title")),
        ],
    )
    def test_split(self, value, expected):
        assert split_qaf_locator(value) == expected
