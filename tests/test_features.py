"""
Tests for feature file And/But resolution.
"""

from selenium2playwright.languages.features import convert_feature

FEATURE = """@smoke @login
Feature: Login

  Background:
    Given user is on the login page
    And the cookie banner is dismissed

  Scenario: Valid login
    When user enters "admin" in "Username"
    And user enters "secret" in "Password"
    But user does not tick "Remember me"
    Then user should see "Dashboard"
    And user should see "Welcome"

  Scenario Outline: Bad login
    And this line has nothing to continue
    Given user is on the login page
    When user enters "<name>" in "Username"

    Examples:
      | name |
      | bob  |
"""


class TestConvertFeature:
    def test_and_but_take_previous_keyword(self):
        result = convert_feature(FEATURE)
        lines = result.content.split("\n")

        assert "    Given the cookie banner is dismissed" in lines
        assert '    When user enters "secret" in "Password"' in lines
        assert '    When user does not tick "Remember me"' in lines
        assert '    Then user should see "Welcome"' in lines

    def test_conversion_count(self):
        assert convert_feature(FEATURE).conversions == 4

    def test_section_header_resets_keyword(self):
        """An And right after a Scenario header has nothing to continue."""
        result = convert_feature(FEATURE)

        assert "    And this line has nothing to continue" in result.content.split("\n")
        assert result.unresolved == [16]

    def test_other_lines_unchanged(self):
        result = convert_feature(FEATURE)
        original = FEATURE.split("\n")
        converted = result.content.split("\n")

        assert len(original) == len(converted)
        for before, after in zip(original, converted):
            if not before.strip().startswith(("And ", "But ")):
                assert before == after

    def test_idempotent(self):
        once = convert_feature(FEATURE).content
        twice = convert_feature(once)

        assert twice.content == once
        assert twice.conversions == 0

    def test_conversion_disabled(self):
        result = convert_feature(FEATURE, convert_and_but=False)

        assert result.content == FEATURE
        assert result.conversions == 0
        assert result.unresolved == []

    def test_drop_tags(self):
        result = convert_feature(FEATURE, preserve_tags=False)

        assert result.tags_dropped == 1
        assert not result.content.startswith("@smoke")
        assert result.content.startswith("Feature: Login")

    def test_and_inside_step_text_untouched(self):
        result = convert_feature("  Given salt And pepper\n")
        assert result.content == "  Given salt And pepper\n"
