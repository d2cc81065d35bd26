"""
Locator translation: Selenium XPath and @FindBy strategies to Playwright locators.

Generated text is a locator call without its receiver, e.g.
``getByRole('button', { name: 'Submit' })``; callers prefix ``page.`` or
``this.page.`` as needed.
"""

import json
import logging
import re
from typing import Tuple

from ..core.extraction_result import FALLBACK_SENTINEL, ExtractionResult, RuleTag
from ..core.rules import RuleSet, pattern_rule
from .utils import js_regex, ts_literal, ts_string

logger = logging.getLogger(__name__)

TEXT_FN = r"(?:text\(\)|normalize-space\(\)|normalize-space\(text\(\)\)|\.)"
QUOTED = r"""['"](.+?)['"]"""
ANY_TAG = r"(?:\w+|\*)"

QAF_PREFIX = re.compile(r"^(xpath|css|id|name|link|partialLink|className|tagName)\s*=\s*(.+)$", re.DOTALL)


def _role(role: str, name: str) -> str:
    return f"getByRole('{role}', {{ name: {ts_string(name)} }})"


def _role_regex(role: str, name: str) -> str:
    return f"getByRole('{role}', {{ name: /{js_regex(name)}/i }})"


def _css(selector: str) -> str:
    return f"locator({ts_string(selector)})"


def _id_selector(value: str) -> str:
    if re.match(r"^[A-Za-z_][\w-]*$", value):
        return f"#{value}"
    return f'[id="{value}"]'


def clean_xpath(expression: str) -> str:
    """Strip a leading ``xpath=`` and surrounding whitespace."""
    return re.sub(r"^xpath\s*=\s*", "", expression.strip())


def fallback_locator(expression: str) -> str:
    """
    Locator used when no rule matched.

    The raw expression is kept verbatim as an ``xpath=`` selector so the
    generated code still runs, followed by the review sentinel.
    """
    selector = expression if expression.startswith("xpath=") else f"xpath={expression}"
    return f"locator({ts_literal(selector)}) /* {FALLBACK_SENTINEL} */"


XPATH_RULES = RuleSet(
    "xpath",
    [
        pattern_rule(
            "select-by-id-or-name",
            r"""^//select\[@(id|name)=['"]([\w-]+)['"]\]$""",
            lambda m, _: _css(_id_selector(m.group(2)) if m.group(1) == "id" else f'select[name="{m.group(2)}"]'),
            tag=RuleTag.STRUCTURAL,
            needs_review=True,
        ),
        pattern_rule(
            "id",
            rf"""^//{ANY_TAG}\[@id=['"]([\w-]+)['"]\]$""",
            lambda m, _: _css(_id_selector(m.group(1))),
            tag=RuleTag.STRUCTURAL,
        ),
        pattern_rule(
            "button-text",
            rf"^//button\[{TEXT_FN}\s*=\s*{QUOTED}\]$",
            lambda m, _: _role("button", m.group(1)),
        ),
        pattern_rule(
            "button-contains-text",
            rf"^//button\[contains\({TEXT_FN},\s*{QUOTED}\)\]$",
            lambda m, _: _role_regex("button", m.group(1)),
        ),
        pattern_rule(
            "link-text",
            rf"^//a\[{TEXT_FN}\s*=\s*{QUOTED}\]$",
            lambda m, _: _role("link", m.group(1)),
        ),
        pattern_rule(
            "link-contains-text",
            rf"^//a\[contains\({TEXT_FN},\s*{QUOTED}\)\]$",
            lambda m, _: _role_regex("link", m.group(1)),
        ),
        pattern_rule(
            "placeholder",
            r"""^//(?:input|textarea)\[@placeholder=['"](.*?)['"]\]$""",
            lambda m, _: f"getByPlaceholder({ts_string(m.group(1))})",
        ),
        pattern_rule(
            "label-sibling-input",
            rf"^//label\[{TEXT_FN}\s*=\s*{QUOTED}\]/following-sibling::(?:input|select|textarea)",
            lambda m, _: f"getByLabel({ts_string(m.group(1))})",
        ),
        pattern_rule(
            "test-id",
            rf"""^//{ANY_TAG}\[@data-(?:testid|test-id|test)=['"]([\w-]+)['"]\]$""",
            lambda m, _: f"getByTestId({ts_string(m.group(1))})",
        ),
        pattern_rule(
            "aria-label",
            rf"^//{ANY_TAG}\[@aria-label={QUOTED}\]$",
            lambda m, _: f"getByLabel({ts_string(m.group(1))})",
        ),
        pattern_rule(
            "class",
            r"""^//(\w+)\[@class=['"]([\w\s-]+)['"]\]$""",
            lambda m, _: _css(m.group(1) + "." + ".".join(m.group(2).split())),
            tag=RuleTag.STRUCTURAL,
        ),
        pattern_rule(
            "class-contains",
            rf"^//(\w+)\[contains\(@class,\s*{QUOTED}\)\]$",
            lambda m, _: _css(f'{m.group(1)}[class*="{m.group(2)}"]'),
            tag=RuleTag.STRUCTURAL,
        ),
        pattern_rule(
            "name",
            r"""^//(\w+)\[@name=['"]([\w-]+)['"]\]$""",
            lambda m, _: _css(f'{m.group(1)}[name="{m.group(2)}"]'),
            tag=RuleTag.STRUCTURAL,
        ),
        pattern_rule(
            "exact-text",
            rf"^//{ANY_TAG}\[{TEXT_FN}\s*=\s*{QUOTED}\]$",
            lambda m, _: f"getByText({ts_string(m.group(1))}, {{ exact: true }})",
        ),
        pattern_rule(
            "contains-text",
            rf"^//{ANY_TAG}\[contains\({TEXT_FN},\s*{QUOTED}\)\]$",
            lambda m, _: f"getByText({ts_string(m.group(1))})",
        ),
    ],
    fallback=fallback_locator,
)


STRATEGY_RULES = RuleSet(
    "find-by",
    [
        pattern_rule(
            "id", r"^id=(.+)$", lambda m, _: _css(_id_selector(m.group(1))), tag=RuleTag.STRUCTURAL, flags=re.DOTALL
        ),
        pattern_rule("css", r"^css=(.+)$", lambda m, _: _css(m.group(1)), tag=RuleTag.STRUCTURAL, flags=re.DOTALL),
        pattern_rule("name", r"^name=(.+)$", lambda m, _: _css(f'[name="{m.group(1)}"]'), tag=RuleTag.STRUCTURAL),
        pattern_rule(
            "class-name", r"^className=([\w-]+)$", lambda m, _: _css(f".{m.group(1)}"), tag=RuleTag.STRUCTURAL
        ),
        pattern_rule("tag-name", r"^tagName=(\w+)$", lambda m, _: _css(m.group(1)), tag=RuleTag.STRUCTURAL),
        pattern_rule("link-text", r"^(?:linkText|link)=(.+)$", lambda m, _: _role("link", m.group(1))),
        pattern_rule(
            "partial-link-text", r"^(?:partialLinkText|partialLink)=(.+)$", lambda m, _: _role_regex("link", m.group(1))
        ),
    ],
    fallback=lambda expression: f"locator({ts_literal(expression.split('=', 1)[-1])}) /* {FALLBACK_SENTINEL} */",
)


def split_qaf_locator(value: str) -> Tuple[str, str]:
    """
    Resolve a QAF ``locator`` value into (strategy, value).

    Handles ``xpath=...``/``css=...`` prefixes, bare XPath, and the JSON form
    ``{"locator": "...", "desc": "..."}``. Anything else (e.g. a key into a
    locator properties file) comes back as ("locator", value).
    """
    value = value.strip()

    if value.startswith("{"):
        try:
            data = json.loads(value)
        except ValueError:
            logger.debug(f"QAF locator is not valid JSON: {value}")
        else:
            inner = data.get("locator") if isinstance(data, dict) else None
            if isinstance(inner, str):
                return split_qaf_locator(inner)

    match = QAF_PREFIX.match(value)
    if match:
        return match.group(1), match.group(2).strip()

    if value.startswith("/") or value.startswith("(/"):
        return "xpath", value

    return "locator", value


def translate_xpath(expression: str) -> ExtractionResult:
    """Translate one XPath expression."""
    return XPATH_RULES.translate(clean_xpath(expression))


def translate_locator(strategy: str, value: str) -> ExtractionResult:
    """
    Translate a locator given as a @FindBy strategy and value.

    Args:
        strategy: xpath, id, css, name, className, tagName, linkText,
            partialLinkText or locator (QAF)
        value: The locator string

    Returns:
        ExtractionResult with receiver-less locator text
    """
    if strategy == "locator":
        strategy, value = split_qaf_locator(value)

    if strategy == "xpath":
        return translate_xpath(value)

    return STRATEGY_RULES.translate(f"{strategy}={value}")
