"""
Step sentence rules: common QAF/Cucumber step phrasings to Playwright actions.

Each generator receives the regex match over the step description and the
step method's Java parameters. Placeholders such as ``{0}`` or ``{username}``
in the sentence resolve to the matching parameter name; literal words become
string literals.
"""

import re
from typing import Sequence

from ..core.extraction_result import RuleTag
from ..core.rewriter import stub_body
from ..core.rules import RuleSet, pattern_rule
from ..core.scanner import JavaParam
from .utils import is_placeholder, js_regex, ts_string

PLACEHOLDERS = re.compile(r"\{\w*\}")

Q = r"""['"]?"""  # optional quote around captured words

KEYS = {
    "enter": "Enter",
    "return": "Enter",
    "tab": "Tab",
    "escape": "Escape",
    "esc": "Escape",
    "backspace": "Backspace",
    "delete": "Delete",
    "space": "Space",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "home": "Home",
    "end": "End",
}


def _param_name(placeholder: str, ordinal: int, params: Sequence[JavaParam]) -> str:
    """Resolve a placeholder to a parameter name, raising LookupError if none fits."""
    key = placeholder.strip()[1:-1]
    if key.isdigit() and int(key) < len(params):
        return params[int(key)].name
    for param in params:
        if param.name == key:
            return param.name
    if ordinal < len(params):
        return params[ordinal].name
    raise LookupError(f"No parameter for placeholder {placeholder}")


def _raw(match, group: int) -> str:
    return match.group(group).strip().strip("'\"")


def _is_param(match, group: int) -> bool:
    return is_placeholder(_raw(match, group))


def _arg(match, group: int, params: Sequence[JavaParam]) -> str:
    """TypeScript expression for a captured group: a parameter name or a string literal."""
    text = _raw(match, group)
    if not is_placeholder(text):
        return ts_string(text)
    ordinal = len(PLACEHOLDERS.findall(match.string[: match.start(group)]))
    return _param_name(text, ordinal, params)


def _pattern_arg(match, group: int, params: Sequence[JavaParam]) -> str:
    """A case-insensitive regex matching the captured text."""
    if _is_param(match, group):
        return f"new RegExp({_arg(match, group, params)}, 'i')"
    return f"/{js_regex(_raw(match, group))}/i"


def _slug(match, group: int, params: Sequence[JavaParam]) -> str:
    if _is_param(match, group):
        return f"`/${{{_arg(match, group, params)}}}`"
    return ts_string("/" + re.sub(r"\s+", "-", _raw(match, group).lower()))


def _click_role(role: str):
    return lambda m, p: f"await page.getByRole('{role}', {{ name: {_arg(m, 1, p)} }}).click();"


def _wait_seconds(match, params) -> str:
    if _is_param(match, 1):
        return f"await page.waitForTimeout({_arg(match, 1, params)} * 1000);"
    return f"await page.waitForTimeout({int(_raw(match, 1)) * 1000});"


def _press(match, _params) -> str:
    key = _raw(match, 1)
    return f"await page.keyboard.press('{KEYS.get(key.lower(), key.capitalize())}');"


def _has_text(match, params) -> str:
    target = _arg(match, 1, params)
    expected = _arg(match, 3, params)
    if match.group(2).lower() == "value":
        return f"await expect(page.getByLabel({target})).toHaveValue({expected});"
    return f"await expect(page.getByText({target})).toContainText({expected});"


def _validate_section(match, params) -> str:
    if _is_param(match, 1):
        test_id = _arg(match, 1, params)
    else:
        test_id = ts_string(re.sub(r"[^a-z0-9]+", "-", _raw(match, 1).lower()).strip("-"))
    return f"await expect(page.getByTestId({test_id})).toBeVisible();"


def _row_click(match, params) -> str:
    if _is_param(match, 1):
        return f"await page.locator('table tbody tr').nth({_arg(match, 1, params)} - 1).click();"
    return f"await page.locator('table tbody tr').nth({int(_raw(match, 1)) - 1}).click();"


LOGIN = "\n".join(
    [
        "await page.getByLabel('Username').fill(process.env.DEFAULT_USER || 'testuser');",
        "await page.getByLabel('Password').fill(process.env.DEFAULT_PASS || 'testpass');",
        "await page.getByRole('button', { name: /login|sign in/i }).click();",
        "await page.waitForLoadState('networkidle');",
    ]
)

LOGOUT = "\n".join(
    [
        "await page.getByRole('button', { name: /logout|sign out/i }).click();",
        "await page.waitForLoadState('networkidle');",
    ]
)

STEP_RULES = RuleSet(
    "steps",
    [
        # Navigation
        pattern_rule(
            "navigate-to",
            rf"user (?:navigates?|goes?) to {Q}(.+?){Q}$",
            lambda m, p: f"await page.goto({_arg(m, 1, p)});\nawait page.waitForLoadState('networkidle');",
            tag=RuleTag.STRUCTURAL,
            flags=re.I,
        ),
        pattern_rule(
            "open-page",
            rf"user (?:is on|opens?) (?:the )?{Q}(.+?){Q} page$",
            lambda m, p: f"await page.goto({_slug(m, 1, p)});\nawait page.waitForLoadState('networkidle');",
            tag=RuleTag.STRUCTURAL,
            flags=re.I,
        ),
        # Session
        pattern_rule("log-out", r"user logs? out$", lambda m, p: LOGOUT, flags=re.I),
        pattern_rule("log-in", r"user logs? in(?:to)?(?: with)?(?: default)?(?: credentials)?", lambda m, p: LOGIN, flags=re.I),
        # Clicks
        pattern_rule("click-row", r"user clicks? (?:on )?row (\d+|\{\w*\})", _row_click, tag=RuleTag.STRUCTURAL, flags=re.I),
        pattern_rule(
            "click-first-row",
            r"user clicks? (?:on )?(?:the )?first row",
            lambda m, p: "await page.locator('table tbody tr').first().click();",
            tag=RuleTag.STRUCTURAL,
            flags=re.I,
        ),
        pattern_rule("click-button", rf"user clicks? (?:on )?(?:the )?button {Q}(.+?){Q}$", _click_role("button"), flags=re.I),
        pattern_rule("click-link", rf"user clicks? (?:on )?(?:the )?link {Q}(.+?){Q}$", _click_role("link"), flags=re.I),
        pattern_rule("click-tab", rf"user clicks? (?:on )?(?:the )?tab {Q}(.+?){Q}$", _click_role("tab"), flags=re.I),
        pattern_rule("click-named-button", rf"user clicks? (?:on )?(?:the )?{Q}(.+?){Q} button$", _click_role("button"), flags=re.I),
        pattern_rule("click-named-link", rf"user clicks? (?:on )?(?:the )?{Q}(.+?){Q} link$", _click_role("link"), flags=re.I),
        pattern_rule("click-named-tab", rf"user clicks? (?:on )?(?:the )?{Q}(.+?){Q} tab$", _click_role("tab"), flags=re.I),
        pattern_rule(
            "click-text",
            rf"user clicks? (?:on )?(?:the )?{Q}(.+?){Q}$",
            lambda m, p: f"await page.getByText({_arg(m, 1, p)}).click();",
            flags=re.I,
        ),
        # Input
        pattern_rule(
            "enter-into-field",
            rf"user (?:enters?|types?|inputs?|fills?) {Q}(.+?){Q} (?:in|into) (?:the )?{Q}(.+?){Q}(?: field)?$",
            lambda m, p: f"await page.getByLabel({_arg(m, 2, p)}).fill({_arg(m, 1, p)});",
            flags=re.I,
        ),
        pattern_rule(
            "enter-focused",
            rf"user (?:enters?|types?|fills?) {Q}(.+?){Q}$",
            lambda m, p: f"await page.locator('input:focus, textarea:focus').fill({_arg(m, 1, p)});",
            tag=RuleTag.STRUCTURAL,
            flags=re.I,
        ),
        pattern_rule(
            "clear-field",
            rf"user clears? (?:the )?{Q}(.+?){Q}(?: field)?$",
            lambda m, p: f"await page.getByLabel({_arg(m, 1, p)}).clear();",
            flags=re.I,
        ),
        # Checkboxes
        pattern_rule(
            "uncheck",
            rf"user unchecks? (?:the )?{Q}(.+?){Q} checkbox$",
            lambda m, p: f"await page.getByLabel({_arg(m, 1, p)}).uncheck();",
            flags=re.I,
        ),
        pattern_rule(
            "check",
            rf"user (?:checks?|selects?) (?:the )?{Q}(.+?){Q} checkbox$",
            lambda m, p: f"await page.getByLabel({_arg(m, 1, p)}).check();",
            flags=re.I,
        ),
        # Dropdowns
        pattern_rule(
            "select-from",
            rf"user selects? {Q}(.+?){Q} from (?:the )?{Q}(.+?){Q}(?: dropdown)?$",
            lambda m, p: f"await page.getByLabel({_arg(m, 2, p)}).selectOption({_arg(m, 1, p)});",
            flags=re.I,
        ),
        pattern_rule(
            "select-option",
            rf"user selects? (?:the )?option {Q}(.+?){Q}$",
            lambda m, p: f"await page.getByRole('option', {{ name: {_arg(m, 1, p)} }}).click();",
            flags=re.I,
        ),
        # Waits
        pattern_rule(
            "wait-page-load",
            r"user waits? for (?:the )?page to load$",
            lambda m, p: "await page.waitForLoadState('networkidle');",
            tag=RuleTag.STRUCTURAL,
            flags=re.I,
        ),
        pattern_rule(
            "wait-seconds",
            r"user waits? for (\d+|\{\w*\}) seconds?$",
            _wait_seconds,
            tag=RuleTag.STRUCTURAL,
            flags=re.I,
        ),
        pattern_rule(
            "wait-visible",
            rf"user waits? (?:for )?(?:the )?{Q}(.+?){Q} (?:to be )?(?:visible|displayed)$",
            lambda m, p: f"await page.getByText({_arg(m, 1, p)}).waitFor({{ state: 'visible' }});",
            flags=re.I,
        ),
        # Assertions
        pattern_rule(
            "title",
            rf"(?:the )?page title should (?:be|contain) {Q}(.+?){Q}$",
            lambda m, p: f"await expect(page).toHaveTitle({_pattern_arg(m, 1, p)});",
            flags=re.I,
        ),
        pattern_rule(
            "url",
            rf"(?:the )?(?:page )?URL should contain {Q}(.+?){Q}$",
            lambda m, p: f"await expect(page).toHaveURL({_pattern_arg(m, 1, p)});",
            flags=re.I,
        ),
        pattern_rule(
            "not-visible",
            rf"^(?:the )?{Q}(.+?){Q} should not be (?:visible|displayed)$",
            lambda m, p: f"await expect(page.getByText({_arg(m, 1, p)})).toBeHidden();",
            flags=re.I,
        ),
        pattern_rule(
            "has-text",
            rf"^(?:the )?{Q}(.+?){Q} should (?:have|contain) (?:the )?(text|value) {Q}(.+?){Q}$",
            _has_text,
            flags=re.I,
        ),
        pattern_rule(
            "sees-displayed",
            rf"(?:user )?(?:should )?sees? (?:the )?{Q}(.+?){Q} (?:is )?displayed$",
            lambda m, p: f"await expect(page.getByText({_arg(m, 1, p)})).toBeVisible();",
            flags=re.I,
        ),
        pattern_rule(
            "visible",
            rf"^(?:the )?{Q}(.+?){Q} (?:should be|is) (?:visible|displayed)$",
            lambda m, p: f"await expect(page.getByText({_arg(m, 1, p)})).toBeVisible();",
            flags=re.I,
        ),
        pattern_rule(
            "sees-text",
            rf"(?:user )?(?:should )?sees? (?:the )?(?:text )?{Q}(.+?){Q}$",
            lambda m, p: f"await expect(page.getByText({_arg(m, 1, p)})).toBeVisible();",
            flags=re.I,
        ),
        pattern_rule(
            "validate-section",
            rf"(?:user )?validates? (?:the )?{Q}(.+?){Q}(?: tab)?(?: fields)?$",
            _validate_section,
            tag=RuleTag.STRUCTURAL,
            needs_review=True,
            flags=re.I,
        ),
        # Scrolling
        pattern_rule(
            "scroll-bottom",
            r"user scrolls? (?:to )?(?:the )?(?:bottom|end)",
            lambda m, p: "await page.evaluate(() => window.scrollTo(0, document.body.scrollHeight));",
            tag=RuleTag.STRUCTURAL,
            flags=re.I,
        ),
        pattern_rule(
            "scroll-top",
            r"user scrolls? (?:to )?(?:the )?top",
            lambda m, p: "await page.evaluate(() => window.scrollTo(0, 0));",
            tag=RuleTag.STRUCTURAL,
            flags=re.I,
        ),
        # Keyboard
        pattern_rule("press-key", rf"user presses? (?:the )?{Q}(\w+){Q} key$", _press, flags=re.I),
    ],
    fallback=lambda description: stub_body(f"Original step: {description}"),
)


def translate_step(description: str, params: Sequence[JavaParam] = ()):
    """Translate one step sentence into Playwright statements."""
    return STEP_RULES.translate(description, params)
