"""
Page method rules: Selenium method bodies to Playwright implementations.

Units are Java page-object methods together with the locator fields that
exist on the generated TypeScript class. A matcher accepts a method by its
name or body; the generator then looks for the locator the body acts on. A
generator that cannot find what it needs returns None and later rules get a
chance.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..core.extraction_result import RuleTag
from ..core.rewriter import stub_body
from ..core.rules import Rule, RuleSet
from ..core.scanner import JavaMethod, JavaParam
from .step_patterns import KEYS
from .utils import ts_string

NAME_PREFIXES = re.compile(r"^(click|enter|type|get|set|verify|validate|check|select|wait|hover|is)", re.I)
NAME_SUFFIXES = re.compile(r"(Button|Link|Text|Field|Input|Checkbox|Dropdown|Element|Displayed|Visible)$", re.I)


@dataclass(frozen=True)
class MethodUnit:
    """A Java method plus the locator names available on the page class."""

    method: JavaMethod
    locators: Tuple[str, ...]

    @property
    def name(self) -> str:
        return self.method.name.lower()

    @property
    def body(self) -> str:
        return self.method.body.lower()

    def locator_in(self, *patterns: str) -> Optional[str]:
        """First locator name captured by one of the patterns in the body."""
        for pattern in patterns:
            for match in re.finditer(pattern, self.method.body, re.I):
                if match.group(1) in self.locators:
                    return match.group(1)
        return None

    def inferred_locator(self) -> Optional[str]:
        """Guess the locator from the method name, e.g. clickLoginButton -> login."""
        base = NAME_SUFFIXES.sub("", NAME_PREFIXES.sub("", self.method.name))
        if not base:
            return None

        lowered = base.lower()
        for locator in self.locators:
            if locator.lower() == lowered:
                return locator
        for locator in self.locators:
            if lowered in locator.lower() or locator.lower() in lowered:
                return locator
        return None

    def target(self, *patterns: str) -> Optional[str]:
        return self.locator_in(*patterns) or self.inferred_locator()

    def __str__(self) -> str:
        return self.method.name


def _when(*names: str, body: Sequence[str] = ()):
    """Matcher accepting a unit whose lowercased name or body contains a keyword."""

    def matcher(unit: MethodUnit):
        if any(key in unit.name for key in names) or any(key in unit.body for key in body):
            return unit
        return None

    return matcher


def _string_param(params: Sequence[JavaParam]) -> Optional[JavaParam]:
    for param in params:
        if param.ts_type == "string":
            return param
    for param in params:
        lowered = param.name.lower()
        if "text" in lowered or "value" in lowered:
            return param
    return None


def _click(unit: MethodUnit, params):
    locator = unit.locator_in(r"(\w+)\.click\(\)")
    if locator:
        return f"await this.{locator}.click();"
    text = _string_param(params)
    if text:
        return f"await this.page.getByRole('button', {{ name: {text.name} }}).click();"
    locator = unit.inferred_locator()
    if locator:
        return f"await this.{locator}.click();"
    return None


def _double_click(unit: MethodUnit, _params):
    locator = unit.target(r"(\w+)\.doubleClick\(\)", r"doubleClick\(\s*(\w+)\s*\)")
    return f"await this.{locator}.dblclick();" if locator else None


def _right_click(unit: MethodUnit, _params):
    locator = unit.target(r"(\w+)\.contextClick\(\)", r"contextClick\(\s*(\w+)\s*\)")
    return f"await this.{locator}.click({{ button: 'right' }});" if locator else None


def _keyboard(unit: MethodUnit, _params):
    match = re.search(r"Keys\.(\w+)", unit.method.body)
    if not match:
        return None
    key = match.group(1)
    name = KEYS.get(key.lower().replace("arrow_", ""), key.capitalize())
    locator = unit.locator_in(r"(\w+)\.sendKeys\(\s*Keys\.")
    if locator:
        return f"await this.{locator}.press('{name}');"
    return f"await this.page.keyboard.press('{name}');"


def _fill(unit: MethodUnit, params):
    text = _string_param(params)
    value = text.name if text else "''"
    locator = unit.locator_in(r"(\w+)\.(?:sendKeys|clear)\(")
    if locator:
        return f"await this.{locator}.fill({value});"
    if text:
        locator = unit.inferred_locator()
        if locator:
            return f"await this.{locator}.fill({value});"
    return None


def _get_text(unit: MethodUnit, _params):
    if "getvalue" in unit.name or 'getattribute("value")' in unit.body:
        locator = unit.target(r"(\w+)\.getAttribute\(")
        return f"return await this.{locator}.inputValue();" if locator else None
    locator = unit.target(r"(\w+)\.getText\(\)")
    return f"return await this.{locator}.innerText();" if locator else None


def _get_attribute(unit: MethodUnit, _params):
    attribute = re.search(r"\.getAttribute\s*\(\s*[\"'](\w[\w-]*)[\"']\s*\)", unit.method.body)
    locator = unit.locator_in(r"(\w+)\.getAttribute")
    if attribute and locator:
        return f"return await this.{locator}.getAttribute('{attribute.group(1)}');"
    return None


def _wait(unit: MethodUnit, _params):
    body = unit.body
    if "invisib" in body or "notvisible" in body:
        locator = unit.locator_in(r"invisibilityOf(?:Element)?(?:Located)?\s*\(\s*(\w+)\s*\)")
        return f"await this.{locator}.waitFor({{ state: 'hidden' }});" if locator else None
    if "clickable" in body:
        locator = unit.locator_in(r"elementToBeClickable\s*\(\s*(\w+)\s*\)")
        if locator:
            return f"await this.{locator}.waitFor({{ state: 'visible' }});\nawait expect(this.{locator}).toBeEnabled();"
        return None
    if "visib" in body or "displayed" in body:
        locator = unit.locator_in(r"visibilityOf(?:Element)?(?:Located)?\s*\(\s*(\w+)\s*\)", r"(\w+)\.waitForVisible\(")
        if locator:
            return f"await this.{locator}.waitFor({{ state: 'visible' }});"
    return "await this.page.waitForLoadState('networkidle');"


def _select(unit: MethodUnit, params):
    body = unit.body
    locator = unit.locator_in(r"new\s+Select\s*\(\s*(\w+)\s*\)", r"(\w+)\.selectBy")
    if not locator:
        return None
    if "selectbyvisibletext" in body or "selectbytext" in body:
        text = _string_param(params)
        return f"await this.{locator}.selectOption({{ label: {text.name} }});" if text else None
    if "selectbyvalue" in body:
        text = _string_param(params)
        return f"await this.{locator}.selectOption({{ value: {text.name} }});" if text else None
    if "selectbyindex" in body:
        index = next((p for p in params if p.ts_type == "number" or "index" in p.name.lower()), None)
        return f"await this.{locator}.selectOption({{ index: {index.name} }});" if index else None
    return None


def _checkbox(unit: MethodUnit, _params):
    locator = unit.target(r"(\w+)\.(?:click|isSelected)\(")
    if not locator:
        return None
    if "uncheck" in unit.name or ("if" in unit.body and "isselected" in unit.body and "!" in unit.body):
        return f"await this.{locator}.uncheck();"
    return f"await this.{locator}.check();"


def _is_visible(unit: MethodUnit, _params):
    locator = unit.target(r"(\w+)\.isDisplayed\(\)")
    return f"return await this.{locator}.isVisible();" if locator else None


def _is_enabled(unit: MethodUnit, _params):
    locator = unit.target(r"(\w+)\.isEnabled\(\)")
    return f"return await this.{locator}.isEnabled();" if locator else None


def _hover(unit: MethodUnit, _params):
    locator = unit.target(r"moveToElement\s*\(\s*(\w+)\s*\)")
    return f"await this.{locator}.hover();" if locator else None


def _scroll(unit: MethodUnit, _params):
    locator = unit.locator_in(r"scrollIntoView[^(]*\(\s*(?:true\s*,\s*)?(\w+)\s*\)", r"arguments\[0\]\.scrollIntoView.*?,\s*(\w+)\s*\)")
    if locator:
        return f"await this.{locator}.scrollIntoViewIfNeeded();"
    return "await this.page.evaluate(() => window.scrollTo(0, document.body.scrollHeight));"


def _navigate(unit: MethodUnit, params):
    url = re.search(r"\.(?:get|to)\s*\(\s*\"([^\"]+)\"\s*\)", unit.method.body)
    if url:
        return f"await this.page.goto({ts_string(url.group(1))});\nawait this.page.waitForLoadState('networkidle');"
    url_param = next((p for p in params if "url" in p.name.lower() or "path" in p.name.lower()), None)
    if url_param:
        return f"await this.page.goto({url_param.name});\nawait this.page.waitForLoadState('networkidle');"
    return None


def _frame(unit: MethodUnit, _params):
    frame = re.search(r"frame\s*\(\s*\"([^\"]+)\"\s*\)", unit.method.body)
    if frame:
        selector = frame.group(1)
        if re.match(r"^[A-Za-z_][\w-]*$", selector):
            selector = f"#{selector}"
        target = f"this.page.frameLocator({ts_string(selector)})"
    else:
        locator = unit.locator_in(r"frame\s*\(\s*(\w+)\s*\)")
        if not locator:
            return None
        target = f"this.{locator}.contentFrame()"

    # Playwright has no frame switching; a void method just waits for the frame
    if unit.method.ts_return_type == "void":
        return f"await {target}.locator('body').waitFor();"
    return f"return {target};"


def _alert(unit: MethodUnit, _params):
    if ".accept()" in unit.body:
        return "this.page.once('dialog', dialog => dialog.accept());"
    if ".dismiss()" in unit.body:
        return "this.page.once('dialog', dialog => dialog.dismiss());"
    return None


def _count(unit: MethodUnit, _params):
    locator = unit.locator_in(r"(\w+)\.size\(\)", r"(\w+)\.findElements")
    return f"return await this.{locator}.count();" if locator else None


def _assertion(unit: MethodUnit, params):
    locator = unit.locator_in(r"(\w+)\.isDisplayed\(\)")
    if locator:
        return f"await expect(this.{locator}).toBeVisible();"
    locator = unit.locator_in(r"(\w+)\.getText\(\)")
    expected = _string_param(params)
    if locator and expected:
        return f"await expect(this.{locator}).toHaveText({expected.name});"
    if "displayed" in unit.name or "visible" in unit.name:
        locator = unit.inferred_locator()
        if locator:
            return f"await expect(this.{locator}).toBeVisible();"
    return None


def _simple(action: str, call: str):
    """Generator for a no-argument locator action like clear() or focus()."""

    def generate(unit: MethodUnit, _params):
        locator = unit.target(rf"(\w+)\.{action}\(\)")
        return f"await this.{locator}.{call}();" if locator else None

    return generate


def _returning(generator):
    """
    Fit generated text to the Java method's return type.

    Void methods reject query text, since a discarded query result cannot
    stand in for what the Java body did with it (usually an assertion).
    Methods that return a value only accept text that returns something.
    """

    def generate(unit: MethodUnit, params):
        text = generator(unit, params)
        if text is None:
            return None
        returns = re.search(r"^return ", text, re.M)
        if unit.method.ts_return_type == "void":
            return None if returns else text
        return text if returns else None

    return generate


def _rule(name: str, matcher, generator, **kwargs) -> Rule:
    return Rule(name, matcher, _returning(generator), **kwargs)


METHOD_RULES = RuleSet(
    "page-methods",
    [
        _rule("double-click", _when("doubleclick", body=("doubleclick(",)), _double_click),
        _rule("right-click", _when("rightclick", "contextclick", body=("contextclick(",)), _right_click),
        _rule("click", _when("click", body=(".click()",)), _click),
        _rule("keyboard", _when("press", body=("sendkeys(keys.",)), _keyboard),
        _rule("text-input", _when("enter", "type", "input", "fill", body=(".sendkeys(", ".clear()")), _fill),
        _rule("get-text", _when("gettext", "getvalue", body=(".gettext()",)), _get_text),
        _rule("get-attribute", _when("getattribute", body=(".getattribute(",)), _get_attribute),
        _rule("wait", _when("wait", body=("waitfor", "wait.until", "webdriverwait")), _wait, tag=RuleTag.STRUCTURAL),
        _rule("select", _when("select", body=("new select(", ".selectby")), _select),
        _rule("checkbox", _when("checkbox", "check", body=(".isselected()",)), _checkbox),
        _rule("is-visible", _when("isdisplayed", "isvisible", body=(".isdisplayed()",)), _is_visible),
        _rule("is-enabled", _when("isenabled", body=(".isenabled()",)), _is_enabled),
        _rule("hover", _when("hover", "mouseover", body=("movetoelement(",)), _hover),
        _rule("scroll", _when("scroll", body=("scrollintoview",)), _scroll, tag=RuleTag.STRUCTURAL),
        _rule(
            "navigate",
            _when("navigate", "goto", "openpage", body=("driver.get(", ".navigate()")),
            _navigate,
            tag=RuleTag.STRUCTURAL,
        ),
        _rule("frame", _when("frame", body=("switchto().frame",)), _frame, tag=RuleTag.STRUCTURAL, needs_review=True),
        _rule("alert", _when("alert", body=("switchto().alert",)), _alert),
        _rule("count", _when("getcount", "getsize", body=(".size()",)), _count, tag=RuleTag.STRUCTURAL),
        _rule("assertion", _when("verify", "validate", "assert", body=("assert.", "asserttrue", "assertequals")), _assertion),
        _rule("clear", _when("clear", body=(".clear()",)), _simple("clear", "clear")),
        _rule("focus", _when("focus", body=(".focus()",)), _simple("focus", "focus")),
        _rule("blur", _when("blur", body=(".blur()",)), _simple("blur", "blur")),
    ],
    fallback=lambda unit: stub_body(str(unit)),
)


def implement_method(method: JavaMethod, locators: Sequence[str]):
    """Translate one Java page method given the page's locator names."""
    return METHOD_RULES.translate(MethodUnit(method, tuple(locators)), method.params)
