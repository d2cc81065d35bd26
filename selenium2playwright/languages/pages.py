"""
Java page objects: class name, @FindBy locators and public methods.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from ..core.extraction_result import ExtractionResult
from ..core.scanner import FieldLocator, JavaMethod, find_class_name, scan_field_locators, scan_methods
from .xpath import translate_locator

logger = logging.getLogger(__name__)

# Object methods and page-opening hooks that have no place on a Playwright page
SKIPPED_METHODS = {
    "toString",
    "equals",
    "hashCode",
    "getClass",
    "wait",
    "notify",
    "notifyAll",
    "clone",
    "finalize",
    "openPage",
    "launchPage",
}

REVIEW_NOTE = "TODO: Review"


def ts_page_class_name(java_name: str) -> str:
    """LoginPage -> LoginPage, Login -> LoginPage"""
    return re.sub(r"Page$", "", java_name) + "Page"


@dataclass
class PageLocator:
    """A @FindBy field and its translated Playwright locator."""

    field: FieldLocator
    result: ExtractionResult

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def expression(self) -> str:
        return f"this.page.{self.result.text}"

    @property
    def review_note(self) -> Optional[str]:
        if not self.result.needs_review:
            return None
        original = str(self.field).replace("\n", " ")
        if len(original) > 80:
            original = original[:77] + "..."
        return f"// {REVIEW_NOTE} - {original}"


@dataclass
class PageClass:
    java_name: str
    locators: List[PageLocator]
    methods: List[JavaMethod]

    @property
    def class_name(self) -> str:
        return ts_page_class_name(self.java_name)

    @property
    def locator_names(self) -> List[str]:
        return [locator.name for locator in self.locators]

    @property
    def review_count(self) -> int:
        return sum(1 for locator in self.locators if locator.result.needs_review)

    def has_method(self, name: str) -> bool:
        return any(method.name == name for method in self.methods)


def page_methods(content: str) -> List[JavaMethod]:
    """
    Public methods worth converting, one per name.

    TypeScript has no overloading, so only the first method of a name is
    kept.
    """
    methods = []
    seen = set()
    for method in scan_methods(content):
        if method.name in SKIPPED_METHODS:
            continue
        if method.name in seen:
            logger.warning(f"Overloaded method '{method.name}' skipped; only the first is converted")
            continue
        seen.add(method.name)
        methods.append(method)
    return methods


def parse_page(content: str) -> Optional[PageClass]:
    """
    Parse a Java page class.

    Returns:
        PageClass, or None if the file declares no class
    """
    java_name = find_class_name(content)
    if not java_name:
        return None

    locators = []
    for field in scan_field_locators(content):
        result = translate_locator(field.strategy, field.value)
        if not result.matched:
            logger.info(f"{java_name}.{field.name}: no rule for {field}")
        locators.append(PageLocator(field=field, result=result))

    return PageClass(java_name=java_name, locators=locators, methods=page_methods(content))
