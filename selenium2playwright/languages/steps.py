"""
Java step definitions to playwright-bdd step declarations.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.scanner import JavaMethod, StepDeclaration, find_class_name, scan_step_declarations
from .utils import lower_first

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{(\w*)\}")

# Cucumber expression types playwright-bdd understands as-is
KEPT_PLACEHOLDERS = {"int", "float", "string"}

GIVEN_STARTS = ("user is", "user has", "given")
GIVEN_CONTAINS = ("is on", "exists", "logged in")
THEN_STARTS = ("user should", "then", "verify")
THEN_CONTAINS = ("should see", "should be", "should not", "is displayed", "is visible")


def convert_description(description: str) -> str:
    """
    Rewrite QAF placeholders as Cucumber expression parameters.

    Examples:
        "user enters {0} in {field}" -> "user enters {string} in {string}"
        "user waits for {int} seconds" -> unchanged
    """
    return PLACEHOLDER.sub(
        lambda m: m.group(0) if m.group(1) in KEPT_PLACEHOLDERS else "{string}",
        description,
    )


def infer_step_type(description: str) -> str:
    """Given for preconditions, Then for checks, When for everything else."""
    lowered = description.lower()

    if lowered.startswith(GIVEN_STARTS) or any(phrase in lowered for phrase in GIVEN_CONTAINS):
        return "Given"
    if lowered.startswith(THEN_STARTS) or any(phrase in lowered for phrase in THEN_CONTAINS):
        return "Then"
    return "When"


def infer_fixture(class_name: str, mapping: Dict[str, str] = None) -> str:
    """
    Page fixture a step class works with.

    Args:
        class_name: Java step class name (e.g. "AccountsSteps")
        mapping: Name fragment -> fixture overrides, checked in order

    Returns:
        Fixture name, e.g. "accountsPage"; "page" if nothing is left
    """
    base = re.sub(r"Steps?$", "", class_name)
    for fragment, fixture in (mapping or {}).items():
        if fragment in base:
            return fixture
    if not base:
        return "page"
    return lower_first(base) + "Page"


@dataclass
class StepDefinition:
    """One step ready to be emitted as a playwright-bdd declaration."""

    declaration: StepDeclaration
    keyword: str
    description: str
    fixture: str

    @property
    def original(self) -> str:
        return self.declaration.description

    @property
    def method(self) -> JavaMethod:
        return self.declaration.method

    @property
    def ts_params(self) -> str:
        params = ", ".join(str(p) for p in self.method.params)
        fixtures = f"{{ {self.fixture} }}"
        return f"{fixtures}, {params}" if params else fixtures


@dataclass
class StepFile:
    class_name: str
    fixture: str
    steps: List[StepDefinition]


def step_definitions(declarations: List[StepDeclaration], fixture: str) -> List[StepDefinition]:
    steps = []
    seen = set()
    for declaration in declarations:
        description = convert_description(declaration.description)
        if description in seen:
            logger.warning(f"Duplicate step '{description}' in {declaration.method.name} skipped")
            continue
        seen.add(description)
        steps.append(
            StepDefinition(
                declaration=declaration,
                keyword=declaration.keyword or infer_step_type(declaration.description),
                description=description,
                fixture=fixture,
            )
        )
    return steps


def parse_steps(content: str, fixture_mapping: Dict[str, str] = None) -> Optional[StepFile]:
    """
    Parse a Java step definition class.

    Returns:
        StepFile, or None if the file declares no class
    """
    class_name = find_class_name(content)
    if not class_name:
        return None

    fixture = infer_fixture(class_name, fixture_mapping)
    steps = step_definitions(scan_step_declarations(content), fixture)
    return StepFile(class_name=class_name, fixture=fixture, steps=steps)
