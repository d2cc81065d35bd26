"""
Ordered pattern -> generator rules with first-match-wins translation.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Sequence, Tuple

from .extraction_result import ExtractionResult, RuleTag

logger = logging.getLogger(__name__)

# A matcher returns something truthy (usually an re.Match) when it accepts the unit
Matcher = Callable[[Any], Any]
# A generator turns the match plus the unit's parameters into output text
Generator = Callable[[Any, Sequence[Any]], Optional[str]]


@dataclass(frozen=True)
class Rule:
    """A matcher/generator pair converting one source form to one target form."""

    name: str
    matcher: Matcher
    generator: Generator
    tag: RuleTag = RuleTag.SEMANTIC
    needs_review: bool = False

    def apply(self, unit: Any, params: Sequence[Any] = ()) -> Optional[str]:
        """
        Run the rule against a unit.

        Returns:
            Generated text, or None if the matcher rejected the unit or the
            generator could not produce anything.
        """
        match = self.matcher(unit)
        if not match:
            return None
        return self.generator(match, params)


def pattern_rule(
    name: str,
    pattern: str,
    generator: Generator,
    tag: RuleTag = RuleTag.SEMANTIC,
    needs_review: bool = False,
    flags: int = 0,
) -> Rule:
    """Build a rule whose matcher is a regex search over a string unit."""
    compiled = re.compile(pattern, flags)
    return Rule(name=name, matcher=compiled.search, generator=generator, tag=tag, needs_review=needs_review)


class RuleSet:
    """
    An immutable, ordered list of rules plus the fallback used when none match.

    Rules are tried strictly in declaration order. A generator that raises or
    returns None counts as "no match" and the next rule is tried.
    """

    def __init__(
        self,
        name: str,
        rules: Sequence[Rule],
        fallback: Callable[[Any], str],
        describe: Callable[[Any], str] = str,
    ):
        self.name = name
        self.rules: Tuple[Rule, ...] = tuple(rules)
        self.fallback = fallback
        self.describe = describe

    def translate(self, unit: Any, params: Sequence[Any] = ()) -> ExtractionResult:
        """
        Translate one unit with the first rule that accepts it.

        Args:
            unit: Source expression (or parsed unit) to translate
            params: Previously extracted parameters for the unit

        Returns:
            ExtractionResult; tagged FALLBACK when no rule produced text
        """
        original = self.describe(unit)

        for rule in self.rules:
            try:
                text = rule.apply(unit, params)
            except Exception as e:
                logger.debug(f"[{self.name}] rule '{rule.name}' failed on {original!r}: {e}")
                continue

            if text is None:
                continue

            logger.debug(f"[{self.name}] {original!r} matched rule '{rule.name}'")
            return ExtractionResult(
                text=text,
                tag=rule.tag,
                original=original,
                rule=rule.name,
                needs_review=rule.needs_review,
            )

        logger.debug(f"[{self.name}] no rule matched {original!r}")
        return ExtractionResult(
            text=self.fallback(unit),
            tag=RuleTag.FALLBACK,
            original=original,
            needs_review=True,
        )

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __repr__(self) -> str:
        return f"RuleSet({self.name!r}, {len(self.rules)} rules)"
