"""
Rule sets and parsers for the source forms we translate.
"""

from ..core.rules import RuleSet
from .page_methods import METHOD_RULES, implement_method
from .step_patterns import STEP_RULES, translate_step
from .xpath import STRATEGY_RULES, XPATH_RULES, translate_locator, translate_xpath

# Every rule set by name, in the order the pipeline uses them
RULE_SETS = {
    XPATH_RULES.name: XPATH_RULES,
    STRATEGY_RULES.name: STRATEGY_RULES,
    METHOD_RULES.name: METHOD_RULES,
    STEP_RULES.name: STEP_RULES,
}


def get_rule_set(name: str) -> RuleSet:
    """
    Look up a rule set by name.

    Raises:
        ValueError: If no rule set has that name
    """
    if name not in RULE_SETS:
        supported = ", ".join(RULE_SETS)
        raise ValueError(f"No rule set named {name!r}. Available: {supported}")
    return RULE_SETS[name]


__all__ = [
    "RULE_SETS",
    "get_rule_set",
    "implement_method",
    "translate_locator",
    "translate_step",
    "translate_xpath",
]
