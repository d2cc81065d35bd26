"""
Data class for translation results with all the info you might need.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Greppable marker left in generated code wherever a human has to step in
FALLBACK_SENTINEL = "TODO: Convert XPath"


class RuleTag(str, Enum):
    """Classification of how a unit was translated."""

    SEMANTIC = "semantic"  # role, label, text, placeholder, test id
    STRUCTURAL = "structural"  # id, css, class, positional
    FALLBACK = "fallback"  # no rule matched


@dataclass(frozen=True)
class ExtractionResult:
    """Result from translating one source unit."""

    text: str
    tag: RuleTag
    original: str
    rule: Optional[str] = None
    needs_review: bool = False

    @property
    def matched(self) -> bool:
        """True when some rule produced the text."""
        return self.tag is not RuleTag.FALLBACK
