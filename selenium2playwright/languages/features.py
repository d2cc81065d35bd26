"""
Gherkin feature file conversion.

playwright-bdd binds every step by its own keyword, so continuation keywords
(And/But) are rewritten to the Given/When/Then they continue.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

STEP_KEYWORD = re.compile(r"^(\s*)(Given|When|Then)\s+(.*)$")
CONTINUATION = re.compile(r"^(\s*)(And|But)\s+(.*)$")
SECTION = re.compile(r"^\s*(Feature|Background|Scenario Outline|Scenario Template|Scenario|Example|Examples|Scenarios|Rule)\s*:")
TAG_LINE = re.compile(r"^\s*@\S+(?:\s+@\S+)*\s*$")


@dataclass
class FeatureConversion:
    """Converted feature text plus what changed."""

    content: str
    conversions: int = 0
    unresolved: List[int] = field(default_factory=list)  # 1-based lines of And/But left as-is
    tags_dropped: int = 0


def convert_feature(content: str, convert_and_but: bool = True, preserve_tags: bool = True) -> FeatureConversion:
    """
    Convert one feature file.

    Each line is classified in turn. Given/When/Then lines are remembered;
    And/But lines become the remembered keyword with indentation and step
    text unchanged. Section headers (Feature, Background, Scenario, Scenario
    Outline, Examples, Rule) forget the keyword, and an And/But with nothing
    remembered is passed through unchanged.

    Args:
        content: Feature file text
        convert_and_but: Rewrite continuation keywords
        preserve_tags: Keep ``@tag`` lines

    Returns:
        FeatureConversion
    """
    last_keyword: Optional[str] = None
    result = FeatureConversion(content="")
    lines = []

    for number, line in enumerate(content.split("\n"), start=1):
        if not preserve_tags and TAG_LINE.match(line):
            result.tags_dropped += 1
            continue

        step = STEP_KEYWORD.match(line)
        if step:
            last_keyword = step.group(2)
            lines.append(line)
            continue

        continuation = CONTINUATION.match(line)
        if continuation:
            if convert_and_but and last_keyword:
                indent, _, text = continuation.groups()
                lines.append(f"{indent}{last_keyword} {text}")
                result.conversions += 1
            else:
                if convert_and_but:
                    result.unresolved.append(number)
                lines.append(line)
            continue

        if SECTION.match(line):
            last_keyword = None

        lines.append(line)

    result.content = "\n".join(lines)
    return result
