"""
Placeholder-scoped rewriting of generated TypeScript.

Generated stubs carry a "not yet converted" sentinel. The rewriter only ever
replaces a stub that still contains it, so already converted or hand-edited
code is never touched and re-running a stage is a no-op.
"""

import logging
import re
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

PLACEHOLDER_SENTINEL = "TODO: Implement"


def stub_body(origin: str) -> str:
    """
    Body of a not-yet-converted stub.

    Args:
        origin: Where the stub came from (method name, step text)

    Returns:
        Two TypeScript lines carrying the placeholder sentinel
    """
    return f"// {PLACEHOLDER_SENTINEL} - {origin}\nthrow new Error('Not implemented');"


def indent(text: str, prefix: str) -> str:
    """Indent every non-empty line of text."""
    return "\n".join(prefix + line if line.strip() else line for line in text.splitlines())


def method_stub_pattern(method_name: str) -> re.Pattern:
    """Pattern for an unconverted ``async name(...): Promise<T> { ... }`` stub."""
    return re.compile(
        rf"async\s+{re.escape(method_name)}\s*\([^)]*\)\s*:\s*Promise<[^>]+>\s*\{{"
        rf"[^{{}}]*?{re.escape(PLACEHOLDER_SENTINEL)}[^{{}}]*\}}"
    )


def step_stub_pattern(description: str) -> re.Pattern:
    """
    Pattern for an unconverted ``Given('...', async (...) => { ... });`` stub.

    The step keyword is captured as group 1 so it can be preserved.
    """
    escaped = description.replace("\\", "\\\\").replace("'", "\\'")
    return re.compile(
        rf"(Given|When|Then)\(\s*'{re.escape(escaped)}'\s*,\s*async\s*\((?:[^()]|\([^()]*\))*\)\s*=>\s*\{{"
        rf"[^{{}}]*?{re.escape(PLACEHOLDER_SENTINEL)}[^{{}}]*\}}\);"
    )


class PlaceholderRewriter:
    """
    Replace placeholder stubs in a text artifact, at most once each.

    Tracks how many stubs were replaced, left alone because no rule applied,
    or not found (already converted or never generated).
    """

    def __init__(self, content: str):
        self.content = content
        self.replaced = 0
        self.skipped = 0
        self.missing = 0

    def has_placeholder(self, pattern: re.Pattern) -> bool:
        return pattern.search(self.content) is not None

    def rewrite(self, pattern: re.Pattern, build: Callable[[re.Match], Optional[str]]) -> bool:
        """
        Replace the first stub matching pattern.

        Args:
            pattern: Stub pattern; must require the placeholder sentinel
            build: Called with the stub match; returns replacement text, or
                None to leave the stub in place

        Returns:
            True if the stub was replaced
        """
        match = pattern.search(self.content)
        if not match:
            self.missing += 1
            return False

        replacement = build(match)
        if replacement is None:
            self.skipped += 1
            return False

        self.content = self.content[: match.start()] + replacement + self.content[match.end():]
        self.replaced += 1
        return True

    @property
    def changed(self) -> bool:
        return self.replaced > 0

    def counts(self) -> Tuple[int, int, int]:
        """(replaced, skipped, missing)"""
        return self.replaced, self.skipped, self.missing
