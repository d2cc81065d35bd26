"""
Structural extraction of units from Java source text.

Locates class names, @FindBy fields, public methods (signature plus body) and
step annotations. Method bodies are found by brace-depth counting rather than
regex so nested blocks are handled exactly.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Annotation with arguments; string arguments may contain parentheses
ANNOTATION = re.compile(r'@(\w+)\s*\(\s*((?:[^()"]|"(?:[^"\\]|\\.)*")*)\)')
COMMENT = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
ANNOTATION_ARG = re.compile(r'(?:(\w+)\s*=\s*)?(?:"((?:[^"\\]|\\.)*)"|([\w.]+))')

CLASS_DECLARATION = re.compile(r"\bpublic\s+(?:(?:abstract|final)\s+)*class\s+(\w+)")
ANY_CLASS_DECLARATION = re.compile(r"\bclass\s+(\w+)")

METHOD_SIGNATURE = re.compile(
    r"\bpublic\s+(?:(?:static|final|synchronized|abstract)\s+)*"
    r"(?:<[^>]+>\s+)?"
    r"([\w.]+(?:<[\w.<>,?\s]+>)?(?:\[\])*)\s+"
    r'(\w+)\s*\(((?:[^()"]|"(?:[^"\\]|\\.)*"|\((?:[^()"]|"(?:[^"\\]|\\.)*")*\))*)\)\s*'
    r"(?:throws\s+[\w.,\s]+?)?\s*\{"
)

FIELD_DECLARATION = re.compile(
    r"\s*(?:@\w+(?:\([^)]*\))?\s*)*"
    r"(?:(?:private|public|protected|static|final)\s+)*"
    r"([\w.]+(?:<[\w.<>,?\s]+>)?)\s+(\w+)\s*[;=]"
)

NUMBER_TYPES = {
    "int", "integer", "long", "short", "byte", "double", "float", "bigdecimal", "biginteger", "number",
}
BOOLEAN_TYPES = {"boolean"}

# How.XPATH style constants used by @FindBy(how = ..., using = ...)
HOW_STRATEGIES = {
    "XPATH": "xpath",
    "ID": "id",
    "CSS": "css",
    "NAME": "name",
    "CLASS_NAME": "className",
    "TAG_NAME": "tagName",
    "LINK_TEXT": "linkText",
    "PARTIAL_LINK_TEXT": "partialLinkText",
    "ID_OR_NAME": "id",
}

LOCATOR_KEYS = ("xpath", "id", "css", "name", "className", "tagName", "linkText", "partialLinkText", "locator")

STEP_ANNOTATIONS = {"QAFTestStep", "Given", "When", "Then", "And", "But"}


def ts_type(java_type: str, default: str = "string") -> str:
    """
    Map a Java type name to the TypeScript type used in generated code.

    Args:
        java_type: Java type as written (e.g. "int", "List<String>")
        default: Type used for anything unrecognised

    Returns:
        "number", "boolean", "string", "void" or the default
    """
    base = java_type.strip().split("<")[0].split(".")[-1].rstrip("[]").lower()
    if base == "void":
        return "void"
    if base in NUMBER_TYPES:
        return "number"
    if base in BOOLEAN_TYPES:
        return "boolean"
    if base in ("string", "char", "character", "charsequence"):
        return "string"
    return default


@dataclass(frozen=True)
class JavaParam:
    """One formal parameter of a Java method."""

    name: str
    java_type: str

    @property
    def ts_type(self) -> str:
        return ts_type(self.java_type)

    def __str__(self) -> str:
        return f"{self.name}: {self.ts_type}"


@dataclass
class JavaMethod:
    """A public method: signature, body and its position in the source."""

    name: str
    return_type: str
    params: List[JavaParam]
    body: str
    start: int
    end: int
    closed: bool = True

    @property
    def ts_return_type(self) -> str:
        return ts_type(self.return_type, default="void")

    @property
    def ts_params(self) -> str:
        return ", ".join(str(p) for p in self.params)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FieldLocator:
    """A @FindBy-annotated element field."""

    name: str
    strategy: str
    value: str
    java_type: str = "WebElement"

    def __str__(self) -> str:
        return f"{self.strategy}={self.value}"


@dataclass
class StepDeclaration:
    """An annotated step definition method."""

    annotation: str
    description: str
    method: JavaMethod
    args: Dict[str, str] = field(default_factory=dict)

    @property
    def keyword(self) -> Optional[str]:
        """Given/When/Then when the annotation states it, None for QAF steps."""
        if self.annotation in ("Given", "When", "Then"):
            return self.annotation
        return None


def _skip_literal(text: str, index: int) -> int:
    """Return the index just past the string/char literal starting at index."""
    quote = text[index]
    i = index + 1
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote or ch == "\n":
            return i + 1
        i += 1
    return length


def find_block_end(text: str, start: int) -> Tuple[int, bool]:
    """
    Find the end of a brace-delimited block.

    Scanning starts just after an opening brace with depth 1. Braces inside
    string/char literals and comments are ignored. The scan never goes past
    the end of the text, so unbalanced input terminates.

    Args:
        text: Source text
        start: Index just after the opening "{"

    Returns:
        Tuple of (index just past the closing "}", closed flag). For unbalanced
        input the index is len(text) and closed is False.
    """
    depth = 1
    i = start
    length = len(text)

    while i < length:
        ch = text[i]

        if ch == "/" and text.startswith("//", i):
            newline = text.find("\n", i)
            i = length if newline == -1 else newline + 1
            continue

        if ch == "/" and text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = length if close == -1 else close + 2
            continue

        if text.startswith('"""', i):
            close = text.find('"""', i + 3)
            i = length if close == -1 else close + 3
            continue

        if ch == '"' or ch == "'":
            i = _skip_literal(text, i)
            continue

        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1, True
        i += 1

    return length, False


def extract_block(text: str, start: int) -> Tuple[str, int, bool]:
    """
    Extract the body of a block whose opening brace ends just before start.

    Returns:
        Tuple of (body_text, end_index, closed)
    """
    end, closed = find_block_end(text, start)
    body_end = end - 1 if closed else end
    return text[start:body_end].strip(), end, closed


def _split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on separator outside <...> generics and (...) arguments."""
    parts = []
    depth = 0
    current = []
    for ch in text:
        if ch in "<(":
            depth += 1
        elif ch in ">)":
            depth = max(0, depth - 1)
        if ch == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def parse_java_params(params: str) -> List[JavaParam]:
    """
    Parse a Java formal parameter list.

    Annotations, "final" and varargs dots are dropped.

    Examples:
        "String user, int count" -> [user: string, count: number]
        "@Named(\"x\") final List<String> items" -> [items: string]
    """
    result = []
    for raw in _split_top_level(params):
        cleaned = re.sub(r'@\w+(?:\s*\((?:[^()"]|"(?:[^"\\]|\\.)*")*\))?', "", raw)
        cleaned = re.sub(r"\bfinal\b", "", cleaned).replace("...", "[] ").strip()
        tokens = cleaned.split()
        if not tokens:
            continue
        name = tokens[-1]
        java_type = " ".join(tokens[:-1]) or "String"
        result.append(JavaParam(name=name, java_type=java_type))
    return result


def unescape_java(value: str) -> str:
    """Undo Java string escapes that matter for locators."""
    return re.sub(r"\\(.)", lambda m: {"n": "\n", "t": "\t"}.get(m.group(1), m.group(1)), value)


def parse_annotation_args(args: str) -> Dict[str, str]:
    """
    Parse annotation arguments into a dict.

    A bare positional value is stored under "value".
    """
    result: Dict[str, str] = {}
    for match in ANNOTATION_ARG.finditer(args):
        key, string_value, bare_value = match.groups()
        if string_value is None and bare_value is None:
            continue
        value = unescape_java(string_value) if string_value is not None else bare_value
        result[key or "value"] = value
    return result


def find_class_name(text: str) -> Optional[str]:
    """Return the public class name, or the first class name if none is public."""
    match = CLASS_DECLARATION.search(text) or ANY_CLASS_DECLARATION.search(text)
    return match.group(1) if match else None


def scan_methods(text: str) -> List[JavaMethod]:
    """
    Find every public method with its body.

    Scanning resumes after each body, so methods of anonymous inner classes
    are part of their enclosing method rather than separate units.
    """
    methods = []
    pos = 0

    while True:
        match = METHOD_SIGNATURE.search(text, pos)
        if not match:
            break

        return_type, name, params = match.groups()
        body, end, closed = extract_block(text, match.end())

        if not closed:
            logger.warning(f"Method '{name}' has no closing brace; body runs to end of file")

        methods.append(
            JavaMethod(
                name=name,
                return_type=return_type,
                params=parse_java_params(params),
                body=body,
                start=match.start(),
                end=end,
                closed=closed,
            )
        )
        pos = max(end, match.end())

    return methods


def scan_field_locators(text: str) -> List[FieldLocator]:
    """Find every @FindBy element field in document order."""
    locators = []

    for match in ANNOTATION.finditer(text):
        if match.group(1) != "FindBy":
            continue

        args = parse_annotation_args(match.group(2))
        declaration = FIELD_DECLARATION.match(text, match.end())
        if not declaration:
            logger.debug(f"@FindBy at offset {match.start()} is not followed by a field")
            continue

        java_type, name = declaration.groups()

        if "how" in args and "using" in args:
            how = args["how"].split(".")[-1]
            strategy = HOW_STRATEGIES.get(how, how.lower())
            value = args["using"]
        else:
            key = next((k for k in LOCATOR_KEYS if k in args), None)
            if key is None:
                logger.warning(f"@FindBy on '{name}' has no recognised locator: {args}; field skipped")
                continue
            strategy, value = key, args[key]

        locators.append(FieldLocator(name=name, strategy=strategy, value=value, java_type=java_type))

    return locators


def scan_step_declarations(text: str) -> List[StepDeclaration]:
    """
    Find step definition methods and their step annotations.

    The annotation is looked up in the text between the previous method and
    the method signature, and must not be separated from the signature by
    another declaration.
    """
    steps = []
    previous_end = 0

    for method in scan_methods(text):
        preamble = text[previous_end:method.start]
        previous_end = method.end

        annotation = None
        for match in ANNOTATION.finditer(preamble):
            if match.group(1) in STEP_ANNOTATIONS:
                annotation = match

        if annotation is None:
            continue

        # Only annotations directly above the signature belong to it
        between = COMMENT.sub("", ANNOTATION.sub("", preamble[annotation.end():]))
        if re.search(r"[;{}]", between):
            logger.warning(
                f"Step annotation '@{annotation.group(1)}' is not attached to '{method.name}'; skipping it"
            )
            continue

        args = parse_annotation_args(annotation.group(2))
        description = args.get("description") or args.get("value")
        if not description:
            logger.debug(f"Step annotation on '{method.name}' has no description")
            continue

        steps.append(
            StepDeclaration(
                annotation=annotation.group(1),
                description=description,
                method=method,
                args=args,
            )
        )

    return steps
