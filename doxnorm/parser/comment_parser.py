"""Block comment parser for JavaScript-style sources.

This module turns ``/** ... */`` documentation blocks into ``CommentRecord``
objects. Each block is paired with the first line of code that follows it so
the declaration it documents (class, constructor, method, property, function)
can be recognized.

Malformed comments never raise: blocks with unreadable tags keep whatever
could be read, and blocks not followed by a recognizable declaration get
``context=None``.
"""

import logging
import re
from dataclasses import replace

from .comment_models import (
    ABSTRACT_TAG_NAMES,
    EXTENDS_TAG_NAMES,
    PARAM_TAG_NAMES,
    PROPERTY_TAG_NAMES,
    RETURN_TAG_NAMES,
    AbstractTag,
    CommentContext,
    CommentDescription,
    CommentRecord,
    ExampleTag,
    ExtendsTag,
    ParamTag,
    ParserOptions,
    PropertyTag,
    ReturnTag,
    Tag,
    UnknownTag,
)

logger = logging.getLogger(__name__)

_STATEMENT_KEYWORDS = frozenset(
    {"if", "for", "while", "switch", "catch", "function", "return", "with", "do"}
)

# Patterns for the first code line after a comment, checked in order.
_CLASS_RE = re.compile(
    r"^(?:export\s+)?(?:default\s+)?(?:abstract\s+)?class\s+([\w$]+)"
    r"(?:\s+extends\s+([\w$.]+))?"
)
_CONSTRUCTOR_RE = re.compile(r"^constructor\s*\(")
_PROTOTYPE_METHOD_RE = re.compile(
    r"^([\w$]+)\.prototype\.([\w$]+)\s*=\s*(?:async\s+)?function"
)
_PROTOTYPE_PROPERTY_RE = re.compile(r"^([\w$]+)\.prototype\.([\w$]+)\s*=\s*([^\n;]+)")
_FUNCTION_RE = re.compile(
    r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*([\w$]+)\s*\("
)
_FUNCTION_EXPRESSION_RE = re.compile(
    r"^(?:export\s+)?(?:var|let|const)\s+([\w$]+)\s*=\s*(?:async\s+)?"
    r"(?:function\b|\([^)]*\)\s*=>|[\w$]+\s*=>)"
)
_STATIC_METHOD_RE = re.compile(
    r"^([\w$.]+)\.([\w$]+)\s*=\s*(?:async\s+)?"
    r"(?:function\b|\([^)]*\)\s*=>|[\w$]+\s*=>)"
)
_STATIC_PROPERTY_RE = re.compile(r"^([\w$.]+)\.([\w$]+)\s*=\s*([^\n;]+)")
_CLASS_METHOD_RE = re.compile(
    r"^(?:static\s+)?(?:async\s+)?(?:get\s+|set\s+)?\*?\s*([\w$]+)\s*\("
)
_OBJECT_METHOD_RE = re.compile(r"^([\w$]+)\s*:\s*(?:async\s+)?function")
_OBJECT_PROPERTY_RE = re.compile(r"^([\w$]+)\s*:\s*([^\n,]+)")
_DECLARATION_RE = re.compile(r"^(?:export\s+)?(?:var|let|const)\s+([\w$]+)\s*=\s*([^\n;]+)")

_TAG_LINE_RE = re.compile(r"^@\w", re.MULTILINE)
_COMMENT_LINE_PREFIX_RE = re.compile(r"^[ \t]*\* ?", re.MULTILINE)


class CommentParser:
    """Extract tagged comment records from JavaScript-style source text."""

    def parse(
        self, source: str, options: ParserOptions | None = None
    ) -> list[CommentRecord]:
        """Parse every documentation block in ``source``.

        Args:
            source: Full text of the source file
            options: Parser options; defaults to raw mode skipping ``/*`` blocks

        Returns:
            Records in the order their comments appear in the source
        """
        if options is None:
            options = ParserOptions()

        records = []
        current_class: str | None = None

        for start, end, ignore in self._find_blocks(source, options):
            text = self._strip_comment_markers(source[start:end])
            code = self._following_code(source, end)
            line = source.count("\n", 0, start) + 1

            context = self.parse_code_context(code, current_class)
            if context is not None and context.type == "class":
                current_class = context.name

            record = self.parse_comment(text, context, options)
            if ignore and not record.ignore:
                record = replace(record, ignore=True)
            records.append(replace(record, code=code, line=line))

        logger.debug(f"Found {len(records)} documentation blocks")
        return records

    def _find_blocks(self, source: str, options: ParserOptions):
        """Yield ``(start, end, ignore)`` spans of block comments.

        String literals and line comments are skipped so comment markers
        inside them are not mistaken for documentation.
        """
        i = 0
        length = len(source)
        while i < length:
            char = source[i]
            if char in "'\"`":
                i = _skip_string(source, i)
                continue
            if source.startswith("//", i):
                newline = source.find("\n", i)
                i = length if newline == -1 else newline + 1
                continue
            if source.startswith("/*", i):
                close = source.find("*/", i + 2)
                if close == -1:
                    logger.warning(f"Unterminated block comment at offset {i}")
                    return
                end = close + 2
                marker = source[i + 2 : i + 3]
                is_doc = marker == "*" and not source.startswith("/**/", i)
                ignore = marker == "!"
                if is_doc or ignore or not options.skip_single_star:
                    yield i, end, ignore
                i = end
                continue
            i += 1

    @staticmethod
    def _strip_comment_markers(block: str) -> str:
        body = block[2:-2]
        if body.startswith("*") or body.startswith("!"):
            body = body[1:]
        return _COMMENT_LINE_PREFIX_RE.sub("", body).strip()

    @staticmethod
    def _following_code(source: str, end: int) -> str:
        """Return the first non-blank line of code after a comment."""
        rest = source[end:]
        next_comment = rest.find("/*")
        if next_comment != -1:
            rest = rest[:next_comment]
        for line in rest.split("\n"):
            if line.strip():
                return line.strip()
        return ""

    def parse_comment(
        self,
        text: str,
        context: CommentContext | None = None,
        options: ParserOptions | None = None,
    ) -> CommentRecord:
        """Parse the text of one comment block (markers already stripped)."""
        if options is None:
            options = ParserOptions()

        first_tag = _TAG_LINE_RE.search(text)
        if first_tag:
            description_text = text[: first_tag.start()].strip()
            tag_text = text[first_tag.start() :]
        else:
            description_text = text.strip()
            tag_text = ""

        tags = tuple(self.parse_tag(chunk) for chunk in _split_tags(tag_text))
        tag_types = {tag.type for tag in tags}

        is_private = "private" in tag_types or any(
            isinstance(tag, UnknownTag)
            and tag.type in ("api", "access")
            and tag.string.strip() == "private"
            for tag in tags
        )
        is_constructor = "constructor" in tag_types or (
            context is not None and context.type == "constructor"
        )
        is_class = "class" in tag_types or (
            context is not None and context.type == "class"
        )

        return CommentRecord(
            context=context,
            description=_build_description(description_text, options.raw),
            tags=tags,
            is_class=is_class,
            is_constructor=is_constructor,
            is_private=is_private,
            ignore="ignore" in tag_types,
        )

    def parse_tag(self, text: str) -> Tag:
        """Parse a single tag starting with ``@``."""
        match = re.match(r"^@(\w+)[ \t]*", text)
        if not match:
            return UnknownTag(type="", string=text)

        kind = match.group(1)
        rest = text[match.end() :]
        string = rest.strip()

        if kind in PARAM_TAG_NAMES:
            types, optional_type, rest = _take_types(rest)
            name, rest = _take_name(rest)
            return ParamTag(
                type=kind,
                string=string,
                name=name,
                types=types,
                description=rest.strip(),
                optional=optional_type or name.startswith("["),
            )
        if kind in PROPERTY_TAG_NAMES:
            types, _, rest = _take_types(rest)
            name, rest = _take_name(rest)
            return PropertyTag(
                type=kind,
                string=string,
                name=name,
                types=types,
                description=rest.strip(),
            )
        if kind in RETURN_TAG_NAMES:
            types, _, rest = _take_types(rest)
            return ReturnTag(
                type=kind, string=string, types=types, description=rest.strip()
            )
        if kind in EXTENDS_TAG_NAMES:
            other_class = string.split()[0].strip("{}") if string else ""
            return ExtendsTag(type=kind, string=string, other_class=other_class)
        if kind == "example":
            return ExampleTag(type=kind, string=string)
        if kind in ABSTRACT_TAG_NAMES:
            return AbstractTag(type=kind, string=string)
        return UnknownTag(type=kind, string=string)

    @staticmethod
    def parse_code_context(
        code: str, current_class: str | None = None
    ) -> CommentContext | None:
        """Recognize the declaration on a line of code."""
        code = code.strip()
        if not code:
            return None

        match = _CLASS_RE.match(code)
        if match:
            return CommentContext(
                type="class", name=match.group(1), extends=match.group(2)
            )
        if _CONSTRUCTOR_RE.match(code):
            return CommentContext(
                type="constructor", name="constructor", receiver=current_class
            )
        match = _PROTOTYPE_METHOD_RE.match(code)
        if match:
            return CommentContext(
                type="method", name=match.group(2), receiver=match.group(1)
            )
        match = _PROTOTYPE_PROPERTY_RE.match(code)
        if match:
            return CommentContext(
                type="property",
                name=match.group(2),
                receiver=match.group(1),
                value=match.group(3).strip(),
            )
        match = _FUNCTION_RE.match(code)
        if match:
            return CommentContext(type="function", name=match.group(1))
        match = _FUNCTION_EXPRESSION_RE.match(code)
        if match:
            return CommentContext(type="function", name=match.group(1))
        match = _STATIC_METHOD_RE.match(code)
        if match:
            return CommentContext(
                type="method", name=match.group(2), receiver=match.group(1)
            )
        match = _STATIC_PROPERTY_RE.match(code)
        if match:
            return CommentContext(
                type="property",
                name=match.group(2),
                receiver=match.group(1),
                value=match.group(3).strip(),
            )
        match = _OBJECT_METHOD_RE.match(code)
        if match:
            return CommentContext(type="method", name=match.group(1))
        match = _DECLARATION_RE.match(code)
        if match:
            return CommentContext(
                type="declaration", name=match.group(1), value=match.group(2).strip()
            )
        match = _CLASS_METHOD_RE.match(code)
        if match and match.group(1) not in _STATEMENT_KEYWORDS:
            return CommentContext(
                type="method", name=match.group(1), receiver=current_class
            )
        match = _OBJECT_PROPERTY_RE.match(code)
        if match:
            return CommentContext(
                type="property", name=match.group(1), value=match.group(2).strip()
            )

        logger.debug(f"No declaration recognized in: {code!r}")
        return None


def parse_comments(
    source: str, options: ParserOptions | None = None
) -> list[CommentRecord]:
    """Parse ``source`` with a fresh ``CommentParser``."""
    return CommentParser().parse(source, options)


def _skip_string(source: str, start: int) -> int:
    """Return the index just past the string literal opening at ``start``."""
    quote = source[start]
    i = start + 1
    while i < len(source):
        char = source[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        if char == "\n" and quote != "`":
            # Unterminated single-line string; resume on the next line
            return i + 1
        i += 1
    return i


def _split_tags(tag_text: str) -> list[str]:
    """Split tag text into one chunk per tag, keeping continuation lines."""
    chunks: list[str] = []
    for line in tag_text.split("\n"):
        if line.startswith("@"):
            chunks.append(line)
        elif chunks:
            chunks[-1] += "\n" + line
    return [chunk.rstrip() for chunk in chunks]


def _build_description(text: str, raw: bool) -> CommentDescription:
    paragraphs = re.split(r"\n\s*\n", text.strip()) if text.strip() else []
    if not raw:
        # Join wrapped lines inside each paragraph
        paragraphs = [" ".join(p.split()) for p in paragraphs]
    summary = paragraphs[0] if paragraphs else ""
    body = "\n\n".join(paragraphs[1:])
    full = "\n\n".join(paragraphs) if not raw else text.strip()
    return CommentDescription(full=full, summary=summary, body=body)


def _take_braced(text: str) -> tuple[str | None, str]:
    """Take a balanced ``{...}`` group from the start of ``text``."""
    text = text.lstrip()
    if not text.startswith("{"):
        return None, text
    depth = 0
    for index, char in enumerate(text):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[1:index], text[index + 1 :]
    return None, text


def _take_types(text: str) -> tuple[tuple[str, ...], bool, str]:
    """Parse a leading ``{Type|Other=}`` expression.

    Returns:
        Tuple of (type names, optional marker present, remaining text)
    """
    expression, rest = _take_braced(text)
    if expression is None:
        return (), False, rest
    types, optional = parse_type_expression(expression)
    return types, optional, rest


def parse_type_expression(expression: str) -> tuple[tuple[str, ...], bool]:
    """Split a type expression into its union members.

    ``"?String|Number="`` gives ``(("String", "Number"), True)``.
    """
    expression = expression.strip()
    optional = expression.endswith("=")
    if optional:
        expression = expression[:-1].strip()
    if expression.startswith("(") and expression.endswith(")"):
        expression = expression[1:-1]

    types = []
    for part in _split_top_level(expression, "|"):
        part = part.strip().lstrip("?!")
        if part.startswith("..."):
            part = part[3:]
        part = part.strip()
        if part:
            types.append(part)
    return tuple(types), optional


def _split_top_level(text: str, separator: str) -> list[str]:
    parts = []
    depth = 0
    current = []
    for char in text:
        if char in "<({[":
            depth += 1
        elif char in ">)}]":
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _take_name(text: str) -> tuple[str, str]:
    """Take a parameter name token, bracketed names may contain spaces."""
    text = text.lstrip()
    if text.startswith("["):
        depth = 0
        for index, char in enumerate(text):
            if char == "[":
                depth += 1
            elif char == "]":
                depth -= 1
                if depth == 0:
                    return text[: index + 1], text[index + 1 :]
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    return parts[0], parts[1] if len(parts) > 1 else ""
