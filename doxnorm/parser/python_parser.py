"""
Python source parser for doxnorm.

This module produces ``CommentRecord`` objects from Python modules so that the
normalizer can treat docstrings the same way it treats ``/** */`` blocks. The
built-in ast module locates classes, methods and functions; the
``docstring_parser`` library reads their docstrings (Google, NumPy, reST and
Epydoc styles are all accepted).
"""

import ast
import logging
import re
from collections.abc import Iterator

from docstring_parser import DocstringStyle, ParseError
from docstring_parser import parse as parse_docstring

from ..utils.errors import SyntaxParsingError
from .comment_models import (
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
from .comment_parser import parse_type_expression

logger = logging.getLogger(__name__)

STYLE_MAPPING = {
    "auto": DocstringStyle.AUTO,
    "google": DocstringStyle.GOOGLE,
    "numpydoc": DocstringStyle.NUMPYDOC,
    "rest": DocstringStyle.REST,
    "epydoc": DocstringStyle.EPYDOC,
}

# docstring_parser reports "Attributes" sections as params with these keys
ATTRIBUTE_KEYS = frozenset({"attribute", "attr", "ivar", "var", "cvar"})

ABSTRACT_BASES = frozenset({"ABC", "abc.ABC"})
ABSTRACT_METACLASSES = frozenset({"ABCMeta", "abc.ABCMeta"})
ABSTRACT_DECORATORS = frozenset({"abstractmethod", "abc.abstractmethod"})
IGNORED_BASES = frozenset({"object"}) | ABSTRACT_BASES

_UNREPRESENTABLE_DEFAULT_RE = re.compile(r"[\[\]=]")


def parse_python_source(
    source: str,
    filename: str = "<unknown>",
    options: ParserOptions | None = None,
    style: str = "auto",
) -> list[CommentRecord]:
    """
    Extract a record for every documented class, method and function.

    Args:
        source: Python source text
        filename: Name used in error messages
        options: Parser options; ``raw=False`` collapses wrapped lines
        style: Docstring style name, one of ``STYLE_MAPPING``

    Returns:
        Records in source order

    Raises:
        SyntaxParsingError: If the source is not valid Python
    """
    if options is None:
        options = ParserOptions()

    try:
        tree = ast.parse(source, filename=filename)
    except SyntaxError as e:
        raise SyntaxParsingError(
            f"Syntax error in {filename}:{e.lineno}: {e.msg}",
            recovery_hint="Fix the syntax error and try again",
        ) from e

    lines = source.splitlines()
    docstring_style = STYLE_MAPPING.get(style, DocstringStyle.AUTO)
    constructor_owner = _constructor_owner(tree)
    records: list[CommentRecord] = []

    for node in tree.body:
        _collect(
            node, None, constructor_owner, lines, docstring_style, options, records
        )

    logger.info(f"Parsed {filename}: found {len(records)} documented definitions")
    return records


def _iter_classes(body: list[ast.stmt]) -> Iterator[ast.ClassDef]:
    for node in body:
        if isinstance(node, ast.ClassDef):
            yield node
            yield from _iter_classes(node.body)


def _constructor_owner(tree: ast.Module) -> ast.ClassDef | None:
    """Pick the one class whose ``__init__`` is recorded as the constructor.

    This is the first class with a docstring. A module without any class
    docstring falls back to the first class with a documented ``__init__``,
    which the normalizer then reports as a constructor without its class.
    Every other ``__init__`` is recorded as a plain method.
    """
    classes = list(_iter_classes(tree.body))
    for node in classes:
        if ast.get_docstring(node):
            return node
    for node in classes:
        for child in node.body:
            if (
                isinstance(child, (ast.FunctionDef, ast.AsyncFunctionDef))
                and child.name == "__init__"
                and ast.get_docstring(child)
            ):
                return node
    return None


def _collect(
    node: ast.AST,
    owner: ast.ClassDef | None,
    constructor_owner: ast.ClassDef | None,
    lines: list[str],
    style: DocstringStyle,
    options: ParserOptions,
    records: list[CommentRecord],
) -> None:
    if isinstance(node, ast.ClassDef):
        record = _class_record(node, lines, style, options)
        if record is not None:
            records.append(record)
        for child in node.body:
            _collect(child, node, constructor_owner, lines, style, options, records)
    elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
        is_constructor = (
            owner is not None and owner is constructor_owner and node.name == "__init__"
        )
        record = _function_record(node, owner, is_constructor, lines, style, options)
        if record is not None:
            records.append(record)


def _class_record(
    node: ast.ClassDef,
    lines: list[str],
    style: DocstringStyle,
    options: ParserOptions,
) -> CommentRecord | None:
    docstring = ast.get_docstring(node)
    if not docstring:
        return None

    description, tags = _parse_docstring(docstring, style, options, {})
    bases = [ast.unparse(base) for base in node.bases]
    metaclasses = [
        ast.unparse(keyword.value)
        for keyword in node.keywords
        if keyword.arg == "metaclass"
    ]
    parents = [base for base in bases if base not in IGNORED_BASES]

    extra: list[Tag] = [
        ExtendsTag(type="extends", string=parent, other_class=parent)
        for parent in parents
    ]
    if ABSTRACT_BASES.intersection(bases) or ABSTRACT_METACLASSES.intersection(
        metaclasses
    ):
        extra.append(AbstractTag(type="abstract"))

    return CommentRecord(
        context=CommentContext(
            type="class",
            name=node.name,
            extends=parents[0] if parents else None,
        ),
        description=description,
        tags=tuple(tags + extra),
        is_class=True,
        is_private=_is_private(node.name),
        code=_source_line(lines, node.lineno),
        line=node.lineno,
    )


def _function_record(
    node: ast.FunctionDef | ast.AsyncFunctionDef,
    owner: ast.ClassDef | None,
    is_constructor: bool,
    lines: list[str],
    style: DocstringStyle,
    options: ParserOptions,
) -> CommentRecord | None:
    docstring = ast.get_docstring(node)
    if not docstring:
        return None

    decorators = [ast.unparse(decorator) for decorator in node.decorator_list]
    description, tags = _parse_docstring(
        docstring, style, options, _signature_defaults(node)
    )
    if ABSTRACT_DECORATORS.intersection(decorators):
        tags.append(AbstractTag(type="abstract"))

    if is_constructor:
        kind = "constructor"
    elif owner is None:
        kind = "function"
    elif "property" in decorators:
        kind = "property"
    else:
        kind = "method"

    return CommentRecord(
        context=CommentContext(
            type=kind,
            name=node.name,
            receiver=owner.name if owner is not None else None,
        ),
        description=description,
        tags=tuple(tags),
        is_constructor=is_constructor,
        is_private=_is_private(node.name),
        code=_source_line(lines, node.lineno),
        line=node.lineno,
    )


def _parse_docstring(
    docstring: str,
    style: DocstringStyle,
    options: ParserOptions,
    defaults: dict[str, str],
) -> tuple[CommentDescription, list[Tag]]:
    """Convert a docstring into a description and a list of tags."""
    try:
        parsed = parse_docstring(docstring, style=style)
    except ParseError as e:
        logger.warning(f"Could not parse docstring, keeping it as text: {e}")
        return _description(docstring, "", options), []

    tags: list[Tag] = []
    for param in parsed.params:
        key = param.args[0] if param.args else "param"
        types = parse_type_expression(param.type_name)[0] if param.type_name else ()
        description = param.description or ""
        if key in ATTRIBUTE_KEYS:
            tags.append(
                PropertyTag(
                    type="property",
                    string=f"{param.arg_name} {description}".strip(),
                    name=param.arg_name,
                    types=types,
                    description=description,
                )
            )
            continue

        default = param.default or defaults.get(param.arg_name)
        optional = bool(param.is_optional) or param.arg_name in defaults
        if default and _UNREPRESENTABLE_DEFAULT_RE.search(default):
            # Brackets and "=" delimit the name token itself
            logger.debug(f"Omitting default of {param.arg_name}: {default}")
            default = None
        if optional:
            name = f"[{param.arg_name}={default}]" if default else f"[{param.arg_name}]"
        else:
            name = param.arg_name
        tags.append(
            ParamTag(
                type="param",
                string=f"{name} {description}".strip(),
                name=name,
                types=types,
                description=description,
                optional=optional,
            )
        )

    if parsed.returns is not None:
        returns = parsed.returns
        tags.append(
            ReturnTag(
                type="returns",
                string=returns.description or "",
                types=(
                    parse_type_expression(returns.type_name)[0]
                    if returns.type_name
                    else ()
                ),
                description=returns.description or "",
            )
        )

    for raises in parsed.raises:
        tags.append(
            UnknownTag(
                type="throws",
                string=f"{raises.type_name or ''} {raises.description or ''}".strip(),
            )
        )

    for example in parsed.examples:
        text = example.snippet or example.description or ""
        if text:
            tags.append(ExampleTag(type="example", string=text))

    if parsed.deprecation is not None:
        tags.append(
            UnknownTag(type="deprecated", string=parsed.deprecation.description or "")
        )

    description = _description(
        parsed.short_description or "", parsed.long_description or "", options
    )
    return description, tags


def _description(
    summary: str, body: str, options: ParserOptions
) -> CommentDescription:
    if not options.raw:
        summary = " ".join(summary.split())
        body = "\n\n".join(" ".join(p.split()) for p in body.split("\n\n"))
    full = "\n\n".join(part for part in (summary, body) if part)
    return CommentDescription(full=full, summary=summary, body=body)


def _signature_defaults(node: ast.FunctionDef | ast.AsyncFunctionDef) -> dict[str, str]:
    """Map parameter names to the source text of their default values."""
    args = node.args
    positional = args.posonlyargs + args.args
    defaults: dict[str, str] = {}
    with_defaults = positional[len(positional) - len(args.defaults) :]
    for arg, default in zip(with_defaults, args.defaults):
        defaults[arg.arg] = ast.unparse(default)
    for arg, default in zip(args.kwonlyargs, args.kw_defaults):
        if default is not None:
            defaults[arg.arg] = ast.unparse(default)
    return defaults


def _is_private(name: str) -> bool:
    return name.startswith("_") and not (name.startswith("__") and name.endswith("__"))


def _source_line(lines: list[str], lineno: int) -> str:
    if 0 < lineno <= len(lines):
        return lines[lineno - 1].strip()
    return ""
