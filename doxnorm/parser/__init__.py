"""
doxnorm Parser Module.

This module provides the public API for extracting tagged comment records
from JavaScript-style and Python source code.
"""

from ..utils.errors import ParsingError, SyntaxParsingError
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
from .comment_parser import CommentParser, parse_comments
from .python_parser import parse_python_source

__all__ = [
    "CommentParser",
    "parse_comments",
    "parse_python_source",
    "ParserOptions",
    "CommentRecord",
    "CommentContext",
    "CommentDescription",
    "Tag",
    "ParamTag",
    "PropertyTag",
    "ReturnTag",
    "ExtendsTag",
    "ExampleTag",
    "AbstractTag",
    "UnknownTag",
    "ParsingError",
    "SyntaxParsingError",
]
