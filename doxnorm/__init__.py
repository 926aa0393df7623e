"""
doxnorm: normalized documentation metadata from source comments.
"""

from doxnorm.extractor import DocumentationExtractor, normalize_source
from doxnorm.normalizer import (
    ClassEntry,
    DocumentationEntry,
    MemberEntry,
    entries_to_dicts,
    normalize,
)
from doxnorm.parser import CommentParser, ParserOptions, parse_python_source
from doxnorm.utils.errors import MissingClassError, ParsingError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "normalize",
    "normalize_source",
    "DocumentationExtractor",
    "CommentParser",
    "ParserOptions",
    "parse_python_source",
    "ClassEntry",
    "MemberEntry",
    "DocumentationEntry",
    "entries_to_dicts",
    "MissingClassError",
    "ParsingError",
]
