"""
doxnorm Normalizer Module.

This module provides the public API for turning tagged comment records into
documentation entries.
"""

from ..utils.errors import MissingClassError
from .formatting import format_default, format_param, format_signature, format_uid
from .models import (
    ClassEntry,
    DocumentationEntry,
    ExtendsDoc,
    MemberEntry,
    MemberTags,
    ParamDoc,
    PropertyDoc,
    ReturnDoc,
    entries_to_dicts,
)
from .normalizer import normalize

__all__ = [
    "normalize",
    "format_param",
    "format_default",
    "format_uid",
    "format_signature",
    "ClassEntry",
    "MemberEntry",
    "MemberTags",
    "ParamDoc",
    "PropertyDoc",
    "ExtendsDoc",
    "ReturnDoc",
    "DocumentationEntry",
    "entries_to_dicts",
    "MissingClassError",
]
