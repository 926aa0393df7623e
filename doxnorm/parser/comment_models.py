"""Data models for tagged comment records.

This module defines the intermediate representation produced by the comment
parsers: one ``CommentRecord`` per documentation block, each holding the
declaration context it documents and its ``@``-style tags. Tags form a closed
set of variants; anything the parsers do not recognize becomes an
``UnknownTag`` so downstream code can never mistake it for a typed tag.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class ParserOptions:
    """Options passed to a comment parser on every call."""

    raw: bool = True
    skip_single_star: bool = True


@dataclass(frozen=True)
class CommentContext:
    """Declaration a comment block is attached to."""

    type: str
    name: str
    receiver: str | None = None
    extends: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class CommentDescription:
    """Free-text part of a comment block, before the first tag."""

    full: str = ""
    summary: str = ""
    body: str = ""


@dataclass(frozen=True)
class ParamTag:
    """``@param {Type} [name=default] description``."""

    type: str
    string: str
    name: str
    types: tuple[str, ...] = ()
    description: str = ""
    optional: bool = False

    @property
    def is_dotted(self) -> bool:
        """True when the bare name, without brackets or default, has a dot."""
        bare = self.name.replace("[", "").replace("]", "").split("=")[0]
        return "." in bare


@dataclass(frozen=True)
class PropertyTag:
    """``@property {Type} name description``."""

    type: str
    string: str
    name: str
    types: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class ReturnTag:
    """``@return {Type} description`` (also ``@returns``)."""

    type: str
    string: str
    types: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class ExtendsTag:
    """``@extends Parent`` (also ``@augments``)."""

    type: str
    string: str
    other_class: str = ""


@dataclass(frozen=True)
class ExampleTag:
    type: str
    string: str


@dataclass(frozen=True)
class AbstractTag:
    type: str
    string: str = ""


@dataclass(frozen=True)
class UnknownTag:
    """Any tag keyword without a dedicated variant."""

    type: str
    string: str = ""


Tag = Union[
    ParamTag,
    PropertyTag,
    ReturnTag,
    ExtendsTag,
    ExampleTag,
    AbstractTag,
    UnknownTag,
]

PARAM_TAG_NAMES = frozenset({"param"})
PROPERTY_TAG_NAMES = frozenset({"property"})
RETURN_TAG_NAMES = frozenset({"return", "returns"})
EXTENDS_TAG_NAMES = frozenset({"extends", "augments"})
ABSTRACT_TAG_NAMES = frozenset({"abstract"})


@dataclass(frozen=True)
class CommentRecord:
    """One documentation comment block as parsed from source."""

    context: CommentContext | None
    description: CommentDescription = field(default_factory=CommentDescription)
    tags: tuple[Tag, ...] = ()
    is_class: bool = False
    is_constructor: bool = False
    is_private: bool = False
    ignore: bool = False
    code: str = ""
    line: int = 0

    def tags_of(self, *kinds: type) -> list[Tag]:
        """Return the tags that are instances of any of ``kinds``, in order."""
        return [tag for tag in self.tags if isinstance(tag, kinds)]
