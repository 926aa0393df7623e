"""Data models for normalized documentation entries.

These are the objects handed to documentation renderers. ``to_dict()``
produces the interchange shape: camelCase keys, optional keys omitted rather
than set to null.
"""

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class PropertyDoc:
    """Declared property of a class or member."""

    name: str
    types: tuple[str, ...] = ()
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "types": list(self.types),
            "description": self.description,
        }


@dataclass(frozen=True)
class ParamDoc:
    """Single parameter documentation."""

    name: str
    is_optional: bool = False
    types: tuple[str, ...] = ()
    description: str = ""
    default: str | None = None
    props: tuple["ParamDoc", ...] | None = None

    @property
    def is_object(self) -> bool:
        """True when any declared type is ``object``, in any casing."""
        return any(type_name.lower() == "object" for type_name in self.types)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "isOptional": self.is_optional,
            "types": list(self.types),
            "description": self.description,
        }
        if self.default is not None:
            data["default"] = self.default
        if self.props is not None:
            data["props"] = [prop.to_dict() for prop in self.props]
        return data


@dataclass(frozen=True)
class ExtendsDoc:
    """Parent class reference from ``@extends`` or ``@augments``."""

    type: str
    parent: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "class": self.parent}


@dataclass(frozen=True)
class ReturnDoc:
    """Return value documentation."""

    types: tuple[str, ...] = ()
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"types": list(self.types), "description": self.description}


@dataclass(frozen=True)
class MemberTags:
    """Typed tag lists of a member entry."""

    example: tuple[str, ...] = ()
    param: tuple[ParamDoc, ...] = ()
    property: tuple[PropertyDoc, ...] = ()
    extends: tuple[ExtendsDoc, ...] = ()
    returns: tuple[ReturnDoc, ...] = ()

    def __len__(self) -> int:
        return (
            len(self.example)
            + len(self.param)
            + len(self.property)
            + len(self.extends)
            + len(self.returns)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "example": list(self.example),
            "param": [param.to_dict() for param in self.param],
            "property": [prop.to_dict() for prop in self.property],
            "extends": [ext.to_dict() for ext in self.extends],
            "return": [ret.to_dict() for ret in self.returns],
        }


@dataclass(frozen=True)
class ClassEntry:
    """Documentation of the class declared in a file, constructor included."""

    uid: str
    name: str
    description: str = ""
    is_abstract: bool = False
    props: tuple[PropertyDoc, ...] = ()
    extends: str | None = None
    display: str | None = None
    params: tuple[ParamDoc, ...] | None = None
    type: str = field(default="class", init=False)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "uid": self.uid,
            "isAbstract": self.is_abstract,
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "props": [prop.to_dict() for prop in self.props],
        }
        if self.extends is not None:
            data["extends"] = self.extends
        if self.display is not None:
            data["display"] = self.display
        if self.params is not None:
            data["params"] = [param.to_dict() for param in self.params]
        return data


@dataclass(frozen=True)
class MemberEntry:
    """Documentation of a method, function, property or other declaration."""

    uid: str
    type: str
    name: str
    description: str = ""
    is_private: bool = False
    params: str = ""
    tags: MemberTags = field(default_factory=MemberTags)

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "isPrivate": self.is_private,
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "params": self.params,
            "tags": self.tags.to_dict(),
        }


DocumentationEntry = Union[ClassEntry, MemberEntry]


def entries_to_dicts(entries: list[DocumentationEntry]) -> list[dict[str, Any]]:
    """Serialize entries into plain, JSON-ready dictionaries."""
    return [entry.to_dict() for entry in entries]
