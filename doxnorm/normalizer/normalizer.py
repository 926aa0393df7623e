"""Comment model normalizer.

This module reshapes the tagged comment records of one source file into the
documentation model consumed by renderers:

1. ignored records and records without a declaration context are dropped
2. the first class record and the first constructor record are paired into a
   single class entry placed at the head of the output
3. every other record becomes a member entry, unless it carries neither a
   description nor tags

The upstream parsers do not promise at most one class or constructor record
per file. When they produce more, the first of each is used and the rest are
treated as ordinary records.
"""

import logging
from collections.abc import Callable, Iterable, Sequence

from ..parser.comment_models import (
    AbstractTag,
    CommentRecord,
    ExampleTag,
    ExtendsTag,
    ParamTag,
    PropertyTag,
    ReturnTag,
)
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
)

logger = logging.getLogger(__name__)


def normalize(
    records: Iterable[CommentRecord], filename: str
) -> list[DocumentationEntry]:
    """Normalize the comment records parsed from one file.

    Args:
        records: Records in source order
        filename: Name of the file, used to build identifiers

    Returns:
        The class entry (if any) followed by member entries in source order

    Raises:
        MissingClassError: If a constructor record exists without a class record
    """
    documented = [
        record
        for record in records
        if not record.ignore and record.context is not None
    ]

    cls = _first(documented, lambda record: record.is_class)
    ctr = _first(documented, lambda record: record.is_constructor)
    if cls is None and ctr is not None:
        raise MissingClassError(filename)

    output: list[DocumentationEntry] = []
    if cls is not None:
        output.append(build_class_entry(cls, ctr, filename))

    for record in documented:
        if record.is_class and record.is_constructor:
            continue
        # Both halves of the pair live in the class entry
        if record is cls or record is ctr:
            continue
        entry = build_member_entry(record, filename)
        if not entry.description and not record.tags:
            logger.debug(f"Dropping empty entry {entry.uid}")
            continue
        output.append(entry)

    logger.debug(f"Normalized {filename}: {len(output)} entries")
    return output


def build_class_entry(
    cls: CommentRecord, ctr: CommentRecord | None, filename: str
) -> ClassEntry:
    """Build the class entry, absorbing the constructor when there is one."""
    name = cls.context.name
    extends = next(
        (tag.other_class for tag in cls.tags_of(ExtendsTag) if tag.type == "extends"),
        None,
    )

    display = None
    params = None
    if ctr is not None:
        param_tags = ctr.tags_of(ParamTag)
        top_level = [tag for tag in param_tags if not tag.is_dotted]
        display = f"{name}({format_signature(top_level)})"
        params = tuple(
            _with_props(_param_doc(tag), param_tags) for tag in top_level
        )

    return ClassEntry(
        uid=format_uid(f"{filename}-{name}"),
        name=name,
        description=cls.description.full,
        is_abstract=bool(cls.tags_of(AbstractTag)),
        props=tuple(_property_doc(tag) for tag in cls.tags_of(PropertyTag)),
        extends=extends,
        display=display,
        params=params,
    )


def build_member_entry(record: CommentRecord, filename: str) -> MemberEntry:
    """Build the entry for a method, function, property or declaration."""
    param_tags = record.tags_of(ParamTag)
    tags = MemberTags(
        example=tuple(tag.string for tag in record.tags_of(ExampleTag)),
        param=tuple(
            ParamDoc(
                name=format_param(tag.name),
                is_optional=tag.optional,
                types=tag.types,
                description=tag.description,
            )
            for tag in param_tags
        ),
        property=tuple(_property_doc(tag) for tag in record.tags_of(PropertyTag)),
        extends=tuple(
            ExtendsDoc(type=tag.type, parent=tag.other_class)
            for tag in record.tags_of(ExtendsTag)
        ),
        returns=tuple(
            ReturnDoc(types=tag.types, description=tag.description)
            for tag in record.tags_of(ReturnTag)
        ),
    )

    return MemberEntry(
        uid=format_uid(f"{filename}-{record.context.name}"),
        type=record.context.type,
        name=record.context.name,
        description=record.description.full,
        is_private=record.is_private,
        params=format_signature(param_tags),
        tags=tags,
    )


def _first(
    records: Sequence[CommentRecord], predicate: Callable[[CommentRecord], bool]
) -> CommentRecord | None:
    return next((record for record in records if predicate(record)), None)


def _param_doc(tag: ParamTag, name: str | None = None) -> ParamDoc:
    return ParamDoc(
        name=format_param(tag.name) if name is None else name,
        is_optional=tag.optional,
        types=tag.types,
        description=tag.description,
        default=format_default(tag.name) if tag.optional else None,
    )


def _with_props(param: ParamDoc, param_tags: list[ParamTag]) -> ParamDoc:
    """Attach ``{param}.<child>`` tags as props of an object-typed param."""
    if not param.is_object:
        return param

    prefix = f"{param.name}."
    props = []
    for tag in param_tags:
        bare = format_param(tag.name)
        if bare.startswith(prefix):
            props.append(_param_doc(tag, name=bare.split(".", 1)[1]))

    return ParamDoc(
        name=param.name,
        is_optional=param.is_optional,
        types=param.types,
        description=param.description,
        default=param.default,
        props=tuple(props),
    )


def _property_doc(tag: PropertyTag) -> PropertyDoc:
    return PropertyDoc(name=tag.name, types=tag.types, description=tag.description)
