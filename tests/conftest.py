"""Shared test fixtures and helpers."""

import pytest

from doxnorm.parser.comment_models import (
    CommentContext,
    CommentDescription,
    CommentRecord,
    ParamTag,
    Tag,
)


def create_record(
    name: str = "test_func",
    kind: str = "method",
    description: str = "",
    tags: tuple[Tag, ...] | list[Tag] = (),
    is_class: bool = False,
    is_constructor: bool = False,
    is_private: bool = False,
    ignore: bool = False,
    with_context: bool = True,
) -> CommentRecord:
    """Helper to create a CommentRecord for tests."""
    return CommentRecord(
        context=CommentContext(type=kind, name=name) if with_context else None,
        description=CommentDescription(full=description, summary=description),
        tags=tuple(tags),
        is_class=is_class,
        is_constructor=is_constructor,
        is_private=is_private,
        ignore=ignore,
    )


def create_param(
    name: str,
    types: tuple[str, ...] = ("String",),
    description: str = "",
    optional: bool | None = None,
) -> ParamTag:
    """Helper to create a ParamTag; bracketed names are optional by default."""
    if optional is None:
        optional = name.startswith("[")
    return ParamTag(
        type="param",
        string=f"{{{'|'.join(types)}}} {name} {description}".strip(),
        name=name,
        types=types,
        description=description,
        optional=optional,
    )


@pytest.fixture
def make_record():
    return create_record


@pytest.fixture
def make_param():
    return create_param


ANIMAL_SOURCE = '''/**
 * An animal that can make a sound.
 *
 * @extends Mammal
 */
class Animal extends Mammal {
  /**
   * Create an animal.
   *
   * @param {String} name Name of the animal.
   * @param {String} [sound=bark] Sound the animal makes.
   */
  constructor(name, sound = 'bark') {
    super(name);
    this.sound = sound;
  }

  /**
   * Make the animal speak.
   *
   * @example animal.speak();
   * @return {String} The sound.
   */
  speak() {
    return this.sound;
  }
}

module.exports = Animal;
'''


@pytest.fixture
def animal_source() -> str:
    return ANIMAL_SOURCE
