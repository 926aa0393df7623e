"""Tests for the block comment parser."""

import pytest

from doxnorm.parser.comment_models import (
    AbstractTag,
    CommentContext,
    ExampleTag,
    ExtendsTag,
    ParamTag,
    ParserOptions,
    PropertyTag,
    ReturnTag,
    UnknownTag,
)
from doxnorm.parser.comment_parser import (
    CommentParser,
    parse_comments,
    parse_type_expression,
)


class TestCommentParser:
    """Test extraction of records from JavaScript-style source."""

    @pytest.fixture
    def parser(self):
        return CommentParser()

    def test_animal_source(self, parser, animal_source):
        records = parser.parse(animal_source)

        assert len(records) == 3
        cls, ctr, speak = records

        assert cls.is_class
        assert not cls.is_constructor
        assert cls.context == CommentContext(
            type="class", name="Animal", extends="Mammal"
        )
        assert cls.description.full == "An animal that can make a sound."
        assert cls.tags == (
            ExtendsTag(type="extends", string="Mammal", other_class="Mammal"),
        )
        assert cls.line == 1

        assert ctr.is_constructor
        assert ctr.context.type == "constructor"
        assert ctr.context.receiver == "Animal"
        name, sound = ctr.tags
        assert name == ParamTag(
            type="param",
            string="{String} name Name of the animal.",
            name="name",
            types=("String",),
            description="Name of the animal.",
            optional=False,
        )
        assert sound.name == "[sound=bark]"
        assert sound.optional is True
        assert sound.description == "Sound the animal makes."

        assert speak.context == CommentContext(
            type="method", name="speak", receiver="Animal"
        )
        assert speak.code == "speak() {"
        assert speak.tags_of(ExampleTag)[0].string == "animal.speak();"
        (returns,) = speak.tags_of(ReturnTag)
        assert returns.types == ("String",)
        assert returns.description == "The sound."

    def test_single_star_comments_skipped_by_default(self, parser):
        source = """
/* Just a note. */
function a() {}

/** Documented. */
function b() {}
"""
        records = parser.parse(source)
        assert [record.context.name for record in records] == ["b"]

    def test_single_star_comments_kept_when_configured(self, parser):
        source = """
/* Just a note. */
function a() {}
"""
        records = parser.parse(source, ParserOptions(skip_single_star=False))
        assert [record.context.name for record in records] == ["a"]
        assert records[0].description.full == "Just a note."

    def test_bang_comments_are_ignored(self, parser):
        source = """
/*!
 * Library banner
 */
function a() {}
"""
        (record,) = parser.parse(source)
        assert record.ignore is True

    def test_ignore_tag(self, parser):
        source = """
/**
 * Internal.
 * @ignore
 */
function a() {}
"""
        (record,) = parser.parse(source)
        assert record.ignore is True

    def test_comment_markers_inside_strings(self, parser):
        source = """
const pattern = "/** not a comment */";
const other = '/* nor this */';
// a line comment with /** inside
/** Real. */
function real() {}
"""
        records = parser.parse(source)
        assert len(records) == 1
        assert records[0].context.name == "real"

    def test_comment_without_code(self, parser):
        records = parser.parse("/** Trailing comment. */\n")
        assert len(records) == 1
        assert records[0].context is None

    def test_unterminated_comment(self, parser):
        assert parser.parse("/** never closed\nfunction a() {}") == []

    def test_private_flags(self, parser):
        source = """
/**
 * One.
 * @private
 */
function one() {}

/**
 * Two.
 * @api private
 */
function two() {}

/**
 * Three.
 * @api public
 */
function three() {}
"""
        records = parser.parse(source)
        assert [record.is_private for record in records] == [True, True, False]

    def test_class_and_constructor_tags(self, parser):
        source = """
/**
 * Legacy widget.
 * @class
 * @constructor
 * @param {String} id Identifier.
 */
function Widget(id) {}
"""
        (record,) = parser.parse(source)
        assert record.is_class
        assert record.is_constructor
        assert record.context.type == "function"

    def test_multiline_tag_and_example(self, parser):
        source = """
/**
 * Sum numbers.
 *
 * @example
 * sum(1, 2);
 * // => 3
 * @param {...Number} values Numbers to add,
 *   any amount.
 */
function sum(...values) {}
"""
        (record,) = parser.parse(source)
        (example,) = record.tags_of(ExampleTag)
        assert example.string == "sum(1, 2);\n// => 3"
        (values,) = record.tags_of(ParamTag)
        assert values.types == ("Number",)
        assert values.description == "Numbers to add,\n  any amount."

    def test_descriptions_are_kept_raw(self, parser):
        source = """
/**
 * First line
 * continues.
 *
 * Second paragraph.
 */
function a() {}
"""
        (record,) = parser.parse(source)
        assert record.description.full == "First line\ncontinues.\n\nSecond paragraph."
        assert record.description.summary == "First line\ncontinues."
        assert record.description.body == "Second paragraph."

    def test_descriptions_collapsed_when_not_raw(self, parser):
        source = """
/**
 * First line
 * continues.
 *
 * Second paragraph.
 */
function a() {}
"""
        (record,) = parser.parse(source, ParserOptions(raw=False))
        assert record.description.full == "First line continues.\n\nSecond paragraph."

    def test_module_function(self):
        records = parse_comments("/** Helper. */\nexport function helper(a) {}\n")
        assert records[0].context == CommentContext(type="function", name="helper")


class TestParseTag:
    """Test parsing of individual tags."""

    @pytest.fixture
    def parser(self):
        return CommentParser()

    def test_param_with_union_type(self, parser):
        tag = parser.parse_tag("@param {String|Number} value The value.")
        assert isinstance(tag, ParamTag)
        assert tag.types == ("String", "Number")
        assert tag.name == "value"
        assert tag.description == "The value."
        assert tag.optional is False

    def test_param_optional_by_type_marker(self, parser):
        tag = parser.parse_tag("@param {Object=} options Settings.")
        assert tag.optional is True
        assert tag.types == ("Object",)

    def test_param_bracketed_name_with_spaces(self, parser):
        tag = parser.parse_tag("@param {String} [greeting=hello there] Greeting.")
        assert tag.name == "[greeting=hello there]"
        assert tag.optional is True
        assert tag.description == "Greeting."

    def test_param_without_type(self, parser):
        tag = parser.parse_tag("@param name")
        assert isinstance(tag, ParamTag)
        assert tag.types == ()
        assert tag.name == "name"
        assert tag.description == ""

    @pytest.mark.parametrize(
        "text", ["@arg {String} a A.", "@argument a", "@prop {Number} n", "@virtual"]
    )
    def test_alias_keywords_are_unknown(self, parser, text):
        tag = parser.parse_tag(text)
        assert isinstance(tag, UnknownTag)
        assert tag.type == text[1:].split()[0]

    def test_property(self, parser):
        tag = parser.parse_tag("@property {Number} count How many.")
        assert tag == PropertyTag(
            type="property",
            string="{Number} count How many.",
            name="count",
            types=("Number",),
            description="How many.",
        )

    @pytest.mark.parametrize("keyword", ["return", "returns"])
    def test_return(self, parser, keyword):
        tag = parser.parse_tag(f"@{keyword} {{Promise<String>}} Resolved text.")
        assert isinstance(tag, ReturnTag)
        assert tag.type == keyword
        assert tag.types == ("Promise<String>",)
        assert tag.description == "Resolved text."

    @pytest.mark.parametrize("keyword", ["extends", "augments"])
    def test_extends(self, parser, keyword):
        tag = parser.parse_tag(f"@{keyword} {{EventEmitter}}")
        assert tag == ExtendsTag(
            type=keyword, string="{EventEmitter}", other_class="EventEmitter"
        )

    def test_abstract(self, parser):
        assert isinstance(parser.parse_tag("@abstract"), AbstractTag)

    def test_unknown(self, parser):
        tag = parser.parse_tag("@see https://example.com")
        assert tag == UnknownTag(type="see", string="https://example.com")


class TestCodeContext:
    """Test declaration recognition."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            (
                "class Foo extends Bar {",
                CommentContext(type="class", name="Foo", extends="Bar"),
            ),
            ("export default class Foo {", CommentContext(type="class", name="Foo")),
            (
                "constructor(a, b) {",
                CommentContext(type="constructor", name="constructor", receiver="Foo"),
            ),
            (
                "Foo.prototype.bar = function (x) {",
                CommentContext(type="method", name="bar", receiver="Foo"),
            ),
            (
                "Foo.prototype.size = 10;",
                CommentContext(
                    type="property", name="size", receiver="Foo", value="10"
                ),
            ),
            ("function foo(a) {", CommentContext(type="function", name="foo")),
            ("async function foo() {", CommentContext(type="function", name="foo")),
            ("const foo = (a) => a;", CommentContext(type="function", name="foo")),
            ("let foo = function () {", CommentContext(type="function", name="foo")),
            (
                "Foo.create = function () {",
                CommentContext(type="method", name="create", receiver="Foo"),
            ),
            (
                "module.exports.VERSION = '1.0';",
                CommentContext(
                    type="property",
                    name="VERSION",
                    receiver="module.exports",
                    value="'1.0'",
                ),
            ),
            (
                "const LIMIT = 5;",
                CommentContext(type="declaration", name="LIMIT", value="5"),
            ),
            (
                "static async load(path) {",
                CommentContext(type="method", name="load", receiver="Foo"),
            ),
            ("get size() {", CommentContext(type="method", name="size", receiver="Foo")),
            ("parse: function (text) {", CommentContext(type="method", name="parse")),
            ("if (ready) {", None),
            ("", None),
        ],
    )
    def test_contexts(self, code, expected):
        assert CommentParser.parse_code_context(code, current_class="Foo") == expected


class TestTypeExpression:
    """Test type expression splitting."""

    @pytest.mark.parametrize(
        "expression, types, optional",
        [
            ("String", ("String",), False),
            ("String|Number", ("String", "Number"), False),
            ("(String|null)", ("String", "null"), False),
            ("?String", ("String",), False),
            ("Number=", ("Number",), True),
            ("...Object", ("Object",), False),
            ("Object.<string, number>", ("Object.<string, number>",), False),
            ("Array<String|Number>|null", ("Array<String|Number>", "null"), False),
            ("", (), False),
        ],
    )
    def test_expressions(self, expression, types, optional):
        assert parse_type_expression(expression) == (types, optional)
