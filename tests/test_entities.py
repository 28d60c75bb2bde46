"""
Tests for building entities: make_blank, make_default and
strip_unknown_properties.
"""

import pytest

from helpers import create_comment_schema, create_contact_schema, with_properties
from schemata import Array, Object, Schema, SchemaDefinitionError


# ============================================================================
# make_blank
# ============================================================================


def test_make_blank_sets_every_property_to_none(contact_schema):
    assert contact_schema.make_blank() == {
        "name": None,
        "age": None,
        "active": None,
        "phoneNumber": None,
        "dateOfBirth": None,
    }


def test_make_blank_object_and_array_types():
    schema = Schema(name="Foo", properties={"contacts": {"type": Object}, "images": {"type": Array}})

    assert schema.make_blank() == {"contacts": {}, "images": []}


def test_make_blank_sub_schemas(blog_schema):
    blog = blog_schema.make_blank()

    assert blog["author"]["name"] is None
    assert blog["comments"] == []


def test_make_blank_sub_schema_from_type_function(blog_schema):
    schema = with_properties(blog_schema, author={"type": lambda entity: create_contact_schema()})

    assert schema.make_blank()["author"]["phoneNumber"] is None


def test_make_blank_creates_new_instances(blog_schema):
    blog_a = blog_schema.make_blank()
    blog_b = blog_schema.make_blank()

    blog_a["comments"].append(1)

    assert blog_b["comments"] == []


def test_make_blank_rejects_object_types():
    schema = Schema(name="Foo", properties={"images": {"type": {"foo": "bar"}}})

    with pytest.raises(SchemaDefinitionError, match="Invalid property type on 'images'"):
        schema.make_blank()


def test_make_blank_leaves_unknown_markers_empty():
    schema = Schema(name="Foo", properties={"label": {"type": "string"}, "untyped": {}})

    assert schema.make_blank() == {"label": None, "untyped": None}


# ============================================================================
# make_default
# ============================================================================


def test_make_default_applies_defaults(contact_schema):
    assert contact_schema.make_default() == {
        "name": None,
        "age": 0,
        "active": True,
        "phoneNumber": None,
        "dateOfBirth": None,
    }


def test_make_default_extends_the_given_entity(contact_schema):
    assert contact_schema.make_default({"name": "Paul", "extra": "This should not be here"}) == {
        "name": "Paul",
        "age": 0,
        "active": True,
        "phoneNumber": None,
        "dateOfBirth": None,
    }


def test_make_default_keeps_explicit_none(contact_schema):
    assert contact_schema.make_default({"age": None})["age"] is None


def test_make_default_for_sub_schemas(blog_schema):
    assert blog_schema.make_default() == {
        "title": None,
        "body": None,
        "author": {"name": None, "age": 0, "active": True, "phoneNumber": None, "dateOfBirth": None},
        "comments": [],
    }


def test_make_default_extends_sub_schemas(blog_schema):
    blog = blog_schema.make_default({"title": "Mr. Blogger's Post", "author": {"name": "Mr. Blogger"}})

    assert blog == {
        "title": "Mr. Blogger's Post",
        "body": None,
        "author": {"name": "Mr. Blogger", "age": 0, "active": True, "phoneNumber": None, "dateOfBirth": None},
        "comments": [],
    }


def test_make_default_uses_function_defaults_for_sub_schemas(blog_schema):
    author = blog_schema.properties["author"].type
    schema = with_properties(
        blog_schema,
        author={"default_value": lambda: author.make_default({"name": "Mr. Mista", "active": False})},
    )

    assert schema.make_default()["author"] == {
        "name": "Mr. Mista",
        "age": 0,
        "active": False,
        "phoneNumber": None,
        "dateOfBirth": None,
    }


def test_make_default_does_not_default_sub_schema_with_explicit_none(blog_schema):
    schema = with_properties(blog_schema, author={"default_value": None})

    assert schema.make_default() == {"title": None, "body": None, "author": None, "comments": []}


def test_make_default_calls_function_defaults_each_time():
    schema = Schema(name="Tags", properties={"tags": {"type": list, "default_value": lambda: ["new"]}})

    first = schema.make_default()
    first["tags"].append("changed")

    assert schema.make_default() == {"tags": ["new"]}


def test_make_default_resolves_type_functions_with_the_entity(blog_schema):
    seen = []

    def author_type(entity):
        seen.append(entity)
        return create_contact_schema()

    schema = with_properties(blog_schema, author={"type": author_type})
    given = {"title": "Post", "author": {"name": "Mr. Blogger"}}

    assert schema.make_default(given)["author"]["age"] == 0
    assert seen == [None, given]


# ============================================================================
# strip_unknown_properties
# ============================================================================


def test_strip_removes_extra_properties(contact_schema):
    assert contact_schema.strip_unknown_properties({"name": "Paul", "extra": "x"}) == {"name": "Paul"}


def test_strip_does_not_mutate_the_entity(contact_schema):
    entity = {"name": "Paul", "extra": "x"}

    contact_schema.strip_unknown_properties(entity)

    assert entity == {"name": "Paul", "extra": "x"}


def test_strip_by_tag(contact_schema):
    assert contact_schema.strip_unknown_properties({"name": "Paul", "age": 21}, "update") == {"name": "Paul"}
    assert contact_schema.strip_unknown_properties({"name": "Paul", "age": 21}, "BADTAG") == {}


def test_strip_keeps_none_values(contact_schema, blog_schema):
    assert contact_schema.strip_unknown_properties({"age": None, "active": None, "extra": None}) == {
        "age": None,
        "active": None,
    }
    assert blog_schema.strip_unknown_properties({"author": None, "comments": None}) == {
        "author": None,
        "comments": None,
    }


def test_strip_sub_schemas(blog_schema):
    stripped = blog_schema.strip_unknown_properties({"author": {"name": "Paul", "extra": "Not here"}})

    assert stripped == {"author": {"name": "Paul"}}


def test_strip_sub_schema_from_type_function(blog_schema):
    schema = with_properties(blog_schema, author={"type": lambda entity: create_contact_schema()})

    stripped = schema.strip_unknown_properties({"author": {"name": "Paul", "extra": "Not here"}})

    assert stripped == {"author": {"name": "Paul"}}


def test_strip_keeps_empty_arrays(blog_schema):
    entity = {"author": {"name": "Paul"}, "comments": []}

    assert blog_schema.strip_unknown_properties(entity) == entity


def test_strip_array_sub_schemas(blog_schema):
    comment = create_comment_schema().make_blank()
    comment["extra"] = "Hello"

    stripped = blog_schema.strip_unknown_properties({"author": {"name": "Paul"}, "comments": [comment]})

    assert stripped == {
        "author": {"name": "Paul"},
        "comments": [{"email": None, "comment": None, "created": None}],
    }
    assert "extra" in comment


def test_strip_drops_non_list_array_values(blog_schema):
    assert blog_schema.strip_unknown_properties({"comments": "not a list"}) == {}


def test_strip_ignoring_tag_for_sub_schemas(blog_schema):
    comment = create_comment_schema().make_blank()
    comment["comment"] = "Do not strip out my comment"
    comment["extra"] = "Not in the schema at all"
    entity = {"title": "My Blog", "author": {"name": "Paul"}, "comments": [comment]}

    assert blog_schema.strip_unknown_properties(entity, "auto", True) == {
        "title": "My Blog",
        "comments": [{"email": None, "comment": "Do not strip out my comment", "created": None}],
    }
    assert blog_schema.strip_unknown_properties(entity, "auto") == {
        "title": "My Blog",
        "comments": [{"comment": "Do not strip out my comment"}],
    }
