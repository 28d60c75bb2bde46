"""
Tests for the building blocks: type resolution, schema capability checks,
tag filtering, naming and validator classification.
"""

import asyncio

import pytest

from schemata import (
    ArrayOf,
    Callback,
    CallbackWithParent,
    Direct,
    PropertyDescriptor,
    PropertyNotFoundError,
    Schema,
    SchemaDefinitionError,
    as_validator,
    convert_camelcase_to_human,
    has_tag,
    is_array_schema,
    is_schema,
    resolve_type,
)


# ============================================================================
# Type resolution
# ============================================================================


def test_resolve_returns_non_callable_types():
    assert resolve_type("string") == "string"
    assert resolve_type(None) is None


def test_resolve_returns_classes_unchanged():
    assert resolve_type(dict) is dict
    assert resolve_type(str, {"a": 1}) is str


def test_resolve_returns_schemas_unchanged():
    schema = Schema(name="Person")

    assert resolve_type(schema) is schema


def test_resolve_calls_functions_with_the_entity():
    entity = {"a": 1}
    schema = Schema(name="Person")
    seen = []

    def resolver(model):
        seen.append(model)
        return schema

    assert resolve_type(resolver, entity) is schema
    assert seen == [entity]


def test_resolve_passes_none_without_an_entity():
    assert resolve_type(lambda entity: entity) is None


def test_resolve_does_not_unwrap_results():
    inner = lambda entity: "inner"  # noqa: E731

    assert resolve_type(lambda entity: inner) is inner


# ============================================================================
# Capabilities
# ============================================================================


def test_schema_instances_are_schemas():
    assert is_schema(Schema(name="Person"))


@pytest.mark.parametrize("value", [None, {}, [], "schema", 1, Schema, dict])
def test_other_values_are_not_schemas(value):
    assert not is_schema(value)


def test_structural_schemas_are_accepted():
    class Duck:
        name = "Duck"

        def make_blank(self):
            return {}

        def make_default(self, existing_entity=None):
            return {}

        def cast(self, entity, tag=None):
            return dict(entity)

        def cast_property(self, type_, value, key=None, entity=None):
            return value

        def strip_unknown_properties(self, entity, tag=None, ignore_tag_for_sub_schemas=False):
            return {}

        async def validate_recursive(self, parent, entity, set_name="all", tag=None):
            return {"quack": "Quack is required"}

    assert is_schema(Duck())
    pond = Schema(name="Pond", properties={"duck": {"type": Duck()}})
    assert asyncio.run(pond.validate({"duck": {"x": 1}})) == {"duck": {"quack": "Quack is required"}}


def test_array_markers():
    schema = Schema(name="Person")

    assert is_array_schema(ArrayOf(schema))
    assert is_array_schema({"array_schema": schema})
    assert not is_array_schema(schema)
    assert not is_array_schema(list)
    assert not is_array_schema({"array_schema": "nope"})


# ============================================================================
# Tags
# ============================================================================


def test_has_tag():
    tagged = PropertyDescriptor(tag=["update", "auto"])
    untagged = PropertyDescriptor()

    assert has_tag(tagged, None)
    assert has_tag(untagged, None)
    assert has_tag(tagged, "update")
    assert not has_tag(tagged, "other")
    assert not has_tag(untagged, "update")


# ============================================================================
# Naming
# ============================================================================


@pytest.mark.parametrize(
    "key, expected",
    [
        ("age", "Age"),
        ("phoneNumber", "Phone Number"),
        ("dateOfBirth", "Date Of Birth"),
        ("address2", "Address 2"),
        ("phone_number", "Phone number"),
        ("ID", "ID"),
        ("userIDCode", "User ID Code"),
        ("", ""),
    ],
)
def test_convert_camelcase_to_human(key, expected):
    assert convert_camelcase_to_human(key) == expected


def test_property_name_prefers_the_declared_name(contact_schema):
    assert contact_schema.property_name("name") == "Full Name"
    assert contact_schema.property_name("age") == "Age"
    assert contact_schema.property_name("phoneNumber") == "Phone Number"


def test_property_name_of_unknown_property(contact_schema):
    with pytest.raises(PropertyNotFoundError) as exc_info:
        contact_schema.property_name("Wobble")

    assert str(exc_info.value) == "No property 'Wobble' in schema"
    assert isinstance(exc_info.value, LookupError)


# ============================================================================
# Validator classification
# ============================================================================


def test_validators_are_classified_by_arity():
    def three(key, name, entity):
        return None

    def four(key, name, entity, callback):
        callback(None, None)

    def five(key, name, entity, parent, callback):
        callback(None, None)

    async def coroutine(key, name, entity):
        return None

    assert isinstance(as_validator(three), Direct)
    assert isinstance(as_validator(coroutine), Direct)
    assert isinstance(as_validator(four), Callback)
    assert isinstance(as_validator(five), CallbackWithParent)


def test_parameters_with_defaults_are_not_counted():
    def three(key, name, entity, strict=False):
        return None

    assert isinstance(as_validator(three), Direct)


def test_explicit_variants_pass_through():
    variant = Callback(lambda *args: None)

    assert as_validator(variant) is variant


def test_callable_objects_are_classified():
    class MinimumAge:
        def __init__(self, minimum):
            self.minimum = minimum

        def __call__(self, key, name, entity):
            return entity[key] < self.minimum and f"{name} is too young"

    validator = as_validator(MinimumAge(18))

    assert isinstance(validator, Direct)
    assert asyncio.run(validator.run("age", "Age", {"age": 3}, None)) == "Age is too young"


@pytest.mark.parametrize("fn", [lambda: None, lambda a, b: None, lambda a, b, c, d, e, f: None, "not callable"])
def test_unsupported_validators_are_rejected(fn):
    with pytest.raises(SchemaDefinitionError):
        as_validator(fn)


def test_callback_from_another_thread():
    import threading

    def threaded(key, name, entity, callback):
        threading.Thread(target=callback, args=(None, f"{name} checked elsewhere")).start()

    validator = as_validator(threaded)

    assert asyncio.run(validator.run("age", "Age", {}, None)) == "Age checked elsewhere"
