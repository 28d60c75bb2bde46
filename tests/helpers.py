"""Schema factories and validators shared by the test modules."""
from schemata import ArrayOf, Boolean, Date, Number, Schema, String


def required(key, name, entity):
    """Fails for missing, None or empty string values."""
    value = entity.get(key) if isinstance(entity, dict) else getattr(entity, key, None)
    if value is None or value == "":
        return f"{name} is required"
    return None


def length(minimum, maximum):
    def validate_length(key, name, entity):
        value = entity.get(key) or ""
        if not minimum <= len(value) <= maximum:
            return f"{name} must be between {minimum} and {maximum} in length"
        return None

    return validate_length


def failing_with(message):
    """A validator that always fails with the given message."""

    def validate(key, name, entity):
        return message

    return validate


def create_contact_schema():
    return Schema(name="Contact", properties={
        "name": {"tag": ["update"], "name": "Full Name"},
        "age": {"type": Number, "default_value": 0},
        "active": {"type": Boolean, "default_value": True},
        "phoneNumber": {"tag": ["update"]},
        "dateOfBirth": {"type": Date},
    })


def create_comment_schema():
    return Schema(name="Comment", properties={
        "email": {},
        "comment": {"tag": ["auto"]},
        "created": {"type": Date},
    })


def create_blog_schema():
    return Schema(name="Blog", properties={
        "title": {"tag": ["auto"]},
        "body": {"tag": ["auto"]},
        "author": {"type": create_contact_schema()},
        "comments": {"type": ArrayOf(create_comment_schema()), "tag": ["auto"]},
    })


def create_toy_schema():
    return Schema(name="Toy", properties={
        "name": {"type": String},
        "label": {"type": String, "validators": [required]},
    })


def create_kid_schema():
    return Schema(name="Kid", properties={
        "name": {"type": String},
        "toy": {"type": create_toy_schema()},
    })


def with_properties(schema, **changes):
    """Rebuild a schema after applying per-property definition changes.

        with_properties(contact, name={"validators": [required]})
    """
    properties = schema.get_properties()
    for key, change in changes.items():
        properties[key].update(change)
    return Schema(name=schema.name, properties=properties)
