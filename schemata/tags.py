from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schemata.models import PropertyDescriptor


def has_tag(descriptor: PropertyDescriptor, tag: str | None) -> bool:
    """Has a property got a tag.

    With no tag requested every property is included; otherwise only
    properties explicitly tagged with it.
    """
    if tag is None:
        return True

    # This property has no tags
    if not descriptor.tag:
        return False

    return tag in descriptor.tag
