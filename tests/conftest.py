import pytest

from helpers import create_blog_schema, create_comment_schema, create_contact_schema


# ============================================================================
# Schema Fixtures
# ============================================================================


@pytest.fixture
def contact_schema():
    """Contact: tagged name with a display name, typed defaults."""
    return create_contact_schema()


@pytest.fixture
def comment_schema():
    return create_comment_schema()


@pytest.fixture
def blog_schema():
    """Blog with an author sub-schema and an array of comments."""
    return create_blog_schema()

