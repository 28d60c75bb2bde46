# Core module exports
from schemata.core.config import settings, get_settings, DEFAULT_SET
from schemata.core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    unbind_context,
    bound_context,
    generate_correlation_id,
    schema_logger,
    validation_logger,
    cast_logger,
)
