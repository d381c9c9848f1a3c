from .schema import (
    CONFIGURATION_SCHEMA,
    DEFAULT_CONFIGURATION,
    merge_with_defaults,
    validate_configuration,
)

__all__ = [
    "CONFIGURATION_SCHEMA",
    "DEFAULT_CONFIGURATION",
    "merge_with_defaults",
    "validate_configuration",
]
