"""
Helper package for Python stackerr implementation.
Provides configuration, error wrapping and logging.
"""

from .configuration import (
    MAX_STACK_DEPTH,
    SOURCE_ROOT,
    StackConfiguration,
    configure,
    get_configuration,
    set_max_stack_depth,
)

from .error import (
    Stackable,
    StackableError,
    is_stackable,
    new_stackable_error,
    same_error,
    wrap,
    wrap_prefix,
)

from .logging import (
    PACKAGE_LOGGER,
    StackFormatter,
    get_logger,
    log_error,
    setup_logging,
)

__all__ = [
    # Configuration
    "MAX_STACK_DEPTH",
    "SOURCE_ROOT",
    "StackConfiguration",
    "configure",
    "get_configuration",
    "set_max_stack_depth",
    # Error handling
    "Stackable",
    "StackableError",
    "is_stackable",
    "new_stackable_error",
    "same_error",
    "wrap",
    "wrap_prefix",
    # Logging utilities
    "PACKAGE_LOGGER",
    "StackFormatter",
    "get_logger",
    "log_error",
    "setup_logging",
]
