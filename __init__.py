"""
stackerrPy - errors that remember where they happened

Wraps exceptions together with the call stack captured at the failure site:
- Cheap capture of program counters at wrap time
- Lazy, cached resolution into file, line, function and package
- Message prefixes that accumulate while an error travels up
- Identity comparison through any number of wraps
"""

from ._version import __version__

from .helper.configuration import (
    MAX_STACK_DEPTH,
    StackConfiguration,
    configure,
    get_configuration,
    set_max_stack_depth,
)

from .helper.error import (
    Stackable,
    StackableError,
    is_stackable,
    new_stackable_error,
    same_error,
    wrap,
    wrap_prefix,
)

from .helper.logging import (
    StackFormatter,
    get_logger,
    log_error,
    setup_logging,
)

from .core.resolver import (
    FrameResolver,
    RuntimeSymbolTable,
    SymbolTable,
    package_and_name,
    relative_file_path,
)

from .model.stack_frame import (
    NULL_CALLER,
    ProgramCounter,
    StackFrame,
)

__all__ = [
    "__version__",
    # Configuration
    "MAX_STACK_DEPTH",
    "StackConfiguration",
    "configure",
    "get_configuration",
    "set_max_stack_depth",
    # Errors
    "Stackable",
    "StackableError",
    "is_stackable",
    "new_stackable_error",
    "same_error",
    "wrap",
    "wrap_prefix",
    # Logging
    "StackFormatter",
    "get_logger",
    "log_error",
    "setup_logging",
    # Frames
    "FrameResolver",
    "RuntimeSymbolTable",
    "SymbolTable",
    "package_and_name",
    "relative_file_path",
    "NULL_CALLER",
    "ProgramCounter",
    "StackFrame",
]
