"""
Core components: stack capture and frame resolution.
"""

from .callers import callers
from .resolver import (
    CodeSymbol,
    FrameResolver,
    RuntimeSymbolTable,
    Symbol,
    SymbolTable,
    default_resolver,
    package_and_name,
    relative_file_path,
)

__all__ = [
    "callers",
    "CodeSymbol",
    "FrameResolver",
    "RuntimeSymbolTable",
    "Symbol",
    "SymbolTable",
    "default_resolver",
    "package_and_name",
    "relative_file_path",
]
