"""
Model package for stackerrPy.

Contains the raw program counter and resolved stack frame types.
"""

from .stack_frame import NULL_CALLER, ProgramCounter, StackFrame

__all__ = [
    "NULL_CALLER",
    "ProgramCounter",
    "StackFrame",
]
